"""
Settings-backed dependencies.

Endpoints read configuration through these so tests can override them
with ``app.dependency_overrides``.
"""

from zoneinfo import ZoneInfo

from fastapi import Depends

from bodega.fastapi.core.attendance import get_timezone
from bodega.fastapi.core.config import Settings
from bodega.fastapi.core.init_settings import global_settings


def get_app_settings() -> Settings:
    return global_settings


def get_local_timezone(settings: Settings = Depends(get_app_settings)) -> ZoneInfo:
    """Time zone that defines the local calendar day."""
    return get_timezone(settings.TIMEZONE)
