from fastapi import APIRouter, Depends

from bodega.fastapi.core.config import Settings
from bodega.fastapi.dependencies.settings import get_app_settings
from bodega.fastapi.models.operator import Operator
from bodega.security.dependencies import RequireOperator

router = APIRouter(tags=["general"])


@router.get("/catalogs", summary="Catalogs")
async def get_catalogs(
    settings: Settings = Depends(get_app_settings),
    current_operator: Operator = RequireOperator
):
    """Areas, personal items and tasks accepted by registration forms."""
    return {
        "areas": settings.AREAS,
        "objetos_personales": list(settings.PERSONAL_ITEMS),
        "tareas": list(settings.TASKS),
    }


@router.get("/health", summary="Health Check")
async def health(settings: Settings = Depends(get_app_settings)):
    return {"status": "ok", "app": settings.APP_NAME, "version": settings.APP_VERSION}
