import logging

from bodega.fastapi.core.init_settings import global_settings


def setup_logging() -> None:
    """Configure root logging once for the whole application."""
    logging.basicConfig(
        level=getattr(logging, global_settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
