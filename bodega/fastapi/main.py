from fastapi import FastAPI

from bodega.fastapi.core.exceptions import register_exception_handlers
from bodega.fastapi.core.init_settings import global_settings
from bodega.fastapi.core.lifespan import lifespan
from bodega.fastapi.core.logging_config import setup_logging
from bodega.fastapi.core.middleware import setup_cors
from bodega.fastapi.core.routers import setup_routers

setup_logging()

app = FastAPI(
    title=global_settings.APP_NAME,
    version=global_settings.APP_VERSION,
    description="Control de entradas y salidas de la bodega",
    lifespan=lifespan,
)

setup_cors(app)
register_exception_handlers(app)
setup_routers(app)
