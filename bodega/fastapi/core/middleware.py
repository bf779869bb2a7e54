import logging

from fastapi.middleware.cors import CORSMiddleware

from bodega.fastapi.core.init_settings import global_settings

logger = logging.getLogger(__name__)


def setup_cors(app):
    # Define allowed origins from settings
    origins = [
        global_settings.CLIENT_URL,
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]

    # Add additional comma-separated origins
    if global_settings.ADDITIONAL_CORS_ORIGINS:
        origins.extend(origin.strip() for origin in global_settings.ADDITIONAL_CORS_ORIGINS.split(","))

    # Remove empty strings and duplicates
    origins = sorted({origin for origin in origins if origin})

    logger.info("CORS allowed origins: %s", origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
        expose_headers=["Content-Disposition"]
    )
