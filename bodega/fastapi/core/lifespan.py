import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from bodega.fastapi.core.exceptions import DomainError
from bodega.fastapi.core.init_settings import global_settings
from bodega.fastapi.crud.operator import count_operators, create_operator
from bodega.fastapi.dependencies.database import SessionLocal, init_db
from bodega.fastapi.schemas.operator import OperatorCreate

logger = logging.getLogger(__name__)


def create_initial_admin() -> None:
    """Create the admin from INITIAL_ADMIN_* when no operator exists yet."""
    if not global_settings.INITIAL_ADMIN_PASSWORD:
        logger.info("INITIAL_ADMIN_PASSWORD not set; use /api/v1/auth/bootstrap to create the first admin")
        return

    db = SessionLocal()
    try:
        operator_count = count_operators(db)
        if operator_count > 0:
            logger.info("Found %d existing operator(s)", operator_count)
            return

        admin = create_operator(db, OperatorCreate(
            username=global_settings.INITIAL_ADMIN_USERNAME,
            password=global_settings.INITIAL_ADMIN_PASSWORD,
            is_admin=True,
            is_active=True,
        ))
        logger.warning("Created initial admin '%s'; change the password after first login", admin.username)
    except DomainError as e:
        logger.error("Error creating initial admin: %s", e.message)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables
    init_db()

    create_initial_admin()

    yield
