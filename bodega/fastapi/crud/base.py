"""
Shared error translation for the persistence layer.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bodega.fastapi.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


@contextmanager
def persistence_guard(db: Session, action: str) -> Iterator[None]:
    """
    Run a block of database work, rolling back and raising PersistenceError
    if the database fails.

    Usage:
        with persistence_guard(self.db, "insert time record"):
            self.db.add(record)
            self.db.commit()
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Database failure during %s", action)
        raise PersistenceError() from e
