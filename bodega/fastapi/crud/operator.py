"""
Operator CRUD operations.

This module provides database operations for the accounts that log in to
the kiosk and the metrics panel.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from bodega.fastapi.core.exceptions import ConflictError
from bodega.fastapi.crud.base import persistence_guard
from bodega.fastapi.models.operator import Operator
from bodega.fastapi.schemas.operator import OperatorCreate
from bodega.security.password import hash_password, verify_password

logger = logging.getLogger(__name__)


class OperatorCRUD:
    """CRUD operations for Operator model."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def create_operator(self, operator_data: OperatorCreate) -> Operator:
        """
        Create a new operator account.

        Args:
            operator_data: Account data with username, password and flags

        Returns:
            Created Operator instance

        Raises:
            ConflictError: If username already exists
        """
        if self.get_operator_by_username(operator_data.username):
            raise ConflictError("Username already registered")

        db_operator = Operator(
            username=operator_data.username,
            password_hash=hash_password(operator_data.password),
            is_admin=operator_data.is_admin,
            is_active=operator_data.is_active
        )

        with persistence_guard(self.db, "create operator"):
            self.db.add(db_operator)
            self.db.commit()
            self.db.refresh(db_operator)

        logger.info("Created operator account '%s' (role=%s)", db_operator.username, db_operator.role)
        return db_operator

    def get_operator(self, operator_id: UUID) -> Optional[Operator]:
        with persistence_guard(self.db, "get operator"):
            return self.db.query(Operator).filter(Operator.id == operator_id).first()

    def get_operator_by_username(self, username: str) -> Optional[Operator]:
        with persistence_guard(self.db, "get operator by username"):
            return self.db.query(Operator).filter(Operator.username == username).first()

    def count_operators(self) -> int:
        with persistence_guard(self.db, "count operators"):
            return self.db.query(Operator).count()

    def authenticate(self, username: str, password: str) -> Optional[Operator]:
        """
        Check credentials.

        Returns:
            The matching Operator, or None when the username is unknown or
            the password does not match
        """
        operator = self.get_operator_by_username(username)
        if operator is None or not verify_password(password, operator.password_hash):
            return None
        return operator


# Convenience functions
def create_operator(db: Session, operator_data: OperatorCreate) -> Operator:
    """Create a new operator account."""
    return OperatorCRUD(db).create_operator(operator_data)


def get_operator(db: Session, operator_id: UUID) -> Optional[Operator]:
    """Get operator by ID."""
    return OperatorCRUD(db).get_operator(operator_id)


def count_operators(db: Session) -> int:
    """Number of operator accounts, active or not."""
    return OperatorCRUD(db).count_operators()


def authenticate_operator(db: Session, username: str, password: str) -> Optional[Operator]:
    """Return the operator for valid credentials, None otherwise."""
    return OperatorCRUD(db).authenticate(username, password)
