"""
Operator model for the authentication system.

Operators are the accounts that log in to the kiosk. Accounts flagged as
admin can also open the metrics panel and clear the record history.
"""

import uuid

from sqlalchemy import Boolean, Column, DateTime, String, Uuid

from bodega.fastapi.core.utils import utc_now
from bodega.fastapi.dependencies.database import Base


class Operator(Base):
    """
    Operator account model.

    Passwords are stored as hashes produced by ``bodega.security.password``.
    """

    __tablename__ = "operators"

    # Primary key
    id = Column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the operator"
    )

    # Authentication fields
    username = Column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
        comment="Unique username for login"
    )

    password_hash = Column(
        String(255),
        nullable=False,
        comment="Hashed password"
    )

    is_admin = Column(
        Boolean,
        default=False,
        nullable=False,
        comment="Whether the account can access metrics and clear records"
    )

    # Status field
    is_active = Column(
        Boolean,
        default=True,
        nullable=False,
        comment="Whether the account is active"
    )

    # Timestamps
    created_at = Column(
        DateTime,
        default=utc_now,
        nullable=False,
        comment="When the account was created"
    )

    updated_at = Column(
        DateTime,
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
        comment="When the account was last updated"
    )

    @property
    def role(self) -> str:
        return "admin" if self.is_admin else "operator"

    def __repr__(self) -> str:
        """String representation of the Operator model."""
        return f"<Operator(id={self.id}, username='{self.username}', role={self.role}, is_active={self.is_active})>"
