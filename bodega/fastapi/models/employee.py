"""
Employee model for the warehouse roster.

This module defines the SQLAlchemy model for staff members who clock in
and out at the warehouse.
"""

from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, DateTime, Enum as SQLEnum, String, Uuid
from sqlalchemy.orm import relationship

from bodega.fastapi.core.utils import utc_now
from bodega.fastapi.dependencies.database import Base


class Area(str, Enum):
    """Enum for the work areas an employee can belong to."""
    ADMINISTRACION = "ADMINISTRACION"
    PUNTO_DE_VENTA = "PUNTO_DE_VENTA"
    EXTERNO = "EXTERNO"


class Employee(Base):
    """
    Employee model for warehouse staff.

    Employees are created by registration and deleted by an explicit
    operator action; they are never updated in place.

    Attributes:
        id: Unique identifier (UUID)
        cedula: National ID, unique, stored upper-cased
        nombre: Full name, stored upper-cased
        area: Work area
        created_at: Record creation timestamp

    Relationships:
        time_records: Clock-in/out events of this employee
    """

    __tablename__ = "employees"

    # Primary key
    id = Column(
        Uuid,
        primary_key=True,
        default=uuid4,
        index=True,
        doc="Unique employee identifier"
    )

    cedula = Column(
        String(20),
        unique=True,
        nullable=False,
        index=True,
        doc="National ID number (natural key, upper-cased)"
    )

    nombre = Column(
        String(120),
        nullable=False,
        index=True,
        doc="Full name (upper-cased)"
    )

    area = Column(
        SQLEnum(Area),
        nullable=False,
        doc="Work area"
    )

    created_at = Column(
        DateTime,
        default=utc_now,
        nullable=False,
        doc="Record creation timestamp"
    )

    # Relationship
    time_records = relationship(
        "TimeRecord",
        back_populates="employee",
        cascade="all, delete-orphan",
        order_by="TimeRecord.hora_registro.desc()",
    )

    def __repr__(self) -> str:
        """String representation of Employee."""
        return f"<Employee(id={self.id}, cedula='{self.cedula}', nombre='{self.nombre}', area={self.area})>"
