"""
TimeRecord model for warehouse arrival and departure events.

Records are appended by the attendance engine, never modified, and only
removed all at once by the administrative "clear all" action.
"""

from enum import Enum
from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, Enum as SQLEnum, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from bodega.fastapi.core.utils import utc_now
from bodega.fastapi.dependencies.database import Base


class RecordType(str, Enum):
    """Enum for time record types."""
    ENTRADA = "ENTRADA"
    SALIDA = "SALIDA"


class TimeRecord(Base):
    """
    Time record model for clock-in/out events.

    Attributes:
        id: Unique identifier (UUID)
        employee_id: Foreign key to Employee
        tipo: ENTRADA or SALIDA
        hora_registro: When the event happened (UTC, server-assigned)
        objetos_personales: Item tags carried in or out
        tarea: Task the employee came to perform
        created_at: Record creation timestamp

    Relationships:
        employee: The employee this record belongs to
    """

    __tablename__ = "time_records"

    # Primary key
    id = Column(
        Uuid,
        primary_key=True,
        default=uuid4,
        index=True,
        doc="Unique time record identifier"
    )

    # Foreign key to Employee
    employee_id = Column(
        Uuid,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Reference to the employee"
    )

    tipo = Column(
        SQLEnum(RecordType),
        nullable=False,
        doc="Type of record (ENTRADA or SALIDA)"
    )

    hora_registro = Column(
        DateTime,
        nullable=False,
        default=utc_now,
        index=True,
        doc="When the movement occurred (UTC)"
    )

    objetos_personales = Column(
        JSON,
        nullable=False,
        default=list,
        doc="Personal item tags carried by the employee"
    )

    tarea = Column(
        String(100),
        nullable=True,
        doc="Task the employee performs during the visit"
    )

    created_at = Column(
        DateTime,
        default=utc_now,
        nullable=False,
        doc="Record creation timestamp"
    )

    # Relationship
    employee = relationship("Employee", back_populates="time_records")

    def __repr__(self) -> str:
        """String representation of TimeRecord."""
        return f"<TimeRecord(id={self.id}, employee_id={self.employee_id}, tipo={self.tipo}, hora={self.hora_registro})>"
