"""
Pydantic schemas for Employee validation and serialization.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from bodega.fastapi.core.attendance import DayState
from bodega.fastapi.models.employee import Area


class EmployeeCreate(BaseModel):
    """
    Schema for registering a new employee.

    Fields are accepted as plain strings so that blank values reach the
    roster rules and produce the kiosk's own error messages.
    """

    cedula: str = Field(
        "",
        description="National ID number (stored upper-cased)",
        examples=["12345", "CC-998877"]
    )

    nombre: str = Field(
        "",
        max_length=120,
        description="Full name (stored upper-cased)",
        examples=["ANA PÉREZ"]
    )

    area: str = Field(
        "",
        description="Work area",
        examples=["ADMINISTRACION", "PUNTO_DE_VENTA", "EXTERNO"]
    )


class EmployeeRead(BaseModel):
    """Schema for reading employee information."""

    id: UUID = Field(..., description="Employee unique identifier")
    cedula: str = Field(..., description="National ID number")
    nombre: str = Field(..., description="Full name")
    area: Area = Field(..., description="Work area")
    created_at: datetime = Field(..., description="Registration timestamp")

    model_config = ConfigDict(from_attributes=True)


class EmployeeStatus(EmployeeRead):
    """Employee lookup result with today's attendance state."""

    estado_hoy: DayState = Field(..., description="Attendance state for the current local day")
    puede_registrar_entrada: bool = Field(..., description="Whether an ENTRADA is allowed now")
    puede_generar_salida: bool = Field(..., description="Whether a SALIDA is allowed now")


class EmployeeListResponse(BaseModel):
    """Schema for listing the roster."""

    employees: List[EmployeeRead] = Field(..., description="Employees ordered by name")
    total: int = Field(..., description="Number of employees")


class EmployeeDeleteResponse(BaseModel):
    success: bool = Field(..., description="Whether the employee was deleted")
    message: str = Field(..., description="Operation result message")
    cedula: Optional[str] = Field(None, description="Deleted employee's cedula")
