"""
Pydantic schemas for TimeRecord validation and serialization.

This module defines the request and response schemas for arrival and
departure registration and for listing the record history.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from bodega.fastapi.core.attendance import DayState
from bodega.fastapi.models.time_record import RecordType


class EntradaCreate(BaseModel):
    """Schema for registering an arrival."""

    cedula: str = Field(
        ...,
        description="Cedula of the arriving employee (case-insensitive)",
        examples=["12345"]
    )

    objetos_personales: List[str] = Field(
        default_factory=list,
        description="Personal items carried in (at least one)",
        examples=[["CELULAR-CORPORATIVO"], ["NO-INGRESA-NADA"]]
    )

    tarea: Optional[str] = Field(
        None,
        max_length=100,
        description="Task to perform during the visit",
        examples=["INVENTARIO", "CAJEROS"]
    )


class SalidaCreate(BaseModel):
    """
    Schema for registering a departure.

    Items and task are not part of the request: the departure inherits
    them from the open arrival it closes.
    """

    cedula: str = Field(
        ...,
        description="Cedula of the leaving employee (case-insensitive)",
        examples=["12345"]
    )


class TimeRecordRead(BaseModel):
    """Schema for reading a time record."""

    id: UUID = Field(..., description="Time record unique identifier")
    employee_id: UUID = Field(..., description="Employee who made this movement")
    tipo: RecordType = Field(..., description="ENTRADA or SALIDA")
    hora_registro: datetime = Field(..., description="When the movement happened (UTC)")
    objetos_personales: List[str] = Field(default_factory=list, description="Personal item tags")
    tarea: Optional[str] = Field(None, description="Task label")

    model_config = ConfigDict(from_attributes=True)


class TimeRecordWithEmployee(TimeRecordRead):
    """Time record joined with the owning employee's identifying fields."""

    cedula: str = Field(..., description="Employee cedula or N/A")
    nombre: str = Field(..., description="Employee name or N/A")
    area: str = Field(..., description="Employee area or N/A")


class MovementResponse(BaseModel):
    """Response schema for ENTRADA/SALIDA registration."""

    success: bool = Field(..., description="Whether operation was successful")
    message: str = Field(..., description="Operation result message")
    time_record: TimeRecordRead = Field(..., description="Created time record")
    current_status: DayState = Field(..., description="Employee's state for today after the movement")


class TimeRecordListResponse(BaseModel):
    """Schema for listing time records."""

    records: List[TimeRecordWithEmployee] = Field(..., description="Records, most recent first")
    total: int = Field(..., description="Number of records")
    date_range: Optional[str] = Field(None, description="Date range filter applied")


class BoardEntry(BaseModel):
    """One row of the records board: an employee and their latest movements."""

    employee_id: UUID
    cedula: str
    nombre: str
    area: str
    records: List[TimeRecordRead] = Field(..., description="Up to five most recent displayable records")
    puede_generar_salida: bool = Field(..., description="Whether today's state is OPEN")


class BoardResponse(BaseModel):
    scope: str = Field(..., description="'today' or 'all'")
    employees: List[BoardEntry]


class ClearRecordsResponse(BaseModel):
    success: bool
    deleted: int = Field(..., description="Number of deleted records")
    message: str
