"""
Pydantic schemas for the metrics panel.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EmployeeMetricRead(BaseModel):
    """Per-employee movement counts."""

    cedula: str = Field(..., description="Employee cedula or N/A")
    nombre: str = Field(..., description="Employee name or N/A")
    area: str = Field(..., description="Employee area or N/A")
    entradas: int = Field(..., description="Number of ENTRADA records")
    salidas: int = Field(..., description="Number of SALIDA records")
    total_movimientos: int = Field(..., description="entradas + salidas")
    ultimo_movimiento: Optional[datetime] = Field(None, description="Latest movement timestamp (UTC)")

    model_config = ConfigDict(from_attributes=True)


class MetricsSummaryRead(BaseModel):
    total_empleados: int
    total_entradas: int
    total_salidas: int
    promedio_movimientos: float = Field(..., description="Average movements per employee, 1 decimal")
    top_entradas: List[EmployeeMetricRead] = Field(..., description="Top 5 by entradas")
    top_salidas: List[EmployeeMetricRead] = Field(..., description="Top 5 by salidas")

    model_config = ConfigDict(from_attributes=True)


class MetricsResponse(BaseModel):
    """Metrics panel payload."""

    start_date: Optional[date] = Field(None, description="Inclusive start day filter")
    end_date: Optional[date] = Field(None, description="Inclusive end day filter")
    sort_by: str = Field(..., description="entradas, salidas or total")
    order: str = Field(..., description="asc or desc")
    metrics: List[EmployeeMetricRead]
    summary: MetricsSummaryRead
