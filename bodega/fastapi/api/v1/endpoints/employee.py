"""
Employee roster endpoints.

This module provides FastAPI endpoints for registering, looking up,
listing and deleting warehouse employees.
"""

from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bodega.fastapi.core.attendance import DayState
from bodega.fastapi.core.exceptions import NotFoundError
from bodega.fastapi.crud.employee import (
    EMPLOYEE_NOT_FOUND,
    create_employee,
    delete_employee_by_cedula,
    get_employee_by_cedula,
    get_employees,
)
from bodega.fastapi.crud.time_record import TimeRecordCRUD
from bodega.fastapi.dependencies.database import get_sync_db
from bodega.fastapi.dependencies.settings import get_local_timezone
from bodega.fastapi.models.operator import Operator
from bodega.fastapi.schemas.employee import (
    EmployeeCreate,
    EmployeeDeleteResponse,
    EmployeeListResponse,
    EmployeeRead,
    EmployeeStatus,
)
from bodega.security.dependencies import RequireOperator

router = APIRouter(tags=["employees"])


@router.get("", response_model=EmployeeListResponse, summary="List Employees")
async def list_employees(
    db: Session = Depends(get_sync_db),
    current_operator: Operator = RequireOperator
):
    """Get the whole roster ordered by name."""
    employees = get_employees(db)
    return EmployeeListResponse(
        employees=[EmployeeRead.model_validate(e) for e in employees],
        total=len(employees)
    )


@router.post("", response_model=EmployeeRead, status_code=status.HTTP_201_CREATED,
             summary="Register Employee")
async def register_employee(
    employee_data: EmployeeCreate,
    db: Session = Depends(get_sync_db),
    current_operator: Operator = RequireOperator
):
    """
    Register a new employee.

    **Parameters:**
    - **cedula**: National ID (upper-cased, 3-20 letters, digits or hyphens)
    - **nombre**: Full name (upper-cased)
    - **area**: ADMINISTRACION, PUNTO_DE_VENTA or EXTERNO

    **Errors:**
    - **400**: Missing field, malformed cedula or unknown area
    - **409**: Cedula already registered
    """
    employee = create_employee(db, employee_data)
    return EmployeeRead.model_validate(employee)


@router.get("/{cedula}", response_model=EmployeeStatus, summary="Look Up Employee")
async def lookup_employee(
    cedula: str,
    db: Session = Depends(get_sync_db),
    tz: ZoneInfo = Depends(get_local_timezone),
    current_operator: Operator = RequireOperator
):
    """
    Find an employee by cedula (case-insensitive) with today's state.

    **Errors:**
    - **404**: No employee with that cedula
    """
    employee = get_employee_by_cedula(db, cedula)
    if employee is None:
        raise NotFoundError(EMPLOYEE_NOT_FOUND)

    state = TimeRecordCRUD(db).get_today_state(employee.id, tz)
    return EmployeeStatus(
        **EmployeeRead.model_validate(employee).model_dump(),
        estado_hoy=state,
        puede_registrar_entrada=state != DayState.OPEN,
        puede_generar_salida=state == DayState.OPEN,
    )


@router.delete("/{cedula}", response_model=EmployeeDeleteResponse, summary="Delete Employee")
async def delete_employee(
    cedula: str,
    db: Session = Depends(get_sync_db),
    current_operator: Operator = RequireOperator
):
    """
    Delete an employee and their time records.

    **Errors:**
    - **404**: No employee with that cedula
    """
    deleted_cedula = delete_employee_by_cedula(db, cedula)
    return EmployeeDeleteResponse(
        success=True,
        message="Empleado eliminado correctamente",
        cedula=deleted_cedula
    )
