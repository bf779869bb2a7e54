"""
Time record endpoints.

This module provides FastAPI endpoints for registering arrivals and
departures, browsing the record history, exporting it to Excel and
clearing it.
"""

import logging
from datetime import date
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from bodega.fastapi.core.attendance import (
    EMPLOYEE_NOT_FOUND,
    DayState,
    day_state,
    local_today,
    records_for_day,
)
from bodega.fastapi.core.config import Settings
from bodega.fastapi.core.exceptions import NotFoundError, ValidationError
from bodega.fastapi.core.export import XLSX_MEDIA_TYPE, build_records_workbook, export_filename
from bodega.fastapi.core.metrics import filter_by_date_range, to_record_row
from bodega.fastapi.crud.employee import get_employee_by_cedula, get_employees
from bodega.fastapi.crud.time_record import (
    TimeRecordCRUD,
    delete_all_time_records,
    delete_time_records,
    list_time_records,
)
from bodega.fastapi.dependencies.database import get_sync_db
from bodega.fastapi.dependencies.settings import get_app_settings, get_local_timezone
from bodega.fastapi.models.operator import Operator
from bodega.fastapi.models.time_record import RecordType, TimeRecord
from bodega.fastapi.schemas.time_record import (
    BoardEntry,
    BoardResponse,
    ClearRecordsResponse,
    EntradaCreate,
    MovementResponse,
    SalidaCreate,
    TimeRecordListResponse,
    TimeRecordRead,
    TimeRecordWithEmployee,
)
from bodega.security.dependencies import RequireAdmin, RequireOperator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["time-records"])

BOARD_RECORDS_PER_EMPLOYEE = 5
NO_RECORDS_TO_EXPORT = "No hay registros para exportar"


def _check_date_range(start_date: Optional[date], end_date: Optional[date]) -> None:
    if start_date and end_date and start_date > end_date:
        raise ValidationError("La fecha inicial no puede ser posterior a la fecha final")


def _with_employee(record: TimeRecord) -> TimeRecordWithEmployee:
    row = to_record_row(record)
    return TimeRecordWithEmployee(
        **TimeRecordRead.model_validate(record).model_dump(),
        cedula=row.cedula,
        nombre=row.nombre,
        area=row.area,
    )


def _register(
    db: Session,
    cedula: str,
    tipo: RecordType,
    objetos_personales,
    tarea,
    settings: Settings,
    tz: ZoneInfo,
) -> MovementResponse:
    employee = get_employee_by_cedula(db, cedula)
    if employee is None:
        raise NotFoundError(EMPLOYEE_NOT_FOUND)

    crud = TimeRecordCRUD(db)
    record = crud.register_movement(
        employee.id,
        tipo,
        objetos_personales,
        tarea,
        personal_items=settings.PERSONAL_ITEMS,
        tasks=settings.TASKS,
        tz=tz,
    )

    label = "Entrada" if tipo == RecordType.ENTRADA else "Salida"
    return MovementResponse(
        success=True,
        message=f"{label} registrada para {employee.nombre}",
        time_record=TimeRecordRead.model_validate(record),
        current_status=crud.get_today_state(employee.id, tz),
    )


@router.post("/entrada", response_model=MovementResponse, status_code=status.HTTP_201_CREATED,
             summary="Register Arrival")
async def register_entrada(
    entrada: EntradaCreate,
    db: Session = Depends(get_sync_db),
    settings: Settings = Depends(get_app_settings),
    tz: ZoneInfo = Depends(get_local_timezone),
    current_operator: Operator = RequireOperator
):
    """
    Register an ENTRADA for an employee.

    **Parameters:**
    - **cedula**: Employee cedula (case-insensitive)
    - **objetos_personales**: At least one item from the personal items catalog
    - **tarea**: One task from the task catalog

    **Returns:**
    - Created record and the employee's state for today (OPEN)

    **Errors:**
    - **400**: No items, no task or a value outside the catalogs
    - **404**: Employee not registered
    - **409**: The employee already has an open ENTRADA today
    """
    return _register(db, entrada.cedula, RecordType.ENTRADA,
                     entrada.objetos_personales, entrada.tarea, settings, tz)


@router.post("/salida", response_model=MovementResponse, status_code=status.HTTP_201_CREATED,
             summary="Register Departure")
async def register_salida(
    salida: SalidaCreate,
    db: Session = Depends(get_sync_db),
    settings: Settings = Depends(get_app_settings),
    tz: ZoneInfo = Depends(get_local_timezone),
    current_operator: Operator = RequireOperator
):
    """
    Register a SALIDA closing the employee's open ENTRADA.

    The departure copies items and task from today's open arrival.

    **Errors:**
    - **404**: Employee not registered
    - **409**: No open ENTRADA today
    """
    return _register(db, salida.cedula, RecordType.SALIDA, None, None, settings, tz)


@router.get("/records", response_model=TimeRecordListResponse, summary="List Time Records")
async def get_time_records(
    start_date: Optional[date] = Query(None, description="Inclusive start day (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Inclusive end day (YYYY-MM-DD)"),
    db: Session = Depends(get_sync_db),
    tz: ZoneInfo = Depends(get_local_timezone),
    current_operator: Operator = RequireOperator
):
    """
    Get time records, most recent first, optionally limited to a range of
    local calendar days.

    **Errors:**
    - **400**: start_date after end_date
    """
    _check_date_range(start_date, end_date)

    records = filter_by_date_range(list_time_records(db, join_employee=True), start_date, end_date, tz)

    date_range = None
    if start_date or end_date:
        date_range = f"{start_date or 'inicio'} a {end_date or 'hoy'}"

    return TimeRecordListResponse(
        records=[_with_employee(r) for r in records],
        total=len(records),
        date_range=date_range
    )


@router.get("/board", response_model=BoardResponse, summary="Records Board")
async def get_board(
    scope: str = Query("today", pattern="^(today|all)$", description="'today' or 'all'"),
    db: Session = Depends(get_sync_db),
    tz: ZoneInfo = Depends(get_local_timezone),
    current_operator: Operator = RequireOperator
):
    """
    Employees with records to show and their latest movements.

    With ``scope=today`` only today's records are displayed; employees with
    nothing to display are left out. ``puede_generar_salida`` always reflects
    today's state.
    """
    today = local_today(tz)
    entries = []

    for employee in get_employees(db, with_records=True):
        today_records = records_for_day(employee.time_records, today, tz)
        shown = today_records if scope == "today" else list(employee.time_records)
        if not shown:
            continue

        entries.append(BoardEntry(
            employee_id=employee.id,
            cedula=employee.cedula,
            nombre=employee.nombre,
            area=employee.area.value,
            records=[TimeRecordRead.model_validate(r) for r in shown[:BOARD_RECORDS_PER_EMPLOYEE]],
            puede_generar_salida=day_state(today_records) == DayState.OPEN,
        ))

    return BoardResponse(scope=scope, employees=entries)


@router.get("/export", summary="Export Time Records to Excel")
async def export_time_records(
    clear: bool = Query(False, description="Delete every record after exporting (admin only)"),
    db: Session = Depends(get_sync_db),
    settings: Settings = Depends(get_app_settings),
    tz: ZoneInfo = Depends(get_local_timezone),
    current_operator: Operator = RequireOperator
):
    """
    Download every time record as an .xlsx workbook.

    **Parameters:**
    - **clear**: When true, the records are deleted once the workbook is built

    **Errors:**
    - **403**: clear=true requested by a non-admin
    - **404**: There are no records
    """
    if clear and not current_operator.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions. Admin access required."
        )

    records = list_time_records(db, join_employee=True)
    if not records:
        raise NotFoundError(NO_RECORDS_TO_EXPORT)

    content = build_records_workbook([to_record_row(r) for r in records], tz)
    filename = export_filename(settings.RECORDS_EXPORT_PREFIX, local_today(tz))
    logger.info("Exported %d time records to %s", len(records), filename)

    if clear:
        # Only what went into the workbook; newer records stay
        delete_time_records(db, [r.id for r in records])

    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.delete("/records", response_model=ClearRecordsResponse, summary="Clear All Time Records")
async def clear_time_records(
    confirm: bool = Query(False, description="Must be true to delete"),
    db: Session = Depends(get_sync_db),
    current_admin: Operator = RequireAdmin
):
    """
    Delete every time record (admin-only). Irreversible.

    **Errors:**
    - **400**: confirm is not true
    - **403**: Caller is not an admin
    """
    if not confirm:
        raise ValidationError("Confirme el borrado de todos los registros con confirm=true")

    deleted = delete_all_time_records(db)
    logger.warning("Time records cleared by '%s'", current_admin.username)
    return ClearRecordsResponse(
        success=True,
        deleted=deleted,
        message=f"Se eliminaron {deleted} registros"
    )
