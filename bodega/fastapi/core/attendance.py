"""
Attendance engine: the ENTRADA/SALIDA alternation rule.

Every employee goes through a small state machine that starts over each
local calendar day::

    NO_RECORD --ENTRADA--> OPEN --SALIDA--> CLOSED --ENTRADA--> OPEN

A SALIDA from NO_RECORD and a second ENTRADA while OPEN are rejected.

Functions here are pure. Callers pass the relevant day's records and the
time zone that defines the day boundary; nothing is cached between calls.
Stored timestamps are naive UTC datetimes.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from bodega.fastapi.core.exceptions import ConflictError, NotFoundError, ValidationError
from bodega.fastapi.models.time_record import RecordType

EMPLOYEE_NOT_FOUND = "Empleado no encontrado. Por favor, registre al empleado primero."
MISSING_ITEMS = "Seleccione al menos un objeto personal"
MISSING_TASK = "Seleccione una tarea a realizar"
OPEN_ENTRY_EXISTS = "Ya existe un registro de entrada sin salida para este empleado."
NO_OPEN_ENTRY = "No hay un registro de entrada previo para este empleado."


class DayState(str, Enum):
    """Derived per-day attendance state of one employee."""
    NO_RECORD = "NO_RECORD"
    OPEN = "OPEN"
    CLOSED = "CLOSED"


def get_timezone(name: str) -> ZoneInfo:
    """Resolve an IANA time zone name, rejecting unknown ones."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Zona horaria desconocida: {name}")


def to_local(moment: datetime, tz: ZoneInfo) -> datetime:
    """Convert a stored timestamp to the local zone (naive means UTC)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(tz)


def local_date(moment: datetime, tz: ZoneInfo) -> date:
    """Calendar date of a timestamp in the local zone."""
    return to_local(moment, tz).date()


def local_today(tz: ZoneInfo, now: Optional[datetime] = None) -> date:
    """Today's local date, ``now`` defaulting to the current UTC time."""
    return local_date(now or datetime.now(timezone.utc), tz)


def records_for_day(records: Iterable, day: date, tz: ZoneInfo) -> List:
    """Return the records whose local date is ``day``, most recent first."""
    same_day = [r for r in records if local_date(r.hora_registro, tz) == day]
    same_day.sort(key=lambda r: as_utc(r.hora_registro), reverse=True)
    return same_day


def day_state(today_records: Sequence) -> DayState:
    """
    Derive the state of the day from its records.

    Args:
        today_records: The day's records ordered most-recent-first

    Returns:
        NO_RECORD when the day is empty, otherwise OPEN or CLOSED depending
        on the type of the most recent record
    """
    if not today_records:
        return DayState.NO_RECORD
    if today_records[0].tipo == RecordType.ENTRADA:
        return DayState.OPEN
    return DayState.CLOSED


def can_register_entrada(employee, today_records: Sequence) -> bool:
    """An ENTRADA is legal unless the employee has an open entry today."""
    if employee is None:
        return False
    return day_state(today_records) != DayState.OPEN


def can_register_salida(employee, today_records: Sequence) -> bool:
    """A SALIDA is legal only while today's most recent record is an ENTRADA."""
    if employee is None:
        return False
    return day_state(today_records) == DayState.OPEN


def validate_entrada(
    objetos_personales: Optional[Iterable[str]],
    tarea: Optional[str],
    personal_items: Sequence[str],
    tasks: Sequence[str],
) -> Tuple[List[str], str]:
    """
    Check ENTRADA inputs against the catalogs.

    Items are stripped, upper-cased and de-duplicated keeping their order.

    Returns:
        Tuple of (items, task) ready to store

    Raises:
        ValidationError: If items or task are missing or outside the catalogs
    """
    items: List[str] = []
    for item in objetos_personales or []:
        tag = (item or "").strip().upper()
        if tag and tag not in items:
            items.append(tag)
    if not items:
        raise ValidationError(MISSING_ITEMS)

    unknown = [tag for tag in items if tag not in personal_items]
    if unknown:
        raise ValidationError(f"Objeto personal no reconocido: {', '.join(unknown)}")

    task = (tarea or "").strip()
    if not task:
        raise ValidationError(MISSING_TASK)
    if task not in tasks:
        raise ValidationError(f"Tarea no reconocida: {task}")

    return items, task


def plan_movement(
    employee,
    tipo: RecordType,
    today_records: Sequence,
    objetos_personales: Optional[Iterable[str]],
    tarea: Optional[str],
    personal_items: Sequence[str],
    tasks: Sequence[str],
) -> Tuple[List[str], Optional[str]]:
    """
    Decide whether a movement is legal and what it should carry.

    A SALIDA ignores the supplied items and task and inherits those of the
    open ENTRADA it closes.

    Returns:
        Tuple of (objetos_personales, tarea) for the new record

    Raises:
        NotFoundError: If the employee does not exist
        ValidationError: If an ENTRADA lacks items or task
        ConflictError: If the transition is illegal in the current day state
    """
    if employee is None:
        raise NotFoundError(EMPLOYEE_NOT_FOUND)

    if tipo == RecordType.ENTRADA:
        items, task = validate_entrada(objetos_personales, tarea, personal_items, tasks)
        if not can_register_entrada(employee, today_records):
            raise ConflictError(OPEN_ENTRY_EXISTS)
        return items, task

    if not can_register_salida(employee, today_records):
        raise ConflictError(NO_OPEN_ENTRY)
    open_entry = today_records[0]
    return list(open_entry.objetos_personales or []), open_entry.tarea


def as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment
