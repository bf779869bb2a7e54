"""
TimeRecord CRUD operations.

This module provides database operations for arrival and departure
records, including ``register_movement``, which applies the attendance
engine's rules before inserting.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional, Sequence
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy import delete
from sqlalchemy.orm import Session, joinedload

from bodega.fastapi.core.attendance import (
    DayState,
    as_utc,
    day_state,
    local_today,
    plan_movement,
    records_for_day,
)
from bodega.fastapi.crud.base import persistence_guard
from bodega.fastapi.models.employee import Employee
from bodega.fastapi.models.time_record import RecordType, TimeRecord

logger = logging.getLogger(__name__)


def _utc_naive(moment: datetime) -> datetime:
    return as_utc(moment).replace(tzinfo=None)


def day_bounds_utc(day: date, tz: ZoneInfo) -> tuple:
    """UTC (naive) instants where the local ``day`` starts and the next one starts."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return _utc_naive(start), _utc_naive(end)


class TimeRecordCRUD:
    """CRUD operations for TimeRecord model."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def insert_time_record(
        self,
        employee_id: UUID,
        tipo: RecordType,
        objetos_personales: Sequence[str],
        tarea: Optional[str],
        hora_registro: Optional[datetime] = None,
    ) -> TimeRecord:
        """
        Append a time record.

        Args:
            employee_id: Employee UUID
            tipo: ENTRADA or SALIDA
            objetos_personales: Item tags
            tarea: Task label
            hora_registro: Movement time; the server clock when omitted

        Raises:
            PersistenceError: If the database fails
        """
        db_record = TimeRecord(
            employee_id=employee_id,
            tipo=tipo,
            objetos_personales=list(objetos_personales),
            tarea=tarea,
        )
        if hora_registro is not None:
            db_record.hora_registro = _utc_naive(hora_registro)

        with persistence_guard(self.db, "insert time record"):
            self.db.add(db_record)
            self.db.commit()
            self.db.refresh(db_record)

        return db_record

    def list_time_records(self, join_employee: bool = False) -> List[TimeRecord]:
        """
        Get every time record, most recent first.

        Args:
            join_employee: Eager-load each record's employee
        """
        query = self.db.query(TimeRecord)
        if join_employee:
            query = query.options(joinedload(TimeRecord.employee))
        with persistence_guard(self.db, "list time records"):
            return query.order_by(TimeRecord.hora_registro.desc()).all()

    def get_day_records(self, employee_id: UUID, day: date, tz: ZoneInfo) -> List[TimeRecord]:
        """
        Get one employee's records for a local calendar day, most recent first.

        The query narrows by the day's UTC window; ``records_for_day`` then
        applies the same day boundary the engine uses.
        """
        start, end = day_bounds_utc(day, tz)
        with persistence_guard(self.db, "get day records"):
            candidates = (self.db.query(TimeRecord)
                          .filter(TimeRecord.employee_id == employee_id,
                                  TimeRecord.hora_registro >= start,
                                  TimeRecord.hora_registro < end)
                          .all())
        return records_for_day(candidates, day, tz)

    def get_today_state(self, employee_id: UUID, tz: ZoneInfo, now: Optional[datetime] = None) -> DayState:
        today = local_today(tz, now)
        return day_state(self.get_day_records(employee_id, today, tz))

    def register_movement(
        self,
        employee_id: UUID,
        tipo: RecordType,
        objetos_personales: Optional[Sequence[str]],
        tarea: Optional[str],
        *,
        personal_items: Sequence[str],
        tasks: Sequence[str],
        tz: ZoneInfo,
        now: Optional[datetime] = None,
    ) -> TimeRecord:
        """
        Register an ENTRADA or SALIDA for an employee.

        Args:
            employee_id: Employee UUID
            tipo: Movement type
            objetos_personales: Items carried in (ENTRADA only)
            tarea: Task label (ENTRADA only)
            personal_items: Item catalog
            tasks: Task catalog
            tz: Time zone defining the local day
            now: Evaluation time and timestamp of the new record; the server
                clock when omitted

        Returns:
            Created TimeRecord

        Raises:
            NotFoundError: Unknown employee
            ValidationError: ENTRADA without items or task
            ConflictError: Second ENTRADA while open, or SALIDA without an
                open ENTRADA today
            PersistenceError: If the database fails
        """
        moment = as_utc(now) if now is not None else datetime.now(timezone.utc)

        with persistence_guard(self.db, "get employee"):
            employee = self.db.query(Employee).filter(Employee.id == employee_id).first()
        today_records = []
        if employee is not None:
            today_records = self.get_day_records(employee_id, local_today(tz, moment), tz)

        items, task = plan_movement(
            employee,
            tipo,
            today_records,
            objetos_personales,
            tarea,
            personal_items,
            tasks,
        )

        db_record = self.insert_time_record(employee_id, tipo, items, task, hora_registro=moment)
        logger.info("Registered %s for employee %s at %s", tipo.value, employee.cedula, db_record.hora_registro)
        return db_record

    def delete_all_time_records(self) -> int:
        """
        Delete every time record in one transaction. Irreversible.

        Returns:
            Number of deleted records
        """
        with persistence_guard(self.db, "delete all time records"):
            result = self.db.execute(delete(TimeRecord))
            self.db.commit()

        deleted = result.rowcount or 0
        logger.warning("Cleared all time records (%d deleted)", deleted)
        return deleted

    def delete_time_records(self, record_ids: Sequence[UUID]) -> int:
        """
        Delete the given time records in one transaction.

        Records created after ``record_ids`` was collected are kept.

        Returns:
            Number of deleted records
        """
        if not record_ids:
            return 0

        with persistence_guard(self.db, "delete time records"):
            result = self.db.execute(
                delete(TimeRecord)
                .where(TimeRecord.id.in_(list(record_ids)))
                .execution_options(synchronize_session=False)
            )
            self.db.commit()

        deleted = result.rowcount or 0
        logger.warning("Deleted %d exported time records", deleted)
        return deleted


# Convenience functions
def list_time_records(db: Session, join_employee: bool = False) -> List[TimeRecord]:
    """Get every time record, most recent first."""
    return TimeRecordCRUD(db).list_time_records(join_employee)


def delete_all_time_records(db: Session) -> int:
    """Delete every time record."""
    return TimeRecordCRUD(db).delete_all_time_records()


def delete_time_records(db: Session, record_ids: Sequence[UUID]) -> int:
    """Delete the given time records."""
    return TimeRecordCRUD(db).delete_time_records(record_ids)
