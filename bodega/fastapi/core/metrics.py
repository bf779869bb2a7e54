"""
Movement aggregation for the metrics panel and exports.

Records are first flattened into ``RecordRow`` objects carrying the owning
employee's cedula, name and area, then counted per cedula.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Dict, Iterable, List, Optional, Sequence
from zoneinfo import ZoneInfo

from bodega.fastapi.core.attendance import as_utc, to_local
from bodega.fastapi.core.exceptions import ValidationError
from bodega.fastapi.models.time_record import RecordType

NOT_AVAILABLE = "N/A"

SORT_FIELDS = ("entradas", "salidas", "total")
SORT_ORDERS = ("asc", "desc")


@dataclass
class RecordRow:
    """A time record joined with its employee's identifying fields."""
    cedula: str
    nombre: str
    area: str
    tipo: RecordType
    hora_registro: datetime
    tarea: Optional[str] = None
    objetos_personales: List[str] = field(default_factory=list)


@dataclass
class EmployeeMetric:
    """Per-employee movement counts over a record set."""
    cedula: str
    nombre: str
    area: str
    entradas: int = 0
    salidas: int = 0
    ultimo_movimiento: Optional[datetime] = None

    @property
    def total_movimientos(self) -> int:
        return self.entradas + self.salidas


@dataclass
class MetricsSummary:
    total_empleados: int
    total_entradas: int
    total_salidas: int
    promedio_movimientos: float
    top_entradas: List[EmployeeMetric]
    top_salidas: List[EmployeeMetric]


def to_record_row(record) -> RecordRow:
    """Flatten a TimeRecord, defaulting missing employee data to "N/A"."""
    employee = record.employee
    area = getattr(employee, "area", None)
    return RecordRow(
        cedula=getattr(employee, "cedula", None) or NOT_AVAILABLE,
        nombre=getattr(employee, "nombre", None) or NOT_AVAILABLE,
        area=(area.value if hasattr(area, "value") else area) or NOT_AVAILABLE,
        tipo=record.tipo,
        hora_registro=record.hora_registro,
        tarea=record.tarea,
        objetos_personales=list(record.objetos_personales or []),
    )


def aggregate(rows: Iterable[RecordRow]) -> List[EmployeeMetric]:
    """
    Count ENTRADA and SALIDA movements per cedula.

    Counts do not depend on input order, and ``ultimo_movimiento`` is always
    the latest timestamp seen for the cedula. Metrics come out in order of
    first appearance; use ``sort_metrics`` for a specific ordering.
    """
    stats: Dict[str, EmployeeMetric] = {}

    for row in rows:
        cedula = row.cedula or NOT_AVAILABLE
        metric = stats.get(cedula)
        if metric is None:
            metric = stats[cedula] = EmployeeMetric(
                cedula=cedula,
                nombre=row.nombre or NOT_AVAILABLE,
                area=row.area or NOT_AVAILABLE,
            )

        if row.tipo == RecordType.ENTRADA:
            metric.entradas += 1
        else:
            metric.salidas += 1

        if metric.ultimo_movimiento is None or as_utc(row.hora_registro) >= as_utc(metric.ultimo_movimiento):
            metric.ultimo_movimiento = row.hora_registro

    return list(stats.values())


def filter_by_date_range(
    records: Iterable,
    start: Optional[date] = None,
    end: Optional[date] = None,
    tz: ZoneInfo = ZoneInfo("UTC"),
) -> List:
    """
    Keep the records between the start of ``start`` and the end of ``end``.

    Both bounds are inclusive local calendar days and either may be omitted;
    with neither bound a new list holding every record is returned.
    """
    if start is None and end is None:
        return list(records)

    lower = datetime.combine(start, time.min, tzinfo=tz) if start else None
    upper = datetime.combine(end, time.max, tzinfo=tz) if end else None

    kept = []
    for record in records:
        moment = to_local(record.hora_registro, tz)
        if lower is not None and moment < lower:
            continue
        if upper is not None and moment > upper:
            continue
        kept.append(record)
    return kept


def sort_metrics(
    metrics: Sequence[EmployeeMetric],
    sort_by: str = "total",
    order: str = "desc",
) -> List[EmployeeMetric]:
    """Stable sort by entradas, salidas or total movements."""
    if sort_by not in SORT_FIELDS:
        raise ValidationError(f"sort_by debe ser uno de: {', '.join(SORT_FIELDS)}")
    if order not in SORT_ORDERS:
        raise ValidationError(f"order debe ser uno de: {', '.join(SORT_ORDERS)}")

    if sort_by == "entradas":
        key = lambda m: m.entradas
    elif sort_by == "salidas":
        key = lambda m: m.salidas
    else:
        key = lambda m: m.total_movimientos

    return sorted(metrics, key=key, reverse=(order == "desc"))


def summarize(metrics: Sequence[EmployeeMetric], top: int = 5) -> MetricsSummary:
    """Totals, average movements per employee and the top rankings."""
    total_entradas = sum(m.entradas for m in metrics)
    total_salidas = sum(m.salidas for m in metrics)
    total_empleados = len(metrics)
    promedio = round((total_entradas + total_salidas) / total_empleados, 1) if total_empleados else 0.0

    return MetricsSummary(
        total_empleados=total_empleados,
        total_entradas=total_entradas,
        total_salidas=total_salidas,
        promedio_movimientos=promedio,
        top_entradas=sort_metrics(metrics, "entradas", "desc")[:top],
        top_salidas=sort_metrics(metrics, "salidas", "desc")[:top],
    )
