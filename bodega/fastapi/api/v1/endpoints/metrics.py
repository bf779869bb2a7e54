"""
Metrics endpoints (admin-only).

Movement counts per employee over an optional range of local calendar
days, as JSON or as an Excel workbook.
"""

import logging
from datetime import date
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from bodega.fastapi.core.attendance import local_today
from bodega.fastapi.core.config import Settings
from bodega.fastapi.core.exceptions import ValidationError
from bodega.fastapi.core.export import XLSX_MEDIA_TYPE, build_metrics_workbook, export_filename
from bodega.fastapi.core.metrics import (
    EmployeeMetric,
    RecordRow,
    aggregate,
    filter_by_date_range,
    sort_metrics,
    summarize,
    to_record_row,
)
from bodega.fastapi.crud.time_record import list_time_records
from bodega.fastapi.dependencies.database import get_sync_db
from bodega.fastapi.dependencies.settings import get_app_settings, get_local_timezone
from bodega.fastapi.models.operator import Operator
from bodega.fastapi.schemas.metrics import EmployeeMetricRead, MetricsResponse, MetricsSummaryRead
from bodega.security.dependencies import RequireAdmin

logger = logging.getLogger(__name__)

router = APIRouter(tags=["metrics"])


def _collect(
    db: Session,
    start_date: Optional[date],
    end_date: Optional[date],
    sort_by: str,
    order: str,
    tz: ZoneInfo,
) -> Tuple[List[RecordRow], List[EmployeeMetric]]:
    if start_date and end_date and start_date > end_date:
        raise ValidationError("La fecha inicial no puede ser posterior a la fecha final")

    records = filter_by_date_range(list_time_records(db, join_employee=True), start_date, end_date, tz)
    rows = [to_record_row(r) for r in records]
    return rows, sort_metrics(aggregate(rows), sort_by, order)


@router.get("", response_model=MetricsResponse, summary="Movement Metrics")
async def get_metrics(
    start_date: Optional[date] = Query(None, description="Inclusive start day (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Inclusive end day (YYYY-MM-DD)"),
    sort_by: str = Query("total", pattern="^(entradas|salidas|total)$"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_sync_db),
    tz: ZoneInfo = Depends(get_local_timezone),
    current_admin: Operator = RequireAdmin
):
    """
    Count ENTRADA and SALIDA movements per employee (admin-only).

    **Parameters:**
    - **start_date** / **end_date**: Optional inclusive range of local days
    - **sort_by**: entradas, salidas or total (default total)
    - **order**: asc or desc (default desc)

    **Returns:**
    - Sorted per-employee metrics plus totals, average and top 5 rankings

    **Errors:**
    - **400**: start_date after end_date
    - **403**: Caller is not an admin
    """
    _, metrics = _collect(db, start_date, end_date, sort_by, order, tz)
    summary = summarize(metrics)

    return MetricsResponse(
        start_date=start_date,
        end_date=end_date,
        sort_by=sort_by,
        order=order,
        metrics=[EmployeeMetricRead.model_validate(m) for m in metrics],
        summary=MetricsSummaryRead(
            total_empleados=summary.total_empleados,
            total_entradas=summary.total_entradas,
            total_salidas=summary.total_salidas,
            promedio_movimientos=summary.promedio_movimientos,
            top_entradas=[EmployeeMetricRead.model_validate(m) for m in summary.top_entradas],
            top_salidas=[EmployeeMetricRead.model_validate(m) for m in summary.top_salidas],
        )
    )


@router.get("/export", summary="Export Metrics to Excel")
async def export_metrics(
    start_date: Optional[date] = Query(None, description="Inclusive start day (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Inclusive end day (YYYY-MM-DD)"),
    sort_by: str = Query("total", pattern="^(entradas|salidas|total)$"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_sync_db),
    settings: Settings = Depends(get_app_settings),
    tz: ZoneInfo = Depends(get_local_timezone),
    current_admin: Operator = RequireAdmin
):
    """
    Download the metrics as an .xlsx workbook with detail, summary and
    totals sheets (admin-only). An empty range still yields a workbook.
    """
    rows, metrics = _collect(db, start_date, end_date, sort_by, order, tz)
    content = build_metrics_workbook(rows, metrics, summarize(metrics), tz)
    filename = export_filename(settings.METRICS_EXPORT_PREFIX, local_today(tz), start_date, end_date)
    logger.info("Exported metrics for %d employees to %s", len(metrics), filename)

    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
