"""
Excel workbook generation for record and metrics exports.

Workbooks are written with pandas through the openpyxl engine and then
styled with openpyxl directly: bold header row, frozen header and fixed
column widths.
"""

import io
from datetime import date
from typing import Dict, List, Optional, Sequence
from zoneinfo import ZoneInfo

import pandas as pd
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.worksheet.worksheet import Worksheet

from bodega.fastapi.core.attendance import to_local
from bodega.fastapi.core.metrics import EmployeeMetric, MetricsSummary, RecordRow

DETAIL_SHEET = "Registros"
SUMMARY_SHEET = "Resumen"
TOTALS_SHEET = "Totales"

DETAIL_COLUMNS = {
    "CÉDULA": 15,
    "NOMBRE": 30,
    "ÁREA": 20,
    "TIPO": 12,
    "FECHA": 15,
    "HORA": 12,
    "TAREA": 25,
    "OBJETOS PERSONALES": 35,
}

SUMMARY_COLUMNS = {
    "CÉDULA": 15,
    "NOMBRE": 30,
    "ÁREA": 20,
    "ENTRADAS": 12,
    "SALIDAS": 12,
    "TOTAL MOVIMIENTOS": 20,
    "ÚLTIMO MOVIMIENTO": 22,
}

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")


def detail_frame(rows: Sequence[RecordRow], tz: ZoneInfo) -> pd.DataFrame:
    """One line per record, most recent first, with local date and time."""
    ordered = sorted(rows, key=lambda r: to_local(r.hora_registro, tz), reverse=True)
    data = []
    for row in ordered:
        local = to_local(row.hora_registro, tz)
        data.append({
            "CÉDULA": row.cedula,
            "NOMBRE": row.nombre,
            "ÁREA": row.area,
            "TIPO": getattr(row.tipo, "value", row.tipo),
            "FECHA": local.strftime("%d/%m/%Y"),
            "HORA": local.strftime("%H:%M:%S"),
            "TAREA": row.tarea or "",
            "OBJETOS PERSONALES": ", ".join(row.objetos_personales or []),
        })
    return pd.DataFrame(data, columns=list(DETAIL_COLUMNS))


def summary_frame(metrics: Sequence[EmployeeMetric], tz: ZoneInfo) -> pd.DataFrame:
    data = []
    for metric in metrics:
        last = metric.ultimo_movimiento
        data.append({
            "CÉDULA": metric.cedula,
            "NOMBRE": metric.nombre,
            "ÁREA": metric.area,
            "ENTRADAS": metric.entradas,
            "SALIDAS": metric.salidas,
            "TOTAL MOVIMIENTOS": metric.total_movimientos,
            "ÚLTIMO MOVIMIENTO": to_local(last, tz).strftime("%d/%m/%Y %H:%M:%S") if last else "",
        })
    return pd.DataFrame(data, columns=list(SUMMARY_COLUMNS))


def totals_frame(summary: MetricsSummary) -> pd.DataFrame:
    return pd.DataFrame(
        [
            ["Total empleados", summary.total_empleados],
            ["Total entradas", summary.total_entradas],
            ["Total salidas", summary.total_salidas],
            ["Promedio movimientos por empleado", summary.promedio_movimientos],
        ],
        columns=["INDICADOR", "VALOR"],
    )


def style_sheet(ws: Worksheet, widths: Dict[str, int]) -> None:
    """Apply header styling and column widths to a written sheet."""
    for cell in ws[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for index, width in enumerate(widths.values(), start=1):
        ws.column_dimensions[ws.cell(row=1, column=index).column_letter].width = width

    ws.freeze_panes = "A2"


def build_records_workbook(rows: Sequence[RecordRow], tz: ZoneInfo) -> bytes:
    """Workbook with a single detail sheet of all given records."""
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        detail_frame(rows, tz).to_excel(writer, index=False, sheet_name=DETAIL_SHEET)
        style_sheet(writer.sheets[DETAIL_SHEET], DETAIL_COLUMNS)
    return buffer.getvalue()


def build_metrics_workbook(
    rows: Sequence[RecordRow],
    metrics: Sequence[EmployeeMetric],
    summary: MetricsSummary,
    tz: ZoneInfo,
) -> bytes:
    """Workbook with detail, per-employee summary and totals sheets."""
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        detail_frame(rows, tz).to_excel(writer, index=False, sheet_name=DETAIL_SHEET)
        style_sheet(writer.sheets[DETAIL_SHEET], DETAIL_COLUMNS)

        summary_frame(metrics, tz).to_excel(writer, index=False, sheet_name=SUMMARY_SHEET)
        style_sheet(writer.sheets[SUMMARY_SHEET], SUMMARY_COLUMNS)

        totals_frame(summary).to_excel(writer, index=False, sheet_name=TOTALS_SHEET)
        style_sheet(writer.sheets[TOTALS_SHEET], {"INDICADOR": 38, "VALOR": 12})
    return buffer.getvalue()


def export_filename(
    prefix: str,
    today: date,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> str:
    """
    Build the download file name.

    Examples:
        ("Reporte_Bodega", 2024-03-05) -> "Reporte_Bodega_05-03-2024.xlsx"
        ("Metricas_Bodega", _, 2024-03-01, 2024-03-31)
            -> "Metricas_Bodega_01-03-2024_a_31-03-2024.xlsx"
    """
    fmt = "%d-%m-%Y"
    if start or end:
        parts: List[str] = [
            start.strftime(fmt) if start else "inicio",
            end.strftime(fmt) if end else today.strftime(fmt),
        ]
        return f"{prefix}_{parts[0]}_a_{parts[1]}.xlsx"
    return f"{prefix}_{today.strftime(fmt)}.xlsx"
