from datetime import date, datetime
from io import BytesIO
from zoneinfo import ZoneInfo

from openpyxl import load_workbook

from bodega.fastapi.core.export import (
    DETAIL_COLUMNS,
    DETAIL_SHEET,
    SUMMARY_SHEET,
    TOTALS_SHEET,
    build_metrics_workbook,
    build_records_workbook,
    export_filename,
)
from bodega.fastapi.core.metrics import RecordRow, aggregate, summarize
from bodega.fastapi.models.time_record import RecordType

BOGOTA = ZoneInfo("America/Bogota")

ROWS = [
    RecordRow("12345", "ANA", "PUNTO_DE_VENTA", RecordType.ENTRADA, datetime(2024, 3, 5, 13, 0, 0),
              "INVENTARIO", ["CELULAR-CORPORATIVO", "BANDA-RELOJ-INTELIGENTE"]),
    RecordRow("12345", "ANA", "PUNTO_DE_VENTA", RecordType.SALIDA, datetime(2024, 3, 5, 22, 15, 30),
              "INVENTARIO", ["CELULAR-CORPORATIVO", "BANDA-RELOJ-INTELIGENTE"]),
]


def test_records_workbook_detail_sheet():
    workbook = load_workbook(BytesIO(build_records_workbook(ROWS, BOGOTA)))

    assert workbook.sheetnames == [DETAIL_SHEET]
    sheet = workbook[DETAIL_SHEET]
    header = [cell.value for cell in sheet[1]]
    assert header == list(DETAIL_COLUMNS)

    # Most recent first, local date and time
    latest = [cell.value for cell in sheet[2]]
    assert latest == ["12345", "ANA", "PUNTO_DE_VENTA", "SALIDA", "05/03/2024", "17:15:30",
                      "INVENTARIO", "CELULAR-CORPORATIVO, BANDA-RELOJ-INTELIGENTE"]
    assert sheet[3][3].value == "ENTRADA"
    assert sheet.freeze_panes == "A2"
    assert sheet["A1"].font.bold


def test_records_workbook_empty_has_header_only():
    sheet = load_workbook(BytesIO(build_records_workbook([], BOGOTA)))[DETAIL_SHEET]

    assert sheet.max_row == 1


def test_metrics_workbook_sheets():
    metrics = aggregate(ROWS)
    content = build_metrics_workbook(ROWS, metrics, summarize(metrics), BOGOTA)

    workbook = load_workbook(BytesIO(content))

    assert workbook.sheetnames == [DETAIL_SHEET, SUMMARY_SHEET, TOTALS_SHEET]
    summary = workbook[SUMMARY_SHEET]
    assert [cell.value for cell in summary[2]][:6] == ["12345", "ANA", "PUNTO_DE_VENTA", 1, 1, 2]
    assert summary[2][6].value == "05/03/2024 17:15:30"

    totals = {r[0].value: r[1].value for r in workbook[TOTALS_SHEET].iter_rows(min_row=2)}
    assert totals["Total empleados"] == 1
    assert totals["Promedio movimientos por empleado"] == 2.0


def test_export_filename_single_day():
    assert export_filename("Reporte_Bodega", date(2024, 3, 5)) == "Reporte_Bodega_05-03-2024.xlsx"


def test_export_filename_range():
    name = export_filename("Metricas_Bodega", date(2024, 4, 2), date(2024, 3, 1), date(2024, 3, 31))

    assert name == "Metricas_Bodega_01-03-2024_a_31-03-2024.xlsx"


def test_export_filename_open_range():
    assert (export_filename("Metricas_Bodega", date(2024, 4, 2), start=date(2024, 3, 1))
            == "Metricas_Bodega_01-03-2024_a_02-04-2024.xlsx")
    assert (export_filename("Metricas_Bodega", date(2024, 4, 2), end=date(2024, 3, 31))
            == "Metricas_Bodega_inicio_a_31-03-2024.xlsx")
