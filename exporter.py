"""Write a month timesheet to an .xlsx workbook."""

from __future__ import annotations

import logging
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from models import Timesheet
from preview import COLUMNS

logger = logging.getLogger(__name__)

SHEET_TITLE = "Timesheet"
HEADER_FILL = PatternFill(start_color="99CCFF", end_color="99CCFF", fill_type="solid")
COLUMN_WIDTHS = [6, 12, 22, 8, 8, 8, 8, 10, 14]

# Columns holding hour figures, written as numbers
NUMERIC_COLUMNS = {"Pause", "Driver", "Passenger", "Compensated"}


def _number(value: str) -> float | None:
    return float(value) if value else None


def build_workbook(timesheet: Timesheet, company_name: str = "") -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    if company_name:
        ws.append([company_name])
        ws.append([])
    ws.append([f"Timesheet {timesheet.month.strftime('%B %Y')}"])
    ws.cell(row=ws.max_row, column=1).font = Font(bold=True, size=12)
    ws.append([])

    ws.append(COLUMNS)
    for cell in ws[ws.max_row]:
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL

    label_col = [None] * (len(COLUMNS) - 2)
    for week in timesheet.weeks:
        for row in week.rows:
            values = {
                "Day": row.day_label,
                "Date": row.day.strftime("%d/%m/%Y"),
                "Location": row.location,
                "From": row.start,
                "To": row.end,
                "Pause": row.pause,
                "Driver": row.driver,
                "Passenger": row.passenger,
                "Compensated": row.compensated,
            }
            ws.append([
                _number(values[name]) if name in NUMERIC_COLUMNS else values[name] or None
                for name in COLUMNS
            ])
        ws.append(label_col + ["Total per week", _number(week.total)])
        ws.append([])

    ws.append(label_col + ["Total hours", _number(timesheet.total_hours)])
    ws.append(label_col + ["Total after conversion", _number(timesheet.total_after_conversion)])
    ws.append(label_col + ["Expected hours", _number(timesheet.expected_hours)])
    ws.append(label_col + ["Overtime", _number(timesheet.overtime)])

    for idx, width in enumerate(COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width

    return wb


def export_timesheet(timesheet: Timesheet, path: Path, company_name: str = "") -> Path:
    """Save the timesheet workbook and return its path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    build_workbook(timesheet, company_name).save(path)
    logger.info("Exported timesheet for %s to %s", timesheet.month.strftime("%Y-%m"), path)
    return path
