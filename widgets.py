"""Custom widgets for the timesheet application."""

from __future__ import annotations

from textual.widgets import Static
from rich.text import Text

from models import Timesheet
from preview import overtime_text
from utils import format_hours


class MonthHeader(Static):
    """Shows the month name and navigation hints."""

    def update_display(self, timesheet: Timesheet):
        text = Text()
        text.append(f"TIMESHEET: {timesheet.month.strftime('%B %Y')}", style="bold")
        text.append("    ◄ p  n ►", style="dim")
        self.update(text)


class MonthlySummary(Static):
    """Shows the month totals against the expected hours."""

    def update_display(self, timesheet: Timesheet):
        summary = timesheet.summary
        converted = summary.passenger_hours_converted

        text = Text()
        text.append(f"           Total hours  {timesheet.total_hours:>8}h\n")
        # Passenger line - dim if zero
        text.append(
            f"   Passenger converted  {format_hours(converted):>8}h\n",
            style="dim" if converted == 0 else "",
        )
        text.append(f"Total after conversion  {timesheet.total_after_conversion:>8}h\n")
        text.append(
            f"        Expected hours  {timesheet.expected_hours:>8}h"
            f"   ({summary.percentage:.1f}%)\n"
        )
        text.append("              Overtime  ")
        text.append_text(overtime_text(timesheet))

        self.update(text)
