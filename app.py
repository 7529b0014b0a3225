#!/usr/bin/env python3
"""Compensated timesheet TUI application."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import DataTable, Footer

import storage
from models import Timesheet
from preview import COLUMNS, build_timesheet, render_timesheet
from utils import entries_for_day_lookup
from widgets import MonthHeader, MonthlySummary

logger = logging.getLogger(__name__)


def load_timesheet(month: date) -> Timesheet:
    """Build the month's timesheet from the local store."""
    storage.init_db()
    entries = storage.get_weeks_entries(month.year, month.month)
    settings = storage.get_settings()
    return build_timesheet(month, entries_for_day_lookup(entries), settings)


def shift_month(month: date, delta: int) -> date:
    index = month.year * 12 + (month.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def parse_month(text: str) -> date:
    """Parse "YYYY-MM" into the first day of that month."""
    return datetime.strptime(text, "%Y-%m").date()


class TimesheetApp(App):
    """Main timesheet application."""

    CSS = """
    Screen {
        background: $surface;
    }

    #month-header {
        height: auto;
        background: $primary;
        color: $text;
        padding: 0 1;
        text-style: bold;
    }

    #month-table {
        height: 1fr;
        margin: 1 2;
    }

    #month-summary {
        height: auto;
        padding: 1 2;
        color: $text;
    }

    DataTable {
        height: 100%;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("p", "prev_month", "Prev"),
        Binding("n", "next_month", "Next"),
        Binding("t", "goto_today", "Today"),
    ]

    def __init__(self, month: date | None = None):
        super().__init__()
        today = month or date.today()
        self.current_month = date(today.year, today.month, 1)
        self.timesheet: Timesheet | None = None

    def compose(self) -> ComposeResult:
        yield MonthHeader(id="month-header")
        yield Container(DataTable(id="month-table"), id="month-table-container")
        yield MonthlySummary(id="month-summary")
        yield Footer()

    def on_mount(self):
        table = self.query_one("#month-table", DataTable)
        table.cursor_type = "row"
        for name in COLUMNS:
            table.add_column(name)
        self._refresh_display()
        table.focus()

    def _refresh_display(self):
        self.timesheet = load_timesheet(self.current_month)

        table = self.query_one("#month-table", DataTable)
        table.clear()
        for week in self.timesheet.weeks:
            for row in week.rows:
                table.add_row(
                    row.day_label,
                    row.day.strftime("%d/%m"),
                    row.location,
                    row.start,
                    row.end,
                    row.pause,
                    row.driver,
                    row.passenger,
                    row.compensated,
                )
            table.add_row("", "", "", "", "", "", "", "Week", week.total)

        self.query_one("#month-header", MonthHeader).update_display(self.timesheet)
        self.query_one("#month-summary", MonthlySummary).update_display(self.timesheet)

    def action_prev_month(self):
        self.current_month = shift_month(self.current_month, -1)
        self._refresh_display()

    def action_next_month(self):
        self.current_month = shift_month(self.current_month, 1)
        self._refresh_display()

    def action_goto_today(self):
        today = date.today()
        self.current_month = date(today.year, today.month, 1)
        self._refresh_display()


def main():
    import sys
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )

    args = sys.argv[1:]
    if args and args[0] == "--db-info":
        db_path = storage.DB_PATH
        print(f"Database: {db_path}")
        if db_path.exists():
            mtime = datetime.fromtimestamp(db_path.stat().st_mtime)
            size = db_path.stat().st_size
            print(f"Modified: {mtime.strftime('%Y-%m-%d %H:%M:%S')}")
            print(f"Size: {size:,} bytes")
        else:
            print("Status: Does not exist (will be created on first run)")
        return

    if args and args[0] == "--summary" and len(args) == 2:
        Console().print(render_timesheet(load_timesheet(parse_month(args[1]))))
        return

    if args and args[0] == "--export" and len(args) == 3:
        from exporter import export_timesheet

        timesheet = load_timesheet(parse_month(args[1]))
        export_timesheet(timesheet, Path(args[2]), storage.get_settings().company_name)
        return

    if args:
        logger.error("Usage: app.py [--db-info | --summary YYYY-MM | --export YYYY-MM PATH]")
        sys.exit(2)

    app = TimesheetApp()
    app.run()


if __name__ == "__main__":
    main()
