"""Rich-based console display and dashboard report rendering."""

from __future__ import annotations

import io
import json
from collections.abc import Mapping, Sequence
from dataclasses import asdict

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import DashboardReport
from .options import get, get_int
from .protocols import Row

OPTION_BORDER_COLOR = "border_color"
OPTION_BAR_WIDTH = "bar_width"


def _format_number(n: int) -> str:
    return f"{n:,}"


def _make_bar(value: int, peak: int, width: int = 20) -> str:
    filled = round(value / peak * width) if peak else 0
    return "█" * filled + "░" * (width - filled)


def _write_to_file(content: str, output_file: str) -> None:
    """Write content to a file and print confirmation."""
    with open(output_file, "w", encoding="utf-8") as f:
        f.write(content)
    Console().print(f"Saved to {output_file}")


class ConsoleDisplay:
    """Paints widgets one below the other on a rich console.

    When ``output_file`` is given, everything is buffered and written to the
    file by :meth:`save`.
    """

    def __init__(self, console: Console | None = None, output_file: str | None = None):
        self.output_file = output_file
        self._buffer: io.StringIO | None = None
        if output_file:
            self._buffer = io.StringIO()
            console = Console(file=self._buffer, force_terminal=False, width=120)
        self.console = console or Console()

    def add_text_box(self, value: str, title: str, options: Mapping[str, str]) -> None:
        self.console.print(Panel(
            Text(value, justify="center"),
            title=title,
            border_style=get(options, OPTION_BORDER_COLOR, "cyan"),
            expand=False,
        ))

    def add_table(self, rows: Sequence[Row], title: str, options: Mapping[str, str]) -> None:
        table = Table(
            title=title,
            show_header=True,
            header_style="bold",
            border_style=get(options, OPTION_BORDER_COLOR, "cyan"),
        )
        if not rows:
            # rich draws nothing, not even the title, for a table without columns
            table.add_column("-")
            table.add_row("no data", style="dim")
            self.console.print(table)
            return

        columns = list(rows[0].keys())
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*(str(row.get(column, "")) for column in columns))
        self.console.print(table)

    def add_bar_chart(
        self,
        counts: Sequence[int],
        labels: Sequence[str],
        title: str,
        options: Mapping[str, str],
    ) -> None:
        width = get_int(options, OPTION_BAR_WIDTH, 20)
        peak = max(counts, default=0)

        table = Table(
            title=title,
            show_header=False,
            border_style=get(options, OPTION_BORDER_COLOR, "cyan"),
        )
        table.add_column("label", style="dim")
        table.add_column("bar")
        table.add_column("count", justify="right")
        for label, count in zip(labels, counts):
            table.add_row(label, _make_bar(count, peak, width), _format_number(count))
        self.console.print(table)

    def save(self) -> None:
        if self._buffer is not None and self.output_file:
            _write_to_file(self._buffer.getvalue(), self.output_file)


def render_summary(report: DashboardReport, output_file: str | None = None) -> None:
    """Print which widgets rendered and which failed."""
    if output_file:
        string_io = io.StringIO()
        console = Console(file=string_io, force_terminal=False, width=120)
    else:
        console = Console()

    if report.failed:
        console.print(
            f"[bold yellow]Warning:[/bold yellow] {len(report.failed)} widget(s) failed to render"
        )
        for failed in report.failed:
            console.print(f"  {failed.widget}: {failed.error}", markup=False)
        console.print()

    console.print("[bold]Summary[/bold]")
    summary = Table(show_header=True, header_style="bold")
    summary.add_column("Widget")
    summary.add_column("Title")
    summary.add_column("Display")
    summary.add_column("Items", justify="right")
    for r in report.rendered:
        summary.add_row(r.widget, r.title, r.display, _format_number(r.items))
    console.print(summary)

    if output_file:
        _write_to_file(string_io.getvalue(), output_file)


def render_json(report: DashboardReport, output_file: str | None = None) -> None:
    """Render a DashboardReport as JSON."""
    content = json.dumps(asdict(report), indent=2, ensure_ascii=False)
    if output_file:
        _write_to_file(content, output_file)
    else:
        print(content)
