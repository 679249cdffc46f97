"""Command line interface for gh-widgets."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .errors import WidgetError
from .models import Widget
from .options import resolve_options
from .registry import WIDGETS, dispatch, get_spec


def _parse_option(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, str]:
    options = {}
    for value in values:
        key, sep, raw = value.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got {value!r}")
        options[key.strip()] = raw
    return options


def _parse_now(ctx: click.Context, param: click.Parameter, value: str | None) -> datetime:
    """Parse ``--now`` as a date or ISO timestamp; default to the current time."""
    if value is None:
        return datetime.now().astimezone()
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"{value!r} is not a date (YYYY-MM-DD) or ISO timestamp") from None
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


class _DryRunProvider:
    """Records the single provider call a widget makes and returns empty data."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def __getattr__(self, name: str):
        def record(*args: Any) -> Any:
            self.calls.append((name, args))
            if name.startswith("total_"):
                return 0
            if name.startswith("list_"):
                return []
            return [], []

        return record


class _NullDisplay:
    def add_text_box(self, value, title, options) -> None:
        pass

    def add_table(self, rows, title, options) -> None:
        pass

    def add_bar_chart(self, counts, labels, title, options) -> None:
        pass


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="gh-widgets")
def main(verbose: bool) -> None:
    """Resolve GitHub dashboard widget configurations."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


@main.command("list")
def list_widgets() -> None:
    """List the available widgets and their defaults."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Widget", no_wrap=True)
    table.add_column("Title")
    table.add_column("Defaults")

    for kind, spec in WIDGETS.items():
        defaults = {
            "row_limit": spec.row_limit,
            "metrics": ", ".join(spec.metrics) if spec.metrics else None,
            "order": spec.order,
            "scope": spec.scope,
            "start_date": spec.start_date,
            "end_date": spec.end_date,
        }
        shown = ", ".join(f"{k}={v}" for k, v in defaults.items() if v is not None)
        table.add_row(kind.value, spec.title, shown or "-")
    Console().print(table)


@main.command()
@click.argument("name")
@click.option(
    "--option", "-o", "options", multiple=True, callback=_parse_option,
    metavar="KEY=VALUE", help="Widget option, may be repeated.",
)
@click.option(
    "--now", callback=_parse_now,
    help="Reference instant for relative dates (YYYY-MM-DD or ISO timestamp).",
)
def resolve(name: str, options: dict[str, str], now: datetime) -> None:
    """Show the query a widget would run, without calling GitHub."""
    widget = Widget(name=name, options=options)
    provider = _DryRunProvider()
    try:
        dispatch(widget, provider, _NullDisplay(), now=now)
        resolved = resolve_options(get_spec(name), options)
    except WidgetError as exc:
        raise click.ClickException(str(exc)) from exc

    console = Console()
    table = Table(title=name, show_header=False)
    table.add_column("option", style="dim")
    table.add_column("value", style="bold")
    for key, value in vars(resolved).items():
        if value is not None:
            table.add_row(key, escape(", ".join(value) if isinstance(value, list) else str(value)))
    for call, args in provider.calls:
        table.add_row("query", escape(f"{call}({', '.join(str(a) for a in args)})"))
    console.print(table)
