"""One handler per widget kind.

Every handler resolves its options, makes exactly one provider call and
exactly one display call. Nothing is displayed when an earlier step fails.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any, Callable

from .dates import DAYS, WEEKS, convert_dates, extract_count_period, require_unit
from .errors import DisplayError, MalformedDateExpression, ProviderError
from .models import RenderResult, Widget, WidgetSpec
from .options import OPTION_END_DATE, OPTION_START_DATE, resolve_options
from .protocols import Display, MetricsProvider, Row

logger = logging.getLogger(__name__)


def _query(call: Callable[..., Any], *args: Any) -> Any:
    try:
        return call(*args)
    except Exception as exc:
        raise ProviderError(exc) from exc


def _show(call: Callable[..., Any], *args: Any) -> None:
    try:
        call(*args)
    except Exception as exc:
        raise DisplayError(exc) from exc


def _text_box(widget: Widget, title: str, value: int, display: Display) -> RenderResult:
    _show(display.add_text_box, str(value), title, widget.options)
    return RenderResult(widget=widget.name, title=title, display="box", items=1)


def _table(
    widget: Widget, title: str, rows: Sequence[Row], limit: int, display: Display
) -> RenderResult:
    rows = list(rows)[:limit]
    _show(display.add_table, rows, title, widget.options)
    return RenderResult(widget=widget.name, title=title, display="table", items=len(rows))


def _bar_chart(
    widget: Widget, title: str, series: tuple[list[str], list[int]], display: Display
) -> RenderResult:
    labels, counts = series
    _show(display.add_bar_chart, counts, labels, title, widget.options)
    return RenderResult(widget=widget.name, title=title, display="bar", items=len(counts))


def box_stars(
    spec: WidgetSpec, widget: Widget, provider: MetricsProvider, display: Display, now: datetime
) -> RenderResult:
    opts = resolve_options(spec, widget.options)
    stars = _query(provider.total_stars, opts.repository)
    return _text_box(widget, opts.title, stars, display)


def box_watchers(
    spec: WidgetSpec, widget: Widget, provider: MetricsProvider, display: Display, now: datetime
) -> RenderResult:
    opts = resolve_options(spec, widget.options)
    watchers = _query(provider.total_watchers, opts.repository)
    return _text_box(widget, opts.title, watchers, display)


def box_open_issues(
    spec: WidgetSpec, widget: Widget, provider: MetricsProvider, display: Display, now: datetime
) -> RenderResult:
    opts = resolve_options(spec, widget.options)
    issues = _query(provider.total_open_issues, opts.repository)
    return _text_box(widget, opts.title, issues, display)


def table_repositories(
    spec: WidgetSpec, widget: Widget, provider: MetricsProvider, display: Display, now: datetime
) -> RenderResult:
    opts = resolve_options(spec, widget.options)
    rows = _query(provider.list_repositories, opts.row_limit, opts.order, opts.metrics)
    return _table(widget, opts.title, rows, opts.row_limit, display)


def table_branches(
    spec: WidgetSpec, widget: Widget, provider: MetricsProvider, display: Display, now: datetime
) -> RenderResult:
    opts = resolve_options(spec, widget.options)
    rows = _query(provider.list_branches, opts.repository, opts.row_limit)
    return _table(widget, opts.title, rows, opts.row_limit, display)


def table_issues(
    spec: WidgetSpec, widget: Widget, provider: MetricsProvider, display: Display, now: datetime
) -> RenderResult:
    opts = resolve_options(spec, widget.options)
    rows = _query(provider.list_issues, opts.repository, opts.row_limit)
    return _table(widget, opts.title, rows, opts.row_limit, display)


def table_pull_requests(
    spec: WidgetSpec, widget: Widget, provider: MetricsProvider, display: Display, now: datetime
) -> RenderResult:
    opts = resolve_options(spec, widget.options)
    rows = _query(provider.list_pull_requests, opts.repository, opts.row_limit)
    return _table(widget, opts.title, rows, opts.row_limit, display)


def bar_views(
    spec: WidgetSpec, widget: Widget, provider: MetricsProvider, display: Display, now: datetime
) -> RenderResult:
    opts = resolve_options(spec, widget.options)
    series = _query(provider.views, opts.repository)
    return _bar_chart(widget, opts.title, series, display)


def _keyed(key: str, exc: MalformedDateExpression) -> MalformedDateExpression:
    return MalformedDateExpression(exc.expression, exc.expected, key=key)


def bar_commits(
    spec: WidgetSpec, widget: Widget, provider: MetricsProvider, display: Display, now: datetime
) -> RenderResult:
    """Commits per week between ``start_date`` and ``end_date`` weeks ago."""
    opts = resolve_options(spec, widget.options)
    dates = {OPTION_START_DATE: opts.start_date, OPTION_END_DATE: opts.end_date}
    require_unit(widget.name, dates, WEEKS)

    weeks = {}
    for key, expression in dates.items():
        try:
            weeks[key] = extract_count_period(expression, WEEKS)
        except MalformedDateExpression as exc:
            raise _keyed(key, exc) from None
    start_weeks, end_weeks = weeks[OPTION_START_DATE], weeks[OPTION_END_DATE]
    logger.debug("%s: counting commits from %d to %d weeks ago", widget.name, start_weeks, end_weeks)

    series = _query(
        provider.count_commits, opts.repository, opts.scope, start_weeks, end_weeks, now
    )
    return _bar_chart(widget, opts.title, series, display)


def bar_stars(
    spec: WidgetSpec, widget: Widget, provider: MetricsProvider, display: Display, now: datetime
) -> RenderResult:
    """New stars per day between two day expressions."""
    opts = resolve_options(spec, widget.options)
    dates = {OPTION_START_DATE: opts.start_date, OPTION_END_DATE: opts.end_date}
    require_unit(widget.name, dates, DAYS)
    try:
        start, end = convert_dates(now, opts.start_date, opts.end_date)
    except MalformedDateExpression as exc:
        key = OPTION_START_DATE if exc.expression == opts.start_date else OPTION_END_DATE
        raise _keyed(key, exc) from None
    logger.debug("%s: counting stars from %s to %s", widget.name, start.date(), end.date())

    series = _query(provider.count_stars, opts.repository, start, end)
    return _bar_chart(widget, opts.title, series, display)
