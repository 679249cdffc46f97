"""Render a whole dashboard, one widget after the other."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from .errors import WidgetError
from .models import DashboardReport, FailedWidget, Widget
from .protocols import Display, MetricsProvider
from .registry import dispatch

logger = logging.getLogger(__name__)


def render_dashboard(
    widgets: Iterable[Widget],
    provider: MetricsProvider,
    display: Display,
    now: datetime | None = None,
    fail_fast: bool = False,
) -> DashboardReport:
    """Dispatch each widget in order against a single reference instant.

    A widget that fails contributes nothing to the display. With ``fail_fast``
    the first failure is raised, otherwise it is recorded in the report and
    the remaining widgets still render.
    """
    if now is None:
        now = datetime.now().astimezone()

    report = DashboardReport()
    for widget in widgets:
        try:
            result = dispatch(widget, provider, display, now=now)
        except WidgetError as exc:
            if fail_fast:
                raise
            logger.warning("Skipping widget %s: %s", widget.name, exc.message)
            report.failed.append(FailedWidget(widget=widget.name, error=str(exc)))
            continue
        report.rendered.append(result)

    logger.info(
        "Rendered %d widget(s), %d failed", len(report.rendered), len(report.failed)
    )
    return report
