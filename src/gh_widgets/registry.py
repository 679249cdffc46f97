"""Widget vocabulary and dispatch."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from types import MappingProxyType

from . import handlers
from .errors import UnknownWidget, WidgetError
from .models import RenderResult, Widget, WidgetSpec
from .protocols import Display, MetricsProvider

logger = logging.getLogger(__name__)

SERVICE = "github"

OWNER_SCOPE = "owner"
ALL_SCOPE = "all"

DEFAULT_ROW_LIMIT = 5
DEFAULT_METRICS = ("name", "stars", "watchers", "forks", "open_issues")
DEFAULT_ORDER = "pushed"


class WidgetKind(str, Enum):
    BOX_STARS = "github.box_stars"
    BOX_WATCHERS = "github.box_watchers"
    BOX_OPEN_ISSUES = "github.box_open_issues"
    TABLE_REPOSITORIES = "github.table_repositories"
    TABLE_BRANCHES = "github.table_branches"
    TABLE_ISSUES = "github.table_issues"
    TABLE_PULL_REQUESTS = "github.table_pull_requests"
    BAR_VIEWS = "github.bar_views"
    BAR_COMMITS = "github.bar_commits"
    BAR_STARS = "github.bar_stars"


_SPECS = [
    WidgetSpec(WidgetKind.BOX_STARS.value, "Github Stars for {repository}", handlers.box_stars),
    WidgetSpec(WidgetKind.BOX_WATCHERS.value, "Github Watchers", handlers.box_watchers),
    WidgetSpec(WidgetKind.BOX_OPEN_ISSUES.value, "Github Open Issues", handlers.box_open_issues),
    WidgetSpec(
        WidgetKind.TABLE_REPOSITORIES.value,
        "Github Repositories",
        handlers.table_repositories,
        row_limit=DEFAULT_ROW_LIMIT,
        metrics=DEFAULT_METRICS,
        order=DEFAULT_ORDER,
    ),
    WidgetSpec(
        WidgetKind.TABLE_BRANCHES.value,
        "Github Branches",
        handlers.table_branches,
        row_limit=DEFAULT_ROW_LIMIT,
    ),
    WidgetSpec(
        WidgetKind.TABLE_ISSUES.value,
        "Github Issues",
        handlers.table_issues,
        row_limit=DEFAULT_ROW_LIMIT,
    ),
    WidgetSpec(
        WidgetKind.TABLE_PULL_REQUESTS.value,
        "Github Pull Requests",
        handlers.table_pull_requests,
        row_limit=DEFAULT_ROW_LIMIT,
    ),
    WidgetSpec(WidgetKind.BAR_VIEWS.value, "Github Views", handlers.bar_views),
    WidgetSpec(
        WidgetKind.BAR_COMMITS.value,
        "Github Commit Per Week",
        handlers.bar_commits,
        scope=OWNER_SCOPE,
        start_date="7_weeks_ago",
        end_date="0_weeks_ago",
    ),
    WidgetSpec(
        WidgetKind.BAR_STARS.value,
        "Github Stars",
        handlers.bar_stars,
        start_date="7_days_ago",
        end_date="today",
    ),
]

WIDGETS = MappingProxyType({WidgetKind(spec.name): spec for spec in _SPECS})


def get_spec(name: str) -> WidgetSpec:
    """Look up the defaults of a widget, raising UnknownWidget for typos."""
    try:
        kind = WidgetKind(name)
    except ValueError:
        raise UnknownWidget(name, SERVICE) from None
    return WIDGETS[kind]


def dispatch(
    widget: Widget,
    provider: MetricsProvider,
    display: Display,
    now: datetime | None = None,
) -> RenderResult:
    """Render one widget: resolve its options, query the provider, display the result."""
    if now is None:
        now = datetime.now().astimezone()

    spec = get_spec(widget.name)
    try:
        logger.debug("Rendering %s with options %s", widget.name, widget.options)
        return spec.handler(spec, widget, provider, display, now)
    except WidgetError as exc:
        if exc.widget is None:
            exc.widget = widget.name
        raise
