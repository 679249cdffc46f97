"""Data models for gh-widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass(frozen=True)
class Widget:
    """One configured dashboard element: a widget identifier and its option bag."""

    name: str
    options: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class WidgetSpec:
    """Static defaults for one widget kind.

    Fields left to ``None`` are options the widget kind does not consume.
    ``title`` may contain a ``{repository}`` placeholder.
    """

    name: str
    title: str
    handler: Callable[..., Any]
    row_limit: int | None = None
    metrics: tuple[str, ...] | None = None
    order: str | None = None
    scope: str | None = None
    start_date: str | None = None
    end_date: str | None = None


@dataclass(frozen=True)
class WidgetOptions:
    """Typed options of one widget after a single validation pass."""

    repository: str
    title: str
    row_limit: int | None = None
    metrics: list[str] | None = None
    order: str | None = None
    scope: str | None = None
    start_date: str | None = None
    end_date: str | None = None


@dataclass
class RenderResult:
    widget: str
    title: str
    display: str
    items: int


@dataclass
class FailedWidget:
    widget: str
    error: str


@dataclass
class DashboardReport:
    rendered: list[RenderResult] = field(default_factory=list)
    failed: list[FailedWidget] = field(default_factory=list)
