"""Interfaces of the collaborators widgets query and render into."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Protocol

Row = Mapping[str, Any]
Series = tuple[list[str], list[int]]


class MetricsProvider(Protocol):
    """Source of GitHub metrics. Any call may raise; errors are not retried."""

    def total_stars(self, repository: str) -> int: ...

    def total_watchers(self, repository: str) -> int: ...

    def total_open_issues(self, repository: str) -> int: ...

    def list_repositories(self, limit: int, order: str, metrics: Sequence[str]) -> list[Row]: ...

    def list_branches(self, repository: str, limit: int) -> list[Row]: ...

    def list_issues(self, repository: str, limit: int) -> list[Row]: ...

    def list_pull_requests(self, repository: str, limit: int) -> list[Row]: ...

    def views(self, repository: str) -> Series: ...

    def count_commits(
        self,
        repository: str,
        scope: str,
        start_weeks: int,
        end_weeks: int,
        now: datetime,
    ) -> Series: ...

    def count_stars(self, repository: str, start: datetime, end: datetime) -> Series: ...


class Display(Protocol):
    """Surface the resolved values are painted on."""

    def add_text_box(self, value: str, title: str, options: Mapping[str, str]) -> None: ...

    def add_table(self, rows: Sequence[Row], title: str, options: Mapping[str, str]) -> None: ...

    def add_bar_chart(
        self,
        counts: Sequence[int],
        labels: Sequence[str],
        title: str,
        options: Mapping[str, str],
    ) -> None: ...
