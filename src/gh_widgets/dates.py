"""Relative date expressions such as ``7_weeks_ago`` or ``today``.

Two resolutions exist because widgets query two shapes of data:

* :func:`extract_count_period` returns the bare magnitude of a week (or day)
  expression, used for bucketed counts going N weeks back from now.
* :func:`convert_dates` turns a pair of day expressions into two absolute
  datetimes, used for instant-range queries.

Both are pure; the reference instant is always passed in by the caller.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime, timedelta

from .errors import MalformedDateExpression

DAYS = "days"
WEEKS = "weeks"
# "months" is reserved in the expression grammar but not resolved yet.
UNITS = (DAYS, WEEKS)

TODAY = ("today", "now")

_EXPRESSION = re.compile(r"(?P<count>[0-9]+)_(?P<unit>[a-z]+)_ago")


def expected_shape(unit: str) -> str:
    if unit == DAYS:
        return "<n>_days_ago or today"
    return f"<n>_{unit}_ago"


def extract_count_period(expression: str, unit: str = WEEKS) -> int:
    """Return N from an ``N_<unit>_ago`` expression.

    >>> extract_count_period("7_weeks_ago")
    7

    Raises MalformedDateExpression when the unit token is missing or
    misspelled, or when N is not a non-negative integer.
    """
    if unit not in UNITS:
        raise ValueError(f"unsupported unit {unit!r}, expected one of {', '.join(UNITS)}")
    match = _EXPRESSION.fullmatch(expression.strip())
    if match is None or match["unit"] != unit:
        raise MalformedDateExpression(expression, f"<n>_{unit}_ago")
    return int(match["count"])


def calendar_day(now: datetime) -> datetime:
    """Midnight of ``now``'s day, keeping its timezone."""
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def _days_back(expression: str) -> int:
    if expression.strip() in TODAY:
        return 0
    try:
        return extract_count_period(expression, DAYS)
    except MalformedDateExpression:
        raise MalformedDateExpression(expression, expected_shape(DAYS)) from None


def _shift(day: datetime, expression: str) -> datetime:
    days = _days_back(expression)
    try:
        return day - timedelta(days=days)
    except OverflowError:
        raise MalformedDateExpression(
            expression, f"{expected_shape(DAYS)} within the supported date range"
        ) from None


def convert_dates(now: datetime, start: str, end: str) -> tuple[datetime, datetime]:
    """Resolve a pair of day expressions into absolute datetimes.

    Both ends are anchored on the calendar day of ``now``. The pair is
    returned in the order given; ``start <= end`` is not enforced.
    """
    day = calendar_day(now)
    return _shift(day, start), _shift(day, end)


def require_unit(widget: str, expressions: Mapping[str, str], unit: str) -> None:
    """Check each raw expression, keyed by option name, carries ``<unit>_ago``.

    Used before any provider call so a widget configured with the wrong
    granularity fails without querying anything.
    """
    token = f"{unit}_ago"
    for key, expression in expressions.items():
        if unit == DAYS and expression.strip() in TODAY:
            continue
        if token not in expression:
            raise MalformedDateExpression(
                expression, expected_shape(unit), widget=widget, key=key
            )
