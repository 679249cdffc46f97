"""Typed, defaulted reads from a widget's string option bag."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from .errors import InvalidNumber
from .models import WidgetOptions, WidgetSpec

OPTION_REPOSITORY = "repository"
OPTION_TITLE = "title"
OPTION_ROW_LIMIT = "row_limit"
OPTION_METRICS = "metrics"
OPTION_ORDER = "order"
OPTION_SCOPE = "scope"
OPTION_START_DATE = "start_date"
OPTION_END_DATE = "end_date"

_INTEGER = re.compile(r"[+-]?[0-9]+")

KNOWN_OPTIONS = (
    OPTION_REPOSITORY,
    OPTION_TITLE,
    OPTION_ROW_LIMIT,
    OPTION_METRICS,
    OPTION_ORDER,
    OPTION_SCOPE,
    OPTION_START_DATE,
    OPTION_END_DATE,
)


def get(bag: Mapping[str, str], key: str, default: str) -> str:
    """Return the raw value at ``key``, or ``default`` when the key is absent."""
    if key in bag:
        return bag[key]
    return default


def get_int(bag: Mapping[str, str], key: str, default: int, minimum: int | None = None) -> int:
    """Parse the value at ``key`` as a base-10 integer.

    Raises InvalidNumber naming the raw value when it is present but not a
    plain ASCII integer, or when it is below ``minimum``.
    """
    if key not in bag:
        return default
    raw = bag[key]
    if not isinstance(raw, str) or _INTEGER.fullmatch(raw.strip()) is None:
        raise InvalidNumber(key, raw)
    value = int(raw.strip())
    if minimum is not None and value < minimum:
        raise InvalidNumber(key, raw, f"must be at least {minimum}")
    return value


def get_list(
    bag: Mapping[str, str],
    key: str,
    default: Sequence[str],
    separator: str = ",",
) -> list[str]:
    """Split the value at ``key`` into a list of trimmed items.

    An absent key and a present but blank value both yield ``default``;
    the result is never an empty list because of a blank option.
    """
    raw = bag.get(key, "").strip()
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(separator)]


def resolve_options(spec: WidgetSpec, bag: Mapping[str, str]) -> WidgetOptions:
    """Resolve every option ``spec`` consumes into a typed record."""
    repository = get(bag, OPTION_REPOSITORY, "")
    title = get(bag, OPTION_TITLE, spec.title.format(repository=repository))

    row_limit = None
    if spec.row_limit is not None:
        row_limit = get_int(bag, OPTION_ROW_LIMIT, spec.row_limit, minimum=0)

    metrics = None
    if spec.metrics is not None:
        metrics = get_list(bag, OPTION_METRICS, spec.metrics)

    order = None
    if spec.order is not None:
        order = get(bag, OPTION_ORDER, spec.order)

    scope = None
    if spec.scope is not None:
        scope = get(bag, OPTION_SCOPE, spec.scope)

    start_date = end_date = None
    if spec.start_date is not None:
        start_date = get(bag, OPTION_START_DATE, spec.start_date)
    if spec.end_date is not None:
        end_date = get(bag, OPTION_END_DATE, spec.end_date)

    return WidgetOptions(
        repository=repository,
        title=title,
        row_limit=row_limit,
        metrics=metrics,
        order=order,
        scope=scope,
        start_date=start_date,
        end_date=end_date,
    )
