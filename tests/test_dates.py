"""Tests for relative date resolution."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from gh_widgets.dates import convert_dates, extract_count_period, require_unit
from gh_widgets.errors import MalformedDateExpression

NOW = datetime(2024, 6, 15, 13, 45, 12, tzinfo=timezone.utc)
DAY = datetime(2024, 6, 15, tzinfo=timezone.utc)


@pytest.mark.parametrize("n", [0, 1, 7, 52, 104])
def test_extract_count_period_weeks(n):
    assert extract_count_period(f"{n}_weeks_ago") == n


def test_extract_count_period_days():
    assert extract_count_period("3_days_ago", "days") == 3


@pytest.mark.parametrize(
    "expression",
    ["5_wks_ago", "abc_weeks_ago", "weeks_ago", "-1_weeks_ago", "5_weeks", "5_days_ago", ""],
)
def test_extract_count_period_malformed(expression):
    with pytest.raises(MalformedDateExpression) as exc_info:
        extract_count_period(expression)
    assert exc_info.value.expression == expression
    assert "<n>_weeks_ago" in str(exc_info.value)


def test_extract_count_period_months_not_supported():
    with pytest.raises(ValueError):
        extract_count_period("2_months_ago", "months")


def test_convert_dates_today_today():
    start, end = convert_dates(NOW, "today", "today")
    assert start == end == DAY


def test_convert_dates_now_is_today():
    start, end = convert_dates(NOW, "now", "0_days_ago")
    assert start == end == DAY


def test_convert_dates_seven_days():
    start, end = convert_dates(NOW, "7_days_ago", "today")
    assert end - start == timedelta(days=7)
    assert start == datetime(2024, 6, 8, tzinfo=timezone.utc)


def test_convert_dates_keeps_given_order():
    start, end = convert_dates(NOW, "today", "3_days_ago")
    assert start > end


def test_convert_dates_malformed_end():
    with pytest.raises(MalformedDateExpression) as exc_info:
        convert_dates(NOW, "7_days_ago", "yesterday")
    assert exc_info.value.expression == "yesterday"
    assert "today" in exc_info.value.expected


def test_convert_dates_rejects_weeks():
    with pytest.raises(MalformedDateExpression):
        convert_dates(NOW, "2_weeks_ago", "today")


def test_require_unit_passes():
    require_unit("github.bar_commits", {"start_date": "4_weeks_ago", "end_date": "0_weeks_ago"}, "weeks")
    require_unit("github.bar_stars", {"start_date": "7_days_ago", "end_date": "today"}, "days")


def test_require_unit_names_widget_and_expression():
    with pytest.raises(MalformedDateExpression) as exc_info:
        require_unit(
            "github.bar_commits", {"start_date": "4_weeks_ago", "end_date": "3_days_ago"}, "weeks"
        )
    err = exc_info.value
    assert err.widget == "github.bar_commits"
    assert err.expression == "3_days_ago"
    assert err.key == "end_date"
    assert "option end_date" in str(err)
    assert str(err).startswith("github.bar_commits: ")


def test_require_unit_today_is_not_a_week():
    with pytest.raises(MalformedDateExpression):
        require_unit("github.bar_commits", {"start_date": "today"}, "weeks")


@pytest.mark.parametrize("expression", ["1000000_days_ago", "99999999999_days_ago"])
def test_convert_dates_out_of_range(expression):
    """A well-formed but huge magnitude is reported, not an OverflowError."""
    with pytest.raises(MalformedDateExpression) as exc_info:
        convert_dates(NOW, expression, "today")
    assert exc_info.value.expression == expression
    assert "date range" in exc_info.value.expected
