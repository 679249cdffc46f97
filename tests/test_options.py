"""Tests for the option bag accessors."""

from __future__ import annotations

import pytest

from gh_widgets.errors import InvalidNumber
from gh_widgets.options import get, get_int, get_list, resolve_options
from gh_widgets.registry import WidgetKind, get_spec


def test_get_present():
    assert get({"repository": "devdash"}, "repository", "") == "devdash"


def test_get_absent_uses_default():
    assert get({}, "repository", "fallback") == "fallback"


def test_get_present_empty_is_kept():
    assert get({"title": ""}, "title", "Default") == ""


def test_get_int_parses():
    assert get_int({"row_limit": "3"}, "row_limit", 5) == 3


def test_get_int_absent_uses_default():
    assert get_int({}, "row_limit", 5) == 5


def test_get_int_invalid_names_value():
    with pytest.raises(InvalidNumber) as exc_info:
        get_int({"row_limit": "five"}, "row_limit", 5)
    assert exc_info.value.value == "five"
    assert exc_info.value.key == "row_limit"
    assert "five" in str(exc_info.value)


def test_get_list_splits_and_trims():
    bag = {"metrics": " name, stars ,forks "}
    assert get_list(bag, "metrics", ["x"]) == ["name", "stars", "forks"]


def test_get_list_custom_separator():
    assert get_list({"metrics": "a;b"}, "metrics", [], separator=";") == ["a", "b"]


@pytest.mark.parametrize("raw", ["", "   "])
def test_get_list_blank_uses_default(raw):
    """A blank list option counts as not configured."""
    default = ["name", "stars"]
    result = get_list({"metrics": raw}, "metrics", default)
    assert result == default
    assert result is not default


def test_resolve_options_table_repositories_defaults():
    opts = resolve_options(get_spec("github.table_repositories"), {})
    assert opts.title == "Github Repositories"
    assert opts.row_limit == 5
    assert opts.metrics == ["name", "stars", "watchers", "forks", "open_issues"]
    assert opts.order == "pushed"
    assert opts.start_date is None


def test_resolve_options_reads_order_key():
    """order comes from its own key, not from row_limit."""
    opts = resolve_options(
        get_spec(WidgetKind.TABLE_REPOSITORIES),
        {"order": "stars", "row_limit": "2"},
    )
    assert opts.order == "stars"
    assert opts.row_limit == 2


def test_resolve_options_metrics_override_replaces_defaults():
    opts = resolve_options(get_spec("github.table_repositories"), {"metrics": "name,forks"})
    assert opts.metrics == ["name", "forks"]


def test_resolve_options_title_template():
    opts = resolve_options(get_spec("github.box_stars"), {"repository": "devdash"})
    assert opts.title == "Github Stars for devdash"


def test_resolve_options_title_override():
    opts = resolve_options(get_spec("github.box_stars"), {"title": "Stars!"})
    assert opts.title == "Stars!"


def test_resolve_options_ignores_unused_row_limit():
    """Box widgets don't consume row_limit, so a bad value doesn't fail them."""
    opts = resolve_options(get_spec("github.box_watchers"), {"row_limit": "many"})
    assert opts.row_limit is None


def test_resolve_options_bar_commits_defaults():
    opts = resolve_options(get_spec("github.bar_commits"), {})
    assert opts.scope == "owner"
    assert opts.start_date == "7_weeks_ago"
    assert opts.end_date == "0_weeks_ago"


@pytest.mark.parametrize("raw", ["1_0", "３", "0x10", "1.5", ""])
def test_get_int_rejects_non_decimal(raw):
    with pytest.raises(InvalidNumber):
        get_int({"row_limit": raw}, "row_limit", 5)


def test_get_int_signs_and_whitespace():
    assert get_int({"row_limit": " +3 "}, "row_limit", 5) == 3
    assert get_int({"row_limit": "-3"}, "row_limit", 5) == -3


def test_get_int_minimum():
    with pytest.raises(InvalidNumber) as exc_info:
        get_int({"row_limit": "-2"}, "row_limit", 5, minimum=0)
    assert "at least 0" in str(exc_info.value)
    assert get_int({"row_limit": "0"}, "row_limit", 5, minimum=0) == 0


def test_resolve_options_rejects_negative_row_limit():
    with pytest.raises(InvalidNumber) as exc_info:
        resolve_options(get_spec("github.table_repositories"), {"row_limit": "-2"})
    assert exc_info.value.value == "-2"


def test_resolve_options_zero_row_limit():
    opts = resolve_options(get_spec("github.table_issues"), {"row_limit": "0"})
    assert opts.row_limit == 0
