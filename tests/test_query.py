"""Tests for wren.query — carrying query parameters across navigations."""

import httpx
import pytest

from wren.context import RoutingContext
from wren.lifecycle import init, teardown
from wren.query import merge_query_params, origin_of, preserve_query_in_url
from wren.testing import FakeWindow

CURRENT = "https://x/base?existing=value&another=param&tag=a&tag=b"


class TestPreserveQueryInUrl:
    def test_selected_key(self) -> None:
        result = preserve_query_in_url(
            "https://x/new", ["existing"], current="https://x/base?existing=value&another=param"
        )
        assert result == "https://x/new?existing=value"

    def test_true_copies_everything(self) -> None:
        result = preserve_query_in_url("/new", True, current=CURRENT)
        assert httpx.URL(result).params.multi_items() == [
            ("existing", "value"),
            ("another", "param"),
            ("tag", "a"),
            ("tag", "b"),
        ]

    def test_single_key_string_copies_all_values(self) -> None:
        result = preserve_query_in_url("/new", "tag", current=CURRENT)
        assert result == "https://x/new?tag=a&tag=b"

    def test_false_returns_url_unchanged(self) -> None:
        assert preserve_query_in_url("/new", False, current=CURRENT) == "/new"

    def test_empty_list_returns_url_unchanged(self) -> None:
        assert preserve_query_in_url("/new", [], current=CURRENT) == "/new"

    def test_no_current_query_returns_url_unchanged(self) -> None:
        assert preserve_query_in_url("/new", True, current="https://x/base") == "/new"

    def test_values_accumulate_with_existing(self) -> None:
        result = preserve_query_in_url("/new?tag=own", "tag", current=CURRENT)
        assert httpx.URL(result).params.get_list("tag") == ["own", "a", "b"]

    def test_missing_key_is_ignored(self) -> None:
        result = preserve_query_in_url("/new?x=1", ["absent"], current=CURRENT)
        assert result == "https://x/new?x=1"

    def test_relative_url_resolved_against_origin(self) -> None:
        result = preserve_query_in_url("page", "existing", current="https://x:8080/dir/base?existing=1")
        assert result == "https://x:8080/page?existing=1"

    def test_fragment_kept(self) -> None:
        result = preserve_query_in_url("/new#frag", "existing", current=CURRENT)
        assert result == "https://x/new?existing=value#frag"

    def test_defaults_to_active_location(self) -> None:
        ctx = init(window=FakeWindow("https://app.test/list?page=3"))
        try:
            assert preserve_query_in_url("/next", "page") == "https://app.test/next?page=3"
        finally:
            teardown(ctx)

    def test_without_active_location_and_no_policy(self) -> None:
        assert preserve_query_in_url("/new", False) == "/new"

    def test_without_active_location_raises(self) -> None:
        with pytest.raises(LookupError):
            preserve_query_in_url("/new", True)


class TestMergeQueryParams:
    def test_false_returns_existing(self) -> None:
        existing = httpx.QueryParams("a=1")
        assert merge_query_params(existing, False, current=CURRENT) is existing

    def test_false_with_none(self) -> None:
        assert merge_query_params(None, False, current=CURRENT) is None

    def test_true_without_existing_returns_current_collection(self) -> None:
        current = httpx.URL(CURRENT)
        merged = merge_query_params(None, True, current=current)
        assert merged == current.params

    def test_true_appends_to_existing(self) -> None:
        merged = merge_query_params(httpx.QueryParams("tag=own"), True, current=CURRENT)
        assert merged is not None
        assert merged.get_list("tag") == ["own", "a", "b"]
        assert merged["existing"] == "value"

    def test_list_of_keys(self) -> None:
        merged = merge_query_params(None, ["existing", "tag"], current=CURRENT)
        assert merged is not None
        assert merged.multi_items() == [("existing", "value"), ("tag", "a"), ("tag", "b")]

    def test_existing_is_not_mutated(self) -> None:
        existing = httpx.QueryParams("a=1")
        merge_query_params(existing, "existing", current=CURRENT)
        assert existing.multi_items() == [("a", "1")]

    def test_current_without_query(self) -> None:
        existing = httpx.QueryParams("a=1")
        assert merge_query_params(existing, True, current="https://x/") is existing

    def test_uses_active_location(self, lite: RoutingContext) -> None:
        lite.location.go_to("/base?q=1", replace=True)
        merged = merge_query_params(None, "q")
        assert merged is not None
        assert merged["q"] == "1"


class TestOriginOf:
    def test_default_port_omitted(self) -> None:
        assert origin_of(httpx.URL("https://example.com/a?b")) == "https://example.com"

    def test_explicit_port_kept(self) -> None:
        assert origin_of(httpx.URL("http://localhost:8000/x")) == "http://localhost:8000"
