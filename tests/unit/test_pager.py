"""Tests for draining paginated list APIs."""

from unittest.mock import Mock, call

import pytest

from awssearch.pager import Page, drain, token_page_fetcher


@pytest.mark.unit
class TestDrain:
    def test_single_page_without_continuation(self):
        fetch = Mock(return_value=Page(["a", "b"], None))

        assert drain(fetch) == ["a", "b"]
        fetch.assert_called_once_with(None)

    def test_n_pages_of_m_items_in_order(self):
        pages = [Page([f"{p}-{i}" for i in range(3)], f"token-{p}") for p in range(3)]
        pages.append(Page(["3-0", "3-1", "3-2"], None))
        fetch = Mock(side_effect=pages)

        result = drain(fetch)

        assert len(result) == 12
        assert result[:4] == ["0-0", "0-1", "0-2", "1-0"]
        assert result[-1] == "3-2"

    def test_passes_previous_token_to_next_call(self):
        fetch = Mock(side_effect=[Page([1], "t1"), Page([2], "t2"), Page([3], None)])

        drain(fetch)

        assert fetch.call_args_list == [call(None), call("t1"), call("t2")]

    def test_empty_page_with_token_does_not_stop(self):
        fetch = Mock(side_effect=[Page([], "t1"), Page([], "t2"), Page(["x"], None)])

        assert drain(fetch) == ["x"]
        assert fetch.call_count == 3

    def test_duplicates_are_kept(self):
        fetch = Mock(side_effect=[Page(["a", "b"], "t1"), Page(["b"], None)])

        assert drain(fetch) == ["a", "b", "b"]

    def test_failure_aborts_drain(self):
        fetch = Mock(side_effect=[Page(["a"], "t1"), RuntimeError("boom")])

        with pytest.raises(RuntimeError, match="boom"):
            drain(fetch)


@pytest.mark.unit
class TestTokenPageFetcher:
    def test_first_call_sends_no_token(self):
        operation = Mock(return_value={"Items": [1, 2], "NextToken": "abc"})
        fetch = token_page_fetcher(operation, "Items", Extra="x")

        page = fetch(None)

        operation.assert_called_once_with(Extra="x")
        assert page == Page([1, 2], "abc")

    def test_custom_token_names(self):
        operation = Mock(return_value={"TargetGroups": [], "NextMarker": None})
        fetch = token_page_fetcher(
            operation, "TargetGroups", request_token="Marker", response_token="NextMarker"
        )

        page = fetch("m1")

        operation.assert_called_once_with(Marker="m1")
        assert page.items == []
        assert page.continuation is None

    def test_missing_items_key_yields_empty_page(self):
        fetch = token_page_fetcher(Mock(return_value={}), "Reservations")

        assert fetch(None) == Page([], None)
