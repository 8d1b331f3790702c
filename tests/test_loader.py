"""Tests for PageLoader."""

from unittest import mock

import pytest

from paged_table.config import TableConfig
from paged_table.source.loader import UNEXPECTED_ERROR, PageLoader, PageRequest
from paged_table.source.service import INVALID_RESPONSE_MESSAGE, RecordSourceError

from conftest import FakeFetch, make_api_body


class TestPageRequest:
    def test_cancel(self):
        req = PageRequest(page=0, limit=12)
        assert not req.cancelled
        req.cancel()
        assert req.cancelled


class TestPageLoaderLoad:
    def test_initial_state_is_idle(self, fake_fetch):
        loader = PageLoader(fetch=fake_fetch)
        assert loader.page is None
        assert loader.records == []
        assert not loader.loading
        assert loader.error is None
        assert loader.total_records == 0
        assert fake_fetch.calls == []

    def test_load_first_page(self, fake_fetch):
        loader = PageLoader(fetch=fake_fetch)
        page = loader.load()
        assert fake_fetch.calls == [(1, 12)]
        assert page is loader.page
        assert len(loader.records) == 12
        assert loader.total_records == 100
        assert not loader.loading
        assert loader.error is None

    def test_rows_per_page_from_config(self, fake_fetch):
        loader = PageLoader(fetch=fake_fetch, config=TableConfig(rows_per_page=25))
        loader.load()
        assert fake_fetch.calls == [(1, 25)]

    def test_change_page_reloads_with_one_based_page(self, fake_fetch):
        loader = PageLoader(fetch=fake_fetch)
        loader.load()
        loader.change_page(2)
        assert fake_fetch.calls[-1] == (3, 12)
        assert loader.page.rows()[0].absolute_index == 24

    def test_negative_page_ignored(self, fake_fetch):
        loader = PageLoader(fetch=fake_fetch)
        loader.load()
        loader.change_page(-1)
        assert loader.current_page == 0
        assert len(fake_fetch.calls) == 1

    def test_retry_refetches_current_page(self, fake_fetch):
        loader = PageLoader(fetch=fake_fetch)
        loader.change_page(4)
        loader.retry()
        assert fake_fetch.calls == [(5, 12), (5, 12)]
        assert loader.retry_count == 1

    def test_rows_per_page_change_reloads(self, fake_fetch):
        loader = PageLoader(fetch=fake_fetch)
        loader.rows_per_page = 50
        assert fake_fetch.calls == [(1, 50)]


class TestPageLoaderErrors:
    def test_source_error_message_published(self):
        fetch = mock.Mock(side_effect=RecordSourceError("Rate Limited: slow down", status_code=429))
        loader = PageLoader(fetch=fetch)
        assert loader.load() is None
        assert loader.error == "Rate Limited: slow down"
        assert not loader.loading
        assert loader.records == []
        assert loader.page is None

    def test_unexpected_error_uses_its_message(self):
        loader = PageLoader(fetch=mock.Mock(side_effect=RuntimeError("boom")))
        loader.load()
        assert loader.error == "boom"

    def test_unexpected_error_without_message(self):
        loader = PageLoader(fetch=mock.Mock(side_effect=RuntimeError()))
        loader.load()
        assert loader.error == UNEXPECTED_ERROR

    def test_error_cleared_on_next_success(self):
        fetch = mock.Mock(side_effect=[
            RecordSourceError("Network error: down"),
            make_api_body(1, 12, 30),
        ])
        loader = PageLoader(fetch=fetch)
        loader.load()
        assert loader.error is not None
        loader.retry()
        assert loader.error is None
        assert loader.total_records == 30

    def test_malformed_item_reports_invalid_response(self):
        loader = PageLoader(fetch=lambda page, limit: {
            "data": [{"title": "x"}],
            "pagination": {"total": 1},
        })
        assert loader.load() is None
        assert loader.error == INVALID_RESPONSE_MESSAGE

    def test_null_total_reports_invalid_response(self):
        loader = PageLoader(fetch=lambda page, limit: {
            "data": [],
            "pagination": {"total": None},
        })
        loader.load()
        assert loader.error == INVALID_RESPONSE_MESSAGE
        assert loader.records == []

    def test_total_kept_after_error(self, fake_fetch):
        loader = PageLoader(fetch=fake_fetch)
        loader.load()
        loader._fetch = mock.Mock(side_effect=RecordSourceError("Server Error: down"))
        loader.change_page(1)
        assert loader.error == "Server Error: down"
        assert loader.total_records == 100


class TestPageLoaderCancellation:
    def test_superseded_result_is_dropped(self):
        class NavigatingFetch(FakeFetch):
            """Simulates the user paging away while page 1 is in flight."""

            def __call__(self, api_page, limit):
                body = super().__call__(api_page, limit)
                if len(self.calls) == 1:
                    loader.change_page(3)
                return body

        fetch = NavigatingFetch(total=100)
        loader = PageLoader(fetch=fetch)
        assert loader.load() is None
        assert fetch.calls == [(1, 12), (4, 12)]
        assert loader.current_page == 3
        assert loader.page.page == 3
        assert loader.page.rows()[0].absolute_index == 36

    def test_superseded_error_is_dropped(self):
        def fetch(api_page, limit):
            if api_page == 1:
                loader.change_page(1)
                raise RecordSourceError("Network error: late")
            return make_api_body(api_page, limit, 100)

        loader = PageLoader(fetch=fetch)
        loader.load()
        assert loader.error is None
        assert loader.current_page == 1
        assert loader.page.page == 1


class TestPageLoaderPagination:
    @pytest.mark.parametrize("total,expected", [(0, 0), (1, 1), (12, 1), (13, 2), (100, 9)])
    def test_total_pages(self, total, expected):
        loader = PageLoader(fetch=FakeFetch(total=total))
        loader.load()
        assert loader.total_pages == expected

    def test_has_next_and_prev(self, fake_fetch):
        loader = PageLoader(fetch=fake_fetch)
        loader.load()
        assert loader.has_next_page
        assert not loader.has_prev_page
        loader.change_page(8)
        assert not loader.has_next_page
        assert loader.has_prev_page
