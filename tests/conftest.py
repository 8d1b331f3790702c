"""Shared test fixtures for paged-table."""

import pytest

from paged_table.core.page import page_rows
from paged_table.core.state import create_initial_state


def make_api_body(page, limit, total, id_start=None):
    """Fake artworks API response for a 1-based page."""
    first = (page - 1) * limit if id_start is None else id_start
    n = max(0, min(limit, total - (page - 1) * limit))
    return {
        "pagination": {
            "total": total,
            "limit": limit,
            "offset": (page - 1) * limit,
            "total_pages": (total + limit - 1) // limit,
            "current_page": page,
        },
        "data": [
            {
                "id": first + i,
                "title": f"Artwork {first + i}",
                "place_of_origin": "France",
                "artist_titles": ["Claude Monet"],
                "inscriptions": None,
                "date_start": 1890,
                "date_end": None,
            }
            for i in range(n)
        ],
    }


class FakeFetch:
    """Records calls and serves pages from make_api_body."""

    def __init__(self, total=100):
        self.total = total
        self.calls = []

    def __call__(self, api_page, limit):
        self.calls.append((api_page, limit))
        return make_api_body(api_page, limit, self.total)


@pytest.fixture
def state_1000():
    """Fresh state over a 1000-record collection."""
    return create_initial_state(1000)


@pytest.fixture
def first_page_rows():
    """12 rows of page 0 with IDs 'r0'..'r11'."""
    return page_rows([f"r{i}" for i in range(12)], page=0, page_size=12)


@pytest.fixture
def second_page_rows():
    """12 rows of page 1 with IDs 'r12'..'r23'."""
    return page_rows([f"r{i}" for i in range(12, 24)], page=1, page_size=12)


@pytest.fixture
def fake_fetch():
    return FakeFetch(total=100)
