"""PageRow: one rendered record, addressed by ID and absolute index."""

from __future__ import annotations

from typing import Iterable, NamedTuple

from .validation import (
    validate_page_index,
    validate_page_size,
    validate_record_ids,
)


class PageRow(NamedTuple):
    """A record on the current page.

    ``absolute_index`` is the record's position in the whole collection,
    i.e. ``page * page_size + local_index``.
    """

    id: str
    absolute_index: int


def page_offset(page: int, page_size: int) -> int:
    """Absolute index of the first record on a 0-based page."""
    validate_page_index(page)
    validate_page_size(page_size)
    return page * page_size


def page_rows(record_ids: Iterable[str], page: int, page_size: int) -> list[PageRow]:
    """Attach absolute indices to the IDs of one page, in display order."""
    offset = page_offset(page, page_size)
    ids = validate_record_ids(list(record_ids))
    rows = [PageRow(rid, offset + i) for i, rid in enumerate(ids)]
    if len(rows) > page_size:
        raise ValueError(
            f"Page holds {len(rows)} records but page_size is {page_size}."
        )
    return rows
