"""Input validation with clear error messages for callers of the engine.

The selection engine itself never rejects input (bulk counts are clamped).
These checks guard the caller-side seams: page addressing and totals
reported by a record source.
"""

from __future__ import annotations

from typing import Any

MAX_PAGE_SIZE = 100


def _require_int(value: Any, name: str) -> int:
    # bool is an int subclass, but True is never a meaningful page size
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            f"{name} must be an integer, got {type(value).__name__}."
        )
    return value


def validate_page_size(page_size: Any) -> int:
    """Validate a page size in [1, MAX_PAGE_SIZE]."""
    page_size = _require_int(page_size, "page_size")
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValueError(
            f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}."
        )
    return page_size


def validate_page_index(page: Any) -> int:
    """Validate a 0-based page index."""
    page = _require_int(page, "page")
    if page < 0:
        raise ValueError(f"page must be >= 0 (pages are 0-based), got {page}.")
    return page


def validate_total(total: Any) -> int:
    """Validate a total record count reported by a record source."""
    total = _require_int(total, "total_records")
    if total < 0:
        raise ValueError(f"total_records cannot be negative, got {total}.")
    return total


def validate_record_ids(record_ids: list) -> list[str]:
    """Validate that the IDs of one page are unique and non-empty.

    Returns the IDs as strings.
    """
    ids = [str(rid) for rid in record_ids]
    if any(rid == "" for rid in ids):
        raise ValueError("Record IDs cannot be empty strings.")
    if len(set(ids)) != len(ids):
        seen: set[str] = set()
        dupes = []
        for rid in ids:
            if rid in seen and rid not in dupes:
                dupes.append(rid)
            seen.add(rid)
        raise ValueError(
            f"Record IDs on a page must be unique. Found duplicates: {dupes[:5]}"
            + (f" (and {len(dupes) - 5} more)" if len(dupes) > 5 else "")
        )
    return ids
