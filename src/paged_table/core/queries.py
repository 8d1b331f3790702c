"""Query functions over SelectionState.

None of these enumerate the collection: membership is O(1) and the
aggregate count is O(number of overrides).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, TypeVar

from .descriptor import SelectionDescriptor, to_descriptor
from .page import PageRow
from .state import SelectionMode, SelectionState

RowT = TypeVar("RowT", bound=PageRow)


def is_selected(state: SelectionState, record_id: str, index: int) -> bool:
    """Whether one record is selected.

    Precedence: excluded IDs, included IDs, excluded indices, included
    indices, then the base mode. IDs win over indices because they are the
    stable identity; indices only stand in for records whose ID has not
    been tied to a position yet.
    """
    o = state.overrides
    if record_id in o.excluded_ids:
        return False
    if record_id in o.included_ids:
        return True
    if index in o.excluded_indices:
        return False
    if index in o.included_indices:
        return True
    return state.base_selects(index)


def _override_records(
    state: SelectionState,
    ids: Iterable[str],
    indices: Iterable[int],
) -> tuple[set[int], int]:
    """Deduplicate ID- and index-keyed overrides into distinct records.

    Returns ``(indices, n_unknown)``: the set of in-bounds indices covered by
    either key, and the number of IDs whose index was never observed.
    """
    known, n_unknown = state.identity.resolve(ids)
    known.update(indices)
    total = state.total_records
    return {i for i in known if 0 <= i < total}, n_unknown


def selected_count(state: SelectionState) -> int:
    """Number of selected records, in [0, total_records].

    For NONE / EXPLICIT this is the number of distinct included records.
    For RANGE / ALL it is the base count, minus excluded records the base
    mode would have selected, plus included records outside the base range.
    An ID that was never seen at a known index counts as exactly one record.
    """
    total = state.total_records
    o = state.overrides

    if state.mode in (SelectionMode.NONE, SelectionMode.EXPLICIT):
        included, n_unknown = _override_records(
            state, o.included_ids, o.included_indices,
        )
        count = len(included) + n_unknown
    else:
        if state.mode is SelectionMode.ALL:
            base = total
        else:
            base = min(state.range_count, total)

        excluded, n_unknown_excluded = _override_records(
            state, o.excluded_ids, o.excluded_indices,
        )
        removed = sum(1 for i in excluded if state.base_selects(i))
        removed += n_unknown_excluded

        included, n_unknown_included = _override_records(
            state, o.included_ids, o.included_indices,
        )
        added = sum(1 for i in included if not state.base_selects(i))
        added += n_unknown_included

        count = base - removed + added

    return max(0, min(count, total))


def is_page_fully_selected(state: SelectionState, rows: Sequence[PageRow]) -> bool:
    """True for a non-empty page where every row is selected."""
    if not rows:
        return False
    return all(is_selected(state, rid, idx) for rid, idx in rows)


def is_page_indeterminate(state: SelectionState, rows: Sequence[PageRow]) -> bool:
    """True for a non-empty page with at least one selected and one unselected row."""
    if not rows:
        return False
    flags = [is_selected(state, rid, idx) for rid, idx in rows]
    return any(flags) and not all(flags)


def selected_rows_on_page(state: SelectionState, rows: Sequence[RowT]) -> list[RowT]:
    """Rows of the given page that are currently selected, in page order."""
    return [row for row in rows if is_selected(state, row[0], row[1])]


@dataclass(frozen=True)
class SelectionSummary:
    """Aggregate view of a selection for headers and status lines."""

    selected_count: int
    total_records: int
    is_all_selected: bool
    is_indeterminate: bool
    is_empty: bool
    descriptor: SelectionDescriptor

    def label(self) -> str:
        """Human-readable status, e.g. ``'12 of 1,000 selected'``."""
        if self.is_empty:
            return "No records selected"
        if self.is_all_selected:
            return f"All {self.total_records:,} records selected"
        return f"{self.selected_count:,} of {self.total_records:,} selected"


def selection_summary(state: SelectionState) -> SelectionSummary:
    """Build the summary shown next to the table header."""
    count = selected_count(state)
    is_all = state.total_records > 0 and count == state.total_records
    is_empty = count == 0
    return SelectionSummary(
        selected_count=count,
        total_records=state.total_records,
        is_all_selected=is_all,
        is_indeterminate=not is_empty and not is_all,
        is_empty=is_empty,
        descriptor=to_descriptor(state),
    )
