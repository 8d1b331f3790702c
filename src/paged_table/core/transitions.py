"""Transition rules: pure functions mapping (state, command) -> next state.

Every row-scoped transition touches only the records it names and keeps
the override sets minimal: an override is written only when the base mode
disagrees with the requested membership, and any override pointing the
other way is dropped. Bulk transitions (bulk select, select all, clear)
discard all overrides.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from .page import PageRow
from .queries import is_page_fully_selected, is_selected
from .state import EMPTY_OVERRIDES, Overrides, SelectionMode, SelectionState


def _sync_rows(
    state: SelectionState,
    rows: Iterable[tuple[str, int]],
    selected: bool,
) -> SelectionState:
    """Drive each row to ``selected``, storing only non-redundant overrides.

    Also records every (id, index) pair in the identity cache.
    """
    rows = list(rows)
    o = state.overrides
    inc_ids, inc_idx = set(o.included_ids), set(o.included_indices)
    exc_ids, exc_idx = set(o.excluded_ids), set(o.excluded_indices)

    for record_id, index in rows:
        base = state.base_selects(index)
        if selected:
            exc_ids.discard(record_id)
            exc_idx.discard(index)
            if not base:
                inc_ids.add(record_id)
                inc_idx.add(index)
        else:
            inc_ids.discard(record_id)
            inc_idx.discard(index)
            if base:
                exc_ids.add(record_id)
                exc_idx.add(index)

    mode = state.mode
    # NONE + inclusions is not a meaningful state; hand-built sets are EXPLICIT
    if mode is SelectionMode.NONE and selected and rows:
        mode = SelectionMode.EXPLICIT

    return state.evolve(
        mode=mode,
        overrides=Overrides(
            included_ids=frozenset(inc_ids),
            included_indices=frozenset(inc_idx),
            excluded_ids=frozenset(exc_ids),
            excluded_indices=frozenset(exc_idx),
        ),
        identity=state.identity.observe(rows),
    )


def toggle(state: SelectionState, record_id: str, index: int) -> SelectionState:
    """Flip the selection of a single record."""
    return _sync_rows(
        state, [(record_id, index)], not is_selected(state, record_id, index),
    )


def select_page(state: SelectionState, rows: Sequence[PageRow]) -> SelectionState:
    """Select every row of a page."""
    return _sync_rows(state, rows, True)


def deselect_page(state: SelectionState, rows: Sequence[PageRow]) -> SelectionState:
    """Deselect every row of a page."""
    return _sync_rows(state, rows, False)


def sync_page(
    state: SelectionState,
    rows: Sequence[PageRow],
    selected: bool,
) -> SelectionState:
    """Set every row of a page to a known target membership."""
    return _sync_rows(state, rows, selected)


def toggle_page(state: SelectionState, rows: Sequence[PageRow]) -> SelectionState:
    """Header-checkbox gesture: deselect a fully selected page, else select it."""
    if is_page_fully_selected(state, rows):
        return deselect_page(state, rows)
    return select_page(state, rows)


def bulk_select(state: SelectionState, count: int) -> SelectionState:
    """Select exactly the first ``count`` records, discarding manual overrides.

    ``count`` is clamped to [0, total_records]; 0 clears the selection.
    """
    count = min(max(0, int(count)), state.total_records)
    if count == 0:
        return clear(state)
    return state.evolve(
        mode=SelectionMode.RANGE,
        range_count=count,
        overrides=EMPTY_OVERRIDES,
    )


def select_all(state: SelectionState) -> SelectionState:
    """Select every record in the collection."""
    return state.evolve(
        mode=SelectionMode.ALL,
        range_count=state.total_records,
        overrides=EMPTY_OVERRIDES,
    )


def clear(state: SelectionState) -> SelectionState:
    """Deselect everything. The identity cache is kept."""
    return state.evolve(
        mode=SelectionMode.NONE,
        range_count=0,
        overrides=EMPTY_OVERRIDES,
    )


def update_total(state: SelectionState, new_total: int) -> SelectionState:
    """Record a new collection size reported by the record source.

    A RANGE shrinks with the collection; overrides and the identity cache
    are left alone.
    """
    range_count = state.range_count
    if state.mode is SelectionMode.RANGE:
        range_count = min(range_count, new_total)
    return state.evolve(total_records=new_total, range_count=range_count)


# ---------------------------------------------------------------------------
# Command objects (reducer form)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Toggle:
    record_id: str
    index: int


@dataclass(frozen=True)
class SelectPage:
    rows: tuple[PageRow, ...]


@dataclass(frozen=True)
class DeselectPage:
    rows: tuple[PageRow, ...]


@dataclass(frozen=True)
class TogglePage:
    rows: tuple[PageRow, ...]


@dataclass(frozen=True)
class SyncPage:
    rows: tuple[PageRow, ...]
    selected: bool


@dataclass(frozen=True)
class BulkSelect:
    count: int


@dataclass(frozen=True)
class SelectAll:
    pass


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class UpdateTotal:
    total: int


Command = Union[
    Toggle, SelectPage, DeselectPage, TogglePage, SyncPage,
    BulkSelect, SelectAll, Clear, UpdateTotal,
]


def apply_command(state: SelectionState, command: Command) -> SelectionState:
    """Dispatch a command object to its transition."""
    if isinstance(command, Toggle):
        return toggle(state, command.record_id, command.index)
    if isinstance(command, SelectPage):
        return select_page(state, command.rows)
    if isinstance(command, DeselectPage):
        return deselect_page(state, command.rows)
    if isinstance(command, TogglePage):
        return toggle_page(state, command.rows)
    if isinstance(command, SyncPage):
        return sync_page(state, command.rows, command.selected)
    if isinstance(command, BulkSelect):
        return bulk_select(state, command.count)
    if isinstance(command, SelectAll):
        return select_all(state)
    if isinstance(command, Clear):
        return clear(state)
    if isinstance(command, UpdateTotal):
        return update_total(state, command.total)
    raise TypeError(f"Unknown selection command: {type(command).__name__}")
