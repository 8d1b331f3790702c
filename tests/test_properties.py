"""Property checks over scripted and seeded-random command sequences.

A 40-record collection is small enough to brute-force: record ``r{i}``
always sits at index ``i``, so every engine answer can be checked against
a full scan.
"""

import random

import pytest

from paged_table.core.descriptor import to_descriptor
from paged_table.core.page import page_rows
from paged_table.core.queries import is_selected, selected_count
from paged_table.core.state import SelectionMode, create_initial_state
from paged_table.core.transitions import (
    BulkSelect,
    Clear,
    DeselectPage,
    SelectAll,
    SelectPage,
    SyncPage,
    Toggle,
    TogglePage,
    UpdateTotal,
    apply_command,
    bulk_select,
    toggle,
)

N = 40
PAGE_SIZE = 8


def _rows(page, total=N):
    ids = [f"r{i}" for i in range(page * PAGE_SIZE, min((page + 1) * PAGE_SIZE, total))]
    return tuple(page_rows(ids, page, PAGE_SIZE))


def _random_command(rng, total, with_total_changes):
    n_pages = max(1, (total + PAGE_SIZE - 1) // PAGE_SIZE)
    kind = rng.choice(
        ["toggle"] * 6 + ["select_page", "deselect_page", "sync_page", "toggle_page",
                          "bulk", "all", "clear"]
        + (["total"] if with_total_changes else [])
    )
    if kind == "toggle":
        if total == 0:
            return Clear()
        i = rng.randrange(total)
        return Toggle(f"r{i}", i)
    page = rng.randrange(n_pages)
    if kind == "select_page":
        return SelectPage(_rows(page, total))
    if kind == "deselect_page":
        return DeselectPage(_rows(page, total))
    if kind == "sync_page":
        return SyncPage(_rows(page, total), rng.random() < 0.5)
    if kind == "toggle_page":
        return TogglePage(_rows(page, total))
    if kind == "bulk":
        return BulkSelect(rng.randint(-5, N + 10))
    if kind == "all":
        return SelectAll()
    if kind == "clear":
        return Clear()
    return UpdateTotal(rng.randint(0, N))


def _walk(seed, steps=60, with_total_changes=False):
    """Yield (state, command) pairs along one random command sequence."""
    rng = random.Random(seed)
    state = create_initial_state(N)
    for _ in range(steps):
        command = _random_command(rng, state.total_records, with_total_changes)
        yield state, command
        state = apply_command(state, command)


def _brute_force_count(state):
    return sum(is_selected(state, f"r{i}", i) for i in range(state.total_records))


def _assert_minimal(state):
    o = state.overrides
    for index in o.included_indices:
        assert not state.base_selects(index)
    for index in o.excluded_indices:
        assert state.base_selects(index)
    for record_id in o.included_ids:
        assert not state.base_selects(state.identity.index_of(record_id))
    for record_id in o.excluded_ids:
        assert state.base_selects(state.identity.index_of(record_id))
    assert not (o.included_ids & o.excluded_ids)
    assert not (o.included_indices & o.excluded_indices)
    if state.mode is SelectionMode.NONE:
        assert o.is_empty
    if state.mode is SelectionMode.ALL:
        assert not o.included_ids and not o.included_indices


SEEDS = range(12)


class TestModeMonotonicity:
    def test_none_never_returns_without_reset(self):
        for seed in SEEDS:
            for state, command in _walk(seed):
                nxt = apply_command(state, command)
                if state.mode is not SelectionMode.NONE and nxt.mode is SelectionMode.NONE:
                    assert isinstance(command, (Clear, BulkSelect))

    def test_single_inclusion_from_none(self, state_1000):
        s = toggle(state_1000, "a", 3)
        assert s.mode is SelectionMode.EXPLICIT
        s = toggle(s, "a", 3)
        assert s.mode is SelectionMode.EXPLICIT


class TestMinimality:
    def test_overrides_stay_minimal(self):
        for seed in SEEDS:
            for state, command in _walk(seed):
                _assert_minimal(apply_command(state, command))


class TestDoubleToggle:
    def test_double_toggle_restores_record_and_overrides(self):
        for seed in SEEDS:
            rng = random.Random(1000 + seed)
            for state, _ in _walk(seed):
                i = rng.randrange(N)
                twice = toggle(toggle(state, f"r{i}", i), f"r{i}", i)
                assert is_selected(twice, f"r{i}", i) == is_selected(state, f"r{i}", i)
                assert twice.overrides == state.overrides


class TestCountBounds:
    def test_count_matches_full_scan(self):
        for seed in SEEDS:
            for state, command in _walk(seed, with_total_changes=True):
                nxt = apply_command(state, command)
                count = selected_count(nxt)
                assert 0 <= count <= nxt.total_records
                assert count == _brute_force_count(nxt), (seed, command)


class TestRangeClamp:
    def test_count_above_total(self):
        s = bulk_select(create_initial_state(N), N * 3)
        assert selected_count(s) == N

    def test_zero_is_none(self):
        s = bulk_select(toggle(create_initial_state(N), "r1", 1), 0)
        assert s.mode is SelectionMode.NONE

    @pytest.mark.parametrize("count", [1, 7, N - 1, N])
    def test_exact_counts(self, count):
        assert selected_count(bulk_select(create_initial_state(N), count)) == count


class TestDescriptorRoundTrip:
    def test_descriptor_agrees_with_engine(self):
        for seed in SEEDS:
            for state, command in _walk(seed):
                nxt = apply_command(state, command)
                descriptor = to_descriptor(nxt)
                for i in range(N):
                    assert descriptor.selects(f"r{i}", i) == is_selected(nxt, f"r{i}", i)
