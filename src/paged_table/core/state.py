"""SelectionState: compact selection over a virtual record collection.

A selection is a base mode (NONE / EXPLICIT / RANGE / ALL) plus four
override sets that record deviations from that mode. Memory is proportional
to the number of records the user actually touched, never to the size of
the collection.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from .identity import IdentityCache


class SelectionMode(str, Enum):
    """Base selection mode."""

    NONE = "NONE"          # nothing selected
    EXPLICIT = "EXPLICIT"  # only what the included overrides add
    RANGE = "RANGE"        # the first range_count records
    ALL = "ALL"            # every record


@dataclass(frozen=True)
class Overrides:
    """Per-record deviations from the base mode.

    Invariants: a record never sits in an included and an excluded set at
    the same time, and an override is only stored when the base mode
    disagrees with it.
    """

    included_ids: frozenset[str] = frozenset()
    included_indices: frozenset[int] = frozenset()
    excluded_ids: frozenset[str] = frozenset()
    excluded_indices: frozenset[int] = frozenset()

    @property
    def is_empty(self) -> bool:
        return not (
            self.included_ids or self.included_indices
            or self.excluded_ids or self.excluded_indices
        )


EMPTY_OVERRIDES = Overrides()


@dataclass(frozen=True)
class SelectionState:
    """Immutable selection state.

    Attributes
    ----------
    mode : SelectionMode
    range_count : int
        Parameter of RANGE (and the total at the time of ALL); 0 otherwise.
    total_records : int
        Size of the collection as last reported by the record source.
    overrides : Overrides
    identity : IdentityCache
    """

    mode: SelectionMode = SelectionMode.NONE
    range_count: int = 0
    total_records: int = 0
    overrides: Overrides = EMPTY_OVERRIDES
    identity: IdentityCache = field(default_factory=IdentityCache)

    def base_selects(self, index: int) -> bool:
        """Whether the base mode alone selects the record at ``index``."""
        if self.mode is SelectionMode.ALL:
            return True
        if self.mode is SelectionMode.RANGE:
            return index < self.range_count
        return False

    def evolve(self, **changes) -> SelectionState:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def __repr__(self) -> str:
        o = self.overrides
        return (
            f"SelectionState(mode={self.mode.value}, range={self.range_count}, "
            f"total={self.total_records}, "
            f"+{len(o.included_ids)}ids/{len(o.included_indices)}idx, "
            f"-{len(o.excluded_ids)}ids/{len(o.excluded_indices)}idx)"
        )


def create_initial_state(total_records: int = 0) -> SelectionState:
    """Fresh state: mode NONE, no overrides, nothing observed."""
    return SelectionState(total_records=total_records)
