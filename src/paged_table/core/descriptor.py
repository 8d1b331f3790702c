"""SelectionDescriptor: minimal wire form of a selection.

This is what a bulk-operation backend receives ("apply action to this
selection") instead of an exhaustive ID list. Only the fields that mean
something for the mode are emitted; an absent field means "no override of
that kind".

Wire shape (JSON)::

    {"mode": "RANGE" | "ALL" | "EXPLICIT" | "NONE",
     "rangeCount": int,            # RANGE only
     "includedIds": [str, ...],    # EXPLICIT always, RANGE when non-empty
     "excludedIds": [str, ...],    # RANGE / ALL when non-empty
     "excludedIndices": [int, ...]}  # RANGE when non-empty

RANGE also carries ``includedIds`` when records past the range were added
by hand. A backend that only applied ``rangeCount`` and the exclusions would
miss those records, so the field is part of the RANGE shape on purpose:
count and membership computed from the descriptor match the engine.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Iterable

from .identity import IdentityCache
from .state import SelectionMode, SelectionState

_WIRE_KEYS = {
    "range_count": "rangeCount",
    "included_ids": "includedIds",
    "excluded_ids": "excludedIds",
    "excluded_indices": "excludedIndices",
}


@dataclass(frozen=True)
class SelectionDescriptor:
    """Immutable projection of a SelectionState for transfer."""

    mode: SelectionMode
    range_count: int | None = None
    included_ids: tuple[str, ...] | None = None
    excluded_ids: tuple[str, ...] | None = None
    excluded_indices: tuple[int, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire dict, omitting absent fields."""
        out: dict[str, Any] = {"mode": self.mode.value}
        for attr, key in _WIRE_KEYS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            out[key] = list(value) if isinstance(value, tuple) else value
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SelectionDescriptor:
        """Parse a wire dict back into a descriptor.

        Raises ValueError for an unknown mode or a malformed field.
        """
        if not isinstance(data, dict) or "mode" not in data:
            raise ValueError("Selection descriptor must be a dict with a 'mode' key.")
        try:
            mode = SelectionMode(data["mode"])
        except ValueError:
            valid = [m.value for m in SelectionMode]
            raise ValueError(
                f"Unknown selection mode {data['mode']!r}. Expected one of {valid}."
            ) from None

        range_count = data.get("rangeCount")
        if range_count is not None and (
            isinstance(range_count, bool) or not isinstance(range_count, int)
            or range_count < 0
        ):
            raise ValueError(f"rangeCount must be a non-negative integer, got {range_count!r}.")

        def _ids(key: str) -> tuple[str, ...] | None:
            value = data.get(key)
            if value is None:
                return None
            if not isinstance(value, list):
                raise ValueError(f"{key} must be a list, got {type(value).__name__}.")
            return tuple(str(v) for v in value)

        excluded_indices = data.get("excludedIndices")
        if excluded_indices is not None:
            if not isinstance(excluded_indices, list) or not all(
                isinstance(i, int) and not isinstance(i, bool) for i in excluded_indices
            ):
                raise ValueError("excludedIndices must be a list of integers.")
            excluded_indices = tuple(excluded_indices)

        return cls(
            mode=mode,
            range_count=range_count,
            included_ids=_ids("includedIds"),
            excluded_ids=_ids("excludedIds"),
            excluded_indices=excluded_indices,
        )

    @classmethod
    def from_json(cls, text: str) -> SelectionDescriptor:
        return cls.from_dict(json.loads(text))

    def selects(self, record_id: str, index: int) -> bool:
        """Evaluate membership from the descriptor alone.

        This is what a backend does with the wire form; it must agree with
        ``is_selected`` on the originating state for every record the state
        has observed.
        """
        if self.mode is SelectionMode.NONE:
            return False
        if self.mode is SelectionMode.EXPLICIT:
            return record_id in (self.included_ids or ())
        if record_id in (self.excluded_ids or ()):
            return False
        if self.mode is SelectionMode.ALL:
            return True
        if record_id in (self.included_ids or ()):
            return True
        if index in (self.excluded_indices or ()):
            return False
        return index < (self.range_count or 0)


def _ordered_ids(ids: Iterable[str], identity: IdentityCache) -> tuple[str, ...]:
    """Order IDs by observed collection position, unknown positions last."""
    def key(record_id: str) -> tuple[float, str]:
        index = identity.index_of(record_id)
        return (math.inf if index is None else index, record_id)
    return tuple(sorted(ids, key=key))


def to_descriptor(state: SelectionState) -> SelectionDescriptor:
    """Project a SelectionState onto its minimal descriptor."""
    o = state.overrides
    mode = state.mode

    if mode is SelectionMode.RANGE:
        return SelectionDescriptor(
            mode=mode,
            range_count=state.range_count,
            included_ids=_ordered_ids(o.included_ids, state.identity) or None,
            excluded_ids=_ordered_ids(o.excluded_ids, state.identity) or None,
            excluded_indices=tuple(sorted(o.excluded_indices)) or None,
        )
    if mode is SelectionMode.ALL:
        return SelectionDescriptor(
            mode=mode,
            excluded_ids=_ordered_ids(o.excluded_ids, state.identity) or None,
        )
    if mode is SelectionMode.EXPLICIT:
        return SelectionDescriptor(
            mode=mode,
            included_ids=_ordered_ids(o.included_ids, state.identity),
        )
    return SelectionDescriptor(mode=SelectionMode.NONE)
