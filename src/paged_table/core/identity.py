"""IdentityCache: correspondence between record IDs and absolute indices.

Selection overrides are keyed both by record ID (stable identity) and by
absolute index (position in collection order). Bulk operations speak only in
indices, row toggles speak in IDs, so the two coordinates of a record are
tied together here the first time a command observes them side by side.

Immutable: each observation returns a new IdentityCache.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping


@dataclass(frozen=True)
class IdentityCache:
    """Maps absolute index -> record ID and record ID -> absolute index.

    Append-only: pairs are never removed, so a mapping can go stale if the
    collection is reordered while a selection is live. Callers that reorder
    must clear the selection.
    """

    _index_to_id: Mapping[int, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    _id_to_index: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __len__(self) -> int:
        return len(self._id_to_index)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._id_to_index

    def index_of(self, record_id: str) -> int | None:
        """Return the last observed index of a record ID, or None."""
        return self._id_to_index.get(record_id)

    def id_at(self, index: int) -> str | None:
        """Return the last record ID observed at an index, or None."""
        return self._index_to_id.get(index)

    def observe(self, pairs: Iterable[tuple[str, int]]) -> IdentityCache:
        """Return a new cache with the given (id, index) pairs recorded.

        Later pairs win when the same ID or index appears twice.
        """
        index_to_id = dict(self._index_to_id)
        id_to_index = dict(self._id_to_index)
        for record_id, index in pairs:
            index_to_id[index] = record_id
            id_to_index[record_id] = index
        return IdentityCache(
            _index_to_id=MappingProxyType(index_to_id),
            _id_to_index=MappingProxyType(id_to_index),
        )

    def resolve(self, record_ids: Iterable[str]) -> tuple[set[int], int]:
        """Split record IDs into their known indices and a count of unknowns.

        Returns ``(indices, n_unknown)`` where ``indices`` holds the cached
        index of every ID that has one, and ``n_unknown`` counts IDs that were
        never observed at an index.
        """
        indices: set[int] = set()
        n_unknown = 0
        for record_id in record_ids:
            index = self._id_to_index.get(record_id)
            if index is None:
                n_unknown += 1
            else:
                indices.add(index)
        return indices, n_unknown
