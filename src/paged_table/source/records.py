"""Record and RecordPage: typed views over one page of API data."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any

import pandas as pd

from ..core.page import PageRow, page_rows
from ..core.validation import validate_total
from .service import INVALID_RESPONSE_MESSAGE, RecordSourceError

PLACEHOLDER = "—"  # em dash for missing values

DISPLAY_COLUMNS = [
    "title",
    "place_of_origin",
    "artist_display",
    "inscriptions",
    "date_start",
    "date_end",
]


@dataclass(frozen=True)
class Record:
    """One artwork record, with display defaults applied."""

    id: str
    title: str
    place_of_origin: str
    artists: tuple[str, ...]
    artist_display: str
    inscriptions: str
    date_start: str
    date_end: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Record:
        """Build a Record from one item of the API ``data`` array."""
        artists = tuple(data.get("artist_titles") or ())
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "Untitled",
            place_of_origin=data.get("place_of_origin") or "Unknown",
            artists=artists,
            artist_display=", ".join(artists) if artists else "Unknown Artist",
            inscriptions=data.get("inscriptions") or PLACEHOLDER,
            date_start=_format_year(data.get("date_start")),
            date_end=_format_year(data.get("date_end")),
        )


def _format_year(value: Any) -> str:
    return PLACEHOLDER if value is None else str(value)


@dataclass(frozen=True)
class RecordPage:
    """One page of records plus the collection total.

    ``page`` is 0-based; the selection engine only consumes ``ids`` and
    the page offset.
    """

    records: tuple[Record, ...]
    total_records: int
    page: int
    page_size: int

    def __len__(self) -> int:
        return len(self.records)

    @property
    def ids(self) -> list[str]:
        return [r.id for r in self.records]

    def rows(self) -> list[PageRow]:
        """Engine rows (ID + absolute index) for this page."""
        return page_rows(self.ids, self.page, self.page_size)

    def to_frame(self) -> pd.DataFrame:
        """Display table indexed by record ID."""
        if not self.records:
            return pd.DataFrame(columns=DISPLAY_COLUMNS, index=pd.Index([], name="id"))
        df = pd.DataFrame([asdict(r) for r in self.records]).set_index("id")
        return df[DISPLAY_COLUMNS]

    @classmethod
    def from_api_response(
        cls,
        response: dict[str, Any],
        page: int,
        page_size: int,
    ) -> RecordPage:
        """Build a page from an API response body.

        Raises RecordSourceError when an item or the total is malformed.
        """
        try:
            records = tuple(Record.from_api(item) for item in response["data"])
            total = validate_total(int(response["pagination"]["total"]))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise RecordSourceError(INVALID_RESPONSE_MESSAGE, cause=e) from e
        return cls(records=records, total_records=total, page=page, page_size=page_size)
