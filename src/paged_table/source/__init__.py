"""Record source: fetches pages of records and tracks fetch state."""

from .records import Record, RecordPage
from .service import RecordSourceError, fetch_records
from .loader import PageLoader, PageRequest

__all__ = [
    "Record",
    "RecordPage",
    "RecordSourceError",
    "fetch_records",
    "PageLoader",
    "PageRequest",
]
