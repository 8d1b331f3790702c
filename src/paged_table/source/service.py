"""HTTP record source for the Art Institute of Chicago artworks API."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import requests

from ..config import DEFAULT_API_URL, DEFAULT_FIELDS
from ..core.validation import MAX_PAGE_SIZE

logger = logging.getLogger(__name__)

_STATUS_MESSAGES = {
    400: "Bad Request: Invalid parameters sent to API",
    404: "Not Found: The requested resource does not exist",
    429: "Rate Limited: Too many requests. Please try again later",
}

_SERVER_ERROR_MESSAGE = (
    "Server Error: The Art Institute of Chicago API is temporarily unavailable"
)

INVALID_RESPONSE_MESSAGE = (
    "Invalid Response: API response does not match expected format"
)


class RecordSourceError(Exception):
    """A page request failed.

    Attributes
    ----------
    status_code : int or None
        HTTP status for 4xx/5xx responses, None otherwise.
    cause : BaseException or None
        Underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause

    @property
    def is_http_error(self) -> bool:
        return self.status_code is not None


def _status_error(response: requests.Response) -> RecordSourceError:
    status = response.status_code
    if status in _STATUS_MESSAGES:
        message = _STATUS_MESSAGES[status]
    elif 500 <= status < 600:
        message = _SERVER_ERROR_MESSAGE
    else:
        message = f"API Error: {status} {response.reason or 'Unknown error'}"
    return RecordSourceError(message, status_code=status)


def fetch_records(
    page: int,
    limit: int,
    *,
    base_url: str = DEFAULT_API_URL,
    fields: Sequence[str] = DEFAULT_FIELDS,
    timeout: float = 10.0,
    session: requests.Session | None = None,
) -> dict[str, Any]:
    """Fetch one page of records.

    Parameters
    ----------
    page : int
        1-based page number, as the API expects.
    limit : int
        Records per page, 1..100.
    session : requests.Session, optional
        Reused connection pool; a module-level ``requests.get`` is used
        otherwise.

    Returns the parsed JSON body, guaranteed to hold ``data`` and
    ``pagination`` keys. Raises RecordSourceError on any failure.
    """
    if page < 1:
        raise RecordSourceError("Page number must be at least 1")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise RecordSourceError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")

    params = {"page": page, "limit": limit, "fields": ",".join(fields)}
    getter = session.get if session is not None else requests.get
    logger.debug("GET %s page=%d limit=%d", base_url, page, limit)

    try:
        response = getter(base_url, params=params, timeout=timeout)
    except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
        raise RecordSourceError(
            "Network error: Unable to connect to the Art Institute of Chicago API",
            cause=e,
        ) from e
    except requests.exceptions.RequestException as e:
        raise RecordSourceError(f"Request Error: {e}", cause=e) from e

    if not response.ok:
        raise _status_error(response)

    try:
        data = response.json()
    except ValueError as e:
        raise RecordSourceError(
            "Parse Error: Failed to parse API response as JSON", cause=e,
        ) from e

    if (
        not isinstance(data, dict)
        or not isinstance(data.get("data"), list)
        or not isinstance(data.get("pagination"), dict)
        or "total" not in data["pagination"]
    ):
        raise RecordSourceError(INVALID_RESPONSE_MESSAGE)

    return data
