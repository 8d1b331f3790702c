"""PageLoader: fetch-layer state machine for one paginated collection.

Owns ``{records, loading, error, total_records, current_page}``. The
selection engine never sees this object; only ``total_records`` crosses
over (see ``dashboard.state.TableState``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

import param
import requests

from ..config import TableConfig
from ..core.validation import MAX_PAGE_SIZE
from .records import RecordPage
from .service import RecordSourceError, fetch_records

logger = logging.getLogger(__name__)

# fetch(api_page, limit) -> API response body; api_page is 1-based
FetchFn = Callable[[int, int], dict[str, Any]]

UNEXPECTED_ERROR = "An unexpected error occurred while fetching records"


@dataclass
class PageRequest:
    """One in-flight page request with its cancellation flag."""

    page: int
    limit: int
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class PageLoader(param.Parameterized):
    """Loads pages on navigation and retry, dropping superseded results.

    Every load cancels the request before it. A cancelled request's result
    or error is discarded, so a slow response for a page the user already
    left can never overwrite the state of the page they are on.
    """

    page = param.Parameter(default=None, allow_None=True, doc="Last RecordPage")
    records = param.List(default=[])
    loading = param.Boolean(default=False)
    error = param.String(default=None, allow_None=True)
    total_records = param.Integer(default=0, bounds=(0, None))
    current_page = param.Integer(default=0, bounds=(0, None), doc="0-based")
    rows_per_page = param.Integer(default=12, bounds=(1, MAX_PAGE_SIZE))
    retry_count = param.Integer(default=0, bounds=(0, None))

    def __init__(
        self,
        fetch: FetchFn | None = None,
        config: TableConfig | None = None,
        **params,
    ) -> None:
        config = config if config is not None else TableConfig()
        params.setdefault("rows_per_page", config.rows_per_page)
        super().__init__(**params)
        self._config = config
        self._session: requests.Session | None = None
        self._fetch: FetchFn = fetch if fetch is not None else self._fetch_from_api
        self._active: PageRequest | None = None

    def _fetch_from_api(self, api_page: int, limit: int) -> dict[str, Any]:
        if self._session is None:
            self._session = requests.Session()
        return fetch_records(
            api_page,
            limit,
            base_url=self._config.api_url,
            fields=self._config.fields,
            timeout=self._config.timeout,
            session=self._session,
        )

    @property
    def total_pages(self) -> int:
        if self.total_records == 0:
            return 0
        return (self.total_records + self.rows_per_page - 1) // self.rows_per_page

    @property
    def has_next_page(self) -> bool:
        return self.current_page + 1 < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 0

    def change_page(self, new_page: int) -> None:
        """Navigate to a 0-based page. Negative pages are ignored."""
        if new_page < 0:
            return
        self.current_page = new_page

    def retry(self) -> None:
        """Re-issue the current page request."""
        self.retry_count += 1

    @param.depends("current_page", "rows_per_page", "retry_count", watch=True)
    def _reload(self) -> None:
        self.load()

    def load(self) -> RecordPage | None:
        """Fetch the current page and publish it.

        Returns the loaded page, or None when the request failed or was
        superseded while in flight.
        """
        if self._active is not None:
            self._active.cancel()
        request = PageRequest(page=self.current_page, limit=self.rows_per_page)
        self._active = request
        self.param.update(loading=True, error=None)
        logger.debug("Loading page %d (limit %d)", request.page, request.limit)

        try:
            body = self._fetch(request.page + 1, request.limit)
            page = RecordPage.from_api_response(body, request.page, request.limit)
        except RecordSourceError as e:
            message = str(e)
        except Exception as e:
            logger.exception("Unexpected failure loading page %d", request.page)
            message = str(e) or UNEXPECTED_ERROR
        else:
            if request.cancelled:
                logger.debug("Dropping stale result for page %d", request.page)
                return None
            self.param.update(
                page=page,
                records=list(page.records),
                total_records=page.total_records,
                loading=False,
            )
            return page

        if request.cancelled:
            logger.debug("Dropping stale error for page %d: %s", request.page, message)
            return None
        logger.warning("Failed to load page %d: %s", request.page, message)
        self.param.update(page=None, records=[], error=message, loading=False)
        return None
