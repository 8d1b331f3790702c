"""TableConfig: record-source and display settings."""

from __future__ import annotations

import logging
import os

import param

from .core.validation import MAX_PAGE_SIZE

DEFAULT_API_URL = "https://api.artic.edu/api/v1/artworks"

DEFAULT_FIELDS = [
    "id",
    "title",
    "place_of_origin",
    "artist_titles",
    "inscriptions",
    "date_start",
    "date_end",
]

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_ENV_PREFIX = "PAGED_TABLE_"


class TableConfig(param.Parameterized):
    """Settings shared by the record source, loader and dashboard."""

    api_url = param.String(default=DEFAULT_API_URL, doc="Paginated records endpoint")
    fields = param.List(default=list(DEFAULT_FIELDS), item_type=str)
    rows_per_page = param.Integer(default=12, bounds=(1, MAX_PAGE_SIZE))
    timeout = param.Number(default=10.0, bounds=(0, None), doc="HTTP timeout in seconds")
    log_level = param.Selector(default="WARNING", objects=LOG_LEVELS)

    @classmethod
    def from_env(cls, environ: dict | None = None, **overrides) -> TableConfig:
        """Build a config from PAGED_TABLE_* environment variables.

        Explicit keyword overrides win over the environment.
        """
        env = os.environ if environ is None else environ
        params: dict = {}
        if f"{_ENV_PREFIX}API_URL" in env:
            params["api_url"] = env[f"{_ENV_PREFIX}API_URL"]
        if f"{_ENV_PREFIX}ROWS_PER_PAGE" in env:
            params["rows_per_page"] = _parse_env(env, "ROWS_PER_PAGE", int)
        if f"{_ENV_PREFIX}TIMEOUT" in env:
            params["timeout"] = _parse_env(env, "TIMEOUT", float)
        if f"{_ENV_PREFIX}LOG_LEVEL" in env:
            params["log_level"] = env[f"{_ENV_PREFIX}LOG_LEVEL"].upper()
        params.update(overrides)
        return cls(**params)


def _parse_env(env, name: str, kind):
    raw = env[f"{_ENV_PREFIX}{name}"]
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(
            f"{_ENV_PREFIX}{name} must be a valid {kind.__name__}, got {raw!r}."
        ) from None


def configure_logging(level: str = "WARNING") -> None:
    """Install a basic stderr handler for the paged_table loggers."""
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("paged_table").setLevel(level)
