"""Panel dashboard for browsing and selecting records."""

from .state import TableState

__all__ = ["TableState"]
