"""paged-table: bulk selection over server-paginated record collections."""

from ._version import __version__
from .config import TableConfig, configure_logging
from .core import (
    SelectionMode,
    SelectionState,
    SelectionDescriptor,
    PageRow,
    create_initial_state,
    is_selected,
    selected_count,
    to_descriptor,
)


def browse(config=None, port=0, show=True):
    """Launch the record browser in a browser tab.

    Parameters
    ----------
    config : TableConfig, optional
        Source and display settings. Defaults to ``TableConfig.from_env()``.
    port : int
        Port number. 0 = auto-assign.
    show : bool
        Whether to open the browser automatically.
    """
    from .dashboard.app import TableApp

    if config is None:
        config = TableConfig.from_env()
    configure_logging(config.log_level)
    app = TableApp(config=config)
    app.serve(port=port, show=show)


__all__ = [
    "__version__",
    "browse",
    "TableConfig",
    "configure_logging",
    "SelectionMode",
    "SelectionState",
    "SelectionDescriptor",
    "PageRow",
    "create_initial_state",
    "is_selected",
    "selected_count",
    "to_descriptor",
]
