"""Selection-state engine for server-paginated record collections."""

from .identity import IdentityCache
from .state import (
    SelectionMode,
    Overrides,
    SelectionState,
    create_initial_state,
)
from .page import PageRow, page_offset, page_rows
from .descriptor import SelectionDescriptor, to_descriptor
from .queries import (
    SelectionSummary,
    is_selected,
    selected_count,
    is_page_fully_selected,
    is_page_indeterminate,
    selected_rows_on_page,
    selection_summary,
)
from .transitions import (
    toggle,
    select_page,
    deselect_page,
    sync_page,
    toggle_page,
    bulk_select,
    select_all,
    clear,
    update_total,
    apply_command,
    Toggle,
    SelectPage,
    DeselectPage,
    TogglePage,
    SyncPage,
    BulkSelect,
    SelectAll,
    Clear,
    UpdateTotal,
)

__all__ = [
    "IdentityCache",
    "SelectionMode",
    "Overrides",
    "SelectionState",
    "create_initial_state",
    "PageRow",
    "page_offset",
    "page_rows",
    "SelectionDescriptor",
    "to_descriptor",
    "SelectionSummary",
    "is_selected",
    "selected_count",
    "is_page_fully_selected",
    "is_page_indeterminate",
    "selected_rows_on_page",
    "selection_summary",
    "toggle",
    "select_page",
    "deselect_page",
    "sync_page",
    "toggle_page",
    "bulk_select",
    "select_all",
    "clear",
    "update_total",
    "apply_command",
    "Toggle",
    "SelectPage",
    "DeselectPage",
    "TogglePage",
    "SyncPage",
    "BulkSelect",
    "SelectAll",
    "Clear",
    "UpdateTotal",
]
