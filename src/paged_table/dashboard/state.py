"""TableState: reactive glue between the page loader and the selection engine."""

from __future__ import annotations

import logging

import param

from ..config import TableConfig
from ..core import (
    PageRow,
    SelectionDescriptor,
    SelectionState,
    SelectionSummary,
    create_initial_state,
    is_page_fully_selected,
    is_page_indeterminate,
    is_selected,
    selected_rows_on_page,
    selection_summary,
    to_descriptor,
)
from ..core.transitions import (
    BulkSelect,
    Clear,
    Command,
    SelectAll,
    Toggle,
    TogglePage,
    UpdateTotal,
    apply_command,
)
from ..source.loader import PageLoader

logger = logging.getLogger(__name__)


class TableState(param.Parameterized):
    """Holds the current SelectionState for one table view.

    The engine is pure; this object is where the latest state lives and
    where widget gestures become engine commands. The page loader's
    ``total_records`` is forwarded to the engine as ``UpdateTotal`` and
    nothing else flows from fetch state into selection state.
    """

    selection = param.ClassSelector(class_=SelectionState, doc="Current selection")
    loader = param.ClassSelector(class_=PageLoader)

    def __init__(
        self,
        loader: PageLoader | None = None,
        config: TableConfig | None = None,
        **params,
    ) -> None:
        if loader is None:
            loader = PageLoader(config=config)
        params.setdefault("selection", create_initial_state(loader.total_records))
        super().__init__(loader=loader, **params)
        loader.param.watch(self._on_total_change, "total_records")

    def _on_total_change(self, event) -> None:
        logger.debug("Total records changed %s -> %s", event.old, event.new)
        self.dispatch(UpdateTotal(event.new))

    def dispatch(self, command: Command) -> SelectionState:
        """Apply one engine command and publish the new state."""
        self.selection = apply_command(self.selection, command)
        return self.selection

    def start(self) -> None:
        """Load the first page."""
        self.loader.load()

    # --- Current page ---

    def current_page_rows(self) -> list[PageRow]:
        """Engine rows for the page currently on screen."""
        page = self.loader.page
        if page is None:
            return []
        return page.rows()

    # --- Commands ---

    def on_row_select(self, record_id: str, absolute_index: int) -> None:
        self.dispatch(Toggle(record_id, absolute_index))

    def on_select_all_current_page(self) -> None:
        """Header checkbox: select the page, or deselect it if already full."""
        rows = self.current_page_rows()
        if rows:
            self.dispatch(TogglePage(tuple(rows)))

    def on_bulk_select(self, count: int | None) -> None:
        """Select the first N records. Empty or negative input is ignored."""
        if count is None or count < 0:
            return
        self.dispatch(BulkSelect(count))

    def on_select_all(self) -> None:
        self.dispatch(SelectAll())

    def on_clear_selection(self) -> None:
        self.dispatch(Clear())

    def apply_table_selection(self, local_indices: list[int]) -> None:
        """Reconcile a widget's selected rows with the engine.

        ``local_indices`` are 0-based positions on the current page. Every
        row whose membership differs from the engine's answer is toggled.
        """
        wanted = set(local_indices)
        state = self.selection
        for local_index, (record_id, absolute_index) in enumerate(self.current_page_rows()):
            if is_selected(state, record_id, absolute_index) != (local_index in wanted):
                state = apply_command(state, Toggle(record_id, absolute_index))
        if state is not self.selection:
            self.selection = state

    # --- Queries ---

    def is_row_selected(self, record_id: str, absolute_index: int) -> bool:
        return is_selected(self.selection, record_id, absolute_index)

    def is_current_page_fully_selected(self) -> bool:
        return is_page_fully_selected(self.selection, self.current_page_rows())

    def is_current_page_indeterminate(self) -> bool:
        return is_page_indeterminate(self.selection, self.current_page_rows())

    def selected_rows_on_page(self) -> list[PageRow]:
        return selected_rows_on_page(self.selection, self.current_page_rows())

    def selected_local_indices(self) -> list[int]:
        """Positions on the current page that are selected, for widgets."""
        return [
            i for i, (rid, idx) in enumerate(self.current_page_rows())
            if is_selected(self.selection, rid, idx)
        ]

    def selection_descriptor(self) -> SelectionDescriptor:
        return to_descriptor(self.selection)

    @property
    def summary(self) -> SelectionSummary:
        return selection_summary(self.selection)

    def status_text(self) -> str:
        """One-line status shown above the table."""
        loader = self.loader
        if loader.loading:
            return "Loading..."
        if loader.error:
            return loader.error
        if loader.total_pages == 0:
            return "No records"
        return (
            f"Page {loader.current_page + 1} of {loader.total_pages:,}"
            f" · {self.summary.label()}"
        )
