"""TableApp: assembles the Panel template and serves the record browser."""

from __future__ import annotations

import logging

import panel as pn

from ..config import TableConfig
from ..display_utils import prettify_name
from ..source.loader import PageLoader
from ..source.records import DISPLAY_COLUMNS, RecordPage
from .state import TableState

logger = logging.getLogger(__name__)

_TABLE_CSS = """
.pt-status {
  font-size: 13px;
  color: #5f6368;
}
.pt-page-state {
  font-size: 12px;
  color: #1a73e8;
  font-weight: 500;
}
"""


class TableApp:
    """Paginated record browser with bulk selection.

    Assembles a Panel MaterialTemplate with:
    - Sidebar: bulk-select input, select all / clear, descriptor preview
    - Main area: status line, checkbox table, page navigation
    - Error alert with retry when a page fails to load
    """

    def __init__(
        self,
        config: TableConfig | None = None,
        loader: PageLoader | None = None,
    ) -> None:
        pn.extension("tabulator", sizing_mode="stretch_width")
        if _TABLE_CSS not in pn.config.raw_css:
            pn.config.raw_css.append(_TABLE_CSS)

        self.config = config if config is not None else TableConfig()
        if loader is None:
            loader = PageLoader(config=self.config)
        self.state = TableState(loader=loader, config=self.config)

        # True while the table widget is being updated from engine state
        self._syncing = False

        self.table = pn.widgets.Tabulator(
            RecordPage((), 0, 0, self.config.rows_per_page).to_frame(),
            selectable="checkbox",
            disabled=True,
            show_index=False,
            titles={col: prettify_name(col) for col in DISPLAY_COLUMNS},
            sizing_mode="stretch_width",
        )
        self.status = pn.pane.Markdown("", css_classes=["pt-status"])
        self.page_state = pn.pane.Markdown("", css_classes=["pt-page-state"])
        self.error_alert = pn.pane.Alert("", alert_type="danger", visible=False)
        self.retry_button = pn.widgets.Button(
            name="Retry", button_type="danger", visible=False, width=90,
        )
        self.prev_button = pn.widgets.Button(name="‹ Prev", width=90)
        self.next_button = pn.widgets.Button(name="Next ›", width=90)
        self.page_button = pn.widgets.Button(
            name="Select page", button_type="default", width=130,
        )

        self.bulk_input = pn.widgets.IntInput(
            name="Select first N records", value=0, start=0, step=1,
        )
        self.bulk_button = pn.widgets.Button(name="Select", button_type="primary")
        self.select_all_button = pn.widgets.Button(name="Select all", button_type="primary")
        self.clear_button = pn.widgets.Button(name="Clear selection", button_type="danger")
        self.descriptor_pane = pn.pane.JSON({}, depth=2, name="Selection descriptor")

        self._wire()

    def _wire(self) -> None:
        loader = self.state.loader

        self.prev_button.on_click(lambda event: loader.change_page(loader.current_page - 1))
        self.next_button.on_click(self._on_next)
        self.retry_button.on_click(lambda event: loader.retry())
        self.page_button.on_click(lambda event: self.state.on_select_all_current_page())
        self.bulk_button.on_click(lambda event: self.state.on_bulk_select(self.bulk_input.value))
        self.select_all_button.on_click(lambda event: self.state.on_select_all())
        self.clear_button.on_click(lambda event: self.state.on_clear_selection())

        # Table checkboxes -> engine
        self.table.param.watch(self._on_table_selection, "selection")

        # Engine / loader -> widgets
        self.state.param.watch(lambda *events: self._refresh_selection(), "selection")
        loader.param.watch(
            lambda *events: self._refresh_page(),
            ["page", "loading", "error"],
        )

    def _on_next(self, event) -> None:
        loader = self.state.loader
        if loader.has_next_page:
            loader.change_page(loader.current_page + 1)

    def _on_table_selection(self, event) -> None:
        if self._syncing:
            return
        self.state.apply_table_selection(list(event.new))

    def _refresh_page(self) -> None:
        loader = self.state.loader
        self.error_alert.object = loader.error or ""
        self.error_alert.visible = bool(loader.error)
        self.retry_button.visible = bool(loader.error)
        self.prev_button.disabled = loader.loading or not loader.has_prev_page
        self.next_button.disabled = loader.loading or not loader.has_next_page
        self.table.loading = loader.loading

        if not loader.loading:
            page = loader.page
            if page is None:
                page = RecordPage((), loader.total_records, loader.current_page,
                                  loader.rows_per_page)
            self._syncing = True
            try:
                self.table.value = page.to_frame()
            finally:
                self._syncing = False
        self._refresh_selection()

    def _refresh_selection(self) -> None:
        summary = self.state.summary
        self.status.object = self.state.status_text()
        self.descriptor_pane.object = summary.descriptor.to_dict()

        if self.state.is_current_page_fully_selected():
            self.page_state.object = "Page: all selected"
            self.page_button.name = "Deselect page"
        elif self.state.is_current_page_indeterminate():
            self.page_state.object = "Page: partially selected"
            self.page_button.name = "Select page"
        else:
            self.page_state.object = "Page: none selected"
            self.page_button.name = "Select page"

        self._syncing = True
        try:
            self.table.selection = self.state.selected_local_indices()
        finally:
            self._syncing = False

    def _build_template(self) -> pn.template.MaterialTemplate:
        """Build the Panel MaterialTemplate layout."""
        sidebar = pn.Column(
            self.bulk_input,
            self.bulk_button,
            pn.layout.Divider(),
            self.select_all_button,
            self.clear_button,
            pn.layout.Divider(),
            pn.pane.Markdown("**Selection descriptor**"),
            self.descriptor_pane,
        )
        template = pn.template.MaterialTemplate(
            title="paged table",
            sidebar=[sidebar],
            sidebar_width=280,
            header_background="#fafafa",
            header_color="#202124",
        )
        template.main.append(pn.Column(
            self.error_alert,
            self.retry_button,
            pn.Row(self.status, self.page_state),
            self.table,
            pn.Row(self.prev_button, self.page_button, self.next_button),
            sizing_mode="stretch_width",
        ))
        return template

    def serve(self, port: int = 0, show: bool = True, **kwargs) -> None:
        """Load the first page and start the Panel server.

        Parameters
        ----------
        port : int
            Port number. 0 = auto-assign.
        show : bool
            Whether to open the browser automatically.
        **kwargs
            Additional keyword arguments passed to pn.serve().
        """
        template = self._build_template()
        self.state.start()
        self._refresh_page()
        logger.info("Serving paged table on port %s", port or "auto")
        pn.serve(
            template,
            port=port or 0,
            show=show,
            title="paged-table Explorer",
            **kwargs,
        )
