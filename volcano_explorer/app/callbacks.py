"""All Dash callbacks for the volcano explorer app."""

from __future__ import annotations

from dash import Input, Output, State, callback_context, dcc, html
from dash.exceptions import PreventUpdate

from ..explorer.state import DragRect
from . import theme
from .figures import build_volcano_figure

# Panel IDs in tab order
_PANELS = ["panel-view", "panel-search", "panel-data"]
_TAB_TO_PANEL = {
    "tab-view": "panel-view",
    "tab-search": "panel-search",
    "tab-data": "panel-data",
}

_MAX_LIST = 12


def drag_rect_from_selection(
    selected_data: dict | None,
    x_range: list[float],
    y_range: list[float],
    plot_px: tuple[float, float] = (theme.PLOT_WIDTH_PX, theme.PLOT_HEIGHT_PX),
) -> DragRect | None:
    """Convert Plotly box-select data into a :class:`DragRect`.

    Pixel extents are estimated from the share of the visible axis range the
    box covers.  Returns ``None`` for anything that is not a box selection.
    """
    if not selected_data or "range" not in selected_data:
        return None
    box = selected_data["range"]
    try:
        (x0, x1), (y0, y1) = box["x"], box["y"]
    except (KeyError, TypeError, ValueError):
        return None
    x_span = (x_range[1] - x_range[0]) or 1.0
    y_span = (y_range[1] - y_range[0]) or 1.0
    return DragRect(
        x0=float(x0), x1=float(x1), y0=float(y0), y1=float(y1),
        width_px=abs(x1 - x0) / x_span * plot_px[0],
        height_px=abs(y1 - y0) / y_span * plot_px[1],
    )


def point_from_event(event_data: dict | None) -> tuple[str, str] | None:
    """Return ``(id, gene_symbol)`` of the first point in click/hover data."""
    if not event_data:
        return None
    points = event_data.get("points") or []
    if not points:
        return None
    custom = points[0].get("customdata")
    if not custom:
        return None
    return str(custom[0]), str(custom[1])


def _selection_info(ids) -> str | html.Div:
    if not ids:
        return "Nothing selected"
    shown = sorted(ids)[:_MAX_LIST]
    more = len(ids) - len(shown)
    return html.Div([
        html.Div(f"{len(ids)} selected", style={"marginBottom": "4px"}),
        html.Div(", ".join(shown) + (f" … (+{more})" if more else "")),
    ])


def register(app):
    """Register all callbacks on the Dash app instance."""

    # ------------------------------------------------------------------ #
    #  Tab visibility toggle
    # ------------------------------------------------------------------ #

    @app.callback(
        [Output(pid, "style") for pid in _PANELS],
        Input("sidebar-tabs", "value"),
    )
    def toggle_tabs(tab_value):
        active = _TAB_TO_PANEL.get(tab_value, "panel-view")
        return [
            {"display": "block"} if pid == active else {"display": "none"}
            for pid in _PANELS
        ]

    # ------------------------------------------------------------------ #
    #  Main figure update
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("volcano-graph", "figure"),
        Output("status-bar", "children"),
        Output("summary-panel", "children"),
        Output("selection-info", "children"),
        Output("fc-value", "children"),
        Output("fdr-value", "children"),
        Input("fc-threshold", "value"),
        Input("fdr-threshold", "value"),
        Input("top-n", "value"),
        Input("show-labels", "value"),
        Input("point-size", "value"),
        Input("figure-trigger", "data"),
    )
    def update_figure(fc, fdr, top_n, show_labels, point_size, figure_trigger):
        from .app import state
        if state is None:
            raise PreventUpdate

        session = state.session
        with state.lock:
            thresholds = session.set_thresholds(fc, fdr)
            session.set_top_n(top_n)
            session.set_show_labels("on" in (show_labels or []))

            fig = build_volcano_figure(
                session,
                point_size=point_size if point_size is not None else 7,
            )
            status = f"{len(session.dataset):,} points · seed {session.seed}"
            summary = session.summary().summary()
            selected = session.get_interaction_state().selected
        return (
            fig,
            status,
            summary,
            _selection_info(selected),
            f"{thresholds.fc:.1f}",
            f"{thresholds.fdr:.3f}",
        )

    # ------------------------------------------------------------------ #
    #  Click → pin toggle
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("figure-trigger", "data", allow_duplicate=True),
        Input("volcano-graph", "clickData"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def on_click(click_data, trigger):
        from .app import state
        point = point_from_event(click_data)
        if state is None or point is None:
            raise PreventUpdate

        with state.lock:
            before = state.session.get_interaction_state()
            after = state.session.on_point_click(point[0])
        if after is before:
            raise PreventUpdate
        return (trigger or 0) + 1

    # ------------------------------------------------------------------ #
    #  Box select → selection
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("figure-trigger", "data", allow_duplicate=True),
        Input("volcano-graph", "selectedData"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def on_select(selected_data, trigger):
        from .app import state
        if state is None:
            raise PreventUpdate

        with state.lock:
            x_range, y_range = state.session.view_ranges()
            rect = drag_rect_from_selection(selected_data, x_range, y_range)
            if rect is None:
                raise PreventUpdate

            before = state.session.get_interaction_state()
            after = state.session.on_pointer_drag(rect)
        if after is before:
            raise PreventUpdate
        return (trigger or 0) + 1

    # ------------------------------------------------------------------ #
    #  Clear pins / selection
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("figure-trigger", "data", allow_duplicate=True),
        Input("clear-btn", "n_clicks"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def on_clear(n_clicks, trigger):
        from .app import state
        if state is None or not n_clicks:
            raise PreventUpdate
        with state.lock:
            state.session.on_empty_click()
        return (trigger or 0) + 1

    # ------------------------------------------------------------------ #
    #  Search / reset zoom
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("figure-trigger", "data", allow_duplicate=True),
        Output("search-status", "children"),
        Input("search-btn", "n_clicks"),
        Input("search-input", "n_submit"),
        Input("reset-zoom-btn", "n_clicks"),
        State("search-input", "value"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def on_search(search_clicks, n_submit, reset_clicks, query, trigger):
        from .app import state
        if state is None:
            raise PreventUpdate

        ctx = callback_context
        if not ctx.triggered:
            raise PreventUpdate

        trigger_id = ctx.triggered[0]["prop_id"].split(".")[0]
        session = state.session

        if trigger_id == "reset-zoom-btn":
            with state.lock:
                session.on_reset_zoom()
            return (trigger or 0) + 1, ""

        with state.lock:
            inter = session.on_search(query or "")
        if inter.search_highlight is not None:
            status = html.Span(f"Found {inter.search_highlight}", style={"color": theme.OK})
        elif (query or "").strip():
            status = html.Span("Not found", style={"color": theme.ERROR})
        else:
            status = ""
        return (trigger or 0) + 1, status

    # ------------------------------------------------------------------ #
    #  Regenerate dataset
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("figure-trigger", "data", allow_duplicate=True),
        Output("search-status", "children", allow_duplicate=True),
        Output("hover-details", "children", allow_duplicate=True),
        Output("hover-description", "children", allow_duplicate=True),
        Input("regenerate-btn", "n_clicks"),
        State("seed-input", "value"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def on_regenerate(n_clicks, seed, trigger):
        from .app import state
        if state is None or not n_clicks:
            raise PreventUpdate

        state.regenerate(int(seed) if seed is not None else None)
        return (trigger or 0) + 1, "", "Hover a point", ""

    # ------------------------------------------------------------------ #
    #  CSV export
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("csv-download", "data"),
        Input("export-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def on_export(n_clicks):
        from .app import state
        if state is None or not n_clicks:
            raise PreventUpdate
        with state.lock:
            if not state.session.get_interaction_state().selected:
                raise PreventUpdate
            text = state.session.export_selected_csv()
        return dcc.send_string(text, "volcano_selected.csv")

    # ------------------------------------------------------------------ #
    #  Hover → details + description lookup
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("hover-details", "children"),
        Output("hover-description", "children"),
        Output("hover-token", "data"),
        Input("volcano-graph", "hoverData"),
        prevent_initial_call=True,
    )
    def on_hover(hover_data):
        from .app import state
        point = point_from_event(hover_data)
        if state is None or point is None:
            raise PreventUpdate

        obs_id, symbol = point
        with state.lock:
            dataset = state.session.dataset
            rows = dataset[dataset["id"] == obs_id]
            if rows.empty:
                raise PreventUpdate
            token = state.tracker.focus(symbol)
        row = rows.iloc[0]
        details = html.Div([
            html.Div(f"id      {obs_id}"),
            html.Div(f"log2FC  {row['log2fc']:.3f}"),
            html.Div(f"pval    {row['pval']:.2e}"),
            html.Div(f"fdr     {row['fdr']:.2e}"),
        ])
        loading = "Loading…" if state.annotations is not None else ""
        return details, loading, token

    @app.callback(
        Output("hover-description", "children", allow_duplicate=True),
        Input("hover-token", "data"),
        prevent_initial_call=True,
    )
    def load_description(token):
        from .app import state
        if state is None or token is None or state.annotations is None:
            raise PreventUpdate

        with state.lock:
            key = state.tracker.current_key
            if not state.tracker.is_current(token):
                raise PreventUpdate
        # The lookup runs unlocked; apply() rejects it if focus moved meanwhile.
        result = state.annotations.describe(key)
        with state.lock:
            if not state.tracker.apply(token, result):
                raise PreventUpdate
        if result is None:
            return "No description found."
        parts = []
        if result.protein_name:
            parts.append(html.Strong(result.protein_name))
        if result.description:
            parts.append(html.Div(result.description))
        return html.Div(parts)
