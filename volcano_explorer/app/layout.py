"""Full Dash layout: left sidebar (tabs), main volcano plot, right sidebar.

All tab panels are always present in the DOM so that callback inputs
are never missing.  Visibility is toggled via a callback.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dash import dcc, html

from . import theme

if TYPE_CHECKING:
    from .app import ServerState


def build_layout(state: ServerState) -> html.Div:
    """Return the complete app layout."""
    session = state.session
    n_points = len(session.dataset)

    return html.Div(
        className="app-container",
        style={"backgroundColor": theme.BG, "color": theme.TEXT, "fontFamily": theme.FONT_STACK},
        children=[
            # ── Left sidebar ──
            html.Div(
                className="left-sidebar",
                style={"width": theme.SIDEBAR_WIDTH, "backgroundColor": theme.PANEL},
                children=[
                    html.Div("Volcano Explorer", className="sidebar-header"),
                    html.Div(
                        className="sidebar-tabs",
                        children=[
                            dcc.Tabs(
                                id="sidebar-tabs",
                                value="tab-view",
                                className="custom-tabs",
                                children=[
                                    dcc.Tab(label="View", value="tab-view", className="tab"),
                                    dcc.Tab(label="Search", value="tab-search", className="tab"),
                                    dcc.Tab(label="Data", value="tab-data", className="tab"),
                                ],
                            ),
                            # All panels always in DOM; visibility toggled
                            html.Div(id="panel-view", children=_view_tab(state)),
                            html.Div(id="panel-search", children=_search_tab(),
                                     style={"display": "none"}),
                            html.Div(id="panel-data", children=_data_tab(state),
                                     style={"display": "none"}),
                        ],
                    ),
                    html.Pre(
                        id="summary-panel",
                        className="summary-panel",
                        children=session.summary().summary(),
                    ),
                    html.Div(
                        id="status-bar",
                        className="sidebar-status",
                        children=f"{n_points:,} points loaded",
                    ),
                ],
            ),
            # ── Main area ──
            html.Div(
                className="main-area",
                children=[
                    dcc.Graph(
                        id="volcano-graph",
                        config={
                            "scrollZoom": False,
                            "displayModeBar": True,
                            "modeBarButtonsToRemove": ["lasso2d"],
                        },
                        style={"height": "100vh", "width": "100%"},
                    ),
                ],
            ),
            # ── Right sidebar ──
            html.Div(
                className="right-sidebar",
                style={"width": theme.RIGHT_SIDEBAR_WIDTH, "backgroundColor": theme.PANEL},
                children=[
                    html.Div(
                        className="right-sidebar-section",
                        children=[
                            html.H4("Observation"),
                            html.Div(
                                id="hover-details",
                                className="coords-display",
                                children="Hover a point",
                            ),
                            html.Div(id="hover-description", className="description"),
                        ],
                    ),
                    html.Div(
                        className="stats-panel",
                        children=[
                            html.H4("Selection"),
                            html.Div(id="selection-info", children="Nothing selected"),
                        ],
                    ),
                ],
            ),
            # ── Hidden stores ──
            dcc.Store(id="figure-trigger", data=0),
            dcc.Store(id="hover-token", data=None),
            dcc.Download(id="csv-download"),
        ],
    )


# ------------------------------------------------------------------ #
#  Tab panels — always in the DOM
# ------------------------------------------------------------------ #

def _view_tab(state: ServerState) -> html.Div:
    session = state.session
    return html.Div(
        className="tab-content",
        children=[
            html.Label(["|log₂ FC| threshold ", html.Span(id="fc-value")]),
            html.Div(
                className="ctrl-row",
                children=[
                    dcc.Slider(
                        id="fc-threshold",
                        min=0.0, max=3.0, step=0.1, value=session.thresholds.fc,
                        marks=None, tooltip={"always_visible": False},
                    ),
                ],
            ),
            html.Label(["FDR threshold ", html.Span(id="fdr-value")]),
            html.Div(
                className="ctrl-row",
                children=[
                    dcc.Slider(
                        id="fdr-threshold",
                        min=0.001, max=0.2, step=0.001, value=session.thresholds.fdr,
                        marks=None, tooltip={"always_visible": False},
                    ),
                ],
            ),
            html.Label("Top-N labels"),
            html.Div(
                className="ctrl-row",
                children=[
                    dcc.Input(
                        id="top-n",
                        type="number",
                        min=0, max=50, step=1,
                        value=session.top_n,
                        debounce=True,
                        style={"width": "100%"},
                    ),
                ],
            ),
            html.Div(
                className="ctrl-row",
                children=[
                    dcc.Checklist(
                        id="show-labels",
                        options=[{"label": "Show labels", "value": "on"}],
                        value=["on"] if session.show_labels else [],
                    ),
                ],
            ),
            html.Label("Point Size"),
            html.Div(
                className="ctrl-row",
                children=[
                    dcc.Slider(
                        id="point-size",
                        min=2, max=14, step=1, value=7,
                        marks=None, tooltip={"always_visible": False},
                    ),
                ],
            ),
            html.Button(
                "Clear pins / selection", id="clear-btn",
                className="btn-warning mt-8",
                style={"width": "100%"},
            ),
        ],
    )


def _search_tab() -> html.Div:
    return html.Div(
        className="tab-content",
        children=[
            html.Label("Find observation"),
            html.Div(
                className="ctrl-row flex-row",
                children=[
                    dcc.Input(
                        id="search-input",
                        type="text",
                        placeholder="e.g. TP53",
                        style={"flex": "1"},
                    ),
                    html.Button("Go", id="search-btn", className="btn-primary"),
                ],
            ),
            html.Div(id="search-status", className="ctrl-row"),
            html.Button(
                "Reset zoom", id="reset-zoom-btn",
                className="btn-info mt-4",
                style={"width": "100%"},
            ),
        ],
    )


def _data_tab(state: ServerState) -> html.Div:
    return html.Div(
        className="tab-content",
        children=[
            html.Label("Seed (blank = random)"),
            html.Div(
                className="ctrl-row flex-row",
                children=[
                    dcc.Input(
                        id="seed-input",
                        type="number",
                        placeholder=str(state.session.seed),
                        style={"flex": "1"},
                    ),
                    html.Button("Regenerate", id="regenerate-btn", className="btn-success"),
                ],
            ),
            html.Button(
                "Export selection (CSV)", id="export-btn",
                className="btn-primary mt-8",
                style={"width": "100%"},
            ),
        ],
    )
