"""Build the volcano figure from the session."""

from __future__ import annotations

from typing import TYPE_CHECKING

import plotly.graph_objects as go

from ..classification import Category
from ..visualization.colors import CATEGORY_COLORS, CATEGORY_NAMES
from . import theme

if TYPE_CHECKING:
    from ..explorer.session import VolcanoSession

_HOVER = (
    "<b>%{customdata[0]}</b>"
    "<br>log2FC %{x:.3f}"
    "<br>p %{customdata[2]:.2e}"
    "<br>FDR %{customdata[3]:.2e}"
    "<extra></extra>"
)


def build_volcano_figure(
    session: VolcanoSession,
    *,
    point_size: int = 7,
    opacity: float = 0.85,
    drag_mode: str = "select",
) -> go.Figure:
    """Build the complete volcano figure.

    Parameters
    ----------
    session : VolcanoSession
        Provides the classified points, cutoff, labels and interaction state.
    point_size : int
        Marker size in px for regular points.
    opacity : float
        Marker opacity.
    drag_mode : str
        Plotly drag mode; ``"select"`` feeds box selections back to the session.

    Returns
    -------
    go.Figure
    """
    fig = go.Figure()
    x_range, y_range = session.view_ranges()
    data = session.get_classified_observations()

    if data.empty:
        fig.update_layout(_base_layout(drag_mode, x_range, y_range))
        return fig

    # One trace per category; clicks and selections report customdata[0] (the id)
    for category in (Category.NOT_SIG, Category.SIG_DOWN, Category.SIG_UP):
        subset = data[data["category"] == category.value]
        fig.add_trace(go.Scattergl(
            x=subset["log2fc"].values,
            y=subset["neg_log10_p"].values,
            mode="markers",
            name=CATEGORY_NAMES[category.value],
            marker=dict(
                size=point_size,
                opacity=opacity,
                color=CATEGORY_COLORS[category.value],
            ),
            customdata=subset[["id", "gene_symbol", "pval", "fdr"]].to_numpy(dtype=object),
            hovertemplate=_HOVER,
            hoverlabel=dict(
                bgcolor=theme.PANEL,
                bordercolor=CATEGORY_COLORS[category.value],
                font=dict(family=theme.FONT_STACK, size=11, color=theme.TEXT),
            ),
        ))

    _add_threshold_lines(fig, session)
    _add_interaction_overlays(fig, session, data, point_size)
    _add_labels(fig, session, data)

    fig.update_layout(_base_layout(drag_mode, x_range, y_range))
    return fig


def _add_threshold_lines(fig: go.Figure, session: VolcanoSession) -> None:
    """Dashed lines at ±fc and at the FDR significance cutoff."""
    line = dict(color=theme.MUTED, width=1, dash="dash")
    fc = session.thresholds.fc
    fig.add_vline(x=fc, line=line, opacity=0.8)
    fig.add_vline(x=-fc, line=line, opacity=0.8)
    cutoff = session.get_significance_cutoff()
    if cutoff is not None:
        fig.add_hline(y=cutoff, line=line, opacity=0.8)


def _add_interaction_overlays(fig, session, data, point_size: int) -> None:
    """Outline pinned and selected points, ring the search hit."""
    inter = session.get_interaction_state()
    marked = data[data["id"].isin(inter.pinned | inter.selected)]
    if not marked.empty:
        outline = [
            theme.ACCENT if i in inter.selected else theme.PIN for i in marked["id"]
        ]
        fig.add_trace(go.Scattergl(
            x=marked["log2fc"].values,
            y=marked["neg_log10_p"].values,
            mode="markers",
            marker=dict(
                size=point_size + 3,
                color="rgba(0,0,0,0)",
                line=dict(width=2, color=outline),
            ),
            showlegend=False,
            hoverinfo="skip",
        ))

    if inter.search_highlight is not None:
        hit = data[data["id"] == inter.search_highlight]
        if not hit.empty:
            fig.add_trace(go.Scattergl(
                x=hit["log2fc"].values,
                y=hit["neg_log10_p"].values,
                mode="markers",
                marker=dict(
                    size=point_size * 3,
                    color="rgba(0,0,0,0)",
                    line=dict(width=3, color=theme.HIGHLIGHT),
                ),
                showlegend=False,
                hoverinfo="skip",
            ))


def _add_labels(fig: go.Figure, session: VolcanoSession, data) -> None:
    labels = session.get_label_set()
    if not labels:
        return
    rows = data[data["id"].isin(labels)]
    for rec in rows.itertuples(index=False):
        fig.add_annotation(
            x=rec.log2fc,
            y=rec.neg_log10_p,
            text=rec.id,
            showarrow=False,
            yshift=10,
            font=dict(family=theme.FONT_STACK, size=10, color=theme.TEXT),
            bgcolor="rgba(15,20,25,0.6)",
        )


def _base_layout(drag_mode: str, x_range: list, y_range: list) -> dict:
    """Return common layout kwargs."""
    return dict(
        dragmode=drag_mode,
        uirevision=drag_mode,
        hovermode="closest",
        hoverdistance=10,
        clickmode="event",
        paper_bgcolor=theme.BG,
        plot_bgcolor=theme.BG,
        font=dict(family=theme.FONT_STACK, size=11, color=theme.MUTED),
        margin=dict(l=48, r=24, t=24, b=40),
        xaxis=dict(
            range=x_range,
            showgrid=False,
            zeroline=False,
            title="log₂ FC",
            color=theme.MUTED,
        ),
        yaxis=dict(
            range=y_range,
            showgrid=False,
            zeroline=False,
            title="−log₁₀(p)",
            color=theme.MUTED,
        ),
        legend=dict(
            font=dict(size=10),
            bgcolor="rgba(0,0,0,0)",
            borderwidth=0,
        ),
    )
