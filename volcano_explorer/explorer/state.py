"""Interaction state and its pure transitions.

The state is an immutable value; every transition takes the current state
and returns a new one.  Nothing here touches the UI, so the rules for
pinning, box selection, search and zoom can be tested directly.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Set, Tuple

import pandas as pd

from ..classification import Thresholds, top_significant

DEFAULT_SEARCH_PAD = 1.2
DEFAULT_MIN_DRAG_PX = 4.0


@dataclass(frozen=True)
class ZoomWindow:
    """Axis ranges of a zoomed view, in data coordinates."""

    x: Tuple[float, float]
    y: Tuple[float, float]

    @classmethod
    def around(cls, x: float, y: float, pad: float = DEFAULT_SEARCH_PAD) -> "ZoomWindow":
        """Window centred on ``(x, y)``; the y range never goes below zero."""
        return cls(x=(x - pad, x + pad), y=(max(0.0, y - pad), y + pad))


@dataclass(frozen=True)
class DragRect:
    """A pointer-drag rectangle.

    Corners are in data coordinates (effect size, significance score) and
    may be given in any order; ``width_px``/``height_px`` are the on-screen
    extents used to reject accidental micro-drags.
    """

    x0: float
    x1: float
    y0: float
    y1: float
    width_px: float
    height_px: float

    def normalized(self) -> "DragRect":
        return DragRect(
            x0=min(self.x0, self.x1),
            x1=max(self.x0, self.x1),
            y0=min(self.y0, self.y1),
            y1=max(self.y0, self.y1),
            width_px=abs(self.width_px),
            height_px=abs(self.height_px),
        )

    def is_degenerate(self, min_px: float = DEFAULT_MIN_DRAG_PX) -> bool:
        return not (abs(self.width_px) > min_px and abs(self.height_px) > min_px)


@dataclass(frozen=True)
class InteractionState:
    """Pinned / selected ids, search highlight and zoom window."""

    pinned: FrozenSet[str] = field(default_factory=frozenset)
    selected: FrozenSet[str] = field(default_factory=frozenset)
    search_highlight: Optional[str] = None
    zoom: Optional[ZoomWindow] = None

    def to_dict(self) -> dict:
        return {
            "pinned": sorted(self.pinned),
            "selected": sorted(self.selected),
            "search_highlight": self.search_highlight,
            "zoom": None if self.zoom is None else {"x": list(self.zoom.x), "y": list(self.zoom.y)},
        }


def toggle_pin(state: InteractionState, df: pd.DataFrame, obs_id: str) -> InteractionState:
    """Pin or unpin *obs_id*.

    Ignored while a box selection is active, and for ids not in *df*.
    """
    if state.selected:
        return state
    if df.empty or not (df["id"] == obs_id).any():
        return state
    if obs_id in state.pinned:
        pinned = state.pinned - {obs_id}
    else:
        pinned = state.pinned | {obs_id}
    return dataclasses.replace(state, pinned=pinned)


def box_select(
    state: InteractionState,
    df: pd.DataFrame,
    rect: DragRect,
    min_px: float = DEFAULT_MIN_DRAG_PX,
) -> InteractionState:
    """Replace the selection with every observation inside *rect* (closed).

    A rectangle that is not larger than *min_px* in both directions leaves
    the previous selection in place.
    """
    if rect.is_degenerate(min_px):
        return state
    r = rect.normalized()
    if df.empty:
        return dataclasses.replace(state, selected=frozenset())
    x = df["log2fc"]
    y = df["neg_log10_p"]
    inside = (x >= r.x0) & (x <= r.x1) & (y >= r.y0) & (y <= r.y1)
    return dataclasses.replace(state, selected=frozenset(df.loc[inside, "id"]))


def clear(state: InteractionState) -> InteractionState:
    """Empty both pinned and selected sets."""
    return dataclasses.replace(state, pinned=frozenset(), selected=frozenset())


def search(
    state: InteractionState,
    df: pd.DataFrame,
    query: str,
    pad: float = DEFAULT_SEARCH_PAD,
) -> InteractionState:
    """Highlight and zoom to the first id containing *query* (case-insensitive).

    A blank query only drops the highlight.  No match clears both the
    highlight and the zoom window.
    """
    q = (query or "").strip().lower()
    if not q:
        return dataclasses.replace(state, search_highlight=None)
    if not df.empty:
        hits = df[df["id"].str.lower().str.contains(q, regex=False)]
        if not hits.empty:
            row = hits.iloc[0]
            return dataclasses.replace(
                state,
                search_highlight=row["id"],
                zoom=ZoomWindow.around(float(row["log2fc"]), float(row["neg_log10_p"]), pad),
            )
    return dataclasses.replace(state, search_highlight=None, zoom=None)


def reset_zoom(state: InteractionState) -> InteractionState:
    """Drop the zoom window and search highlight; keep pins and selection."""
    return dataclasses.replace(state, search_highlight=None, zoom=None)


def reset(state: InteractionState | None = None) -> InteractionState:
    """Fresh state, used whenever the dataset is regenerated."""
    return InteractionState()


def label_set(
    df: pd.DataFrame,
    state: InteractionState,
    thresholds: Thresholds,
    top_n: int,
    show_labels: bool,
) -> Set[str]:
    """Ids to label: the top significant ones (if enabled) plus all pinned ids."""
    labels: Set[str] = set(top_significant(df, thresholds, top_n)) if show_labels else set()
    labels |= state.pinned
    return labels
