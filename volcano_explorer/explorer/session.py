"""VolcanoSession — the single owner of dataset, thresholds and interaction state.

UI layers report raw events (drags, clicks, search strings, slider values)
through the ``on_*`` / ``set_*`` methods and read classified points, the
cutoff line and the label set back through the ``get_*`` methods.  Derived
values are recomputed on every read, so nothing can go stale between a
threshold change and the next redraw.
"""

from __future__ import annotations

import logging
from typing import Set

import pandas as pd

from ..classification import (
    ClassificationSummary,
    Thresholds,
    classify_frame,
    summarize,
)
from ..config import ExplorerConfig
from ..dataset import generate_dataset
from ..io import export_csv
from ..rng import default_seed
from ..stats import significance_cutoff
from . import state as transitions
from .state import DragRect, InteractionState

logger = logging.getLogger(__name__)

TOP_N_MAX = 50
DEFAULT_TOP_N = 10


def _clamp_top_n(n) -> int:
    try:
        value = int(n)
    except (TypeError, ValueError):
        return DEFAULT_TOP_N
    return max(0, min(TOP_N_MAX, value))


class VolcanoSession:
    """Synchronous core of the volcano explorer.

    Parameters
    ----------
    config : ExplorerConfig, optional
        Startup thresholds, dataset size and interaction constants.
    dataset : pd.DataFrame, optional
        Pre-built dataset (must carry ``fdr`` and ``neg_log10_p``).  When
        omitted one is generated from ``config.seed``.
    """

    def __init__(
        self,
        config: ExplorerConfig | None = None,
        dataset: pd.DataFrame | None = None,
    ) -> None:
        self.config = config or ExplorerConfig()
        self.thresholds = Thresholds.clamped(self.config.fc_threshold, self.config.fdr_threshold)
        self.top_n = _clamp_top_n(self.config.top_n)
        self.show_labels = bool(self.config.show_labels)
        self.interaction = InteractionState()
        self.seed: int | None = None
        if dataset is None:
            self.on_regenerate(self.config.seed)
        else:
            self.dataset = dataset.reset_index(drop=True)

    # ------------------------------------------------------------------ #
    #  Inputs
    # ------------------------------------------------------------------ #

    def set_thresholds(self, fc, fdr) -> Thresholds:
        self.thresholds = Thresholds.clamped(fc, fdr)
        logger.debug("Thresholds set to fc=%s fdr=%s", self.thresholds.fc, self.thresholds.fdr)
        return self.thresholds

    def set_top_n(self, n) -> int:
        self.top_n = _clamp_top_n(n)
        return self.top_n

    def set_show_labels(self, show: bool) -> None:
        self.show_labels = bool(show)

    def on_pointer_drag(self, rect: DragRect) -> InteractionState:
        self.interaction = transitions.box_select(
            self.interaction, self.dataset, rect, self.config.min_drag_px
        )
        logger.debug("Box select -> %d selected", len(self.interaction.selected))
        return self.interaction

    def on_point_click(self, obs_id: str) -> InteractionState:
        self.interaction = transitions.toggle_pin(self.interaction, self.dataset, obs_id)
        return self.interaction

    def on_empty_click(self) -> InteractionState:
        self.interaction = transitions.clear(self.interaction)
        return self.interaction

    def on_search(self, query: str) -> InteractionState:
        self.interaction = transitions.search(
            self.interaction, self.dataset, query, self.config.search_pad
        )
        if query and self.interaction.search_highlight is None:
            logger.info("Search %r: not found", query)
        return self.interaction

    def on_reset_zoom(self) -> InteractionState:
        self.interaction = transitions.reset_zoom(self.interaction)
        return self.interaction

    def on_regenerate(self, seed: int | None = None) -> pd.DataFrame:
        """Replace the dataset wholesale and reset all interaction state."""
        seed = default_seed() if seed is None else int(seed)
        dataset = generate_dataset(seed, self.config.n_points, span=self.config.effect_span)
        self.seed = seed
        self.dataset = dataset
        self.interaction = transitions.reset(self.interaction)
        logger.info("Regenerated %d observations (seed=%d)", len(dataset), seed)
        return dataset

    # ------------------------------------------------------------------ #
    #  Outputs
    # ------------------------------------------------------------------ #

    def get_classified_observations(self) -> pd.DataFrame:
        """Copy of the dataset with a freshly computed ``category`` column."""
        out = self.dataset.copy()
        out["category"] = classify_frame(self.dataset, self.thresholds)
        return out

    def get_significance_cutoff(self) -> float | None:
        """``-log10`` p-value of the FDR cutoff line; ``None`` if there is no data."""
        return significance_cutoff(self.dataset["pval"].to_numpy(dtype=float), self.thresholds.fdr)

    def get_label_set(self) -> Set[str]:
        return transitions.label_set(
            self.dataset, self.interaction, self.thresholds, self.top_n, self.show_labels
        )

    def get_interaction_state(self) -> InteractionState:
        return self.interaction

    def export_selected_csv(self) -> str:
        return export_csv(self.dataset, self.interaction.selected)

    def summary(self) -> ClassificationSummary:
        return summarize(self.dataset, self.thresholds)

    def view_ranges(self) -> tuple[list[float], list[float]]:
        """Axis ranges for the plot: the zoom window, or the padded data extent."""
        zoom = self.interaction.zoom
        if zoom is not None:
            return list(zoom.x), list(zoom.y)
        if self.dataset.empty:
            return [-1.0, 1.0], [0.0, 2.0]
        fc = self.dataset["log2fc"]
        lo, hi = float(fc.min()), float(fc.max())
        pad = max(0.5, (hi - lo) * 0.05)
        max_y = float(self.dataset["neg_log10_p"].max())
        return [lo - pad, hi + pad], [0.0, max(max_y * 1.05, 2.0)]
