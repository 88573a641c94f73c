"""Threshold classification of observations into significance categories."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np
import pandas as pd

from .stats import significance_cutoff

logger = logging.getLogger(__name__)

DEFAULT_FC_THRESHOLD = 1.0
DEFAULT_FDR_THRESHOLD = 0.05


class Category(str, enum.Enum):
    SIG_UP = "sig_up"
    SIG_DOWN = "sig_down"
    NOT_SIG = "not_sig"


@dataclass(frozen=True)
class Thresholds:
    """Effect-size and FDR thresholds read by the classifier."""

    fc: float = DEFAULT_FC_THRESHOLD
    fdr: float = DEFAULT_FDR_THRESHOLD

    @classmethod
    def clamped(cls, fc, fdr) -> "Thresholds":
        """Build thresholds, clamping ``fc >= 0`` and ``fdr`` into ``[0, 1]``.

        Non-numeric or non-finite values fall back to the defaults.
        """
        fc_val = _finite_or(fc, DEFAULT_FC_THRESHOLD, "fc")
        fdr_val = _finite_or(fdr, DEFAULT_FDR_THRESHOLD, "fdr")
        return cls(fc=max(0.0, fc_val), fdr=min(1.0, max(0.0, fdr_val)))


def _finite_or(value, default: float, name: str) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError):
        out = math.nan
    if not math.isfinite(out):
        logger.warning("Ignoring non-numeric %s threshold %r", name, value)
        return default
    return out


def classify(fdr: float, log2fc: float, fc_threshold: float, fdr_threshold: float) -> Category:
    """Classify a single observation."""
    if fdr <= fdr_threshold and log2fc >= fc_threshold:
        return Category.SIG_UP
    if fdr <= fdr_threshold and log2fc <= -fc_threshold:
        return Category.SIG_DOWN
    return Category.NOT_SIG


def classify_frame(df: pd.DataFrame, thresholds: Thresholds) -> pd.Series:
    """Vectorised :func:`classify` over a dataset frame.

    Returns a string Series (category values) aligned with *df*.
    """
    if df.empty:
        return pd.Series([], index=df.index, dtype=object, name="category")
    passes = df["fdr"].to_numpy() <= thresholds.fdr
    fc = df["log2fc"].to_numpy()
    labels = np.select(
        [passes & (fc >= thresholds.fc), passes & (fc <= -thresholds.fc)],
        [Category.SIG_UP.value, Category.SIG_DOWN.value],
        default=Category.NOT_SIG.value,
    )
    return pd.Series(labels, index=df.index, dtype=object, name="category")


def top_significant(df: pd.DataFrame, thresholds: Thresholds, top_n: int) -> List[str]:
    """Ids of the *top_n* most significant non-``not_sig`` observations.

    Sorted by ``pval`` ascending, ties broken by ``id``.
    """
    if df.empty or top_n <= 0:
        return []
    categories = classify_frame(df, thresholds)
    sig = df[categories != Category.NOT_SIG.value]
    sig = sig.sort_values(["pval", "id"], kind="mergesort")
    return sig["id"].head(top_n).tolist()


@dataclass
class ClassificationSummary:
    """Per-category counts for one set of thresholds."""

    thresholds: Thresholds
    n_total: int
    counts: Dict[str, int] = field(default_factory=dict)
    cutoff: float | None = None

    def summary(self) -> str:
        """Return a human-readable summary string."""
        if self.n_total == 0:
            return "No observations"
        cutoff = "n/a" if self.cutoff is None else f"{self.cutoff:.2f}"
        lines = [
            f"Observations        : {self.n_total:,}",
            f"Significant up      : {self.counts.get(Category.SIG_UP.value, 0):,}",
            f"Significant down    : {self.counts.get(Category.SIG_DOWN.value, 0):,}",
            f"Not significant     : {self.counts.get(Category.NOT_SIG.value, 0):,}",
            f"|log2FC| >= {self.thresholds.fc:.1f}, FDR <= {self.thresholds.fdr:.3f}",
            f"-log10(p) cutoff    : {cutoff}",
        ]
        return "\n".join(lines)


def summarize(df: pd.DataFrame, thresholds: Thresholds) -> ClassificationSummary:
    """Count observations per category and attach the significance cutoff."""
    categories = classify_frame(df, thresholds)
    counts = {c.value: int((categories == c.value).sum()) for c in Category}
    return ClassificationSummary(
        thresholds=thresholds,
        n_total=len(df),
        counts=counts,
        cutoff=significance_cutoff(df["pval"].to_numpy(dtype=float), thresholds.fdr),
    )
