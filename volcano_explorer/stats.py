"""Benjamini–Hochberg FDR engine and normal-tail helpers."""

from __future__ import annotations

import numpy as np

P_VALUE_FLOOR = 1e-20

# Abramowitz & Stegun 7.1.26
_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911


def _as_pvalues(pvals) -> np.ndarray:
    arr = np.asarray(pvals, dtype=float).ravel()
    if not np.all(np.isfinite(arr)):
        raise ValueError("p-values must be finite.")
    if np.any((arr < 0.0) | (arr > 1.0)):
        raise ValueError("p-values must be in [0, 1].")
    return arr


def normal_cdf(x):
    """Standard normal CDF via the A&S erf approximation (|error| < 1.5e-7)."""
    x = np.asarray(x, dtype=float)
    sign = np.where(x < 0, -1.0, 1.0)
    u = np.abs(x) / np.sqrt(2.0)
    t = 1.0 / (1.0 + _P * u)
    y = 1.0 - ((((_A5 * t + _A4) * t + _A3) * t + _A2) * t + _A1) * t * np.exp(-u * u)
    out = 0.5 * (1.0 + sign * y)
    return float(out) if out.ndim == 0 else out


def two_sided_pvalue(z):
    """Two-sided normal tail ``2 * (1 - Phi(|z|))`` floored at ``P_VALUE_FLOOR``."""
    tail = 2.0 * (1.0 - np.asarray(normal_cdf(np.abs(np.asarray(z, dtype=float)))))
    out = np.clip(tail, P_VALUE_FLOOR, 1.0)
    return float(out) if out.ndim == 0 else out


def significance_score(pvals) -> np.ndarray:
    """Return ``-log10(p)`` for each p-value."""
    return -np.log10(np.asarray(pvals, dtype=float))


def bh_ratios(pvals) -> tuple[np.ndarray, np.ndarray]:
    """Raw BH ratios ``p_(k) * n / k`` in ascending p-value order.

    Returns
    -------
    ratios : np.ndarray
        Un-adjusted ratios, one per rank.
    order : np.ndarray
        Stable argsort of *pvals*; ``order[k]`` is the input index at rank k+1.
    """
    p = _as_pvalues(pvals)
    n = p.size
    order = np.argsort(p, kind="mergesort")
    ranks = np.arange(1, n + 1, dtype=float)
    ratios = p[order] * (float(n) / ranks) if n else np.empty(0, dtype=float)
    return ratios, order


def compute_fdr(pvals) -> np.ndarray:
    """Benjamini–Hochberg adjusted p-values, aligned with the input order.

    The raw ratios are made monotone with a backward running minimum
    (step-up) and then clamped to 1, so that adjusted values never decrease
    with increasing p-value.
    """
    ratios, order = bh_ratios(pvals)
    if ratios.size == 0:
        return np.empty(0, dtype=float)
    adj = np.minimum.accumulate(ratios[::-1])[::-1]
    adj = np.minimum(adj, 1.0)
    out = np.empty_like(adj)
    out[order] = adj
    return out


def pvalue_at_fdr_cutoff(pvals, fdr_threshold: float) -> float | None:
    """Largest p-value still passing *fdr_threshold* on the raw-ratio scan.

    Walks ranks in ascending p order and stops at the first rank whose raw
    (non-monotone) ratio exceeds the threshold, returning the p-value of the
    rank before it.  When the first rank already fails the smallest p-value
    is returned; when no rank fails the largest one is.  Returns ``None``
    for an empty input.

    This deliberately does not reuse :func:`compute_fdr`: the monotone array
    and the first-failure scan can disagree at boundary ranks.
    """
    ratios, order = bh_ratios(pvals)
    if ratios.size == 0:
        return None
    sorted_p = np.asarray(pvals, dtype=float).ravel()[order]
    failing = np.flatnonzero(ratios > fdr_threshold)
    if failing.size == 0:
        return float(sorted_p[-1])
    k = int(failing[0])
    return float(sorted_p[0] if k == 0 else sorted_p[k - 1])


def significance_cutoff(pvals, fdr_threshold: float) -> float | None:
    """``-log10`` of :func:`pvalue_at_fdr_cutoff`, or ``None`` if undefined."""
    p = pvalue_at_fdr_cutoff(pvals, fdr_threshold)
    if p is None:
        return None
    return float(-np.log10(p))
