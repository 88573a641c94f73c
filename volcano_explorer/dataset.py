"""Synthetic volcano dataset generation.

Observations are drawn from the seeded LCG in :mod:`volcano_explorer.rng`,
so a given ``(seed, n)`` always reproduces the same frame.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from .rng import create_generator
from .stats import P_VALUE_FLOOR, compute_fdr, significance_score, two_sided_pvalue

logger = logging.getLogger(__name__)

COLUMNS = ["id", "gene_symbol", "log2fc", "pval", "fdr", "neg_log10_p"]

DEFAULT_N_POINTS = 1200
DEFAULT_EFFECT_SPAN = 6.0
NOISE_SCALE = 2.0

# Real symbols so the description lookup has something to find.
GENE_SYMBOLS = (
    "TP53", "BRCA1", "EGFR", "MYC", "AKT1", "PTEN", "KRAS", "ERBB2", "VEGFA", "IL6",
    "TNF", "MAPK1", "JUN", "FOS", "STAT3", "NFKB1", "CDKN1A", "BCL2", "CASP3", "ESR1",
    "AR", "INS", "INSR", "IGF1", "CTNNB1", "APC", "SMAD4", "TGFB1", "CDK1", "CCND1",
    "RB1", "E2F1", "MDM2", "CDKN2A", "GAPDH", "ACTB", "HSP90AA1", "HSPA8", "TUBB", "LMNA",
    "SOD1", "CAT", "GPX1", "NFE2L2", "HIF1A", "VHL", "MTOR", "PIK3CA", "GSK3B", "NOTCH1",
    "WNT1", "DVL1", "AXIN1", "LEF1", "TCF7L2", "MYCN", "FLT1", "KDR", "PDGFRA", "MET",
    "RET", "BRAF", "RAF1", "MAP2K1", "MAPK3", "ELK1", "CREB1", "ATF2", "JAK2", "SOCS1",
    "IL10", "IFNG", "CD4", "CD8A", "CD19", "CD34", "KIT", "FLT3", "NPM1", "CEBPA",
    "RUNX1", "GATA1", "TPO", "EPO", "VEGFB", "FGF2", "PDGFA", "EGF", "TGFB2", "BMP4",
    "WNT3A", "SHH", "DLL1", "JAG1", "HES1", "HEY1", "SNAI1", "TWIST1", "ZEB1", "CDH1",
    "VIM", "FN1", "COL1A1", "MMP2", "MMP9", "TIMP1", "SERPINE1", "PLAU", "CXCL12", "CCL2",
    "IL1B", "IL8", "COX2", "PTGS2", "NOS2", "ARG1", "IDO1", "CD274", "PDCD1", "CTLA4",
    "CD80", "CD86", "IL2", "IL12A", "TGFB3", "BMP2", "WNT5A", "FZD1", "LRP5", "DKK1",
)


def empty_dataset() -> pd.DataFrame:
    """Return a zero-row frame with the dataset columns."""
    return pd.DataFrame({
        "id": pd.Series(dtype=object),
        "gene_symbol": pd.Series(dtype=object),
        "log2fc": pd.Series(dtype=float),
        "pval": pd.Series(dtype=float),
        "fdr": pd.Series(dtype=float),
        "neg_log10_p": pd.Series(dtype=float),
    })


def attach_derived(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of *df* with ``fdr`` and ``neg_log10_p`` recomputed from ``pval``.

    Both columns are computed from the same p-value vector and assigned
    together, so a frame never carries derived fields from a different
    p-value set.
    """
    df = df.copy()
    pvals = df["pval"].to_numpy(dtype=float)
    fdr = compute_fdr(pvals)
    scores = significance_score(pvals)
    df["fdr"] = fdr
    df["neg_log10_p"] = scores
    return df


def generate_dataset(
    seed: int,
    n: int = DEFAULT_N_POINTS,
    *,
    span: float = DEFAULT_EFFECT_SPAN,
) -> pd.DataFrame:
    """Generate *n* synthetic observations from *seed*.

    Parameters
    ----------
    seed : int
        LCG seed.
    n : int
        Number of observations.
    span : float
        Width of the uniform effect-size interval, centred on zero.

    Returns
    -------
    pd.DataFrame
        Columns ``id, gene_symbol, log2fc, pval, fdr, neg_log10_p`` in
        generation order.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}.")
    if n == 0:
        return empty_dataset()

    rng = create_generator(seed)
    ids: list[str] = []
    symbols: list[str] = []
    log2fc = np.empty(n, dtype=float)
    z = np.empty(n, dtype=float)
    for i in range(n):
        symbol = GENE_SYMBOLS[i % len(GENE_SYMBOLS)]
        symbols.append(symbol)
        ids.append(f"{symbol}_{i + 1}")
        log2fc[i] = (rng() - 0.5) * span
        z[i] = abs(log2fc[i]) + rng() * NOISE_SCALE

    pval = np.maximum(P_VALUE_FLOOR, two_sided_pvalue(z))
    raw = pd.DataFrame({
        "id": ids,
        "gene_symbol": symbols,
        "log2fc": log2fc,
        "pval": pval,
    })
    df = attach_derived(raw)[COLUMNS]
    logger.debug("Generated %d observations from seed %d", n, seed)
    return df
