"""volcano_explorer — FDR-classified volcano plots with interactive selection."""

from .rng import create_generator
from .dataset import GENE_SYMBOLS, generate_dataset
from .stats import (
    compute_fdr,
    pvalue_at_fdr_cutoff,
    significance_cutoff,
    two_sided_pvalue,
)
from .classification import (
    Category,
    ClassificationSummary,
    Thresholds,
    classify,
    classify_frame,
    top_significant,
)
from .config import ExplorerConfig, load_config
from .io import export_csv
from .explorer import DragRect, InteractionState, VolcanoSession, ZoomWindow

__all__ = [
    # rng / dataset
    "create_generator",
    "generate_dataset",
    "GENE_SYMBOLS",
    # stats
    "compute_fdr",
    "pvalue_at_fdr_cutoff",
    "significance_cutoff",
    "two_sided_pvalue",
    # classification
    "Category",
    "Thresholds",
    "classify",
    "classify_frame",
    "top_significant",
    "ClassificationSummary",
    # config / io
    "ExplorerConfig",
    "load_config",
    "export_csv",
    # explorer
    "VolcanoSession",
    "InteractionState",
    "DragRect",
    "ZoomWindow",
]
