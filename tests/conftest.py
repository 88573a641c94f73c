from __future__ import annotations

import pandas as pd
import pytest

from volcano_explorer.dataset import COLUMNS, attach_derived


@pytest.fixture
def small_frame() -> pd.DataFrame:
    raw = pd.DataFrame(
        {
            "id": ["TP53_1", "BRCA1_2", "EGFR_3", "MYC_4", "AKT1_5", "TP53_6"],
            "gene_symbol": ["TP53", "BRCA1", "EGFR", "MYC", "AKT1", "TP53"],
            "log2fc": [2.0, -2.5, 0.2, 1.5, -0.5, 3.0],
            "pval": [1e-6, 1e-5, 0.5, 1e-4, 0.04, 1e-3],
        }
    )
    return attach_derived(raw)[COLUMNS]
