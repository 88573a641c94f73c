"""CSV export of selected observations and JSON config loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

CSV_HEADER = "id,log2FC,pval,fdr,negLog10P"
CSV_FIELDS = ["id", "log2fc", "pval", "fdr", "neg_log10_p"]


def export_csv(df: pd.DataFrame, ids: Iterable[str]) -> str:
    """Render the rows of *df* whose id is in *ids* as CSV text.

    Rows keep dataset order regardless of the order of *ids*.  Floats are
    written with ``repr`` so no precision is lost, and the same inputs
    always produce identical text.

    Parameters
    ----------
    df : pd.DataFrame
        Dataset frame with the export columns.
    ids : iterable of str
        Ids to export.

    Returns
    -------
    str
        Header line followed by one line per row, ``\\n``-separated.
    """
    wanted = set(ids)
    rows = df[df["id"].isin(wanted)] if wanted else df.iloc[0:0]
    lines = [CSV_HEADER]
    for rec in rows[CSV_FIELDS].itertuples(index=False):
        lines.append(",".join([
            str(rec.id),
            repr(float(rec.log2fc)),
            repr(float(rec.pval)),
            repr(float(rec.fdr)),
            repr(float(rec.neg_log10_p)),
        ]))
    return "\n".join(lines)


def load_json_config(path: str | Path) -> dict[str, Any]:
    """Load a config mapping from a JSON file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    if config_path.suffix.lower() != ".json":
        raise ValueError(
            f"Unsupported config format for '{config_path}'. Use a .json config file."
        )

    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(
            f"Invalid JSON in config '{config_path}' at line {exc.lineno}, "
            f"column {exc.colno}: {exc.msg}"
        ) from exc

    if not isinstance(data, dict):
        raise ValueError(
            f"Invalid config root in '{config_path}': expected JSON object, got {type(data).__name__}."
        )
    return data
