from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from volcano_explorer.config import ExplorerConfig, load_config, setup_logging
from volcano_explorer.io import CSV_HEADER, export_csv, load_json_config


def test_export_csv_rows_in_dataset_order_full_precision(small_frame):
    text = export_csv(small_frame, ["EGFR_3", "TP53_1"])
    lines = text.split("\n")
    assert lines[0] == "id,log2FC,pval,fdr,negLog10P"
    assert len(lines) == 3
    fields = lines[1].split(",")
    assert fields[0] == "TP53_1"
    row = small_frame.iloc[0]
    assert float(fields[1]) == row["log2fc"]
    assert float(fields[2]) == row["pval"]
    assert float(fields[3]) == row["fdr"]
    assert float(fields[4]) == row["neg_log10_p"]
    assert lines[2].startswith("EGFR_3,0.2,0.5,")
    assert not text.endswith("\n")


def test_export_csv_empty_and_unknown_ids(small_frame):
    assert export_csv(small_frame, []) == CSV_HEADER
    assert export_csv(small_frame, {"missing"}) == CSV_HEADER


def test_export_csv_is_byte_identical(small_frame):
    ids = {"TP53_6", "MYC_4", "BRCA1_2"}
    assert export_csv(small_frame, ids) == export_csv(small_frame, set(ids))


def test_load_json_config_errors(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_json_config(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text('{"a": 1,}\n', encoding="utf-8")
    with pytest.raises(ValueError, match=r"line \d+, column \d+"):
        load_json_config(bad)

    listy = tmp_path / "list.json"
    listy.write_text(json.dumps([1, 2]), encoding="utf-8")
    with pytest.raises(ValueError, match="expected JSON object"):
        load_json_config(listy)

    yml = tmp_path / "cfg.yaml"
    yml.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError, match="Use a .json config file"):
        load_json_config(yml)


def test_load_config_roundtrip(tmp_path: Path):
    path = tmp_path / "explorer.json"
    path.write_text(json.dumps({"fdr_threshold": 0.1, "n_points": 300, "seed": 9}), encoding="utf-8")
    cfg = load_config(path)
    assert cfg.fdr_threshold == 0.1
    assert cfg.n_points == 300
    assert cfg.seed == 9
    assert cfg.top_n == 10
    assert load_config(None) == ExplorerConfig()


def test_config_rejects_unknown_and_invalid_values():
    with pytest.raises(ValueError, match="Unknown config keys: bogus"):
        ExplorerConfig.from_mapping({"bogus": 1})
    with pytest.raises(ValueError, match="n_points"):
        ExplorerConfig.from_mapping({"n_points": -1})


def test_config_coerces_numeric_strings():
    cfg = ExplorerConfig.from_mapping({"n_points": "10", "fdr_threshold": "0.1", "seed": 2.0})
    assert cfg.n_points == 10 and isinstance(cfg.n_points, int)
    assert cfg.fdr_threshold == 0.1
    assert cfg.seed == 2
    assert ExplorerConfig.from_mapping({"seed": None}).seed is None


@pytest.mark.parametrize(
    "data, field",
    [
        ({"n_points": "ten"}, "n_points"),
        ({"n_points": 2.5}, "n_points"),
        ({"top_n": True}, "top_n"),
        ({"show_labels": "yes"}, "show_labels"),
        ({"effect_span": [1]}, "effect_span"),
        ({"seed": None, "search_pad": None}, "search_pad"),
    ],
)
def test_config_rejects_wrong_types_with_value_error(data, field):
    with pytest.raises(ValueError, match=field):
        ExplorerConfig.from_mapping(data)


def test_with_overrides_skips_none():
    cfg = ExplorerConfig(seed=3).with_overrides(seed=None, n_points=10)
    assert cfg.seed == 3
    assert cfg.n_points == 10


def test_setup_logging_installs_single_handler():
    logger = setup_logging("DEBUG")
    setup_logging(logging.INFO)
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
