from __future__ import annotations

import logging
import math

import pandas as pd
import pytest

from volcano_explorer.config import ExplorerConfig
from volcano_explorer.explorer.session import VolcanoSession
from volcano_explorer.explorer.state import DragRect, InteractionState
from volcano_explorer.io import CSV_HEADER

BOX = DragRect(x0=1.0, x1=3.5, y0=2.5, y1=6.5, width_px=120, height_px=90)


@pytest.fixture
def session(small_frame) -> VolcanoSession:
    return VolcanoSession(ExplorerConfig(), dataset=small_frame)


def test_generates_dataset_from_config_seed():
    a = VolcanoSession(ExplorerConfig(seed=5, n_points=50))
    b = VolcanoSession(ExplorerConfig(seed=5, n_points=50))
    assert a.seed == 5
    assert len(a.dataset) == 50
    pd.testing.assert_frame_equal(a.dataset, b.dataset)


def test_classified_observations_follow_thresholds(session):
    cats = session.get_classified_observations()["category"].tolist()
    assert cats == ["sig_up", "sig_down", "not_sig", "sig_up", "not_sig", "sig_up"]
    session.set_thresholds(0.4, 0.05)
    cats = session.get_classified_observations()["category"].tolist()
    assert cats[4] == "sig_down"
    session.set_thresholds(1.0, 1e-5)
    cats = session.get_classified_observations()["category"].tolist()
    assert cats == ["sig_up"] + ["not_sig"] * 5
    assert "category" not in session.dataset.columns


def test_thresholds_are_clamped(session):
    t = session.set_thresholds(-2, 3)
    assert (t.fc, t.fdr) == (0.0, 1.0)


def test_cutoff_recomputed_on_threshold_change(session):
    assert session.get_significance_cutoff() == pytest.approx(-math.log10(0.04))
    session.set_thresholds(1.0, 0.01)
    assert session.get_significance_cutoff() == pytest.approx(-math.log10(1e-3))


def test_cutoff_undefined_for_empty_dataset():
    s = VolcanoSession(ExplorerConfig(seed=1, n_points=0))
    assert s.dataset.empty
    assert s.get_significance_cutoff() is None
    assert s.get_classified_observations().empty
    assert s.get_label_set() == set()
    assert s.summary().summary() == "No observations"


def test_top_n_clamped(session):
    assert session.set_top_n(99) == 50
    assert session.set_top_n(-3) == 0
    assert session.set_top_n("x") == 10
    assert session.set_top_n(None) == 10


def test_click_after_box_select_does_not_pin(session):
    session.on_pointer_drag(BOX)
    assert len(session.get_interaction_state().selected) == 3
    session.on_point_click("EGFR_3")
    assert session.get_interaction_state().pinned == frozenset()


def test_click_on_unknown_id_is_noop(session):
    before = session.get_interaction_state()
    assert session.on_point_click("NOT_AN_ID") is before
    assert session.get_interaction_state().pinned == frozenset()
    assert "NOT_AN_ID" not in session.get_label_set()


def test_empty_click_clears_pins_and_selection(session):
    session.on_point_click("EGFR_3")
    session.on_point_click("AKT1_5")
    session.on_pointer_drag(BOX)
    session.on_empty_click()
    state = session.get_interaction_state()
    assert state.pinned == frozenset() and state.selected == frozenset()


def test_regenerate_resets_interaction(session):
    session.on_point_click("TP53_1")
    session.on_search("MYC")
    assert session.get_interaction_state().pinned == {"TP53_1"}
    session.on_regenerate(7)
    assert session.get_interaction_state() == InteractionState()
    assert session.seed == 7
    assert len(session.dataset) == session.config.n_points


def test_regenerate_without_seed_uses_clock(session, monkeypatch):
    monkeypatch.setattr("volcano_explorer.explorer.session.default_seed", lambda: 1234)
    session.on_regenerate()
    assert session.seed == 1234


def test_search_round_trip(session, caplog):
    state = session.on_search("tp53")
    assert state.search_highlight == "TP53_1"
    assert state.zoom is not None
    assert sum(state.zoom.x) / 2 == pytest.approx(2.0)
    x_range, y_range = session.view_ranges()
    assert x_range == list(state.zoom.x)

    caplog.set_level(logging.INFO, logger="volcano_explorer")
    state = session.on_search("nope")
    assert state.search_highlight is None and state.zoom is None
    assert "not found" in caplog.text


def test_reset_zoom(session):
    session.on_point_click("EGFR_3")
    session.on_search("BRCA")
    session.on_reset_zoom()
    state = session.get_interaction_state()
    assert state.zoom is None and state.search_highlight is None
    assert state.pinned == {"EGFR_3"}


def test_label_set(session):
    session.set_top_n(1)
    session.on_point_click("AKT1_5")
    assert session.get_label_set() == {"TP53_1", "AKT1_5"}
    session.set_show_labels(False)
    assert session.get_label_set() == {"AKT1_5"}


def test_export_is_idempotent(session):
    session.on_pointer_drag(BOX)
    first = session.export_selected_csv()
    second = session.export_selected_csv()
    assert first == second
    lines = first.split("\n")
    assert lines[0] == CSV_HEADER
    assert [line.split(",")[0] for line in lines[1:]] == ["TP53_1", "MYC_4", "TP53_6"]


def test_view_ranges_default_extent(session):
    x_range, y_range = session.view_ranges()
    assert x_range == pytest.approx([-3.0, 3.5])
    assert y_range[0] == 0.0
    assert y_range[1] == pytest.approx(6.0 * 1.05)
