"""Tests for the interactive state store and the main window wiring."""

from __future__ import annotations

import pytest

from radialchart.app.state import ChartStore, Section
from radialchart.model.dataset import CategoryDataset, VisibilityConfig


@pytest.fixture
def store(qapp) -> ChartStore:
    return ChartStore()


@pytest.fixture
def emitted(store) -> list:
    received: list = []
    store.changed.connect(lambda data, vis: received.append((data, vis)))
    return received


def test_initial_state(store) -> None:
    assert store.dataset() == CategoryDataset.empty()
    assert store.visibility == VisibilityConfig()


def test_set_value_emits_snapshot(store, emitted) -> None:
    store.set_value(Section.SCORES, 2, 3.4)

    assert len(emitted) == 1
    data, vis = emitted[0]
    assert data.scores[2] == 3.4
    assert vis == store.visibility
    assert store.value(Section.SCORES, 2) == 3.4


def test_set_value_clamps(store, emitted) -> None:
    store.set_value(Section.BENCHMARKS, 0, 9)
    store.set_value(Section.AVERAGES, 1, -2)
    store.set_value(Section.AVERAGES, 2, "nonsense")

    assert store.value(Section.BENCHMARKS, 0) == 4.0
    assert store.value(Section.AVERAGES, 1) == 0.0
    assert store.value(Section.AVERAGES, 2) == 0.0
    # the last two leave the value at its current 0.0
    assert len(emitted) == 1


def test_unchanged_value_does_not_emit(store, emitted) -> None:
    store.set_value(Section.SCORES, 0, 1.5)
    store.set_value(Section.SCORES, 0, 1.5)
    assert len(emitted) == 1


def test_snapshots_are_independent(store, emitted) -> None:
    store.set_value(Section.SCORES, 0, 1.0)
    store.set_value(Section.SCORES, 0, 2.0)
    assert emitted[0][0].scores[0] == 1.0
    assert emitted[1][0].scores[0] == 2.0


def test_toggle_flips_flag(store, emitted) -> None:
    before = store.visibility.show_benchmark
    store.toggle("show_benchmark")
    assert store.visibility.show_benchmark is not before
    assert emitted[-1][1].show_benchmark is not before


def test_toggle_unknown_flag(store) -> None:
    with pytest.raises(ValueError):
        store.toggle("show_everything")


def test_set_visibility_ignores_no_op(store, emitted) -> None:
    store.set_visibility(show_values=store.visibility.show_values)
    assert emitted == []
    store.set_visibility(value_font_size_px=90)
    assert store.visibility.value_font_size_px == 90
    assert len(emitted) == 1


def test_main_window_redraws_on_input(qapp) -> None:
    from radialchart.app.main_window import MainWindow
    from radialchart.render.renderer import ChartRenderer

    window = MainWindow(renderer=ChartRenderer(overlay_locator=None))
    first = window.chart_view.image()
    assert first is not None and not first.isNull()

    window.panel.spins[Section.SCORES][0].setValue(2.5)
    assert window.store.value(Section.SCORES, 0) == 2.5
    assert window.chart_view.image() is not first

    window.panel.cb_values.setChecked(True)
    assert window.store.visibility.show_values
    assert window.panel.base_name() == "radial-chart"
    window.close()


def test_create_app_reuses_running_instance(qapp) -> None:
    from radialchart.app.application import create_app

    assert create_app() is qapp


def test_label_controls_update_store(qapp) -> None:
    from radialchart.app.main_window import MainWindow
    from radialchart.render.renderer import ChartRenderer

    window = MainWindow(renderer=ChartRenderer(overlay_locator=None))
    panel = window.panel
    panel.sp_font.setValue(80)
    panel.sp_distance.setValue(90)
    panel.sp_angle.setValue(-20)
    panel.sp_offset.setValue(0)

    vis = window.store.visibility
    assert vis.value_font_size_px == 80
    assert vis.value_distance_percent == 90
    assert vis.value_angle_offset_degrees == -20
    assert vis.overlay_vertical_offset == 0
    window.close()
