"""Tests for the three-variant PNG export."""

from __future__ import annotations

import asyncio
import os

import numpy as np
import pytest
from PySide6.QtGui import QImage

from conftest import dataset
from radialchart.model.dataset import VisibilityConfig
from radialchart.render.export import DEFAULT_BASE_NAME, ExportError, export_all, image_to_png_bytes
from radialchart.render.surface import image_to_array

BASE = 150


def run_export(renderer, visibility=None, base_name="chart", output_dir=None, data=None):
    return asyncio.run(export_all(
        renderer,
        data or dataset(scores=[2.5] * 6, benchmarks=[3] * 6, averages=[1.2] * 6),
        base_name=base_name,
        visibility=visibility,
        base_size=BASE,
        export_scale=2,
        output_dir=output_dir,
    ))


@pytest.mark.parametrize("interactive", [
    VisibilityConfig(show_benchmark=False, show_average=False),
    VisibilityConfig(show_benchmark=True, show_average=True),
    VisibilityConfig(show_benchmark=True, show_average=False, show_values=True),
])
def test_variant_flags_ignore_interactive_state(renderer, interactive) -> None:
    results = run_export(renderer, visibility=interactive)

    flags = [(r.visibility.show_benchmark, r.visibility.show_average) for r in results]
    assert flags == [(False, False), (True, False), (False, True)]
    assert all(r.visibility.show_values == interactive.show_values for r in results)


def test_interactive_config_is_not_modified(renderer) -> None:
    interactive = VisibilityConfig(show_benchmark=False, show_average=False, value_font_size_px=80)
    run_export(renderer, visibility=interactive)
    assert interactive == VisibilityConfig(show_benchmark=False, show_average=False, value_font_size_px=80)


def test_label_settings_are_carried_over(renderer) -> None:
    interactive = VisibilityConfig(
        show_values=True, value_angle_offset_degrees=12, value_distance_percent=90, overlay_vertical_offset=0
    )
    for result in run_export(renderer, visibility=interactive):
        assert result.visibility.value_angle_offset_degrees == 12
        assert result.visibility.value_distance_percent == 90
        assert result.visibility.overlay_vertical_offset == 0


def test_names_and_sizes(renderer) -> None:
    results = run_export(renderer, base_name="team")
    assert [r.name for r in results] == ["team", "team_Benchmark", "team_Average"]
    assert [r.filename for r in results] == ["team.png", "team_Benchmark.png", "team_Average.png"]
    for r in results:
        assert (r.image.width(), r.image.height()) == (BASE * 2, BASE * 2)
        assert r.path is None


@pytest.mark.parametrize("base_name", ["", "   ", None])
def test_empty_base_name_falls_back(renderer, base_name) -> None:
    results = run_export(renderer, base_name=base_name)
    assert results[0].name == DEFAULT_BASE_NAME
    assert results[1].name == f"{DEFAULT_BASE_NAME}_Benchmark"


def test_variants_differ_where_flags_differ(renderer) -> None:
    plain, benchmark, average = (image_to_array(r.image) for r in run_export(renderer))
    assert not np.array_equal(plain, benchmark)
    assert not np.array_equal(plain, average)
    assert not np.array_equal(benchmark, average)


def test_variant_matches_direct_render(renderer) -> None:
    data = dataset(scores=[1, 2, 3, 4, 0.5, 2.2], benchmarks=[2] * 6)
    results = run_export(renderer, data=data)
    direct = asyncio.run(renderer.render_image(
        BASE * 2, BASE * 2, data, VisibilityConfig().with_flags(show_benchmark=True, show_average=False)
    ))
    assert np.array_equal(image_to_array(results[1].image), image_to_array(direct))


def test_files_are_written(renderer, tmp_path) -> None:
    out = tmp_path / "exports"
    results = run_export(renderer, base_name="q3", output_dir=str(out))

    for r in results:
        assert r.path == os.path.join(str(out), r.filename)
        with open(r.path, "rb") as f:
            assert f.read(8) == b"\x89PNG\r\n\x1a\n"

    reloaded = QImage(results[0].path)
    assert (reloaded.width(), reloaded.height()) == (BASE * 2, BASE * 2)


def test_unwritable_target_raises_export_error(renderer, tmp_path) -> None:
    blocker = tmp_path / "q3.png"
    blocker.mkdir()
    with pytest.raises(ExportError):
        run_export(renderer, base_name="q3", output_dir=str(tmp_path))


def test_png_encoding_of_null_image_fails(qapp) -> None:
    with pytest.raises(ExportError):
        image_to_png_bytes(QImage())
