"""Pytest fixtures shared across the chart tests."""

from __future__ import annotations

import math
import os

# Must be set before any Qt module creates the application
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import numpy as np
import pytest
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QApplication

from radialchart.model.dataset import CategoryDataset, VisibilityConfig
from radialchart.render.renderer import ChartRenderer


@pytest.fixture(scope="session")
def qapp():
    """Return the process-wide QApplication (offscreen platform)."""

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def renderer(qapp) -> ChartRenderer:
    """Return a renderer without the decorative overlay, so pixels only show data layers."""

    return ChartRenderer(overlay_locator=None)


@pytest.fixture
def all_off() -> VisibilityConfig:
    return VisibilityConfig(show_benchmark=False, show_average=False, show_values=False)


def dataset(scores=None, benchmarks=None, averages=None) -> CategoryDataset:
    return CategoryDataset.from_sequences(scores, benchmarks, averages)


def rgb(color: str) -> tuple[int, int, int]:
    c = QColor(color)
    return c.red(), c.green(), c.blue()


def pixel_at(pixels: np.ndarray, radius: float, angle: float) -> np.ndarray:
    """RGBA pixel at polar position (radius, angle) around the image centre."""

    h, w, _ = pixels.shape
    x = int(round(w / 2 + radius * math.cos(angle)))
    y = int(round(h / 2 + radius * math.sin(angle)))
    return pixels[y, x]


def assert_color(pixel: np.ndarray, color: str, tol: int = 3) -> None:
    expected = rgb(color)
    assert pixel[3] == 255, f"pixel {tuple(pixel)} is not opaque"
    assert all(abs(int(pixel[i]) - expected[i]) <= tol for i in range(3)), (
        f"pixel {tuple(pixel)} != {color} {expected}"
    )
