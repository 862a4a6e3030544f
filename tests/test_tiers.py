"""Unit tests for the tier/ring model."""

from __future__ import annotations

import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from radialchart.config import DEFAULT_CONFIG
from radialchart.model.tiers import (
    boundary_angles,
    filled_band,
    filled_extent,
    filled_sub_layers,
    gap_angles,
    layer_thickness,
    max_radius_for,
    slice_angles,
    tier_band,
    value_label_radius,
    value_to_steps,
)

value_st = st.floats(min_value=0.0, max_value=4.0, allow_nan=False, allow_infinity=False)
tier_st = st.integers(min_value=0, max_value=3)


@given(value=value_st, tier=tier_st)
@settings(max_examples=300)
def test_filled_sub_layers_matches_formula(value: float, tier: int) -> None:
    expected = max(0, min(10, value_to_steps(value) - tier * 10))
    assert filled_sub_layers(value, tier) == expected
    assert 0 <= filled_sub_layers(value, tier) <= 10


@given(a=value_st, b=value_st, tier=tier_st)
@settings(max_examples=300)
def test_filled_sub_layers_is_monotonic(a: float, b: float, tier: int) -> None:
    low, high = sorted((a, b))
    assert filled_sub_layers(low, tier) <= filled_sub_layers(high, tier)


@given(value=value_st, max_radius=st.floats(min_value=1.0, max_value=5000.0))
@settings(max_examples=300)
def test_tiers_form_one_continuous_gauge(value: float, max_radius: float) -> None:
    lt = layer_thickness(max_radius)
    expected = DEFAULT_CONFIG.ring_thickness * lt * value_to_steps(value) / 10
    assert filled_extent(value, max_radius) == pytest.approx(expected, rel=1e-9, abs=1e-9)


@pytest.mark.parametrize(
    "value, steps",
    [(0.0, 0), (0.05, 0), (0.1, 1), (0.3, 3), (0.7, 7), (2.3, 23), (3.99, 39), (4.0, 40)],
)
def test_value_to_steps_keeps_decimal_inputs(value: float, steps: int) -> None:
    assert value_to_steps(value) == steps


def test_value_two_fills_exactly_the_first_two_tiers() -> None:
    assert [filled_sub_layers(2.0, t) for t in range(4)] == [10, 10, 0, 0]
    assert [filled_sub_layers(2.5, t) for t in range(4)] == [10, 10, 5, 0]


def test_slices_start_at_top_and_go_clockwise() -> None:
    start, end = slice_angles(0)
    assert start == pytest.approx(-math.pi / 2)
    assert end == pytest.approx(-math.pi / 2 + math.pi / 3)
    assert slice_angles(5)[1] == pytest.approx(3 * math.pi / 2)


def test_tier_band_radii_follow_layer_units() -> None:
    max_radius = 670.0  # 10 px per layer
    band = tier_band(2, 1, max_radius)
    assert band.start_radius == pytest.approx(310.0)
    assert band.end_radius == pytest.approx(410.0)
    assert (band.start_angle, band.end_angle) == pytest.approx(slice_angles(2))


def test_filled_band_grows_from_inner_edge() -> None:
    band = tier_band(0, 0, 670.0)
    assert filled_band(band, 0.0, 0) is None
    half = filled_band(band, 0.5, 0)
    assert half.start_radius == band.start_radius
    assert half.end_radius == pytest.approx(band.start_radius + band.thickness / 2)
    assert filled_band(band, 0.5, 1) is None


def test_max_radius_uses_smaller_side() -> None:
    assert max_radius_for(1000, 600) == pytest.approx(240.0)


def test_gap_rotations_point_at_slice_boundaries() -> None:
    rotations = gap_angles()
    assert len(rotations) == 6
    for c, rotation in enumerate(rotations):
        assert rotation == pytest.approx(c * math.pi / 3 - math.pi / 2 - math.pi / 2)
    for rotation, boundary in zip(rotations, boundary_angles()):
        # the carved strip extends a quarter turn clockwise from the frame rotation
        assert rotation + math.pi / 2 == pytest.approx(boundary)


def test_value_label_radius_sits_between_last_two_tiers() -> None:
    max_radius = 670.0
    radius = value_label_radius(max_radius, 100)
    assert tier_band(0, 2, max_radius).end_radius < radius < tier_band(0, 3, max_radius).start_radius
    assert value_label_radius(max_radius, 50) == pytest.approx(radius / 2)
