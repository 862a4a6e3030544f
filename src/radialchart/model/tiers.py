"""
Tier / Ring Model
=================
Maps (category, value) pairs onto slice angles and tier radii.

The chart is split into `slice_count` equal slices, one per category, starting
at the top (-pi/2) and proceeding clockwise. Each slice holds
`tiers_per_slice` concentric tiers; each tier is divided into
`sub_layers_per_tier` sub-layers. With the default configuration the four
tiers together form one continuous gauge of 40 steps covering 0-4 in
increments of 0.1.
"""
from __future__ import annotations

import math

from radialchart.config import ChartConfig, DEFAULT_CONFIG
from radialchart.model.geometry_primitives import AnnularBand

ROTATION_ANGLE: float = -math.pi / 2


def value_to_steps(value: float, config: ChartConfig = DEFAULT_CONFIG) -> int:
    """
    Number of whole sub-layers represented by `value` (floor of value*10 for
    the default scale).

    The product is rounded to 9 decimals before flooring so that decimal
    inputs such as 2.3 (2.3 * 10 == 22.999999999999996) keep their step.
    """
    return math.floor(round(value * config.steps_per_unit, 9))


def filled_sub_layers(value: float, tier: int, config: ChartConfig = DEFAULT_CONFIG) -> int:
    """
    How many sub-layers of `tier` are filled for `value`.

    Returns clamp(steps(value) - tier * sub_layers, 0, sub_layers).
    """
    n = config.sub_layers_per_tier
    return max(0, min(n, value_to_steps(value, config) - tier * n))


def slice_angle(config: ChartConfig = DEFAULT_CONFIG) -> float:
    return 2 * math.pi / config.slice_count


def slice_angles(category: int, config: ChartConfig = DEFAULT_CONFIG) -> tuple[float, float]:
    """Start and end angle of a category's slice."""
    step = slice_angle(config)
    return category * step + ROTATION_ANGLE, (category + 1) * step + ROTATION_ANGLE


def max_radius_for(width: float, height: float, config: ChartConfig = DEFAULT_CONFIG) -> float:
    """Outer radius of the chart on a surface of the given size."""
    return min(width, height) / 2 * config.radius_fraction


def layer_thickness(max_radius: float, config: ChartConfig = DEFAULT_CONFIG) -> float:
    return max_radius / config.total_layers


def tier_start_layer(tier: int, config: ChartConfig = DEFAULT_CONFIG) -> int:
    """Index of the first radial layer of a tier."""
    return config.center_hole + tier * config.tier_pitch


def tier_band(
    category: int,
    tier: int,
    max_radius: float,
    config: ChartConfig = DEFAULT_CONFIG,
) -> AnnularBand:
    """Full (unfilled) geometry of one tier of one slice."""
    lt = layer_thickness(max_radius, config)
    start_radius = tier_start_layer(tier, config) * lt
    end_radius = start_radius + config.ring_thickness * lt
    start_angle, end_angle = slice_angles(category, config)
    return AnnularBand(start_radius, end_radius, start_angle, end_angle)


def filled_band(
    band: AnnularBand,
    value: float,
    tier: int,
    config: ChartConfig = DEFAULT_CONFIG,
) -> AnnularBand | None:
    """
    The part of `band` filled by `value`, growing outwards from its inner
    edge, or None if nothing of this tier is filled.
    """
    filled = filled_sub_layers(value, tier, config)
    if filled <= 0:
        return None
    end_radius = band.start_radius + band.thickness * (filled / config.sub_layers_per_tier)
    return band.with_radii(band.start_radius, end_radius)


def filled_extent(value: float, max_radius: float, config: ChartConfig = DEFAULT_CONFIG) -> float:
    """Total filled radial length over all tiers of a slice."""
    total = 0.0
    for tier in range(config.tiers_per_slice):
        band = filled_band(tier_band(0, tier, max_radius, config), value, tier, config)
        if band is not None:
            total += band.thickness
    return total


def gap_angles(config: ChartConfig = DEFAULT_CONFIG) -> list[float]:
    """
    Rotation of the carving frame for each slice gap.

    The gap rectangle extends along the +y axis of the rotated frame, i.e. a
    quarter turn clockwise from the rotation, so it lands on the boundary
    between slice c-1 and slice c.
    """
    step = slice_angle(config)
    return [c * step + ROTATION_ANGLE - math.pi / 2 for c in range(config.slice_count)]


def boundary_angles(config: ChartConfig = DEFAULT_CONFIG) -> list[float]:
    """Screen direction of each slice boundary (start angle of each slice)."""
    return [slice_angles(c, config)[0] for c in range(config.slice_count)]


def value_label_radius(
    max_radius: float,
    distance_percent: float,
    config: ChartConfig = DEFAULT_CONFIG,
) -> float:
    """
    Radius of the value labels: centre of the gap between the last two
    tiers, scaled by `distance_percent`/100.
    """
    lt = layer_thickness(max_radius, config)
    last = config.tiers_per_slice - 1
    inner_tier_outer = (tier_start_layer(last - 1, config) + config.ring_thickness) * lt
    outer_tier_inner = tier_start_layer(last, config) * lt
    return (inner_tier_outer + outer_tier_inner) / 2 * (distance_percent / 100)
