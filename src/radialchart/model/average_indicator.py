"""
Average Indicator
=================
Geometry of the marker that shows a category's average value.

The marker sits on a single sub-layer and is wider and thicker than the
ordinary ring segments: two round end caps, a "protrusion" band spanning the
full marker width, and a "main" band clipped to the slice so it never crosses
into the neighbouring slice. Everything here is pure geometry; drawing order
and colours are handled by the renderer.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from radialchart.config import ChartConfig, DEFAULT_CONFIG
from radialchart.model.geometry_primitives import AnnularBand, Circle, Point, polar_to_cartesian
from radialchart.model.tiers import slice_angles, value_to_steps


@dataclass(frozen=True)
class AverageIndicator:
    start_cap: Circle
    end_cap: Circle
    main_band: AnnularBand
    protrusion_band: AnnularBand
    stroke_width: float


def average_layer_index(average: float, config: ChartConfig = DEFAULT_CONFIG) -> Optional[int]:
    """
    Sub-layer (0-based, counted over all tiers) holding the marker, or None
    when the average is too small to show (< 0.1 on the default scale; 0.1
    itself sits on the innermost sub-layer).
    """
    layer = value_to_steps(average, config) - 1
    return layer if layer >= 0 else None


def absolute_layer(average_layer: int, config: ChartConfig = DEFAULT_CONFIG) -> int:
    """Convert a gauge sub-layer into a radial layer index, skipping centre hole and gaps."""
    tier_index, layer_within_tier = divmod(average_layer, config.sub_layers_per_tier)
    return config.center_hole + tier_index * config.tier_pitch + layer_within_tier


def indicator_geometry(
    layer_index: int,
    start_angle: float,
    end_angle: float,
    layer_thickness: float,
    center: Point,
    config: ChartConfig = DEFAULT_CONFIG,
    scale: float = 1.0,
) -> AverageIndicator:
    """
    Build the marker centred on radial layer `layer_index` and on the middle
    of the angular range [start_angle, end_angle].

    The protrusion has a fixed linear length (`average_protrusion` scale
    units) on the layer's mid radius, so its angular half-width shrinks as the
    radius grows.
    """
    base_start_radius = layer_index * layer_thickness
    base_end_radius = base_start_radius + layer_thickness
    mid_radius = (base_start_radius + base_end_radius) / 2

    protrusion = config.average_protrusion * scale
    # at very small radii the protrusion would exceed the radius itself
    ratio = min(1.0, protrusion / mid_radius) if mid_radius > 0 else 1.0
    protrusion_angle = math.asin(ratio)

    mid_angle = (start_angle + end_angle) / 2
    new_start_angle = mid_angle - protrusion_angle
    new_end_angle = mid_angle + protrusion_angle

    thickness_increase = layer_thickness * config.average_thickness_increase
    start_radius = base_start_radius - thickness_increase / 2
    end_radius = base_end_radius + thickness_increase / 2
    cap_radius = (end_radius - start_radius) / 2

    protrusion_band = AnnularBand(start_radius, end_radius, new_start_angle, new_end_angle)

    return AverageIndicator(
        start_cap=Circle(polar_to_cartesian(center, mid_radius, new_start_angle), cap_radius),
        end_cap=Circle(polar_to_cartesian(center, mid_radius, new_end_angle), cap_radius),
        main_band=protrusion_band.clipped_to(start_angle, end_angle),
        protrusion_band=protrusion_band,
        stroke_width=config.average_stroke_width * scale,
    )


def build_average_indicator(
    average: float,
    category: int,
    layer_thickness: float,
    center: Point,
    config: ChartConfig = DEFAULT_CONFIG,
    scale: float = 1.0,
) -> Optional[AverageIndicator]:
    """Marker for one category's average, or None if the average is not shown."""
    average_layer = average_layer_index(average, config)
    if average_layer is None:
        return None
    start_angle, end_angle = slice_angles(category, config)
    return indicator_geometry(
        absolute_layer(average_layer, config),
        start_angle,
        end_angle,
        layer_thickness,
        center,
        config,
        scale,
    )
