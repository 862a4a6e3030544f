"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths, chart constants
and the layout configuration of the radial layered chart.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths and magic numbers (layer counts,
   colours, scale factors) scattered throughout the renderer.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (overlay artwork) when the app is frozen into an .exe.
3. Safety: `ChartConfig` validates its own geometry, so a broken layout is
   rejected before anything is drawn.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEFAULT_OVERLAY_PATH (str): Absolute path to the decorative overlay.
    ChartConfig: Immutable layout/colour configuration.
    DEFAULT_CONFIG (ChartConfig): The configuration used by the application.
"""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


class ChartConfigError(ValueError):
    """Raised when a ChartConfig describes geometry that cannot be drawn."""


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/radialchart/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_OVERLAY_PATH: str = os.path.join(ASSETS_PATH, "roundletters.svg")

# On-screen size of the chart in logical pixels, and how many scale units
# (device pixels of the interactive image) one logical pixel holds.
DISPLAY_SIZE: int = 500
SCALE: int = 6
CANVAS_SIZE: int = DISPLAY_SIZE * SCALE
EXPORT_SCALE: int = 2

if not os.path.exists(ASSETS_PATH):
    logger.warning(f"Assets path not found at {ASSETS_PATH}")


@dataclass(frozen=True)
class ChartConfig:
    """
    Layout and colour constants of the chart.

    All radial quantities are expressed in layer units: the chart radius is
    split into `total_layers` equal layers, so the same configuration works
    at any output resolution.
    """
    total_layers: int = 67
    center_hole: int = 18
    ring_thickness: int = 10
    gap_thickness: int = 3
    slice_gap_thickness: float = 3.0

    slice_count: int = 6
    tiers_per_slice: int = 4
    sub_layers_per_tier: int = 10
    max_value: float = 4.0

    # fraction of half the surface size used as the outer radius
    radius_fraction: float = 0.8
    # how far past the outer radius the slice gaps extend (layer units)
    gap_overshoot_layers: float = 10.0

    tier_colors: tuple[str, ...] = ("#F2F2F2", "#e6e6e6", "#cccccc", "#999999")
    score_colors: tuple[str, ...] = ("#CEE5DA", "#6EC5CD", "#076C98", "#182E57")
    benchmark_color: str = "#F47B54"
    average_color: str = "#FFFF00"
    average_stroke_color: str = "#444444"

    label_fill_color: str = "white"
    label_stroke_color: str = "black"
    label_font_family: str = "Arial"

    # Average marker cosmetics, in scale units
    average_protrusion: float = 10.0
    average_stroke_width: float = 7.0
    average_thickness_increase: float = 1.2

    overlay_width_fraction: float = 1.0
    overlay_height_fraction: float = 0.88

    def __post_init__(self) -> None:
        self.validate()

    @property
    def tier_pitch(self) -> int:
        """Distance in layer units between the starts of two adjacent tiers."""
        return self.ring_thickness + self.gap_thickness

    @property
    def steps_per_unit(self) -> float:
        """Number of sub-layers representing a value increment of 1.0."""
        return self.sub_layers_per_tier * self.tiers_per_slice / self.max_value

    def validate(self) -> None:
        """
        Check the invariants of the layout.

        Raises:
            ChartConfigError: If the configuration cannot produce valid geometry.
        """
        for name in ("total_layers", "ring_thickness", "slice_count",
                     "tiers_per_slice", "sub_layers_per_tier"):
            if getattr(self, name) <= 0:
                raise ChartConfigError(f"'{name}' must be positive, got {getattr(self, name)}.")

        if self.center_hole < 0 or self.gap_thickness < 0 or self.slice_gap_thickness < 0:
            raise ChartConfigError("Center hole and gap thicknesses must not be negative.")

        if self.max_value <= 0:
            raise ChartConfigError(f"'max_value' must be positive, got {self.max_value}.")

        # the last tier has no trailing gap
        outer = self.center_hole + (self.tiers_per_slice - 1) * self.tier_pitch + self.ring_thickness
        if outer > self.total_layers:
            raise ChartConfigError(
                f"Tiers need {outer} layers but only {self.total_layers} are available."
            )

        for name in ("tier_colors", "score_colors"):
            colors = getattr(self, name)
            if len(colors) != self.tiers_per_slice:
                raise ChartConfigError(
                    f"'{name}' has {len(colors)} entries, expected {self.tiers_per_slice}."
                )

        steps = self.steps_per_unit
        if abs(steps - round(steps)) > 1e-9:
            raise ChartConfigError(
                f"Value scale does not map onto whole sub-layers ({steps} per unit)."
            )

        if not 0.0 < self.radius_fraction <= 1.0:
            raise ChartConfigError(f"'radius_fraction' must be in (0, 1], got {self.radius_fraction}.")


DEFAULT_CONFIG = ChartConfig()
