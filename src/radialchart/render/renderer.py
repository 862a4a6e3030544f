"""
Chart Renderer
==============
Draws one complete chart onto a DrawingSurface.

Drawing order is part of the result, not an optimisation:
    1. clear the surface,
    2. per category: base tiers, benchmark fill, score fill,
    3. average markers (after every slice, so no base ring covers them),
    4. slice gaps (erased after all fills),
    5. value labels,
    6. decorative overlay (awaited; failures are logged, not raised).

Nothing is cached between calls; every quantity is derived from the surface
size, the dataset and the VisibilityConfig passed in.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from PySide6.QtGui import QFont, QImage

from radialchart.config import CANVAS_SIZE, ChartConfig, ChartConfigError, DEFAULT_CONFIG, \
    DEFAULT_OVERLAY_PATH, SCALE
from radialchart.model.average_indicator import AverageIndicator, build_average_indicator
from radialchart.model.dataset import CategoryDataset, VisibilityConfig
from radialchart.model.geometry_primitives import AnnularBand, Point, deg2rad, polar_to_cartesian
from radialchart.model.tiers import (
    filled_band, gap_angles, layer_thickness, max_radius_for, slice_angles, tier_band, value_label_radius
)
from radialchart.render.overlay import OverlayLoadError, load_overlay, overlay_rect
from radialchart.render.surface import (
    DrawingSurface, QtSurface, arc_path, band_path, carve_angular_gap, circle_path, draw_annular_segment,
    new_image
)

logger = logging.getLogger(__name__)


def format_label(value: float) -> str:
    """One decimal, ties rounded away from zero (2.25 -> '2.3')."""
    return str(Decimal(repr(float(value))).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class ChartRenderer:
    """
    Stateless chart renderer.

    Args:
        config: Layout and colours.
        overlay_locator: Path of the decorative overlay, or None to skip it.
        reference_size: Size in pixels of the interactive canvas. Cosmetic
            lengths (marker protrusion and stroke, label font, overlay offset)
            are defined on that canvas and rescaled to the actual surface.
        scale: Scale units per display pixel on the reference canvas.
    """
    def __init__(
        self,
        config: ChartConfig = DEFAULT_CONFIG,
        overlay_locator: Optional[str] = DEFAULT_OVERLAY_PATH,
        reference_size: float = CANVAS_SIZE,
        scale: float = SCALE,
    ) -> None:
        if not isinstance(config, ChartConfig):
            raise ChartConfigError(f"Expected a ChartConfig, got {type(config).__name__}.")
        if reference_size <= 0 or scale <= 0:
            raise ChartConfigError("Reference size and scale must be positive.")
        self.config = config
        self.overlay_locator = overlay_locator
        self.reference_size = reference_size
        self.scale = scale

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def pixel_ratio(self, width: float, height: float) -> float:
        """Surface pixels per reference-canvas pixel."""
        return min(width, height) / self.reference_size

    async def render(
        self,
        surface: DrawingSurface,
        width: float,
        height: float,
        dataset: CategoryDataset,
        visibility: VisibilityConfig,
    ) -> None:
        """
        Render the chart. Completes only after the overlay has been drawn or
        its loading has failed.
        """
        if width <= 0 or height <= 0:
            logger.warning(f"Nothing to render on a {width}x{height} surface.")
            return

        surface.clear()

        cfg = self.config
        center = Point(width / 2, height / 2)
        max_radius = max_radius_for(width, height, cfg)
        ratio = self.pixel_ratio(width, height)

        if max_radius > 0:
            lt = layer_thickness(max_radius, cfg)
            indicators = self._draw_slices(surface, center, max_radius, lt, ratio, dataset, visibility)

            for indicator in indicators:
                self._draw_average_indicator(surface, center, indicator)

            self._carve_gaps(surface, center, max_radius, lt)

            if visibility.show_values:
                self._draw_value_labels(surface, center, max_radius, ratio, dataset, visibility)

        await self._draw_overlay(surface, width, height, ratio, visibility)

    async def render_image(
        self,
        width: int,
        height: int,
        dataset: CategoryDataset,
        visibility: VisibilityConfig,
    ) -> QImage:
        """Render onto a fresh transparent image and return it."""
        image = new_image(width, height)
        if image.isNull():
            return image
        with QtSurface(image) as surface:
            await self.render(surface, width, height, dataset, visibility)
        return image

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _draw_slices(
        self,
        surface: DrawingSurface,
        center: Point,
        max_radius: float,
        lt: float,
        ratio: float,
        dataset: CategoryDataset,
        visibility: VisibilityConfig,
    ) -> list[AverageIndicator]:
        """Draw every tier of every slice; return the average markers to draw afterwards."""
        cfg = self.config
        indicators: list[AverageIndicator] = []

        for category in range(cfg.slice_count):
            for tier in range(cfg.tiers_per_slice):
                band = tier_band(category, tier, max_radius, cfg)
                self._fill(surface, center, band, cfg.tier_colors[tier])

                if visibility.show_benchmark:
                    benchmark = filled_band(band, dataset.benchmarks[category], tier, cfg)
                    if benchmark is not None:
                        self._fill(surface, center, benchmark, cfg.benchmark_color)

                score = filled_band(band, dataset.scores[category], tier, cfg)
                if score is not None:
                    self._fill(surface, center, score, cfg.score_colors[tier])

            if visibility.show_average:
                indicator = build_average_indicator(
                    dataset.averages[category], category, lt, center, cfg, self.scale * ratio
                )
                if indicator is not None:
                    indicators.append(indicator)

        return indicators

    @staticmethod
    def _fill(surface: DrawingSurface, center: Point, band: AnnularBand, color: str) -> None:
        draw_annular_segment(
            surface, center, band.start_radius, band.end_radius, band.start_angle, band.end_angle, color
        )

    def _draw_average_indicator(self, surface: DrawingSurface, center: Point, indicator: AverageIndicator) -> None:
        """Caps first, then both bands, then the outline arcs of the protrusion."""
        fill = self.config.average_color
        stroke = self.config.average_stroke_color
        width = indicator.stroke_width

        for cap in (indicator.start_cap, indicator.end_cap):
            path = circle_path(cap)
            surface.fill_path(path, fill)
            surface.stroke_path(path, stroke, width)

        surface.fill_path(band_path(center, indicator.protrusion_band), fill)
        surface.fill_path(band_path(center, indicator.main_band), fill)

        band = indicator.protrusion_band
        surface.stroke_path(arc_path(center, band.end_radius, band.start_angle, band.end_angle), stroke, width)
        surface.stroke_path(arc_path(center, band.start_radius, band.start_angle, band.end_angle), stroke, width)

    def _carve_gaps(self, surface: DrawingSurface, center: Point, max_radius: float, lt: float) -> None:
        cfg = self.config
        width = cfg.slice_gap_thickness * lt
        length = max_radius + cfg.gap_overshoot_layers * lt
        for angle in gap_angles(cfg):
            carve_angular_gap(surface, center, angle, width, length)

    def _draw_value_labels(
        self,
        surface: DrawingSurface,
        center: Point,
        max_radius: float,
        ratio: float,
        dataset: CategoryDataset,
        visibility: VisibilityConfig,
    ) -> None:
        cfg = self.config
        radius = value_label_radius(max_radius, visibility.value_distance_percent, cfg)
        font_px = visibility.value_font_size_px * ratio
        if font_px < 1:
            return

        font = QFont(cfg.label_font_family)
        font.setBold(True)
        font.setPixelSize(max(1, round(font_px)))
        stroke_width = max(2.0, visibility.value_font_size_px / 8) * ratio

        offset = deg2rad(visibility.value_angle_offset_degrees)
        for category in range(cfg.slice_count):
            start_angle, _ = slice_angles(category, cfg)
            anchor = polar_to_cartesian(center, radius, start_angle + offset)
            surface.draw_text_outlined(
                format_label(dataset.scores[category]),
                anchor,
                font,
                cfg.label_fill_color,
                cfg.label_stroke_color,
                stroke_width,
            )

    async def _draw_overlay(
        self,
        surface: DrawingSurface,
        width: float,
        height: float,
        ratio: float,
        visibility: VisibilityConfig,
    ) -> None:
        if self.overlay_locator is None:
            return
        try:
            asset = await load_overlay(self.overlay_locator)
        except OverlayLoadError as e:
            logger.error(f"Error loading overlay: {e}")
            return
        rect = overlay_rect(width, height, visibility.overlay_vertical_offset * ratio, self.config)
        surface.draw_overlay(asset, rect)


_DEFAULT_RENDERER: ChartRenderer | None = None


async def render(
    surface: DrawingSurface,
    width: float,
    height: float,
    dataset: CategoryDataset,
    visibility: VisibilityConfig,
) -> None:
    """Render with the default configuration and overlay."""
    global _DEFAULT_RENDERER
    if _DEFAULT_RENDERER is None:
        _DEFAULT_RENDERER = ChartRenderer()
    await _DEFAULT_RENDERER.render(surface, width, height, dataset, visibility)
