"""
PNG Export
==========
Renders the chart three times at export resolution: scores only, scores with
benchmark, scores with average.

Each variant gets its own offscreen image and its own VisibilityConfig copy,
so the variants cannot influence each other or the interactive view.
"""
from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import QBuffer, QByteArray, QIODevice
from PySide6.QtGui import QImage

from radialchart.config import CANVAS_SIZE, EXPORT_SCALE
from radialchart.model.dataset import CategoryDataset, VisibilityConfig
from radialchart.render.renderer import ChartRenderer

logger = logging.getLogger(__name__)

DEFAULT_BASE_NAME: str = "radial-chart"

# (name suffix, show_benchmark, show_average)
EXPORT_VARIANTS: tuple[tuple[str, bool, bool], ...] = (
    ("", False, False),
    ("_Benchmark", True, False),
    ("_Average", False, True),
)


class ExportError(RuntimeError):
    """Raised when an exported image cannot be encoded or written."""


@dataclass
class ExportResult:
    name: str
    visibility: VisibilityConfig
    image: QImage
    path: Optional[str] = None

    @property
    def filename(self) -> str:
        return f"{self.name}.png"


def image_to_png_bytes(image: QImage) -> bytes:
    """Encode an image as PNG."""
    data = QByteArray()
    buffer = QBuffer(data)
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    ok = image.save(buffer, "PNG")
    buffer.close()
    if not ok:
        raise ExportError("PNG encoding failed.")
    return bytes(data.data())


def _write_png(image: QImage, path: str) -> None:
    data = image_to_png_bytes(image)
    with open(path, "wb") as f:
        f.write(data)


async def _export_variant(
    renderer: ChartRenderer,
    dataset: CategoryDataset,
    name: str,
    visibility: VisibilityConfig,
    size: int,
    output_dir: Optional[str],
) -> ExportResult:
    image = await renderer.render_image(size, size, dataset, visibility)
    result = ExportResult(name=name, visibility=visibility, image=image)

    if output_dir is not None:
        path = os.path.join(output_dir, result.filename)
        try:
            _write_png(image, path)
        except OSError as e:
            logger.exception(f"Failed to write export: {path}")
            raise ExportError(f"Could not write '{path}': {e}") from e
        result.path = path
        logger.info(f"Exported: {path}")

    return result


async def export_all(
    renderer: ChartRenderer,
    dataset: CategoryDataset,
    base_name: str = DEFAULT_BASE_NAME,
    visibility: Optional[VisibilityConfig] = None,
    base_size: int = CANVAS_SIZE,
    export_scale: float = EXPORT_SCALE,
    output_dir: Optional[str] = None,
) -> list[ExportResult]:
    """
    Produce the three export variants.

    Label settings (value labels on/off, font, angle, distance, overlay
    offset) are taken from `visibility`; the benchmark and average flags are
    always forced per variant.

    Args:
        renderer: Renderer to draw with.
        dataset: Values to draw.
        base_name: File name stem; empty falls back to "radial-chart".
        visibility: Interactive configuration in effect, or None for defaults.
        base_size: Side of the interactive canvas in pixels.
        export_scale: Multiplier applied to `base_size`.
        output_dir: If given, each image is written there as "<name>.png".

    Returns:
        The three ExportResults in variant order.
    """
    base_name = (base_name or "").strip() or DEFAULT_BASE_NAME
    interactive = visibility or VisibilityConfig()
    size = int(round(base_size * export_scale))

    if output_dir is not None:
        os.makedirs(output_dir, exist_ok=True)

    logger.info(f"Exporting '{base_name}' at {size}x{size} px.")
    tasks = [
        _export_variant(
            renderer,
            dataset,
            f"{base_name}{suffix}",
            interactive.with_flags(show_benchmark=benchmark, show_average=average),
            size,
            output_dir,
        )
        for suffix, benchmark, average in EXPORT_VARIANTS
    ]
    return list(await asyncio.gather(*tasks))
