"""
Decorative Overlay
==================
Loads the static artwork drawn on top of the chart (category names around
the rim) and places it on the surface.

Loading is the only asynchronous step of a render: the file is read in a
worker thread via `asyncio.to_thread`, then decoded on the calling thread.
SVG files are kept as vectors (`QSvgRenderer`) so exports stay sharp; any
other format is decoded into a `QImage`.
"""
from __future__ import annotations

import asyncio
import logging
import os
from typing import Union

from PySide6.QtCore import QByteArray, QRectF
from PySide6.QtGui import QImage, QPainter
from PySide6.QtSvg import QSvgRenderer

from radialchart.config import ChartConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)


class OverlayLoadError(RuntimeError):
    """Raised when the overlay artwork cannot be read or decoded."""


class OverlayAsset:
    """A decoded overlay, either vector (SVG) or raster."""
    def __init__(self, source: Union[QSvgRenderer, QImage]) -> None:
        self.source = source

    @property
    def is_vector(self) -> bool:
        return isinstance(self.source, QSvgRenderer)

    def draw(self, painter: QPainter, rect: QRectF) -> None:
        """Draw the artwork stretched into `rect`."""
        if self.is_vector:
            self.source.render(painter, rect)
        else:
            painter.drawImage(rect, self.source)


def _read_bytes(locator: str) -> bytes:
    with open(locator, "rb") as f:
        return f.read()


def decode_overlay(data: bytes, locator: str = "") -> OverlayAsset:
    """
    Decode raw file content into an OverlayAsset.

    Raises:
        OverlayLoadError: If the content is neither a valid SVG nor a readable image.
    """
    if not data:
        raise OverlayLoadError(f"Overlay '{locator}' is empty.")

    is_svg = locator.lower().endswith((".svg", ".svgz")) or data.lstrip()[:5] in (b"<?xml", b"<svg ")
    if is_svg:
        renderer = QSvgRenderer(QByteArray(data))
        if not renderer.isValid():
            raise OverlayLoadError(f"Overlay '{locator}' is not a valid SVG document.")
        return OverlayAsset(renderer)

    image = QImage.fromData(data)
    if image.isNull():
        raise OverlayLoadError(f"Overlay '{locator}' could not be decoded as an image.")
    return OverlayAsset(image)


async def load_overlay(locator: str) -> OverlayAsset:
    """
    Read and decode the overlay at `locator` (a filesystem path).

    Raises:
        OverlayLoadError: If the file is missing, unreadable or corrupt.
    """
    try:
        data = await asyncio.to_thread(_read_bytes, os.fspath(locator))
    except OSError as e:
        raise OverlayLoadError(f"Could not read overlay '{locator}': {e}") from e

    asset = decode_overlay(data, os.fspath(locator))
    logger.debug(f"Overlay loaded from {locator} ({len(data)} bytes).")
    return asset


def overlay_rect(
    width: float,
    height: float,
    vertical_offset: float,
    config: ChartConfig = DEFAULT_CONFIG,
) -> QRectF:
    """Target rectangle of the overlay: centred horizontally, nudged down by `vertical_offset`."""
    overlay_width = width * config.overlay_width_fraction
    overlay_height = height * config.overlay_height_fraction
    x = (width - overlay_width) / 2
    y = (height - overlay_height) / 2 + vertical_offset
    return QRectF(x, y, overlay_width, overlay_height)
