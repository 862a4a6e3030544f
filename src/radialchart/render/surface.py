"""
Drawing Surface
===============
The thin layer between the chart geometry and Qt's painting engine.

Why is this file needed?
------------------------
1. The renderer only talks to a `DrawingSurface`: fills, strokes, erasing,
   outlined text and overlay compositing. It never touches pixels directly.
2. `QtSurface` implements that protocol with a `QPainter` on any
   `QPaintDevice` (an offscreen `QImage` for rendering/export, or a widget).
3. Erasing uses `CompositionMode_DestinationOut`, so carved gaps become truly
   transparent instead of being painted over with a background colour.

Angles follow the chart convention (radians, 0 = +x, clockwise on screen)
and are converted to Qt's degrees/anticlockwise arcs here.
"""
from __future__ import annotations

import logging
import math
from typing import Protocol, TYPE_CHECKING, Optional, Union

import numpy as np
from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import (
    QColor, QFont, QFontMetricsF, QImage, QPaintDevice, QPainter, QPainterPath, QPen, QTransform
)

from radialchart.model.geometry_primitives import AnnularBand, Circle, Point, polar_to_cartesian

if TYPE_CHECKING:
    import numpy.typing as npt
    from radialchart.render.overlay import OverlayAsset

logger = logging.getLogger(__name__)

ColorLike = Union[str, QColor]


class DrawingSurface(Protocol):
    """Operations the chart renderer needs from a target surface."""
    def width(self) -> int: ...
    def height(self) -> int: ...
    def clear(self, rect: Optional[QRectF] = None) -> None: ...
    def fill_path(self, path: QPainterPath, color: ColorLike) -> None: ...
    def stroke_path(self, path: QPainterPath, color: ColorLike, width: float) -> None: ...
    def erase_path(self, path: QPainterPath) -> None: ...
    def draw_text_outlined(
        self, text: str, anchor: Point, font: QFont, fill: ColorLike, stroke: ColorLike, stroke_width: float
    ) -> None: ...
    def draw_overlay(self, asset: OverlayAsset, rect: QRectF) -> None: ...


# ------------------------------------------------------------------------------
# Offscreen images
# ------------------------------------------------------------------------------

def new_image(width: int, height: int) -> QImage:
    """Create a fully transparent ARGB image."""
    image = QImage(max(0, int(width)), max(0, int(height)), QImage.Format.Format_ARGB32_Premultiplied)
    image.fill(Qt.GlobalColor.transparent)
    return image


def image_to_array(image: QImage) -> npt.NDArray[np.uint8]:
    """
    Copy a QImage into an (H, W, 4) RGBA uint8 array (non-premultiplied).
    """
    rgba = image.convertToFormat(QImage.Format.Format_RGBA8888)
    w, h = rgba.width(), rgba.height()
    if w == 0 or h == 0:
        return np.zeros((h, w, 4), dtype=np.uint8)
    buffer = np.frombuffer(rgba.constBits(), dtype=np.uint8, count=rgba.sizeInBytes())
    return buffer.reshape(h, rgba.bytesPerLine())[:, : w * 4].reshape(h, w, 4).copy()


# ------------------------------------------------------------------------------
# Qt implementation
# ------------------------------------------------------------------------------

class QtSurface:
    """
    DrawingSurface backed by a QPainter.

    Use as a context manager so the painter is always ended:

        with QtSurface(image) as surface:
            ...
    """
    def __init__(self, device: QPaintDevice) -> None:
        self.device = device
        self.painter: QPainter | None = None

    def __enter__(self) -> QtSurface:
        self.begin()
        return self

    def __exit__(self, *exc_info) -> None:
        self.end()

    def begin(self) -> None:
        if self.painter is not None:
            return
        self.painter = QPainter()
        if not self.painter.begin(self.device):
            self.painter = None
            raise RuntimeError("Could not start painting on the target device.")
        self.painter.setRenderHints(
            QPainter.RenderHint.Antialiasing
            | QPainter.RenderHint.TextAntialiasing
            | QPainter.RenderHint.SmoothPixmapTransform
        )

    def end(self) -> None:
        if self.painter is not None:
            self.painter.end()
            self.painter = None

    def _active(self) -> QPainter:
        if self.painter is None:
            raise RuntimeError("QtSurface used outside of a painting session.")
        return self.painter

    # ---- DrawingSurface API ----

    def width(self) -> int:
        return self.device.width()

    def height(self) -> int:
        return self.device.height()

    def clear(self, rect: Optional[QRectF] = None) -> None:
        painter = self._active()
        if rect is None:
            rect = QRectF(0, 0, self.width(), self.height())
        painter.save()
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_Clear)
        painter.fillRect(rect, Qt.GlobalColor.transparent)
        painter.restore()

    def fill_path(self, path: QPainterPath, color: ColorLike) -> None:
        self._active().fillPath(path, QColor(color))

    def stroke_path(self, path: QPainterPath, color: ColorLike, width: float) -> None:
        pen = QPen(QColor(color), width)
        pen.setJoinStyle(Qt.PenJoinStyle.MiterJoin)
        self._active().strokePath(path, pen)

    def erase_path(self, path: QPainterPath) -> None:
        painter = self._active()
        painter.save()
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_DestinationOut)
        painter.fillPath(path, QColor("black"))
        painter.restore()

    def draw_text_outlined(
        self,
        text: str,
        anchor: Point,
        font: QFont,
        fill: ColorLike,
        stroke: ColorLike,
        stroke_width: float,
    ) -> None:
        """Draw `text` centred on `anchor`: contrasting outline first, then the fill."""
        path = centered_text_path(text, anchor, font)
        pen = QPen(QColor(stroke), stroke_width)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        painter = self._active()
        painter.strokePath(path, pen)
        painter.fillPath(path, QColor(fill))

    def draw_overlay(self, asset: OverlayAsset, rect: QRectF) -> None:
        asset.draw(self._active(), rect)


# ------------------------------------------------------------------------------
# Path construction
# ------------------------------------------------------------------------------

def _circle_rect(center: Point, radius: float) -> QRectF:
    return QRectF(center.x - radius, center.y - radius, 2 * radius, 2 * radius)


def _qt_degrees(angle: float) -> float:
    """Chart angle (clockwise radians) -> Qt arc angle (anticlockwise degrees)."""
    return -math.degrees(angle)


def annular_segment_path(
    center: Point,
    start_radius: float,
    end_radius: float,
    start_angle: float,
    end_angle: float,
) -> QPainterPath:
    """
    Single closed contour of an annular segment: outer arc forwards, inner
    arc backwards, so any fill rule gives the same region.
    """
    sweep = math.degrees(end_angle - start_angle)
    path = QPainterPath()
    path.moveTo(_to_qpoint(polar_to_cartesian(center, start_radius, start_angle)))
    path.arcTo(_circle_rect(center, end_radius), _qt_degrees(start_angle), -sweep)
    path.lineTo(_to_qpoint(polar_to_cartesian(center, start_radius, end_angle)))
    if start_radius > 0:
        path.arcTo(_circle_rect(center, start_radius), _qt_degrees(end_angle), sweep)
    path.closeSubpath()
    return path


def band_path(center: Point, band: AnnularBand) -> QPainterPath:
    return annular_segment_path(center, band.start_radius, band.end_radius, band.start_angle, band.end_angle)


def arc_path(center: Point, radius: float, start_angle: float, end_angle: float) -> QPainterPath:
    """Open arc from start_angle to end_angle (clockwise when end > start)."""
    rect = _circle_rect(center, radius)
    path = QPainterPath()
    path.arcMoveTo(rect, _qt_degrees(start_angle))
    path.arcTo(rect, _qt_degrees(start_angle), -math.degrees(end_angle - start_angle))
    return path


def circle_path(circle: Circle) -> QPainterPath:
    path = QPainterPath()
    path.addEllipse(_to_qpoint(circle.center), circle.radius, circle.radius)
    return path


def gap_path(center: Point, angle: float, width: float, length: float) -> QPainterPath:
    """
    Rectangle [-width/2, width/2] x [0, length] in a frame rotated by `angle`
    about `center`; it points a quarter turn clockwise from `angle`.
    """
    path = QPainterPath()
    path.addRect(QRectF(-width / 2, 0, width, length))
    transform = QTransform()
    transform.translate(center.x, center.y)
    transform.rotateRadians(angle)
    return transform.map(path)


def centered_text_path(text: str, anchor: Point, font: QFont) -> QPainterPath:
    """Outline of `text`, horizontally centred and vertically middled on `anchor`."""
    metrics = QFontMetricsF(font)
    x = anchor.x - metrics.horizontalAdvance(text) / 2
    y = anchor.y + (metrics.ascent() - metrics.descent()) / 2
    path = QPainterPath()
    path.addText(QPointF(x, y), font, text)
    return path


def _to_qpoint(point: Point) -> QPointF:
    return QPointF(point.x, point.y)


# ------------------------------------------------------------------------------
# Primitive operations
# ------------------------------------------------------------------------------

def draw_annular_segment(
    surface: DrawingSurface,
    center: Point,
    start_radius: float,
    end_radius: float,
    start_angle: float,
    end_angle: float,
    color: ColorLike,
) -> None:
    """Fill the region between two concentric arcs and two radial edges."""
    if end_radius <= start_radius or end_angle == start_angle:
        return
    surface.fill_path(annular_segment_path(center, start_radius, end_radius, start_angle, end_angle), color)


def carve_angular_gap(
    surface: DrawingSurface,
    center: Point,
    angle: float,
    width: float,
    length: float,
) -> None:
    """
    Erase a thin radial strip starting at `center`, whatever was drawn below.
    Must run after all fills of the frame.
    """
    if width <= 0 or length <= 0:
        return
    surface.erase_path(gap_path(center, angle, width, length))
