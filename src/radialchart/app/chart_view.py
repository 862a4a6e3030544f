from __future__ import annotations

from PySide6.QtCore import QRectF, QSize, Qt
from PySide6.QtGui import QImage, QPainter, QPaintEvent
from PySide6.QtWidgets import QSizePolicy, QWidget

from radialchart.config import DISPLAY_SIZE


class ChartView(QWidget):
    """
    Shows the last rendered chart image, scaled down to the widget while
    keeping its aspect ratio. The image itself is rendered at full canvas
    resolution elsewhere.
    """
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._image: QImage | None = None
        self.setMinimumSize(200, 200)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    def sizeHint(self) -> QSize:
        return QSize(DISPLAY_SIZE, DISPLAY_SIZE)

    def image(self) -> QImage | None:
        return self._image

    def set_image(self, image: QImage) -> None:
        self._image = image
        self.update()

    def target_rect(self) -> QRectF:
        """Largest centred square-ish rect with the image's aspect ratio."""
        if self._image is None or self._image.isNull():
            return QRectF()
        size = self._image.size().scaled(self.size(), Qt.AspectRatioMode.KeepAspectRatio)
        x = (self.width() - size.width()) / 2
        y = (self.height() - size.height()) / 2
        return QRectF(x, y, size.width(), size.height())

    def paintEvent(self, event: QPaintEvent) -> None:
        if self._image is None or self._image.isNull():
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.drawImage(self.target_rect(), self._image)
        painter.end()
