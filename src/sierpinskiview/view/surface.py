"""
QPainter Drawing Surface
Adapts a QPainter and its paint device to the DrawingSurface protocol.
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPaintDevice


class QPainterSurface:
    """
    Canvas-style path API on top of QPainter.

    The painter must already be active on `device`. Paths are built in the
    painter's current (world) coordinates and filled with the current brush.
    On a device with a pixel ratio above 1, width/height and the transform
    are in logical pixels, as QPainter itself uses them.
    """
    def __init__(self, painter: QPainter, device: QPaintDevice, background: str = "white") -> None:
        self._painter = painter
        self._device = device
        self._background = QColor(background)
        self._brush = QBrush(QColor("black"))
        self._path: Optional[QPainterPath] = None

    # sizes are logical pixels; a high-DPI device scales them itself
    def width(self) -> int:
        return round(self._device.width() / self._device.devicePixelRatioF())

    def height(self) -> int:
        return round(self._device.height() / self._device.devicePixelRatioF())

    def clear(self) -> None:
        """Fill the whole device with the background color, ignoring the transform."""
        self._painter.save()
        self._painter.resetTransform()
        self._painter.fillRect(0, 0, self.width(), self.height(), self._background)
        self._painter.restore()

    def set_fill_style(self, color: str) -> None:
        self._brush = QBrush(QColor(color))

    # ---- path building ----

    def begin_path(self) -> None:
        self._path = QPainterPath()

    def move_to(self, x: float, y: float) -> None:
        self._current_path().moveTo(x, y)

    def line_to(self, x: float, y: float) -> None:
        self._current_path().lineTo(x, y)

    def close_path(self) -> None:
        self._current_path().closeSubpath()

    def fill(self) -> None:
        if self._path is None:
            return
        self._painter.fillPath(self._path, self._brush)

    def _current_path(self) -> QPainterPath:
        if self._path is None:
            self._path = QPainterPath()
        return self._path

    # ---- transform stack ----

    def translate(self, dx: float, dy: float) -> None:
        self._painter.translate(dx, dy)

    def scale(self, sx: float, sy: float) -> None:
        self._painter.scale(sx, sy)

    def reset_transform(self) -> None:
        self._painter.resetTransform()

    def current_scale(self) -> float:
        return self._painter.transform().m11()
