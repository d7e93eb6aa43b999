"""
Fractal Canvas
==============
The widget that shows the Sierpinski triangle and turns pointer input into
view changes.

Why is this file needed?
------------------------
1. Input: wheel events zoom towards the pointer (ignored when the pointer is
   outside the widget), left-button drags pan.
2. Frames: every view change requests a coalesced redraw, rendered into a
   back buffer at the screen's device pixel ratio and blitted on paint.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QPointF, Qt, Signal
from PySide6.QtGui import QColor, QImage, QPainter
from PySide6.QtWidgets import QWidget

from sierpinskiview.config import DEFAULT_SETTINGS, RenderSettings
from sierpinskiview.controller.renderer import FrameReport, FrameStatus, default_root_triangle, draw_frame
from sierpinskiview.controller.scheduler import RedrawScheduler
from sierpinskiview.model.geometry import Triangle
from sierpinskiview.model.subdivision import AdaptiveSubdivider
from sierpinskiview.model.view_transform import ViewTransform
from sierpinskiview.view.surface import QPainterSurface

logger = logging.getLogger(__name__)


class SierpinskiCanvas(QWidget):
    """
    Pan/zoom canvas showing the adaptive Sierpinski triangle:
      - mouse wheel zooms towards the pointer,
      - left-button drag pans,
      - frames are rendered into a back buffer on a coalesced redraw.
    """
    zoom_changed = Signal(float)
    frame_rendered = Signal(object)  # FrameReport

    def __init__(self, settings: RenderSettings = DEFAULT_SETTINGS, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(200, 150)
        self.setCursor(Qt.CursorShape.OpenHandCursor)

        self.settings = settings
        self._transform = ViewTransform.identity(settings)
        self._subdivider = AdaptiveSubdivider(settings)
        self._root: Triangle = default_root_triangle(settings.root_triangle_size)

        # back buffer
        self._frame: Optional[QImage] = None
        self._last_report: Optional[FrameReport] = None

        # drag state
        self._dragging = False
        self._last_pos = QPointF()

        self._scheduler = RedrawScheduler(self._render_frame, settings.redraw_interval_ms, self)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def view_transform(self) -> ViewTransform:
        return self._transform

    @property
    def scheduler(self) -> RedrawScheduler:
        return self._scheduler

    @property
    def last_report(self) -> Optional[FrameReport]:
        return self._last_report

    def frame(self) -> Optional[QImage]:
        """The most recently rendered back buffer."""
        return self._frame

    def canvas_size(self) -> tuple[int, int]:
        return self.width(), self.height()

    def contains_point(self, x: float, y: float) -> bool:
        """True if (x, y) lies on the widget, edges included. No rounding."""
        return 0.0 <= x <= self.width() and 0.0 <= y <= self.height()

    def zoom_at(self, x: float, y: float, wheel_delta: float) -> bool:
        """
        Apply one wheel step at widget position (x, y).

        Returns:
            False if the pointer is outside the widget (the event is ignored).
        """
        if not self.contains_point(x, y):
            return False
        self._set_transform(self._transform.apply_zoom((x, y), wheel_delta, self.canvas_size()))
        return True

    def pan_by(self, dx: float, dy: float) -> None:
        self._set_transform(self._transform.apply_pan((dx, dy)))

    def reset_view(self) -> None:
        self._set_transform(self._transform.reset())

    def request_redraw(self) -> None:
        self._scheduler.request()

    def render_now(self) -> FrameReport:
        """Render the back buffer synchronously, dropping any pending redraw."""
        self._scheduler.cancel()
        return self._render_frame()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _set_transform(self, transform: ViewTransform) -> None:
        if transform == self._transform:
            return
        zoom_changed = transform.zoom != self._transform.zoom
        self._transform = transform
        if zoom_changed:
            self.zoom_changed.emit(transform.zoom)
        self.request_redraw()

    def _render_frame(self) -> FrameReport:
        width, height = self.canvas_size()
        if width <= 0 or height <= 0:
            report = draw_frame(None, self._transform, self._subdivider, self._root)
        else:
            # physical pixels; the painter keeps working in logical ones
            dpr = self.devicePixelRatioF()
            image = QImage(
                max(1, round(width * dpr)),
                max(1, round(height * dpr)),
                QImage.Format.Format_ARGB32_Premultiplied,
            )
            image.setDevicePixelRatio(dpr)
            painter = QPainter(image)
            try:
                surface = QPainterSurface(painter, image, background=self.settings.background_color)
                report = draw_frame(surface, self._transform, self._subdivider, self._root)
            finally:
                painter.end()
            self._frame = image

        if report.status is FrameStatus.NOT_READY:
            logger.debug(f"Canvas not ready ({width}x{height}); frame skipped.")
        else:
            logger.debug(
                f"Frame: zoom={self._transform.zoom:.6g}, leaves={report.leaf_count}, "
                f"culled={report.stats.culled}"
            )

        self._last_report = report
        self.frame_rendered.emit(report)
        self.update()
        return report

    # ---- Qt events ----

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        try:
            if self._frame is None:
                painter.fillRect(self.rect(), QColor(self.settings.background_color))
            else:
                painter.drawImage(0, 0, self._frame)
        finally:
            painter.end()

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self.request_redraw()

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self.request_redraw()

    def closeEvent(self, event) -> None:
        self._scheduler.cancel()
        super().closeEvent(event)

    def wheelEvent(self, event) -> None:
        pos = event.position()
        delta = event.angleDelta().y()
        if delta and self.zoom_at(pos.x(), pos.y(), -delta):
            event.accept()
        else:
            event.ignore()

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._dragging = True
            self._last_pos = event.position()
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:
        if not self._dragging:
            super().mouseMoveEvent(event)
            return
        pos = event.position()
        delta = pos - self._last_pos
        self._last_pos = pos
        self.pan_by(delta.x(), delta.y())
        event.accept()

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._end_drag()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event) -> None:
        self._end_drag()
        super().leaveEvent(event)

    def _end_drag(self) -> None:
        self._dragging = False
        self.setCursor(Qt.CursorShape.OpenHandCursor)
