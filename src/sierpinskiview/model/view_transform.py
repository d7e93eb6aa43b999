"""
View Transform (Pan & Zoom State)
=================================
Maps between world coordinates (where the triangle lives) and screen pixels.

    screen = world * zoom + canvas_center + offset

The transform is an immutable value. Every input handler builds a new one
from the previous one plus a bounded input, so an event can never leave it
half-updated.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Tuple, Union, TYPE_CHECKING

import numpy as np

from sierpinskiview.config import DEFAULT_SETTINGS, RenderSettings
from sierpinskiview.model.geometry import Bounds, Point

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

CanvasSize = Tuple[float, float]
PointLike = Union[Point, Tuple[float, float], "npt.NDArray[np.float64]"]


def _as_xy(points: PointLike) -> npt.NDArray[np.float64]:
    if isinstance(points, Point):
        return points.to_array()
    return np.asarray(points, dtype=np.float64)


@dataclass(frozen=True)
class ViewTransform:
    """
    Current zoom factor and pixel offset of one canvas.

    Attributes:
        zoom: Scale factor, kept inside [settings.min_zoom, settings.max_zoom].
        offset: Pan in screen pixels, relative to the canvas center. Unbounded.
        settings: Clamp range and zoom steps.
    """
    zoom: float = 1.0
    offset: Point = Point(0.0, 0.0)
    settings: RenderSettings = field(default=DEFAULT_SETTINGS, repr=False, compare=False)

    def __post_init__(self) -> None:
        clamped = self.settings.clamp_zoom(self.zoom)
        if clamped != self.zoom:
            object.__setattr__(self, "zoom", clamped)

    @classmethod
    def identity(cls, settings: RenderSettings = DEFAULT_SETTINGS) -> ViewTransform:
        return cls(zoom=1.0, offset=Point(0.0, 0.0), settings=settings)

    def reset(self) -> ViewTransform:
        return ViewTransform.identity(self.settings)

    # ------------------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------------------

    def apply_zoom(self, pointer: PointLike, wheel_delta: float, canvas_size: CanvasSize) -> ViewTransform:
        """
        Zoom one wheel step, keeping the world point under `pointer` fixed.

        Args:
            pointer: Pointer position in canvas pixels.
            wheel_delta: Wheel delta; negative zooms in, positive zooms out,
                zero is a no-op.
            canvas_size: (width, height) of the canvas in pixels.

        Returns:
            The new transform (or self when nothing changes).
        """
        if wheel_delta == 0:
            return self

        step = self.settings.zoom_step_in if wheel_delta < 0 else self.settings.zoom_step_out
        new_zoom = self.settings.clamp_zoom(self.zoom * step)
        if new_zoom == self.zoom:
            return self

        ox, oy = self.origin(canvas_size)
        px, py = (float(v) for v in _as_xy(pointer))
        factor = 1.0 - new_zoom / self.zoom
        new_offset = self.offset + Point(px - ox, py - oy) * factor

        logger.debug(f"Zoom {self.zoom:.6g} -> {new_zoom:.6g} at ({px:.1f}, {py:.1f})")
        return replace(self, zoom=new_zoom, offset=new_offset)

    def apply_pan(self, delta: PointLike) -> ViewTransform:
        """Shift the view by `delta` screen pixels. Pan is never clamped."""
        dx, dy = _as_xy(delta)
        return replace(self, offset=self.offset + Point(float(dx), float(dy)))

    # ------------------------------------------------------------------------------
    # Coordinate mapping
    # ------------------------------------------------------------------------------

    def origin(self, canvas_size: CanvasSize) -> tuple[float, float]:
        """Screen position of the world origin."""
        width, height = canvas_size
        return width / 2.0 + self.offset.x, height / 2.0 + self.offset.y

    def world_to_screen(self, points: PointLike, canvas_size: CanvasSize) -> npt.NDArray[np.float64]:
        """Map a point or an (N, 2) array of points from world to screen pixels."""
        return _as_xy(points) * self.zoom + np.asarray(self.origin(canvas_size))

    def screen_to_world(self, points: PointLike, canvas_size: CanvasSize) -> npt.NDArray[np.float64]:
        """Map a point or an (N, 2) array of points from screen pixels to world."""
        return (_as_xy(points) - np.asarray(self.origin(canvas_size))) / self.zoom

    def visible_world_bounds(self, canvas_size: CanvasSize) -> Bounds:
        """
        World-space rectangle covered by the canvas.

        Returns:
            (left, right, top, bottom); top < bottom since y grows downward.
        """
        width, height = canvas_size
        (left, top), (right, bottom) = self.screen_to_world([[0.0, 0.0], [width, height]], canvas_size)
        return float(left), float(right), float(top), float(bottom)
