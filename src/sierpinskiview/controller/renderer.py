"""
Frame Renderer
==============
Draws one frame of the fractal on a drawing surface.

Why is this file needed?
------------------------
1. Decoupling: the subdivision model knows nothing about painters; the
   widget knows nothing about subdivision. This module joins them.
2. Readiness: a surface that is missing or has no area is reported back as
   NOT_READY so the owner can skip the cycle instead of failing.

Classes:
    DrawingSurface: Protocol of the painting primitives used here.
    FrameReport: What happened during one frame.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol

from sierpinskiview.model.geometry import Triangle, centered_triangle
from sierpinskiview.model.subdivision import AdaptiveSubdivider, FillCommand, SubdivisionStats
from sierpinskiview.model.view_transform import ViewTransform

logger = logging.getLogger(__name__)


class DrawingSurface(Protocol):
    """Canvas-like painting target with an affine transform stack."""
    def width(self) -> int: ...
    def height(self) -> int: ...
    def clear(self) -> None: ...
    def set_fill_style(self, color: str) -> None: ...
    def begin_path(self) -> None: ...
    def move_to(self, x: float, y: float) -> None: ...
    def line_to(self, x: float, y: float) -> None: ...
    def close_path(self) -> None: ...
    def fill(self) -> None: ...
    def translate(self, dx: float, dy: float) -> None: ...
    def scale(self, sx: float, sy: float) -> None: ...
    def reset_transform(self) -> None: ...
    def current_scale(self) -> float: ...


class FrameStatus(Enum):
    DRAWN = "drawn"
    NOT_READY = "not_ready"


@dataclass
class FrameReport:
    status: FrameStatus
    commands: List[FillCommand] = field(default_factory=list)
    stats: SubdivisionStats = field(default_factory=SubdivisionStats)
    scale: float = 0.0  # effective surface scale while filling

    @property
    def ready(self) -> bool:
        return self.status is FrameStatus.DRAWN

    @property
    def leaf_count(self) -> int:
        return len(self.commands)


def default_root_triangle(size: float) -> Triangle:
    """The root triangle, centred on the world origin."""
    return centered_triangle(size)


def fill_triangle(surface: DrawingSurface, triangle: Triangle) -> None:
    """Fill a single triangle given in the surface's current (world) coordinates."""
    (ax, ay), (bx, by), (cx, cy) = triangle.vertices()
    surface.begin_path()
    surface.move_to(ax, ay)
    surface.line_to(bx, by)
    surface.line_to(cx, cy)
    surface.close_path()
    surface.fill()


def draw_frame(
    surface: Optional[DrawingSurface],
    transform: ViewTransform,
    subdivider: AdaptiveSubdivider,
    root: Optional[Triangle] = None,
) -> FrameReport:
    """
    Clear the surface and fill every visible leaf triangle.

    Args:
        surface: The painting target; None means the surface is not mounted.
        transform: Current pan/zoom.
        subdivider: Produces the fill commands.
        root: Root triangle; defaults to the centred one of the configured size.

    Returns:
        FrameReport with status NOT_READY if nothing could be drawn.
    """
    if surface is None:
        return FrameReport(FrameStatus.NOT_READY)

    width, height = surface.width(), surface.height()
    if width <= 0 or height <= 0:
        return FrameReport(FrameStatus.NOT_READY)

    if root is None:
        root = default_root_triangle(subdivider.settings.root_triangle_size)

    surface.reset_transform()
    surface.clear()
    ox, oy = transform.origin((width, height))
    surface.translate(ox, oy)
    surface.scale(transform.zoom, transform.zoom)
    scale = surface.current_scale()

    result = subdivider.walk(root, transform, (width, height))

    current_color: Optional[str] = None
    for command in result.commands:
        if command.color != current_color:
            surface.set_fill_style(command.color)
            current_color = command.color
        fill_triangle(surface, command.triangle)

    return FrameReport(FrameStatus.DRAWN, result.commands, result.stats, scale)
