"""
Adaptive Subdivision
====================
Walks the Sierpinski triangle tree against the current view and returns the
leaf triangles worth filling.

Why is this file needed?
------------------------
1. Resolution: the depth of the walk follows the on-screen size of each
   triangle, not a fixed recursion count.
2. Culling: triangles outside the visible world rectangle are dropped
   together with all their descendants, which keeps deep zooms responsive.

The walk uses an explicit stack instead of call recursion so deep zoom
levels cannot exhaust the interpreter stack. Nothing is cached between
passes; every redraw starts again from the root.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Tuple

from sierpinskiview.config import DEFAULT_SETTINGS, RenderSettings
from sierpinskiview.model.geometry import Triangle, bounds_area
from sierpinskiview.model.view_transform import CanvasSize, ViewTransform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FillCommand:
    """Fill one triangle (world coordinates) with a solid color."""
    triangle: Triangle
    color: str = DEFAULT_SETTINGS.fill_color


@dataclass
class SubdivisionStats:
    """Counters collected during one walk."""
    visited: int = 0
    culled: int = 0  # outside the viewport
    discarded: int = 0  # below the resolution floor
    emitted: int = 0
    max_depth: int = 0


@dataclass
class SubdivisionResult:
    commands: List[FillCommand] = field(default_factory=list)
    stats: SubdivisionStats = field(default_factory=SubdivisionStats)


class AdaptiveSubdivider:
    """
    Viewport-aware subdivision of a Sierpinski triangle.

    A popped triangle is, in order:
      1. culled if its bounding box misses the viewport,
      2. discarded if it is smaller than `min_screen_size_px` on screen,
      3. emitted as a fill command if smaller than `leaf_threshold_px`,
      4. otherwise split into its three corner children.
    """

    def __init__(self, settings: RenderSettings = DEFAULT_SETTINGS) -> None:
        self.settings = settings

    def render(self, root: Triangle, transform: ViewTransform, viewport_size: CanvasSize) -> List[FillCommand]:
        """Return the fill commands for one frame."""
        return self.walk(root, transform, viewport_size).commands

    def walk(self, root: Triangle, transform: ViewTransform, viewport_size: CanvasSize) -> SubdivisionResult:
        """
        Run one subdivision pass.

        Args:
            root: The root triangle in world coordinates.
            transform: Current view; only read.
            viewport_size: (width, height) of the canvas in pixels.

        Returns:
            Fill commands and walk statistics. Degenerate input (non-positive
            size, zero-area viewport) yields an empty result.
        """
        result = SubdivisionResult()

        if not (root.size > 0.0 and math.isfinite(root.size)):
            return result

        viewport = transform.visible_world_bounds(viewport_size)
        if bounds_area(viewport) <= 0.0:
            return result

        zoom = transform.zoom
        min_px = self.settings.min_screen_size_px
        leaf_px = self.settings.leaf_threshold_px
        color = self.settings.fill_color
        stats = result.stats

        # (triangle, depth) work items, LIFO
        stack: List[Tuple[Triangle, int]] = [(root, 0)]

        while stack:
            tri, depth = stack.pop()
            stats.visited += 1
            if depth > stats.max_depth:
                stats.max_depth = depth

            if not tri.intersects(viewport):
                stats.culled += 1
                continue

            screen_size = tri.size * zoom
            if screen_size < min_px:
                stats.discarded += 1
                continue

            if screen_size < leaf_px:
                result.commands.append(FillCommand(tri, color))
                continue

            for child in tri.children():
                stack.append((child, depth + 1))

        stats.emitted = len(result.commands)
        logger.debug(
            f"Subdivision: {stats.emitted} leaves, {stats.culled} culled, "
            f"{stats.discarded} discarded, depth {stats.max_depth}"
        )
        return result


def depth_bound(root_size: float, zoom: float, min_screen_size_px: float) -> int:
    """Upper bound on the walk depth: ceil(log2(root_size * zoom / min_screen_size_px))."""
    ratio = root_size * zoom / min_screen_size_px
    if ratio <= 1.0:
        return 0
    return math.ceil(math.log2(ratio))
