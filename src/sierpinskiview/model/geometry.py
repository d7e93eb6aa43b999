"""
Geometric Primitives for the Sierpinski subdivision.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

SQRT3 = math.sqrt(3.0)

# (left, right, top, bottom) in world units, y grows downward
Bounds = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Point:
    """A point in the 2D world plane."""
    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __mul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y], dtype=np.float64)


@dataclass(frozen=True)
class Triangle:
    """
    Equilateral triangle anchored at its apex (x, y) with side length `size`.

    The triangle extends downward from the apex, i.e. its base lies at
    y + height. Instances are never mutated; subdivision builds new ones.
    """
    x: float
    y: float
    size: float

    @property
    def height(self) -> float:
        return SQRT3 / 2.0 * self.size

    def vertices(self) -> npt.NDArray[np.float64]:
        """
        Returns:
            (3, 2) array: apex, bottom-right, bottom-left.
        """
        h = self.height
        half = self.size / 2.0
        return np.array([
            [self.x, self.y],
            [self.x + half, self.y + h],
            [self.x - half, self.y + h],
        ], dtype=np.float64)

    def bounds(self) -> Bounds:
        """Axis-aligned bounding box as (left, right, top, bottom)."""
        half = self.size / 2.0
        return self.x - half, self.x + half, self.y, self.y + self.height

    def intersects(self, rect: Bounds) -> bool:
        """True if the bounding box overlaps `rect`. Touching edges count as overlap."""
        left, right, top, bottom = self.bounds()
        r_left, r_right, r_top, r_bottom = rect
        return not (right < r_left or left > r_right or bottom < r_top or top > r_bottom)

    def children(self) -> tuple[Triangle, Triangle, Triangle]:
        """
        Split at the edge midpoints into the three corner triangles
        (top, bottom-left, bottom-right). The inverted middle one is the hole.
        """
        half = self.size / 2.0
        h = SQRT3 / 4.0 * self.size
        return (
            Triangle(self.x, self.y, half),
            Triangle(self.x - half / 2.0, self.y + h, half),
            Triangle(self.x + half / 2.0, self.y + h, half),
        )


def centered_triangle(size: float) -> Triangle:
    """Root triangle whose centroid sits at the world origin."""
    return Triangle(0.0, -size / SQRT3, size)


def bounds_area(rect: Bounds) -> float:
    left, right, top, bottom = rect
    return max(0.0, right - left) * max(0.0, bottom - top)
