"""
The MODEL layer contains pure data structures and the subdivision logic.
It has NO knowledge of the GUI (Qt).
It deals with Geometry, the View Transform and the Adaptive Subdivision.
"""
from sierpinskiview.model.geometry import Point, Triangle, centered_triangle
from sierpinskiview.model.subdivision import (
    AdaptiveSubdivider,
    FillCommand,
    SubdivisionResult,
    SubdivisionStats,
)
from sierpinskiview.model.view_transform import ViewTransform

__all__ = [
    "AdaptiveSubdivider",
    "FillCommand",
    "Point",
    "SubdivisionResult",
    "SubdivisionStats",
    "Triangle",
    "ViewTransform",
    "centered_triangle",
]
