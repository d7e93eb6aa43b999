"""
Configuration & Render Constants
================================
This module serves as the central registry for the tunable constants of the
renderer.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (zoom steps, pixel thresholds)
   scattered throughout the model and view code.
2. Embedding: The application can override any value through QSettings
   (group ``render``) without touching the code.

Exports:
    RenderSettings: Frozen bundle of every constant the renderer reads.
    DEFAULT_SETTINGS: The built-in defaults.
    load_settings: Overlay QSettings values on top of the defaults.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields, replace
from typing import Any, Optional

logger = logging.getLogger(__name__)


# Global Constants
MIN_ZOOM: float = 0.01
MAX_ZOOM: float = 220_000.0
ZOOM_STEP_IN: float = 1.1
ZOOM_STEP_OUT: float = 0.9
MIN_SCREEN_SIZE_PX: float = 2.0  # below this a triangle is invisible
LEAF_THRESHOLD_PX: float = 10.0  # below this a triangle is filled, not split
ROOT_TRIANGLE_SIZE: float = 600.0
FILL_COLOR: str = "black"
BACKGROUND_COLOR: str = "white"
REDRAW_INTERVAL_MS: int = 0

SETTINGS_GROUP = "render"

_FINITE_FIELDS = (
    "min_zoom",
    "max_zoom",
    "zoom_step_in",
    "zoom_step_out",
    "min_screen_size_px",
    "leaf_threshold_px",
    "root_triangle_size",
)


@dataclass(frozen=True)
class RenderSettings:
    """
    Constants for the view transform and the adaptive subdivider.

    Raises:
        ValueError: If the values are inconsistent (e.g. min_zoom > max_zoom).
    """
    min_zoom: float = MIN_ZOOM
    max_zoom: float = MAX_ZOOM
    zoom_step_in: float = ZOOM_STEP_IN
    zoom_step_out: float = ZOOM_STEP_OUT
    min_screen_size_px: float = MIN_SCREEN_SIZE_PX
    leaf_threshold_px: float = LEAF_THRESHOLD_PX
    root_triangle_size: float = ROOT_TRIANGLE_SIZE
    fill_color: str = FILL_COLOR
    background_color: str = BACKGROUND_COLOR
    redraw_interval_ms: int = REDRAW_INTERVAL_MS

    def __post_init__(self) -> None:
        # NaN slips through every comparison below
        for name in _FINITE_FIELDS:
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}.")
        if self.min_zoom <= 0.0:
            raise ValueError(f"min_zoom must be positive, got {self.min_zoom}.")
        if self.min_zoom > self.max_zoom:
            raise ValueError(
                f"min_zoom ({self.min_zoom}) must not exceed max_zoom ({self.max_zoom})."
            )
        if self.zoom_step_in <= 0.0 or self.zoom_step_out <= 0.0:
            raise ValueError("Zoom steps must be positive.")
        if self.min_screen_size_px > self.leaf_threshold_px:
            raise ValueError(
                f"min_screen_size_px ({self.min_screen_size_px}) must not exceed "
                f"leaf_threshold_px ({self.leaf_threshold_px})."
            )
        if self.root_triangle_size <= 0.0:
            raise ValueError(f"root_triangle_size must be positive, got {self.root_triangle_size}.")
        if self.redraw_interval_ms < 0:
            raise ValueError(f"redraw_interval_ms must be non-negative, got {self.redraw_interval_ms}.")

    def clamp_zoom(self, zoom: float) -> float:
        return max(self.min_zoom, min(zoom, self.max_zoom))


DEFAULT_SETTINGS = RenderSettings()


def load_settings(settings: Optional[Any] = None) -> RenderSettings:
    """
    Build RenderSettings from the defaults, overridden by QSettings values.

    Args:
        settings: A QSettings instance. If None, the application-wide
            QSettings() is used (organisation/app names set in create_app).

    Returns:
        The merged settings. Invalid stored values are ignored with a warning.
    """
    from PySide6.QtCore import QSettings

    if settings is None:
        settings = QSettings()

    overrides: dict[str, Any] = {}
    settings.beginGroup(SETTINGS_GROUP)
    try:
        for f in fields(RenderSettings):
            if not settings.contains(f.name):
                continue
            default = getattr(DEFAULT_SETTINGS, f.name)
            raw = settings.value(f.name)
            try:
                overrides[f.name] = type(default)(raw)
            except (TypeError, ValueError):
                logger.warning(f"Ignoring invalid setting {SETTINGS_GROUP}/{f.name}={raw!r}")
    finally:
        settings.endGroup()

    if not overrides:
        return DEFAULT_SETTINGS

    try:
        merged = replace(DEFAULT_SETTINGS, **overrides)
    except ValueError as e:
        logger.warning(f"Stored render settings rejected ({e}); using defaults.")
        return DEFAULT_SETTINGS

    logger.info(f"Loaded render settings overrides: {sorted(overrides)}")
    return merged
