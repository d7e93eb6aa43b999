"""Interactive, viewport-adaptive Sierpinski triangle viewer."""

__version__ = "0.1.0"
