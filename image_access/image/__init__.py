"""
Image utilities around ImageAccess.

- converters: Format conversions (PIL, OpenCV, uint8 NumPy)
- rendering: Console and raster display (visualize, render_rgba)
"""

from image_access.image.converters import ImageConverters
from image_access.image.rendering import render_rgba, visualize

__all__ = ["ImageConverters", "visualize", "render_rgba"]
