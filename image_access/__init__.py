"""
Image Access

Boundary-aware pixel access for 2D grayscale and RGB images, the building
block of image processing exercises (filters, morphology, rank operators).

Main entry points:
- ImageAccess: image with pixel/row/column/sub-image/neighbourhood accessors
- NeighborhoodView: live window over an image
- Padding: boundary conditions (mirror, repeat, zero)
"""

from .config import Settings, configure_logging, get_settings
from .core import CompareResult, ImageAccess, NeighborhoodView
from .diagnostics import Diagnostic, DiagnosticCollector, log_diagnostic
from .enums import DegenerateRangePolicy, DiagnosticCode, Padding
from .exceptions import (
    DegenerateRangeError,
    DimensionMismatchError,
    ImageAccessError,
    InvalidArgumentError,
    OutOfBoundsError,
)
from .image import ImageConverters, render_rgba, visualize

__version__ = "1.0.0"

__all__ = [
    # Core
    "ImageAccess",
    "NeighborhoodView",
    "CompareResult",
    # Enums
    "Padding",
    "DegenerateRangePolicy",
    "DiagnosticCode",
    # Diagnostics
    "Diagnostic",
    "DiagnosticCollector",
    "log_diagnostic",
    # Errors
    "ImageAccessError",
    "InvalidArgumentError",
    "DimensionMismatchError",
    "OutOfBoundsError",
    "DegenerateRangeError",
    # Configuration
    "Settings",
    "get_settings",
    "configure_logging",
    # Image I/O and display
    "ImageConverters",
    "visualize",
    "render_rgba",
]
