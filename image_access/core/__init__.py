"""
Core modules for image access
"""

from .boundary import resolve, resolve_axis, resolve_xy
from .buffer import ColorBuffer, GrayscaleBuffer, PixelBuffer
from .compare import CompareResult, array_compare, normalization_factor
from .image_access import ImageAccess
from .neighborhood import NeighborhoodView, extract_neighborhood
from .stats_cache import StatsCache

__all__ = [
    "ImageAccess",
    "NeighborhoodView",
    "extract_neighborhood",
    "PixelBuffer",
    "GrayscaleBuffer",
    "ColorBuffer",
    "StatsCache",
    "CompareResult",
    "array_compare",
    "normalization_factor",
    "resolve",
    "resolve_xy",
    "resolve_axis",
]
