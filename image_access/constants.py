"""
Constants and default values for the image access layer.
Centralizes all magic numbers.
"""


class ImageConstants:
    """Constants related to pixel buffers."""

    # Colour images carry exactly this many channels per pixel
    RGB_CHANNELS = 3

    # Supported buffer ranks
    GRAYSCALE_NDIM = 2
    COLOR_NDIM = 3

    # Smallest valid image dimension
    MIN_IMAGE_DIMENSION = 1

    DEFAULT_INIT_VALUE = 0


class CompareConstants:
    """Defaults for tolerance-aware comparison."""

    DEFAULT_TOLERANCE = 1e-5
    DEFAULT_NORMALIZATION_TOLERANCE = 1e-3


class RenderConstants:
    """Constants for text and raster rendering."""

    DEFAULT_DECIMALS = 3
    DEFAULT_SCALE = 1.0

    # Gray level used for the pixel grid overlay
    GRID_VALUE = 127

    UINT8_MAX = 255
