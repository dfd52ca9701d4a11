"""
Rendering of images for display.

- visualize: console pretty-print of a grayscale image or neighbourhood
- render_rgba: RGBA uint8 raster, optionally upscaled with a pixel grid
"""

import logging
from typing import Optional

import cv2
import numpy as np

from image_access.config import get_settings
from image_access.constants import RenderConstants
from image_access.exceptions import InvalidArgumentError
from image_access.image.converters import ImageConverters

logger = logging.getLogger(__name__)


def _split_digits(value: float):
    """Integer and fractional digit strings of value, without exponent notation"""
    text = np.format_float_positional(value, trim="-")
    integer, _, fraction = text.partition(".")
    return integer, fraction


def visualize(image, decimals: Optional[int] = None) -> str:
    """
    Format a grayscale image (or neighbourhood) for the console.

    Integer images are printed as integers; otherwise every value is printed
    with min(decimals, longest fractional part) decimals. Columns are
    right-aligned.

    Example:
        >>> print(visualize(ImageAccess([[1, 2], [3, 40]])), end="")
        [[  1  2 ]
         [  3 40 ]]

    Args:
        image: ImageAccess or NeighborhoodView
        decimals: Maximal number of decimals (defaults to the configured value)

    Returns:
        Formatted multi-line string ending with a newline

    Raises:
        InvalidArgumentError: For colour images
    """
    if image.is_color:
        raise InvalidArgumentError("Visualization of RGB image is not yet implemented.")
    if decimals is None:
        decimals = get_settings().access.visualize_decimals

    values = np.asarray(image.to_array(), dtype=np.float64)

    all_integers = True
    pre_length = 0
    post_length = 0
    for value in values.flat:
        if all_integers and not float(value).is_integer():
            all_integers = False
        integer, fraction = _split_digits(value)
        pre_length = max(pre_length, len(integer))
        post_length = max(post_length, len(fraction))

    decimals = min(decimals, post_length)

    rows = []
    for row in values:
        cells = []
        for value in row:
            if all_integers:
                cells.append(str(int(value)).rjust(pre_length))
            elif decimals == 0:
                cells.append(f"{value:.0f}".rjust(pre_length))
            else:
                cells.append(f"{value:.{decimals}f}".rjust(pre_length + decimals + 1))
        rows.append("[ " + " ".join(cells) + " ]")

    return "[" + "\n ".join(rows) + "]\n"


def render_rgba(
    image, scale: float = RenderConstants.DEFAULT_SCALE, show_pixels: bool = False
) -> np.ndarray:
    """
    Render an image as an RGBA raster.

    Each output pixel (x, y) takes the value of source pixel
    (floor(x / scale), floor(y / scale)). Samples are rounded and clipped to
    [0, 255]; grayscale is replicated to the three colour channels; alpha is
    always 255.

    Args:
        image: ImageAccess or NeighborhoodView
        scale: Size factor of the output
        show_pixels: Draw a gray grid between source pixels (only when scale > 1)

    Returns:
        uint8 array of shape (int(ny * scale), int(nx * scale), 4)
    """
    if scale <= 0:
        raise InvalidArgumentError(f"render_rgba: scale must be positive, got {scale}")
    if scale <= 1:
        show_pixels = False

    ny, nx = image.shape()
    out_nx = int(nx * scale)
    out_ny = int(ny * scale)
    if out_nx < 1 or out_ny < 1:
        raise InvalidArgumentError(f"render_rgba: scale {scale} yields an empty raster")

    pixels = ImageConverters.clip_to_uint8(image.to_array())
    if not image.is_color:
        pixels = cv2.cvtColor(pixels, cv2.COLOR_GRAY2RGB)

    xs = np.minimum((np.arange(out_nx) / scale).astype(int), nx - 1)
    ys = np.minimum((np.arange(out_ny) / scale).astype(int), ny - 1)
    raster = np.ascontiguousarray(pixels[np.ix_(ys, xs)])

    if show_pixels:
        # Grid lines on the first output row/column of every source pixel but the first
        raster[:, np.r_[False, xs[1:] != xs[:-1]]] = RenderConstants.GRID_VALUE
        raster[np.r_[False, ys[1:] != ys[:-1]], :] = RenderConstants.GRID_VALUE

    logger.debug(f"Rendered {nx}x{ny} image to {out_nx}x{out_ny} (scale={scale})")
    return cv2.cvtColor(raster, cv2.COLOR_RGB2RGBA)
