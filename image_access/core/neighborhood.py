"""
Neighbourhood access.

NeighborhoodView is a window over an ImageAccess that copies nothing: every
read goes to the target image, through its boundary handling, shifted by the
window offset. Writes to the target are visible through the view at once.

The view holds only a weak reference to its target. It is meant to be
created and dropped inside a single operation (e.g. one step of a filter);
using it after the target has been garbage collected raises ReferenceError.

extract_neighborhood() is the copying counterpart working on plain arrays.
"""

import logging
import weakref
from typing import Tuple

import numpy as np

from image_access.core.boundary import resolve_axis
from image_access.core.buffer import PixelValue, as_samples, check_sample_shape
from image_access.core.sorting import SortedValues, mask_to_array, sort_samples
from image_access.core.validation import require_int, require_size
from image_access.enums import Padding, parse_padding
from image_access.exceptions import OutOfBoundsError

logger = logging.getLogger(__name__)


def extract_neighborhood(
    array, x_pos: int, y_pos: int, nx: int, ny: int, padding=Padding.MIRROR
) -> np.ndarray:
    """
    Copy the ny x nx neighbourhood centred at (x_pos, y_pos) out of an array.

    Local (0, 0) is global (x_pos - nx // 2, y_pos - ny // 2). Positions that
    fall outside the array are resolved with the given padding; zero padding
    leaves them at 0.

    Args:
        array: Rank-2 or rank-3 (trailing 3) array-like
        x_pos: Horizontal centre
        y_pos: Vertical centre
        nx: Neighbourhood width
        ny: Neighbourhood height
        padding: Boundary condition

    Returns:
        New array of shape (ny, nx) or (ny, nx, 3)
    """
    x_pos = require_int(x_pos, "index", "getNbh")
    y_pos = require_int(y_pos, "index", "getNbh")
    nx = require_size(nx, "size", "getNbh")
    ny = require_size(ny, "size", "getNbh")
    padding = parse_padding(padding)

    if isinstance(array, np.ndarray) and array.dtype == np.float64:
        data = check_sample_shape(array)
    else:
        data = as_samples(array)

    xs = resolve_axis(x_pos - nx // 2, nx, data.shape[1], padding)
    ys = resolve_axis(y_pos - ny // 2, ny, data.shape[0], padding)

    out = np.zeros((ny, nx) + data.shape[2:], dtype=np.float64)

    local_x = [i for i, x in enumerate(xs) if x is not None]
    local_y = [i for i, y in enumerate(ys) if y is not None]
    if not local_x or not local_y:
        return out

    source_x = [xs[i] for i in local_x]
    source_y = [ys[i] for i in local_y]
    out[np.ix_(local_y, local_x)] = data[np.ix_(source_y, source_x)]
    return out


class NeighborhoodView:
    """
    Read-only window of size nx x ny over an ImageAccess.

    Created through ImageAccess.get_nbh(); not meant to be stored.
    """

    def __init__(
        self, target, x_center: int, y_center: int, nx: int, ny: int, padding=Padding.MIRROR
    ):
        """
        Initialize the view

        Args:
            target: ImageAccess to read from (weakly referenced)
            x_center: Horizontal centre of the window in target coordinates
            y_center: Vertical centre of the window in target coordinates
            nx: Window width
            ny: Window height
            padding: Boundary condition applied when the window leaves the target
        """
        self._target_ref = weakref.ref(target)
        self.padding = parse_padding(padding)
        self.x_center = x_center
        self.y_center = y_center
        self.nx = nx
        self.ny = ny
        self.x_offset = x_center - nx // 2
        self.y_offset = y_center - ny // 2
        logger.debug(
            f"Neighbourhood {nx}x{ny} at ({x_center}, {y_center}), padding={self.padding.value}"
        )

    @property
    def target(self):
        """The viewed ImageAccess; raises ReferenceError once it is gone"""
        target = self._target_ref()
        if target is None:
            raise ReferenceError("The image of this neighbourhood no longer exists")
        return target

    @property
    def is_color(self) -> bool:
        return self.target.is_color

    def ndims(self) -> int:
        return self.target.ndims()

    def shape(self) -> Tuple[int, int]:
        return self.ny, self.nx

    def _check_x(self, x: int):
        if not 0 <= x < self.nx:
            raise OutOfBoundsError(
                f"The column x={x} is outside the neighborhood of size nx={self.nx}, ny={self.ny}."
            )

    def _check_y(self, y: int):
        if not 0 <= y < self.ny:
            raise OutOfBoundsError(
                f"The row y={y} is outside the neighborhood of size nx={self.nx}, ny={self.ny}."
            )

    def get_pixel(self, x: int, y: int) -> PixelValue:
        """
        Return the pixel at local position (x, y).

        Raises:
            OutOfBoundsError: If (x, y) lies outside the window
        """
        x = require_int(x, "index", "getPixel")
        y = require_int(y, "index", "getPixel")
        if not (0 <= x < self.nx and 0 <= y < self.ny):
            raise OutOfBoundsError(
                f"The pixel (x={x},y={y}) is outside the neighborhood of size "
                f"nx={self.nx}, ny={self.ny}."
            )
        return self.target.get_pixel(x + self.x_offset, y + self.y_offset, self.padding)

    def get_row(self, y: int):
        """Return local row y as a new 1 x nx image"""
        y = require_int(y, "index", "getRow")
        self._check_y(y)
        target = self.target
        values = [
            target.get_pixel(x + self.x_offset, y + self.y_offset, self.padding)
            for x in range(self.nx)
        ]
        return target._derive(np.asarray([values], dtype=np.float64))

    def get_column(self, x: int):
        """Return local column x as a new ny x 1 image"""
        x = require_int(x, "index", "getColumn")
        self._check_x(x)
        target = self.target
        values = [
            [target.get_pixel(x + self.x_offset, y + self.y_offset, self.padding)]
            for y in range(self.ny)
        ]
        return target._derive(np.asarray(values, dtype=np.float64))

    def to_array(self) -> np.ndarray:
        """Materialize the window as a new array"""
        return self.target.neighborhood_array(
            self.x_center, self.y_center, self.nx, self.ny, self.padding
        )

    def sort(self, mask=None) -> SortedValues:
        """
        Return the window's pixel values in ascending order.

        Args:
            mask: Optional grayscale mask of shape (ny, nx); pixels with a
                mask value > 0 are used. Defaults to all pixels.
        """
        return sort_samples(self.to_array(), mask_to_array(mask, self.shape()))

    def visualize(self, decimals: int = None) -> str:
        """Formatted string of the window for console output"""
        from image_access.image.rendering import visualize

        return visualize(self, decimals)

    def __repr__(self):
        return (
            f"NeighborhoodView(nx={self.nx}, ny={self.ny}, center=({self.x_center}, "
            f"{self.y_center}), padding={self.padding.value})"
        )
