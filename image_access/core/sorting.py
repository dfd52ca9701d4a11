"""
Masked sorting of pixel values, shared by images and neighbourhood views.
"""

from typing import Tuple, Union

import numpy as np

from image_access.constants import ImageConstants
from image_access.core.buffer import as_samples
from image_access.exceptions import DimensionMismatchError, InvalidArgumentError

SortedValues = Union[np.ndarray, Tuple[np.ndarray, np.ndarray, np.ndarray]]


def mask_to_array(mask, shape: Tuple[int, int]) -> np.ndarray:
    """
    Turn a mask (image, view or array-like) into a (ny, nx) float array.

    A missing mask selects every pixel.

    Raises:
        InvalidArgumentError: If the mask is a colour image
        DimensionMismatchError: If the mask shape differs from shape
    """
    if mask is None:
        return np.ones(shape, dtype=np.float64)

    if hasattr(mask, "to_array"):
        data = np.asarray(mask.to_array(), dtype=np.float64)
    else:
        data = as_samples(mask)

    if data.ndim != ImageConstants.GRAYSCALE_NDIM:
        raise InvalidArgumentError("sort: the mask must be a grayscale image")
    if data.shape != tuple(shape):
        raise DimensionMismatchError(
            f"sort: the mask has shape {data.shape} but the image has shape {tuple(shape)}"
        )
    return data


def sort_samples(data: np.ndarray, mask: np.ndarray) -> SortedValues:
    """
    Sort the samples selected by mask (> 0) in ascending order.

    Pixels are collected column by column (x outer, y inner).

    Returns:
        1-D array for grayscale data, a tuple of three 1-D arrays (one per
        channel) for colour data
    """
    by_column = np.swapaxes(data, 0, 1)
    selected = by_column[np.swapaxes(mask, 0, 1) > 0]

    if data.ndim == ImageConstants.COLOR_NDIM:
        return tuple(np.sort(selected[:, c]) for c in range(ImageConstants.RGB_CHANNELS))
    return np.sort(selected)
