"""
Pixel buffers.

A buffer is a float64 numpy array of shape (ny, nx) for grayscale images or
(ny, nx, 3) for colour images. The two cases are separate subclasses of
PixelBuffer so the arity of a pixel is decided by the buffer type, not by the
shape of whatever value happens to be written.
"""

from typing import Tuple, Union

import numpy as np

from image_access.constants import ImageConstants
from image_access.core.stats_cache import StatsCache
from image_access.exceptions import InvalidArgumentError


PixelValue = Union[float, Tuple[float, float, float]]


def as_pixel(value) -> np.ndarray:
    """
    Convert a pixel value to a float64 array of shape () or (3,).

    Raises:
        InvalidArgumentError: If value is neither a number nor a 3-sequence
    """
    try:
        pixel = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Invalid pixel value {value!r}: {e}")

    if pixel.ndim == 0 or pixel.shape == (ImageConstants.RGB_CHANNELS,):
        return pixel
    raise InvalidArgumentError(
        f"Pixel values must be a number or a sequence of {ImageConstants.RGB_CHANNELS} "
        f"numbers, got shape {pixel.shape}"
    )


def as_array(arr) -> np.ndarray:
    """
    Copy an array-like to float64 without checking its shape.

    Raises:
        InvalidArgumentError: If the input is ragged or non-numeric
    """
    try:
        return np.array(arr, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Cannot build an image from the provided data: {e}")


def as_samples(arr) -> np.ndarray:
    """
    Convert an array-like to a validated float64 image array.

    Raises:
        InvalidArgumentError: If the input is ragged, non-numeric, not rank 2
            or 3, or has a trailing dimension other than 3
    """
    return check_sample_shape(as_array(arr))


def check_sample_shape(data: np.ndarray) -> np.ndarray:
    """
    Check that an array has the layout of an image and return it unchanged.

    Raises:
        InvalidArgumentError: If the array is not rank 2 or 3, has a trailing
            dimension other than 3, or is empty
    """
    if data.ndim not in (ImageConstants.GRAYSCALE_NDIM, ImageConstants.COLOR_NDIM):
        raise InvalidArgumentError(f"Please provide a 2D or 3D array, got {data.ndim}D.")

    if data.ndim == ImageConstants.COLOR_NDIM and data.shape[2] != ImageConstants.RGB_CHANNELS:
        raise InvalidArgumentError(
            f"3D arrays should contain {ImageConstants.RGB_CHANNELS} color channels, "
            f"not {data.shape[2]}."
        )

    if data.shape[0] < 1 or data.shape[1] < 1:
        raise InvalidArgumentError(f"Cannot build an empty image of shape {data.shape}")

    return data


class PixelBuffer:
    """
    Base class of the grayscale and colour buffers.

    Owns the sample array and the StatsCache observing it. Every write goes
    through this class and invalidates the cache.
    """

    is_color = False

    def __init__(self, data: np.ndarray):
        self.data = data
        self.stats = StatsCache()

    @staticmethod
    def from_array(arr) -> "PixelBuffer":
        """Build the right buffer variant from a copy of arr"""
        data = as_samples(arr)
        if data.ndim == ImageConstants.COLOR_NDIM:
            return ColorBuffer(data)
        return GrayscaleBuffer(data)

    @staticmethod
    def filled(ny: int, nx: int, init_value=0, rgb: bool = False) -> "PixelBuffer":
        """Build a buffer of the given size with every sample set to init_value"""
        shape = (ny, nx, ImageConstants.RGB_CHANNELS) if rgb else (ny, nx)
        try:
            data = np.full(shape, init_value, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Invalid init_value {init_value!r}: {e}")
        return ColorBuffer(data) if rgb else GrayscaleBuffer(data)

    @property
    def ny(self) -> int:
        return self.data.shape[0]

    @property
    def nx(self) -> int:
        return self.data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.ny, self.nx

    @property
    def ndim(self) -> int:
        return self.data.ndim

    # --- variant specific ------------------------------------------------

    @property
    def zero_value(self) -> PixelValue:
        raise NotImplementedError

    def read(self, x: int, y: int) -> PixelValue:
        raise NotImplementedError

    def coerce_value(self, value) -> Tuple[np.ndarray, bool]:
        """Return (value in this buffer's arity, whether a conversion happened)"""
        raise NotImplementedError

    def coerce_samples(self, samples: np.ndarray, is_color: bool) -> Tuple[np.ndarray, bool]:
        """Like coerce_value for a whole line or block taken from another buffer"""
        raise NotImplementedError

    def zeros(self, ny: int, nx: int) -> "PixelBuffer":
        """Zero buffer of the same variant"""
        return PixelBuffer.filled(ny, nx, 0, rgb=self.is_color)

    # --- writes ----------------------------------------------------------

    def write(self, x: int, y: int, value) -> bool:
        """Store value at (x, y); returns True if its arity had to be converted"""
        stored, converted = self.coerce_value(value)
        self.data[y, x] = stored
        self.stats.invalidate()
        return converted

    def write_row(self, y: int, samples: np.ndarray, is_color: bool) -> bool:
        stored, converted = self.coerce_samples(samples, is_color)
        self.data[y, :] = stored
        self.stats.invalidate()
        return converted

    def write_column(self, x: int, samples: np.ndarray, is_color: bool) -> bool:
        stored, converted = self.coerce_samples(samples, is_color)
        self.data[:, x] = stored
        self.stats.invalidate()
        return converted

    def write_block(self, x: int, y: int, block: np.ndarray, is_color: bool) -> bool:
        stored, converted = self.coerce_samples(block, is_color)
        self.data[y : y + block.shape[0], x : x + block.shape[1]] = stored
        self.stats.invalidate()
        return converted

    def transpose(self):
        """Swap rows and columns in place; channel order within a pixel is kept"""
        self.data = np.ascontiguousarray(np.swapaxes(self.data, 0, 1))

    def copy(self) -> "PixelBuffer":
        return type(self)(self.data.copy())

    def __repr__(self):
        return f"{type(self).__name__}(ny={self.ny}, nx={self.nx})"


class GrayscaleBuffer(PixelBuffer):
    """(ny, nx) buffer of scalar samples"""

    is_color = False

    @property
    def zero_value(self) -> float:
        return 0.0

    def read(self, x: int, y: int) -> float:
        return float(self.data[y, x])

    def coerce_value(self, value) -> Tuple[np.ndarray, bool]:
        pixel = as_pixel(value)
        if pixel.ndim == 1:
            return pixel.mean(), True
        return pixel, False

    def coerce_samples(self, samples: np.ndarray, is_color: bool) -> Tuple[np.ndarray, bool]:
        if is_color:
            return samples.mean(axis=-1), True
        return samples, False


class ColorBuffer(PixelBuffer):
    """(ny, nx, 3) buffer of RGB triples"""

    is_color = True

    @property
    def zero_value(self) -> Tuple[float, float, float]:
        return (0.0, 0.0, 0.0)

    def read(self, x: int, y: int) -> Tuple[float, float, float]:
        return tuple(float(v) for v in self.data[y, x])

    def coerce_value(self, value) -> Tuple[np.ndarray, bool]:
        pixel = as_pixel(value)
        if pixel.ndim == 0:
            return np.full(ImageConstants.RGB_CHANNELS, pixel), True
        return pixel, False

    def coerce_samples(self, samples: np.ndarray, is_color: bool) -> Tuple[np.ndarray, bool]:
        if not is_color:
            return np.repeat(samples[..., np.newaxis], ImageConstants.RGB_CHANNELS, axis=-1), True
        return samples, False
