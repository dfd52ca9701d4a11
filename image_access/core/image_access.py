"""
ImageAccess - boundary-aware pixel access for grayscale and colour images.

Every coordinate-based read goes through the boundary resolver, so filters
built on top can read past the image edge with mirror, repeat or zero
padding. Writes only accept mirror and repeat padding since a zero-padded
coordinate has no backing pixel.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from image_access.config import get_settings
from image_access.constants import ImageConstants
from image_access.core.boundary import resolve, resolve_xy
from image_access.core.buffer import PixelBuffer, PixelValue, as_array, as_pixel
from image_access.core.compare import CompareResult, array_compare, normalization_factor
from image_access.core.neighborhood import NeighborhoodView, extract_neighborhood
from image_access.core.sorting import SortedValues, mask_to_array, sort_samples
from image_access.core.validation import require_int, require_size
from image_access.diagnostics import Diagnostic, DiagnosticSink, log_diagnostic
from image_access.enums import (
    DegenerateRangePolicy,
    DiagnosticCode,
    Padding,
    parse_enum,
    parse_padding,
)
from image_access.exceptions import (
    DegenerateRangeError,
    DimensionMismatchError,
    InvalidArgumentError,
    OutOfBoundsError,
)

logger = logging.getLogger(__name__)

WRITE_PADDINGS = (Padding.MIRROR, Padding.REPEAT)


class ImageAccess:
    """
    A 2D grayscale or RGB image with boundary-aware accessors.

    Construction:

        ImageAccess(height, width)                   # gray, filled with 0
        ImageAccess(height, width, rgb=True, init_value=255)
        ImageAccess([height, width])                 # size as a sequence
        ImageAccess([height, width, 3])              # colour
        ImageAccess(other.shape())                   # same size as another image
        ImageAccess(array)                           # copy of a 2D/3D array

    Coordinates are (x, y) with x the column and y the row.
    """

    def __init__(
        self,
        height=None,
        width=None,
        *,
        rgb: bool = False,
        init_value=ImageConstants.DEFAULT_INIT_VALUE,
        diagnostics: Optional[DiagnosticSink] = None,
    ):
        """
        Create a new image.

        Args:
            height: Image height, a [height, width(, 3)] sequence, or an existing
                2D/3D array. If omitted, an uninitialized placeholder is created.
            width: Image width when height is an integer
            rgb: Create a colour image
            init_value: Initial value of every sample
            diagnostics: Callable receiving advisory Diagnostic records;
                defaults to logging them as warnings

        Raises:
            InvalidArgumentError: On non-integer sizes or malformed input
        """
        self.diagnostics = log_diagnostic if diagnostics is None else diagnostics
        self._buffer: Optional[PixelBuffer] = None
        self.nx = 0
        self.ny = 0

        if height is None:
            # Placeholder, the buffer is assigned by the caller
            return

        if isinstance(height, ImageAccess):
            buffer = height.buffer.copy()
            self._attach(buffer)
            return

        try:
            rank = np.ndim(height)
        except ValueError as e:
            raise InvalidArgumentError(f"Unrecognized input data in ImageAccess constructor: {e}")

        if rank == 0:
            if width is None:
                raise InvalidArgumentError("ImageAccess: width is required when height is a number")
            ny = require_size(height, "size", "ImageAccess constructor")
            nx = require_size(width, "size", "ImageAccess constructor")
            buffer = PixelBuffer.filled(ny, nx, init_value, rgb=rgb)

        elif rank == 1 and len(height) in (2, 3):
            dims = list(height)
            ny = require_size(dims[0], "size", "ImageAccess constructor")
            nx = require_size(dims[1], "size", "ImageAccess constructor")
            if len(dims) == 3 and dims[2] != ImageConstants.RGB_CHANNELS:
                raise InvalidArgumentError(
                    f"ImageAccess constructor: a 3-element size needs "
                    f"{ImageConstants.RGB_CHANNELS} channels, got {dims[2]!r}"
                )
            buffer = PixelBuffer.filled(ny, nx, init_value, rgb=rgb or len(dims) == 3)

        elif rank in (ImageConstants.GRAYSCALE_NDIM, ImageConstants.COLOR_NDIM):
            buffer = PixelBuffer.from_array(height)

        else:
            raise InvalidArgumentError("Unrecognized input data in ImageAccess constructor")

        self._attach(buffer)
        logger.debug(f"Created {self!r}")

    # --- buffer management -------------------------------------------------

    def _attach(self, buffer: PixelBuffer):
        """Take ownership of buffer, update the shape and prime the stats cache"""
        self._buffer = buffer
        self.ny, self.nx = buffer.shape
        buffer.stats.refresh(buffer.data)

    @property
    def buffer(self) -> PixelBuffer:
        if self._buffer is None:
            raise InvalidArgumentError("The image has not been initialized")
        return self._buffer

    def _derive(self, data: np.ndarray) -> "ImageAccess":
        """New image owning data, sharing this image's diagnostics sink"""
        image = ImageAccess(diagnostics=self.diagnostics)
        image._attach(PixelBuffer.from_array(data))
        return image

    def _report_conversion(self, operation: str, value_is_color: bool, **details):
        if value_is_color:
            message = "Writing an rgb value to a grayscale image converts it to grayscale."
        else:
            message = "Writing a grayscale value to an rgb image converts it to rgb."
        self.diagnostics(
            Diagnostic(
                code=DiagnosticCode.ARITY_MISMATCH,
                message=message,
                operation=operation,
                details=details,
            )
        )

    def from_array(self, arr):
        """
        Replace the image content with a copy of arr.

        Raises:
            InvalidArgumentError: If arr is not 2D, or 3D with 3 channels
        """
        self._attach(PixelBuffer.from_array(arr))

    def to_array(self) -> np.ndarray:
        """Return an independent copy of the pixel data"""
        return self.buffer.data.copy()

    def copy(self) -> "ImageAccess":
        """Return an independent copy of the image"""
        return self._derive(self.buffer.data)

    # --- shape ------------------------------------------------------------

    def ndims(self) -> int:
        """2 for grayscale images, 3 for colour images"""
        return self.buffer.ndim

    def shape(self) -> Tuple[int, int]:
        """Image size as (ny, nx)"""
        return self.ny, self.nx

    @property
    def is_color(self) -> bool:
        return self.buffer.is_color

    # --- pixels -----------------------------------------------------------

    def get_pixel(self, x: int, y: int, padding=Padding.MIRROR) -> PixelValue:
        """
        Return the pixel at (x, y).

        Args:
            x: Horizontal position (may be outside the image)
            y: Vertical position (may be outside the image)
            padding: Boundary condition ('mirror', 'repeat' or 'zero')

        Returns:
            A float for grayscale images, an (r, g, b) tuple for colour images
        """
        x = require_int(x, "index", "getPixel")
        y = require_int(y, "index", "getPixel")
        buffer = self.buffer
        resolved = resolve_xy(x, y, buffer.shape, padding)
        if resolved is None:
            return buffer.zero_value
        return buffer.read(*resolved)

    def _write_padding(self, padding, operation: str) -> Padding:
        padding = parse_padding(padding)
        if padding not in WRITE_PADDINGS:
            raise InvalidArgumentError(
                f"{operation} does not support {padding.value}-padding! Use mirror or repeat."
            )
        return padding

    def set_pixel(self, x: int, y: int, value, padding=Padding.MIRROR):
        """
        Set the pixel at (x, y).

        A colour value written to a grayscale image (or the reverse) is
        converted to the image's pixel type and reported to the diagnostics
        sink.

        Args:
            x: Horizontal position
            y: Vertical position
            value: Number or (r, g, b) sequence
            padding: 'mirror' or 'repeat'
        """
        x = require_int(x, "index", "setPixel")
        y = require_int(y, "index", "setPixel")
        padding = self._write_padding(padding, "setPixel")
        buffer = self.buffer
        rx, ry = resolve_xy(x, y, buffer.shape, padding)
        if buffer.write(rx, ry, value):
            self._report_conversion("setPixel", not buffer.is_color, x=x, y=y)

    # --- rows and columns -------------------------------------------------

    def get_row(self, y: int, padding=Padding.MIRROR) -> "ImageAccess":
        """Return row y as a new 1 x nx image"""
        y = require_int(y, "index", "getRow")
        buffer = self.buffer
        ry = resolve(y, buffer.ny, padding)
        if ry is None:
            return ImageAccess(1, self.nx, rgb=buffer.is_color, diagnostics=self.diagnostics)
        return self._derive(buffer.data[ry : ry + 1])

    def get_column(self, x: int, padding=Padding.MIRROR) -> "ImageAccess":
        """Return column x as a new ny x 1 image"""
        x = require_int(x, "index", "getColumn")
        buffer = self.buffer
        rx = resolve(x, buffer.nx, padding)
        if rx is None:
            return ImageAccess(self.ny, 1, rgb=buffer.is_color, diagnostics=self.diagnostics)
        return self._derive(buffer.data[:, rx : rx + 1])

    def _line_samples(self, line, expected: int, operation: str, what: str):
        """Flatten a 1 x n or n x 1 image (or array-like) to (samples, is_color)"""
        if not isinstance(line, ImageAccess):
            data = as_array(line)
            if data.ndim == 1:
                # A flat sequence of numbers is a grayscale row
                data = data[np.newaxis, :]
            elif self.is_color and data.shape == (expected, ImageConstants.RGB_CHANNELS):
                # A sequence of (r, g, b) triples is a colour row
                data = data[np.newaxis, :, :]
            line = self._derive(data)
        if line.nx != 1 and line.ny != 1:
            raise DimensionMismatchError(
                f"{operation}: Provide a 1D image object that contains either a single row "
                f"or a single column."
            )
        length = line.nx if line.ny == 1 else line.ny
        if length != expected:
            raise DimensionMismatchError(
                f"{operation}: The provided {what} has length {length} but the image has "
                f"{'width' if what == 'row' else 'height'} {expected}"
            )
        data = line.buffer.data
        samples = data[0] if line.ny == 1 else data[:, 0]
        return samples, line.is_color

    def put_row(self, y: int, row, padding=Padding.MIRROR):
        """
        Overwrite row y.

        Args:
            y: Vertical position of the row
            row: 1 x nx or nx x 1 image, a flat sequence of numbers, or a
                sequence of nx (r, g, b) triples for colour images
            padding: 'mirror' or 'repeat'

        Raises:
            DimensionMismatchError: If row is not 1D or its length is not nx
        """
        y = require_int(y, "index", "putRow")
        padding = self._write_padding(padding, "putRow")
        samples, is_color = self._line_samples(row, self.nx, "putRow", "row")
        buffer = self.buffer
        ry = resolve(y, buffer.ny, padding)
        if buffer.write_row(ry, samples, is_color):
            self._report_conversion("putRow", is_color, y=y)

    def put_column(self, x: int, column, padding=Padding.MIRROR):
        """
        Overwrite column x.

        Args:
            x: Horizontal position of the column
            column: ny x 1 or 1 x ny image, a flat sequence of numbers, or a
                sequence of ny (r, g, b) triples for colour images
            padding: 'mirror' or 'repeat'

        Raises:
            DimensionMismatchError: If column is not 1D or its length is not ny
        """
        x = require_int(x, "index", "putColumn")
        padding = self._write_padding(padding, "putColumn")
        samples, is_color = self._line_samples(column, self.ny, "putColumn", "column")
        buffer = self.buffer
        rx = resolve(x, buffer.nx, padding)
        if buffer.write_column(rx, samples, is_color):
            self._report_conversion("putColumn", is_color, x=x)

    # --- sub-images -------------------------------------------------------

    def _check_region(self, x: int, y: int, nx: int, ny: int):
        if x < 0 or y < 0 or x + nx > self.nx or y + ny > self.ny:
            raise OutOfBoundsError(
                f"Subimage out of bounds: ({x}, {y}) size {nx}x{ny} in image {self.nx}x{self.ny}"
            )

    def get_sub_image(self, x: int, y: int, nx: int, ny: int) -> "ImageAccess":
        """
        Extract the nx x ny region whose top-left corner is (x, y).

        Raises:
            OutOfBoundsError: If the region does not fit inside the image
        """
        x = require_int(x, "index", "getSubImage")
        y = require_int(y, "index", "getSubImage")
        nx = require_size(nx, "size", "getSubImage")
        ny = require_size(ny, "size", "getSubImage")
        self._check_region(x, y, nx, ny)
        return self._derive(self.buffer.data[y : y + ny, x : x + nx])

    def put_sub_image(self, x: int, y: int, img: "ImageAccess"):
        """
        Insert img with its top-left corner at (x, y).

        Args:
            x: Horizontal position of the top-left corner
            y: Vertical position of the top-left corner
            img: ImageAccess or rank-2/rank-3 array-like

        Raises:
            InvalidArgumentError: If img is not a valid image array
            OutOfBoundsError: If img does not fit inside the image
        """
        x = require_int(x, "index", "putSubImage")
        y = require_int(y, "index", "putSubImage")
        block = img.buffer if isinstance(img, ImageAccess) else PixelBuffer.from_array(img)
        self._check_region(x, y, block.nx, block.ny)
        if self.buffer.write_block(x, y, block.data, block.is_color):
            self._report_conversion("putSubImage", block.is_color, x=x, y=y)

    def transpose_image(self):
        """Transpose the image in place (swaps nx and ny)"""
        self.buffer.transpose()
        self.nx, self.ny = self.ny, self.nx

    # --- neighbourhoods ---------------------------------------------------

    def get_nbh(
        self, x_pos: int, y_pos: int, nx: int, ny: int, padding=Padding.MIRROR
    ) -> NeighborhoodView:
        """
        Return a live nx x ny window centred at (x_pos, y_pos).

        No pixels are copied. Local (0, 0) corresponds to
        (x_pos - nx // 2, y_pos - ny // 2) in this image.
        """
        x_pos = require_int(x_pos, "index", "getNbh")
        y_pos = require_int(y_pos, "index", "getNbh")
        nx = require_size(nx, "size", "getNbh")
        ny = require_size(ny, "size", "getNbh")
        return NeighborhoodView(self, x_pos, y_pos, nx, ny, padding)

    def neighborhood_array(
        self, x_pos: int, y_pos: int, nx: int, ny: int, padding=Padding.MIRROR
    ) -> np.ndarray:
        """Copy of the nx x ny neighbourhood centred at (x_pos, y_pos)"""
        return extract_neighborhood(self.buffer.data, x_pos, y_pos, nx, ny, padding)

    # --- statistics -------------------------------------------------------

    def get_min(self, recalc: bool = False) -> float:
        """Minimum sample value (over all channels for colour images)"""
        buffer = self.buffer
        if recalc:
            buffer.stats.refresh(buffer.data)
        return buffer.stats.get_min(buffer.data)

    def get_max(self, recalc: bool = False) -> float:
        """Maximum sample value (over all channels for colour images)"""
        buffer = self.buffer
        if recalc:
            buffer.stats.refresh(buffer.data)
        return buffer.stats.get_max(buffer.data)

    def _value_range(self, policy, operation: str) -> Optional[Tuple[float, float]]:
        """(min, range) of the image, or None for a constant image under the zero policy"""
        if policy is None:
            policy = get_settings().access.degenerate_range
        policy = parse_enum(policy, DegenerateRangePolicy, "degenerate range policy")

        vmin = self.get_min()
        value_range = self.get_max() - vmin
        if value_range == 0:
            if policy == DegenerateRangePolicy.RAISE:
                raise DegenerateRangeError(
                    f"{operation}: the image is constant ({vmin}), its range is zero"
                )
            logger.debug(f"{operation}: constant image, mapping every pixel to 0")
            return None
        return vmin, value_range

    def normalize(self, policy=None) -> "ImageAccess":
        """
        Map the image to the range [0, 1].

        Args:
            policy: DegenerateRangePolicy for constant images ('zero' maps every
                pixel to 0, 'raise' raises DegenerateRangeError). Defaults to
                the configured policy.

        Returns:
            New image of the same shape
        """
        value_range = self._value_range(policy, "normalize")
        data = self.buffer.data
        if value_range is None:
            return self._derive(np.zeros_like(data))
        vmin, span = value_range
        return self._derive((data - vmin) / span)

    def to_uint8(self, policy=None) -> "ImageAccess":
        """Map the image to 8-bit integer levels in [0, 255]"""
        value_range = self._value_range(policy, "toUint8")
        data = self.buffer.data
        if value_range is None:
            return self._derive(np.zeros_like(data))
        vmin, span = value_range
        return self._derive(np.trunc((data - vmin) / span * 255))

    def sort(self, mask=None) -> SortedValues:
        """
        Return the pixel values in ascending order.

        Args:
            mask: Optional grayscale image (or array) of the same shape; pixels
                with a mask value > 0 are used. Defaults to all pixels.

        Returns:
            Sorted 1-D array for grayscale images, a tuple of three sorted
            arrays (r, g, b) for colour images
        """
        return sort_samples(self.buffer.data, mask_to_array(mask, self.shape()))

    @staticmethod
    def pixel_min(a, b) -> PixelValue:
        """
        Per-channel minimum of two pixels.

        A grayscale value compared with a colour value is broadcast to all
        three channels.
        """
        pa = as_pixel(a)
        pb = as_pixel(b)
        result = np.minimum(pa, pb)
        if result.ndim == 0:
            return float(result)
        return tuple(float(v) for v in result)

    # --- comparison -------------------------------------------------------

    def image_compare(self, other, tolerance: Optional[float] = None) -> CompareResult:
        """
        Compare another image against this one within a tolerance.

        A reported normalization factor c means ``other ≈ c * self``.
        """
        settings = get_settings().access
        if tolerance is None:
            tolerance = settings.compare_tolerance
        return array_compare(
            _as_data(other),
            self.buffer.data,
            tolerance,
            normalization_tolerance=settings.normalization_tolerance,
        )

    def is_normalization_error(self, other) -> bool:
        """True if this image is a scalar multiple of other"""
        tolerance = get_settings().access.normalization_tolerance
        return normalization_factor(self.buffer.data, _as_data(other), tolerance) is not None

    # --- display ----------------------------------------------------------

    def visualize(self, decimals: Optional[int] = None) -> str:
        """Formatted string of the image for console output"""
        from image_access.image.rendering import visualize

        return visualize(self, decimals)

    def __repr__(self):
        if self._buffer is None:
            return "ImageAccess(<uninitialized>)"
        mode = "rgb" if self._buffer.is_color else "gray"
        return f"ImageAccess(ny={self.ny}, nx={self.nx}, {mode})"


def _as_data(image):
    """Pixel data of an image or view; array-likes pass through"""
    return image.to_array() if hasattr(image, "to_array") else image
