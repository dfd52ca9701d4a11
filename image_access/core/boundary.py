"""
Boundary conditions.

Maps an out-of-range coordinate to a valid one for a given padding mode:

- mirror: reflect about the edge without repeating the edge pixel,
  ``-1 -> 0``, ``n -> n - 1``
- repeat: periodic wrap, ``-1 -> n - 1``, ``n -> 0``
- zero: no backing pixel, the resolver returns None and the caller
  substitutes the zero value of the image
"""

from typing import List, Optional, Tuple

from image_access.enums import Padding, parse_padding
from image_access.exceptions import InvalidArgumentError


def resolve(coord: int, length: int, padding=Padding.MIRROR) -> Optional[int]:
    """
    Resolve a single coordinate against an axis of the given length.

    The negative rule is applied first and the overflow rule second, on the
    result of the first, so the returned index always lies in [0, length).

    Args:
        coord: Coordinate along the axis (may be out of range)
        length: Axis length (nx for x, ny for y)
        padding: Padding mode (enum or string)

    Returns:
        Valid index, or None if zero padding applies

    Raises:
        InvalidArgumentError: If padding is unknown or length is not positive
    """
    padding = parse_padding(padding)
    if length < 1:
        raise InvalidArgumentError(f"Cannot resolve coordinates on an axis of length {length}")

    if coord < 0:
        if padding == Padding.ZERO:
            return None
        elif padding == Padding.REPEAT:
            coord = length - (abs(coord) % length)
        else:
            coord = -coord - 1

    if coord >= length:
        if padding == Padding.ZERO:
            return None
        elif padding == Padding.REPEAT:
            coord = coord % length
        else:
            coord = length - 1 - (coord % length)

    return coord


def resolve_xy(
    x: int, y: int, shape: Tuple[int, int], padding=Padding.MIRROR
) -> Optional[Tuple[int, int]]:
    """
    Resolve a 2D coordinate; axes are handled independently.

    Args:
        x: Horizontal coordinate, resolved against shape[1]
        y: Vertical coordinate, resolved against shape[0]
        shape: Image shape (ny, nx)
        padding: Padding mode

    Returns:
        (x, y) tuple of valid indices, or None if either axis hit zero padding
    """
    padding = parse_padding(padding)
    rx = resolve(x, shape[1], padding)
    ry = resolve(y, shape[0], padding)
    if rx is None or ry is None:
        return None
    return rx, ry


def resolve_axis(
    start: int, count: int, length: int, padding=Padding.MIRROR
) -> List[Optional[int]]:
    """Resolve ``count`` consecutive coordinates beginning at ``start``."""
    padding = parse_padding(padding)
    return [resolve(coord, length, padding) for coord in range(start, start + count)]
