"""
Argument validation helpers for integer coordinates and sizes.
"""

import numbers

from image_access.constants import ImageConstants
from image_access.exceptions import InvalidArgumentError


def require_int(value, name: str, operation: str) -> int:
    """
    Return value as int if it is integral, otherwise raise.

    Integral floats (``3.0``) are accepted, booleans are not.

    Args:
        value: Value to check
        name: Argument name for the error message
        operation: Calling operation for the error message

    Returns:
        The value as a Python int

    Raises:
        InvalidArgumentError: If value is not an integer
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Non-integer {name} provided in {operation}: {value!r}")
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and float(value).is_integer():
        return int(value)
    raise InvalidArgumentError(f"Non-integer {name} provided in {operation}: {value!r}")


def require_size(value, name: str, operation: str) -> int:
    """Like require_int, but the value must also be a valid dimension (>= 1)."""
    size = require_int(value, name, operation)
    if size < ImageConstants.MIN_IMAGE_DIMENSION:
        raise InvalidArgumentError(
            f"Invalid {name} provided in {operation}: {size} "
            f"(min: {ImageConstants.MIN_IMAGE_DIMENSION})"
        )
    return size
