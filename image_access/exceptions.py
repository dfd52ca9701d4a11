"""
Exception hierarchy for the image access layer.

Every failure is raised synchronously to the caller of the operation that
triggered it. The built-in base classes let callers that do not know this
package catch the usual Python exceptions (ValueError, IndexError, ...).
"""


class ImageAccessError(Exception):
    """Base class for all image access errors."""

    pass


class InvalidArgumentError(ImageAccessError, ValueError):
    """Non-integer coordinate or size, unsupported padding, malformed input."""

    pass


class DimensionMismatchError(ImageAccessError, ValueError):
    """Row, column, mask or sub-image size does not match the target."""

    pass


class OutOfBoundsError(ImageAccessError, IndexError):
    """Sub-image or neighbourhood-local access outside the valid extent."""

    pass


class DegenerateRangeError(ImageAccessError, ArithmeticError):
    """Normalisation requested on an image whose minimum equals its maximum."""

    pass
