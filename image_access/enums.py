"""
Enumerations shared across the image access layer.
"""

from enum import Enum
from typing import Any, Type, TypeVar

from image_access.exceptions import InvalidArgumentError

T = TypeVar("T", bound=Enum)


class Padding(str, Enum):
    """Boundary condition applied to out-of-range coordinates."""

    MIRROR = "mirror"
    REPEAT = "repeat"
    ZERO = "zero"


class DegenerateRangePolicy(str, Enum):
    """What normalize/to_uint8 do when the image is constant (max == min)."""

    ZERO = "zero"
    RAISE = "raise"


class DiagnosticCode(str, Enum):
    """Codes carried by advisory diagnostics."""

    ARITY_MISMATCH = "arity_mismatch"


def parse_enum(value: Any, enum_class: Type[T], what: str) -> T:
    """
    Parse value to enum, case-insensitively. Unknown values are rejected.

    Args:
        value: Enum instance or string
        enum_class: Enum class to parse to
        what: Human readable name used in the error message

    Returns:
        Parsed enum value

    Raises:
        InvalidArgumentError: If the value is not a member of enum_class

    Example:
        >>> parse_enum("Mirror", Padding, "padding")
        <Padding.MIRROR: 'mirror'>
    """
    if isinstance(value, enum_class):
        return value

    try:
        return enum_class(value.lower())
    except (ValueError, AttributeError):
        allowed = ", ".join(member.value for member in enum_class)
        raise InvalidArgumentError(f"Unknown {what} '{value}' (expected one of: {allowed})")


def parse_padding(value: Any) -> Padding:
    """Parse a padding mode given as enum or string."""
    return parse_enum(value, Padding, "padding")
