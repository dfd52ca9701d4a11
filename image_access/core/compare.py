"""
Tolerance-aware comparison of pixel arrays.

Used to check an exercise result against a reference image and, when they
differ, to tell a uniformly mis-scaled result (normalization error) apart
from a generic mismatch.
"""

import logging
from typing import Optional

import numpy as np
from pydantic import BaseModel, Field

from image_access.constants import CompareConstants

logger = logging.getLogger(__name__)


class CompareResult(BaseModel):
    """Outcome of an element-wise comparison. Truthy when the arrays match."""

    equal: bool
    total: int = Field(default=0, description="Number of compared samples")
    mismatched: int = Field(default=0, description="Number of samples outside the tolerance")
    max_error: float = Field(
        default=0.0, description="Signed difference with the largest magnitude"
    )
    normalization_factor: Optional[float] = Field(
        default=None, description="Scalar c with first == c * second, if one exists"
    )
    message: Optional[str] = None

    @property
    def mismatch_ratio(self) -> float:
        return self.mismatched / self.total if self.total else 0.0

    @property
    def is_normalization_error(self) -> bool:
        return self.normalization_factor is not None

    def __bool__(self) -> bool:
        return self.equal


def normalization_factor(
    first, second, tolerance: float = CompareConstants.DEFAULT_NORMALIZATION_TOLERANCE
) -> Optional[float]:
    """
    Find the scalar relating two arrays, if there is one.

    The arrays are related when they have the same shape, are zero at the
    same positions, and every ratio first/second of the non-zero samples is
    within tolerance of the first such ratio.

    Args:
        first: First array-like
        second: Second array-like
        tolerance: Allowed deviation of each ratio from the reference ratio

    Returns:
        The factor c (first ≈ c * second), or None if the arrays are not related
    """
    a = np.asarray(first, dtype=np.float64)
    b = np.asarray(second, dtype=np.float64)
    if a.shape != b.shape:
        return None

    a_zero = a == 0
    b_zero = b == 0
    if np.any(a_zero != b_zero):
        return None

    nonzero = ~b_zero
    if not np.any(nonzero):
        return None

    ratios = a[nonzero] / b[nonzero]
    factor = ratios[0]
    if np.isnan(factor) or np.any(~(np.abs(ratios - factor) <= tolerance)):
        return None
    return float(factor)


def is_normalization_error(
    first, second, tolerance: float = CompareConstants.DEFAULT_NORMALIZATION_TOLERANCE
) -> bool:
    """True if one array is a scalar multiple of the other"""
    return normalization_factor(first, second, tolerance) is not None


def array_compare(
    first,
    second,
    tolerance: float = CompareConstants.DEFAULT_TOLERANCE,
    normalization_tolerance: float = CompareConstants.DEFAULT_NORMALIZATION_TOLERANCE,
) -> CompareResult:
    """
    Compare two arrays element by element.

    Two samples match if ``|a - b| <= tolerance`` and neither is NaN.

    Args:
        first: First array-like
        second: Second array-like
        tolerance: Absolute tolerance per sample
        normalization_tolerance: Tolerance used when probing for a scalar factor

    Returns:
        CompareResult describing the outcome
    """
    a = np.asarray(first, dtype=np.float64)
    b = np.asarray(second, dtype=np.float64)

    if a.shape != b.shape:
        message = f"Shape mismatch: {a.shape} vs {b.shape}"
        logger.debug(message)
        return CompareResult(equal=False, message=message)

    diff = a - b
    bad = ~(np.abs(diff) <= tolerance) | np.isnan(a) | np.isnan(b)
    mismatched = int(np.count_nonzero(bad))
    total = int(a.size)

    if mismatched == 0:
        return CompareResult(equal=True, total=total)

    # NaN differences never win; an all-NaN difference reports 0
    errors = np.where(np.isnan(diff), -1.0, np.abs(diff))
    worst = int(np.argmax(errors))
    max_error = float(diff.flat[worst]) if errors.flat[worst] >= 0 else 0.0

    factor = normalization_factor(a, b, normalization_tolerance)

    message = (
        f"Number of mismatched elements: {mismatched} ({round(mismatched / total * 100)}%)"
        f"\nMax error: {max_error}"
    )
    if factor is not None:
        message += f"\nNormalization error: The image should be normalized by a factor of {factor}"

    logger.debug(f"Comparison failed: {mismatched}/{total} samples differ")
    return CompareResult(
        equal=False,
        total=total,
        mismatched=mismatched,
        max_error=max_error,
        normalization_factor=factor,
        message=message,
    )
