"""
Lazily computed min/max of a pixel buffer.
"""

import logging
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)


class StatsCache:
    """
    Cached (min, max) pair with a dirty flag.

    Writers call invalidate(); readers pass the current data and get the
    cached value back, or a fresh one if the cache is dirty or empty. Both
    extrema are recomputed together.
    """

    def __init__(self):
        self.min: Optional[float] = None
        self.max: Optional[float] = None
        self.dirty = True

        # Number of full rescans, exposed for inspection
        self.recomputations = 0

    def invalidate(self):
        """Mark the cached extrema as stale"""
        self.dirty = True

    def refresh(self, data: np.ndarray):
        """Rescan data unconditionally and clear the dirty flag"""
        self.min = float(np.min(data))
        self.max = float(np.max(data))
        self.dirty = False
        self.recomputations += 1
        logger.debug(f"Recomputed extrema: min={self.min}, max={self.max}")

    def _ensure(self, data: np.ndarray):
        if self.dirty or self.min is None or self.max is None:
            self.refresh(data)

    def get_min(self, data: np.ndarray) -> float:
        """Return the minimum of data, rescanning only if needed"""
        self._ensure(data)
        return self.min

    def get_max(self, data: np.ndarray) -> float:
        """Return the maximum of data, rescanning only if needed"""
        self._ensure(data)
        return self.max
