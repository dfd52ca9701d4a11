"""
Tests for StatsCache
"""

import numpy as np

from image_access.core.image_access import ImageAccess
from image_access.core.stats_cache import StatsCache


class TestStatsCache:
    """Test lazy extrema"""

    def test_initial_state(self):
        """Test that a new cache is dirty and empty"""
        cache = StatsCache()

        assert cache.dirty
        assert cache.min is None
        assert cache.recomputations == 0

    def test_cached_until_invalidated(self):
        """Test that a clean cache does not rescan"""
        cache = StatsCache()
        data = np.array([[1.0, 5.0]])

        assert cache.get_min(data) == 1.0
        assert cache.get_max(data) == 5.0
        assert cache.recomputations == 1

        data[0, 0] = -3.0
        assert cache.get_min(data) == 1.0

        cache.invalidate()
        assert cache.get_min(data) == -3.0
        assert cache.recomputations == 2


class TestImageExtrema:
    """Test min/max through ImageAccess"""

    def test_interleaved_writes(self, gray_image):
        """Test that min/max track every kind of write"""
        assert gray_image.get_min() == 1.0
        assert gray_image.get_max() == 9.0

        gray_image.set_pixel(1, 1, -4)
        assert gray_image.get_min() == -4.0

        gray_image.put_row(0, [20, 0, 0])
        assert gray_image.get_max() == 20.0

        gray_image.put_column(0, [[0], [0], [0]])
        assert gray_image.get_max() == 6.0

        gray_image.put_sub_image(0, 0, ImageAccess([[100.0]]))
        assert gray_image.get_max() == 100.0
        assert gray_image.get_min() == -4.0

    def test_no_rescan_without_writes(self, gray_image):
        """Test that repeated reads reuse the cached extrema"""
        stats = gray_image.buffer.stats
        before = stats.recomputations

        for _ in range(5):
            gray_image.get_min()
            gray_image.get_max()

        assert stats.recomputations == before

    def test_recalc_forces_rescan(self, gray_image):
        """Test the recalc flag"""
        stats = gray_image.buffer.stats
        before = stats.recomputations

        gray_image.get_max(recalc=True)

        assert stats.recomputations == before + 1

    def test_color_extrema_over_all_channels(self, color_image):
        """Test that colour extrema span every channel"""
        assert color_image.get_min() == 10.0
        assert color_image.get_max() == 95.0
