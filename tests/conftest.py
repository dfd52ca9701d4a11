"""
Pytest configuration and fixtures for image access tests
"""

import numpy as np
import pytest

from image_access.config import get_settings
from image_access.core.image_access import ImageAccess
from image_access.diagnostics import DiagnosticCollector


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings for every test so monkeypatched env vars apply"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def gray_data():
    """3x3 grayscale samples holding the values 1..9"""
    return np.array([[5, 1, 9], [2, 8, 4], [7, 3, 6]], dtype=np.float64)


@pytest.fixture
def color_data():
    """2x3 RGB samples"""
    return np.array(
        [
            [[10, 20, 30], [40, 50, 60], [70, 80, 90]],
            [[15, 25, 35], [45, 55, 65], [75, 85, 95]],
        ],
        dtype=np.float64,
    )


@pytest.fixture
def collector():
    """Diagnostics sink that records what it receives"""
    return DiagnosticCollector()


@pytest.fixture
def gray_image(gray_data, collector):
    """3x3 grayscale image reporting to the collector"""
    return ImageAccess(gray_data, diagnostics=collector)


@pytest.fixture
def color_image(color_data, collector):
    """2x3 colour image reporting to the collector"""
    return ImageAccess(color_data, diagnostics=collector)


@pytest.fixture
def ramp_image():
    """4x5 grayscale image with value 10 * y + x at (x, y)"""
    return ImageAccess(np.add.outer(np.arange(4) * 10, np.arange(5)).astype(np.float64))
