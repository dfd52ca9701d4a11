"""
Tests for the boundary resolver
"""

import pytest

from image_access.core.boundary import resolve, resolve_axis, resolve_xy
from image_access.enums import Padding
from image_access.exceptions import InvalidArgumentError


class TestResolve:
    """Test single-coordinate resolution"""

    @pytest.mark.parametrize("padding", ["mirror", "repeat", "zero"])
    def test_in_range_is_identity(self, padding):
        """Test that valid coordinates are returned unchanged"""
        assert [resolve(c, 5, padding) for c in range(5)] == [0, 1, 2, 3, 4]

    def test_mirror(self):
        """Test mirror padding without repeating the edge pixel"""
        assert resolve(-1, 5, Padding.MIRROR) == 0
        assert resolve(-2, 5, Padding.MIRROR) == 1
        assert resolve(5, 5, Padding.MIRROR) == 4
        assert resolve(6, 5, Padding.MIRROR) == 3

    def test_repeat(self):
        """Test periodic wrap"""
        assert resolve(-1, 5, Padding.REPEAT) == 4
        assert resolve(-5, 5, Padding.REPEAT) == 0
        assert resolve(5, 5, Padding.REPEAT) == 0
        assert resolve(7, 5, Padding.REPEAT) == 2

    def test_zero(self):
        """Test that zero padding yields the sentinel"""
        assert resolve(-1, 5, Padding.ZERO) is None
        assert resolve(5, 5, Padding.ZERO) is None

    def test_far_coordinates_stay_in_range(self):
        """Test that coordinates several lengths away still resolve to a valid index"""
        for padding in (Padding.MIRROR, Padding.REPEAT):
            for coord in range(-23, 24):
                assert 0 <= resolve(coord, 4, padding) < 4

    def test_length_one(self):
        """Test resolution against a single-pixel axis"""
        assert resolve(-3, 1, "mirror") == 0
        assert resolve(2, 1, "repeat") == 0

    def test_string_padding_is_case_insensitive(self):
        """Test padding given as mixed-case string"""
        assert resolve(-1, 5, "Repeat") == 4

    def test_unknown_padding(self):
        """Test that an unknown padding mode is rejected"""
        with pytest.raises(InvalidArgumentError, match="expected one of"):
            resolve(0, 5, "wrap")

    def test_empty_axis(self):
        """Test that an empty axis is rejected"""
        with pytest.raises(InvalidArgumentError):
            resolve(0, 0)


class TestResolveHelpers:
    """Test 2D and axis helpers"""

    def test_resolve_xy_uses_nx_for_x(self):
        """Test that x is resolved against the width and y against the height"""
        assert resolve_xy(5, -1, (3, 5), "mirror") == (4, 0)

    def test_resolve_xy_zero_on_either_axis(self):
        """Test that one zero-padded axis makes the whole coordinate absent"""
        assert resolve_xy(0, 3, (3, 5), "zero") is None
        assert resolve_xy(1, 1, (3, 5), "zero") == (1, 1)

    def test_resolve_axis(self):
        """Test resolving a run of coordinates"""
        assert resolve_axis(-1, 4, 3, "repeat") == [2, 0, 1, 2]
        assert resolve_axis(-1, 4, 3, "zero") == [None, 0, 1, 2]
