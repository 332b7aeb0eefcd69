"""
Tests for data models, numeric traits and configuration.
"""

import numpy as np
import pytest
from pydantic import ValidationError

from regionhist import HistogramConfig, RangeViolation, Region, component_traits, default_range
from regionhist.numeric import resolve_range


class TestRegion:
    """Test the region model."""

    def test_slices(self):
        """Test that slices select rows then columns."""
        region = Region(x=2, y=1, width=3, height=2)
        img = np.arange(30).reshape(5, 6)

        rows, cols = region.slices()

        np.testing.assert_array_equal(img[rows, cols], [[8, 9, 10], [14, 15, 16]])
        assert region.area == 6

    def test_full(self):
        """Test the region covering a whole image."""
        region = Region.full(np.zeros((4, 7, 3)))

        assert (region.x, region.y, region.width, region.height) == (0, 0, 7, 4)

    def test_fits(self):
        """Test bounds checking against an image shape."""
        region = Region(x=5, y=5, width=5, height=5)

        assert region.fits((10, 10))
        assert not region.fits((9, 10))

    def test_invalid_size(self):
        """Test that empty regions are rejected."""
        with pytest.raises(ValidationError):
            Region(x=0, y=0, width=0, height=3)

    def test_negative_origin(self):
        """Test that negative coordinates are rejected."""
        with pytest.raises(ValidationError):
            Region(x=-1, y=0, width=1, height=1)


class TestRangeViolation:
    """Test diagnostic records."""

    def test_describe(self):
        """Test that the description lists every diagnostic field."""
        violation = RangeViolation(
            value=300.0, index=4, range_min=0.0, range_max=255.0, num_bins=16,
            bin_index=18, bin_width=15.9375, num_values=10, channel=2,
        )

        text = violation.describe()

        assert "Can't write to bin 18!" in text
        assert "There are 10 values." in text
        assert "values[i] (i = 4) = 300.0" in text
        assert "Channel 2" in text


class TestComponentTraits:
    """Test numeric traits of pixel component types."""

    def test_uint8(self):
        """Test 8-bit unsigned bounds."""
        traits = component_traits(np.uint8)

        assert traits.is_integral
        assert (traits.min_value, traits.max_value) == (0, 255)

    def test_int16(self):
        """Test signed integer bounds."""
        assert default_range("int16") == (-32768, 32767)

    def test_float(self):
        """Test that floats use the normalized intensity range."""
        traits = component_traits(np.float32)

        assert not traits.is_integral
        assert default_range(np.float64) == (0.0, 1.0)

    def test_bool(self):
        """Test that masks map to [0, 1]."""
        assert default_range(np.bool_) == (0, 1)

    def test_unsupported(self):
        """Test that complex types have no intensity range."""
        with pytest.raises(TypeError, match="Unsupported"):
            component_traits(np.complex64)

    def test_resolve_range(self):
        """Test that only missing bounds are filled."""
        assert resolve_range(np.uint8) == (0, 255)
        assert resolve_range(np.uint8, 10, None) == (10, 255)
        assert resolve_range(np.uint16, None, 4095) == (0, 4095)


class TestHistogramConfig:
    """Test configuration validation."""

    def test_defaults_valid(self):
        """Test that the default config validates."""
        cfg = HistogramConfig()
        cfg.validate()

        assert cfg.bins_per_channel == 16
        assert cfg.range_min is None

    def test_inverted_range(self):
        """Test that range_min above range_max is rejected."""
        with pytest.raises(ValueError, match="range_min"):
            HistogramConfig(range_min=10, range_max=5).validate()

    def test_invalid_workers(self):
        """Test that worker count must be positive."""
        with pytest.raises(ValueError, match="num_workers"):
            HistogramConfig(num_workers=0).validate()
