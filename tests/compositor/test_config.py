"""
Tests for compositor.config

Test Coverage:
- StretchConfig defaults
- center_ratio validation (must be in [0, 1))
- device_pixel_ratio validation
"""
from dataclasses import FrozenInstanceError

import pytest
from PIL import Image

from stretchable_image.compositor import DEFAULT_CENTER_RATIO, StretchConfig
from stretchable_image.core.models import Size


class TestStretchConfig:
    """Tests for StretchConfig dataclass."""

    def test_init_when_defaults_then_half_center(self):
        """Default config uses a 0.5 center ratio and layout-driven size."""
        # Act
        config = StretchConfig()

        # Assert
        assert config.center_ratio == DEFAULT_CENTER_RATIO == 0.5
        assert config.size is None
        assert config.device_pixel_ratio == 1.0
        assert config.resample == Image.Resampling.LANCZOS

    def test_side_ratio_when_default_then_quarter(self):
        """Each side band takes half of what the center leaves."""
        assert StretchConfig().side_ratio == 0.25

    @pytest.mark.parametrize("ratio", [1.0, 1.01, 5.0])
    def test_init_when_ratio_at_least_one_then_raises(self, ratio):
        """A ratio of 1.0 or more would remove the side bands."""
        with pytest.raises(ValueError, match="less than 1.0"):
            StretchConfig(center_ratio=ratio)

    def test_init_when_negative_ratio_then_raises(self):
        with pytest.raises(ValueError, match="center_ratio must be >= 0"):
            StretchConfig(center_ratio=-0.1)

    @pytest.mark.parametrize("ratio", [0.0, 0.3, 0.999])
    def test_init_when_ratio_in_range_then_accepted(self, ratio):
        assert StretchConfig(center_ratio=ratio).center_ratio == ratio

    @pytest.mark.parametrize("dpr", [0, -1.5])
    def test_init_when_non_positive_pixel_ratio_then_raises(self, dpr):
        with pytest.raises(ValueError, match="device_pixel_ratio must be positive"):
            StretchConfig(device_pixel_ratio=dpr)

    def test_init_when_fixed_size_then_kept(self):
        config = StretchConfig(size=Size(120, 40), device_pixel_ratio=2.0)

        assert config.size == Size(120, 40)
        assert config.device_pixel_ratio == 2.0

    def test_config_is_frozen(self):
        """Configuration cannot change after construction."""
        config = StretchConfig()
        with pytest.raises(FrozenInstanceError):
            config.center_ratio = 0.9
