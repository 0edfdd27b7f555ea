"""
Module: compositor.config

Purpose:
    Configuration for stretchable image rendering.
    Defines the center band ratio, the optional fixed size and the
    device pixel ratio used to convert logical to physical pixels.

Key Classes:
    - StretchConfig: Immutable rendering configuration

Dependencies:
    - dataclasses (std)
    - PIL.Image: Resampling filters

Used By:
    - compositor.slicer: compose_for()
    - rendering.stretchable: StretchableImage
    - cli: Command line options
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PIL import Image

from stretchable_image.core.models import Size


DEFAULT_CENTER_RATIO = 0.5
DEFAULT_DEVICE_PIXEL_RATIO = 1.0


@dataclass(frozen=True)
class StretchConfig:
    """
    Configuration for stretchable image rendering (immutable).

    Attributes:
        center_ratio: Fraction of the source width that forms the stretch
            area. Must be in [0, 1).
        size: Fixed logical target size, or None to size from layout
        device_pixel_ratio: Physical pixels per logical pixel
        resample: Filter used by the Pillow rasterizer

    Example:
        >>> config = StretchConfig(center_ratio=0.5)
        >>> config.side_ratio
        0.25
    """

    center_ratio: float = DEFAULT_CENTER_RATIO
    size: Optional[Size] = None
    device_pixel_ratio: float = DEFAULT_DEVICE_PIXEL_RATIO
    resample: Image.Resampling = Image.Resampling.LANCZOS

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.center_ratio >= 1.0:
            raise ValueError(
                f"center_ratio must be less than 1.0: {self.center_ratio}"
            )
        if self.center_ratio < 0:
            raise ValueError(f"center_ratio must be >= 0: {self.center_ratio}")
        if self.device_pixel_ratio <= 0:
            raise ValueError(
                f"device_pixel_ratio must be positive: {self.device_pixel_ratio}"
            )

    @property
    def side_ratio(self) -> float:
        """Fraction of the source width taken by each side band."""
        return (1 - self.center_ratio) / 2
