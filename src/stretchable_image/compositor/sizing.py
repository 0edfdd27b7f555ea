"""
Module: compositor.sizing

Purpose:
    Resolves the size an image is painted at. Either a caller-supplied
    fixed size, or the space offered by the layout, falling back to the
    image's intrinsic size on any axis the layout leaves unbounded.

    Sizes returned by resolve_target_size() are logical. Use to_physical()
    to get the device-pixel size handed to the compositor.

Key Classes:
    - LayoutConstraints: Maximum width/height offered by the host layout

Key Functions:
    - resolve_target_size(): Logical size to paint at
    - to_physical(): Logical -> device pixels
    - placeholder_size(): Space held while no image is available

Dependencies:
    - math (std)
    - stretchable_image.core.models: Size

Used By:
    - rendering.stretchable: StretchableImage.layout()
    - cli: render command
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from stretchable_image.core.models import Size


@dataclass(frozen=True)
class LayoutConstraints:
    """
    Space offered by the host layout, in logical pixels.

    None or math.inf on an axis means the layout leaves it unbounded.

    Example:
        >>> LayoutConstraints(max_width=320).has_bounded_height
        False
    """

    max_width: Optional[float] = None
    max_height: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate constraints on construction."""
        if self.max_width is not None and self.max_width < 0:
            raise ValueError(f"max_width must be >= 0: {self.max_width}")
        if self.max_height is not None and self.max_height < 0:
            raise ValueError(f"max_height must be >= 0: {self.max_height}")

    @property
    def has_bounded_width(self) -> bool:
        return self.max_width is not None and math.isfinite(self.max_width)

    @property
    def has_bounded_height(self) -> bool:
        return self.max_height is not None and math.isfinite(self.max_height)


UNBOUNDED = LayoutConstraints()


def _check_pixel_ratio(device_pixel_ratio: float) -> None:
    if device_pixel_ratio <= 0:
        raise ValueError(
            f"device_pixel_ratio must be positive: {device_pixel_ratio}"
        )


def resolve_target_size(
    image_size: Tuple[float, float],
    fixed_size: Optional[Size] = None,
    constraints: Optional[LayoutConstraints] = None,
    device_pixel_ratio: float = 1.0,
) -> Size:
    """
    Resolve the logical size to paint an image at.

    A fixed size always wins. Otherwise each bounded axis takes the
    layout maximum and each unbounded axis takes the image's intrinsic
    size converted to logical pixels.

    Args:
        image_size: (width, height) of the decoded image in device pixels
        fixed_size: Caller-supplied logical size, or None
        constraints: Layout constraints (default: unbounded on both axes)
        device_pixel_ratio: Physical pixels per logical pixel

    Returns:
        Logical Size

    Raises:
        ValueError: If device_pixel_ratio is not positive

    Example:
        >>> resolve_target_size((100, 40), constraints=LayoutConstraints(max_width=320))
        Size(width=320, height=40.0)
    """
    _check_pixel_ratio(device_pixel_ratio)
    if fixed_size is not None:
        return fixed_size

    constraints = constraints or UNBOUNDED
    image_width, image_height = image_size

    width = (
        constraints.max_width
        if constraints.has_bounded_width
        else image_width / device_pixel_ratio
    )
    height = (
        constraints.max_height
        if constraints.has_bounded_height
        else image_height / device_pixel_ratio
    )
    return Size(width, height)


def to_physical(size: Size, device_pixel_ratio: float) -> Size:
    """
    Convert a logical size to device pixels.

    Raises:
        ValueError: If device_pixel_ratio is not positive
    """
    _check_pixel_ratio(device_pixel_ratio)
    return size.scaled(device_pixel_ratio)


def placeholder_size(fixed_size: Optional[Size]) -> Size:
    """
    Space occupied while no image is available yet.

    Holds the fixed size if one was given so the surrounding layout does
    not jump when the image arrives; otherwise shrinks to nothing.
    """
    if fixed_size is not None:
        return fixed_size
    return Size(0.0, 0.0)
