"""
Module: geometry

Purpose:
    Immutable value types shared by the compositor and the rasterizers.
    All coordinates are floats in physical (device) pixels unless a
    caller says otherwise. Every value is recomputed per paint; nothing
    here is cached or mutated.

Key Classes:
    - Size: Width/height pair (target sizes, logical sizes)
    - PixelRect: Axis-aligned rectangle (left, top, width, height)
    - BandLayout: Left/center/right band widths of a source image
    - BlitOp: One source rect -> destination rect copy instruction

Dependencies:
    - dataclasses (std)
    - typing (std)

Used By:
    - compositor.slicer
    - compositor.sizing
    - rendering.rasterizer
    - rendering.qt_painter
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


# Band names in left-to-right paint order
BAND_LEFT = "left"
BAND_CENTER = "center"
BAND_CENTER_LEFT = "center_left"
BAND_CENTER_RIGHT = "center_right"
BAND_RIGHT = "right"

BAND_NAMES: Tuple[str, ...] = (
    BAND_LEFT,
    BAND_CENTER,
    BAND_CENTER_LEFT,
    BAND_CENTER_RIGHT,
    BAND_RIGHT,
)


@dataclass(frozen=True, slots=True)
class Size:
    """
    Width/height pair.

    Used for target sizes (physical pixels) and widget sizes (logical
    pixels). Negative dimensions are rejected; zero is allowed and
    means "nothing to paint".

    Example:
        >>> Size(300, 40).scaled(2.0)
        Size(width=600.0, height=80.0)
    """

    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate dimensions on construction."""
        if self.width < 0:
            raise ValueError(f"width must be >= 0: {self.width}")
        if self.height < 0:
            raise ValueError(f"height must be >= 0: {self.height}")

    @property
    def is_empty(self) -> bool:
        """True if either dimension is zero."""
        return self.width <= 0 or self.height <= 0

    def scaled(self, factor: float) -> Size:
        """Return a new Size with both dimensions multiplied by factor."""
        return Size(self.width * factor, self.height * factor)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.width, self.height)


@dataclass(frozen=True, slots=True)
class PixelRect:
    """
    Axis-aligned rectangle in pixel coordinates.

    The rectangle covers [left, right) x [top, bottom). Width and height
    may be zero (an empty rect) but never negative.

    Attributes:
        left: X-coordinate of the left edge
        top: Y-coordinate of the top edge
        width: Horizontal extent
        height: Vertical extent

    Example:
        >>> rect = PixelRect.from_ltwh(25, 0, 50, 40)
        >>> rect.right
        75
    """

    left: float
    top: float
    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate extents on construction."""
        if self.width < 0:
            raise ValueError(f"width must be >= 0: {self.width}")
        if self.height < 0:
            raise ValueError(f"height must be >= 0: {self.height}")

    @classmethod
    def from_ltwh(cls, left: float, top: float, width: float, height: float) -> PixelRect:
        """Build a rect from left, top, width and height."""
        return cls(left=left, top=top, width=width, height=height)

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def right(self) -> float:
        """X-coordinate of the right edge (exclusive)."""
        return self.left + self.width

    @property
    def bottom(self) -> float:
        """Y-coordinate of the bottom edge (exclusive)."""
        return self.top + self.height

    @property
    def is_empty(self) -> bool:
        """True if the rect covers no area."""
        return self.width <= 0 or self.height <= 0

    # ─────────────────────────────────────────────────────────────────────────
    # Conversions
    # ─────────────────────────────────────────────────────────────────────────

    def as_box(self) -> Tuple[float, float, float, float]:
        """
        Get as (left, top, right, bottom) tuple for PIL.

        Returns:
            Float box suitable for Image.resize(box=...)
        """
        return (self.left, self.top, self.right, self.bottom)

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON output."""
        return {
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PixelRect:
        """Deserialize from dictionary."""
        return cls(
            left=data["left"],
            top=data["top"],
            width=data["width"],
            height=data["height"],
        )

    def __repr__(self) -> str:
        return f"PixelRect({self.left:g}, {self.top:g}, {self.width:g}, {self.height:g})"


@dataclass(frozen=True, slots=True)
class BandLayout:
    """
    Horizontal split of a source image into left, center and right bands.

    The side bands always have equal width. The center band is the
    stretch area that absorbs widening and cropping.

    Invariants:
        - left_width == right_width
        - left_width + center_width + right_width == source width (float tolerance)

    Example:
        >>> BandLayout.split(100, 0.5)
        BandLayout(left_width=25.0, center_width=50.0, right_width=25.0)
    """

    left_width: float
    center_width: float
    right_width: float

    @classmethod
    def split(cls, source_width: float, center_ratio: float) -> BandLayout:
        """
        Split a source width by center ratio.

        Args:
            source_width: Width of the source image in pixels
            center_ratio: Fraction of the width given to the center band

        Returns:
            BandLayout with symmetric side bands
        """
        side = source_width * ((1 - center_ratio) / 2)
        return cls(
            left_width=side,
            center_width=source_width * center_ratio,
            right_width=side,
        )

    @property
    def total(self) -> float:
        """Sum of all three band widths."""
        return self.left_width + self.center_width + self.right_width

    @property
    def sides(self) -> float:
        """Combined width of the left and right bands."""
        return self.left_width + self.right_width

    @property
    def center_left(self) -> float:
        """X-coordinate where the center band starts."""
        return self.left_width

    @property
    def right_left(self) -> float:
        """X-coordinate where the right band starts."""
        return self.left_width + self.center_width

    def scaled(self, factor: float) -> BandLayout:
        """Return the layout with every band multiplied by factor."""
        return BandLayout(
            left_width=self.left_width * factor,
            center_width=self.center_width * factor,
            right_width=self.right_width * factor,
        )


@dataclass(frozen=True, slots=True)
class BlitOp:
    """
    One image copy instruction handed to a rasterizer.

    Attributes:
        source: Region of the source image, in source pixels
        dest: Region of the target canvas, in physical pixels
        band: Which band this op paints (see BAND_NAMES)
    """

    source: PixelRect
    dest: PixelRect
    band: str = BAND_CENTER

    def __post_init__(self) -> None:
        if self.band not in BAND_NAMES:
            raise ValueError(f"Unknown band: {self.band!r}")

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON output."""
        return {
            "band": self.band,
            "source": self.source.to_dict(),
            "dest": self.dest.to_dict(),
        }
