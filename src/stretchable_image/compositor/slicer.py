"""
Module: compositor.slicer

Purpose:
    The slice compositor. Given source image dimensions, a target size and
    a center band ratio, computes the ordered blit operations that draw
    the image with undistorted side bands and a center band that absorbs
    all horizontal stretching or cropping.

    Three regimes, selected by target width:

    - STRETCH   (target >= natural width): side bands scaled by kh, the
                center band widened by the extra width.
    - CROP      (min width <= target < natural width): side bands kept,
                the center band cropped from the inner edges of its two
                halves, which are drawn adjacent to each other.
    - DOWNSCALE (target < min width): the center band vanishes and the
                side bands are scaled down uniformly a second time and
                centered vertically.

    Here kh = target height / source height, natural width = source
    width * kh, min width = (left + right band) * kh.

Key Functions:
    - compose(): Pure composition from raw dimensions
    - compose_for(): Composition from an image object and a target Size
    - select_regime(): Pick the regime for a target width

Key Classes:
    - Regime: STRETCH / CROP / DOWNSCALE

Dependencies:
    - stretchable_image.core.models: Value types
    - compositor.config: StretchConfig

Used By:
    - rendering.stretchable: StretchableImage
    - cli: plan / render commands
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, List, Optional, Tuple

from stretchable_image.core.models import (
    BAND_CENTER,
    BAND_CENTER_LEFT,
    BAND_CENTER_RIGHT,
    BAND_LEFT,
    BAND_RIGHT,
    BandLayout,
    BlitOp,
    PixelRect,
    Size,
)

from .config import DEFAULT_CENTER_RATIO, StretchConfig

logger = logging.getLogger(__name__)


class Regime(Enum):
    """Geometric case selected by comparing target width to two thresholds."""

    STRETCH = "stretch"
    CROP = "crop"
    DOWNSCALE = "downscale"


def select_regime(
    target_width: float,
    natural_width: float,
    min_width_with_no_center: float,
) -> Regime:
    """
    Pick the regime for a target width.

    The boundary at exactly natural width belongs to STRETCH, and the
    boundary at exactly the no-center width belongs to CROP.

    Args:
        target_width: Requested width in physical pixels
        natural_width: Width of the whole image under uniform scaling
        min_width_with_no_center: Width of both side bands under uniform scaling

    Returns:
        The matching Regime
    """
    if target_width >= natural_width:
        return Regime.STRETCH
    if target_width >= min_width_with_no_center:
        return Regime.CROP
    return Regime.DOWNSCALE


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def _side_ops(
    bands: BandLayout,
    source_height: float,
    left_width: float,
    right_width: float,
    top: float,
    height: float,
) -> List[BlitOp]:
    """Blit ops for the left and right bands placed next to each other."""
    src_left = PixelRect.from_ltwh(0, 0, bands.left_width, source_height)
    src_right = PixelRect.from_ltwh(bands.right_left, 0, bands.right_width, source_height)

    dst_left = PixelRect.from_ltwh(0, top, left_width, height)
    dst_right = PixelRect.from_ltwh(left_width, top, right_width, height)

    return [
        BlitOp(src_left, dst_left, BAND_LEFT),
        BlitOp(src_right, dst_right, BAND_RIGHT),
    ]


def _stretch_ops(
    bands: BandLayout,
    scaled: BandLayout,
    source_height: float,
    target_width: float,
    target_height: float,
) -> List[BlitOp]:
    natural_width = scaled.total
    extra = target_width - natural_width

    dst_left_width = scaled.left_width
    dst_center_width = scaled.center_width + extra
    dst_right_width = scaled.right_width

    src_left = PixelRect.from_ltwh(0, 0, bands.left_width, source_height)
    src_center = PixelRect.from_ltwh(bands.center_left, 0, bands.center_width, source_height)
    src_right = PixelRect.from_ltwh(bands.right_left, 0, bands.right_width, source_height)

    dst_left = PixelRect.from_ltwh(0, 0, dst_left_width, target_height)
    dst_center = PixelRect.from_ltwh(dst_left_width, 0, dst_center_width, target_height)
    dst_right = PixelRect.from_ltwh(
        dst_left_width + dst_center_width, 0, dst_right_width, target_height
    )

    return [
        BlitOp(src_left, dst_left, BAND_LEFT),
        BlitOp(src_center, dst_center, BAND_CENTER),
        BlitOp(src_right, dst_right, BAND_RIGHT),
    ]


def _crop_ops(
    bands: BandLayout,
    scaled: BandLayout,
    kh: float,
    source_height: float,
    target_width: float,
    target_height: float,
) -> List[BlitOp]:
    # Center width left over once both side bands are placed
    available = target_width - scaled.left_width - scaled.right_width
    dst_center_width = _clamp(available, 0.0, scaled.center_width)

    # Width cut from the center, converted back to source pixels
    cut_src = (scaled.center_width - dst_center_width) / kh

    # Source pixels kept next to each side band
    half_keep_src = _clamp((bands.center_width - cut_src) / 2.0, 0.0, bands.center_width / 2.0)

    if dst_center_width <= 0.0 or half_keep_src <= 0.0:
        return _side_ops(
            bands,
            source_height,
            scaled.left_width,
            scaled.right_width,
            0.0,
            target_height,
        )

    src_left = PixelRect.from_ltwh(0, 0, bands.left_width, source_height)
    src_center_left = PixelRect.from_ltwh(bands.center_left, 0, half_keep_src, source_height)
    src_center_right = PixelRect.from_ltwh(
        bands.right_left - half_keep_src, 0, half_keep_src, source_height
    )
    src_right = PixelRect.from_ltwh(bands.right_left, 0, bands.right_width, source_height)

    dst_half = dst_center_width / 2.0
    dst_left = PixelRect.from_ltwh(0, 0, scaled.left_width, target_height)
    dst_center_left = PixelRect.from_ltwh(scaled.left_width, 0, dst_half, target_height)
    dst_center_right = PixelRect.from_ltwh(
        scaled.left_width + dst_half, 0, dst_half, target_height
    )
    dst_right = PixelRect.from_ltwh(
        scaled.left_width + dst_center_width, 0, scaled.right_width, target_height
    )

    return [
        BlitOp(src_left, dst_left, BAND_LEFT),
        BlitOp(src_center_left, dst_center_left, BAND_CENTER_LEFT),
        BlitOp(src_center_right, dst_center_right, BAND_CENTER_RIGHT),
        BlitOp(src_right, dst_right, BAND_RIGHT),
    ]


def _downscale_ops(
    bands: BandLayout,
    scaled: BandLayout,
    source_height: float,
    target_width: float,
    target_height: float,
) -> List[BlitOp]:
    # Second-stage scale, in (0, 1)
    kw = target_width / scaled.sides

    final_height = target_height * kw
    offset_y = (target_height - final_height) / 2.0

    return _side_ops(
        bands,
        source_height,
        scaled.left_width * kw,
        scaled.right_width * kw,
        offset_y,
        final_height,
    )


def compose(
    source_width: float,
    source_height: float,
    target_width: float,
    target_height: float,
    center_ratio: float = DEFAULT_CENTER_RATIO,
) -> Tuple[BlitOp, ...]:
    """
    Compute the blit operations that draw a source image into a target size.

    Pure and deterministic: identical arguments always give an identical
    tuple. Degenerate input is not an error and yields an empty tuple.

    Args:
        source_width: Source image width in pixels
        source_height: Source image height in pixels
        target_width: Target width in physical pixels
        target_height: Target height in physical pixels
        center_ratio: Fraction of the source width used as stretch area

    Returns:
        Ordered blit ops, left to right. Empty if there is nothing to paint.

    Example:
        >>> ops = compose(100, 40, 300, 40, 0.5)
        >>> [op.dest.width for op in ops]
        [25.0, 250.0, 25.0]
    """
    if (
        source_width <= 0
        or source_height <= 0
        or target_width <= 0
        or target_height <= 0
        or center_ratio < 0
        or center_ratio >= 1.0
    ):
        return ()

    source_width = float(source_width)
    source_height = float(source_height)
    target_width = float(target_width)
    target_height = float(target_height)

    kh = target_height / source_height

    bands = BandLayout.split(source_width, center_ratio)
    scaled = bands.scaled(kh)

    natural_width = scaled.total
    min_width_with_no_center = scaled.sides

    regime = select_regime(target_width, natural_width, min_width_with_no_center)
    logger.debug(
        f"{regime.value}: source {source_width:g}x{source_height:g} -> "
        f"target {target_width:g}x{target_height:g} "
        f"(natural {natural_width:g}, no-center {min_width_with_no_center:g})"
    )

    if regime is Regime.STRETCH:
        ops = _stretch_ops(bands, scaled, source_height, target_width, target_height)
    elif regime is Regime.CROP:
        ops = _crop_ops(bands, scaled, kh, source_height, target_width, target_height)
    else:
        ops = _downscale_ops(bands, scaled, source_height, target_width, target_height)

    return tuple(op for op in ops if not op.dest.is_empty)


def compose_for(
    image: Optional[Any],
    target: Size,
    config: Optional[StretchConfig] = None,
) -> Tuple[BlitOp, ...]:
    """
    Compose for an image object and a physical target size.

    Accepts anything exposing width and height (PIL images, QImage via
    its width()/height() methods). A missing image means the source is
    not available yet and yields no ops.

    Args:
        image: Source image, or None
        target: Target size in physical pixels
        config: Rendering configuration (defaults to StretchConfig())

    Returns:
        Ordered blit ops
    """
    if image is None:
        return ()
    config = config or StretchConfig()
    width, height = image_dimensions(image)
    return compose(width, height, target.width, target.height, config.center_ratio)


def image_dimensions(image: Any) -> Tuple[int, int]:
    """
    Read (width, height) from an image object.

    Handles attributes (PIL) and zero-argument methods (Qt).
    """
    width = image.width
    height = image.height
    if callable(width):
        width = width()
    if callable(height):
        height = height()
    return width, height
