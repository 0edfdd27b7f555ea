"""
Module: rendering.rasterizer

Purpose:
    Executes blit ops produced by the compositor. Defines the abstract
    rasterizer interface and the Pillow implementation used for offline
    rendering (command line, tests, image export).

Key Classes:
    - Rasterizer: Abstract interface for drawing blit ops
    - PillowRasterizer: Draws onto a PIL RGBA canvas

Key Functions:
    - render_ops(): Create a canvas of the target size and draw ops onto it
    - dest_box(): Integer destination box for a float rect

Dependencies:
    - PIL: Filtered resize and compositing

Used By:
    - rendering.stretchable: StretchableImage.render()
    - cli: render command
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence, Tuple

from PIL import Image

from stretchable_image.core.models import BlitOp, PixelRect, Size

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


class Rasterizer(ABC):
    """
    Abstract interface for drawing blit ops.

    Implementations perform a filtered image copy for each op, in the
    order given.
    """

    @abstractmethod
    def draw(self, image: Any, ops: Sequence[BlitOp]) -> None:
        """
        Draw every op from image onto the target surface.

        Args:
            image: Source image the ops refer to
            ops: Ordered blit ops from the compositor
        """


def dest_box(rect: PixelRect) -> Tuple[int, int, int, int]:
    """
    Round a float rect to an integer (left, top, right, bottom) box.

    Each edge is rounded on its own, so two rects sharing an edge still
    share it after rounding and no seam or overlap appears between
    neighbouring bands.
    """
    return (
        int(round(rect.left)),
        int(round(rect.top)),
        int(round(rect.right)),
        int(round(rect.bottom)),
    )


def _source_box(
    rect: PixelRect, image_size: Tuple[int, int]
) -> Tuple[float, float, float, float]:
    """Source rect as a float box clamped to the image bounds."""
    width, height = image_size
    return (
        max(0.0, rect.left),
        max(0.0, rect.top),
        min(float(width), rect.right),
        min(float(height), rect.bottom),
    )


class PillowRasterizer(Rasterizer):
    """
    Rasterizer drawing onto a PIL RGBA canvas.

    The canvas is in physical pixels. Each op's source region is resized
    with the configured filter and alpha-composited at its destination.

    Attributes:
        canvas: Target RGBA image
        resample: Pillow resampling filter

    Example:
        >>> canvas = Image.new("RGBA", (300, 40))
        >>> PillowRasterizer(canvas).draw(source, compose(100, 40, 300, 40))
    """

    def __init__(
        self,
        canvas: Image.Image,
        resample: Image.Resampling = Image.Resampling.LANCZOS,
    ) -> None:
        if canvas.mode != "RGBA":
            raise ValueError(f"canvas must be RGBA, got {canvas.mode}")
        self.canvas = canvas
        self.resample = resample

    def draw(self, image: Image.Image, ops: Sequence[BlitOp]) -> None:
        """Draw every op from image onto the canvas."""
        if image.mode != "RGBA":
            image = image.convert("RGBA")

        for op in ops:
            left, top, right, bottom = dest_box(op.dest)
            if right <= left or bottom <= top:
                logger.debug(f"Skipping {op.band}: rounds to empty box {op.dest!r}")
                continue

            box = _source_box(op.source, image.size)
            if box[2] <= box[0] or box[3] <= box[1]:
                continue

            patch = image.resize(
                (right - left, bottom - top),
                self.resample,
                box=box,
            )
            self.canvas.alpha_composite(patch, dest=(left, top))


def render_ops(
    image: Image.Image,
    ops: Sequence[BlitOp],
    target: Size,
    *,
    resample: Image.Resampling = Image.Resampling.LANCZOS,
    background: Optional[Tuple[int, int, int, int]] = None,
) -> Image.Image:
    """
    Render ops into a new canvas of the target size.

    Args:
        image: Source image
        ops: Ordered blit ops
        target: Canvas size in physical pixels (fractional sizes round up)
        resample: Pillow resampling filter
        background: RGBA fill, transparent by default

    Returns:
        New RGBA image of size ceil(target)
    """
    size = (math.ceil(target.width), math.ceil(target.height))
    canvas = Image.new("RGBA", size, background or TRANSPARENT)
    PillowRasterizer(canvas, resample).draw(image, ops)
    return canvas
