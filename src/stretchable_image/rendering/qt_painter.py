"""
Module: rendering.qt_painter

Purpose:
    Rasterizer that draws blit ops with a QPainter. The painter works in
    logical pixels; ops are in physical pixels, so the painter is scaled
    by 1 / device_pixel_ratio for the duration of the draw.

Key Classes:
    - QtPainterRasterizer: Draws ops with QPainter.drawImage()

Key Functions:
    - pil_to_qimage(): Convert a PIL image to a QImage

Dependencies:
    - PySide6.QtGui: QPainter, QImage
    - PySide6.QtCore: QRectF

Used By:
    - rendering.stretchable: StretchableImage.paint()
"""

from __future__ import annotations

from typing import Sequence

from PIL import Image
from PySide6.QtCore import QRectF
from PySide6.QtGui import QImage, QPainter

from stretchable_image.core.models import BlitOp, PixelRect

from .rasterizer import Rasterizer


def _to_rectf(rect: PixelRect) -> QRectF:
    return QRectF(rect.left, rect.top, rect.width, rect.height)


def pil_to_qimage(image: Image.Image) -> QImage:
    """
    Convert a PIL image to a QImage (RGBA8888).

    The returned QImage owns a copy of the pixel data.
    """
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    data = image.tobytes("raw", "RGBA")
    qimage = QImage(
        data,
        image.width,
        image.height,
        image.width * 4,
        QImage.Format.Format_RGBA8888,
    )
    return qimage.copy()


class QtPainterRasterizer(Rasterizer):
    """
    Draws blit ops onto an active QPainter.

    Attributes:
        painter: Active painter (begun on a widget, pixmap or QImage)
        device_pixel_ratio: Physical pixels per logical pixel

    Example:
        >>> painter = QPainter(widget)
        >>> QtPainterRasterizer(painter, 2.0).draw(qimage, ops)
        >>> painter.end()
    """

    def __init__(self, painter: QPainter, device_pixel_ratio: float = 1.0) -> None:
        if device_pixel_ratio <= 0:
            raise ValueError(
                f"device_pixel_ratio must be positive: {device_pixel_ratio}"
            )
        self.painter = painter
        self.device_pixel_ratio = device_pixel_ratio

    def draw(self, image: QImage, ops: Sequence[BlitOp]) -> None:
        """Draw every op from image, in order, with smooth filtering."""
        if isinstance(image, Image.Image):
            image = pil_to_qimage(image)

        painter = self.painter
        painter.save()
        try:
            painter.scale(1 / self.device_pixel_ratio, 1 / self.device_pixel_ratio)
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
            for op in ops:
                # A zero-width source (center_ratio 0) has nothing to draw
                if op.source.is_empty:
                    continue
                painter.drawImage(_to_rectf(op.dest), image, _to_rectf(op.source))
        finally:
            painter.restore()
