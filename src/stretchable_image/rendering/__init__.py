"""
Module: rendering

Purpose:
    Turns blit ops into pixels. Offline rendering goes through Pillow;
    on-screen painting goes through a QPainter. StretchableImage ties
    an image, a configuration and a size together and keeps the ops
    current.

Key Classes:
    - Rasterizer: Abstract op executor
    - PillowRasterizer: Draws onto a PIL canvas
    - StretchableImage: Caller-owned holder that recomposes on change

Key Functions:
    - render_ops(): Render ops into a new PIL canvas

Dependencies:
    - PIL: Offline rasterization
    - PySide6: QPainter rasterization (rendering.qt_painter)
"""

from .rasterizer import PillowRasterizer, Rasterizer, dest_box, render_ops
from .stretchable import StretchableImage

__all__ = [
    "PillowRasterizer",
    "Rasterizer",
    "StretchableImage",
    "dest_box",
    "render_ops",
]
