"""
Core Models Package

Immutable value types that describe one paint of a stretchable image.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. No accidental mutation between composition and rasterization
2. Safe to pass between threads
3. Identical inputs compare equal, so repeated compositions can be checked
   for bit-identical output
"""

from .geometry import (
    BAND_CENTER,
    BAND_CENTER_LEFT,
    BAND_CENTER_RIGHT,
    BAND_LEFT,
    BAND_NAMES,
    BAND_RIGHT,
    BandLayout,
    BlitOp,
    PixelRect,
    Size,
)

__all__ = [
    "BAND_CENTER",
    "BAND_CENTER_LEFT",
    "BAND_CENTER_RIGHT",
    "BAND_LEFT",
    "BAND_NAMES",
    "BAND_RIGHT",
    "BandLayout",
    "BlitOp",
    "PixelRect",
    "Size",
]
