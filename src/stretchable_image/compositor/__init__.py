"""
Module: compositor

Purpose:
    Geometry for stretchable images. Resolves the target size and turns
    (source size, target size, center ratio) into ordered blit ops.
    Pure functions only; no image data is touched here.

Key Modules:
    - config: StretchConfig
    - sizing: Target size resolution and logical/physical conversion
    - slicer: The slice compositor

Used By:
    - rendering: Rasterizers and the StretchableImage holder
    - cli: Command line entry point
"""

from .config import DEFAULT_CENTER_RATIO, StretchConfig
from .sizing import LayoutConstraints, placeholder_size, resolve_target_size, to_physical
from .slicer import Regime, compose, compose_for, image_dimensions, select_regime

__all__ = [
    "DEFAULT_CENTER_RATIO",
    "StretchConfig",
    "LayoutConstraints",
    "placeholder_size",
    "resolve_target_size",
    "to_physical",
    "Regime",
    "compose",
    "compose_for",
    "image_dimensions",
    "select_regime",
]
