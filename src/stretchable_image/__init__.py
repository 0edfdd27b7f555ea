"""Top-level package for stretchable_image.

Renders a bitmap into an arbitrary rectangle by splitting it into left,
center and right bands: the side bands keep their proportions while the
center band absorbs all horizontal stretching or cropping.

Provides subpackages:
- stretchable_image.compositor – target sizing and the slice compositor
- stretchable_image.images – image decoding
- stretchable_image.rendering – Pillow / Qt rasterizers and the image holder
"""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

try:
    __version__ = _pkg_version("stretchable-image")
except PackageNotFoundError:
    __version__ = "0.0.0"

from stretchable_image.compositor import (  # noqa: E402
    DEFAULT_CENTER_RATIO,
    LayoutConstraints,
    Regime,
    StretchConfig,
    compose,
    resolve_target_size,
)
from stretchable_image.core.models import BandLayout, BlitOp, PixelRect, Size  # noqa: E402

__all__: list[str] = [
    "__version__",
    "DEFAULT_CENTER_RATIO",
    "BandLayout",
    "BlitOp",
    "LayoutConstraints",
    "PixelRect",
    "Regime",
    "Size",
    "StretchConfig",
    "compose",
    "resolve_target_size",
]
