"""
Module: images.loader

Purpose:
    Acquires and decodes source images. Loading may run on a worker
    thread; callers receive a Future and decide what to do when it
    resolves. The compositor never calls into this module.

Key Classes:
    - ImageLoader: Thread pool that decodes images in the background
    - ImageLoadError: Exception for missing or undecodable images

Key Functions:
    - load_image(): Decode an image from a path or raw bytes

Dependencies:
    - PIL: Image decoding
    - concurrent.futures (std)

Used By:
    - rendering.stretchable: StretchableImage.watch()
    - cli: plan / render commands
"""

from __future__ import annotations

import io
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes]


class ImageLoadError(Exception):
    """Image missing or could not be decoded."""


def load_image(source: ImageSource) -> Image.Image:
    """
    Decode an image fully into memory.

    The returned image is converted to RGBA so every rasterizer can
    blend it the same way, and detached from the underlying file.

    Args:
        source: File path or encoded image bytes

    Returns:
        Decoded RGBA image

    Raises:
        ImageLoadError: If the file is missing or not a decodable image

    Example:
        >>> img = load_image(Path("images/border.png"))
        >>> img.mode
        'RGBA'
    """
    if isinstance(source, bytes):
        fp = io.BytesIO(source)
        name = f"<{len(source)} bytes>"
    else:
        path = Path(source)
        if not path.exists():
            raise ImageLoadError(f"Image not found: {path}")
        fp = path
        name = str(path)

    try:
        with Image.open(fp) as img:
            img.load()
            decoded = img.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ImageLoadError(f"Failed to decode image {name}: {e}") from e

    logger.debug(f"Loaded {name} ({decoded.width}x{decoded.height})")
    return decoded


class ImageLoader:
    """
    Background image decoder.

    Wraps a small thread pool. Each submit() returns a Future that
    resolves to a decoded image or raises ImageLoadError.

    Example:
        >>> with ImageLoader() as loader:
        ...     future = loader.submit(Path("images/border.png"))
        ...     image = future.result()
    """

    def __init__(self, max_workers: int = 2) -> None:
        if max_workers <= 0:
            raise ValueError(f"max_workers must be positive: {max_workers}")
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="image-loader",
        )

    def submit(self, source: ImageSource) -> Future:
        """Start decoding source on a worker thread."""
        return self._executor.submit(load_image, source)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker threads."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "ImageLoader":
        """Context manager entry."""
        return self

    def __exit__(self, *args) -> None:
        """Context manager exit - stop workers."""
        self.shutdown()
