"""
Module: images

Purpose:
    Image acquisition for stretchable rendering. Decodes source images
    from files or bytes, synchronously or on a worker thread.

Key Classes:
    - ImageLoader: Background decoder returning Futures
    - ImageLoadError: Missing or undecodable image

Key Functions:
    - load_image(): Decode an image immediately

Dependencies:
    - PIL: Image decoding
"""

from .loader import ImageLoader, ImageLoadError, load_image

__all__ = [
    "ImageLoader",
    "ImageLoadError",
    "load_image",
]
