"""
Module: rendering.stretchable

Purpose:
    Caller-owned holder for one stretchable image. Keeps the current
    source image, configuration and layout, and recomposes the blit ops
    from scratch whenever any of them changes. There is no incremental
    update path: every change yields a complete replacement op list.

    The holder can watch a Future from the image loader. When the Future
    resolves the image is swapped in (or cleared on a load failure) and
    the ops are recomposed once. A newer watch() or close() supersedes
    any earlier Future, whose result is then ignored.

Key Classes:
    - StretchableImage: Image + config + size -> current blit ops

Dependencies:
    - PIL: Offline rendering via rendering.rasterizer
    - PySide6: Painting via rendering.qt_painter (imported on use)
    - threading (std): Future callbacks arrive on loader threads

Used By:
    - cli: render command
    - Host applications embedding a stretchable image
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError, Future
from typing import Any, Callable, List, Optional, Tuple

from PIL import Image

from stretchable_image.compositor import (
    LayoutConstraints,
    StretchConfig,
    compose_for,
    image_dimensions,
    placeholder_size,
    resolve_target_size,
    to_physical,
)
from stretchable_image.core.models import BlitOp, Size

from .rasterizer import render_ops

logger = logging.getLogger(__name__)

ChangeListener = Callable[["StretchableImage"], None]


class StretchableImage:
    """
    Holds the state needed to paint one stretchable image.

    Attributes:
        config: Rendering configuration
        image: Current source image, or None while unavailable
        logical_size: Size occupied in the host layout (logical pixels)
        physical_size: logical_size in device pixels
        blit_ops: Ops for the current image and size

    Example:
        >>> holder = StretchableImage(StretchConfig(size=Size(120, 40)))
        >>> holder.set_image(load_image("border.png"))
        >>> len(holder.blit_ops)
        3
    """

    def __init__(
        self,
        config: Optional[StretchConfig] = None,
        image: Optional[Any] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._config = config or StretchConfig()
        self._image = image
        self._constraints: Optional[LayoutConstraints] = None
        self._logical_size = Size(0.0, 0.0)
        self._ops: Tuple[BlitOp, ...] = ()
        self._future: Optional[Future] = None
        self._listeners: List[ChangeListener] = []
        self._recompose(notify=False)

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def config(self) -> StretchConfig:
        return self._config

    @property
    def image(self) -> Optional[Any]:
        return self._image

    @property
    def logical_size(self) -> Size:
        return self._logical_size

    @property
    def physical_size(self) -> Size:
        return to_physical(self._logical_size, self._config.device_pixel_ratio)

    @property
    def blit_ops(self) -> Tuple[BlitOp, ...]:
        return self._ops

    @property
    def has_image(self) -> bool:
        return self._image is not None

    # ─────────────────────────────────────────────────────────────────────────
    # Change Notification
    # ─────────────────────────────────────────────────────────────────────────

    def add_listener(self, listener: ChangeListener) -> None:
        """Call listener(self) after every recomposition."""
        self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ─────────────────────────────────────────────────────────────────────────
    # State Changes
    # ─────────────────────────────────────────────────────────────────────────

    def set_image(self, image: Optional[Any]) -> None:
        """Replace the source image and recompose."""
        with self._lock:
            self._image = image
            self._recompose()

    def clear(self) -> None:
        """Drop the source image; nothing is painted until a new one is set."""
        self.set_image(None)

    def set_config(self, config: StretchConfig) -> None:
        """Replace the configuration and recompose."""
        with self._lock:
            self._config = config
            self._recompose()

    def layout(self, constraints: Optional[LayoutConstraints] = None) -> Size:
        """
        Size the image for the given layout constraints and recompose.

        Args:
            constraints: Space offered by the host (None = unbounded)

        Returns:
            The resolved logical size
        """
        with self._lock:
            self._constraints = constraints
            self._recompose()
            return self._logical_size

    def resize(self, size: Size) -> Size:
        """Lay out into exactly size (a fixed config size still wins)."""
        return self.layout(LayoutConstraints(max_width=size.width, max_height=size.height))

    # ─────────────────────────────────────────────────────────────────────────
    # Asynchronous Loading
    # ─────────────────────────────────────────────────────────────────────────

    def watch(self, future: Future) -> None:
        """
        Take the image from future once it resolves.

        Any previously watched Future is superseded.
        """
        with self._lock:
            self._future = future
        future.add_done_callback(self._on_loaded)

    def _on_loaded(self, future: Future) -> None:
        with self._lock:
            if future is not self._future:
                logger.debug("Ignoring superseded image load")
                return
            self._future = None

            try:
                image = future.result()
            except CancelledError:
                logger.debug("Image load cancelled")
                return
            except Exception as e:
                logger.warning(f"Failed to load image: {e}")
                image = None

            self._image = image
            self._recompose()

    def close(self) -> None:
        """Stop watching any pending load and drop listeners."""
        with self._lock:
            self._future = None
            self._listeners.clear()

    def __enter__(self) -> "StretchableImage":
        """Context manager entry."""
        return self

    def __exit__(self, *args) -> None:
        """Context manager exit - drop subscriptions."""
        self.close()

    # ─────────────────────────────────────────────────────────────────────────
    # Composition
    # ─────────────────────────────────────────────────────────────────────────

    def _resolve_logical_size(self) -> Size:
        if self._image is None:
            return placeholder_size(self._config.size)
        return resolve_target_size(
            image_dimensions(self._image),
            fixed_size=self._config.size,
            constraints=self._constraints,
            device_pixel_ratio=self._config.device_pixel_ratio,
        )

    def _recompose(self, notify: bool = True) -> None:
        self._logical_size = self._resolve_logical_size()
        self._ops = compose_for(self._image, self.physical_size, self._config)
        logger.debug(
            f"Recomposed {len(self._ops)} ops for "
            f"{self._logical_size.width:g}x{self._logical_size.height:g}"
        )
        if notify:
            for listener in list(self._listeners):
                listener(self)

    # ─────────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────────

    def render(
        self,
        background: Optional[Tuple[int, int, int, int]] = None,
    ) -> Optional[Image.Image]:
        """
        Render the current ops with Pillow.

        Returns:
            RGBA image of the physical size, or None if nothing to paint
        """
        with self._lock:
            if not self._ops:
                return None
            return render_ops(
                self._image,
                self._ops,
                self.physical_size,
                resample=self._config.resample,
                background=background,
            )

    def paint(self, painter: Any) -> None:
        """Paint the current ops with a QPainter in logical coordinates."""
        from stretchable_image.rendering.qt_painter import QtPainterRasterizer

        with self._lock:
            if not self._ops:
                return
            rasterizer = QtPainterRasterizer(painter, self._config.device_pixel_ratio)
            rasterizer.draw(self._image, self._ops)
