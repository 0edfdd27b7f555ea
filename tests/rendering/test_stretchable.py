"""
Tests for rendering.stretchable

Test Coverage:
- StretchableImage with no image: placeholder size, no ops
- Recomposition on image, size and config changes
- Layout: fixed size, constraints, intrinsic fallback
- Watching loader Futures: success, failure, cancellation, superseded loads
- render() / paint() output
"""
import logging
import threading
from concurrent.futures import Future

from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPainter

from stretchable_image.compositor import LayoutConstraints, StretchConfig, compose
from stretchable_image.core.models import Size
from stretchable_image.images import ImageLoader, ImageLoadError
from stretchable_image.rendering import StretchableImage


class TestWithoutImage:
    """Nothing is painted until an image is available."""

    def test_init_when_no_image_then_no_ops(self):
        holder = StretchableImage()

        assert holder.has_image is False
        assert holder.blit_ops == ()
        assert holder.render() is None

    def test_logical_size_when_fixed_then_space_is_held(self):
        """A fixed size is occupied even before the image arrives."""
        holder = StretchableImage(StretchConfig(size=Size(120, 40)))

        assert holder.logical_size == Size(120, 40)
        assert holder.blit_ops == ()

    def test_logical_size_when_not_fixed_then_shrinks(self):
        holder = StretchableImage()
        holder.layout(LayoutConstraints(300, 40))

        assert holder.logical_size == Size(0, 0)


class TestRecomposition:
    """Every change recomposes from scratch."""

    def test_set_image_when_fixed_size_then_composes_for_it(self, band_image):
        # Arrange
        holder = StretchableImage(StretchConfig(size=Size(300, 40)))

        # Act
        holder.set_image(band_image)

        # Assert
        assert holder.blit_ops == compose(100, 40, 300, 40, 0.5)

    def test_layout_when_unbounded_then_intrinsic_size(self, band_image):
        """Unbounded layout paints the image at its own size."""
        holder = StretchableImage(image=band_image)

        size = holder.layout()

        assert size == Size(100, 40)
        assert [op.dest.width for op in holder.blit_ops] == [25.0, 50.0, 25.0]

    def test_resize_when_wider_then_center_stretches(self, band_image):
        # Arrange
        holder = StretchableImage(image=band_image)

        # Act
        holder.resize(Size(300, 40))

        # Assert
        assert holder.logical_size == Size(300, 40)
        assert holder.blit_ops[1].dest.width == 250.0

    def test_resize_when_fixed_size_configured_then_fixed_wins(self, band_image):
        holder = StretchableImage(StretchConfig(size=Size(80, 40)), band_image)

        holder.resize(Size(300, 40))

        assert holder.logical_size == Size(80, 40)
        assert len(holder.blit_ops) == 4

    def test_pixel_ratio_when_two_then_ops_in_physical_pixels(self, band_image):
        """Ops are computed at device resolution."""
        # Arrange
        config = StretchConfig(size=Size(150, 20), device_pixel_ratio=2.0)

        # Act
        holder = StretchableImage(config, band_image)

        # Assert
        assert holder.physical_size == Size(300, 40)
        assert holder.blit_ops == compose(100, 40, 300, 40, 0.5)

    def test_set_config_when_ratio_changes_then_recomposed(self, band_image):
        # Arrange
        holder = StretchableImage(StretchConfig(size=Size(300, 40)), band_image)

        # Act
        holder.set_config(StretchConfig(center_ratio=0.8, size=Size(300, 40)))

        # Assert
        assert holder.blit_ops == compose(100, 40, 300, 40, 0.8)

    def test_clear_when_image_set_then_nothing_painted(self, band_image):
        holder = StretchableImage(StretchConfig(size=Size(300, 40)), band_image)

        holder.clear()

        assert holder.blit_ops == ()
        assert holder.image is None

    def test_listener_called_on_each_change(self, band_image):
        """Listeners see the holder after every recomposition."""
        # Arrange
        holder = StretchableImage()
        seen = []
        holder.add_listener(lambda h: seen.append(len(h.blit_ops)))

        # Act
        holder.set_image(band_image)
        holder.resize(Size(80, 40))

        # Assert
        assert seen == [3, 4]

    def test_remove_listener_stops_notifications(self, band_image):
        holder = StretchableImage()
        seen = []
        listener = seen.append
        holder.add_listener(listener)

        holder.remove_listener(listener)
        holder.set_image(band_image)

        assert seen == []


class TestWatch:
    """Tests for watching loader Futures."""

    def test_watch_when_future_resolves_then_image_set(self, band_image):
        # Arrange
        holder = StretchableImage(StretchConfig(size=Size(300, 40)))
        future = Future()

        # Act
        holder.watch(future)
        future.set_result(band_image)

        # Assert
        assert holder.image is band_image
        assert len(holder.blit_ops) == 3

    def test_watch_when_load_fails_then_image_cleared(self, band_image, caplog):
        """A failed load replaces the previous image instead of keeping it."""
        # Arrange
        holder = StretchableImage(StretchConfig(size=Size(300, 40)), band_image)
        future = Future()

        # Act
        with caplog.at_level(logging.WARNING):
            holder.watch(future)
            future.set_exception(ImageLoadError("broken.png"))

        # Assert
        assert holder.image is None
        assert holder.blit_ops == ()
        assert "Failed to load image" in caplog.text

    def test_watch_when_unexpected_error_then_image_cleared(self, band_image, caplog):
        """Any load exception clears the previous image."""
        # Arrange
        holder = StretchableImage(StretchConfig(size=Size(300, 40)), band_image)
        future = Future()

        # Act
        with caplog.at_level(logging.WARNING):
            holder.watch(future)
            future.set_exception(RuntimeError("decoder crashed"))

        # Assert
        assert holder.image is None
        assert holder.blit_ops == ()
        assert "decoder crashed" in caplog.text

    def test_watch_when_superseded_then_old_result_ignored(self, band_image):
        """Only the most recently watched Future is applied."""
        # Arrange
        holder = StretchableImage(StretchConfig(size=Size(300, 40)))
        old, new = Future(), Future()
        holder.watch(old)
        holder.watch(new)

        # Act
        old.set_result(band_image.copy())
        new.set_result(band_image)

        # Assert
        assert holder.image is band_image

    def test_watch_when_superseded_first_then_stale_result_dropped(self, band_image):
        holder = StretchableImage(StretchConfig(size=Size(300, 40)))
        old, new = Future(), Future()
        holder.watch(old)
        holder.watch(new)

        old.set_result(band_image)

        assert holder.image is None

    def test_watch_when_cancelled_then_image_unchanged(self, band_image):
        holder = StretchableImage(StretchConfig(size=Size(300, 40)), band_image)
        future = Future()
        holder.watch(future)

        future.cancel()

        assert holder.image is band_image

    def test_close_when_pending_then_result_ignored(self, band_image):
        """Closing drops the subscription."""
        # Arrange
        holder = StretchableImage(StretchConfig(size=Size(300, 40)))
        future = Future()
        holder.watch(future)

        # Act
        holder.close()
        future.set_result(band_image)

        # Assert
        assert holder.image is None

    def test_watch_when_loader_thread_then_listener_notified(self, sample_image):
        """End to end with a background loader."""
        # Arrange
        loaded = threading.Event()
        holder = StretchableImage(StretchConfig(size=Size(300, 40)))
        holder.add_listener(lambda h: loaded.set())

        # Act
        with ImageLoader() as loader:
            holder.watch(loader.submit(sample_image))
            assert loaded.wait(timeout=10)

        # Assert
        assert holder.image.size == (100, 40)
        assert len(holder.blit_ops) == 3


class TestOutput:
    """Tests for render() and paint()."""

    def test_render_returns_physical_size_image(self, band_image):
        config = StretchConfig(size=Size(150, 20), device_pixel_ratio=2.0)
        holder = StretchableImage(config, band_image)

        result = holder.render()

        assert result.size == (300, 40)

    def test_paint_draws_onto_qimage(self, qapp, band_image):
        """paint() goes through the QPainter rasterizer."""
        # Arrange
        holder = StretchableImage(StretchConfig(size=Size(300, 40)), band_image)
        target = QImage(300, 40, QImage.Format.Format_ARGB32)
        target.fill(Qt.GlobalColor.transparent)

        # Act
        painter = QPainter(target)
        holder.paint(painter)
        painter.end()

        # Assert
        assert target.pixelColor(10, 20).red() == 255
        assert target.pixelColor(290, 20).blue() == 255

    def test_paint_when_no_image_then_nothing_drawn(self, qapp):
        holder = StretchableImage(StretchConfig(size=Size(10, 10)))
        target = QImage(10, 10, QImage.Format.Format_ARGB32)
        target.fill(Qt.GlobalColor.transparent)

        painter = QPainter(target)
        holder.paint(painter)
        painter.end()

        assert target.pixelColor(5, 5).alpha() == 0
