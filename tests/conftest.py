import os
import sys
from pathlib import Path

import pytest
from PIL import Image

# Qt needs no display for QImage/QPainter tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to sys.path so we can import stretchable_image
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


RED = (255, 0, 0, 255)
YELLOW = (255, 255, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
TRANSPARENT = (0, 0, 0, 0)


def make_band_image(width: int = 100, height: int = 40) -> Image.Image:
    """
    Source image with one flat colour per quarter.

    With center_ratio 0.5: left band red, center band yellow (left half)
    and green (right half), right band blue.
    """
    img = Image.new("RGBA", (width, height), TRANSPARENT)
    quarter = width // 4
    for index, colour in enumerate((RED, YELLOW, GREEN, BLUE)):
        img.paste(colour, (index * quarter, 0, (index + 1) * quarter, height))
    return img


# Common test fixtures
@pytest.fixture
def band_image():
    """100x40 four-colour source image."""
    return make_band_image()


@pytest.fixture
def sample_image(tmp_path: Path, band_image):
    """The band image saved as PNG."""
    img_path = tmp_path / "border.png"
    band_image.save(img_path)
    return img_path
