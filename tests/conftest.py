"""
Shared fixtures for the palette benchmark tests.

Images are synthesized with Pillow into pytest's tmp_path so the suite has
no binary assets.
"""
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

RED = (255, 0, 0)
BLUE = (0, 0, 255)
GREEN = (0, 255, 0)


@pytest.fixture
def make_image(tmp_path):
    """Factory writing a solid-color image and returning its path."""

    def _make(name, color=RED, size=(10, 10), fmt="PNG", directory=None):
        target_dir = Path(directory) if directory is not None else tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        Image.new("RGB", size, color).save(path, format=fmt)
        return path

    return _make


@pytest.fixture
def solid_red():
    """A 100x100 solid red RGB image, already at benchmark size."""
    image = Image.new("RGB", (100, 100), RED)
    yield image
    image.close()


@pytest.fixture
def two_tone():
    """A 100x100 image that is 60% red on top and 40% blue below."""
    pixels = np.zeros((100, 100, 3), dtype=np.uint8)
    pixels[:60] = RED
    pixels[60:] = BLUE
    image = Image.fromarray(pixels)
    yield image
    image.close()


@pytest.fixture
def noisy_image():
    """A deterministic 100x100 image with many distinct colors."""
    rng = np.random.default_rng(0)
    pixels = rng.integers(0, 256, size=(100, 100, 3), dtype=np.uint8)
    image = Image.fromarray(pixels)
    yield image
    image.close()


@pytest.fixture
def image_dir(tmp_path, make_image):
    """An images/ directory holding a solid red and a solid blue PNG."""
    directory = tmp_path / "images"
    make_image("blue.png", BLUE, directory=directory)
    make_image("red.png", RED, directory=directory)
    return directory


def close_to(color, expected, tolerance=8):
    """True when every channel of *color* is within *tolerance* of *expected*."""
    return all(abs(int(a) - int(b)) <= tolerance for a, b in zip(color, expected))
