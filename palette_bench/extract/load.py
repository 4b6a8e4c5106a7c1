"""Directory enumeration and image decoding for the benchmark."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError
from PIL.Image import DecompressionBombError

from ..errors import DecodeError, DirectoryReadError

logger = logging.getLogger(__name__)

TARGET_SIZE = (100, 100)
SUPPORTED_FORMATS = ("PNG", "JPEG")
EXCLUDED_SUFFIXES = (".go", ".html", ".py")


def list_images(directory: Path) -> list[Path]:
    """Return candidate image files in *directory*, sorted by name.

    The scan is not recursive. Sub-directories and files carrying the tool's
    own source or markup suffixes are skipped; everything else is assumed to
    be an image and is left for :func:`load_image` to accept or reject.
    """
    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        raise DirectoryReadError(directory, exc.strerror or str(exc)) from exc

    images: list[Path] = []
    for entry in entries:
        if entry.is_dir():
            continue
        if entry.name.lower().endswith(EXCLUDED_SUFFIXES):
            logger.debug("Skipping non-image entry %s", entry.name)
            continue
        images.append(entry)
    return images


def load_image(path: Path) -> Image.Image:
    """Decode *path* and return a 100x100 RGB image.

    Only the codecs in ``SUPPORTED_FORMATS`` are accepted. Resizing uses
    nearest-neighbour sampling so every strategy sees the same pixel count.
    """
    try:
        with Image.open(path, formats=SUPPORTED_FORMATS) as img:
            img.load()
            width, height = img.size
            if width == 0 or height == 0:
                raise DecodeError(path, "image has no pixels")
            rgb_image = img.convert("RGB") if img.mode != "RGB" else img.copy()
    except (UnidentifiedImageError, DecompressionBombError, SyntaxError, ValueError) as exc:
        raise DecodeError(path, str(exc)) from exc
    except OSError as exc:
        raise DecodeError(path, exc.strerror or str(exc)) from exc

    return rgb_image.resize(TARGET_SIZE, _resample_filter())


def _resample_filter():
    resample_attr = getattr(Image, "Resampling", None)
    resample_filter = getattr(resample_attr, "NEAREST", None) if resample_attr else None
    if resample_filter is None:
        resample_filter = Image.NEAREST
    return resample_filter
