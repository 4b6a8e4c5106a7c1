"""Common interface for the wrapped quantization libraries."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Iterable, Sequence

import numpy as np
from PIL import Image

from ..errors import StrategyError
from ..io.models import Color, Palette, StrategyResult

logger = logging.getLogger(__name__)

PALETTE_SIZE = 5


class QuantizationStrategy(ABC):
    """One external palette-extraction algorithm behind a uniform call.

    Subclasses set ``name`` (a stable slug) and ``label`` (the report column
    header) and implement :meth:`_extract`.
    """

    name: str = ""
    label: str = ""

    @abstractmethod
    def _extract(self, image: Image.Image, k: int) -> Palette:
        """Return at most *k* colors for *image* using the wrapped library."""

    def quantize(self, image: Image.Image, k: int = PALETTE_SIZE) -> Palette:
        """Return the palette for *image*, raising :class:`StrategyError` on failure."""
        if k <= 0:
            raise ValueError("k must be a positive integer")
        if image.width == 0 or image.height == 0:
            raise StrategyError(self.name, "image has no pixels")
        try:
            palette = self._extract(image, k)
        except StrategyError:
            raise
        except Exception as exc:
            raise StrategyError(self.name, f"{type(exc).__name__}: {exc}") from exc

        if len(palette) > k:
            raise StrategyError(
                self.name, f"returned {len(palette)} colors, {k} requested"
            )
        return palette

    def measure(self, image: Image.Image, k: int = PALETTE_SIZE) -> StrategyResult:
        """Run :meth:`quantize` and return the palette with its wall-clock time."""
        start = time.perf_counter()
        palette = self.quantize(image, k)
        elapsed = time.perf_counter() - start
        logger.debug("%s: %d colors in %.4fs", self.name, len(palette), elapsed)
        return StrategyResult(strategy=self.name, palette=palette, elapsed=elapsed)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def to_color(values: Iterable[float]) -> Color:
    """Round and clamp three channel values into an 8-bit RGB triple."""
    r, g, b = (int(max(0, min(255, round(float(value))))) for value in values)
    return (r, g, b)


def pixel_array(image: Image.Image) -> np.ndarray:
    """Return the pixels of *image* as an ``(N, 3)`` uint8 array."""
    rgb_image = image.convert("RGB") if image.mode != "RGB" else image
    pixels = np.asarray(rgb_image, dtype=np.uint8).reshape(-1, 3)
    if pixels.shape[0] == 0:
        raise ValueError("image has no pixels")
    return pixels


def cluster_count(pixels: np.ndarray, k: int) -> int:
    """Clamp *k* to the number of distinct colors present in *pixels*."""
    distinct = np.unique(pixels, axis=0).shape[0]
    return max(1, min(k, distinct))


def colors_from_rows(rows: Sequence[Sequence[float]]) -> Palette:
    return [to_color(row) for row in rows]
