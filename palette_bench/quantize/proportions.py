"""Adapter for colorgram.py, which reports colors with their proportions."""

from __future__ import annotations

import colorgram
from PIL import Image

from ..io.models import Palette, Swatch
from .base import QuantizationStrategy, to_color
from .swatches import normalize


class Colorgram(QuantizationStrategy):
    name = "colorgram"
    label = "colorgram.py"

    def _extract(self, image: Image.Image, k: int) -> Palette:
        rgb_image = image.convert("RGB") if image.mode != "RGB" else image
        extracted = colorgram.extract(rgb_image, k)
        swatches = [
            Swatch(color=to_color(color.rgb), population=float(color.proportion))
            for color in extracted
        ]
        return normalize(swatches)
