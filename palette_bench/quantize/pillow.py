"""Adapters for Pillow's built-in quantizers."""

from __future__ import annotations

from PIL import Image

from ..io.models import Palette
from .base import QuantizationStrategy

_MAX_PALETTE_ENTRIES = 256


def _quantize_method(name: str) -> int:
    quantize_attr = getattr(Image, "Quantize", None)
    method = getattr(quantize_attr, name, None) if quantize_attr else None
    if method is None:
        method = getattr(Image, name)
    return method


def used_palette(quantized: Image.Image) -> Palette:
    """Return the palette entries of a ``P`` image that its pixels reference.

    Entries are returned in palette index order; unused slots (Pillow pads
    the palette) are dropped.
    """
    raw_palette = quantized.getpalette() or []
    counts = quantized.getcolors(maxcolors=_MAX_PALETTE_ENTRIES) or []
    used_indices = sorted(index for _, index in counts)

    palette: Palette = []
    for index in used_indices:
        offset = index * 3
        r, g, b = raw_palette[offset : offset + 3]
        palette.append((int(r), int(g), int(b)))
    return palette


class PillowQuantizer(QuantizationStrategy):
    """Wrap ``Image.quantize`` for a single quantization method."""

    method_name: str = "MEDIANCUT"

    def _extract(self, image: Image.Image, k: int) -> Palette:
        rgb_image = image.convert("RGB") if image.mode != "RGB" else image
        quantized = rgb_image.quantize(
            colors=k,
            method=_quantize_method(self.method_name),
            dither=_no_dither(),
        )
        try:
            return used_palette(quantized)
        finally:
            quantized.close()


class PillowMedianCut(PillowQuantizer):
    name = "pillow-median-cut"
    label = "Pillow Image.quantize (median cut)"
    method_name = "MEDIANCUT"


class PillowMaxCoverage(PillowQuantizer):
    name = "pillow-max-coverage"
    label = "Pillow Image.quantize (max coverage)"
    method_name = "MAXCOVERAGE"


class PillowFastOctree(PillowQuantizer):
    name = "pillow-fast-octree"
    label = "Pillow Image.quantize (fast octree)"
    method_name = "FASTOCTREE"


def _no_dither() -> int:
    dither_attr = getattr(Image, "Dither", None)
    dither = getattr(dither_attr, "NONE", None) if dither_attr else None
    if dither is None:
        dither = Image.NONE
    return dither
