"""Ranking of population-weighted swatches into plain palettes."""

from __future__ import annotations

from typing import Iterable

from ..io.models import Palette, Swatch


def rank_swatches(swatches: Iterable[Swatch]) -> list[Swatch]:
    """Return *swatches* ordered by population, largest first.

    ``sorted`` is stable, including with ``reverse=True``, so swatches with
    equal populations keep their emission order.
    """
    return sorted(swatches, key=lambda swatch: swatch.population, reverse=True)


def normalize(swatches: Iterable[Swatch]) -> Palette:
    """Reduce *swatches* to a palette ordered by descending population."""
    return [swatch.color for swatch in rank_swatches(swatches)]
