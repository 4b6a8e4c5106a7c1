"""The ordered set of strategies shared by report rows and the header."""

from __future__ import annotations

import logging
import time
from typing import Sequence

from PIL import Image

from ..errors import StrategyError
from ..io.models import StrategyResult
from .base import PALETTE_SIZE, QuantizationStrategy
from .clustering import OpenCVKMeans, SklearnKMeans
from .pillow import PillowFastOctree, PillowMaxCoverage, PillowMedianCut
from .proportions import Colorgram

logger = logging.getLogger(__name__)

STRATEGIES: tuple[QuantizationStrategy, ...] = (
    PillowMedianCut(),
    PillowMaxCoverage(),
    PillowFastOctree(),
    SklearnKMeans(),
    OpenCVKMeans(),
    Colorgram(),
)


def run_strategies(
    image: Image.Image,
    strategies: Sequence[QuantizationStrategy] = STRATEGIES,
    k: int = PALETTE_SIZE,
    fail_fast: bool = False,
) -> list[StrategyResult]:
    """Run every strategy on *image* in order and collect the results.

    A :class:`StrategyError` becomes a failed result unless *fail_fast* is set,
    in which case it propagates.
    """
    results: list[StrategyResult] = []
    for strategy in strategies:
        start = time.perf_counter()
        try:
            results.append(strategy.measure(image, k))
        except StrategyError as exc:
            if fail_fast:
                raise
            logger.warning("%s", exc)
            results.append(
                StrategyResult(
                    strategy=strategy.name,
                    elapsed=time.perf_counter() - start,
                    error=exc.reason,
                )
            )
    return results
