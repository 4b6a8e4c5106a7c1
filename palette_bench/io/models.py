"""Data models shared across the palette benchmark."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

Color = Tuple[int, int, int]
Palette = List[Color]


@dataclass(frozen=True, slots=True)
class Swatch:
    """A color together with its population in the source image."""

    color: Color
    population: float


@dataclass(slots=True)
class StrategyResult:
    """Outcome of running one strategy against one image."""

    strategy: str
    palette: Palette = field(default_factory=list)
    elapsed: float = 0.0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class ReportRow:
    """One rendered report row: an image and every strategy's palette."""

    filename: str
    thumbnail: str
    results: List[StrategyResult]
    markup: str


@dataclass(slots=True)
class SkippedImage:
    """An input entry that produced no row."""

    filename: str
    reason: str


@dataclass(slots=True)
class RunSummary:
    """High-level summary of a benchmark run."""

    total_entries: int
    rendered: int = 0
    skipped: List[SkippedImage] = field(default_factory=list)
    strategy_failures: int = 0
    elapsed_by_strategy: Dict[str, float] = field(default_factory=dict)
    output_path: Path | None = None

    @property
    def clean(self) -> bool:
        return not self.skipped and self.strategy_failures == 0
