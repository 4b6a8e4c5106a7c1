"""Exception hierarchy for the palette benchmark harness."""

from __future__ import annotations

from pathlib import Path


class PaletteBenchError(Exception):
    """Base class for every error raised by the harness."""


class DirectoryReadError(PaletteBenchError):
    """Raised when the input directory is missing or cannot be listed."""

    def __init__(self, directory: Path, reason: str) -> None:
        super().__init__(f"Cannot read image directory {directory}: {reason}")
        self.directory = directory


class DecodeError(PaletteBenchError):
    """Raised when a file is not a supported, readable raster image."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot decode {path}: {reason}")
        self.path = path
        self.reason = reason


class StrategyError(PaletteBenchError):
    """Raised when a wrapped quantization library fails."""

    def __init__(self, strategy: str, reason: str) -> None:
        super().__init__(f"Strategy {strategy} failed: {reason}")
        self.strategy = strategy
        self.reason = reason


class OutputWriteError(PaletteBenchError):
    """Raised when a report or summary cannot be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = path
