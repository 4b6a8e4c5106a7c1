"""Output helpers for persisting benchmark results."""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import asdict
from pathlib import Path
from typing import IO, Callable, Sequence

import pandas as pd

from ..errors import OutputWriteError
from ..quantize.base import QuantizationStrategy
from ..quantize.registry import STRATEGIES
from ..report.render import render_document
from .models import ReportRow, RunSummary


def write_report(
    rows: Sequence[ReportRow],
    path: Path,
    strategies: Sequence[QuantizationStrategy] = STRATEGIES,
) -> Path:
    """Render *rows* as an HTML document at *path* and return the path."""
    document = render_document(rows, strategies)
    _replace_text(path, document)
    return path


def write_summary(path: Path, summary: RunSummary) -> Path:
    """Write *summary* to *path* as JSON and return the path."""
    payload = json.dumps(asdict(summary), indent=2, default=str)
    _replace_text(path, payload + "\n")
    return path


def timings_frame(rows: Sequence[ReportRow]) -> pd.DataFrame:
    """Return one record per image and strategy with elapsed milliseconds."""
    records = [
        {
            "image": row.filename,
            "strategy": result.strategy,
            "colors": len(result.palette),
            "elapsed_ms": result.elapsed * 1000.0,
            "error": result.error,
        }
        for row in rows
        for result in row.results
    ]
    return pd.DataFrame(
        records, columns=["image", "strategy", "colors", "elapsed_ms", "error"]
    )


def write_timings(path: Path, rows: Sequence[ReportRow]) -> Path:
    """Write the per-image timing table for *rows* to *path* as CSV."""
    df = timings_frame(rows)
    _replace_file(path, lambda handle: df.to_csv(handle, index=False))
    return path


def _replace_text(path: Path, text: str) -> None:
    _replace_file(path, lambda handle: handle.write(text))


def _replace_file(path: Path, write: Callable[[IO[str]], object]) -> None:
    """Call *write* on a temporary file next to *path* and move it into place.

    An existing file at *path* is either fully replaced or left untouched.
    """
    directory = path.parent
    tmp_name: str | None = None
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="",
            dir=directory,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            write(handle)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputWriteError(path, exc.strerror or str(exc)) from exc
