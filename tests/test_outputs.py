"""
Tests for report, summary and timing persistence.
"""
import json
import os

import pytest

from palette_bench.errors import OutputWriteError
from palette_bench.io.models import ReportRow, RunSummary, SkippedImage, StrategyResult
from palette_bench.io.outputs import (
    timings_frame,
    write_report,
    write_summary,
    write_timings,
)

from conftest import RED


def _row(name="red.png"):
    results = [
        StrategyResult("pillow-median-cut", palette=[RED], elapsed=0.002),
        StrategyResult("colorgram", error="boom"),
    ]
    return ReportRow(filename=name, thumbnail=f"images/{name}", results=results, markup="<tr></tr>")


def test_write_report_overwrites(tmp_path):
    path = tmp_path / "index.html"
    path.write_text("stale", encoding="utf-8")

    assert write_report([_row()], path) == path
    text = path.read_text(encoding="utf-8")
    assert "stale" not in text
    assert "<tr></tr>" in text
    assert [p.name for p in tmp_path.iterdir()] == ["index.html"]


def test_write_report_failure_keeps_previous(tmp_path, monkeypatch):
    path = tmp_path / "index.html"
    path.write_text("previous", encoding="utf-8")

    def refuse(src, dst):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(os, "replace", refuse)
    with pytest.raises(OutputWriteError):
        write_report([_row()], path)

    assert path.read_text(encoding="utf-8") == "previous"
    assert [p.name for p in tmp_path.iterdir()] == ["index.html"]


def test_write_report_unwritable_destination(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(OutputWriteError):
        write_report([], blocker / "index.html")


def test_write_summary(tmp_path):
    summary = RunSummary(
        total_entries=3,
        rendered=2,
        skipped=[SkippedImage("broken.png", "cannot identify image file")],
        strategy_failures=1,
        elapsed_by_strategy={"colorgram": 0.25},
        output_path=tmp_path / "index.html",
    )
    path = write_summary(tmp_path / "summary.json", summary)
    payload = json.loads(path.read_text(encoding="utf-8"))

    assert payload["rendered"] == 2
    assert payload["skipped"] == [
        {"filename": "broken.png", "reason": "cannot identify image file"}
    ]
    assert payload["elapsed_by_strategy"] == {"colorgram": 0.25}
    assert payload["output_path"].endswith("index.html")


def test_timings_frame():
    df = timings_frame([_row("a.png"), _row("b.png")])
    assert list(df.columns) == ["image", "strategy", "colors", "elapsed_ms", "error"]
    assert len(df) == 4
    assert df.loc[0, "elapsed_ms"] == pytest.approx(2.0)
    assert df.loc[1, "error"] == "boom"


def test_timings_frame_empty():
    df = timings_frame([])
    assert df.empty
    assert "elapsed_ms" in df.columns


def test_write_timings(tmp_path):
    path = write_timings(tmp_path / "out" / "timings.csv", [_row()])
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "image,strategy,colors,elapsed_ms,error"
    assert len(lines) == 3


def test_write_timings_failure_keeps_previous(tmp_path, monkeypatch):
    path = tmp_path / "timings.csv"
    path.write_text("previous\n", encoding="utf-8")

    def refuse(src, dst):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(os, "replace", refuse)
    with pytest.raises(OutputWriteError):
        write_timings(path, [_row()])

    assert path.read_text(encoding="utf-8") == "previous\n"
    assert [p.name for p in tmp_path.iterdir()] == ["timings.csv"]
