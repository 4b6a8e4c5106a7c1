"""Command-line interface for the palette benchmark."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Iterable, Sequence

from tqdm import tqdm

from .errors import DecodeError, DirectoryReadError, OutputWriteError, StrategyError
from .extract.load import list_images, load_image
from .io.models import ReportRow, RunSummary, SkippedImage
from .io.outputs import write_report, write_summary, write_timings
from .quantize.base import PALETTE_SIZE, QuantizationStrategy
from .quantize.registry import STRATEGIES
from .report.render import render_row

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_DIR = Path("images")
DEFAULT_OUTPUT = Path("index.html")

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_FATAL = 2


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for the palette benchmark."""
    parser = argparse.ArgumentParser(
        description="Compare color quantization libraries on a folder of images."
    )
    parser.add_argument(
        "--images",
        default=str(DEFAULT_IMAGE_DIR),
        help="Directory of images to benchmark (default: ./images).",
    )
    parser.add_argument(
        "--out",
        default=str(DEFAULT_OUTPUT),
        help="Path of the HTML report to write (default: ./index.html).",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Abort on the first undecodable image or failing strategy.",
    )
    parser.add_argument(
        "--no-timings",
        action="store_true",
        help="Omit elapsed times from the report so reruns are byte-identical.",
    )
    parser.add_argument(
        "--summary",
        default=None,
        help="Optional path for a JSON summary of the run.",
    )
    parser.add_argument(
        "--timings",
        default=None,
        help="Optional path for a CSV of per-image, per-strategy timings.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def thumbnail_src(image_path: Path, output_path: Path) -> str:
    """Return *image_path* relative to the report location, with forward slashes."""
    relative = os.path.relpath(image_path.absolute(), output_path.parent.absolute())
    return Path(relative).as_posix()


def build_rows(
    paths: Sequence[Path],
    output_path: Path,
    summary: RunSummary,
    strategies: Sequence[QuantizationStrategy] = STRATEGIES,
    k: int = PALETTE_SIZE,
    fail_fast: bool = False,
    show_timings: bool = True,
) -> list[ReportRow]:
    """Decode each of *paths* and render one row per decodable image."""
    rows: list[ReportRow] = []
    for path in tqdm(paths, desc="Benchmarking", unit="image", leave=False):
        try:
            image = load_image(path)
        except DecodeError as exc:
            logger.debug("Decode failure for %s", path, exc_info=True)
            if fail_fast:
                raise
            print(f"[skip] {path.name}: {exc.reason}")
            summary.skipped.append(SkippedImage(filename=path.name, reason=exc.reason))
            continue

        try:
            row = render_row(
                image,
                path.name,
                thumbnail_src(path, output_path),
                strategies,
                k=k,
                fail_fast=fail_fast,
                show_timings=show_timings,
            )
        finally:
            image.close()

        for result in row.results:
            if not result.ok:
                summary.strategy_failures += 1
            summary.elapsed_by_strategy[result.strategy] = (
                summary.elapsed_by_strategy.get(result.strategy, 0.0) + result.elapsed
            )
        rows.append(row)

    summary.rendered = len(rows)
    return rows


def run(
    image_dir: Path,
    output_path: Path,
    strategies: Sequence[QuantizationStrategy] = STRATEGIES,
    k: int = PALETTE_SIZE,
    fail_fast: bool = False,
    show_timings: bool = True,
) -> tuple[RunSummary, list[ReportRow]]:
    """Benchmark every image in *image_dir* and write the report to *output_path*.

    Nothing is written unless every image has been processed, so a fatal error
    leaves any previous report in place.
    """
    paths = list_images(image_dir)
    summary = RunSummary(total_entries=len(paths))
    summary.elapsed_by_strategy = {strategy.name: 0.0 for strategy in strategies}
    rows = build_rows(
        paths,
        output_path,
        summary,
        strategies,
        k=k,
        fail_fast=fail_fast,
        show_timings=show_timings,
    )
    write_report(rows, output_path, strategies)
    summary.output_path = output_path
    return summary, rows


def _print_summary(summary: RunSummary) -> None:
    print(f"[report] wrote {summary.rendered} rows to {summary.output_path}")
    print(f"[summary] images: {summary.total_entries}")
    print(f"[summary] skipped: {len(summary.skipped)}")
    print(f"[summary] strategy failures: {summary.strategy_failures}")
    for name, elapsed in summary.elapsed_by_strategy.items():
        print(f"[summary] {name}: {elapsed * 1000.0:.2f} ms total")


def main(argv: Iterable[str] | None = None) -> int:
    """Entry point for the CLI."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    image_dir = Path(args.images)
    output_path = Path(args.out)

    try:
        summary, rows = run(
            image_dir,
            output_path,
            fail_fast=args.fail_fast,
            show_timings=not args.no_timings,
        )
    except (DirectoryReadError, DecodeError, StrategyError, OutputWriteError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FATAL

    # The report is already in place; side outputs can only degrade the run.
    side_outputs_ok = True
    if args.summary:
        side_outputs_ok &= _write_side_output(write_summary, Path(args.summary), summary)
    if args.timings:
        side_outputs_ok &= _write_side_output(write_timings, Path(args.timings), rows)

    _print_summary(summary)
    return EXIT_OK if summary.clean and side_outputs_ok else EXIT_PARTIAL


def _write_side_output(writer, path: Path, payload) -> bool:
    try:
        writer(path, payload)
    except OutputWriteError as exc:
        print(f"[warn] {exc}", file=sys.stderr)
        return False
    return True


if __name__ == "__main__":
    raise SystemExit(main())
