"""HTML rendering of benchmark rows and the report document."""

from __future__ import annotations

import html
from typing import Iterable, Sequence

from PIL import Image

from ..io.models import ReportRow, StrategyResult
from ..quantize.base import PALETTE_SIZE, QuantizationStrategy
from ..quantize.registry import STRATEGIES, run_strategies

BLOCK_SIZE = 50

DOCUMENT = """<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<title>Palette benchmark</title>
<style>
img {{
    width: 100%;
    max-width: 200px;
}}
svg {{
    border: 2px solid black;
    border-radius: 5px;
}}
.error {{
    color: #b00020;
    font-family: monospace;
}}
</style>
</head>
<body>
<table style="width:100%">
<tr>
    <th></th>
{header}
</tr>
{rows}
</table>
</body>
</html>
"""

HEADER_CELL = "    <th>{label}</th>"

ROW = """<tr>
    <td>{filename}<br/>{thumbnail}</td>
{cells}
</tr>"""

CELL = "    <td>{content}</td>"

THUMBNAIL = '<img src="{src}" alt="{alt}">'

SVG = """<svg width="{width}" height="{height}">
{rects}
</svg>"""

RECT = '<rect x="{x}" width="{size}" height="{size}" style="fill:rgb({r},{g},{b})" />'

TIMING = "<br/>{elapsed:.2f} ms"

ERROR = '<span class="error">{message}</span>'


def render_palette(
    result: StrategyResult, k: int = PALETTE_SIZE, show_timings: bool = True
) -> str:
    """Return the swatch strip (or error note) for one strategy result."""
    if not result.ok:
        return ERROR.format(message=html.escape(result.error or "failed"))

    rects = [
        RECT.format(x=index * BLOCK_SIZE, size=BLOCK_SIZE, r=r, g=g, b=b)
        for index, (r, g, b) in enumerate(result.palette)
    ]
    fragment = SVG.format(
        width=k * BLOCK_SIZE, height=BLOCK_SIZE, rects="\n".join(rects)
    )
    if show_timings:
        fragment += TIMING.format(elapsed=result.elapsed * 1000.0)
    return fragment


def render_row(
    image: Image.Image,
    filename: str,
    thumbnail: str,
    strategies: Sequence[QuantizationStrategy] = STRATEGIES,
    k: int = PALETTE_SIZE,
    fail_fast: bool = False,
    show_timings: bool = True,
) -> ReportRow:
    """Run every strategy on *image* and render the resulting table row."""
    results = run_strategies(image, strategies, k=k, fail_fast=fail_fast)
    cells = "\n".join(
        CELL.format(content=render_palette(result, k, show_timings))
        for result in results
    )
    markup = ROW.format(
        filename=html.escape(filename),
        thumbnail=THUMBNAIL.format(
            src=html.escape(thumbnail, quote=True), alt=html.escape(filename, quote=True)
        ),
        cells=cells,
    )
    return ReportRow(filename=filename, thumbnail=thumbnail, results=results, markup=markup)


def render_document(
    rows: Iterable[ReportRow],
    strategies: Sequence[QuantizationStrategy] = STRATEGIES,
) -> str:
    """Wrap *rows* in the report skeleton with one column per strategy."""
    header = "\n".join(
        HEADER_CELL.format(label=html.escape(strategy.label)) for strategy in strategies
    )
    body = "\n".join(row.markup for row in rows)
    return DOCUMENT.format(header=header, rows=body)
