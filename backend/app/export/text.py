"""Plain-text chart and row-by-row crochet instructions.

Color indexes are 1-based positions in the chart's catalog. Instructions run
bottom to top: Row 1 is the last grid row, as a piece is worked from the
bottom edge.
"""

from __future__ import annotations

from app.models.chart import Cell, Chart

_RULE_WIDTH = 50


def _token(chart: Chart, cell: Cell) -> str:
    return f"{cell.sequence_number}{chart.color_index(cell.color)}"


def chart_to_text(chart: Chart) -> str:
    size = chart.grid_size
    lines = [
        f"Crochet Chart - {size.width}x{size.height}",
        "=" * _RULE_WIDTH,
        "",
        "Colors:",
    ]
    lines += [f"{i}. {info.name} ({info.hex})" for i, info in enumerate(chart.colors, start=1)]
    lines += ["", "Chart (numbers represent sequence length):"]
    for row in chart.cells:
        lines.append("".join(f"{_token(chart, cell)} " for cell in row))
    return "\n".join(lines) + "\n"


def row_instruction(chart: Chart, row_index: int) -> str:
    """``Row n: seq idx, seq idx, ...`` for one grid row (0 = top)."""
    row = chart.cells[row_index]
    n = chart.height - row_index
    parts = [f"{cell.sequence_number} {chart.color_index(cell.color)}" for cell in row]
    return f"Row {n}: " + ", ".join(parts)


def chart_to_instructions(chart: Chart) -> str:
    size = chart.grid_size
    lines = [
        "Crochet Pattern Instructions",
        "==========================",
        "",
        f"Grid Size: {size.width} x {size.height}",
        f"Total Colors: {len(chart.colors)}",
        "",
        "Color Legend:",
    ]
    lines += [
        f"{i}. {info.name} ({info.hex}) - {info.yarn_suggestion}"
        for i, info in enumerate(chart.colors, start=1)
    ]
    lines += ["", "Row-by-Row Instructions:", "=======================", ""]
    lines += [row_instruction(chart, r) for r in range(chart.height - 1, -1, -1)]
    return "\n".join(lines) + "\n"
