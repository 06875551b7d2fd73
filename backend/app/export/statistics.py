"""Stitch statistics for a chart."""

from __future__ import annotations

from collections import Counter

from app.models.chart import Chart, ChartStatistics, ColorBreakdown
from app.utils.math_helpers import percentage, round_half_up


def chart_statistics(chart: Chart) -> ChartStatistics:
    """Totals, per-color share (catalog order) and mean run length.

    A run starts at every cell with sequence number 1, so the mean run length
    is the sum of all sequence numbers over the number of runs.
    """
    counts: Counter[str] = Counter()
    total = 0
    runs = 0
    sequence_sum = 0
    for row in chart.cells:
        for cell in row:
            total += 1
            counts[cell.color] += 1
            if cell.sequence_number == 1:
                runs += 1
            sequence_sum += cell.sequence_number

    breakdown = [
        ColorBreakdown(
            color=info.name,
            count=counts[info.hex],
            percentage=percentage(counts[info.hex], total),
        )
        for info in chart.colors
    ]
    average = sequence_sum / runs if runs else 0.0

    return ChartStatistics(
        total_stitches=total,
        color_breakdown=breakdown,
        average_sequence_length=round_half_up(average * 100) / 100,
    )
