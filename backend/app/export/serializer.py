"""Chart → JSON. Field names follow the export contract (camelCase)."""

from __future__ import annotations

import json

from app.models.chart import Chart


def chart_to_json(chart: Chart, indent: int = 2) -> str:
    return json.dumps(chart.to_export_dict(), indent=indent)


def chart_from_json(text: str) -> Chart:
    return Chart.model_validate_json(text)
