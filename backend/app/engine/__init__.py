"""Crochet chart engine — palette reduction, cataloging, chart building and edits."""

from app.engine.registry import stage, Phase, get_registry
from app.engine.context import ChartContext
from app.engine.pipeline import Pipeline, generate_chart, generate_chart_from_image
from app.engine.mutations import recolor_cell, replace_color

__all__ = [
    "stage",
    "Phase",
    "get_registry",
    "ChartContext",
    "Pipeline",
    "generate_chart",
    "generate_chart_from_image",
    "recolor_cell",
    "replace_color",
]
