"""Pipeline orchestrator — runs stages in dependency order with adaptive gating.

Runs are fail-fast: the first failing stage aborts the run and no partial
chart is returned.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time
from collections.abc import Mapping, Sequence

from app.engine.config import PipelineConfig
from app.engine.context import ChartContext
from app.engine.errors import ChartError, ChartGenerationError
from app.engine.registry import StageRegistry, get_registry
from app.models.chart import Chart, GridSize

logger = logging.getLogger(__name__)

_STAGES_PACKAGE = "app.engine.stages"


def load_stages() -> int:
    """Import all stage modules so @stage decorators fire. Returns the registry size."""
    package = importlib.import_module(_STAGES_PACKAGE)
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{_STAGES_PACKAGE}.{module_name}")
    return get_registry().count


class Pipeline:
    """Orchestrates the chart generation stages."""

    def __init__(
        self,
        registry: StageRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def run(self, ctx: ChartContext) -> Chart:
        """Run all applicable stages and return the assembled chart."""
        start = time.perf_counter()

        skip_ids = self._adaptive_gate(ctx)
        ctx.skipped_stages = skip_ids

        all_specs = self.registry.all()
        requested = {s.id for s in all_specs} - skip_ids
        ordered = self.registry.resolve_order(requested)

        logger.info(
            "Pipeline: %d stages queued (%d skipped)",
            len(ordered),
            len(skip_ids),
        )

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
            except ChartError as e:
                logger.warning("  %s FAILED: %s", spec.id, e)
                raise
            except Exception as e:
                logger.error("  %s FAILED: %s", spec.id, e)
                raise ChartGenerationError() from e
            ctx.completed_stages.append(spec.id)
            elapsed = (time.perf_counter() - t0) * 1000
            logger.debug("  %s completed in %.1fms", spec.id, elapsed)

        if ctx.chart is None:
            raise ChartGenerationError()

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d stages in %.0fms",
            len(ctx.completed_stages),
            len(ordered),
            total,
        )
        return ctx.chart

    def _adaptive_gate(self, ctx: ChartContext) -> set[str]:
        """Determine which stages to skip based on the request.

        - A supplied grid skips image decoding
        - Outline conversion only runs when requested
        - Detailed mode keeps every original color (no palette reduction)
        - Color overrides only run when there are any
        """
        skip: set[str] = set()

        if not ctx.has_image:
            skip.add("S0.01")  # Image decode + resample
        if not ctx.outline:
            skip.add("S1.01")  # Outline conversion
        if ctx.detailed_mode:
            skip.add("S2.01")  # Palette reduction
        if not ctx.color_overrides:
            skip.add("S2.02")  # Custom color overrides

        return skip


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    load_stages()
    return Pipeline(config=config)


def generate_chart(
    grid: Sequence[Sequence[str]],
    max_colors: int,
    detailed_mode: bool = False,
    color_overrides: Mapping[str, str] | None = None,
) -> Chart:
    """Quantize a ready color grid and build its chart."""
    ctx = ChartContext(
        grid=[list(row) for row in grid],
        max_colors=max_colors,
        detailed_mode=detailed_mode,
        color_overrides=dict(color_overrides or {}),
    )
    return create_pipeline().run(ctx)


def generate_chart_from_image(
    image_bytes: bytes,
    grid_size: GridSize,
    max_colors: int,
    detailed_mode: bool = False,
    outline: bool = False,
    color_overrides: Mapping[str, str] | None = None,
    config: PipelineConfig | None = None,
) -> Chart:
    """Decode, resample, quantize and chart an encoded image."""
    pipeline = create_pipeline(config)
    ctx = ChartContext(
        image_bytes=image_bytes,
        grid_size=grid_size,
        max_colors=max_colors,
        detailed_mode=detailed_mode,
        outline=outline,
        color_overrides=dict(color_overrides or {}),
        config=pipeline.config,
    )
    return pipeline.run(ctx)
