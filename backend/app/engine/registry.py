"""Stage registry — every pipeline stage is a standalone function registered via decorator.

Usage:
    @stage(id="S2.01", phase=Phase.QUANTIZE, dependencies=["S1.01"])
    def reduce_palette(ctx: ChartContext) -> None:
        ctx.grid = reduce_colors(ctx.grid, ctx.max_colors)
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from app.engine.context import ChartContext

logger = logging.getLogger(__name__)


class Phase(enum.IntEnum):
    SAMPLING = 0
    PREPROCESS = 1
    QUANTIZE = 2
    ASSEMBLY = 3


@dataclass
class StageSpec:
    id: str
    phase: Phase
    fn: Callable[["ChartContext"], None]
    dependencies: list[str] = field(default_factory=list)


class StageRegistry:
    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.phase.name)

    def all(self) -> list[StageSpec]:
        return sorted(self._stages.values(), key=lambda s: (s.phase, s.id))

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[StageSpec]:
        """Stages in dependency order, ties broken by stage ID.

        Only ``requested_ids`` are scheduled (all stages when None). Edges to
        stages outside that set are dropped, so a skipped stage never comes back.
        """
        ids = set(self._stages) if requested_ids is None else set(self._stages) & requested_ids

        waiting = {sid: {d for d in self._stages[sid].dependencies if d in ids} for sid in ids}
        dependents: dict[str, list[str]] = {sid: [] for sid in ids}
        for sid, deps in waiting.items():
            for dep in deps:
                dependents[dep].append(sid)

        ready = [sid for sid, deps in waiting.items() if not deps]
        heapq.heapify(ready)
        ordered: list[StageSpec] = []
        while ready:
            sid = heapq.heappop(ready)
            ordered.append(self._stages[sid])
            for nxt in dependents[sid]:
                waiting[nxt].discard(sid)
                if not waiting[nxt]:
                    heapq.heappush(ready, nxt)

        if len(ordered) != len(ids):
            stuck = sorted(ids - {s.id for s in ordered})
            raise ValueError(f"Circular dependency detected among: {stuck}")
        return ordered

    @property
    def count(self) -> int:
        return len(self._stages)


_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(*, id: str, phase: Phase, dependencies: list[str] | None = None):
    """Register the decorated function as a pipeline stage."""

    def decorator(fn: Callable[["ChartContext"], None]):
        _registry.register(StageSpec(id=id, phase=phase, fn=fn, dependencies=list(dependencies or [])))
        return fn

    return decorator
