"""Chart value types.

Every model here is frozen: edits produce new charts instead of mutating
existing ones. Field aliases match the JSON export contract.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# A dense, rectangular grid of canonical ``#rrggbb`` strings, row-major.
ColorGrid = list[list[str]]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class GridSize(_Frozen):
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)


class ColorInfo(_Frozen):
    hex: str
    name: str
    count: int
    yarn_suggestion: str = Field(..., alias="yarnSuggestion")


class Cell(_Frozen):
    color: str
    sequence_number: int = Field(..., ge=1, alias="sequenceNumber")


class Chart(_Frozen):
    """Run-length encoded cell matrix plus the catalog derived from it."""

    cells: tuple[tuple[Cell, ...], ...]
    colors: tuple[ColorInfo, ...]
    grid_size: GridSize = Field(..., alias="gridSize")
    max_colors: int = Field(..., alias="maxColors")

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def height(self) -> int:
        return len(self.cells)

    def to_grid(self) -> ColorGrid:
        """Flatten cells back to a fresh color grid (sequence numbers dropped)."""
        return [[cell.color for cell in row] for row in self.cells]

    def color_index(self, hex_color: str) -> int:
        """1-based position of ``hex_color`` in ``colors``; 0 when absent."""
        for i, info in enumerate(self.colors):
            if info.hex == hex_color:
                return i + 1
        return 0

    def to_export_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ColorBreakdown(BaseModel):
    color: str
    count: int
    percentage: float


class ChartStatistics(BaseModel):
    total_stitches: int = Field(..., alias="totalStitches")
    color_breakdown: list[ColorBreakdown] = Field(default_factory=list, alias="colorBreakdown")
    average_sequence_length: float = Field(0.0, alias="averageSequenceLength")

    model_config = ConfigDict(populate_by_name=True)
