"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.models.chart import Chart, GridSize


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GenerateRequest(_Request):
    pixels: list[list[str]] = Field(..., description="Dense row-major grid of #rrggbb colors")
    max_colors: int | None = Field(default=None, alias="maxColors", description="Requested palette size")
    detailed_mode: bool = Field(default=False, alias="detailedMode", description="Skip palette reduction")
    color_overrides: dict[str, str] = Field(
        default_factory=dict,
        alias="colorOverrides",
        description="old hex -> new hex, applied after reduction",
    )


class GenerateFromImageRequest(_Request):
    image_base64: str = Field(..., alias="imageBase64", description="Base64-encoded image file")
    content_type: str = Field(default="image/png", alias="contentType")
    grid_size: GridSize | None = Field(default=None, alias="gridSize", description="Defaults to a suggestion from the image")
    max_colors: int | None = Field(default=None, alias="maxColors")
    detailed_mode: bool = Field(default=False, alias="detailedMode")
    outline: bool = Field(default=False, description="Black/white silhouette mode")
    color_overrides: dict[str, str] = Field(default_factory=dict, alias="colorOverrides")


class RecolorRequest(_Request):
    chart: Chart
    row: int = Field(..., description="0-based row from the top")
    col: int = Field(..., description="0-based column from the left")
    color: str = Field(..., description="New #rrggbb color")


class ReplaceColorRequest(_Request):
    chart: Chart
    old_color: str = Field(..., alias="oldColor")
    new_color: str = Field(..., alias="newColor")


class ChartRequest(_Request):
    chart: Chart


class SuggestGridRequest(_Request):
    width: int = Field(..., gt=0, description="Source image width in pixels")
    height: int = Field(..., gt=0, description="Source image height in pixels")
