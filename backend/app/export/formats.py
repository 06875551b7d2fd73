"""Export format table — encoder, media type and download filename per format."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from app.export.raster import RasterLayout, chart_to_pdf, chart_to_png
from app.export.serializer import chart_to_json
from app.export.text import chart_to_instructions, chart_to_text
from app.models.chart import Chart


@dataclass(frozen=True)
class ExportFormat:
    name: str
    media_type: str
    kind: str
    extension: str
    encode: Callable[[Chart, RasterLayout], bytes]

    def filename(self, chart: Chart) -> str:
        size = chart.grid_size
        return f"crochet-{self.kind}-{size.width}x{size.height}.{self.extension}"


def _utf8(fn: Callable[[Chart], str]) -> Callable[[Chart, RasterLayout], bytes]:
    return lambda chart, _layout: fn(chart).encode("utf-8")


EXPORT_FORMATS: dict[str, ExportFormat] = {
    "png": ExportFormat("png", "image/png", "chart", "png", chart_to_png),
    "pdf": ExportFormat("pdf", "application/pdf", "pattern", "pdf", chart_to_pdf),
    "json": ExportFormat("json", "application/json", "data", "json", _utf8(chart_to_json)),
    "text": ExportFormat("text", "text/plain; charset=utf-8", "pattern", "txt", _utf8(chart_to_text)),
    "instructions": ExportFormat(
        "instructions", "text/plain; charset=utf-8", "instructions", "txt", _utf8(chart_to_instructions)
    ),
}


def get_format(name: str) -> ExportFormat:
    try:
        return EXPORT_FORMATS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown export format {name!r}") from None


def export_chart(chart: Chart, name: str, layout: RasterLayout | None = None) -> tuple[bytes, ExportFormat]:
    fmt = get_format(name)
    return fmt.encode(chart, layout or RasterLayout()), fmt
