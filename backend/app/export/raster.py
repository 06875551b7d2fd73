"""Raster chart export — PNG and single-page PDF rendered with Pillow.

Layout: white page, ``padding`` margin, one bordered square per cell with
its sequence number in contrast ink, and a legend strip below the grid
listing the catalog in order.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageDraw, ImageFont

from app.engine.color import BLACK, WHITE, contrast_ink
from app.models.chart import Chart

logger = logging.getLogger(__name__)

_BORDER = "#cccccc"
_CELL_FONT_SIZE = 12
_TITLE_FONT_SIZE = 16
_LEGEND_TITLE_OFFSET = 20
_LEGEND_ROW_OFFSET = 30
_LEGEND_PITCH = 150
_SWATCH = 20
_SWATCH_GAP = 5


@dataclass
class RasterLayout:
    cell_size: int = 20
    padding: int = 40
    legend_height: int = 100


def _font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    return ImageFont.load_default(size=size)


def _place_text(
    draw: ImageDraw.ImageDraw, x: float, cy: float, text: str, font, fill: str, center: bool = True
) -> None:
    """Draw ``text`` vertically centred on ``cy``; horizontally centred on ``x`` or starting at it."""
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    if center:
        x = x - (right - left) / 2
    x -= left
    y = cy - (bottom - top) / 2 - top
    draw.text((x, y), text, fill=fill, font=font)


def render_chart(chart: Chart, layout: RasterLayout | None = None) -> Image.Image:
    layout = layout or RasterLayout()
    cs, pad = layout.cell_size, layout.padding
    size = chart.grid_size

    width = size.width * cs + pad * 2
    height = size.height * cs + pad * 2 + layout.legend_height
    img = Image.new("RGB", (width, height), WHITE)
    draw = ImageDraw.Draw(img)
    cell_font = _font(_CELL_FONT_SIZE)

    for r, row in enumerate(chart.cells):
        for c, cell in enumerate(row):
            x = c * cs + pad
            y = r * cs + pad
            draw.rectangle([x, y, x + cs, y + cs], fill=cell.color, outline=_BORDER, width=1)
            _place_text(
                draw, x + cs / 2, y + cs / 2, str(cell.sequence_number),
                cell_font, contrast_ink(cell.color),
            )

    legend_y = height - layout.legend_height + _LEGEND_TITLE_OFFSET
    _place_text(draw, pad, legend_y, "Color Legend:", _font(_TITLE_FONT_SIZE), BLACK, center=False)

    for i, info in enumerate(chart.colors):
        lx = pad + i * _LEGEND_PITCH
        ly = legend_y + _LEGEND_ROW_OFFSET
        draw.rectangle([lx, ly, lx + _SWATCH, ly + _SWATCH], fill=info.hex, outline=_BORDER, width=1)
        _place_text(
            draw, lx + _SWATCH + _SWATCH_GAP, ly + _SWATCH / 2,
            f"{i + 1}. {info.name}", cell_font, BLACK, center=False,
        )

    logger.debug("Rendered %dx%d chart to %dx%d image", size.width, size.height, width, height)
    return img


def chart_to_png(chart: Chart, layout: RasterLayout | None = None) -> bytes:
    buf = io.BytesIO()
    render_chart(chart, layout).save(buf, format="PNG")
    return buf.getvalue()


def chart_to_pdf(chart: Chart, layout: RasterLayout | None = None) -> bytes:
    buf = io.BytesIO()
    render_chart(chart, layout).save(buf, format="PDF")
    return buf.getvalue()
