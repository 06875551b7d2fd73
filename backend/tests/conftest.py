"""Shared test fixtures."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from app.engine.chart_builder import build_chart
from app.models.chart import Chart

RED = "#ff0000"
BLUE = "#0000ff"
GREEN = "#00ff00"
BLACK = "#000000"
WHITE = "#ffffff"

# Two rows, one color each
RED_BLUE_GRID = [
    [RED, RED],
    [BLUE, BLUE],
]

# Runs that cross row boundaries and restart mid-row
STRIPED_GRID = [
    [RED, RED, BLUE, BLUE, BLUE],
    [BLUE, RED, RED, RED, GREEN],
    [GREEN, GREEN, GREEN, GREEN, GREEN],
]

# Seven grays with distinct frequencies: 8, 7, 6, 5 dark, then 3, 2, 1 light
GRADIENT_GRID = [
    ["#101010", "#101010", "#101010", "#101010", "#101010", "#101010", "#101010", "#101010"],
    ["#202020", "#202020", "#202020", "#202020", "#202020", "#202020", "#202020", "#f0f0f0"],
    ["#303030", "#303030", "#303030", "#303030", "#303030", "#303030", "#e0e0e0", "#f0f0f0"],
    ["#404040", "#404040", "#404040", "#404040", "#404040", "#d0d0d0", "#e0e0e0", "#f0f0f0"],
]


def make_png(rows: list[list[tuple[int, int, int]]]) -> bytes:
    """Encode an RGB pixel matrix as PNG bytes."""
    height, width = len(rows), len(rows[0])
    img = Image.new("RGB", (width, height))
    for y, row in enumerate(rows):
        for x, px in enumerate(row):
            img.putpixel((x, y), px)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def red_blue_grid() -> list[list[str]]:
    return [list(row) for row in RED_BLUE_GRID]


@pytest.fixture
def striped_grid() -> list[list[str]]:
    return [list(row) for row in STRIPED_GRID]


@pytest.fixture
def gradient_grid() -> list[list[str]]:
    return [list(row) for row in GRADIENT_GRID]


@pytest.fixture
def red_blue_chart() -> Chart:
    return build_chart(RED_BLUE_GRID, max_colors=6)


@pytest.fixture
def striped_chart() -> Chart:
    return build_chart(STRIPED_GRID, max_colors=6)


@pytest.fixture
def split_png() -> bytes:
    """4x4 image: left half red, right half blue."""
    row = [(255, 0, 0), (255, 0, 0), (0, 0, 255), (0, 0, 255)]
    return make_png([list(row) for _ in range(4)])


@pytest.fixture
def banded_png() -> bytes:
    """10x10 image: top five rows red, bottom five blue."""
    red_rows = [[(255, 0, 0)] * 10 for _ in range(5)]
    blue_rows = [[(0, 0, 255)] * 10 for _ in range(5)]
    return make_png(red_rows + blue_rows)
