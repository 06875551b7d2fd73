"""Tests for image decoding, resampling, outline mode and grid-size suggestion."""

from __future__ import annotations

import pytest

from app.engine.config import PipelineConfig
from app.engine.errors import ImageProcessingError, UploadRejectedError
from app.engine.pipeline import generate_chart_from_image
from app.imaging.resample import (
    image_dimensions,
    resample,
    suggest_grid_size,
    to_outline,
    validate_upload,
)
from app.models.chart import GridSize
from tests.conftest import BLACK, BLUE, RED, WHITE, make_png

NEAREST = PipelineConfig(resample_filter="NEAREST")


class TestResample:
    def test_downsample(self, split_png):
        grid = resample(split_png, GridSize(width=2, height=2), NEAREST)
        assert grid == [[RED, BLUE], [RED, BLUE]]

    def test_same_size_is_exact(self, banded_png):
        grid = resample(banded_png, GridSize(width=10, height=10))
        assert grid[0] == [RED] * 10
        assert grid[9] == [BLUE] * 10

    def test_dimensions(self, split_png):
        assert image_dimensions(split_png) == (4, 4)

    def test_garbage_bytes(self):
        with pytest.raises(ImageProcessingError):
            resample(b"not an image", GridSize(width=2, height=2))


class TestOutline:
    def test_threshold(self):
        grid = [["#000000", "#404040", "#808080", "#ffffff", "#ff0000"]]
        # gray of pure red is 76.2 → dark
        assert to_outline(grid) == [[BLACK, BLACK, WHITE, WHITE, BLACK]]

    def test_custom_threshold(self):
        assert to_outline([["#808080"]], threshold=200) == [[BLACK]]

    def test_empty(self):
        assert to_outline([]) == []


class TestSuggestGridSize:
    @pytest.mark.parametrize(
        ("w", "h", "expected"),
        [
            (800, 600, (40, 30)),
            (600, 800, (30, 40)),
            (100, 100, (10, 10)),
            (4000, 1000, (80, 20)),
            (3000, 50, (80, 10)),
            (250, 250, (13, 13)),  # 12.5 rounds up
        ],
    )
    def test_suggestion(self, w, h, expected):
        size = suggest_grid_size(w, h)
        assert (size.width, size.height) == expected


class TestValidateUpload:
    def test_accepts_image(self):
        validate_upload("image/png", 1024, max_bytes=10 * 1024 * 1024)

    def test_rejects_non_image(self):
        with pytest.raises(UploadRejectedError):
            validate_upload("text/plain", 10, max_bytes=1024)

    def test_rejects_oversize(self):
        with pytest.raises(UploadRejectedError, match="smaller than 10MB"):
            validate_upload("image/jpeg", 10 * 1024 * 1024 + 1, max_bytes=10 * 1024 * 1024)


class TestGenerateFromImage:
    def test_split_image(self, split_png):
        chart = generate_chart_from_image(
            split_png, GridSize(width=2, height=2), max_colors=6, config=NEAREST
        )
        assert [[(c.color, c.sequence_number) for c in row] for row in chart.cells] == [
            [(RED, 1), (BLUE, 1)],
            [(RED, 1), (BLUE, 1)],
        ]
        assert [c.hex for c in chart.colors] == [RED, BLUE]

    def test_outline_mode(self):
        png = make_png([[(250, 250, 250), (10, 10, 10)], [(200, 0, 0), (0, 200, 0)]])
        chart = generate_chart_from_image(
            png, GridSize(width=2, height=2), max_colors=6, outline=True, config=NEAREST
        )
        assert [[c.color for c in row] for row in chart.cells] == [[WHITE, BLACK], [BLACK, WHITE]]

    def test_unreadable_image(self):
        with pytest.raises(ImageProcessingError):
            generate_chart_from_image(b"\x00\x01", GridSize(width=2, height=2), max_colors=6)
