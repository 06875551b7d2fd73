"""Tests for API endpoints."""

from __future__ import annotations

import base64

import pytest
from fastapi.testclient import TestClient

from app.api import charts as charts_api
from app.engine.errors import ChartGenerationError
from app.main import app
from tests.conftest import BLUE, GREEN, RED, RED_BLUE_GRID, STRIPED_GRID

client = TestClient(app)


def _chart(pixels=RED_BLUE_GRID, **extra) -> dict:
    response = client.post("/api/charts", json={"pixels": pixels, **extra})
    assert response.status_code == 200
    return response.json()


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["stages_registered"] == 6


class TestGenerate:
    def test_red_blue(self):
        data = _chart(maxColors=6)
        assert data["cells"] == [
            [{"color": RED, "sequenceNumber": 1}, {"color": RED, "sequenceNumber": 2}],
            [{"color": BLUE, "sequenceNumber": 1}, {"color": BLUE, "sequenceNumber": 2}],
        ]
        assert [(c["hex"], c["count"]) for c in data["colors"]] == [(RED, 2), (BLUE, 2)]
        assert data["gridSize"] == {"width": 2, "height": 2}
        assert data["maxColors"] == 6

    def test_default_max_colors(self):
        assert _chart()["maxColors"] == 6

    def test_detailed_mode(self):
        pixels = [["#101010", "#202020", "#303030", "#404040", "#505050", "#606060"]]
        data = _chart(pixels, maxColors=2, detailedMode=True)
        assert len(data["colors"]) == 6

    def test_overrides(self):
        data = _chart(colorOverrides={BLUE: RED})
        assert [(c["hex"], c["count"]) for c in data["colors"]] == [(RED, 4)]

    def test_ragged_grid(self):
        response = client.post("/api/charts", json={"pixels": [[RED, RED], [BLUE]]})
        assert response.status_code == 422

    def test_empty_grid(self):
        response = client.post("/api/charts", json={"pixels": []})
        assert response.status_code == 422

    def test_bad_color(self):
        response = client.post("/api/charts", json={"pixels": [["purple"]]})
        assert response.status_code == 422

    def test_max_colors_out_of_bounds(self):
        response = client.post("/api/charts", json={"pixels": RED_BLUE_GRID, "maxColors": 50})
        assert response.status_code == 422

    def test_generation_failure_is_generic(self, monkeypatch):
        def fail(*args, **kwargs):
            raise ChartGenerationError()

        monkeypatch.setattr(charts_api, "generate_chart", fail)
        response = client.post("/api/charts", json={"pixels": RED_BLUE_GRID})
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to generate chart. Please try again."


class TestGenerateFromImage:
    def test_banded_image(self, banded_png):
        response = client.post("/api/charts/image", json={
            "imageBase64": base64.b64encode(banded_png).decode("ascii"),
            "contentType": "image/png",
            "gridSize": {"width": 10, "height": 10},
        })
        assert response.status_code == 200
        data = response.json()
        assert [c["sequenceNumber"] for c in data["cells"][0]] == list(range(1, 11))
        assert [(c["hex"], c["count"]) for c in data["colors"]] == [(RED, 50), (BLUE, 50)]

    def test_suggested_grid_size(self, banded_png):
        response = client.post("/api/charts/image", json={
            "imageBase64": base64.b64encode(banded_png).decode("ascii"),
        })
        assert response.status_code == 200
        assert response.json()["gridSize"] == {"width": 10, "height": 10}

    def test_not_an_image_type(self, banded_png):
        response = client.post("/api/charts/image", json={
            "imageBase64": base64.b64encode(banded_png).decode("ascii"),
            "contentType": "application/pdf",
        })
        assert response.status_code == 400

    def test_invalid_base64(self):
        response = client.post("/api/charts/image", json={"imageBase64": "@@@"})
        assert response.status_code == 400

    def test_undecodable_image(self):
        response = client.post("/api/charts/image", json={
            "imageBase64": base64.b64encode(b"definitely not a png").decode("ascii"),
            "gridSize": {"width": 10, "height": 10},
        })
        assert response.status_code == 400

    def test_grid_too_small(self, banded_png):
        response = client.post("/api/charts/image", json={
            "imageBase64": base64.b64encode(banded_png).decode("ascii"),
            "gridSize": {"width": 2, "height": 2},
        })
        assert response.status_code == 422


class TestEdits:
    def test_recolor(self):
        chart = _chart()
        response = client.post("/api/charts/recolor", json={"chart": chart, "row": 0, "col": 1, "color": BLUE})
        assert response.status_code == 200
        data = response.json()
        assert data["cells"][0] == [
            {"color": RED, "sequenceNumber": 1},
            {"color": BLUE, "sequenceNumber": 1},
        ]
        assert [(c["hex"], c["count"]) for c in data["colors"]] == [(BLUE, 3), (RED, 1)]

    def test_recolor_out_of_range(self):
        response = client.post("/api/charts/recolor", json={"chart": _chart(), "row": 9, "col": 0, "color": BLUE})
        assert response.status_code == 422

    def test_recolor_ragged_chart(self):
        chart = _chart()
        chart["cells"][1] = chart["cells"][1][:1]
        response = client.post("/api/charts/recolor", json={"chart": chart, "row": 1, "col": 1, "color": GREEN})
        assert response.status_code == 422

    def test_replace(self):
        chart = _chart(STRIPED_GRID)
        response = client.post("/api/charts/replace", json={"chart": chart, "oldColor": RED, "newColor": BLUE})
        assert response.status_code == 200
        data = response.json()
        assert RED not in {c["hex"] for c in data["colors"]}

    def test_replace_absent_color(self):
        chart = _chart()
        response = client.post("/api/charts/replace", json={"chart": chart, "oldColor": "#123456", "newColor": BLUE})
        assert response.json() == chart

    def test_replace_matches_uppercase_cells(self):
        chart = _chart()
        for row in chart["cells"]:
            for cell in row:
                cell["color"] = cell["color"].upper()
        response = client.post("/api/charts/replace", json={"chart": chart, "oldColor": RED, "newColor": GREEN})
        assert response.status_code == 200
        assert RED not in {c["hex"] for c in response.json()["colors"]}

    def test_replace_ragged_chart(self):
        chart = _chart()
        chart["cells"][0].append(chart["cells"][0][0])
        response = client.post("/api/charts/replace", json={"chart": chart, "oldColor": RED, "newColor": BLUE})
        assert response.status_code == 422


class TestExport:
    @pytest.mark.parametrize(
        ("fmt", "media", "filename"),
        [
            ("text", "text/plain", "crochet-pattern-2x2.txt"),
            ("instructions", "text/plain", "crochet-instructions-2x2.txt"),
            ("json", "application/json", "crochet-data-2x2.json"),
            ("png", "image/png", "crochet-chart-2x2.png"),
            ("pdf", "application/pdf", "crochet-pattern-2x2.pdf"),
        ],
    )
    def test_formats(self, fmt, media, filename):
        response = client.post(f"/api/charts/export/{fmt}", json={"chart": _chart()})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith(media)
        assert filename in response.headers["content-disposition"]

    def test_text_body(self):
        response = client.post("/api/charts/export/text", json={"chart": _chart()})
        assert response.text.endswith("11 21 \n12 22 \n")

    def test_unknown_format(self):
        response = client.post("/api/charts/export/docx", json={"chart": _chart()})
        assert response.status_code == 404

    def test_stale_catalog_is_rederived(self):
        chart = _chart()
        chart["colors"] = []
        response = client.post("/api/charts/export/json", json={"chart": chart})
        assert [c["hex"] for c in response.json()["colors"]] == [RED, BLUE]


def test_statistics():
    response = client.post("/api/charts/statistics", json={"chart": _chart()})
    assert response.status_code == 200
    data = response.json()
    assert data["totalStitches"] == 4
    assert data["averageSequenceLength"] == 3.0
    assert [b["percentage"] for b in data["colorBreakdown"]] == [50.0, 50.0]


def test_suggest_grid_size():
    response = client.post("/api/grid-size/suggest", json={"width": 800, "height": 600})
    assert response.status_code == 200
    assert response.json() == {"width": 40, "height": 30}
