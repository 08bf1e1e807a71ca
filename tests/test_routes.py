"""
Tests for API routes.

Covers the health, metrics and locate endpoints.
"""

import os

import pytest
from fastapi.testclient import TestClient

os.environ.pop("OCR_REDACT_CONFIG_PATH", None)

from ocr_redact.api import routes
from ocr_redact.api.routes import app


def _word(text, x0, y0=0, width=80, height=20):
    return {
        "text": text,
        "polygon": [
            {"x": x0, "y": y0},
            {"x": x0 + width, "y": y0},
            {"x": x0 + width, "y": y0 + height},
            {"x": x0, "y": y0 + height},
        ],
    }


@pytest.fixture
def client():
    """Create a test client with a freshly configured locator."""
    routes.reset_locator()
    with TestClient(app) as test_client:
        yield test_client
    routes.reset_locator()


class TestHealthEndpoints:
    """Test health and monitoring endpoints."""

    def test_health_endpoint(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "version" in data

    def test_metrics_endpoint(self, client):
        client.post("/v1/locate", json={
            "words": [_word("AF12HPV", 0)],
            "phrases": [{"text": "AF12HPV", "label": "License Plate"}],
        })
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "ocr_redact_matches_total" in response.text
        assert "ocr_redact_requests_total" in response.text

    def test_request_id_header(self, client):
        response = client.get("/health")
        assert response.headers.get("X-Request-ID")


class TestLocateEndpoint:
    """Test the locate endpoint."""

    def test_locates_split_plate(self, client):
        """Test a plate split across three OCR words."""
        response = client.post("/v1/locate", json={
            "words": [_word("AF", 0), _word("12", 100), _word("HPV", 200)],
            "phrases": [{"text": "AF12HPV", "label": "License Plate"}],
        })

        assert response.status_code == 200
        data = response.json()
        assert data["phrase_count"] == 1
        assert data["match_count"] == 1
        match = data["matches"][0]
        assert match["id"] == 0
        assert match["label"] == "License Plate"
        assert match["bbox"] == [0, 0, 280, 20]
        assert len(match["vertices"]) == 12
        assert match["redacted"] is True
        assert match["confidence"] == 1.0
        assert match["matchType"] == 'exact variant: ["AF","12","HPV"]'
        assert match["wordIndices"] == [0, 1, 2]

    def test_bounding_box_shape(self, client):
        """Test words sent in the OCR provider's boundingBox shape."""
        response = client.post("/v1/locate", json={
            "words": [{
                "text": "SHEPPARD",
                "boundingBox": {"vertices": [{"x": 10, "y": 5}, {"x": 90}, {"x": 90, "y": 25}]},
            }],
            "phrases": [{"text": "SHEPPARD", "label": "Name"}],
        })

        assert response.status_code == 200
        match = response.json()["matches"][0]
        assert match["bbox"] == [10, 5, 80, 20]
        assert len(match["vertices"]) == 2

    def test_unlocatable_phrase_succeeds(self, client):
        """Test that missing phrases give an empty, successful result."""
        response = client.post("/v1/locate", json={
            "words": [_word("J0HN", 0)],
            "phrases": [{"text": "JOHN", "label": "Name"}],
        })

        assert response.status_code == 200
        assert response.json()["matches"] == []

    def test_empty_body(self, client):
        response = client.post("/v1/locate", json={})

        assert response.status_code == 200
        assert response.json() == {"matches": [], "phrase_count": 0, "match_count": 0}

    def test_missing_phrase_label(self, client):
        """Test that malformed phrases are rejected by validation."""
        response = client.post("/v1/locate", json={"phrases": [{"text": "JOHN"}]})
        assert response.status_code == 422

    def test_too_many_vertices(self, client):
        word = _word("AF", 0)
        word["polygon"].append({"x": 1, "y": 1})
        response = client.post("/v1/locate", json={"words": [word], "phrases": []})
        assert response.status_code == 422


class TestErrorHandling:
    """Test error responses and request metrics labels."""

    def test_unknown_route_error_envelope(self, client):
        """Test that routing errors use the error envelope."""
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {
            "error": {"message": "Not Found", "type": "invalid_request_error", "code": 404}
        }

    def test_method_not_allowed_error_envelope(self, client):
        response = client.get("/v1/locate")

        assert response.status_code == 405
        assert response.json()["error"]["code"] == 405

    def test_unknown_paths_share_metric_label(self, client):
        """Test that arbitrary paths do not create new metric labels."""
        client.get("/v1/unexpected-path")
        metrics = client.get("/metrics").text

        assert 'endpoint="/v1/unexpected-path"' not in metrics
        assert 'endpoint="other"' in metrics
