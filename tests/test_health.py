"""Tests for /health and / endpoints."""

import shutil

from tests.conftest import make_document


class TestHealth:

    def test_health_returns_200(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["storage"] == "ok"
        assert "uptime_seconds" in data
        assert "version" in data
        assert data["document_count"] == 0
        assert data["folder_count"] == 0

    def test_health_counts_records(self, client):
        client.post("/api/documents", json=make_document())
        data = client.get("/health").json()
        assert data["document_count"] == 1

    def test_health_degraded_when_data_dir_missing(self, client, storage):
        shutil.rmtree(storage.data_dir)
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "degraded"
        assert resp.json()["storage"] == "error"

    def test_root_returns_api_info(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["name"] == "Notekeeper API"
        assert resp.json()["status"] == "running"


class TestResponseHeaders:

    def test_response_includes_middleware_headers(self, client):
        resp = client.get("/health")
        assert "x-request-id" in resp.headers
        assert "x-response-time" in resp.headers

    def test_request_id_is_propagated(self, client):
        resp = client.get("/health", headers={"X-Request-ID": "abc123"})
        assert resp.headers["x-request-id"] == "abc123"
