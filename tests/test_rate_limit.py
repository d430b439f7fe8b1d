"""Tests for the token-bucket limiter and its use in the middleware."""

import pytest

from notekeeper.core.config import settings
from notekeeper.middleware.request_context import check_rate_limit


def _drain(bucket: dict, key: str, limit: int, now: float = 0.0) -> None:
    for _ in range(limit):
        allowed, _ = check_rate_limit(bucket, key, max_per_minute=limit, now=now)
        assert allowed


class TestCheckRateLimit:
    """The pure function, driven with explicit timestamps."""

    def test_first_request_allowed(self):
        assert check_rate_limit({}, "10.0.0.1", max_per_minute=30, now=5.0) == (True, 0.0)

    def test_denied_once_drained(self):
        bucket: dict = {}
        _drain(bucket, "10.0.0.1", 30)

        allowed, retry_after = check_rate_limit(bucket, "10.0.0.1", max_per_minute=30, now=0.0)
        assert allowed is False
        # 30/min refills one token every 2 seconds
        assert retry_after == pytest.approx(2.0)

    def test_tokens_come_back(self):
        bucket: dict = {}
        _drain(bucket, "10.0.0.1", 30)
        allowed, _ = check_rate_limit(bucket, "10.0.0.1", max_per_minute=30, now=2.5)
        assert allowed is True

    def test_clients_do_not_share_buckets(self):
        bucket: dict = {}
        _drain(bucket, "10.0.0.1", 30)
        allowed, _ = check_rate_limit(bucket, "10.0.0.2", max_per_minute=30, now=0.0)
        assert allowed is True

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_disables(self, limit):
        bucket: dict = {}
        assert check_rate_limit(bucket, "any", max_per_minute=limit, now=0.0) == (True, 0.0)
        assert bucket == {}


class TestRateLimitMiddleware:

    def test_api_returns_429_when_drained(self, client, monkeypatch):
        monkeypatch.setattr(settings, "rate_limit_per_minute", 2)

        assert client.get("/api/documents").status_code == 200
        assert client.get("/api/folders").status_code == 200
        resp = client.get("/api/tree")
        assert resp.status_code == 429
        assert resp.json()["error"] == "RATE_LIMITED"
        assert int(resp.headers["retry-after"]) >= 1
        assert "x-request-id" in resp.headers

    def test_non_api_paths_are_not_limited(self, client, monkeypatch):
        monkeypatch.setattr(settings, "rate_limit_per_minute", 1)

        for _ in range(5):
            assert client.get("/health").status_code == 200
            assert client.get("/").status_code == 200
