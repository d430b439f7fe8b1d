"""Per-request context: request id, timing, access log and API rate limiting.

Only ``/api/...`` routes are throttled; the index, health probe and the
OpenAPI docs never are. Throttling uses an in-memory token bucket per
client, implemented by the pure function ``check_rate_limit``.
"""

import logging
import threading
import time
import uuid
from typing import Dict, Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..core.config import settings
from ..core.logging_config import request_id_var
from ..exceptions import ErrorCode

logger = logging.getLogger(__name__)

# client key -> (tokens left, monotonic time of last update)
Buckets = Dict[str, Tuple[float, float]]

_rate_buckets: Buckets = {}
_rate_lock = threading.Lock()

_IDLE_BUCKET_SECONDS = 120.0
_SWEEP_INTERVAL = 100
_calls_since_sweep = 0

_LIMITED_PREFIX = "/api/"


def _sweep_idle(bucket: Buckets, now: float) -> None:
    """Drop clients that have not been seen for a while."""
    for key in [k for k, (_, seen) in bucket.items() if now - seen > _IDLE_BUCKET_SECONDS]:
        del bucket[key]


def check_rate_limit(
    bucket: Buckets,
    key: str,
    max_per_minute: int,
    now: Optional[float] = None,
) -> Tuple[bool, float]:
    """Take one token for *key* if available.

    Each client starts with ``max_per_minute`` tokens and regains them at
    ``max_per_minute / 60`` per second. A limit of 0 or less disables
    throttling and leaves *bucket* untouched.

    Returns:
        ``(allowed, retry_after)`` where *retry_after* is the number of
        seconds until one token is available again (0.0 when allowed).
    """
    global _calls_since_sweep

    if max_per_minute <= 0:
        return True, 0.0
    if now is None:
        now = time.monotonic()

    _calls_since_sweep += 1
    if _calls_since_sweep >= _SWEEP_INTERVAL:
        _calls_since_sweep = 0
        _sweep_idle(bucket, now)

    per_second = max_per_minute / 60.0
    tokens, seen = bucket.get(key, (float(max_per_minute), now))
    tokens = min(float(max_per_minute), tokens + (now - seen) * per_second)

    if tokens < 1.0:
        bucket[key] = (tokens, now)
        return False, (1.0 - tokens) / per_second

    bucket[key] = (tokens - 1.0, now)
    return True, 0.0


def _client_key(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    return request.client.host if request.client else "unknown"


def _too_many_requests(request_id: str, retry_after: float) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={
            "error": ErrorCode.RATE_LIMITED.value,
            "message": "Too many requests",
            "details": {"retry_after": round(retry_after, 1)},
        },
        headers={"Retry-After": str(int(retry_after) + 1), "X-Request-ID": request_id},
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags every request with an id, times it, logs it and throttles API calls."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:16]
        request_id_var.set(request_id)
        path = request.url.path

        if path.startswith(_LIMITED_PREFIX):
            client = _client_key(request)
            with _rate_lock:
                allowed, retry_after = check_rate_limit(
                    _rate_buckets, client, settings.rate_limit_per_minute
                )
            if not allowed:
                logger.warning(
                    "Rate limit exceeded for %s on %s",
                    client,
                    path,
                    extra={"client": client, "retry_after": round(retry_after, 1)},
                )
                return _too_many_requests(request_id, retry_after)

        started = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - started) * 1000, 1)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        logger.info(
            "%s %s %s",
            request.method,
            path,
            response.status_code,
            extra={
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response
