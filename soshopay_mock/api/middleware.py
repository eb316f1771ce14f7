"""FastAPI middleware for request tracing, metrics and simulated latency"""

import asyncio
import random
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from soshopay_mock.config import settings
from soshopay_mock.infrastructure.observability.logging import log_request
from soshopay_mock.infrastructure.observability.metrics import request_duration_histogram


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add unique request ID to each request for tracing"""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        log_request(request_id, request.method, request.url.path)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request metrics"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time
        request_duration_histogram.labels(
            method=request.method,
            endpoint=request.url.path,
            status=response.status_code,
        ).observe(duration)

        return response


class LatencyMiddleware(BaseHTTPMiddleware):
    """Delay every response by a random amount to mimic a mobile network"""

    def __init__(self, app, min_ms: int | None = None, max_ms: int | None = None):
        super().__init__(app)
        self.min_ms = settings.latency_min_ms if min_ms is None else min_ms
        self.max_ms = settings.latency_max_ms if max_ms is None else max_ms

    async def dispatch(self, request: Request, call_next):
        if self.max_ms > 0:
            await asyncio.sleep(random.uniform(self.min_ms, self.max_ms) / 1000)
        return await call_next(request)
