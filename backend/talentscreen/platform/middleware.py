import logging
import time
import uuid
from collections import defaultdict
from dataclasses import dataclass

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from .request_context import reset_request_id, set_request_id

logger = logging.getLogger("talentscreen.middleware")

# In-memory sliding window: bucket key -> request timestamps inside the window
_rate_limit_store: dict[str, list[float]] = defaultdict(list)
_RATE_WINDOW_SEC = 60


@dataclass(frozen=True)
class RateRule:
    bucket: str
    limit: int
    path_fragment: str
    method: str | None = None
    suffix: str = ""

    def matches(self, method: str, path: str) -> bool:
        if self.path_fragment not in path:
            return False
        if self.method is not None and method != self.method:
            return False
        return path.endswith(self.suffix)


# First match wins. Public candidate endpoints only: the token is the only credential.
RATE_RULES = (
    RateRule("result_poll", 60, "/api/v1/assessment/result/"),
    RateRule("assessment_submit", 10, "/api/v1/assessment/", method="POST", suffix="/submit"),
    RateRule("candidate_token", 15, "/api/v1/assessment/"),
)


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def match_rate_rule(method: str, path: str) -> RateRule | None:
    for rule in RATE_RULES:
        if rule.matches(method, path):
            return rule
    return None


class RateLimitMiddleware(BaseHTTPMiddleware):
    """429 once a client IP exceeds a rule's limit within the window."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        rule = match_rate_rule(request.method, path)
        if rule is None:
            return await call_next(request)

        key = f"{rule.bucket}:{_client_ip(request)}"
        now = time.monotonic()
        hits = [t for t in _rate_limit_store[key] if t > now - _RATE_WINDOW_SEC]
        if len(hits) >= rule.limit:
            _rate_limit_store[key] = hits
            logger.warning("Rate limit exceeded bucket=%s path=%s", rule.bucket, path)
            return JSONResponse(status_code=429, content={"detail": "Too many requests. Please try again later."})
        hits.append(now)
        _rate_limit_store[key] = hits
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log it once it has a response."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        ctx_token = set_request_id(request_id)
        try:
            response = await call_next(request)
        finally:
            reset_request_id(ctx_token)

        elapsed_ms = (time.perf_counter() - started) * 1000
        if request.url.path != "/health":
            logger.info(
                "%s %s -> %d in %.1fms",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
                extra={"request_id": request_id},
            )
        response.headers["X-Process-Time-Ms"] = f"{elapsed_ms:.1f}"
        response.headers["X-Request-ID"] = request_id
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp hardening headers on every response; HSTS only behind TLS in production."""

    BASE_HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "strict-origin-when-cross-origin",
    }
    HSTS = "max-age=63072000; includeSubDomains"

    def __init__(self, app, *, hsts: bool = False):
        super().__init__(app)
        self.hsts = hsts

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in self.BASE_HEADERS.items():
            response.headers.setdefault(name, value)
        if self.hsts:
            response.headers["Strict-Transport-Security"] = self.HSTS
        return response
