"""
Rate limiting for the storefront API
Uses in-memory storage with sliding window algorithm
"""
import time
from typing import Deque, Dict, Tuple
from collections import defaultdict, deque
from fastapi import Request, HTTPException, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from .config import settings


class RateLimiter:
    """
    In-memory rate limiter using sliding window algorithm.

    Each identifier keeps a deque of its request timestamps, oldest first.
    State is per process; multiple workers each keep their own window.
    """

    def __init__(self, sweep_interval: int = 60):
        # {identifier: deque([timestamp, ...])}
        self._requests: Dict[str, Deque[float]] = defaultdict(deque)
        self._last_sweep = time.time()
        self._sweep_interval = sweep_interval  # seconds

    def _sweep_idle(self, now: float, window_seconds: int):
        """Forget identifiers whose newest request has left the window"""
        if now - self._last_sweep < self._sweep_interval:
            return

        idle = [
            identifier for identifier, stamps in self._requests.items()
            if not stamps or stamps[-1] <= now - window_seconds
        ]
        for identifier in idle:
            del self._requests[identifier]

        self._last_sweep = now

    def is_allowed(
        self,
        identifier: str,
        max_requests: int,
        window_seconds: int = 60
    ) -> Tuple[bool, int, int]:
        """
        Check if a request is allowed under the rate limit.

        Returns:
            Tuple of (is_allowed, remaining_requests, retry_after_seconds)
        """
        now = time.time()
        self._sweep_idle(now, window_seconds)

        stamps = self._requests[identifier]

        # Drop requests that have slid out of the window
        while stamps and stamps[0] <= now - window_seconds:
            stamps.popleft()

        if len(stamps) >= max_requests:
            # Free again once the oldest request in the window expires
            retry_after = int(stamps[0] + window_seconds - now) + 1 if stamps else 1
            return False, 0, retry_after

        stamps.append(now)
        return True, max_requests - len(stamps), 0

    def tracked_identifiers(self) -> int:
        return len(self._requests)

    def reset(self):
        self._requests.clear()


# Global rate limiter instance
rate_limiter = RateLimiter()


# Requests per minute
RATE_LIMITS = {
    "authenticated": 1000,
    "unauthenticated": 300,  # storefront pages fan out into several catalog calls
}

# Paths that are exempt from rate limiting
EXEMPT_PATHS = {
    "/",
    "/health",
    "/docs",
    "/openapi.json",
    "/redoc",
}


def get_client_ip(request: Request) -> str:
    """Get the client IP, considering proxies"""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # Take the first IP in the chain (original client)
        return forwarded_for.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Middleware that applies rate limiting based on authentication status.

    Rate limits:
    - Authenticated back-office users (JWT): 1000 req/min
    - Unauthenticated storefront visitors: 300 req/min per IP

    Headers returned:
    - X-RateLimit-Limit: Maximum requests per window
    - X-RateLimit-Remaining: Remaining requests in current window
    - Retry-After: Seconds until the window frees up (when limited)
    """

    async def dispatch(self, request: Request, call_next):
        if not settings.RATE_LIMIT_ENABLED:
            return await call_next(request)

        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        # Skip OPTIONS requests (CORS preflight)
        if request.method == "OPTIONS":
            return await call_next(request)

        identifier, limit = self._get_identifier_and_limit(request)

        is_allowed, remaining, retry_after = rate_limiter.is_allowed(
            identifier=identifier,
            max_requests=limit,
            window_seconds=60
        )

        if not is_allowed:
            # JSONResponse instead of HTTPException so CORS headers are still applied
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"detail": "Rate limit exceeded. Please slow down."},
                headers={
                    "X-RateLimit-Limit": str(limit),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(retry_after),
                    "Retry-After": str(retry_after),
                }
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(limit)
        response.headers["X-RateLimit-Remaining"] = str(remaining)

        return response

    def _get_identifier_and_limit(self, request: Request) -> Tuple[str, int]:
        auth_header = request.headers.get("Authorization")
        if auth_header and auth_header.startswith("Bearer "):
            return f"jwt:{hash(auth_header)}", RATE_LIMITS["authenticated"]

        return f"ip:{get_client_ip(request)}", RATE_LIMITS["unauthenticated"]


def limit_per_minute(max_requests: int):
    """
    Dependency factory for stricter limits on individual endpoints.

    Usage:
        @router.post("/", dependencies=[Depends(limit_per_minute(5))])
        async def submit_inquiry(...):
            pass
    """
    async def checker(request: Request):
        if not settings.RATE_LIMIT_ENABLED:
            return

        identifier = f"endpoint:{request.url.path}:ip:{get_client_ip(request)}"
        is_allowed, _, retry_after = rate_limiter.is_allowed(
            identifier=identifier,
            max_requests=max_requests,
            window_seconds=60
        )

        if not is_allowed:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=f"Rate limit exceeded for this endpoint. Try again in {retry_after} seconds.",
                headers={
                    "X-RateLimit-Limit": str(max_requests),
                    "X-RateLimit-Remaining": "0",
                    "Retry-After": str(retry_after),
                }
            )

    return checker
