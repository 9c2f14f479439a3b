"""In-process sliding-window rate limiting for the HTTP layer."""

from __future__ import annotations

import asyncio
import time
from collections import defaultdict, deque
from collections.abc import Awaitable, Callable
from functools import lru_cache
from typing import Any

from fastapi import HTTPException, Request, Response
from loguru import logger

from src.marketplace.runtime.context import get_config

RateLimiterType = Callable[[Request, Response], Awaitable[Any]]

_local_limiters: list[LocalRateLimiter] = []
_generation: int = 0


class LocalRateLimiter:
    """Sliding-window limiter keyed by client, method and route template."""

    def __init__(
        self, times: int, milliseconds: int, per_endpoint: bool, per_method: bool
    ) -> None:
        self._hits: defaultdict[str, deque[float]] = defaultdict(deque)
        self._lock = asyncio.Lock()
        self._times = times
        self._seconds = milliseconds / 1000
        self._per_endpoint = per_endpoint
        self._per_method = per_method
        self._last_cleanup = time.monotonic()
        self._cleanup_interval = 60.0

    async def __call__(self, request: Request, response: Response) -> None:
        await self._throttle(self._make_key(request))

    def _make_key(self, request: Request) -> str:
        client_host = request.client.host if request.client else "anonymous"
        parts = [f"ip:{client_host}"]
        if self._per_method:
            parts.append(request.method)
        if self._per_endpoint:
            route = request.scope.get("route")
            template = getattr(route, "path", None)
            parts.append((template or request.url.path).rstrip("/"))
        return ":".join(parts)

    def _cleanup_old_keys(self, now: float) -> None:
        if now - self._last_cleanup < self._cleanup_interval:
            return
        self._last_cleanup = now
        for key in [k for k, hits in self._hits.items() if not hits or hits[-1] <= now - self._seconds]:
            del self._hits[key]

    async def _throttle(self, key: str) -> None:
        now = time.monotonic()
        window_start = now - self._seconds
        async with self._lock:
            self._cleanup_old_keys(now)
            hits = self._hits[key]
            while hits and hits[0] <= window_start:
                hits.popleft()
            if len(hits) >= self._times:
                retry_after = max(0, int(self._seconds - (now - hits[0])))
                logger.warning("Rate limit exceeded for {}", key)
                raise HTTPException(
                    status_code=429,
                    detail="Too Many Requests",
                    headers={"Retry-After": str(retry_after)},
                )
            hits.append(now)

    async def cleanup(self) -> None:
        async with self._lock:
            tracked = len(self._hits)
            self._hits.clear()
        logger.debug("Cleaned up local rate limiter with {} tracked keys", tracked)


def configure_rate_limiter() -> None:
    """Start a fresh limiter generation; previous counters are discarded."""
    global _generation
    _create_rate_limiter.cache_clear()
    _generation += 1
    logger.info("Using local in-memory rate limiter")


@lru_cache(maxsize=100)
def _create_rate_limiter(
    requests: int, window_ms: int, per_endpoint: bool, per_method: bool, generation: int
) -> LocalRateLimiter:
    limiter = LocalRateLimiter(requests, window_ms, per_endpoint, per_method)
    _local_limiters.append(limiter)
    return limiter


def get_rate_limiter(
    requests: int | None = None, window_ms: int | None = None
) -> LocalRateLimiter:
    """Cached limiter for the given quota, defaulting to the configured one."""
    cfg = get_config().rate_limiter
    return _create_rate_limiter(
        requests if requests is not None else cfg.requests,
        window_ms if window_ms is not None else cfg.window_ms,
        cfg.per_endpoint,
        cfg.per_method,
        _generation,
    )


def rate_limit(requests: int | None = None, window_ms: int | None = None) -> RateLimiterType:
    """Return a dependency enforcing request quotas."""

    async def dependency(request: Request, response: Response) -> None:
        if not get_config().rate_limiter.enabled:
            return
        await get_rate_limiter(requests, window_ms)(request, response)

    return dependency


def otp_rate_limit() -> RateLimiterType:
    """Tighter quota for endpoints that issue or check one-time codes."""

    async def dependency(request: Request, response: Response) -> None:
        cfg = get_config().rate_limiter
        if not cfg.enabled:
            return
        await get_rate_limiter(cfg.otp_requests, cfg.otp_window_ms)(request, response)

    return dependency


async def close_rate_limiter() -> None:
    """Drop every limiter instance and its counters."""
    _create_rate_limiter.cache_clear()
    for limiter in _local_limiters:
        await limiter.cleanup()
    _local_limiters.clear()
    logger.info("Rate limiter cleanup completed")
