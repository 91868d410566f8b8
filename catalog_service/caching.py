# catalog_service/caching.py
"""Server-side output caching.

Responses of the configured GET paths are stored as raw bytes and replayed
verbatim until they expire, so the route handler only runs once per
window. The cache key is the request path; query string, headers and
client identity do not vary the entry.
"""
import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedResponse:
    status_code: int
    media_type: Optional[str]
    body: bytes
    expires_at: float


class OutputCache:
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CachedResponse] = {}
        self._guard = threading.Lock()
        self._fill_locks: Dict[str, asyncio.Lock] = {}

    def get(self, key: str) -> Optional[CachedResponse]:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                return None
            return entry

    def set(self, key: str, status_code: int, media_type: Optional[str], body: bytes) -> CachedResponse:
        entry = CachedResponse(
            status_code=status_code,
            media_type=media_type,
            body=body,
            expires_at=self._clock() + self.ttl_seconds,
        )
        with self._guard:
            self._entries[key] = entry
        return entry

    def fill_lock(self, key: str) -> asyncio.Lock:
        # one computation per key per miss window
        with self._guard:
            if key not in self._fill_locks:
                self._fill_locks[key] = asyncio.Lock()
            return self._fill_locks[key]


class OutputCacheMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, cache: OutputCache, paths: Iterable[str]):
        super().__init__(app)
        self.cache = cache
        self.paths = frozenset(paths)

    def _cache_control(self) -> str:
        return f"public, max-age={int(self.cache.ttl_seconds)}"

    def _replay(self, entry: CachedResponse) -> Response:
        return Response(
            content=entry.body,
            status_code=entry.status_code,
            media_type=entry.media_type,
            headers={"Cache-Control": self._cache_control()},
        )

    async def dispatch(self, request: Request, call_next):
        if request.method != "GET" or request.url.path not in self.paths:
            return await call_next(request)

        key = request.url.path
        entry = self.cache.get(key)
        if entry is not None:
            logger.debug("output cache hit for %s", key)
            return self._replay(entry)

        async with self.cache.fill_lock(key):
            entry = self.cache.get(key)
            if entry is None:
                response = await call_next(request)
                if response.status_code != 200:
                    return response
                body = b"".join([chunk async for chunk in response.body_iterator])
                entry = self.cache.set(
                    key,
                    response.status_code,
                    response.headers.get("content-type"),
                    body,
                )
                logger.info("output cache populated for %s (%d bytes, %ss)", key, len(body), self.cache.ttl_seconds)
        return self._replay(entry)
