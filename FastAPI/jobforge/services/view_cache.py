"""
In-process cache for rendered job detail views, keyed by (path, viewer).
revalidate_path drops every cached variant of one path.
"""
import logging
import threading
import time
from typing import Any

from jobforge.config import settings

logger = logging.getLogger(__name__)


class ViewCache:
    def __init__(self, max_entries: int | None = None) -> None:
        self._lock = threading.Lock()
        self._entries: dict[tuple[str, str], tuple[float, Any]] = {}
        self._max_entries = settings.job_view_cache_max_entries if max_entries is None else max_entries

    def get(self, path: str, viewer: str) -> Any | None:
        now = time.time()
        with self._lock:
            entry = self._entries.get((path, viewer))
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= now:
                del self._entries[(path, viewer)]
                return None
            return value

    def set(self, path: str, viewer: str, value: Any, ttl_seconds: int | None = None) -> None:
        ttl = settings.job_view_cache_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            return
        now = time.time()
        with self._lock:
            self._sweep(now)
            self._entries.pop((path, viewer), None)
            # Oldest insertions go first once the cache is full.
            while self._entries and len(self._entries) >= self._max_entries:
                del self._entries[next(iter(self._entries))]
            self._entries[(path, viewer)] = (now + ttl, value)

    def _sweep(self, now: float) -> None:
        expired = [k for k, (expires_at, _) in self._entries.items() if expires_at <= now]
        for k in expired:
            del self._entries[k]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def revalidate_path(self, path: str) -> int:
        with self._lock:
            keys = [k for k in self._entries if k[0] == path]
            for k in keys:
                del self._entries[k]
        if keys:
            logger.debug("Revalidated %s (%d cached views dropped)", path, len(keys))
        return len(keys)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


view_cache = ViewCache()


def job_path(job_id: str) -> str:
    return f"/jobs/{job_id}"


def revalidate_job(job_id: str) -> int:
    return view_cache.revalidate_path(job_path(job_id))
