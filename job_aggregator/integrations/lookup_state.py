"""
State owned by one profile lookup client: API key rotation, request
throttling and the response cache. Each piece takes a clock so tests can
drive time explicitly.
"""

from typing import Optional
import logging
import threading
import time

from job_aggregator.core.models import Profile


class SystemClock:
    """Wall-clock time source."""

    def now(self) -> float:
        return time.time()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class KeyPool:
    """Ordered API keys with a cursor and a request counter per key."""

    def __init__(self, keys: Optional[list[str]] = None, max_requests_per_key: int = 100):
        self.keys = [k for k in (keys or []) if k]
        self.max_requests_per_key = max_requests_per_key
        self.index = 0
        self.request_counts = [0] * len(self.keys)
        self._lock = threading.RLock()
        self.logger = logging.getLogger(self.__class__.__name__)

    def __len__(self) -> int:
        return len(self.keys)

    @property
    def is_empty(self) -> bool:
        return not self.keys

    def current(self) -> str:
        if not self.keys:
            return ""
        return self.keys[self.index]

    @property
    def current_count(self) -> int:
        return self.request_counts[self.index] if self.keys else 0

    def rotate(self) -> None:
        """Move to the next key (wrapping) and reset its counter."""
        if not self.keys:
            return
        with self._lock:
            self.index = (self.index + 1) % len(self.keys)
            self.request_counts[self.index] = 0
        self.logger.info(f"Rotated to API key {self.index + 1}/{len(self.keys)}")

    def rotate_if_exhausted(self) -> bool:
        with self._lock:
            if self.keys and self.current_count >= self.max_requests_per_key:
                self.rotate()
                return True
            return False

    def record_request(self) -> None:
        if not self.keys:
            return
        with self._lock:
            self.request_counts[self.index] += 1


class RequestThrottle:
    """
    Minimum interval between upstream requests, shared by every caller.

    The interval check, the wait and the timestamp update happen under one
    lock, so concurrent callers are spaced out rather than racing past the
    check together.
    """

    def __init__(self, min_interval: float = 30.0, clock=None):
        self.min_interval = min_interval
        self.clock = clock or SystemClock()
        self.last_request_time: Optional[float] = None
        self._lock = threading.Lock()
        self.logger = logging.getLogger(self.__class__.__name__)

    def acquire(self) -> float:
        """Wait until a request may be issued; returns the issue time."""
        with self._lock:
            now = self.clock.now()
            if self.last_request_time is not None:
                wait = self.min_interval - (now - self.last_request_time)
                if wait > 0:
                    self.logger.info(f"Rate limiting: waiting {wait:.1f}s before next request")
                    self.clock.sleep(wait)
                    now = self.clock.now()
            self.last_request_time = now
            return now


class ResponseCache:
    """Profiles keyed by serialized search parameters, expiring after a fixed age."""

    def __init__(self, expiry: float = 3600.0, clock=None):
        self.expiry = expiry
        self.clock = clock or SystemClock()
        self._entries: dict[str, tuple[list[Profile], float]] = {}

    def get(self, key: str) -> Optional[list[Profile]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        profiles, created_at = entry
        if self.clock.now() - created_at >= self.expiry:
            self._entries.pop(key, None)
            return None
        return list(profiles)

    def set(self, key: str, profiles: list[Profile]) -> None:
        self._entries[key] = (list(profiles), self.clock.now())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
