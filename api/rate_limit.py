"""Fixed-window request limiter keyed by caller identity."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass
class _Window:
    started_at: float
    count: int = 0


class FixedWindowRateLimiter:
    def __init__(
        self,
        max_requests: int,
        window_sec: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_sec = window_sec
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: dict[str, _Window] = {}

    def check(self, key: str) -> tuple[bool, float]:
        """Count one request for `key`.

        Returns whether the request is allowed and, when it is not, the
        seconds until the caller's window resets.
        """
        with self._lock:
            now = self._clock()
            window = self._windows.get(key)
            if window is None or now - window.started_at >= self.window_sec:
                self._prune(now)
                window = _Window(started_at=now)
                self._windows[key] = window

            window.count += 1
            if window.count > self.max_requests:
                return False, max(0.0, window.started_at + self.window_sec - now)
            return True, 0.0

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _prune(self, now: float) -> None:
        expired = [key for key, item in self._windows.items() if now - item.started_at >= self.window_sec]
        for key in expired:
            del self._windows[key]
