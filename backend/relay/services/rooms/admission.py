import threading
import time
from collections import defaultdict
from typing import Callable, Dict, List


class SlidingWindowLimiter:
    """Per-key sliding window rate limiter.

    Keeps the timestamps of admitted events per key (client address) and
    admits a new one only while fewer than ``max_events`` fall inside the
    trailing ``window_seconds``. Denied events are not recorded, so a key is
    admitted again as soon as its oldest timestamp ages out.
    """

    def __init__(self, max_events: int = 10, window_seconds: float = 60, clock: Callable[[], float] = time.time):
        self.max_events = max_events
        self.window = window_seconds
        self._clock = clock
        self._timestamps: Dict[str, List[float]] = defaultdict(list)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._timestamps)

    def _prune(self, key: str, now: float) -> List[float]:
        recent = [ts for ts in self._timestamps.get(key, ()) if now - ts < self.window]
        self._timestamps[key] = recent
        return recent

    def is_allowed(self, key: str) -> bool:
        with self._lock:
            now = self._clock()
            recent = self._prune(key, now)
            if len(recent) >= self.max_events:
                return False
            recent.append(now)
            return True

    def retry_after(self, key: str) -> float:
        """Seconds until ``key`` would be admitted again (0 if it is now)."""
        with self._lock:
            now = self._clock()
            recent = self._prune(key, now)
            if not recent:
                del self._timestamps[key]
            if len(recent) < self.max_events:
                return 0.0
            return max(0.0, recent[0] + self.window - now)

    def sweep(self) -> int:
        """Drop keys with no timestamps left in the window; returns how many."""
        with self._lock:
            now = self._clock()
            stale = [key for key in list(self._timestamps) if not self._prune(key, now)]
            for key in stale:
                del self._timestamps[key]
            return len(stale)


def client_address(request, trust_forwarded: bool = True) -> str:
    """Resolve the source address of a request or Socket.IO handshake."""
    if trust_forwarded:
        forwarded = request.headers.get('X-Forwarded-For', '')
        first_hop = forwarded.split(',')[0].strip()
        if first_hop:
            return first_hop
    return request.remote_addr or 'unknown'
