"""In-process key/sorted-set store (development and tests).

Mirrors the subset of Redis semantics the service relies on: per-key expiry,
integer counters, hashes, and sorted sets ordered by (score, member). Each
primitive runs under one lock, so individual calls stay atomic when the web
server handles requests on a thread pool.
"""
import threading
import time
from typing import Callable, List, Optional, Tuple


class InMemoryStore:
    """Dict-backed store. State lives only as long as the process."""

    backend = "memory"

    # Expired keys nobody reads again (one-off client addresses) are dropped
    # by a full sweep at most this often.
    SWEEP_INTERVAL_SECONDS = 60

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._counters: dict = {}
        self._hashes: dict = {}
        self._zsets: dict = {}
        self._deadlines: dict = {}
        self._next_sweep = clock() + self.SWEEP_INTERVAL_SECONDS

    # ------------------------------------------------------------------
    # Expiry
    # ------------------------------------------------------------------

    def _purge(self, key: str) -> None:
        now = self._clock()
        if now >= self._next_sweep:
            self._sweep(now)
        deadline = self._deadlines.get(key)
        if deadline is not None and deadline <= now:
            self._delete(key)

    def _sweep(self, now: float) -> None:
        for key in [k for k, deadline in self._deadlines.items() if deadline <= now]:
            self._delete(key)
        self._next_sweep = now + self.SWEEP_INTERVAL_SECONDS

    def _delete(self, key: str) -> None:
        self._counters.pop(key, None)
        self._hashes.pop(key, None)
        self._zsets.pop(key, None)
        self._deadlines.pop(key, None)

    def _exists(self, key: str) -> bool:
        return key in self._counters or key in self._hashes or key in self._zsets

    def expire(self, key: str, seconds: int) -> bool:
        with self._lock:
            self._purge(key)
            if not self._exists(key):
                return False
            self._deadlines[key] = self._clock() + seconds
            return True

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------

    def increment(self, key: str) -> int:
        with self._lock:
            self._purge(key)
            value = self._counters.get(key, 0) + 1
            self._counters[key] = value
            return value

    # ------------------------------------------------------------------
    # Hashes
    # ------------------------------------------------------------------

    def hash_set(self, key: str, fields: dict) -> int:
        with self._lock:
            self._purge(key)
            current = self._hashes.setdefault(key, {})
            added = sum(1 for f in fields if f not in current)
            current.update({str(k): str(v) for k, v in fields.items()})
            return added

    def hash_get_all(self, key: str) -> dict:
        with self._lock:
            self._purge(key)
            return dict(self._hashes.get(key, {}))

    # ------------------------------------------------------------------
    # Sorted sets
    # ------------------------------------------------------------------

    def sorted_set_insert(self, key: str, score: float, member: str) -> int:
        with self._lock:
            self._purge(key)
            zset = self._zsets.setdefault(key, {})
            added = 0 if member in zset else 1
            zset[member] = float(score)
            return added

    def _descending(self, key: str) -> List[Tuple[str, float]]:
        zset = self._zsets.get(key, {})
        return sorted(zset.items(), key=lambda item: (item[1], item[0]), reverse=True)

    def sorted_set_range_desc_with_scores(
        self, key: str, start: int, stop: int
    ) -> List[Tuple[str, float]]:
        """Inclusive [start, stop] slice, highest score first. Negative indices count from the end."""
        with self._lock:
            self._purge(key)
            items = self._descending(key)
            size = len(items)
            if start < 0:
                start = max(size + start, 0)
            if stop < 0:
                stop = size + stop
            if start > stop or start >= size:
                return []
            return items[start:stop + 1]

    def sorted_set_rev_rank(self, key: str, member: str) -> Optional[int]:
        with self._lock:
            self._purge(key)
            for index, (candidate, _score) in enumerate(self._descending(key)):
                if candidate == member:
                    return index
            return None

    def sorted_set_cardinality(self, key: str) -> int:
        with self._lock:
            self._purge(key)
            return len(self._zsets.get(key, {}))

    def ping(self) -> bool:
        return True
