import threading
import time
from typing import Callable

from repertorium.domain.register.model.query import RegisterStats

_Key = tuple[int, str | None]


class StatsCache:
    """
    Process-local, short-lived cache of RegisterStats.

    - fixed TTL from insertion; ttl_seconds <= 0 disables caching
    - advisory only: allocation never reads from it
    - at most max_entries keys; expired items are purged on every put
    - thread-safe (request handlers may run on several threads)
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = 256,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        # (year, office_id) -> (expires_at, stats)
        self._items: dict[_Key, tuple[float, RegisterStats]] = {}

    def __len__(self) -> int:
        return len(self._items)

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    def get(self, year: int, office_id: str | None) -> RegisterStats | None:
        if not self.enabled:
            return None
        with self._lock:
            item = self._items.get((year, office_id))
            if item is None:
                return None
            expires_at, stats = item
            if expires_at <= self._clock():
                del self._items[(year, office_id)]
                return None
            return stats

    def put(self, stats: RegisterStats, office_id: str | None) -> None:
        if not self.enabled:
            return
        now = self._clock()
        with self._lock:
            for stale in [k for k, (expires_at, _) in self._items.items() if expires_at <= now]:
                del self._items[stale]
            key = (stats.year, office_id)
            if key not in self._items and len(self._items) >= self.max_entries:
                # Evict the entry closest to expiry
                del self._items[min(self._items, key=lambda k: self._items[k][0])]
            self._items[key] = (now + self.ttl_seconds, stats)

    def invalidate(self, year: int | None = None) -> None:
        """Drop cached stats for ``year`` (all offices), or everything."""
        with self._lock:
            if year is None:
                self._items.clear()
                return
            for key in [k for k in self._items if k[0] == year]:
                del self._items[key]
