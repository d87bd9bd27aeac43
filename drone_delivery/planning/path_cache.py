"""Thread-safe memoization of planned paths."""
import threading
from typing import Dict, List, Optional, Sequence, Tuple

from drone_delivery.domain.coordinate import Coordinate

PathKey = Tuple[Coordinate, Coordinate]


class PathCache:
    """Caches paths by exact (start, end), separately for outbound and return trips.

    Return trips follow a stricter validity policy, so the same endpoints can
    have a different path in each table. Stored paths are immutable tuples
    and every read hands out a fresh list. The lock only guards dictionary
    access, never a search.
    """

    def __init__(self):
        self._outbound: Dict[PathKey, Tuple[Coordinate, ...]] = {}
        self._return: Dict[PathKey, Tuple[Coordinate, ...]] = {}
        self._lock = threading.Lock()

    def _table(self, is_return_path: bool) -> Dict[PathKey, Tuple[Coordinate, ...]]:
        return self._return if is_return_path else self._outbound

    def get(self, start: Coordinate, end: Coordinate, is_return_path: bool) -> Optional[List[Coordinate]]:
        """Copy of the cached path, or None on a miss."""
        with self._lock:
            stored = self._table(is_return_path).get((start, end))
        if stored is None:
            return None
        return list(stored)

    def put(self, start: Coordinate, end: Coordinate, is_return_path: bool,
            path: Sequence[Coordinate]):
        """Store a copy of a path; a concurrent write of the same key simply wins last."""
        stored = tuple(path)
        with self._lock:
            self._table(is_return_path)[(start, end)] = stored

    def clear(self):
        """Drop every cached path from both tables."""
        with self._lock:
            self._outbound = {}
            self._return = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._outbound) + len(self._return)
