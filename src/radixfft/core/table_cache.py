"""
Two-tier, thread-safe storage for per-size lookup tables.

Hot sizes are built eagerly by ``init()`` and pinned for the life of the
cache. Any other size is built on first request and kept in a bounded LRU;
with ``lazy_capacity=0`` uncommon sizes are rebuilt on every request and
never stored.

Tables are built outside the lock. When two threads race on the same
unseen size, both build identical content and the first one to publish
wins; the loser returns the published table.
"""

import logging
import threading
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..errors import check_size

logger = logging.getLogger(__name__)

HOT_SIZES: Tuple[int, ...] = (8, 16, 32, 64, 128, 256, 512, 1024, 2048, 4096)
DEFAULT_LAZY_CAPACITY = 16


class TableCache:
    """
    Base class for size-keyed table caches.

    Subclasses implement ``_build(n)`` (returning an immutable table) and
    ``_table_nbytes(table)``.
    """

    name = "TableCache"

    def __init__(
        self,
        hot_sizes: Iterable[int] = HOT_SIZES,
        lazy_capacity: int = DEFAULT_LAZY_CAPACITY,
        eager: bool = True
    ):
        self.hot_sizes = tuple(sorted(set(check_size(int(n)) for n in hot_sizes)))
        if lazy_capacity < 0:
            raise ValueError(f"lazy_capacity must be >= 0, got {lazy_capacity}")
        self.lazy_capacity = int(lazy_capacity)

        self._lock = threading.Lock()
        self._hot: Dict[int, Any] = {}
        self._lazy: "OrderedDict[int, Any]" = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

        if eager:
            self.init()

    def _build(self, n: int) -> Any:
        raise NotImplementedError

    def _table_nbytes(self, table: Any) -> int:
        raise NotImplementedError

    def init(self):
        """Build and pin the tables for every hot size."""
        built = {n: self._build(n) for n in self.hot_sizes}
        with self._lock:
            for n, table in built.items():
                self._hot.setdefault(n, table)
                self._lazy.pop(n, None)
        logger.debug("%s: built %d hot tables", self.name, len(built))

    def clear(self):
        """Drop every table, hot ones included, and reset counters."""
        with self._lock:
            self._hot.clear()
            self._lazy.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0
        logger.debug("%s: cleared", self.name)

    def is_precomputed(self, n: int) -> bool:
        """Whether a standing table exists for size n."""
        with self._lock:
            return n in self._hot or n in self._lazy

    def cached_sizes(self) -> List[int]:
        with self._lock:
            return sorted(set(self._hot) | set(self._lazy))

    def _peek(self, n: int) -> Optional[Any]:
        """Return a standing table without building or touching LRU order."""
        with self._lock:
            table = self._hot.get(n)
            if table is None:
                table = self._lazy.get(n)
            return table

    def _get_or_build(self, n: int) -> Any:
        with self._lock:
            table = self._hot.get(n)
            if table is not None:
                self._hits += 1
                return table
            table = self._lazy.get(n)
            if table is not None:
                self._lazy.move_to_end(n)
                self._hits += 1
                return table
            self._misses += 1

        table = self._build(n)
        if self.lazy_capacity == 0:
            return table

        with self._lock:
            published = self._hot.get(n)
            if published is None:
                published = self._lazy.get(n)
            if published is not None:
                return published
            self._lazy[n] = table
            while len(self._lazy) > self.lazy_capacity:
                evicted, _ = self._lazy.popitem(last=False)
                self._evictions += 1
                logger.debug("%s: evicted size %d", self.name, evicted)
        logger.debug("%s: cached size %d", self.name, n)
        return table

    def stats(self) -> Dict[str, Any]:
        """Cache statistics for monitoring and tests."""
        with self._lock:
            tables = list(self._hot.values()) + list(self._lazy.values())
            return {
                'name': self.name,
                'hot_sizes': len(self._hot),
                'lazy_sizes': len(self._lazy),
                'lazy_capacity': self.lazy_capacity,
                'bytes': sum(self._table_nbytes(t) for t in tables),
                'hits': self._hits,
                'misses': self._misses,
                'evictions': self._evictions,
            }

    def __repr__(self) -> str:
        s = self.stats()
        return (f"{self.name}(sizes={s['hot_sizes'] + s['lazy_sizes']}, "
                f"~{s['bytes'] / 1024:.1f} KB)")
