"""
Strategy selection: which transform implementation handles a given size.

Implementations are registered explicitly in a static table of
(size, factory, priority) entries. ``create(size)`` returns a new instance
from the highest-priority factory for that size and falls back to the
generic TransformEngine for any other power of two.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .core.base import Transform
from .core.bitrev_cache import BitReversalCache
from .core.engine import TransformEngine
from .core.kernels import UnrolledFFT2, UnrolledFFT4, UnrolledFFT8
from .core.trig_cache import TrigFactorCache
from .errors import check_size, is_power_of_two

logger = logging.getLogger(__name__)

TransformFactory = Callable[[], Transform]

DEFAULT_PRIORITY = 10
MAX_LISTED_SIZE = 8192

# size -> factory, highest priority wins
DEFAULT_IMPLEMENTATIONS = (
    (2, UnrolledFFT2, 50),
    (4, UnrolledFFT4, 50),
    (8, UnrolledFFT8, 50),
)


@dataclass(frozen=True)
class ImplementationEntry:
    factory: TransformFactory
    priority: int
    order: int


class TransformRegistry:
    """
    Size-keyed registry of transform factories.

    Args:
        trig_cache: Cache handed to the generic engine (shared default if None)
        bitrev_cache: Cache handed to the generic engine (shared default if None)
        register_defaults: Install DEFAULT_IMPLEMENTATIONS
    """

    def __init__(
        self,
        trig_cache: Optional[TrigFactorCache] = None,
        bitrev_cache: Optional[BitReversalCache] = None,
        register_defaults: bool = True
    ):
        self.trig_cache = trig_cache
        self.bitrev_cache = bitrev_cache
        self._lock = threading.Lock()
        self._entries: Dict[int, List[ImplementationEntry]] = {}
        self._counter = 0

        if register_defaults:
            for size, factory, priority in DEFAULT_IMPLEMENTATIONS:
                self.register(size, factory, priority)

    def _generic(self) -> TransformEngine:
        return TransformEngine(self.trig_cache, self.bitrev_cache)

    def register(self, size: int, factory: TransformFactory, priority: int = DEFAULT_PRIORITY):
        """Register ``factory`` for ``size``; later entries win priority ties."""
        check_size(size)
        if not callable(factory):
            raise TypeError(f"Implementation factory must be callable, got {factory!r}")

        with self._lock:
            self._counter += 1
            entries = self._entries.setdefault(size, [])
            entries.append(ImplementationEntry(factory, int(priority), self._counter))
            entries.sort(key=lambda e: (e.priority, e.order), reverse=True)
        logger.debug("Registered %r for size %d (priority %d)", factory, size, priority)

    def unregister(self, size: int) -> bool:
        """Remove every entry for ``size``. Returns whether any existed."""
        with self._lock:
            removed = self._entries.pop(size, None) is not None
        if removed:
            logger.debug("Unregistered implementations for size %d", size)
        return removed

    def _best(self, size: int) -> Optional[ImplementationEntry]:
        with self._lock:
            entries = self._entries.get(size)
            return entries[0] if entries else None

    def create(self, size: int) -> Transform:
        """New transform instance for ``size``."""
        check_size(size)
        best = self._best(size)
        if best is None:
            return self._generic()
        return best.factory()

    def implementation_count(self, size: int) -> int:
        with self._lock:
            return len(self._entries.get(size, ()))

    def supports_size(self, size: int) -> bool:
        return is_power_of_two(size)

    def supported_sizes(self) -> List[int]:
        """Registered sizes plus every power of two up to MAX_LISTED_SIZE."""
        with self._lock:
            sizes = set(self._entries)
        size = 1
        while size <= MAX_LISTED_SIZE:
            sizes.add(size)
            size *= 2
        return sorted(sizes)

    def implementation_info(self, size: int) -> str:
        if not is_power_of_two(size):
            return "Invalid size (not power of 2)"
        best = self._best(size)
        if best is None:
            return f"TransformEngine (generic fallback for size {size})"
        return f"{best.factory().description} (priority: {best.priority})"

    def report(self) -> str:
        """Human-readable listing of the registry."""
        lines = ["Transform registry:", "=" * 40]
        for size in self.supported_sizes():
            lines.append(f"Size {size}: {self.implementation_info(size)}")
            with self._lock:
                alternatives = list(self._entries.get(size, ()))[1:]
            if alternatives:
                lines.append("  Alternative implementations:")
                for entry in alternatives:
                    lines.append(
                        f"    - {entry.factory().description} (priority: {entry.priority})"
                    )
        return "\n".join(lines)
