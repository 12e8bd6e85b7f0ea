"""
YAML configuration for caches, logging and benchmarking.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import yaml

from .core.table_cache import DEFAULT_LAZY_CAPACITY, HOT_SIZES
from .errors import is_power_of_two
from .utils.logging import resolve_level
from .validation import DEFAULT_TOLERANCE


@dataclass
class CacheConfig:
    """Twiddle and bit-reversal cache policy."""
    hot_sizes: Tuple[int, ...] = HOT_SIZES
    # 0 = recompute uncommon sizes on every call
    lazy_capacity: int = DEFAULT_LAZY_CAPACITY

    def __post_init__(self):
        self.hot_sizes = tuple(int(n) for n in self.hot_sizes)
        bad = [n for n in self.hot_sizes if not is_power_of_two(n)]
        if bad:
            raise ValueError(f"hot_sizes must be powers of 2, got {bad}")
        if self.lazy_capacity < 0:
            raise ValueError(f"lazy_capacity must be >= 0, got {self.lazy_capacity}")


@dataclass
class BenchmarkConfig:
    sizes: List[int] = field(default_factory=lambda: [2, 4, 8, 16, 64, 256, 1024, 4096])
    iterations: int = 200
    warmup: int = 20
    seed: int = 42


@dataclass
class RadixFFTConfig:
    cache: CacheConfig = field(default_factory=CacheConfig)
    benchmark: BenchmarkConfig = field(default_factory=BenchmarkConfig)
    tolerance: float = DEFAULT_TOLERANCE
    log_level: int = logging.INFO
    log_file: Optional[str] = None

    def create_caches(self):
        """(TrigFactorCache, BitReversalCache) built from the cache section."""
        from .core.bitrev_cache import BitReversalCache
        from .core.trig_cache import TrigFactorCache

        kwargs = dict(hot_sizes=self.cache.hot_sizes, lazy_capacity=self.cache.lazy_capacity)
        return TrigFactorCache(**kwargs), BitReversalCache(**kwargs)


def _pick(section: Dict, cls) -> Dict:
    known = cls.__dataclass_fields__
    return {k: v for k, v in (section or {}).items() if k in known}


def config_from_dict(raw: Dict) -> RadixFFTConfig:
    """Build a config from a parsed YAML mapping; unknown keys are ignored."""
    raw = raw or {}
    level = resolve_level(raw.get('log_level', logging.INFO))

    return RadixFFTConfig(
        cache=CacheConfig(**_pick(raw.get('cache'), CacheConfig)),
        benchmark=BenchmarkConfig(**_pick(raw.get('benchmark'), BenchmarkConfig)),
        tolerance=float(raw.get('tolerance', DEFAULT_TOLERANCE)),
        log_level=level,
        log_file=raw.get('log_file'),
    )


def load_config(config_path: Union[str, Path]) -> RadixFFTConfig:
    """Load configuration."""
    with open(config_path, 'r') as f:
        return config_from_dict(yaml.safe_load(f))
