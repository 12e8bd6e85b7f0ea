"""
Transform engine, its two table caches and the result container.
"""

from .base import Transform
from .bitrev_cache import BitReversalCache, build_permutation, default_bitrev_cache
from .engine import TransformEngine
from .kernels import UnrolledFFT2, UnrolledFFT4, UnrolledFFT8
from .result import TransformResult
from .table_cache import HOT_SIZES, TableCache
from .trig_cache import TrigFactorCache, build_factor_table, default_trig_cache

__all__ = [
    'Transform',
    'TransformEngine',
    'TransformResult',
    'TableCache',
    'TrigFactorCache',
    'BitReversalCache',
    'UnrolledFFT2',
    'UnrolledFFT4',
    'UnrolledFFT8',
    'HOT_SIZES',
    'build_factor_table',
    'build_permutation',
    'default_trig_cache',
    'default_bitrev_cache',
]
