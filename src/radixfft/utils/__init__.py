"""
Utility modules.
"""

from .logging import get_logger, log_cache_stats, setup_logging, setup_logging_from_config
from .signals import (
    generate_test_signal,
    generate_sine_wave,
    generate_multitone,
    next_power_of_two,
    zero_pad_to_power_of_two,
)

__all__ = [
    'setup_logging',
    'get_logger',
    'log_cache_stats',
    'setup_logging_from_config',
    'generate_test_signal',
    'generate_sine_wave',
    'generate_multitone',
    'next_power_of_two',
    'zero_pad_to_power_of_two',
]
