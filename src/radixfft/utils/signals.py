"""
Test-signal generators and power-of-two helpers.
"""

from typing import Sequence

import numpy as np

SIGNAL_KINDS = ('impulse', 'dc', 'sine', 'cosine', 'mixed', 'random')


def generate_multitone(
    size: int,
    sample_rate: float,
    frequencies: Sequence[float],
    amplitudes: Sequence[float]
) -> np.ndarray:
    """Sum of sines: sum_j amplitudes[j] * sin(2*pi*frequencies[j]*t)."""
    if len(frequencies) != len(amplitudes):
        raise ValueError(
            f"frequencies and amplitudes must have same length, "
            f"got {len(frequencies)} and {len(amplitudes)}"
        )
    t = np.arange(size) / sample_rate
    signal = np.zeros(size)
    for freq, amp in zip(frequencies, amplitudes):
        signal += amp * np.sin(2 * np.pi * freq * t)
    return signal


def generate_sine_wave(size: int, frequency: float, sample_rate: float) -> np.ndarray:
    return generate_multitone(size, sample_rate, [frequency], [1.0])


def generate_test_signal(size: int, kind: str, seed: int = 42) -> np.ndarray:
    """
    Generate a named test signal.

    Args:
        size: Number of samples
        kind: One of SIGNAL_KINDS
        seed: Seed for the 'random' kind

    Returns:
        Real-valued signal of length size
    """
    kind = kind.lower()
    n = np.arange(size)

    if kind == 'impulse':
        signal = np.zeros(size)
        if size > 0:
            signal[0] = 1.0
        return signal
    elif kind == 'dc':
        return np.ones(size)
    elif kind == 'sine':
        return np.sin(2.0 * np.pi * 5 * n / size)
    elif kind == 'cosine':
        return np.cos(2.0 * np.pi * 3 * n / size)
    elif kind == 'mixed':
        return (np.sin(2.0 * np.pi * 5 * n / size)
                + 0.5 * np.cos(2.0 * np.pi * 10 * n / size)
                + 0.25 * np.sin(2.0 * np.pi * 15 * n / size))
    elif kind == 'random':
        return np.random.default_rng(seed).standard_normal(size)
    else:
        raise ValueError(f"Unknown signal type: {kind}")


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 0)."""
    if n <= 1:
        return 1
    return 1 << (int(n) - 1).bit_length()


def zero_pad_to_power_of_two(x: Sequence[float]) -> np.ndarray:
    x = np.asarray(x)
    padded = np.zeros(next_power_of_two(len(x)), dtype=x.dtype)
    padded[:len(x)] = x
    return padded
