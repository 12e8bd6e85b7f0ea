"""
Comparator for validating alternate transform implementations against the
generic engine.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from .core.base import Transform
from .core.engine import TransformEngine
from .errors import ShapeMismatch

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-10


@dataclass
class ComparisonReport:
    """Outcome of one comparison."""
    candidate: str
    size: int
    forward: bool
    passed: bool
    max_error: float
    first_index: Optional[int] = None  # complex bin index of first divergence
    stage: Optional[int] = None  # stage index; n_stages means final output
    n_stages: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)


def _first_divergence(expected: np.ndarray, actual: np.ndarray, atol: float):
    """(max_error, first complex index beyond atol or None)."""
    if expected.shape != actual.shape:
        raise ShapeMismatch(
            f"Output shapes differ: expected {expected.shape}, got {actual.shape}"
        )
    error = np.abs(expected - actual)
    max_error = float(error.max()) if error.size else 0.0
    bad = np.flatnonzero(~(error <= atol))
    first = int(bad[0]) // 2 if bad.size else None
    return max_error, first


class ValidationHarness:
    """
    Feed identical inputs to a reference and a candidate and report where
    they diverge.

    Args:
        reference: Baseline implementation (a fresh TransformEngine if None)
        atol: Absolute tolerance per real/imaginary component
    """

    def __init__(self, reference: Optional[TransformEngine] = None, atol: float = DEFAULT_TOLERANCE):
        self.reference = reference if reference is not None else TransformEngine()
        self.atol = atol

    def compare(
        self,
        candidate: Transform,
        real: Sequence[float],
        imaginary: Sequence[float],
        forward: bool = True,
        capture_stages: bool = False
    ) -> ComparisonReport:
        """
        Compare ``candidate`` against the reference on one input.

        With ``capture_stages`` and a candidate that exposes ``trace``, each
        per-stage snapshot is checked against the reference's snapshot of the
        same stage, and the first divergent stage and bin are reported.
        Otherwise only final outputs are compared.
        """
        name = type(candidate).__name__
        n = len(real)

        if capture_stages and hasattr(candidate, 'trace'):
            expected = self.reference.trace(real, imaginary, forward)
            actual = candidate.trace(real, imaginary, forward)
            if len(expected) != len(actual):
                raise ShapeMismatch(
                    f"Stage counts differ: expected {len(expected)}, got {len(actual)}"
                )
        else:
            expected = [self.reference.transform(real, imaginary, forward)]
            actual = [np.asarray(candidate.transform(real, imaginary, forward), dtype=np.float64)]

        n_stages = n.bit_length() - 1
        offset = n_stages if len(expected) == 1 else 0
        report = ComparisonReport(
            candidate=name, size=n, forward=forward, passed=True,
            max_error=0.0, n_stages=n_stages,
        )
        for i, (exp, act) in enumerate(zip(expected, actual)):
            max_error, first = _first_divergence(exp, act, self.atol)
            report.max_error = max(report.max_error, max_error)
            if first is not None and report.passed:
                report.passed = False
                report.first_index = first
                report.stage = i + offset

        if not report.passed:
            logger.warning(
                "%s diverges from reference (N=%d, stage=%s, bin=%s, max_error=%.3e)",
                name, n, report.stage, report.first_index, report.max_error,
            )
        return report

    def sweep(
        self,
        candidate: Transform,
        signals: List[Sequence[complex]],
        forward: bool = True
    ) -> List[ComparisonReport]:
        """Compare on several complex signals; returns one report each."""
        reports = []
        for signal in signals:
            x = np.asarray(signal, dtype=np.complex128)
            reports.append(self.compare(candidate, x.real, x.imag, forward))
        return reports
