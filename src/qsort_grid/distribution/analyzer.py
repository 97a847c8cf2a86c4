"""Distribution analyzer: structural facts about a sequence of slot counts.

Pure functions. Works on any sequence of ints, including hand-built or
pathological ones; judging them is the validator's job.
"""

from __future__ import annotations

import statistics
from typing import Sequence

from qsort_grid.distribution.models import AnalysisFacts


def is_symmetric(counts: Sequence[int]) -> bool:
    n = len(counts)
    return all(counts[i] == counts[n - 1 - i] for i in range(n // 2))


def is_bell_shaped(counts: Sequence[int]) -> bool:
    """Non-decreasing up to the center, non-increasing after it, center above both edges.

    A plateau at the center is fine as long as it still beats the edges.
    """
    n = len(counts)
    if n == 0:
        return False
    center = n // 2

    for i in range(center):
        if counts[i] > counts[i + 1]:
            return False
    for i in range(center, n - 1):
        if counts[i] < counts[i + 1]:
            return False

    return counts[center] > max(counts[0], counts[-1])


def peak_position(counts: Sequence[int]) -> int:
    """Index of the first maximum (lowest index wins ties)."""
    if not counts:
        return 0
    peak = max(counts)
    for i, c in enumerate(counts):
        if c == peak:
            return i
    return 0


def population_variance(counts: Sequence[int]) -> float:
    if not counts:
        return 0.0
    return float(statistics.pvariance(counts))


def analyze(counts: Sequence[int]) -> AnalysisFacts:
    """Compute symmetry, bell shape, peak and variance for *counts*."""
    counts = list(counts)
    n = len(counts)
    center_index = n // 2

    if n == 0:
        return AnalysisFacts(
            center_index=0,
            center_value=0,
            edge_values=[0, 0],
            is_symmetric=True,
            is_bell_shaped=False,
            peak_position=0,
            variance=0.0,
        )

    return AnalysisFacts(
        center_index=center_index,
        center_value=counts[center_index],
        edge_values=[counts[0], counts[-1]],
        is_symmetric=is_symmetric(counts),
        is_bell_shaped=is_bell_shaped(counts),
        peak_position=peak_position(counts),
        variance=population_variance(counts),
    )
