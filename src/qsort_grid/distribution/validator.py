"""Distribution validator: scores a layout against the bell-curve rubric.

Starts from 100 and deducts a fixed amount per failed rule, so every
failure shows up as its own issue:

    not symmetric                    -25
    not bell-shaped                  -35
    peak off the center column       -20
    center not above both edges      -20
"""

from __future__ import annotations

import logging
from typing import Sequence

from config.settings import settings
from qsort_grid.distribution.analyzer import analyze
from qsort_grid.distribution.models import ValidationResult

logger = logging.getLogger(__name__)

SYMMETRY_PENALTY = 25
BELL_SHAPE_PENALTY = 35
PEAK_PENALTY = 20
CENTER_EDGE_PENALTY = 20


def validate(counts: Sequence[int], total: int) -> ValidationResult:
    """Validate *counts* as a forced-distribution layout for *total* items."""
    facts = analyze(counts)
    issues: list[str] = []
    score = 100

    if not facts.is_symmetric:
        issues.append("Distribution is not symmetric")
        score -= SYMMETRY_PENALTY

    if not facts.is_bell_shaped:
        issues.append("Distribution does not follow bell curve shape")
        score -= BELL_SHAPE_PENALTY

    if facts.peak_position != facts.center_index:
        issues.append(
            f"Peak is at position {facts.peak_position}, "
            f"should be at center ({facts.center_index})"
        )
        score -= PEAK_PENALTY

    if facts.center_value <= max(facts.edge_values):
        edges = ", ".join(str(v) for v in facts.edge_values)
        issues.append(f"Center value ({facts.center_value}) is not greater than edges ({edges})")
        score -= CENTER_EDGE_PENALTY

    actual = sum(counts)
    if actual != total:
        logger.debug("Distribution sums to %d, expected %d", actual, total)

    return ValidationResult(
        is_valid=not issues,
        score=max(0, score),
        issues=issues,
        facts=facts,
    )


def score_band(score: int) -> str:
    """Classify a score as "good", "fair" or "poor"."""
    if score >= settings.good_score_threshold:
        return "good"
    if score >= settings.fair_score_threshold:
        return "fair"
    return "poor"
