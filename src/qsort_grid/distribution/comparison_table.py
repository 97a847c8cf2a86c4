"""DataFrame views of a sweep for side-by-side comparison."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from qsort_grid.distribution.models import SweepResult, VariantComparison


def sweep_to_frame(results: Sequence[SweepResult]) -> pd.DataFrame:
    """One row per sweep result."""
    records = [
        {
            "variant": r.variant.value,
            "range": r.spec.max,
            "min": r.spec.min,
            "max": r.spec.max,
            "total": r.spec.total,
            "columns": r.spec.column_count,
            "distribution": list(r.distribution),
            "is_valid": r.validation.is_valid,
            "score": r.validation.score,
            "issue_count": len(r.validation.issues),
        }
        for r in results
    ]
    columns = [
        "variant", "range", "min", "max", "total", "columns",
        "distribution", "is_valid", "score", "issue_count",
    ]
    return pd.DataFrame(records, columns=columns)


def score_matrix(results: Sequence[SweepResult]) -> pd.DataFrame:
    """Scores pivoted into a range x total grid (ranges as rows)."""
    df = sweep_to_frame(results)
    if df.empty:
        return pd.DataFrame()
    return df.pivot_table(index="range", columns="total", values="score", aggfunc="mean")


def comparison_frame(comparisons: Sequence[VariantComparison]) -> pd.DataFrame:
    """Baseline vs refined score per grid spec."""
    records = [
        {
            "range": c.spec.max,
            "total": c.spec.total,
            "baseline_score": c.baseline.validation.score,
            "refined_score": c.refined.validation.score,
            "delta": c.score_delta,
        }
        for c in comparisons
    ]
    return pd.DataFrame(
        records, columns=["range", "total", "baseline_score", "refined_score", "delta"],
    )
