"""Sweep harness: runs generate -> validate over a grid of ranges and totals.

Used to compare the allocation variants across many grid sizes. The async
sweep yields to the event loop between iterations so an interactive host
stays responsive; ``sweep_sync`` is the same loop for batch use.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Iterator, Sequence

from config.settings import settings
from qsort_grid.distribution.generator import generate
from qsort_grid.distribution.models import (
    GridSpec,
    InvalidSpecError,
    SweepResult,
    SweepSummary,
    Variant,
    VariantComparison,
)
from qsort_grid.distribution.validator import validate

logger = logging.getLogger(__name__)


def _combinations(ranges: Sequence[int], totals: Sequence[int]) -> Iterator[GridSpec]:
    for value_range in ranges:
        for total in totals:
            yield GridSpec.symmetric(value_range, total)


def run_single(spec: GridSpec, variant: Variant | str = Variant.BASELINE) -> SweepResult:
    """Generate and validate one grid.

    Raises:
        InvalidSpecError: If *spec* cannot be laid out.
    """
    variant = Variant.parse(variant)
    distribution = generate(spec, variant)
    validation = validate(distribution, spec.total)
    return SweepResult(spec=spec, distribution=distribution, validation=validation, variant=variant)


def _try_single(
    spec: GridSpec,
    variant: Variant,
    on_skip: Callable[[GridSpec], None] | None = None,
) -> SweepResult | None:
    try:
        return run_single(spec, variant)
    except InvalidSpecError as exc:
        logger.warning("Sweep: skipping %s (%s)", spec, exc)
        if on_skip is not None:
            on_skip(spec)
        return None


async def sweep(
    ranges: Sequence[int],
    totals: Sequence[int],
    variant: Variant | str = Variant.BASELINE,
    *,
    pause_seconds: float | None = None,
    on_result: Callable[[SweepResult], None] | None = None,
    on_skip: Callable[[GridSpec], None] | None = None,
) -> list[SweepResult]:
    """Run every ``(range, total)`` combination, ranges outermost.

    Sleeps *pause_seconds* (default ``settings.sweep_pause_seconds``)
    between iterations. Combinations the generator rejects are logged,
    passed to *on_skip* and left out of the returned rows. Cancelling the
    task stops the sweep at the next yield point.
    """
    variant = Variant.parse(variant)
    pause = settings.sweep_pause_seconds if pause_seconds is None else pause_seconds
    specs = list(_combinations(ranges, totals))
    results: list[SweepResult] = []

    t0 = time.monotonic()
    logger.info("Sweep: %d combinations with the %s variant", len(specs), variant.value)

    for idx, spec in enumerate(specs):
        result = _try_single(spec, variant, on_skip)
        if result is not None:
            results.append(result)
            if on_result is not None:
                on_result(result)
        if idx < len(specs) - 1:
            await asyncio.sleep(pause)

    logger.info(
        "Sweep: %d/%d rows in %d ms",
        len(results), len(specs), int((time.monotonic() - t0) * 1000),
    )
    return results


def sweep_sync(
    ranges: Sequence[int],
    totals: Sequence[int],
    variant: Variant | str = Variant.BASELINE,
    *,
    on_skip: Callable[[GridSpec], None] | None = None,
) -> list[SweepResult]:
    """Same as :func:`sweep` without yield points."""
    variant = Variant.parse(variant)
    results = []
    for spec in _combinations(ranges, totals):
        result = _try_single(spec, variant, on_skip)
        if result is not None:
            results.append(result)
    return results


async def compare_variants(
    ranges: Sequence[int],
    totals: Sequence[int],
    *,
    pause_seconds: float | None = None,
) -> list[VariantComparison]:
    """Sweep baseline and refined over the same grid and pair the rows up."""
    baseline = await sweep(ranges, totals, Variant.BASELINE, pause_seconds=pause_seconds)
    refined = await sweep(ranges, totals, Variant.REFINED, pause_seconds=pause_seconds)

    refined_by_spec = {r.spec: r for r in refined}
    comparisons = []
    for row in baseline:
        other = refined_by_spec.get(row.spec)
        if other is not None:
            comparisons.append(VariantComparison(spec=row.spec, baseline=row, refined=other))
    return comparisons


def summarize_sweep(
    results: Sequence[SweepResult],
    skipped: Sequence[GridSpec] = (),
) -> SweepSummary:
    """Count valid/invalid rows and average the scores, overall and per range.

    *skipped* holds the combinations the sweep rejected; only their count
    is kept.
    """
    if not results:
        return SweepSummary(
            total_runs=0, valid_count=0, invalid_count=0, average_score=0,
            skipped_count=len(skipped),
        )

    valid = sum(1 for r in results if r.validation.is_valid)
    scores = [r.validation.score for r in results]
    average = int(sum(scores) / len(scores) + 0.5)

    per_range: dict[int, list[int]] = {}
    for r in results:
        per_range.setdefault(r.spec.max, []).append(r.validation.score)
    by_range = {k: round(sum(v) / len(v), 1) for k, v in per_range.items()}

    return SweepSummary(
        total_runs=len(results),
        valid_count=valid,
        invalid_count=len(results) - valid,
        average_score=average,
        by_range=by_range,
        skipped_count=len(skipped),
    )
