"""Tests for the sweep harness."""

from unittest.mock import AsyncMock, patch

import pytest

from qsort_grid.distribution.models import Distribution, GridSpec, SweepResult, Variant
from qsort_grid.distribution.sweep import (
    compare_variants,
    run_single,
    summarize_sweep,
    sweep,
    sweep_sync,
)
from qsort_grid.distribution.validator import validate


def _row(counts, total, value_range=3):
    d = Distribution(counts)
    return SweepResult(
        spec=GridSpec.symmetric(value_range, total),
        distribution=d,
        validation=validate(d, total),
    )


class TestRunSingle:
    def test_row_is_consistent(self):
        row = run_single(GridSpec(-3, 3, 36), "refined")
        assert row.variant is Variant.REFINED
        assert sum(row.distribution) == 36
        assert row.validation.is_valid


class TestSweep:
    @pytest.mark.asyncio
    async def test_refined_two_by_two(self):
        results = await sweep([2, 3], [20, 25], Variant.REFINED, pause_seconds=0)
        assert len(results) == 4
        assert [(r.spec.max, r.spec.total) for r in results] == [(2, 20), (2, 25), (3, 20), (3, 25)]
        for r in results:
            d = list(r.distribution)
            assert sum(d) == r.spec.total
            assert d == d[::-1]
            assert len(d) == r.spec.column_count
            assert r.spec.min == -r.spec.max
            assert r.variant is Variant.REFINED

    @pytest.mark.asyncio
    async def test_yields_between_iterations(self):
        with patch("qsort_grid.distribution.sweep.asyncio.sleep", new=AsyncMock()) as sleep:
            await sweep([2, 3], [20, 25], pause_seconds=0.5)
        assert sleep.await_count == 3
        sleep.assert_awaited_with(0.5)

    @pytest.mark.asyncio
    async def test_default_pause_from_settings(self):
        with patch("qsort_grid.distribution.sweep.settings") as mock_settings, \
                patch("qsort_grid.distribution.sweep.asyncio.sleep", new=AsyncMock()) as sleep:
            mock_settings.sweep_pause_seconds = 0.25
            await sweep([2], [20, 25])
        sleep.assert_awaited_once_with(0.25)

    @pytest.mark.asyncio
    async def test_on_result_callback(self):
        seen = []
        results = await sweep([2], [20, 25, 30], pause_seconds=0, on_result=seen.append)
        assert seen == results

    @pytest.mark.asyncio
    async def test_skips_rejected_combinations(self, caplog):
        with caplog.at_level("WARNING"):
            results = await sweep([2, 3], [6, 20], pause_seconds=0)
        # 6 items cannot fill 7 columns
        assert [(r.spec.max, r.spec.total) for r in results] == [(2, 6), (2, 20), (3, 20)]
        assert "skipping" in caplog.text

    @pytest.mark.asyncio
    async def test_on_skip_receives_rejected_specs(self):
        skipped = []
        results = await sweep([2, 3], [6, 20], pause_seconds=0, on_skip=skipped.append)
        assert skipped == [GridSpec(-3, 3, 6)]
        assert len(results) + len(skipped) == 4

    def test_sync_on_skip(self):
        skipped = []
        sweep_sync([3], [6, 20], on_skip=skipped.append)
        assert skipped == [GridSpec(-3, 3, 6)]

    @pytest.mark.asyncio
    async def test_empty_inputs(self):
        assert await sweep([], [20]) == []

    @pytest.mark.asyncio
    async def test_matches_sync(self):
        async_rows = await sweep([2, 3, 4], [20, 30], "baseline", pause_seconds=0)
        sync_rows = sweep_sync([2, 3, 4], [20, 30], "baseline")
        assert async_rows == sync_rows


class TestCompareVariants:
    @pytest.mark.asyncio
    async def test_pairs_rows(self):
        comparisons = await compare_variants([2, 3], [20, 36], pause_seconds=0)
        assert len(comparisons) == 4
        for c in comparisons:
            assert c.baseline.variant is Variant.BASELINE
            assert c.refined.variant is Variant.REFINED
            assert c.baseline.spec == c.refined.spec == c.spec
            assert c.score_delta == c.refined.validation.score - c.baseline.validation.score


class TestSummarizeSweep:
    def test_counts_and_average(self):
        rows = [
            _row([1, 2, 4, 8, 4, 2, 1], 22),
            _row([1, 1, 1, 1, 1, 1, 1], 7),
            _row([1, 2, 4, 2, 1], 10, value_range=2),
        ]
        summary = summarize_sweep(rows)
        assert summary.total_runs == 3
        assert summary.valid_count == 2
        assert summary.invalid_count == 1
        assert summary.average_score == 75  # (100 + 25 + 100) / 3
        assert summary.by_range == {3: 62.5, 2: 100.0}
        assert summary.skipped_count == 0

    def test_counts_skipped(self):
        rows = [_row([1, 2, 4, 8, 4, 2, 1], 22)]
        summary = summarize_sweep(rows, skipped=[GridSpec(-3, 3, 6), GridSpec(-4, 4, 7)])
        assert summary.total_runs == 1
        assert summary.skipped_count == 2

    def test_empty(self):
        summary = summarize_sweep([])
        assert summary.total_runs == 0
        assert summary.average_score == 0
        assert summary.by_range == {}
        assert summary.skipped_count == 0
