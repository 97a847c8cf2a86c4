"""Tests for report formatter: markdown rendering of layouts and sweeps."""

from qsort_grid.distribution.models import (
    Distribution,
    GridSpec,
    SweepResult,
    Variant,
    VariantComparison,
)
from qsort_grid.distribution.report_formatter import (
    FormattedReport,
    format_comparison_report,
    format_comparison_table,
    format_distribution,
    format_range,
    format_sweep_report,
    format_validation,
    render_bars,
    sweep_rows,
)
from qsort_grid.distribution.validator import validate


def _row(counts, value_range, total, variant=Variant.REFINED):
    d = Distribution(counts)
    return SweepResult(
        spec=GridSpec.symmetric(value_range, total),
        distribution=d,
        validation=validate(d, total),
        variant=variant,
    )


# ===================================================================
# Small formatters
# ===================================================================


class TestFormatRange:
    def test_symmetric(self):
        assert format_range(-3, 3) == "-3 to +3"

    def test_zero_max(self):
        assert format_range(-2, 0) == "-2 to 0"


class TestFormatDistribution:
    def test_list(self):
        assert format_distribution([3, 5, 6, 8, 6, 5, 3]) == "[3, 5, 6, 8, 6, 5, 3]"

    def test_empty(self):
        assert format_distribution([]) == "[]"


class TestRenderBars:
    def test_scaled_to_peak(self):
        lines = render_bars([1, 2, 4], width=4)
        assert lines == ["# 1", "## 2", "#### 4"]

    def test_labels(self):
        lines = render_bars([1, 2, 1], width=2, min_value=-1)
        assert lines == ["-1 | # 1", "+0 | ## 2", "+1 | # 1"]

    def test_all_zero(self):
        assert render_bars([0, 0]) == [" 0", " 0"]

    def test_empty(self):
        assert render_bars([]) == []


class TestComparisonTable:
    def test_basic(self):
        md = format_comparison_table([{"a": 1, "b": 2}], ["a", "b"])
        assert md.splitlines() == ["| a | b |", "| --- | --- |", "| 1 | 2 |"]

    def test_highlight_best(self):
        items = [{"name": "x", "score": 40}, {"name": "y", "score": 100}]
        md = format_comparison_table(items, ["name", "score"], highlight_best="score")
        assert "| **y** | **100** |" in md

    def test_empty(self):
        assert format_comparison_table([], ["a"]) == ""


# ===================================================================
# Validation block
# ===================================================================


class TestFormatValidation:
    def test_valid(self):
        counts = [1, 2, 4, 2, 1]
        md = format_validation(counts, validate(counts, 10), GridSpec(-2, 2, 10))
        assert "### 10 items, -2 to +2" in md
        assert "Valid bell curve" in md
        assert "score 100%, good" in md
        assert "Issues" not in md

    def test_invalid_lists_issues(self):
        counts = [1, 1, 1]
        md = format_validation(counts, validate(counts, 3))
        assert "Invalid distribution" in md
        assert "- Distribution does not follow bell curve shape" in md
        assert "poor" in md


# ===================================================================
# Sweep report
# ===================================================================


class TestSweepReport:
    def test_rows(self):
        rows = sweep_rows([_row([1, 1, 1, 1, 1], 2, 5)])
        assert rows[0]["Range"] == "-2 to +2"
        assert rows[0]["Status"] == "invalid"
        assert rows[0]["Issues"] == "Distribution does not follow bell curve shape"

    def test_report_sections(self):
        results = [_row([2, 5, 6, 5, 2], 2, 20), _row([1, 1, 1, 1, 1, 1, 1], 3, 7)]
        report = format_sweep_report(results)
        assert isinstance(report, FormattedReport)
        assert [s.title for s in report.sections] == ["Summary", "Results"]
        assert report.markdown.startswith("# Grid Distribution Sweep")
        assert "**Total tests**: 2" in report.markdown
        assert "**Valid**: 1" in report.markdown
        assert "**Variant**: refined" in report.markdown
        assert "| -2 to +2 | 20 | [2, 5, 6, 5, 2] | valid | 100 | None |" in report.markdown

    def test_empty_report(self):
        report = format_sweep_report([])
        assert [s.title for s in report.sections] == ["Summary"]
        assert "**Total tests**: 0" in report.markdown

    def test_skipped_specs_listed(self):
        results = [_row([2, 5, 6, 5, 2], 2, 20)]
        report = format_sweep_report(results, skipped=[GridSpec.symmetric(3, 6)])
        assert "**Skipped**: 1 (6 items @ -3 to +3)" in report.markdown

    def test_no_skipped_line_by_default(self):
        report = format_sweep_report([_row([2, 5, 6, 5, 2], 2, 20)])
        assert "Skipped" not in report.markdown


# ===================================================================
# Variant comparison report
# ===================================================================


def _comparison(baseline_counts, refined_counts, value_range, total):
    return VariantComparison(
        spec=GridSpec.symmetric(value_range, total),
        baseline=_row(baseline_counts, value_range, total, Variant.BASELINE),
        refined=_row(refined_counts, value_range, total, Variant.REFINED),
    )


class TestComparisonReport:
    def test_bolds_largest_gain(self):
        comparisons = [
            _comparison([2, 5, 6, 5, 2], [2, 5, 6, 5, 2], 2, 20),
            _comparison([1, 1, 1, 1, 1], [0, 1, 3, 1, 0], 2, 5),
        ]
        report = format_comparison_report(comparisons)
        assert [s.title for s in report.sections] == ["Summary", "Comparison"]
        assert "| -2 to +2 | 20 | 100 | 100 | 0 |" in report.markdown
        assert "| **-2 to +2** | **5** | **25** | **100** | **75** |" in report.markdown
        assert "**Refined better**: 1" in report.markdown
        assert "**Tied**: 1" in report.markdown

    def test_no_bold_when_nothing_improves(self):
        comparisons = [_comparison([2, 5, 6, 5, 2], [2, 5, 6, 5, 2], 2, 20)]
        report = format_comparison_report(comparisons)
        assert "**100**" not in report.markdown

    def test_empty(self):
        report = format_comparison_report([])
        assert [s.title for s in report.sections] == ["Summary"]
        assert "**Grids compared**: 0" in report.markdown
