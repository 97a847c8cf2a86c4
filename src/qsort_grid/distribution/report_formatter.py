"""Report formatter: renders validation results and sweep reports as markdown.

Pure functions for turning grid layouts, verdicts and sweep rows into
markdown blocks and text bar profiles a host UI or terminal can show.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Sequence

from qsort_grid.distribution.models import GridSpec, SweepResult, ValidationResult, VariantComparison
from qsort_grid.distribution.sweep import summarize_sweep
from qsort_grid.distribution.validator import score_band


@dataclass
class ReportSection:
    """A single section within a formatted report."""

    title: str
    content: str  # markdown content
    priority: int  # 1=highest, used for ordering
    section_type: str  # "summary", "table", "profile"


@dataclass
class FormattedReport:
    """A complete formatted markdown report."""

    title: str
    sections: list[ReportSection] = field(default_factory=list)
    generated_at: str = ""  # ISO timestamp
    markdown: str = ""  # full rendered markdown


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Small formatters
# ---------------------------------------------------------------------------


def format_range(min_value: int, max_value: int) -> str:
    """Format a value range, e.g. ``-3 to +3``."""
    sign = "+" if max_value > 0 else ""
    return f"{min_value} to {sign}{max_value}"


def format_distribution(counts: Sequence[int]) -> str:
    return "[" + ", ".join(str(c) for c in counts) + "]"


def render_bars(counts: Sequence[int], width: int = 20, min_value: int | None = None) -> list[str]:
    """One text bar per column, scaled so the largest column fills *width*.

    With *min_value*, each line is labelled with its column value.
    """
    if not counts:
        return []
    peak = max(counts)
    label_width = 0
    if min_value is not None:
        label_width = max(len(f"{min_value + i:+d}") for i in range(len(counts)))

    lines = []
    for i, c in enumerate(counts):
        length = round(c / peak * width) if peak > 0 else 0
        bar = "#" * length
        if min_value is None:
            lines.append(f"{bar} {c}")
        else:
            label = f"{min_value + i:+d}".rjust(label_width)
            lines.append(f"{label} | {bar} {c}")
    return lines


def format_comparison_table(
    items: list[dict],
    columns: list[str],
    highlight_best: str | None = None,
) -> str:
    """Format a list of dicts as a markdown table.

    If *highlight_best* names a column, the row with the highest numeric
    value in that column has its cells wrapped in bold.
    """
    if not items or not columns:
        return ""

    best_idx: int | None = None
    if highlight_best and highlight_best in columns:
        best_val = None
        for i, item in enumerate(items):
            v = item.get(highlight_best)
            if isinstance(v, (int, float)) and (best_val is None or v > best_val):
                best_val = v
                best_idx = i

    header = "| " + " | ".join(columns) + " |"
    separator = "| " + " | ".join("---" for _ in columns) + " |"

    rows: list[str] = []
    for i, item in enumerate(items):
        cells: list[str] = []
        for col in columns:
            cell = str(item.get(col, ""))
            if i == best_idx:
                cell = f"**{cell}**"
            cells.append(cell)
        rows.append("| " + " | ".join(cells) + " |")

    return "\n".join([header, separator] + rows)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_validation(
    counts: Sequence[int],
    result: ValidationResult,
    spec: GridSpec | None = None,
) -> str:
    """Markdown block for one layout: heading, bar profile, status, issues."""
    lines: list[str] = []
    if spec is not None:
        lines.append(f"### {spec.total} items, {format_range(spec.min, spec.max)}")
        lines.append("")

    lines.append("```")
    lines.extend(render_bars(counts, min_value=spec.min if spec is not None else None))
    lines.append("```")
    lines.append("")

    status = "Valid bell curve" if result.is_valid else "Invalid distribution"
    lines.append(f"**Status**: {status} (score {result.score}%, {score_band(result.score)})")

    if result.issues:
        lines.append("")
        lines.append("**Issues**:")
        for issue in result.issues:
            lines.append(f"- {issue}")

    return "\n".join(lines)


def sweep_rows(results: Sequence[SweepResult]) -> list[dict]:
    """One dict per sweep row, keyed by the report's column names."""
    return [
        {
            "Range": format_range(r.spec.min, r.spec.max),
            "Items": r.spec.total,
            "Distribution": format_distribution(r.distribution),
            "Status": "valid" if r.validation.is_valid else "invalid",
            "Score": r.validation.score,
            "Issues": r.validation.issues[0] if r.validation.issues else "None",
        }
        for r in results
    ]


def format_sweep_report(
    results: Sequence[SweepResult],
    title: str = "Grid Distribution Sweep",
    skipped: Sequence[GridSpec] = (),
) -> FormattedReport:
    """Summary counts followed by the per-combination results table."""
    timestamp = _now_iso()
    summary = summarize_sweep(results, skipped)
    sections: list[ReportSection] = []

    variants = sorted({r.variant.value for r in results})
    summary_lines = [
        "### Summary",
        f"- **Variant**: {', '.join(variants) if variants else 'n/a'}",
        f"- **Total tests**: {summary.total_runs}",
        f"- **Valid**: {summary.valid_count}",
        f"- **Invalid**: {summary.invalid_count}",
        f"- **Average score**: {summary.average_score}%",
    ]
    if summary.skipped_count:
        rejected = ", ".join(f"{s.total} items @ {format_range(s.min, s.max)}" for s in skipped)
        summary_lines.append(f"- **Skipped**: {summary.skipped_count} ({rejected})")
    for value_range, avg in sorted(summary.by_range.items()):
        summary_lines.append(f"- **±{value_range}**: {avg}% average")
    sections.append(ReportSection(
        title="Summary",
        content="\n".join(summary_lines),
        priority=1,
        section_type="summary",
    ))

    if results:
        columns = ["Range", "Items", "Distribution", "Status", "Score", "Issues"]
        table_md = format_comparison_table(sweep_rows(results), columns)
        sections.append(ReportSection(
            title="Results",
            content=f"### Results\n\n{table_md}",
            priority=2,
            section_type="table",
        ))

    sections.sort(key=lambda s: s.priority)

    md_parts = [f"# {title}", f"*Generated: {timestamp}*", ""]
    for section in sections:
        md_parts.append(section.content)
        md_parts.append("")

    return FormattedReport(
        title=title,
        sections=sections,
        generated_at=timestamp,
        markdown="\n".join(md_parts),
    )


def format_comparison_report(
    comparisons: Sequence[VariantComparison],
    title: str = "Baseline vs Refined",
) -> FormattedReport:
    """Per-spec scores for both variants; the biggest refined gain is bolded."""
    timestamp = _now_iso()
    deltas = [c.score_delta for c in comparisons]
    improved = sum(1 for d in deltas if d > 0)
    regressed = sum(1 for d in deltas if d < 0)

    sections = [ReportSection(
        title="Summary",
        content="\n".join([
            "### Summary",
            f"- **Grids compared**: {len(comparisons)}",
            f"- **Refined better**: {improved}",
            f"- **Refined worse**: {regressed}",
            f"- **Tied**: {len(comparisons) - improved - regressed}",
        ]),
        priority=1,
        section_type="summary",
    )]

    if comparisons:
        rows = [
            {
                "Range": format_range(c.spec.min, c.spec.max),
                "Items": c.spec.total,
                "Baseline": c.baseline.validation.score,
                "Refined": c.refined.validation.score,
                "Delta": c.score_delta,
            }
            for c in comparisons
        ]
        table_md = format_comparison_table(
            rows,
            ["Range", "Items", "Baseline", "Refined", "Delta"],
            highlight_best="Delta" if improved else None,
        )
        sections.append(ReportSection(
            title="Comparison",
            content=f"### Comparison\n\n{table_md}",
            priority=2,
            section_type="table",
        ))

    md_parts = [f"# {title}", f"*Generated: {timestamp}*", ""]
    for section in sections:
        md_parts.append(section.content)
        md_parts.append("")

    return FormattedReport(
        title=title,
        sections=sections,
        generated_at=timestamp,
        markdown="\n".join(md_parts),
    )
