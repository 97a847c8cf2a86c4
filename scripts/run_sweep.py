"""Run a grid distribution sweep (or a single grid) and print the report."""

import argparse
import asyncio
import logging

from config.settings import settings
from qsort_grid.distribution.comparison_table import comparison_frame, score_matrix
from qsort_grid.distribution.models import GridSpec, InvalidSpecError, Variant
from qsort_grid.distribution.report_formatter import (
    format_comparison_report,
    format_sweep_report,
    format_validation,
)
from qsort_grid.distribution.sweep import compare_variants, run_single, sweep


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--variant", default=settings.default_variant,
                        choices=[v.value for v in Variant] + ["current", "improved"])
    parser.add_argument("--single", action="store_true",
                        help="validate one grid instead of sweeping")
    parser.add_argument("--range", dest="value_range", type=int, default=settings.default_range)
    parser.add_argument("--total", type=int, default=settings.default_total)
    parser.add_argument("--ranges", type=int, nargs="+", default=settings.sweep_ranges)
    parser.add_argument("--totals", type=int, nargs="+", default=settings.sweep_totals)
    parser.add_argument("--compare", action="store_true",
                        help="sweep baseline and refined side by side")
    return parser.parse_args(argv)


async def main(argv=None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=settings.log_level)

    too_big = [t for t in ([args.total] if args.single else args.totals) if t > settings.max_cells]
    if too_big:
        raise SystemExit(f"totals above the {settings.max_cells}-cell limit: {too_big}")

    if args.single:
        spec = GridSpec.symmetric(args.value_range, args.total)
        try:
            result = run_single(spec, args.variant)
        except InvalidSpecError as exc:
            raise SystemExit(f"invalid grid: {exc}") from exc
        print(format_validation(result.distribution, result.validation, spec))
        return

    if args.compare:
        comparisons = await compare_variants(args.ranges, args.totals, pause_seconds=0)
        print(format_comparison_report(comparisons).markdown)
        print(comparison_frame(comparisons).to_string(index=False))
        return

    skipped: list[GridSpec] = []
    results = await sweep(
        args.ranges, args.totals, args.variant, pause_seconds=0, on_skip=skipped.append,
    )
    print(format_sweep_report(results, skipped=skipped).markdown)
    print(score_matrix(results).to_string())


if __name__ == "__main__":
    asyncio.run(main())
