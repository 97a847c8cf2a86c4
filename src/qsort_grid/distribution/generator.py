"""Forced-distribution generator: turns a grid spec into per-column slot counts.

Pure functions. A Gaussian kernel centered on the middle column gives each
column a continuous weight; the weights are mirrored, normalized and then
apportioned into integers that sum exactly to the requested total.

Every allocation step works on mirrored pairs (and the single center column
of an odd grid), so the output is symmetric by construction.
"""

from __future__ import annotations

import logging
import math

from qsort_grid.distribution.models import Distribution, GridSpec, InvalidSpecError, Variant

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Continuous weights
# ---------------------------------------------------------------------------


def gaussian_weights(column_count: int, sigma: float) -> list[float]:
    """Gaussian kernel centered at ``(column_count - 1) / 2``."""
    center = (column_count - 1) / 2
    return [math.exp(-0.5 * ((i - center) / sigma) ** 2) for i in range(column_count)]


def smooth_interior(weights: list[float]) -> list[float]:
    """One left-to-right pass of 0.15/0.7/0.15 smoothing over interior columns.

    The pass runs in place, so each column sees its already smoothed left
    neighbour. The mirror pass that follows removes the resulting skew.
    """
    smoothed = list(weights)
    for i in range(1, len(smoothed) - 1):
        smoothed[i] = 0.15 * smoothed[i - 1] + 0.7 * smoothed[i] + 0.15 * smoothed[i + 1]
    return smoothed


def mirror_average(weights: list[float]) -> list[float]:
    """Replace each pair ``(i, n-1-i)`` with its mean."""
    n = len(weights)
    mirrored = list(weights)
    for i in range(n // 2):
        avg = (mirrored[i] + mirrored[n - 1 - i]) / 2
        mirrored[i] = avg
        mirrored[n - 1 - i] = avg
    return mirrored


def normalize(weights: list[float]) -> list[float]:
    total = sum(weights)
    return [w / total for w in weights]


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


# ---------------------------------------------------------------------------
# Symmetric integer adjustments
# ---------------------------------------------------------------------------


def _give_to_middle(cells: list[int], amount: int) -> None:
    """Add *amount* to the center column, or split it over the central pair."""
    n = len(cells)
    mid = n // 2
    if n % 2 == 1:
        cells[mid] += amount
    else:
        cells[mid - 1] += amount // 2
        cells[mid] += amount // 2


def _trim_excess(
    cells: list[int],
    excess: int,
    *,
    center_first: bool = True,
    first_pair: int = 0,
) -> None:
    """Remove *excess* slots without breaking mirror symmetry.

    With *center_first*, the center of an odd grid gives up slots while it
    stays above its neighbours. Then mirrored pairs lose one slot each,
    largest pair first (innermost on ties), never below 1. Pairs whose left
    index is below *first_pair* are only used once the others are at 1.
    The center absorbs whatever is left, clamped at 0.
    """
    n = len(cells)
    mid = n // 2
    odd = n % 2 == 1

    if odd and center_first and n > 1 and excess > 0:
        floor = max(cells[mid - 1], cells[mid + 1]) + 1
        take = min(excess, max(0, cells[mid] - floor))
        cells[mid] -= take
        excess -= take

    while excess >= 2:
        pairs = [i for i in range(mid) if cells[i] > 1]
        preferred = [i for i in pairs if i >= first_pair] or pairs
        if not preferred:
            break
        i = max(preferred, key=lambda k: (cells[k], k))
        cells[i] -= 1
        cells[n - 1 - i] -= 1
        excess -= 2

    if excess > 0 and odd:
        take = min(excess, cells[mid])
        cells[mid] -= take
        excess -= take

    if excess > 0:
        # Unreachable for a spec that passed GridSpec.check().
        logger.warning("Could not trim %d excess slot(s) from %s", excess, cells)


def _fix_total(cells: list[int], total: int) -> None:
    leftover = total - sum(cells)
    if leftover > 0:
        _give_to_middle(cells, leftover)
    elif leftover < 0:
        _trim_excess(cells, -leftover)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


def _baseline(column_count: int, total: int) -> list[int]:
    sigma = column_count / 3.5
    proportions = normalize(mirror_average(gaussian_weights(column_count, sigma)))

    cells = [max(1, _round_half_up(total * p)) for p in proportions]
    _fix_total(cells, total)
    return cells


def _allocate_largest_remainder(proportions: list[float], total: int) -> list[int]:
    """Floor each share (min 1), then hand out the rest by largest remainder.

    Units are mirrored pairs (cost 2) and, on odd grids, the center (cost 1).
    A pair that no longer fits in what remains is skipped; the ranking
    cycles until everything is placed.
    """
    n = len(proportions)
    mid = n // 2
    cells = [max(1, math.floor(total * p)) for p in proportions]
    remaining = total - sum(cells)

    if remaining < 0:
        _trim_excess(cells, -remaining)
        return cells
    if remaining == 0:
        return cells

    units: list[tuple[float, int, int]] = []  # (remainder, closeness to center, left index)
    for i in range(mid):
        units.append((total * proportions[i] - cells[i], i, i))
    if n % 2 == 1:
        units.append((total * proportions[mid] - cells[mid], mid, mid))
    units.sort(key=lambda u: (-u[0], -u[1]))

    while remaining > 0:
        for _, _, i in units:
            if remaining == 0:
                break
            mirror = n - 1 - i
            if mirror == i:
                cells[i] += 1
                remaining -= 1
            elif remaining >= 2:
                cells[i] += 1
                cells[mirror] += 1
                remaining -= 2
    return cells


def _repair_bell(cells: list[int], total: int) -> None:
    """Push slots toward the center when it is not above the edge average."""
    n = len(cells)
    mid = n // 2
    center = cells[mid]
    edge_avg = (cells[0] + cells[-1]) / 2
    if n <= 3 or center > edge_avg:
        return

    deficit = math.ceil(1.5 * (edge_avg - center)) + 2
    if n % 2 == 1:
        cells[mid] += deficit
    else:
        cells[mid - 1] += deficit
        cells[mid] += deficit

    per_edge = math.ceil(deficit / 2)
    cells[0] = max(1, cells[0] - per_edge)
    cells[-1] = max(1, cells[-1] - per_edge)

    diff = total - sum(cells)
    if diff > 0:
        _give_to_middle(cells, diff)
    elif diff < 0:
        _trim_excess(cells, -diff, center_first=False, first_pair=n // 3)

    logger.debug("Bell repair moved %d slot(s) to the center: %s", deficit, cells)


def _refined(column_count: int, total: int) -> list[int]:
    sigma = column_count / 4 if column_count <= 7 else column_count / 3.2
    weights = mirror_average(smooth_interior(gaussian_weights(column_count, sigma)))
    proportions = normalize(weights)

    min_edge = 1 / total
    proportions[0] = max(proportions[0], min_edge)
    proportions[-1] = max(proportions[-1], min_edge)
    proportions = normalize(proportions)

    cells = _allocate_largest_remainder(proportions, total)
    _repair_bell(cells, total)

    mid = column_count // 2
    if column_count > 3 and cells[mid] <= max(cells[0], cells[-1]):
        logger.warning(
            "Refined layout for %d columns / %d items is still not bell-shaped: %s",
            column_count, total, cells,
        )
    return cells


def _flat(column_count: int, total: int) -> list[int]:
    """Equal slots per column, the remainder in a centered block."""
    base, remainder = divmod(total, column_count)
    cells = [base] * column_count
    if remainder == 0:
        return cells

    # A centered block has the parity of the column count; when the
    # remainder does not, widen it by one and leave the center out.
    width = remainder if (column_count - remainder) % 2 == 0 else remainder + 1
    start = (column_count - width) // 2
    skip = column_count // 2 if width != remainder else None
    for i in range(start, start + width):
        if i != skip:
            cells[i] += 1
    return cells


_ALLOCATORS = {
    Variant.BASELINE: _baseline,
    Variant.REFINED: _refined,
    Variant.FLAT: _flat,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def generate(spec: GridSpec, variant: Variant | str = Variant.BASELINE) -> Distribution:
    """Generate the slot counts for *spec* with the chosen *variant*.

    The result always sums to ``spec.total``, is mirror-symmetric and has no
    negative counts.

    Raises:
        InvalidSpecError: If the spec is out of range (see GridSpec.check).
        ValueError: If *variant* is not a known variant name.
    """
    variant = Variant.parse(variant)
    spec = spec.check()

    if spec.column_count == 1:
        logger.warning(
            "Grid %d..%d has a single column; returning all %d items there",
            spec.min, spec.max, spec.total,
        )
        return Distribution([spec.total], degenerate=True)

    cells = _ALLOCATORS[variant](spec.column_count, spec.total)
    if sum(cells) != spec.total or min(cells) < 0:
        raise InvalidSpecError(f"could not lay out {spec} with the {variant.value} variant: {cells}")

    logger.debug("Generated %s layout for %s: %s", variant.value, spec, cells)
    return Distribution(cells)
