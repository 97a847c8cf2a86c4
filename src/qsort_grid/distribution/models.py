"""Value types shared by the grid generator, analyzer, validator and sweep.

Everything here is a plain value: specs are frozen, distributions are
tuples, and results are rebuilt from scratch on every call.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class InvalidSpecError(ValueError):
    """Raised when a grid spec cannot produce a valid forced distribution."""


class Variant(str, Enum):
    """Allocation algorithm used to turn a grid spec into slot counts."""

    BASELINE = "baseline"
    REFINED = "refined"
    FLAT = "flat"

    @classmethod
    def parse(cls, value: Variant | str) -> Variant:
        """Accept a Variant, its value, or the legacy names "current"/"improved"."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = _VARIANT_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(v.value for v in cls)
            raise ValueError(f"Unknown variant {value!r}; expected one of: {choices}") from None


_VARIANT_ALIASES = {
    "current": "baseline",
    "improved": "refined",
}


def _as_int(name: str, value) -> int:
    if isinstance(value, bool):
        raise InvalidSpecError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    raise InvalidSpecError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class GridSpec:
    """Inputs to generation: the value range ``min..max`` and the item count."""

    min: int
    max: int
    total: int

    @classmethod
    def symmetric(cls, value_range: int, total: int) -> GridSpec:
        """Grid running from ``-value_range`` to ``+value_range``."""
        return cls(min=-value_range, max=value_range, total=total)

    @property
    def column_count(self) -> int:
        return self.max - self.min + 1

    @property
    def values(self) -> list[int]:
        return list(range(self.min, self.max + 1))

    def check(self) -> GridSpec:
        """Return a normalized copy of the spec, or raise InvalidSpecError.

        Integral floats are coerced to ints. ``min == max`` passes; the
        generator short-circuits that single-column case itself.
        """
        lo = _as_int("min", self.min)
        hi = _as_int("max", self.max)
        total = _as_int("total", self.total)

        if lo > hi:
            raise InvalidSpecError(f"min ({lo}) must not exceed max ({hi})")
        if total <= 0:
            raise InvalidSpecError(f"total must be positive, got {total}")

        columns = hi - lo + 1
        if total < columns:
            raise InvalidSpecError(
                f"total ({total}) is smaller than the column count ({columns}); "
                f"every column needs at least one slot"
            )
        if columns % 2 == 0 and total % 2 == 1:
            raise InvalidSpecError(
                f"an even column count ({columns}) cannot hold an odd total ({total}) symmetrically"
            )
        return GridSpec(min=lo, max=hi, total=total)


class Distribution(tuple):
    """Slot counts per column; index ``i`` holds the count for value ``min + i``.

    A tuple, so it is immutable and indexes, sums and compares like one.
    ``degenerate`` is set when the grid had a single column and no bell
    shape was possible; like the counts, it cannot be reassigned.
    """

    def __new__(cls, counts: Iterable[int], degenerate: bool = False) -> Distribution:
        obj = super().__new__(cls, (int(c) for c in counts))
        obj.__dict__["_degenerate"] = bool(degenerate)
        return obj

    @property
    def degenerate(self) -> bool:
        return self._degenerate

    def __setattr__(self, name: str, value) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        flag = ", degenerate=True" if self.degenerate else ""
        return f"Distribution({list(self)!r}{flag})"

    def columns(self, min_value: int) -> list[tuple[int, int]]:
        """Pair each count with its column value, starting at *min_value*."""
        return [(min_value + i, count) for i, count in enumerate(self)]


@dataclass
class AnalysisFacts:
    """Structural facts about a distribution."""

    center_index: int
    center_value: int
    edge_values: list[int]  # [first, last]
    is_symmetric: bool
    is_bell_shaped: bool
    peak_position: int  # index of the first maximum
    variance: float  # population variance


@dataclass
class ValidationResult:
    """Verdict of the bell-curve rubric."""

    is_valid: bool
    score: int  # 0-100
    issues: list[str] = field(default_factory=list)
    facts: AnalysisFacts | None = None


@dataclass
class SweepResult:
    """One row of a sweep: spec, generated distribution and its verdict."""

    spec: GridSpec
    distribution: Distribution
    validation: ValidationResult
    variant: Variant = Variant.BASELINE


@dataclass
class SweepSummary:
    """Aggregate statistics for a sweep report."""

    total_runs: int
    valid_count: int
    invalid_count: int
    average_score: int
    by_range: dict[int, float] = field(default_factory=dict)  # range -> mean score
    skipped_count: int = 0  # combinations rejected before generation


@dataclass
class VariantComparison:
    """Baseline and refined rows for the same grid spec."""

    spec: GridSpec
    baseline: SweepResult
    refined: SweepResult

    @property
    def score_delta(self) -> int:
        return self.refined.validation.score - self.baseline.validation.score
