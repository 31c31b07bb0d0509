"""
Distribution Metrics

This module provides:
- The aggregator folding trial outcomes into a SimulationResult
- Percentile queries over a finished, sorted distribution
- Coverage tables for several percentages at once
"""

from typing import Iterable, Sequence
import math

from ..core.errors import EmptyDistributionError, InvalidPercentileError
from .entities import DAYS_PER_WEEK, SimulationResult, TrialOutcome


P95 = 95


def percentile_index(count: int, percent: float) -> int:
    """Index of the value covering `percent` of `count` sorted trials."""
    index = math.floor(count * percent / 100)
    return max(0, min(index, count - 1))


def percentile(distribution: Sequence[int], percent: float) -> int:
    """
    Desks covering `percent` of simulated scenarios.

    `distribution` must already be sorted ascending; it is never modified.
    """
    if isinstance(percent, bool) or not isinstance(percent, (int, float)):
        raise InvalidPercentileError(percent)
    if math.isnan(percent) or not 0 < percent < 100:
        raise InvalidPercentileError(percent)
    if not distribution:
        raise EmptyDistributionError("No simulated trials to query")

    return distribution[percentile_index(len(distribution), percent)]


def coverage_table(
    result: SimulationResult,
    percents: Iterable[float]
) -> list[tuple[float, int]]:
    """Pair each requested percentage with the desks that cover it."""
    return [(p, result.percentile(p)) for p in percents]


class DistributionAggregator:
    """
    Running fold over trial outcomes.

    Keeps the peak of every trial plus running totals; merging two
    aggregators is order-insensitive, so batches may be folded in any
    order before the single final sort.
    """

    def __init__(self):
        self._peaks: list[int] = []
        self._peak_total = 0
        self._occupancy_total = 0

    @property
    def count(self) -> int:
        return len(self._peaks)

    def add(self, outcome: TrialOutcome) -> None:
        peak = outcome.peak_occupancy
        self._peaks.append(peak)
        self._peak_total += peak
        self._occupancy_total += outcome.total_occupancy

    def extend(self, outcomes: Iterable[TrialOutcome]) -> None:
        for outcome in outcomes:
            self.add(outcome)

    def merge(self, other: "DistributionAggregator") -> "DistributionAggregator":
        """Fold another aggregator's trials into this one."""
        self._peaks.extend(other._peaks)
        self._peak_total += other._peak_total
        self._occupancy_total += other._occupancy_total
        return self

    def finalize(self, expected_count: int = None) -> SimulationResult:
        """Sort the peaks and compute summary statistics."""
        n = self.count
        if n == 0:
            raise EmptyDistributionError("No trials were aggregated")
        if expected_count is not None and n != expected_count:
            raise ValueError(f"Aggregated {n} trials, expected {expected_count}")

        distribution = tuple(sorted(self._peaks))

        return SimulationResult(
            distribution=distribution,
            avg_daily_occupancy=self._occupancy_total / (n * DAYS_PER_WEEK),
            avg_peak=self._peak_total / n,
            max_observed=distribution[-1],
            p95=percentile(distribution, P95)
        )
