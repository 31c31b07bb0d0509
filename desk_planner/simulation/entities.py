"""
Simulation Entities

Defines the values exchanged by the simulation engine:
- The fixed five-day work week
- Run configuration (validated, immutable)
- Per-trial outcomes
- Progress snapshots reported between batches
- The final result with its sorted peak-occupancy distribution
"""

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional

from ..core.errors import EmptyDistributionError, InvalidConfigurationError, InvalidRecordError


class Weekday(IntEnum):
    """Working days, indexed from Monday."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4


WEEKDAYS = tuple(Weekday)
DAYS_PER_WEEK = len(WEEKDAYS)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class SimulationConfig:
    """
    Inputs for one simulation run.

    - employee_count: headcount assigned to the office
    - absenteeism_rate: probability a scheduled employee does not show up
    - trial_count: number of independent simulated weeks
    - days_in_office: scheduled in-office days per employee per week
    """
    employee_count: int
    absenteeism_rate: float
    trial_count: int
    days_in_office: int

    def __post_init__(self):
        is_valid, errors = self.validate()
        if not is_valid:
            raise InvalidConfigurationError(errors)

    def validate(self) -> tuple[bool, list[str]]:
        errors = []

        if not _is_int(self.employee_count) or self.employee_count <= 0:
            errors.append(f"employee_count must be a positive integer, got {self.employee_count!r}")

        if not _is_int(self.trial_count) or self.trial_count <= 0:
            errors.append(f"trial_count must be a positive integer, got {self.trial_count!r}")

        if not _is_int(self.days_in_office) or not 0 <= self.days_in_office <= DAYS_PER_WEEK:
            errors.append(
                f"days_in_office must be an integer in [0, {DAYS_PER_WEEK}], got {self.days_in_office!r}"
            )

        rate = self.absenteeism_rate
        if isinstance(rate, bool) or not isinstance(rate, (int, float)) or not 0 <= rate < 1:
            errors.append(f"absenteeism_rate must be in [0, 1), got {rate!r}")

        return (len(errors) == 0, errors)

    @classmethod
    def from_percentage(
        cls,
        employee_count: int,
        absenteeism_percent: float,
        trial_count: int,
        days_in_office: int
    ) -> "SimulationConfig":
        """Build a config with absenteeism given as a percentage in [0, 100)."""
        if isinstance(absenteeism_percent, bool) or not isinstance(absenteeism_percent, (int, float)):
            raise InvalidConfigurationError(
                [f"absenteeism_percent must be a number, got {absenteeism_percent!r}"]
            )
        return cls(
            employee_count=employee_count,
            absenteeism_rate=absenteeism_percent / 100,
            trial_count=trial_count,
            days_in_office=days_in_office
        )

    @property
    def absenteeism_percent(self) -> float:
        return round(self.absenteeism_rate * 100, 10)


@dataclass(frozen=True)
class TrialOutcome:
    """Occupancy counts for one simulated week, Monday first."""
    daily_counts: tuple

    @property
    def total_occupancy(self) -> int:
        return sum(self.daily_counts)

    @property
    def peak_occupancy(self) -> int:
        return max(self.daily_counts)

    @property
    def average_daily_occupancy(self) -> float:
        return self.total_occupancy / DAYS_PER_WEEK


@dataclass(frozen=True)
class ProgressSnapshot:
    """
    Progress of a running simulation, reported after each batch.

    estimated_remaining_ms is None until at least one trial has completed.
    """
    completed: int
    total: int
    elapsed_ms: float = 0.0
    estimated_remaining_ms: Optional[float] = None

    @property
    def fraction_complete(self) -> float:
        if self.total <= 0:
            return 0.0
        return min(self.completed / self.total, 1.0)

    @property
    def is_complete(self) -> bool:
        return self.completed >= self.total


@dataclass(frozen=True)
class SimulationResult:
    """
    Results of a simulation run.

    The distribution holds one peak-occupancy value per trial, sorted
    ascending, and is never empty. The engine keeps no reference once the
    result is returned.
    """
    distribution: tuple
    avg_daily_occupancy: float = 0.0
    avg_peak: float = 0.0
    max_observed: int = 0
    p95: int = 0

    def __post_init__(self):
        if not self.distribution:
            raise EmptyDistributionError("A simulation result needs at least one trial")

    @property
    def trial_count(self) -> int:
        return len(self.distribution)

    def percentile(self, percent: float) -> int:
        """Desks that cover the given percentage of simulated scenarios."""
        from .metrics import percentile

        return percentile(self.distribution, percent)

    def histogram(self) -> dict[int, int]:
        """Count of trials per peak value, zero-filled from min to max."""
        counts = Counter(self.distribution)
        return {
            value: counts.get(value, 0)
            for value in range(self.distribution[0], self.distribution[-1] + 1)
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "distribution": list(self.distribution),
            "avg_daily_occupancy": self.avg_daily_occupancy,
            "avg_peak": self.avg_peak,
            "max_observed": self.max_observed,
            "p95": self.p95
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SimulationResult":
        """
        Rebuild a result from its serialized form.

        A record without a distribution cannot serve percentile queries
        and is rejected. max_observed and p95 are always recomputed from
        the sorted distribution; stored values are ignored.
        """
        if not isinstance(data, dict):
            raise InvalidRecordError(f"Result must be a mapping, got {type(data).__name__}")

        raw = data.get("distribution")
        if not raw:
            raise InvalidRecordError("Result has no distribution")
        if not isinstance(raw, (list, tuple)) or not all(_is_int(v) and v >= 0 for v in raw):
            raise InvalidRecordError("Distribution must be a list of non-negative integers")
        distribution = tuple(sorted(raw))

        missing = [k for k in ("avg_daily_occupancy", "avg_peak") if data.get(k) is None]
        if missing:
            raise InvalidRecordError(f"Result is missing fields: {missing}")

        try:
            avg_daily_occupancy = float(data["avg_daily_occupancy"])
            avg_peak = float(data["avg_peak"])
        except (TypeError, ValueError) as e:
            raise InvalidRecordError(f"Result averages must be numbers: {e}") from e

        from .metrics import percentile

        return cls(
            distribution=distribution,
            avg_daily_occupancy=avg_daily_occupancy,
            avg_peak=avg_peak,
            max_observed=distribution[-1],
            p95=percentile(distribution, 95)
        )
