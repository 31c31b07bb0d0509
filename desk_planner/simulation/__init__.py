"""
Desk Demand Simulation

Purpose: estimate how many desks an office needs under a hybrid work
policy by sampling random weekly attendance many times.

Model:
- Each employee is scheduled on `days_in_office` distinct weekdays,
  chosen uniformly at random
- On each scheduled day the employee shows up with probability
  1 - absenteeism_rate, drawn independently of the schedule
- A trial's peak occupancy is its busiest day; the distribution of peaks
  across trials drives the desk recommendation

It does not choose schedules and makes no closed-form estimate.
"""

from .entities import (
    Weekday,
    WEEKDAYS,
    DAYS_PER_WEEK,
    SimulationConfig,
    TrialOutcome,
    ProgressSnapshot,
    SimulationResult
)
from .sampler import sample_days
from .progress import ProgressTracker
from .metrics import (
    DistributionAggregator,
    percentile,
    coverage_table
)
from .simulator import (
    Simulator,
    CancellationToken,
    run_trial,
    run,
    run_sync
)

__all__ = [
    "Weekday",
    "WEEKDAYS",
    "DAYS_PER_WEEK",
    "SimulationConfig",
    "TrialOutcome",
    "ProgressSnapshot",
    "SimulationResult",
    "sample_days",
    "ProgressTracker",
    "DistributionAggregator",
    "percentile",
    "coverage_table",
    "Simulator",
    "CancellationToken",
    "run_trial",
    "run",
    "run_sync"
]
