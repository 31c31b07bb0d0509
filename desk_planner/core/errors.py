"""
Error taxonomy

- Invalid configuration: rejected before any trial executes
- Invalid percentile request: rejected at the query boundary
- Empty distribution: query made before any run completed
- Cancellation: run stopped at a batch boundary, partial results dropped
- Persistence: malformed or missing saved-run records
"""


class DeskPlannerError(Exception):
    """Base class for all desk planner errors."""


class InvalidConfigurationError(DeskPlannerError, ValueError):
    """Simulation configuration failed validation."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Invalid simulation config: {self.errors}")


class InvalidPercentileError(DeskPlannerError, ValueError):
    """Percentile outside the open interval (0, 100)."""

    def __init__(self, percent):
        self.percent = percent
        super().__init__(
            f"Percentile must be strictly between 0 and 100, got {percent!r}"
        )


class EmptyDistributionError(DeskPlannerError, LookupError):
    """A percentile or aggregate was requested with no simulated trials."""


class SimulationCancelledError(DeskPlannerError):
    """The run was cancelled; no partial result is returned."""

    def __init__(self, completed: int, total: int):
        self.completed = completed
        self.total = total
        super().__init__(f"Simulation cancelled after {completed}/{total} trials")


class InvalidRecordError(DeskPlannerError, ValueError):
    """A saved-run record cannot be loaded."""


class RecordNotFoundError(DeskPlannerError, KeyError):
    """No saved run exists for the given timestamp."""
