"""
Core definitions shared by the simulation engine and its collaborators.
"""

from .errors import (
    DeskPlannerError,
    InvalidConfigurationError,
    InvalidPercentileError,
    EmptyDistributionError,
    SimulationCancelledError,
    InvalidRecordError,
    RecordNotFoundError
)

__all__ = [
    "DeskPlannerError",
    "InvalidConfigurationError",
    "InvalidPercentileError",
    "EmptyDistributionError",
    "SimulationCancelledError",
    "InvalidRecordError",
    "RecordNotFoundError"
]
