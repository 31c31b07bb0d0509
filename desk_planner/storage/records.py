"""
Saved-Run Records

Pydantic schemas for named simulation runs kept in the run store:
- RunInputs: the form inputs, absenteeism as a percentage
- SavedRun: name, ISO-8601 timestamp (unique key), inputs and results
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ..config import DefaultInputs
from ..core.errors import InvalidRecordError
from ..simulation.entities import DAYS_PER_WEEK, SimulationConfig, SimulationResult

UNTITLED = "Untitled Simulation"


def utc_timestamp(now: datetime = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _or_default(value, default):
    return default if value is None else value


def default_run_name(employee_count: int, now: datetime = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"Sim {now.date().isoformat()} - {employee_count} Staff"


class RunInputs(BaseModel):
    """
    Inputs that produced a saved run.

    Any field may be absent in a stored record; it is filled from the
    configured defaults when the run is loaded.
    """
    employee_count: Optional[int] = Field(default=None, gt=0)
    days_in_office: Optional[int] = Field(default=None, ge=0, le=DAYS_PER_WEEK)
    absenteeism_percent: Optional[float] = Field(default=None, ge=0, lt=100)
    trial_count: Optional[int] = Field(default=None, gt=0)

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "RunInputs":
        return cls(
            employee_count=config.employee_count,
            days_in_office=config.days_in_office,
            absenteeism_percent=config.absenteeism_percent,
            trial_count=config.trial_count
        )

    def with_defaults(self, defaults: DefaultInputs = None) -> "RunInputs":
        """Copy with every missing field taken from `defaults`."""
        defaults = defaults or DefaultInputs()
        return RunInputs(
            employee_count=_or_default(self.employee_count, defaults.employee_count),
            days_in_office=_or_default(self.days_in_office, defaults.days_in_office),
            absenteeism_percent=_or_default(self.absenteeism_percent, defaults.absenteeism_percent),
            trial_count=_or_default(self.trial_count, defaults.trial_count)
        )

    def to_config(self, defaults: DefaultInputs = None) -> SimulationConfig:
        inputs = self.with_defaults(defaults)
        return SimulationConfig.from_percentage(
            employee_count=inputs.employee_count,
            absenteeism_percent=inputs.absenteeism_percent,
            trial_count=inputs.trial_count,
            days_in_office=inputs.days_in_office
        )


class SavedRun(BaseModel):
    """A named simulation run as kept in the store."""
    name: str = UNTITLED
    timestamp: str = Field(default_factory=utc_timestamp)
    inputs: Optional[RunInputs] = None
    results: dict[str, Any]

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value):
        if value is None or not str(value).strip():
            return UNTITLED
        return str(value).strip()

    @field_validator("timestamp")
    @classmethod
    def _check_timestamp(cls, value: str) -> str:
        try:
            parse_timestamp(value)
        except ValueError as e:
            raise InvalidRecordError(f"Invalid timestamp {value!r}") from e
        return value

    @field_validator("results")
    @classmethod
    def _check_results(cls, value: dict) -> dict:
        # Raises InvalidRecordError when the distribution is absent
        SimulationResult.from_dict(value)
        return value

    @classmethod
    def from_run(
        cls,
        config: SimulationConfig,
        result: SimulationResult,
        name: str = None,
        now: datetime = None
    ) -> "SavedRun":
        now = now or datetime.now(timezone.utc)
        if name is None:
            name = default_run_name(config.employee_count, now)
        return cls(
            name=name,
            timestamp=utc_timestamp(now),
            inputs=RunInputs.from_config(config),
            results=result.to_dict()
        )

    @property
    def saved_at(self) -> datetime:
        return parse_timestamp(self.timestamp)

    def result(self) -> SimulationResult:
        return SimulationResult.from_dict(self.results)

    def resolved_inputs(self, defaults: DefaultInputs = None) -> RunInputs:
        """Stored inputs with each missing field taken from the configured defaults."""
        return (self.inputs or RunInputs()).with_defaults(defaults)
