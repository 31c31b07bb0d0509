import random

import pytest

from desk_planner.config import Settings, EngineConfig, StorageConfig, DefaultInputs
from desk_planner.simulation import SimulationConfig


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        engine=EngineConfig(chunk_size=500, eta_window=0, random_seed=None),
        storage=StorageConfig(path=str(tmp_path / "runs.json")),
        defaults=DefaultInputs()
    )


@pytest.fixture
def small_config():
    return SimulationConfig(
        employee_count=40,
        absenteeism_rate=0.15,
        trial_count=300,
        days_in_office=3
    )


class FakeClock:
    """Advances by a fixed step on every reading."""

    def __init__(self, step: float = 1.0):
        self.step = step
        self.now = 0.0

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def fake_clock():
    return FakeClock()
