"""
Simulation Engine

This module implements the simulation engine that:
- Runs one simulated week across all employees (trial runner)
- Drives many trials in fixed-size batches on the asyncio event loop,
  yielding after each batch so the host stays responsive
- Reports progress with a time-remaining estimate
- Supports cancellation at batch boundaries
"""

from typing import Any, Awaitable, Callable, Optional, Union
import asyncio
import inspect
import logging
import random
import time

from ..config import Settings, get_settings
from ..core.errors import SimulationCancelledError
from .entities import (
    DAYS_PER_WEEK,
    ProgressSnapshot,
    SimulationConfig,
    SimulationResult,
    TrialOutcome
)
from .metrics import DistributionAggregator
from .progress import ProgressTracker
from .sampler import sample_days

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressSnapshot], Union[None, Awaitable[None]]]


def run_trial(config: SimulationConfig, rng: random.Random) -> TrialOutcome:
    """
    Simulate one work week.

    Each employee is first scheduled on their days, then shows up on each
    scheduled day independently with probability 1 - absenteeism_rate.
    """
    counts = [0] * DAYS_PER_WEEK
    absenteeism = config.absenteeism_rate
    days_in_office = config.days_in_office

    for _ in range(config.employee_count):
        for day in sample_days(days_in_office, rng):
            if rng.random() >= absenteeism:
                counts[day] += 1

    return TrialOutcome(daily_counts=tuple(counts))


class CancellationToken:
    """Flag checked by the scheduler at every batch boundary."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class Simulator:
    """
    Chunked trial scheduler.

    Runs config.trial_count trials in batches of chunk_size, emitting a
    ProgressSnapshot and yielding to the event loop after each batch.
    """

    def __init__(
        self,
        config: SimulationConfig,
        chunk_size: int = None,
        rng: random.Random = None,
        seed: Optional[int] = None,
        eta_window: int = None,
        settings: Settings = None,
        clock: Callable[[], float] = time.perf_counter
    ):
        settings = settings or get_settings()
        engine = settings.engine

        self.config = config
        self.chunk_size = chunk_size if chunk_size is not None else engine.chunk_size
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        self.eta_window = eta_window if eta_window is not None else engine.eta_window

        if rng is None:
            rng = random.Random(seed if seed is not None else engine.random_seed)
        self.rng = rng
        self._clock = clock

    def run_batch(self, size: int) -> list[TrialOutcome]:
        """Run `size` trials back to back without yielding."""
        return [run_trial(self.config, self.rng) for _ in range(size)]

    async def run(
        self,
        on_progress: Optional[ProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> SimulationResult:
        """Run all trials and return the finished result."""
        total = self.config.trial_count
        aggregator = DistributionAggregator()
        tracker = ProgressTracker(total, window=self.eta_window, clock=self._clock)
        tracker.start()

        logger.info(
            "Starting simulation: %d employees, %d days/week, %.1f%% absenteeism, %d trials",
            self.config.employee_count,
            self.config.days_in_office,
            self.config.absenteeism_percent,
            total
        )

        completed = 0
        while completed < total:
            if cancel_token is not None and cancel_token.cancelled:
                logger.warning("Simulation cancelled after %d/%d trials", completed, total)
                raise SimulationCancelledError(completed, total)

            size = min(self.chunk_size, total - completed)
            aggregator.extend(self.run_batch(size))
            completed += size

            snapshot = tracker.record(completed)
            logger.debug(
                "Progress %d/%d (%.0f%%), ~%s ms remaining",
                completed,
                total,
                snapshot.fraction_complete * 100,
                snapshot.estimated_remaining_ms
            )
            if on_progress is not None:
                await _notify(on_progress, snapshot)

            await asyncio.sleep(0)

        result = aggregator.finalize(expected_count=total)
        logger.info(
            "Simulation finished: avg peak %.2f, p95 %d, max %d",
            result.avg_peak,
            result.p95,
            result.max_observed
        )
        return result


async def _notify(on_progress: ProgressCallback, snapshot: ProgressSnapshot) -> None:
    outcome = on_progress(snapshot)
    if inspect.isawaitable(outcome):
        await outcome


async def run(
    config: SimulationConfig,
    on_progress: Optional[ProgressCallback] = None,
    cancel_token: Optional[CancellationToken] = None,
    **simulator_options: Any
) -> SimulationResult:
    """Engine entry point: simulate `config` and resolve with the result."""
    simulator = Simulator(config, **simulator_options)
    return await simulator.run(on_progress=on_progress, cancel_token=cancel_token)


def run_sync(
    config: SimulationConfig,
    on_progress: Optional[ProgressCallback] = None,
    **simulator_options: Any
) -> SimulationResult:
    """Blocking wrapper around run() for scripts and the CLI."""
    return asyncio.run(run(config, on_progress=on_progress, **simulator_options))
