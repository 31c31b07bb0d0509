"""
Progress Tracking

Turns batch completions into ProgressSnapshots with a time-remaining
estimate. The estimate assumes a constant per-trial cost: by default the
cost observed since the run started, or over the last `window` batches
when a window is set.
"""

from collections import deque
from typing import Callable, Optional
import time

from .entities import ProgressSnapshot


class ProgressTracker:
    """Elapsed time and ETA bookkeeping for one run."""

    def __init__(
        self,
        total: int,
        window: int = 0,
        clock: Callable[[], float] = time.perf_counter
    ):
        self.total = total
        self.window = window
        self._clock = clock
        self._start: Optional[float] = None
        # (completed, timestamp) at each batch boundary, run start included
        self._marks: deque = deque(maxlen=window + 1 if window > 0 else None)

    def start(self) -> ProgressSnapshot:
        self._start = self._clock()
        self._marks.clear()
        self._marks.append((0, self._start))
        return ProgressSnapshot(completed=0, total=self.total)

    def record(self, completed: int) -> ProgressSnapshot:
        """Register that `completed` trials are done and build a snapshot."""
        if self._start is None:
            self.start()

        now = self._clock()
        elapsed_s = now - self._start
        if self.window > 0:
            self._marks.append((completed, now))
            base_completed, base_time = self._marks[0]
        else:
            base_completed, base_time = 0, self._start

        remaining_ms = None
        done_in_span = completed - base_completed
        if completed > 0 and done_in_span > 0:
            per_trial_ms = (now - base_time) * 1000 / done_in_span
            remaining_ms = max(per_trial_ms * (self.total - completed), 0.0)

        return ProgressSnapshot(
            completed=completed,
            total=self.total,
            elapsed_ms=elapsed_s * 1000,
            estimated_remaining_ms=remaining_ms
        )
