"""
Run Store

A small key-value record store backed by one JSON file. All saved runs
live in a single list under one key, identified by their timestamp.
"""

from pathlib import Path
from typing import Optional
import json
import logging
import os
import tempfile

from pydantic import ValidationError

from ..config import Settings, get_settings
from ..core.errors import InvalidRecordError, RecordNotFoundError
from ..simulation.entities import SimulationConfig, SimulationResult
from .records import SavedRun

logger = logging.getLogger(__name__)


class RunStore:
    """Saved simulation runs in a JSON file."""

    def __init__(
        self,
        path: str = None,
        key: str = None,
        settings: Settings = None
    ):
        settings = settings or get_settings()
        self.path = Path(path or settings.storage.path)
        self.key = key or settings.storage.key
        self.defaults = settings.defaults

    def _read_raw(self) -> list:
        if not self.path.exists():
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidRecordError(f"Store file {self.path} is not valid JSON") from e

        records = data.get(self.key, []) if isinstance(data, dict) else []
        if not isinstance(records, list):
            raise InvalidRecordError(f"Store key {self.key!r} does not hold a list")
        return records

    def _write_raw(self, records: list) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {}
        if self.path.exists():
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                data = {}
        data[self.key] = records

        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def list_runs(self) -> list[SavedRun]:
        """Valid saved runs, newest first. Malformed records are skipped."""
        runs = []
        for raw in self._read_raw():
            try:
                runs.append(SavedRun.model_validate(raw))
            except ValidationError as e:
                name = raw.get("name") if isinstance(raw, dict) else None
                logger.warning("Skipping malformed saved run %r: %s", name, e.error_count())
        runs.sort(key=lambda r: r.saved_at, reverse=True)
        return runs

    def save(self, run: SavedRun) -> SavedRun:
        records = self._read_raw()
        if any(isinstance(r, dict) and r.get("timestamp") == run.timestamp for r in records):
            raise InvalidRecordError(f"A run saved at {run.timestamp} already exists")
        records.append(run.model_dump(mode="json"))
        self._write_raw(records)
        logger.info("Saved run %r at %s", run.name, run.timestamp)
        return run

    def save_result(
        self,
        config: SimulationConfig,
        result: SimulationResult,
        name: Optional[str] = None
    ) -> SavedRun:
        return self.save(SavedRun.from_run(config, result, name=name))

    def get(self, timestamp: str) -> SavedRun:
        """Load one run; raises if missing or unusable."""
        for raw in self._read_raw():
            if isinstance(raw, dict) and raw.get("timestamp") == timestamp:
                try:
                    return SavedRun.model_validate(raw)
                except ValidationError as e:
                    raise InvalidRecordError(f"Saved run {timestamp} is malformed: {e}") from e
        raise RecordNotFoundError(timestamp)

    def delete(self, timestamp: str) -> bool:
        records = self._read_raw()
        kept = [r for r in records if not (isinstance(r, dict) and r.get("timestamp") == timestamp)]
        if len(kept) == len(records):
            return False
        self._write_raw(kept)
        logger.info("Deleted run saved at %s", timestamp)
        return True

    def load_result(self, timestamp: str) -> tuple[SimulationConfig, SimulationResult]:
        """Inputs and result of a saved run, ready for percentile queries."""
        run = self.get(timestamp)
        inputs = run.resolved_inputs(self.defaults)
        return inputs.to_config(), run.result()
