"""
Saved-run persistence.

Stores named simulation runs so their distributions can be queried
again later without re-simulating.
"""

from .records import RunInputs, SavedRun, default_run_name, utc_timestamp
from .store import RunStore

__all__ = [
    "RunInputs",
    "SavedRun",
    "RunStore",
    "default_run_name",
    "utc_timestamp"
]
