"""syncfile - keep two files mirror-synchronized.

Each cycle inspects a source and a destination file, decides which side (if
any) should change, and applies the change with a crash-safe atomic replace:
the new content is written to a temp file beside the target and renamed over
it, so the target never holds a partial copy.

Quick Start:
    from syncfile import SyncConfig, run_cycle

    report = run_cycle("data.db", "/mnt/backup/data.db", SyncConfig())
    print(report.decision, report.success)

Classes:
    SyncConfig: Immutable flags for the decision and copy
    ScheduleConfig: Interval, count and logging for the outer loop
    SyncDecision: Enum of per-cycle actions
    FileState: Metadata of one side, taken from an open descriptor
    CycleReport: Outcome of a cycle
    SyncEngine: Runs successive cycles for a pair
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .config import (
    ConfigurationError,
    Platform,
    ScheduleConfig,
    SyncConfig,
)
from .inspector import FileState, Inspection, inspect
from .reconciler import SyncDecision, decide
from .copier import CopyResult, atomic_copy
from .sync.engine import CycleReport, SyncEngine, run_cycle
from .scheduler import run_schedule

__all__ = [
    "__version__",
    "__license__",
    "ConfigurationError",
    "Platform",
    "ScheduleConfig",
    "SyncConfig",
    "FileState",
    "Inspection",
    "inspect",
    "SyncDecision",
    "decide",
    "CopyResult",
    "atomic_copy",
    "CycleReport",
    "SyncEngine",
    "run_cycle",
    "run_schedule",
]
