"""Synchronization module for syncfile.

This module provides:
- run_cycle: One inspect/decide/act pass over a file pair
- SyncEngine: Runs successive cycles for one pair
- CycleReport: Outcome of a cycle
"""

from syncfile.sync.engine import CycleReport, SyncEngine, run_cycle

__all__ = [
    "CycleReport",
    "SyncEngine",
    "run_cycle",
]
