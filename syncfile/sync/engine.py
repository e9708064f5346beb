"""Cycle engine for syncfile.

run_cycle() is one evaluation of the pair:
- inspect src and dest (open, then fstat the descriptor)
- optionally compare contents when metadata match
- decide on a single action
- perform it: atomic copy, delete, or truncate-and-create

Failures are logged and reported in the CycleReport; nothing short of a
programming or configuration error escapes.
"""

import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from syncfile.config import SyncConfig
from syncfile.copier import atomic_copy
from syncfile.inspector import FileState, Inspection, inspect
from syncfile.reconciler import SyncDecision, decide, metadata_differs
from syncfile.transfer import Transfer
from syncfile.utils.hashing import contents_equal

logger = logging.getLogger(__name__)


@dataclass
class CycleReport:
    """What one cycle decided and whether it worked."""

    cycle: int = 0
    decision: SyncDecision = SyncDecision.NONE
    success: bool = True
    skipped: bool = False

    bytes_copied: int = 0

    # Timing
    started_at: float = 0.0
    completed_at: float = 0.0
    duration_ms: float = 0.0

    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary."""
        return {
            "cycle": self.cycle,
            "decision": self.decision.value,
            "success": self.success,
            "skipped": self.skipped,
            "bytes_copied": self.bytes_copied,
            "duration_ms": self.duration_ms,
            "errors": self.errors,
        }

    def fail(self, message: str) -> None:
        self.success = False
        self.errors.append(message)


def _compare_contents(src: Inspection, dest: Inspection, config: SyncConfig) -> Optional[bool]:
    """Digest both descriptors when the metadata alone says 'in sync'."""
    if not config.compare_contents:
        return None
    if not (src.state.exists and dest.state.exists):
        return None
    if not (src.state.is_regular and dest.state.is_regular):
        return None
    if metadata_differs(src.state, dest.state):
        return None
    try:
        return contents_equal(src.fd, dest.fd, config.hash_algorithm)
    except OSError as e:
        logger.warning(f"content comparison of {src.path} and {dest.path} failed: {e}")
        return None


def _delete(path: Path, report: CycleReport) -> None:
    try:
        os.unlink(path)
    except OSError as e:
        report.fail(f"unable to remove {path}: {e}")
        logger.error(report.errors[-1])
        return
    logger.info(f"removed {path}")


def _truncate_and_create(survivor: Inspection, missing_path: Path, report: CycleReport) -> None:
    """Zero the surviving file, then create the missing one as an empty twin."""
    if not survivor.writable:
        report.fail(f"cannot truncate {survivor.path}: not opened for writing")
        logger.error(report.errors[-1])
        return

    try:
        os.ftruncate(survivor.fd, 0)
        truncated = FileState.from_stat(os.fstat(survivor.fd))
    except OSError as e:
        report.fail(f"unable to truncate {survivor.path}: {e}")
        logger.error(report.errors[-1])
        return
    logger.info(f"truncated {survivor.path}")

    flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL
    try:
        fd = os.open(missing_path, flags, truncated.permissions)
    except OSError as e:
        report.fail(f"unable to create {missing_path}: {e}")
        logger.error(report.errors[-1])
        return

    try:
        if hasattr(os, "fchmod"):
            os.fchmod(fd, truncated.permissions)
        if os.utime in os.supports_fd:
            os.utime(fd, ns=(truncated.atime_ns, truncated.mtime_ns))
        else:
            os.utime(missing_path, ns=(truncated.atime_ns, truncated.mtime_ns))
    except OSError as e:
        # The empty file is still a valid placeholder; next cycle reconciles
        logger.warning(f"unable to match metadata of {missing_path}: {e}")
    finally:
        os.close(fd)
    logger.info(f"created empty {missing_path}")


def _execute(
    decision: SyncDecision,
    src: Inspection,
    dest: Inspection,
    config: SyncConfig,
    transfer: Optional[Transfer],
    report: CycleReport,
) -> None:
    if decision.is_copy:
        if decision == SyncDecision.COPY_SRC_TO_DEST:
            origin, target = src, dest
        else:
            origin, target = dest, src
        result = atomic_copy(
            origin.fd, origin.state, origin.path, target.path, config.temp_suffix, transfer
        )
        report.bytes_copied = result.bytes_copied
        if not result.success:
            report.fail(result.error)
    elif decision == SyncDecision.DELETE_DEST:
        _delete(dest.path, report)
    elif decision == SyncDecision.DELETE_SRC:
        _delete(src.path, report)
    elif decision == SyncDecision.TRUNCATE_DEST_THEN_CREATE_SRC:
        _truncate_and_create(dest, src.path, report)
    elif decision == SyncDecision.TRUNCATE_SRC_THEN_CREATE_DEST:
        _truncate_and_create(src, dest.path, report)


def run_cycle(
    src_path: Union[str, Path],
    dest_path: Union[str, Path],
    config: SyncConfig,
    transfer: Optional[Transfer] = None,
    cycle: int = 0,
) -> CycleReport:
    """Run one sync cycle for a file pair.

    Args:
        src_path: Source file
        dest_path: Destination file
        config: Sync flags
        transfer: Byte transfer strategy (platform default if None)
        cycle: Cycle number for the report

    Returns:
        CycleReport with the decision and its outcome

    Raises:
        ValueError: If a path or the config is missing
    """
    if not src_path or not dest_path:
        raise ValueError("both src_path and dest_path are required")
    if config is None:
        raise ValueError("config is required")

    report = CycleReport(cycle=cycle, started_at=time.time())

    with inspect(src_path) as src, inspect(dest_path) as dest:
        if not src.state.accessible or not dest.state.accessible:
            report.skipped = True
            logger.warning(f"cycle {cycle}: skipping, src or dest is not accessible")
            return _finalize_report(report)

        contents_match = _compare_contents(src, dest, config)
        report.decision = decide(src.state, dest.state, config, contents_match)
        logger.debug(f"cycle {cycle}: {src.path} / {dest.path} -> {report.decision.value}")

        _execute(report.decision, src, dest, config, transfer, report)

    return _finalize_report(report)


def _finalize_report(report: CycleReport) -> CycleReport:
    """Finalize report with timing info."""
    report.completed_at = time.time()
    report.duration_ms = (report.completed_at - report.started_at) * 1000

    if report.decision != SyncDecision.NONE or not report.success:
        logger.info(
            f"cycle {report.cycle}: {report.decision.value} "
            f"{'ok' if report.success else 'failed'} "
            f"({report.bytes_copied} bytes in {report.duration_ms:.1f}ms)"
        )

    return report


class SyncEngine:
    """Runs cycles for one file pair with a fixed configuration.

    Attributes:
        src_path: Source file
        dest_path: Destination file
        config: Sync flags
        transfer: Byte transfer strategy shared by every cycle
        cycles_run: Number of cycles executed so far
    """

    def __init__(
        self,
        src_path: Union[str, Path],
        dest_path: Union[str, Path],
        config: Optional[SyncConfig] = None,
        transfer: Optional[Transfer] = None,
    ):
        self.src_path = Path(src_path)
        self.dest_path = Path(dest_path)
        self.config = config or SyncConfig()
        self.transfer = transfer
        self.cycles_run = 0

    def run_cycle(self) -> CycleReport:
        """Run the next cycle."""
        report = run_cycle(
            self.src_path,
            self.dest_path,
            self.config,
            transfer=self.transfer,
            cycle=self.cycles_run,
        )
        self.cycles_run += 1
        return report
