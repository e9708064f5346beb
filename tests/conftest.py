"""Shared pytest fixtures for syncfile tests.

Provides a temp file pair, config objects, and helpers for building files
with known mode, content and timestamps.
"""

import os
from pathlib import Path

import pytest

from syncfile.config import SyncConfig, ScheduleConfig
from syncfile.inspector import FileState

# Fixed, whole-second timestamps well in the past
OLD_TIME = 1_600_000_000
NEW_TIME = 1_700_000_000


def make_file(path: Path, content: bytes = b"", mode: int = 0o644, mtime: int = OLD_TIME) -> Path:
    """Create a file with exact content, permission bits and timestamps."""
    path.write_bytes(content)
    os.chmod(path, mode)
    os.utime(path, (mtime, mtime))
    return path


def state(
    exists: bool = True,
    mode: int = 0o100644,
    size: int = 10,
    mtime: int = OLD_TIME,
    is_regular: bool = True,
    accessible: bool = True,
) -> FileState:
    """Build a FileState without touching the filesystem."""
    if not accessible:
        return FileState.inaccessible()
    if not exists:
        return FileState.missing()
    return FileState(
        exists=True,
        mode=mode,
        size=size,
        atime_ns=mtime * 1_000_000_000,
        mtime_ns=mtime * 1_000_000_000,
        is_regular=is_regular,
    )


@pytest.fixture
def pair(tmp_path):
    """Source and destination paths in separate directories (not created)."""
    src_dir = tmp_path / "src"
    dest_dir = tmp_path / "dest"
    src_dir.mkdir()
    dest_dir.mkdir()
    return {"src": src_dir / "data.txt", "dest": dest_dir / "data.txt", "root": tmp_path}


@pytest.fixture
def sample_config():
    """Default SyncConfig: copy src to dest, no deletes, no reverse."""
    return SyncConfig()


@pytest.fixture
def reverse_config():
    """SyncConfig allowing dest to flow back to src."""
    return SyncConfig(allow_reverse_copy=True)


@pytest.fixture
def single_cycle_schedule():
    """ScheduleConfig that runs exactly one cycle."""
    return ScheduleConfig(interval=0.01, count=1)
