"""Race-resistant existence and metadata probe for a single path.

The path is opened first and the open descriptor is stat'ed, so the metadata
always describes the object actually held open. A name that is swapped
between the check and the later copy cannot fool the decision.
"""

import errno
import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

# Errors from a read-write open that are worth retrying read-only
_READ_ONLY_RETRY = frozenset((
    errno.EACCES,
    errno.EPERM,
    errno.EISDIR,
    errno.EROFS,
    errno.ETXTBSY,
))

_NS_PER_SEC = 1_000_000_000


@dataclass(frozen=True)
class FileState:
    """Metadata of one side of the pair, taken from an open descriptor.

    A missing or unreadable path has exists=False and every other field
    zeroed. accessible=False marks a path that exists but could not be
    opened; such a path must be skipped for the cycle.
    """
    exists: bool = False
    mode: int = 0
    size: int = 0
    atime_ns: int = 0
    mtime_ns: int = 0
    is_regular: bool = False
    uid: int = 0
    gid: int = 0
    accessible: bool = True

    @classmethod
    def missing(cls) -> "FileState":
        return cls()

    @classmethod
    def inaccessible(cls) -> "FileState":
        return cls(accessible=False)

    @classmethod
    def from_stat(cls, st: os.stat_result) -> "FileState":
        return cls(
            exists=True,
            mode=st.st_mode,
            size=st.st_size,
            atime_ns=st.st_atime_ns,
            mtime_ns=st.st_mtime_ns,
            is_regular=stat.S_ISREG(st.st_mode),
            uid=st.st_uid,
            gid=st.st_gid,
        )

    @property
    def permissions(self) -> int:
        """Permission bits (including setuid/setgid/sticky)."""
        return stat.S_IMODE(self.mode)

    @property
    def mtime(self) -> int:
        """Modification time in whole seconds, the comparison granularity."""
        return self.mtime_ns // _NS_PER_SEC

    @property
    def atime(self) -> int:
        return self.atime_ns // _NS_PER_SEC


@dataclass
class Inspection:
    """Result of inspecting one path: its state plus the open descriptor.

    Use as a context manager so the descriptor is closed at cycle end.

    Attributes:
        path: The inspected path
        state: FileState taken from the descriptor
        fd: Open descriptor when state.exists, else None
        writable: True if fd was opened read-write
    """
    path: Path
    state: FileState
    fd: Optional[int] = None
    writable: bool = False

    def close(self) -> None:
        """Close the held descriptor, if any."""
        if self.fd is not None:
            fd, self.fd = self.fd, None
            try:
                os.close(fd)
            except OSError as e:
                logger.debug(f"close failed for {self.path}: {e}")

    def __enter__(self) -> "Inspection":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _open_flags(base: int) -> int:
    # O_NONBLOCK keeps a FIFO from blocking the probe
    return base | getattr(os, "O_NONBLOCK", 0) | getattr(os, "O_NOCTTY", 0) | getattr(os, "O_BINARY", 0)


def _open(path: Path) -> tuple:
    """Open read-write, falling back to read-only.

    Returns:
        (fd, writable)

    Raises:
        OSError: If neither open succeeds
    """
    try:
        return os.open(path, _open_flags(os.O_RDWR)), True
    except OSError as e:
        if e.errno not in _READ_ONLY_RETRY:
            raise
        logger.debug(f"read-write open refused for {path} ({e.strerror}), retrying read-only")
    return os.open(path, _open_flags(os.O_RDONLY)), False


def inspect(path: Union[str, Path]) -> Inspection:
    """Open a path and report what it is.

    Args:
        path: Path to probe

    Returns:
        Inspection whose fd is open (and owned by the caller) when the
        path exists
    """
    path = Path(path)

    try:
        fd, writable = _open(path)
    except (FileNotFoundError, NotADirectoryError):
        logger.debug(f"file is missing: {path}")
        return Inspection(path=path, state=FileState.missing())
    except OSError as e:
        # Distinguish "exists but refused" from "gone"
        if os.path.lexists(path):
            logger.warning(f"file exists but is not accessible: {path}: {e.strerror}")
            return Inspection(path=path, state=FileState.inaccessible())
        logger.debug(f"file is missing: {path} ({e.strerror})")
        return Inspection(path=path, state=FileState.missing())

    try:
        st = os.fstat(fd)
    except OSError as e:
        os.close(fd)
        logger.debug(f"fstat failed, assuming missing: {path}: {e}")
        return Inspection(path=path, state=FileState.missing())

    state = FileState.from_stat(st)
    logger.debug(
        f"file exists: {path} (mode={state.mode:o} size={state.size} "
        f"mtime={state.mtime} regular={state.is_regular})"
    )
    return Inspection(path=path, state=state, fd=fd, writable=writable)
