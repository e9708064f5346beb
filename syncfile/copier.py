"""Atomic whole-file replace.

The data is written to ``<to_path><suffix>`` in the target's own directory,
given the source's mode, ownership (when privileged) and timestamps, and only
then renamed over the target. An observer of the target sees either the old
file or the complete new one. Every failure removes the temp file.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from syncfile.inspector import FileState
from syncfile.transfer import Transfer, get_transfer
from syncfile.utils.platform import is_admin

logger = logging.getLogger(__name__)


@dataclass
class CopyResult:
    """Result of an atomic copy.

    Attributes:
        success: True once the temp file has been renamed onto the target
        bytes_copied: Bytes moved into the temp file
        temp_path: The temp file used (absent on return either way,
            unless it already existed before the copy)
        error: Description of the failure
    """
    success: bool
    bytes_copied: int = 0
    temp_path: Optional[Path] = None
    error: Optional[str] = None


def temp_path_for(to_path: Union[str, Path], suffix: str) -> Path:
    """Temp file beside the target, so the final rename stays on one filesystem."""
    to_path = Path(to_path)
    return to_path.with_name(to_path.name + suffix)


def _discard(fd: Optional[int], temp_path: Path) -> None:
    if fd is not None:
        try:
            os.close(fd)
        except OSError as e:
            logger.debug(f"close of {temp_path} failed: {e}")
    try:
        os.unlink(temp_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.error(f"unable to remove temp file {temp_path}: {e}")


def _set_times(fd: int, temp_path: Path, state: FileState) -> None:
    times = (state.atime_ns, state.mtime_ns)
    if os.utime in os.supports_fd:
        os.utime(fd, ns=times)
    else:
        os.utime(temp_path, ns=times)


def _set_mode(fd: int, temp_path: Path, state: FileState) -> None:
    if hasattr(os, "fchmod"):
        os.fchmod(fd, state.permissions)
    else:
        os.chmod(temp_path, state.permissions)


def atomic_copy(
    from_fd: int,
    from_state: FileState,
    from_path: Union[str, Path],
    to_path: Union[str, Path],
    temp_suffix: str,
    transfer: Optional[Transfer] = None,
) -> CopyResult:
    """Replace to_path with the contents and metadata of an open file.

    Args:
        from_fd: Open, readable descriptor of the file to copy
        from_state: FileState taken from from_fd
        from_path: Name of the file being copied (for messages only)
        to_path: Path to replace
        temp_suffix: Suffix forming the temp file name
        transfer: Byte transfer strategy (platform default if None)

    Returns:
        CopyResult; failures are reported, not raised
    """
    to_path = Path(to_path)
    temp_path = temp_path_for(to_path, temp_suffix)
    transfer = transfer or get_transfer()
    result = CopyResult(success=False, temp_path=temp_path)

    # Exclusive create: a leftover temp file from an interrupted run is
    # reported, never overwritten or removed
    flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)
    try:
        fd = os.open(temp_path, flags, from_state.permissions)
    except FileExistsError:
        result.error = f"temp file already exists, remove it to resume syncing: {temp_path}"
        logger.error(result.error)
        return result
    except OSError as e:
        result.error = f"cannot create temp file {temp_path}: {e}"
        logger.error(result.error)
        return result

    try:
        if from_state.size > 0:
            result.bytes_copied = transfer.copy(fd, from_fd, from_state.size)

        _set_mode(fd, temp_path, from_state)

        if is_admin() and hasattr(os, "fchown"):
            try:
                os.fchown(fd, from_state.uid, from_state.gid)
            except OSError as e:
                logger.warning(
                    f"unable to set owner {from_state.uid}:{from_state.gid} on {temp_path}: {e}"
                )

        _set_times(fd, temp_path, from_state)
        os.close(fd)
        fd = None

        os.replace(temp_path, to_path)
    except OSError as e:
        result.error = f"copy {from_path} -> {to_path} failed: {e}"
        result.bytes_copied = 0
        logger.error(result.error)
        _discard(fd, temp_path)
        return result

    result.success = True
    logger.info(f"copied {from_path} -> {to_path} ({result.bytes_copied} bytes via {transfer.name})")
    return result
