"""Decision rules for one sync cycle.

decide() maps the two FileStates and the configuration to a single
SyncDecision. It performs no I/O.
"""

import logging
from enum import Enum
from typing import Optional

from syncfile.config import SyncConfig
from syncfile.inspector import FileState

logger = logging.getLogger(__name__)


class SyncDecision(Enum):
    """Action to take this cycle."""
    NONE = "none"
    DELETE_DEST = "delete_dest"
    DELETE_SRC = "delete_src"
    TRUNCATE_DEST_THEN_CREATE_SRC = "truncate_dest_then_create_src"
    TRUNCATE_SRC_THEN_CREATE_DEST = "truncate_src_then_create_dest"
    COPY_SRC_TO_DEST = "copy_src_to_dest"
    COPY_DEST_TO_SRC = "copy_dest_to_src"

    @property
    def is_copy(self) -> bool:
        return self in (SyncDecision.COPY_SRC_TO_DEST, SyncDecision.COPY_DEST_TO_SRC)


def metadata_differs(src: FileState, dest: FileState) -> bool:
    """True if mode, size or modification time differ."""
    return (
        src.mode != dest.mode
        or src.size != dest.size
        or src.mtime != dest.mtime
    )


def _copy_direction(src: FileState, dest: FileState, config: SyncConfig) -> SyncDecision:
    # Source wins ties
    if config.allow_reverse_copy and dest.mtime > src.mtime:
        return SyncDecision.COPY_DEST_TO_SRC
    return SyncDecision.COPY_SRC_TO_DEST


def decide(
    src: FileState,
    dest: FileState,
    config: SyncConfig,
    contents_match: Optional[bool] = None,
) -> SyncDecision:
    """Choose what to do with a source/destination pair.

    Args:
        src: State of the source path
        dest: State of the destination path
        config: Sync flags
        contents_match: Result of a content comparison, when one was made
            (only consulted if config.compare_contents is set)

    Returns:
        The SyncDecision for this cycle
    """
    if not src.accessible or not dest.accessible:
        logger.debug("a path exists but is inaccessible, skipping")
        return SyncDecision.NONE

    if not src.exists and not dest.exists:
        logger.debug("both src and dest are missing, doing nothing")
        return SyncDecision.NONE

    if (src.exists and not src.is_regular) or (dest.exists and not dest.is_regular):
        logger.info("src or dest is not a regular file, doing nothing")
        return SyncDecision.NONE

    if not src.exists:
        if config.delete_dest_on_missing_src:
            return SyncDecision.DELETE_DEST
        if config.truncate_mode:
            return SyncDecision.TRUNCATE_DEST_THEN_CREATE_SRC
        if config.allow_reverse_copy:
            return SyncDecision.COPY_DEST_TO_SRC
        return SyncDecision.NONE

    if not dest.exists:
        if config.delete_src_on_missing_dest:
            return SyncDecision.DELETE_SRC
        if config.truncate_mode:
            return SyncDecision.TRUNCATE_SRC_THEN_CREATE_DEST
        return SyncDecision.COPY_SRC_TO_DEST

    if metadata_differs(src, dest):
        logger.debug("src and dest metadata differ")
        return _copy_direction(src, dest, config)

    if config.compare_contents and contents_match is False:
        logger.debug("src and dest look similar but contents differ")
        return _copy_direction(src, dest, config)

    return SyncDecision.NONE
