"""Configuration dataclasses for syncfile."""

import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from enum import Enum


# Characters allowed in the temp-file suffix
SUFFIX_PATTERN = re.compile(r"[A-Za-z0-9._+,-]+")

HASH_ALGORITHMS = ("auto", "xxhash", "md5", "sha256")


class ConfigurationError(ValueError):
    """Invalid configuration; fatal at startup."""


class Platform(Enum):
    """Host platform, used to pick the byte transfer strategy."""
    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "darwin"
    AUTO = "auto"


@dataclass(frozen=True)
class SyncConfig:
    """Flags that drive the per-cycle decision and copy.

    Attributes:
        delete_dest_on_missing_src: Remove dest when src is gone
        delete_src_on_missing_dest: Remove src when dest is gone
        truncate_mode: Instead of deleting, zero the surviving file and
            create an empty placeholder for the missing one
        allow_reverse_copy: Copy dest to src when dest is newer or src is gone
        compare_contents: Also compare file contents when metadata match
        temp_suffix: Suffix appended to the target name to form the temp file
        hash_algorithm: Digest used by compare_contents
    """
    delete_dest_on_missing_src: bool = False
    delete_src_on_missing_dest: bool = False
    truncate_mode: bool = False
    allow_reverse_copy: bool = False
    compare_contents: bool = False
    temp_suffix: str = ".new"
    hash_algorithm: str = "auto"

    def __post_init__(self):
        """Reject invalid flag combinations before any cycle runs."""
        if self.truncate_mode and (
            self.delete_dest_on_missing_src or self.delete_src_on_missing_dest
        ):
            raise ConfigurationError(
                "truncate mode cannot be combined with delete-on-missing flags"
            )
        if not isinstance(self.temp_suffix, str) or not SUFFIX_PATTERN.fullmatch(self.temp_suffix):
            raise ConfigurationError(
                f"temp suffix must only contain [A-Za-z0-9._+,-]: {self.temp_suffix!r}"
            )
        if self.hash_algorithm not in HASH_ALGORITHMS:
            raise ConfigurationError(f"Unknown hash algorithm: {self.hash_algorithm}")


@dataclass
class ScheduleConfig:
    """Settings for the outer cycle loop.

    Attributes:
        interval: Seconds to sleep between cycles
        count: Number of cycles to run, 0 runs forever
        daemon: Fork into the background before the first cycle
        log_file: Path to log file (None for stderr only)
        json_logs: Emit JSON lines instead of text
        verbose: Log at DEBUG level
    """
    interval: float = 60.0
    count: int = 1
    daemon: bool = False
    log_file: Optional[Path] = None
    json_logs: bool = False
    verbose: bool = False

    def __post_init__(self):
        """Validate ranges and ensure paths are Path objects."""
        if not math.isfinite(self.interval) or self.interval <= 0.0:
            raise ConfigurationError(f"interval must be a finite number > 0.0: {self.interval}")
        if self.count < 0:
            raise ConfigurationError(f"count must be >= 0: {self.count}")
        if isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)
