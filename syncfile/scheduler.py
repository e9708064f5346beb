"""Outer loop: run a cycle, sleep, repeat.

The loop runs ``schedule.count`` cycles (forever when 0) and sleeps
``schedule.interval`` seconds between them, never after the last one.
"""

import logging
import os
import sys
import time
from pathlib import Path
from typing import Callable, Optional, Union

from syncfile.config import ConfigurationError, ScheduleConfig, SyncConfig
from syncfile.sync.engine import SyncEngine
from syncfile.transfer import Transfer

logger = logging.getLogger(__name__)


def daemonize() -> None:
    """Fork into the background.

    The parent exits immediately with status 0; the child becomes a session
    leader with stdin redirected from the null device.

    Raises:
        ConfigurationError: If the platform has no fork()
    """
    if not hasattr(os, "fork"):
        raise ConfigurationError("running as a daemon requires os.fork()")

    sys.stdout.flush()
    sys.stderr.flush()

    pid = os.fork()
    if pid > 0:
        os._exit(0)

    os.setsid()
    devnull = os.open(os.devnull, os.O_RDONLY)
    try:
        os.dup2(devnull, 0)
    finally:
        os.close(devnull)
    logger.debug(f"running in background as pid {os.getpid()}")


def run_schedule(
    src_path: Union[str, Path],
    dest_path: Union[str, Path],
    config: SyncConfig,
    schedule: Optional[ScheduleConfig] = None,
    transfer: Optional[Transfer] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Run cycles for a file pair according to a schedule.

    Args:
        src_path: Source file
        dest_path: Destination file
        config: Sync flags
        schedule: Interval and count (defaults: one cycle)
        transfer: Byte transfer strategy (platform default if None)
        sleep: Sleep function, replaceable for tests

    Returns:
        Number of cycles executed
    """
    schedule = schedule or ScheduleConfig()
    engine = SyncEngine(src_path, dest_path, config, transfer=transfer)

    logger.debug(f"sync from: {engine.src_path} to: {engine.dest_path}")
    logger.debug(f"check interval: {schedule.interval} sec, number of checks: {schedule.count}")
    logger.debug(f"config: {config}")

    while True:
        if engine.cycles_run > 0:
            logger.debug(f"sleeping for {schedule.interval} seconds")
            sleep(schedule.interval)
        logger.debug(f"starting cycle {engine.cycles_run}")

        report = engine.run_cycle()
        if not report.success:
            for error in report.errors:
                logger.warning(f"cycle {report.cycle}: {error}")

        if schedule.count and engine.cycles_run >= schedule.count:
            break

    return engine.cycles_run
