"""CLI entry point for syncfile.

Usage:
    python -m syncfile [-v] [-d] [-D] [-T] [-c] [-b] [-t SECS] [-n COUNT]
                       [-s SUFFIX] [--daemon] [--log-file PATH] [--json-log]
                       src dest

Keeps dest a mirror of src, checking every SECS seconds for COUNT cycles
(0 runs forever).
"""

import argparse
import logging
import sys

from syncfile import __version__
from syncfile.config import ConfigurationError, ScheduleConfig, SyncConfig
from syncfile.scheduler import daemonize, run_schedule
from syncfile.utils.logging import configure_root_logger

EXIT_OK = 0
EXIT_CONFIG_ERROR = 3
EXIT_INTERNAL_ERROR = 4

logger = logging.getLogger("syncfile")


def setup_logging(schedule: ScheduleConfig, console: bool = True) -> None:
    """Configure logging for CLI output."""
    configure_root_logger(
        level=logging.DEBUG if schedule.verbose else logging.INFO,
        json_output=schedule.json_logs,
        log_file=schedule.log_file,
        console=console,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="syncfile",
        description="Keep two files mirror-synchronized using atomic replace",
    )
    parser.add_argument(
        "--version", action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Output progress messages"
    )
    parser.add_argument(
        "-d", dest="delete_dest", action="store_true",
        help="Delete dest when src file does not exist"
    )
    parser.add_argument(
        "-D", dest="delete_src", action="store_true",
        help="Delete src when dest file does not exist"
    )
    parser.add_argument(
        "-T", dest="truncate", action="store_true",
        help="Truncate the surviving file and create an empty missing one "
             "(cannot be combined with -d or -D)"
    )
    parser.add_argument(
        "-c", dest="compare_contents", action="store_true",
        help="Compare file contents (default: only check mode, mod time, length)"
    )
    parser.add_argument(
        "-b", dest="reverse", action="store_true",
        help="Copy dest to src if dest is newer or src is gone"
    )
    parser.add_argument(
        "-t", dest="interval", type=float, default=60.0, metavar="SECS",
        help="Check interval, may be a float (default: 60.0)"
    )
    parser.add_argument(
        "-n", dest="count", type=int, default=1, metavar="COUNT",
        help="Number of checks, 0 means forever (default: 1)"
    )
    parser.add_argument(
        "-s", dest="suffix", default=".new", metavar="SUFFIX",
        help="Filename suffix when forming temp files (default: .new)"
    )
    parser.add_argument(
        "--daemon", action="store_true",
        help="Run in the background"
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--json-log", action="store_true", help="Log as JSON lines")
    parser.add_argument("src", help="Source file")
    parser.add_argument("dest", help="Destination file")

    return parser


def build_configs(args: argparse.Namespace) -> tuple:
    """Turn parsed arguments into (SyncConfig, ScheduleConfig).

    Raises:
        ConfigurationError: On invalid or conflicting options
    """
    config = SyncConfig(
        delete_dest_on_missing_src=args.delete_dest,
        delete_src_on_missing_dest=args.delete_src,
        truncate_mode=args.truncate,
        allow_reverse_copy=args.reverse,
        compare_contents=args.compare_contents,
        temp_suffix=args.suffix,
    )
    schedule = ScheduleConfig(
        interval=args.interval,
        count=args.count,
        daemon=args.daemon,
        log_file=args.log_file,
        json_logs=args.json_log,
        verbose=args.verbose,
    )
    return config, schedule


def main(argv=None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config, schedule = build_configs(args)
    except ConfigurationError as e:
        print(f"{parser.prog}: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    setup_logging(schedule)

    try:
        if schedule.daemon:
            daemonize()
            # Without a log file nothing would be recorded once detached
            setup_logging(schedule, console=schedule.log_file is None)
        run_schedule(args.src, args.dest, config, schedule)
    except (ConfigurationError, ValueError) as e:
        logger.critical(f"{e}")
        return EXIT_CONFIG_ERROR
    except MemoryError:
        logger.critical("out of memory")
        return EXIT_INTERNAL_ERROR
    except KeyboardInterrupt:
        logger.info("interrupted")
        return EXIT_OK
    except Exception as e:
        logger.critical(f"internal error: {e}", exc_info=True)
        return EXIT_INTERNAL_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
