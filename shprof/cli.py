"""The ``shprof`` timing command.

Called from inside shell functions::

    foo() {
        shprof enter $FUNCNAME /tmp/prof
        sleep 1
        shprof leave $FUNCNAME /tmp/prof $?
        return $?
    }

Every event is a fresh process, so the timestamp is taken before the logging
and configuration stack is imported.
"""

from __future__ import annotations

import sys
from typing import List, Optional

from .timer.records import parse_exit_code, wall_clock

USAGE = "Usage: shprof {e(nter) | l(eave)} <funcname> <dir> [$?]"


def configure():
    """Load the configuration and set up logging; never raises on bad config."""

    from .errors import ConfigError
    from .utils.config import ProfilerConfig, load_config
    from .utils.logging import logger, setup_logging

    try:
        config = load_config()
    except ConfigError as exc:
        config = ProfilerConfig()
        setup_logging(level=config.log_level)
        logger.warning("{}; using defaults", exc)
        return config
    try:
        setup_logging(config.log_path, level=config.log_level)
    except OSError as exc:
        setup_logging(level=config.log_level)
        logger.warning("cannot open log file {}: {}", config.log_file, exc)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Run ``shprof {enter|leave} <funcname> <dir> [exit-code]``.

    Returns the caller-supplied exit code whatever happened to the timing
    update; only a short argument list yields 1.
    """

    args = sys.argv[1:] if argv is None else argv
    if len(args) < 3:
        print(USAGE)
        return 1

    now = wall_clock()
    mode, function, directory = args[:3]
    exit_code = parse_exit_code(args[3]) if len(args) > 3 else 0

    config = configure()

    from .errors import InvalidNameError
    from .timer.call_timer import CallTimer
    from .utils.logging import logger

    try:
        timer = CallTimer(function, directory, clock=lambda: now, lock=config.lock)
    except InvalidNameError as exc:
        logger.warning("{}", exc)
        return exit_code

    if mode.startswith("e"):
        timer.enter()
    else:
        timer.leave()
    return exit_code


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
