"""Recursion-aware call timer backed by per-function state files."""

from __future__ import annotations

from typing import Callable, Optional

from loguru import logger

from ..utils.fileio import read_record, remove_record, state_lock, write_record
from .paths import StatePaths, state_paths
from .records import (
    ZERO,
    StatsRecord,
    Timestamp,
    format_level,
    format_stats,
    format_timestamp,
    parse_level,
    parse_stats,
    parse_timestamp,
    wall_clock,
)

Clock = Callable[[], Timestamp]


class CallTimer:
    """Time the outermost invocation of a function across processes.

    Only the call that moves the depth from 0 to 1 records a start time, and
    only the matching return to depth 0 updates the stats record. Nested
    calls just move the depth counter.
    """

    def __init__(self, function: str, directory: str, clock: Optional[Clock] = None, lock: bool = False):
        self.paths: StatePaths = state_paths(directory, function)
        self.function = function
        self.clock = clock or wall_clock
        self.lock = lock

    def depth(self) -> int:
        """Current recursion depth, 0 when idle."""

        return parse_level(read_record(self.paths.level)) or 0

    def enter(self) -> int:
        """Record a call; returns the new depth."""

        with state_lock(self.paths.directory, self.lock):
            level = self.depth() + 1
            if not write_record(self.paths.level, format_level(level)):
                return level - 1
            if level == 1:
                write_record(self.paths.start, format_timestamp(self.clock()))
            logger.debug("enter {} depth={}", self.function, level)
            return level

    def leave(self) -> Optional[StatsRecord]:
        """Record a return; returns the updated stats on the outermost return."""

        with state_lock(self.paths.directory, self.lock):
            text = read_record(self.paths.level)
            if text is None:
                logger.debug("leave {} without a level record", self.function)
                return None

            level = (parse_level(text) or 0) - 1
            if level > 0:
                write_record(self.paths.level, format_level(level))
                logger.debug("leave {} depth={}", self.function, level)
                return None

            stats = self._close_outer_call()
            remove_record(self.paths.start)
            remove_record(self.paths.level)
            return stats

    def _close_outer_call(self) -> Optional[StatsRecord]:
        now = self.clock()
        start = parse_timestamp(read_record(self.paths.start))
        if start is None:
            logger.warning("no usable start time for {}; call not counted", self.function)
            return None

        elapsed = now - start
        if elapsed.negative:
            logger.warning("clock went backwards while timing {}; counting zero", self.function)
            elapsed = ZERO

        stats = parse_stats(read_record(self.paths.stats))
        if stats is None:
            stats = StatsRecord()
        stats.update(elapsed)

        if not write_record(self.paths.stats, format_stats(stats)):
            return None
        logger.debug(
            "leave {} elapsed={:.6f}s calls={} avg={:.6f}s",
            self.function,
            elapsed.as_float(),
            stats.count,
            stats.average,
        )
        return stats


__all__ = ["CallTimer", "Clock", "wall_clock"]
