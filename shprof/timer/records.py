"""Text formats of the level, start and stats records.

Parsers never raise: malformed or missing content maps to ``None`` so the
caller can reinitialise the record.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import Optional

USEC_PER_SEC = 1_000_000

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_TIMESTAMP_RE = re.compile(r"\s*(\d+)\.(\d{1,6})")
_STATS_RE = re.compile(r"\s*(\d+)\s+(\d+)\.(\d{1,6})")


@dataclass(frozen=True)
class Timestamp:
    """Seconds plus microseconds, with ``micros`` kept in ``[0, 1_000_000)``."""

    seconds: int
    micros: int = 0

    @classmethod
    def normalized(cls, seconds: int, micros: int) -> "Timestamp":
        carry, micros = divmod(micros, USEC_PER_SEC)
        return cls(seconds + carry, micros)

    @classmethod
    def from_ns(cls, ns: int) -> "Timestamp":
        return cls.normalized(0, ns // 1000)

    def __add__(self, other: "Timestamp") -> "Timestamp":
        return Timestamp.normalized(self.seconds + other.seconds, self.micros + other.micros)

    def __sub__(self, other: "Timestamp") -> "Timestamp":
        return Timestamp.normalized(self.seconds - other.seconds, self.micros - other.micros)

    @property
    def negative(self) -> bool:
        return self.seconds < 0

    def as_float(self) -> float:
        return self.seconds + self.micros / USEC_PER_SEC


ZERO = Timestamp(0, 0)


def wall_clock() -> Timestamp:
    return Timestamp.from_ns(time.time_ns())


@dataclass
class StatsRecord:
    """Aggregated timing for one function."""

    count: int = 0
    cumulative: Timestamp = ZERO

    def update(self, elapsed: Timestamp) -> None:
        self.count += 1
        self.cumulative = self.cumulative + elapsed

    @property
    def average(self) -> float:
        return self.cumulative.as_float() / self.count if self.count else 0.0


def parse_int(text: Optional[str]) -> Optional[int]:
    """Leading integer of ``text`` the way C ``atoi`` reads it."""

    if not text:
        return None
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else None


def parse_level(text: Optional[str]) -> Optional[int]:
    level = parse_int(text)
    if level is None:
        return None
    return max(level, 0)


def parse_exit_code(text: Optional[str]) -> int:
    code = parse_int(text)
    return 0 if code is None else code


def parse_timestamp(text: Optional[str]) -> Optional[Timestamp]:
    if not text:
        return None
    match = _TIMESTAMP_RE.match(text)
    if not match:
        return None
    return Timestamp(int(match.group(1)), int(match.group(2)))


def parse_stats(text: Optional[str]) -> Optional[StatsRecord]:
    """Read ``<count> <sec>.<usec>``; the stored average is recomputed, not read."""

    if not text:
        return None
    match = _STATS_RE.match(text)
    if not match:
        return None
    count = int(match.group(1))
    if count <= 0:
        return None
    return StatsRecord(count, Timestamp(int(match.group(2)), int(match.group(3))))


def format_level(level: int) -> str:
    return f"{level}\n"


def format_timestamp(ts: Timestamp) -> str:
    return f"{ts.seconds}.{ts.micros:06d}\n"


def format_stats(stats: StatsRecord) -> str:
    cumulative = stats.cumulative
    return f"{stats.count} {cumulative.seconds}.{cumulative.micros:06d} {stats.average:f}\n"


__all__ = [
    "Timestamp",
    "StatsRecord",
    "ZERO",
    "wall_clock",
    "USEC_PER_SEC",
    "parse_int",
    "parse_level",
    "parse_exit_code",
    "parse_timestamp",
    "parse_stats",
    "format_level",
    "format_timestamp",
    "format_stats",
]
