"""State-file locations for one profiled function."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ..errors import InvalidNameError

LEVEL_SUFFIX = ".lvl"
START_SUFFIX = ".str"
STATS_SUFFIX = ".sta"


@dataclass(frozen=True)
class StatePaths:
    directory: Path
    level: Path
    start: Path
    stats: Path


def state_paths(directory: str, function: str) -> StatePaths:
    """Build ``<directory>/<function><suffix>`` for the three records.

    Names are used verbatim; nothing is escaped.

    Raises:
        InvalidNameError: if either name is empty or the function name
            contains a path separator.
    """

    if not directory:
        raise InvalidNameError("state directory must not be empty")
    if not function:
        raise InvalidNameError("function name must not be empty")
    separators = {os.sep, os.altsep} - {None}
    if any(sep in function for sep in separators) or "\0" in function or "\0" in directory:
        raise InvalidNameError(f"function name {function!r} cannot be used as a file name")

    base = Path(directory)
    return StatePaths(
        directory=base,
        level=base / f"{function}{LEVEL_SUFFIX}",
        start=base / f"{function}{START_SUFFIX}",
        stats=base / f"{function}{STATS_SUFFIX}",
    )


__all__ = ["StatePaths", "state_paths", "LEVEL_SUFFIX", "START_SUFFIX", "STATS_SUFFIX"]
