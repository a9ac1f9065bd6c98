"""File IO helpers for the per-function state records.

Every failure here is soft: it is logged and reported through the return
value so the instrumented shell function never sees it.
"""

from __future__ import annotations

import contextlib
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterator, Optional

from loguru import logger

try:  # pragma: no cover - not available on Windows
    import fcntl
except ImportError:  # pragma: no cover
    fcntl = None  # type: ignore

RECORD_MODE = 0o600


def read_record(path: Path) -> Optional[str]:
    """Return the whole content of a record, or ``None`` if it cannot be read."""

    try:
        return path.read_text(encoding="ascii", errors="replace")
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.warning("cannot read {}: {}", path, exc)
        return None


def write_record(path: Path, text: str) -> bool:
    """Replace a record's content atomically.

    The new content goes to a temporary file in the same directory which is
    then renamed over ``path``. A new record is created with mode 0600, an
    existing one keeps its permissions.

    Returns:
        ``True`` if the record now holds ``text``.
    """

    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = RECORD_MODE
    except OSError as exc:
        logger.warning("cannot stat {}: {}", path, exc)
        return False

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="ascii") as fh:
            fh.write(text)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
        return True
    except OSError as exc:
        logger.warning("cannot write {}: {}", path, exc)
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
        return False


def remove_record(path: Path) -> None:
    """Delete a record, ignoring absence."""

    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("cannot remove {}: {}", path, exc)


@contextlib.contextmanager
def state_lock(directory: Path, enabled: bool = True) -> Iterator[bool]:
    """Hold an exclusive advisory lock on ``directory`` for the block.

    Yields whether the lock is actually held. Locking the directory itself
    keeps the state directory free of extra files.
    """

    if not enabled:
        yield False
        return
    if fcntl is None:  # pragma: no cover
        logger.debug("advisory locking unavailable on this platform")
        yield False
        return

    try:
        fd = os.open(directory, os.O_RDONLY)
    except OSError as exc:
        logger.warning("cannot open {} for locking: {}", directory, exc)
        yield False
        return

    try:
        try:
            fcntl.flock(fd, fcntl.LOCK_EX)
        except OSError as exc:
            logger.warning("cannot lock {}: {}", directory, exc)
            yield False
            return
        try:
            yield True
        finally:
            fcntl.flock(fd, fcntl.LOCK_UN)
    finally:
        os.close(fd)


__all__ = ["read_record", "write_record", "remove_record", "state_lock", "RECORD_MODE"]
