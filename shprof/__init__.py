"""Top-level package for the Shell Script Profiler."""

from importlib.metadata import version

__all__ = ["__version__"]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return version("shell-script-profiler")
        except Exception:  # pragma: no cover - fallback when pkg metadata missing
            return "1.0.0"
    raise AttributeError(name)
