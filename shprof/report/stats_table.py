"""Summarise every stats record in a state directory."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pandas as pd
import yaml
from loguru import logger
from pydantic import BaseModel

from ..timer.paths import STATS_SUFFIX
from ..timer.records import parse_stats
from ..utils.fileio import read_record

SORT_KEYS = ("calls", "total", "average")
FORMATS = ("text", "csv", "yaml")
COLUMNS = ["function", "calls", "total", "average"]


class FunctionStats(BaseModel):
    function: str
    calls: int
    total: float
    average: float


def collect_stats(directory: Path) -> List[FunctionStats]:
    """Load each ``*.sta`` record under ``directory``; malformed ones are skipped."""

    rows: List[FunctionStats] = []
    for path in sorted(directory.glob(f"*{STATS_SUFFIX}")):
        if not path.is_file():
            continue
        stats = parse_stats(read_record(path))
        if stats is None:
            logger.warning("skipping malformed stats record {}", path)
            continue
        rows.append(
            FunctionStats(
                function=path.name[: -len(STATS_SUFFIX)],
                calls=stats.count,
                total=stats.cumulative.as_float(),
                average=stats.average,
            )
        )
    return rows


def stats_table(
    rows: List[FunctionStats],
    sort_by: str = "total",
    descending: bool = True,
    limit: Optional[int] = None,
) -> pd.DataFrame:
    """Tabulate rows sorted by calls, total time or time per call."""

    if sort_by not in SORT_KEYS:
        raise ValueError(f"sort key must be one of {', '.join(SORT_KEYS)}")
    df = pd.DataFrame([row.model_dump() for row in rows], columns=COLUMNS)
    df = df.sort_values([sort_by, "function"], ascending=[not descending, True], kind="mergesort")
    if limit is not None:
        df = df.head(limit)
    return df.reset_index(drop=True)


def render(df: pd.DataFrame, fmt: str = "text") -> str:
    if fmt == "csv":
        return df.to_csv(index=False, float_format="%.6f")
    if fmt == "yaml":
        return yaml.safe_dump(df.to_dict(orient="records"), sort_keys=False)
    if fmt == "text":
        if df.empty:
            return "no stats recorded\n"
        return df.to_string(index=False, float_format=lambda v: f"{v:.6f}") + "\n"
    raise ValueError(f"format must be one of {', '.join(FORMATS)}")


__all__ = ["FunctionStats", "collect_stats", "stats_table", "render", "SORT_KEYS", "FORMATS"]
