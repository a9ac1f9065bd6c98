from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from shprof.utils.config import CONFIG_ENV, ENV_OVERRIDES


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in [CONFIG_ENV, *ENV_OVERRIDES]:
        monkeypatch.delenv(var, raising=False)
