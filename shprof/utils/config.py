"""Runtime configuration built on :mod:`omegaconf`.

Sources, lowest to highest precedence:

* defaults from :class:`ProfilerConfig`
* the YAML file named by ``SHPROF_CONFIG``
* the ``SHPROF_LOG_LEVEL``, ``SHPROF_LOG_FILE`` and ``SHPROF_LOCK`` variables
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, cast

import yaml
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from ..errors import ConfigError

CONFIG_ENV = "SHPROF_CONFIG"

ENV_OVERRIDES = {
    "SHPROF_LOG_LEVEL": "log_level",
    "SHPROF_LOG_FILE": "log_file",
    "SHPROF_LOCK": "lock",
}

LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class ProfilerConfig:
    """Knobs shared by the timing and report commands."""

    log_level: str = "WARNING"
    log_file: Optional[str] = None
    lock: bool = False

    @property
    def log_path(self) -> Optional[Path]:
        return Path(self.log_file) if self.log_file else None


def load_config(environ: Optional[Mapping[str, str]] = None) -> ProfilerConfig:
    """Resolve the effective configuration.

    Args:
        environ: Environment mapping; defaults to ``os.environ``.
    Returns:
        A validated :class:`ProfilerConfig`.
    Raises:
        ConfigError: if the config file is unreadable or a value has the wrong type.
    """

    env = os.environ if environ is None else environ
    cfg = OmegaConf.structured(ProfilerConfig)
    try:
        config_file = env.get(CONFIG_ENV)
        if config_file:
            loaded = OmegaConf.load(config_file)
            if not isinstance(loaded, DictConfig):
                raise ConfigError(f"{config_file} must hold a mapping of settings")
            cfg = OmegaConf.merge(cfg, loaded)
        dotlist = [f"{key}={env[var]}" for var, key in ENV_OVERRIDES.items() if env.get(var)]
        if dotlist:
            cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(dotlist))
    except (OSError, ValueError, TypeError, yaml.YAMLError, OmegaConfBaseException) as exc:
        raise ConfigError(f"invalid profiler configuration: {exc}") from exc

    config = cast(ProfilerConfig, OmegaConf.to_object(cfg))
    config.log_level = config.log_level.upper()
    if config.log_level not in LOG_LEVELS:
        raise ConfigError(f"unknown log level {config.log_level!r}")
    return config


__all__ = ["ProfilerConfig", "load_config", "CONFIG_ENV", "ENV_OVERRIDES"]
