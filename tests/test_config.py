from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from shprof.errors import ConfigError
from shprof.utils.config import load_config


def test_defaults():
    config = load_config({})
    assert config.log_level == "WARNING"
    assert config.log_path is None
    assert config.lock is False


def test_file_then_environment(tmp_path):
    cfg_file = tmp_path / "shprof.yaml"
    cfg_file.write_text("log_level: info\nlock: true\nlog_file: /var/tmp/shprof.log\n")
    config = load_config({"SHPROF_CONFIG": str(cfg_file), "SHPROF_LOG_LEVEL": "debug"})
    assert config.log_level == "DEBUG"
    assert config.lock is True
    assert config.log_path == Path("/var/tmp/shprof.log")


def test_lock_from_environment():
    assert load_config({"SHPROF_LOCK": "true"}).lock is True


@pytest.mark.parametrize(
    "env",
    [
        {"SHPROF_LOG_LEVEL": "loud"},
        {"SHPROF_LOCK": "sometimes"},
        {"SHPROF_CONFIG": "/nonexistent/shprof.yaml"},
    ],
)
def test_invalid_settings(env):
    with pytest.raises(ConfigError):
        load_config(env)


def test_unknown_key_in_file(tmp_path):
    cfg_file = tmp_path / "shprof.yaml"
    cfg_file.write_text("colour: blue\n")
    with pytest.raises(ConfigError):
        load_config({"SHPROF_CONFIG": str(cfg_file)})


@pytest.mark.parametrize("content", [b"- a\n- b\n", b"\xff\xfe\x00\x01 not text\n"])
def test_file_must_be_a_text_mapping(tmp_path, content):
    cfg_file = tmp_path / "shprof.yaml"
    cfg_file.write_bytes(content)
    with pytest.raises(ConfigError):
        load_config({"SHPROF_CONFIG": str(cfg_file)})
