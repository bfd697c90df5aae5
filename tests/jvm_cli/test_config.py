"""Tests for configuration loading."""

from __future__ import annotations

import pytest

from jvm_cli.config import DEFAULT_TIMEOUT, DEFAULT_VERSION, load_config
from jvm_cli.errors import ConfigError
from jvm_cli.runtime.home import get_jvm_home


def test_home_from_environment(jvm_home):
    assert get_jvm_home() == jvm_home


def test_home_default(monkeypatch, tmp_path):
    monkeypatch.delenv("JVM_HOME", raising=False)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)
    assert get_jvm_home() == tmp_path / ".jvm"


def test_defaults_without_file(jvm_home):
    config = load_config(jvm_home)
    assert config.default_vendor == "oracle"
    assert config.default_version == DEFAULT_VERSION
    assert config.timeout == DEFAULT_TIMEOUT


def test_reads_config_file(jvm_home):
    jvm_home.mkdir()
    (jvm_home / "config.toml").write_text(
        '[install]\ndefault_vendor = "Temurin"\ndefault_version = "17"\n\n[network]\ntimeout = 90\n',
        encoding="utf-8",
    )

    config = load_config(jvm_home)

    assert config.default_vendor == "temurin"
    assert config.default_version == "17"
    assert config.timeout == 90.0


def test_environment_overrides_file(jvm_home, monkeypatch):
    jvm_home.mkdir()
    (jvm_home / "config.toml").write_text('[install]\ndefault_version = "17"\n', encoding="utf-8")
    monkeypatch.setenv("JVM_DEFAULT_VERSION", "11")
    monkeypatch.setenv("JVM_HTTP_TIMEOUT", "5")

    config = load_config(jvm_home)

    assert config.default_version == "11"
    assert config.timeout == 5.0


def test_invalid_toml(jvm_home):
    jvm_home.mkdir()
    (jvm_home / "config.toml").write_text("[install\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Cannot read"):
        load_config(jvm_home)


@pytest.mark.parametrize("value", ["soon", "-1", "0"])
def test_invalid_timeout(jvm_home, monkeypatch, value):
    monkeypatch.setenv("JVM_HTTP_TIMEOUT", value)
    with pytest.raises(ConfigError):
        load_config(jvm_home)


def test_wrong_type_in_file(jvm_home):
    jvm_home.mkdir()
    (jvm_home / "config.toml").write_text("[install]\ndefault_version = 17\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="default_version"):
        load_config(jvm_home)
