# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for configuration module."""

import logging

import pytest
from pydantic import ValidationError

from lionarray.config import AppSettings, settings


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the process environment and any .env file."""
    for name in (
        "LIONARRAY_LOG_LEVEL",
        "LIONARRAY_STRICT_REENTRANCY",
        "LIONARRAY_TRACE_CHANGES",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestAppSettings:
    def test_default_values(self, clean_env):
        config = AppSettings()
        assert config.LIONARRAY_LOG_LEVEL == "WARNING"
        assert config.LIONARRAY_STRICT_REENTRANCY is True
        assert config.LIONARRAY_TRACE_CHANGES is False
        assert config.log_level == logging.WARNING

    def test_env_override(self, clean_env, monkeypatch):
        monkeypatch.setenv("LIONARRAY_LOG_LEVEL", "debug")
        monkeypatch.setenv("LIONARRAY_STRICT_REENTRANCY", "false")
        monkeypatch.setenv("LIONARRAY_TRACE_CHANGES", "1")
        config = AppSettings()
        assert config.LIONARRAY_LOG_LEVEL == "DEBUG"
        assert config.log_level == logging.DEBUG
        assert config.LIONARRAY_STRICT_REENTRANCY is False
        assert config.LIONARRAY_TRACE_CHANGES is True

    def test_env_file(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("LIONARRAY_TRACE_CHANGES=true\n")
        assert AppSettings().LIONARRAY_TRACE_CHANGES is True

    def test_case_insensitive_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("lionarray_log_level", "error")
        assert AppSettings().log_level == logging.ERROR

    def test_keyword_override(self, clean_env):
        config = AppSettings(LIONARRAY_LOG_LEVEL="info")
        assert config.LIONARRAY_LOG_LEVEL == "INFO"

    def test_invalid_log_level(self, clean_env):
        with pytest.raises(ValidationError, match="Invalid log level"):
            AppSettings(LIONARRAY_LOG_LEVEL="chatty")

    def test_frozen(self, clean_env):
        config = AppSettings()
        with pytest.raises(ValidationError):
            config.LIONARRAY_TRACE_CHANGES = True

    def test_extra_ignored(self, clean_env):
        config = AppSettings(SOMETHING_ELSE="x")
        assert not hasattr(config, "SOMETHING_ELSE")


class TestSingleton:
    def test_module_instance(self):
        assert isinstance(settings, AppSettings)
        assert AppSettings._instance is settings

    def test_package_logger_level(self):
        assert logging.getLogger("lionarray").level == settings.log_level
