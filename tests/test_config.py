"""Tests for roost.config — AppConfig and environment loading."""

import dataclasses

import pytest

from roost.config import AppConfig
from roost.errors import ConfigurationError
from roost.middleware.access_control import AccessControlConfig


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.port == 8000
        assert config.idle_timeout == 60
        assert config.read_timeout == 30
        assert config.write_timeout == 30
        assert config.access_control == AccessControlConfig()
        assert config.is_development is False

    def test_development(self) -> None:
        assert AppConfig(version="development").is_development is True

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            AppConfig().port = 1  # type: ignore[misc]


class TestFromEnv:
    def test_reads_prefixed_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROOST_PORT", "3000")
        monkeypatch.setenv("ROOST_VERSION", "development")
        monkeypatch.setenv("ROOST_DEBUG", "true")
        config = AppConfig.from_env()
        assert config.port == 3000
        assert config.version == "development"
        assert config.debug is True

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROOST_PORT", "3000")
        assert AppConfig.from_env(port=9000).port == 9000

    def test_custom_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MYAPP_HOST", "0.0.0.0")
        assert AppConfig.from_env(prefix="MYAPP_").host == "0.0.0.0"

    def test_bad_int(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROOST_IDLE_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError):
            AppConfig.from_env()

    def test_unset_keeps_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ROOST_PORT", raising=False)
        assert AppConfig.from_env().port == 8000
