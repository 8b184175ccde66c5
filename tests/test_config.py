"""Tests for pacedhttp.config and the configuration models."""

from __future__ import annotations

from pathlib import Path

import pydantic
import pytest

from pacedhttp.cache import ResponseCache
from pacedhttp.config import (
    build_client_config,
    get_cache_dir,
    open_default_cache,
    resolve_client_config,
)
from pacedhttp.exceptions import ConfigError
from pacedhttp.models import CacheConfig, ClientConfig


# ---------------------------------------------------------------------------
# XDG cache directory
# ---------------------------------------------------------------------------


class TestCacheDir:
    def test_cache_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("pacedhttp.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_cache_dir()
        assert result == tmp_path / ".cache" / "pacedhttp"
        assert result.is_dir()

    def test_cache_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_cache"
        monkeypatch.setattr("pacedhttp.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CACHE_HOME", str(custom))

        result = get_cache_dir()
        assert result == custom / "pacedhttp"
        assert result.is_dir()

    def test_cache_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("pacedhttp.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_cache_dir()
        assert result == tmp_path / ".pacedhttp" / "cache"
        assert result.is_dir()

    def test_open_default_cache(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("pacedhttp.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))

        cache = open_default_cache()
        try:
            assert isinstance(cache, ResponseCache)
            assert cache.stats()["directory"] == str(tmp_path / "pacedhttp" / "responses")
        finally:
            cache.close()

    def test_open_default_cache_respects_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("pacedhttp.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))

        cache = open_default_cache(CacheConfig(enabled=False))
        assert cache.stats() == {"enabled": False}


# ---------------------------------------------------------------------------
# Client settings
# ---------------------------------------------------------------------------


class TestResolveClientConfig:
    def test_defaults(self) -> None:
        assert resolve_client_config() == ClientConfig(
            min_timeout_per_request=0, max_random_pre_request_timeout=0
        )

    def test_environment_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PACEDHTTP_MIN_TIMEOUT_PER_REQUEST", "250")
        monkeypatch.setenv("PACEDHTTP_MAX_RANDOM_PRE_REQUEST_TIMEOUT", "12.5")

        config = resolve_client_config()
        assert config.min_timeout_per_request == 250
        assert config.max_random_pre_request_timeout == 12.5

    def test_explicit_arguments_beat_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PACEDHTTP_MIN_TIMEOUT_PER_REQUEST", "250")

        config = resolve_client_config(min_timeout_per_request=10)
        assert config.min_timeout_per_request == 10

    def test_blank_environment_value_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PACEDHTTP_MIN_TIMEOUT_PER_REQUEST", "  ")
        assert resolve_client_config().min_timeout_per_request == 0

    def test_non_numeric_environment_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PACEDHTTP_MIN_TIMEOUT_PER_REQUEST", "fast")
        with pytest.raises(ConfigError, match="PACEDHTTP_MIN_TIMEOUT_PER_REQUEST"):
            resolve_client_config()

    def test_negative_environment_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PACEDHTTP_MAX_RANDOM_PRE_REQUEST_TIMEOUT", "-3")
        with pytest.raises(ConfigError, match="max_random_pre_request_timeout"):
            resolve_client_config()

    @pytest.mark.parametrize("value", [-1, float("nan"), float("inf"), "soon"])
    def test_invalid_values_rejected(self, value: object) -> None:
        with pytest.raises(ConfigError):
            build_client_config(min_timeout_per_request=value)


class TestClientConfigModel:
    def test_frozen(self) -> None:
        config = ClientConfig(min_timeout_per_request=5)
        with pytest.raises(pydantic.ValidationError):
            config.min_timeout_per_request = 10  # type: ignore[misc]

    def test_jitter_enabled(self) -> None:
        assert ClientConfig().jitter_enabled is False
        assert ClientConfig(max_random_pre_request_timeout=1).jitter_enabled is True

    def test_numeric_strings_coerced(self) -> None:
        assert ClientConfig(min_timeout_per_request="40").min_timeout_per_request == 40
