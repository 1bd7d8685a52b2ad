"""
Tests for mindease-common configuration module.

Validates that environment-based configuration loading, default values,
and validation constraints work correctly via pydantic-settings.
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from mindease_common.config import Settings, get_settings


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _clear_settings_cache() -> None:
    """Reset the ``get_settings`` lru_cache between tests."""
    get_settings.cache_clear()


def _clean_env() -> dict[str, str]:
    """Environment without ME_ variables so Settings reads only defaults."""
    return {k: v for k, v in os.environ.items() if not k.startswith("ME_")}


# ---------------------------------------------------------------------------
# Tests: default values
# ---------------------------------------------------------------------------


class TestSettingsDefaults:
    """Verify that ``Settings`` populates sane defaults when no env vars are set."""

    def test_default_poll_interval(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert Settings().poll_interval_s == 3.0

    def test_default_poll_policy_is_fixed_interval(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            s = Settings()
        assert s.poll_backoff_factor == 1.0
        assert s.max_poll_attempts == 200

    def test_default_backend_is_proxy(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            s = Settings()
        assert s.transcription_backend == "proxy"
        assert s.proxy_url == "http://localhost:3001"

    def test_default_assemblyai_base_url(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert Settings().assemblyai_base_url == "https://api.assemblyai.com"

    def test_default_storage_backend(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert Settings().storage_backend == "memory"

    def test_default_proxy_port(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert Settings().proxy_port == 3001

    def test_default_log_level(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert Settings().log_level == "INFO"


# ---------------------------------------------------------------------------
# Tests: environment variable overrides
# ---------------------------------------------------------------------------


class TestSettingsFromEnv:
    """Verify that env vars with ME_ prefix override defaults."""

    def test_override_poll_interval(self) -> None:
        with patch.dict(os.environ, {"ME_POLL_INTERVAL_S": "0.5"}):
            s = Settings()
        assert s.poll_interval_s == pytest.approx(0.5)

    def test_override_backend(self) -> None:
        with patch.dict(os.environ, {"ME_TRANSCRIPTION_BACKEND": "assemblyai"}):
            assert Settings().transcription_backend == "assemblyai"

    def test_override_api_key(self) -> None:
        with patch.dict(os.environ, {"ME_ASSEMBLYAI_API_KEY": "secret"}):
            assert Settings().assemblyai_api_key == "secret"

    def test_override_max_poll_attempts(self) -> None:
        with patch.dict(os.environ, {"ME_MAX_POLL_ATTEMPTS": "5"}):
            assert Settings().max_poll_attempts == 5

    def test_override_cors_origins_json(self) -> None:
        with patch.dict(os.environ, {"ME_CORS_ORIGINS": '["http://localhost:5173"]'}):
            assert Settings().cors_origins == ["http://localhost:5173"]


# ---------------------------------------------------------------------------
# Tests: validation constraints
# ---------------------------------------------------------------------------


class TestSettingsValidation:
    """Verify pydantic validators on ``Settings`` fields."""

    def test_poll_interval_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(poll_interval_s=0)  # type: ignore[call-arg]

    def test_backoff_factor_below_one(self) -> None:
        with pytest.raises(ValidationError):
            Settings(poll_backoff_factor=0.5)  # type: ignore[call-arg]

    def test_max_poll_attempts_zero(self) -> None:
        with pytest.raises(ValidationError):
            Settings(max_poll_attempts=0)  # type: ignore[call-arg]

    def test_proxy_port_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            Settings(proxy_port=70000)  # type: ignore[call-arg]


# ---------------------------------------------------------------------------
# Tests: get_settings singleton
# ---------------------------------------------------------------------------


class TestGetSettings:
    """Verify the cached ``get_settings()`` helper."""

    def setup_method(self) -> None:
        _clear_settings_cache()

    def teardown_method(self) -> None:
        _clear_settings_cache()

    def test_returns_settings_instance(self) -> None:
        assert isinstance(get_settings(), Settings)

    def test_cached(self) -> None:
        assert get_settings() is get_settings()
