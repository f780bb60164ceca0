"""Tests for configuration management."""

from __future__ import annotations

import pytest

from dungeon_master.core.config import (
    AIProviderSettings,
    GameSettings,
    RedisSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from dungeon_master.core.exceptions import ConfigurationError


class TestAIProviderSettings:
    """Tests for AIProviderSettings configuration."""

    def test_default_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the default endpoint is DeepSeek-compatible."""
        monkeypatch.delenv("DUNGEON_MASTER_AI_API_KEY", raising=False)
        settings = AIProviderSettings()

        assert settings.base_url == "https://api.deepseek.com/v1"
        assert settings.model == "deepseek-chat"
        assert settings.api_key is None

    def test_api_key_is_secret(self, mock_env_vars: dict[str, str]) -> None:
        """Test the API key is not exposed by repr."""
        settings = AIProviderSettings()

        assert settings.api_key is not None
        assert settings.api_key.get_secret_value() == "test-ai-key"
        assert "test-ai-key" not in repr(settings)


class TestRedisSettings:
    """Tests for RedisSettings configuration."""

    def test_default_values(self) -> None:
        settings = RedisSettings()

        assert settings.enabled is False
        assert settings.key_prefix == "dnd_session:"
        assert settings.session_ttl_seconds == 3600

    def test_blank_key_prefix_rejected(self) -> None:
        """Test that an empty key prefix is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            RedisSettings(key_prefix="   ")

        assert "key_prefix" in str(exc_info.value)


class TestGameSettings:
    """Tests for GameSettings configuration."""

    def test_party_bounds_validation(self) -> None:
        """Test that min_party_size must not exceed max_party_size."""
        with pytest.raises(ConfigurationError) as exc_info:
            GameSettings(min_party_size=5, max_party_size=3)

        assert "min_party_size" in str(exc_info.value)

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DUNGEON_MASTER_GAME_MAX_PARTY_SIZE", "4")

        assert GameSettings().max_party_size == 4


class TestSettings:
    """Tests for main Settings configuration."""

    def test_env_loading(self, mock_env_vars: dict[str, str]) -> None:
        """Test settings load from environment variables."""
        settings = Settings()

        assert settings.log_level == "DEBUG"
        assert settings.log_json is True
        assert settings.log_file is None
        assert settings.ai.model == "test-model"

    def test_nested_defaults(self) -> None:
        settings = Settings()

        assert settings.game.default_language == "en"
        assert settings.redis.key_prefix == "dnd_session:"


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_cached(self) -> None:
        """Test get_settings returns the same instance until cleared."""
        first = get_settings()

        assert get_settings() is first
        clear_settings_cache()
        assert get_settings() is not first

    def test_invalid_value_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test an invalid environment value surfaces as ConfigurationError."""
        monkeypatch.setenv("DUNGEON_MASTER_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError):
            get_settings()
