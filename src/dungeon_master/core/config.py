"""Configuration management for the Dungeon Master session engine.

This module provides centralized configuration using pydantic-settings,
supporting environment variables and .env files. API keys and the Redis
password are held as SecretStr.

Example:
    >>> from dungeon_master.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.ai.model
    'deepseek-chat'

Environment Variables:
    DUNGEON_MASTER_AI_API_KEY: Key for the chat-completion endpoint
    DUNGEON_MASTER_AI_BASE_URL: OpenAI-compatible chat endpoint
    DUNGEON_MASTER_AI_MODEL: Chat model used for narration
    DUNGEON_MASTER_TTS_API_KEY: Key for the speech endpoint
    DUNGEON_MASTER_TTS_MODEL: Speech model
    DUNGEON_MASTER_REDIS_HOST / _PORT / _PASSWORD / _DB: Redis connection
    DUNGEON_MASTER_GAME_DEFAULT_LANGUAGE: Narration language for new sessions
    DUNGEON_MASTER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DUNGEON_MASTER_LOG_JSON: Emit JSON log lines
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dungeon_master.core.exceptions import ConfigurationError


class AIProviderSettings(BaseSettings):
    """Configuration for the narrative chat-completion endpoint.

    Attributes:
        api_key: API key for the OpenAI-compatible endpoint.
        base_url: Base URL of the endpoint.
        model: Chat model identifier.
        temperature: Sampling temperature for story beats.
        max_tokens: Completion token cap for story beats.
        timeout_seconds: Request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="DUNGEON_MASTER_AI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: SecretStr | None = Field(
        default=None,
        description="Chat endpoint API key",
    )
    base_url: str = Field(
        default="https://api.deepseek.com/v1",
        description="OpenAI-compatible chat endpoint",
    )
    model: str = Field(
        default="deepseek-chat",
        description="Chat model used for narration",
    )
    temperature: float = Field(
        default=0.8,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )
    max_tokens: int = Field(
        default=500,
        ge=50,
        le=4000,
        description="Completion token cap",
    )
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        le=300,
        description="API request timeout",
    )


class SpeechSettings(BaseSettings):
    """Configuration for the text-to-speech endpoint.

    Attributes:
        enabled: Whether narration audio is produced at all.
        api_key: API key for the speech endpoint.
        base_url: Base URL of the speech endpoint.
        model: Speech model identifier.
        default_voice: Voice used when no style heuristic applies.
        timeout_seconds: Request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="DUNGEON_MASTER_TTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Produce narration audio")
    api_key: SecretStr | None = Field(
        default=None,
        description="Speech endpoint API key",
    )
    base_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI-compatible speech endpoint",
    )
    model: str = Field(default="tts-1", description="Speech model")
    default_voice: str = Field(default="alloy", description="Fallback voice")
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="API request timeout",
    )


class RedisSettings(BaseSettings):
    """Configuration for the durable Redis session store.

    Attributes:
        enabled: Use Redis as durable backing (in-memory only when False).
        host: Redis host name.
        port: Redis port.
        password: Optional Redis password.
        db: Redis database index.
        key_prefix: Prefix prepended to every session key.
        session_ttl_seconds: Sliding expiration applied on every read and write.
    """

    model_config = SettingsConfigDict(
        env_prefix="DUNGEON_MASTER_REDIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(default=False, description="Use Redis for durability")
    host: str = Field(default="localhost", description="Redis host")
    port: int = Field(default=6379, ge=1, le=65535, description="Redis port")
    password: SecretStr | None = Field(default=None, description="Redis password")
    db: int = Field(default=0, ge=0, description="Redis database index")
    key_prefix: str = Field(default="dnd_session:", description="Session key prefix")
    session_ttl_seconds: int = Field(
        default=3600,
        ge=60,
        description="Sliding session expiration",
    )

    @field_validator("key_prefix", mode="after")
    @classmethod
    def validate_key_prefix(cls, value: str) -> str:
        """Reject an empty prefix, which would make listing scan the whole keyspace.

        Args:
            value: The configured prefix.

        Returns:
            The validated prefix.

        Raises:
            ConfigurationError: If the prefix is blank.
        """
        if not value.strip():
            raise ConfigurationError(
                "Redis key prefix must not be empty",
                config_key="key_prefix",
            )
        return value


class GameSettings(BaseSettings):
    """Configuration for session defaults.

    Attributes:
        default_language: Narration language for new sessions.
        default_theme: Story theme when the creator does not choose one.
        default_location: Starting location text.
        min_party_size: Smallest allowed party.
        max_party_size: Largest allowed party.
        max_party_level: Highest allowed starting party level.
    """

    model_config = SettingsConfigDict(
        env_prefix="DUNGEON_MASTER_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_language: str = Field(default="en", description="Default language code")
    default_theme: str = Field(
        default="fantasy adventure",
        description="Default story theme",
    )
    default_location: str = Field(
        default="A mysterious tavern",
        description="Starting location",
    )
    min_party_size: int = Field(default=1, ge=1, description="Smallest party")
    max_party_size: int = Field(default=6, ge=1, le=10, description="Largest party")
    max_party_level: int = Field(default=20, ge=1, le=20, description="Highest level")

    @model_validator(mode="after")
    def validate_party_bounds(self) -> "GameSettings":
        """Ensure the party size bounds are ordered.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If min_party_size exceeds max_party_size.
        """
        if self.min_party_size > self.max_party_size:
            raise ConfigurationError(
                f"min_party_size ({self.min_party_size}) must not exceed "
                f"max_party_size ({self.max_party_size})",
                config_key="min_party_size",
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        log_level: Application logging level.
        log_json: Emit JSON log lines instead of console output.
        log_file: Optional file that also receives log output.
        ai: Narrative endpoint settings.
        speech: Speech endpoint settings.
        redis: Durable store settings.
        game: Session default settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DUNGEON_MASTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(default=False, description="JSON log output")
    log_file: str | None = Field(default=None, description="Optional log file path")

    ai: AIProviderSettings = Field(default_factory=AIProviderSettings)
    speech: SpeechSettings = Field(default_factory=SpeechSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    game: GameSettings = Field(default_factory=GameSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If required configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "AIProviderSettings",
    "SpeechSettings",
    "RedisSettings",
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
