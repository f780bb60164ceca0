"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Dungeon Master test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from dungeon_master.core.exceptions import GenerationFailedError, SynthesisFailedError


if TYPE_CHECKING:
    from collections.abc import Generator

    from dungeon_master.dm.narration import VoiceStyle


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from dungeon_master.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "DUNGEON_MASTER_AI_API_KEY": "test-ai-key",
        "DUNGEON_MASTER_AI_MODEL": "test-model",
        "DUNGEON_MASTER_TTS_API_KEY": "test-tts-key",
        "DUNGEON_MASTER_LOG_LEVEL": "DEBUG",
        "DUNGEON_MASTER_LOG_JSON": "true",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Collaborator Stubs
# =============================================================================


class StubGenerator:
    """NarrativeGenerator that returns canned text and records every call."""

    def __init__(self, response: str = "The torches flicker as the story moves on.") -> None:
        self.response = response
        self.calls: list[tuple[str, str]] = []

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        return self.response


class FailingGenerator:
    """NarrativeGenerator whose endpoint is always down."""

    def __init__(self) -> None:
        self.calls = 0

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        self.calls += 1
        raise GenerationFailedError("endpoint unavailable", model="test-model")


class StubSynthesizer:
    """SpeechSynthesizer that returns fixed audio, or fails on demand."""

    def __init__(self, audio: bytes = b"ID3-audio", *, fail: bool = False) -> None:
        self.audio = audio
        self.fail = fail
        self.calls: list[tuple[str, Any, str]] = []

    async def synthesize(self, text: str, voice_hint: VoiceStyle, language_code: str) -> bytes:
        self.calls.append((text, voice_hint, language_code))
        if self.fail:
            raise SynthesisFailedError("speech endpoint unavailable", model="tts-test")
        return self.audio


@pytest.fixture
def stub_generator() -> StubGenerator:
    return StubGenerator()


@pytest.fixture
def failing_generator() -> FailingGenerator:
    return FailingGenerator()


@pytest.fixture
def stub_synthesizer() -> StubSynthesizer:
    return StubSynthesizer()


@pytest.fixture
def failing_synthesizer() -> StubSynthesizer:
    return StubSynthesizer(fail=True)


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_character_stats() -> list[int]:
    """Ability scores in strength..charisma order.

    Returns:
        Six scores.
    """
    return [16, 14, 15, 10, 12, 8]


@pytest.fixture
def sample_character(sample_character_stats: list[int]) -> Any:
    """Create a Fighter with known ability scores.

    Returns:
        PlayerCharacter instance.
    """
    from dungeon_master.engine.character_factory import (
        build_saving_throws,
        build_skills,
        proficient_skills,
    )
    from dungeon_master.models.character import AbilityScores, PlayerCharacter, SpellSlot

    stats = AbilityScores.from_rolls(sample_character_stats)
    return PlayerCharacter(
        user_id="user-1",
        username="alice",
        name="Thorin",
        character_class="Fighter",
        race="Dwarf",
        background="Soldier",
        stats=stats,
        hit_points=12,
        max_hit_points=12,
        armor_class=16,
        skills=build_skills(stats, proficient_skills("Fighter", "Soldier")),
        saving_throws=build_saving_throws("Fighter", stats),
        spell_slots=[SpellSlot(level=1, total=2, used=0)],
        initiative=2,
    )


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def seeded_roller() -> Any:
    """Dice roller with a fixed seed.

    Returns:
        DiceRoller instance.
    """
    from dungeon_master.engine.dice import DiceRoller

    return DiceRoller(seed=42)


# =============================================================================
# Session Fixtures
# =============================================================================


@pytest.fixture
def repository() -> Any:
    from dungeon_master.storage.repository import SessionRepository

    return SessionRepository()


@pytest.fixture
def manager(repository: Any, stub_generator: StubGenerator, seeded_roller: Any) -> Any:
    """SessionManager wired to an in-memory repository and stub generator."""
    from dungeon_master.dm.session_manager import SessionManager
    from dungeon_master.engine.action_analyzer import ActionAnalyzer

    return SessionManager(repository, stub_generator, analyzer=ActionAnalyzer(seeded_roller))
