"""Tests for DM prompt assembly."""

from __future__ import annotations

import pytest

from dungeon_master.dm.prompts import (
    build_encounter_prompt,
    build_opening_scene_prompt,
    build_round_prompt,
    build_system_prompt,
    build_welcome_prompt,
)
from dungeon_master.models.character import PlayerCharacter
from dungeon_master.models.enums import EncounterDifficulty, EncounterType
from dungeon_master.models.session import PendingAction, Session


@pytest.fixture
def session(sample_character: PlayerCharacter) -> Session:
    return Session(
        voice_channel_id="voice-1",
        theme="gothic horror",
        party_level=3,
        current_location="Ravenloft Gate",
        players={"user-1": sample_character},
    )


class TestPrompts:
    """Tests for prompt builders."""

    def test_system_prompt_carries_language(self, session: Session) -> None:
        session.language = "de"

        prompt = build_system_prompt(session)

        assert "Dungeon Master" in prompt
        assert "German" in prompt
        assert "{language_directive}" not in prompt

    def test_welcome_prompt(self, session: Session) -> None:
        prompt = build_welcome_prompt(session)

        assert "Theme: gothic horror" in prompt
        assert "Party Level: 3" in prompt

    def test_opening_scene_lists_party(self, session: Session) -> None:
        prompt = build_opening_scene_prompt(session)

        assert "- Thorin, Dwarf Fighter (Level 1)" in prompt
        assert "Starting Location: Ravenloft Gate" in prompt

    def test_round_prompt_includes_actions_and_dice(self, session: Session) -> None:
        session.pending_actions["user-1"] = PendingAction(
            action_text="I look around", dice_summary="Perception check: 1d20+1: [9] +1 = 10"
        )
        session.pending_actions["ghost"] = PendingAction(action_text="I wail")
        session.story_summary = "The party fled the village."

        prompt = build_round_prompt(session)

        assert "- Thorin: I look around" in prompt
        assert "Dice: Perception check" in prompt
        assert "- ghost: I wail" in prompt
        assert "- Story So Far: The party fled the village." in prompt
        assert "Round: 0" in prompt

    def test_round_prompt_without_summary(self, session: Session) -> None:
        session.pending_actions["user-1"] = PendingAction(action_text="I wait")

        assert "Story So Far" not in build_round_prompt(session)

    def test_encounter_prompt(self, session: Session) -> None:
        prompt = build_encounter_prompt(session, EncounterType.SOCIAL, EncounterDifficulty.HARD)

        assert "Create a social encounter." in prompt
        assert "- Difficulty: hard" in prompt
        assert "level 3 party" in prompt
