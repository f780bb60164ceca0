"""Tests for the tagged-result operation surface."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from dungeon_master.core.config import RedisSettings, Settings, SpeechSettings
from dungeon_master.core.exceptions import ErrorKind
from dungeon_master.dm.service import DungeonMasterService, OperationResult
from dungeon_master.dm.session_manager import SessionManager
from dungeon_master.storage.store import InMemorySessionStore


pytestmark = pytest.mark.integration


@pytest.fixture
def service(manager: SessionManager) -> DungeonMasterService:
    return DungeonMasterService(manager)


class TestOperationResult:
    def test_ok(self) -> None:
        result = OperationResult.ok("done", round=2)

        assert result.success
        assert result.data == {"round": 2}
        assert result.error is None


class TestDungeonMasterService:
    """Tests for DungeonMasterService."""

    def test_happy_path(self, service: DungeonMasterService, stub_generator: Any) -> None:
        async def scenario() -> None:
            started = await service.start("voice-1", "guild-1", "user-1", party_size=1)
            assert started.success
            assert started.message == stub_generator.response
            assert started.data["status"] == "character_creation"

            added = await service.add_character("voice-1", "user-1", "alice", "Aria", "Wizard", "Elf")
            assert added.success
            assert added.data["session_started"]
            assert added.message.startswith("Aria the Elf Wizard joins the party!")
            assert added.data["character"]["name"] == "Aria"

            tracked = await service.track_player_action("voice-1", "user-1", "I look around")
            assert tracked.data["all_acted"]
            assert tracked.data["roll"].startswith("Perception check")

            resolved = await service.resolve_round("voice-1")
            assert resolved.success
            assert resolved.data == {"round": 1, "audio": None}

            status = await service.get_status(started.data["session_id"])
            assert status.data["status"] == "active"
            assert status.data["round"] == 1
            assert "Round: 1" in status.message

            sheet = await service.get_character("voice-1", "user-1")
            assert sheet.message.startswith("Aria")

            ended = await service.end_session("voice-1", "user-1")
            assert ended.success
            assert ended.data["rounds"] == 1

        asyncio.run(scenario())

    def test_user_facing_failures_are_tagged(self, service: DungeonMasterService) -> None:
        async def scenario() -> None:
            missing = await service.get_status("nowhere")
            assert not missing.success
            assert missing.error == ErrorKind.SESSION_NOT_FOUND

            await service.start("voice-1", "guild-1", "user-1", party_size=2)
            duplicate = await service.start("voice-1", "guild-1", "user-2")
            assert duplicate.error == ErrorKind.SESSION_ALREADY_EXISTS

            early = await service.track_player_action("voice-1", "user-1", "I wait")
            assert early.error == ErrorKind.NOT_ACTIVE
            assert early.data["current_state"] == "character_creation"

            forbidden = await service.end_session("voice-1", "user-2")
            assert forbidden.error == ErrorKind.FORBIDDEN

            invalid = await service.start("voice-2", "guild-1", "user-1", party_size=99)
            assert invalid.error == ErrorKind.VALIDATION

        asyncio.run(scenario())

    def test_roll(self, service: DungeonMasterService) -> None:
        result = asyncio.run(service.roll("2d6+3"))

        assert result.success
        assert 5 <= result.data["total"] <= 15
        assert len(result.data["rolls"]) == 2

    def test_bad_roll(self, service: DungeonMasterService) -> None:
        result = asyncio.run(service.roll("two dice"))

        assert result.error == ErrorKind.INVALID_DICE_NOTATION
        assert result.data["expression"] == "two dice"

    def test_sheet_and_story_operations(self, service: DungeonMasterService) -> None:
        async def scenario() -> None:
            await service.start("voice-1", "guild-1", "user-1")
            await service.add_character("voice-1", "user-1", "alice", "Aria", "Wizard", "Elf")

            coins = await service.update_currency("voice-1", "user-1", {"gold": 5})
            assert coins.success
            bad_coins = await service.update_currency("voice-1", "user-1", {"zorkmid": 5})
            assert bad_coins.error == ErrorKind.VALIDATION

            item = await service.add_inventory_item("voice-1", "user-1", {"name": "Rope"})
            item_id = item.data["item"]["id"]
            removed = await service.remove_inventory_item("voice-1", "user-1", item_id)
            assert removed.data == {"removed": True, "item_id": item_id}
            missing = await service.remove_inventory_item("voice-1", "user-1", item_id)
            assert missing.data == {"removed": False}

            slots = await service.update_spell_slots("voice-1", "user-1", 1, 1)
            assert slots.data["available"] == 1
            cantrip = await service.add_cantrip("voice-1", "user-1", {"name": "Mage Hand"})
            assert cantrip.message == "Learned Mage Hand."
            skill = await service.update_skill("voice-1", "user-1", "history", modifier=6)
            assert skill.data["modifier"] == 6

            assert (await service.track_npc_interaction("voice-1", "Mira", "Smiled")).success
            quest = await service.update_quest("voice-1", "Escort Mira", "completed")
            assert quest.data["status"] == "completed"
            assert (await service.update_environment("voice-1", "Road", "Muddy")).success
            assert (await service.add_important_event("voice-1", "Mira is safe")).success

            characters = await service.get_characters("voice-1")
            assert len(characters.data["characters"]) == 1

            encounter = await service.generate_encounter("voice-1", "social", "easy")
            assert encounter.success

            death = await service.handle_player_death("voice-1", "user-1", "Old age")
            assert death.data["session_ended"]

        asyncio.run(scenario())

    def test_failed_currency_update_leaves_purse_unchanged(
        self, service: DungeonMasterService
    ) -> None:
        async def scenario() -> None:
            await service.start("voice-1", "guild-1", "user-1")
            await service.add_character("voice-1", "user-1", "alice", "Aria", "Wizard", "Elf")
            before = (await service.get_character("voice-1", "user-1")).data["character"]

            unknown = await service.update_currency(
                "voice-1", "user-1", {"gold": -5, "rubies": 1}
            )
            fractional = await service.update_currency("voice-1", "user-1", {"gold": 2.5})

            assert unknown.error == ErrorKind.VALIDATION
            assert fractional.error == ErrorKind.VALIDATION
            after = (await service.get_character("voice-1", "user-1")).data["character"]
            assert after["currency"] == before["currency"]

        asyncio.run(scenario())

    @pytest.mark.parametrize(
        ("operation", "payload"),
        [
            ("add_inventory_item", {"name": "Rope", "quantity": 0}),
            ("add_inventory_item", {"quantity": 2}),
            ("add_inventory_item", ["not", "a", "mapping"]),
            ("add_cantrip", {"name": ""}),
            ("add_cantrip", {"school": "Evocation"}),
        ],
    )
    def test_invalid_sheet_payloads_are_tagged(
        self, service: DungeonMasterService, operation: str, payload: Any
    ) -> None:
        async def scenario() -> OperationResult:
            await service.start("voice-1", "guild-1", "user-1")
            await service.add_character("voice-1", "user-1", "alice", "Aria", "Wizard", "Elf")
            return await getattr(service, operation)("voice-1", "user-1", payload)

        result = asyncio.run(scenario())

        assert not result.success
        assert result.error == ErrorKind.VALIDATION

    def test_invalid_skill_modifier_is_tagged(self, service: DungeonMasterService) -> None:
        async def scenario() -> OperationResult:
            await service.start("voice-1", "guild-1", "user-1")
            await service.add_character("voice-1", "user-1", "alice", "Aria", "Wizard", "Elf")
            return await service.update_skill("voice-1", "user-1", "history", modifier="lots")

        assert asyncio.run(scenario()).error == ErrorKind.VALIDATION

    def test_from_settings_in_memory(
        self, stub_generator: Any, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        settings = Settings(
            redis=RedisSettings(enabled=False),
            speech=SpeechSettings(enabled=False),
        )
        calls: list[dict[str, Any]] = []
        monkeypatch.setattr(
            "dungeon_master.dm.service.configure_logging", lambda **kwargs: calls.append(kwargs)
        )

        service = DungeonMasterService.from_settings(settings, generator=stub_generator)

        assert calls == [{"level": "INFO", "json_format": False, "log_file": None}]

        assert isinstance(service.manager.repository.store, InMemorySessionStore)
        assert service.manager.narrator is None
        assert service.manager.generator is stub_generator
