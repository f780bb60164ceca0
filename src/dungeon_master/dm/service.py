"""Dungeon Master operation surface.

DungeonMasterService is what a chat-platform adapter calls. Each operation
returns an OperationResult instead of raising: expected outcomes such as
"already acted" or "party full" come back as tagged failures, logged at info
level, while faults are logged as errors. Callers branch on ``error``, never
on message text.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass, field
from typing import Any

from dungeon_master.core.config import Settings, get_settings
from dungeon_master.core.exceptions import DungeonMasterError, ErrorKind
from dungeon_master.core.logging import configure_logging, get_logger
from dungeon_master.dm.generator import NarrativeGenerator, OpenAINarrativeGenerator
from dungeon_master.dm.narration import Narrator, OpenAISpeechSynthesizer
from dungeon_master.dm.session_manager import SessionManager
from dungeon_master.engine.action_analyzer import ActionAnalyzer
from dungeon_master.engine.dice import DiceRoller
from dungeon_master.models.character import InventoryItem
from dungeon_master.storage.repository import SessionRepository
from dungeon_master.storage.store import InMemorySessionStore, RedisSessionStore


logger = get_logger(__name__)


@dataclass
class OperationResult:
    """Result of a Dungeon Master operation.

    Attributes:
        success: Whether the operation succeeded.
        message: Text suitable for showing to the participant.
        data: Structured payload for the caller.
        error: Error tag when the operation failed.
    """

    success: bool
    message: str = ""
    data: dict[str, Any] = field(default_factory=dict)
    error: ErrorKind | None = None

    @classmethod
    def ok(cls, message: str = "", **data: Any) -> OperationResult:
        return cls(success=True, message=message, data=data)

    @classmethod
    def failed(cls, exc: DungeonMasterError) -> OperationResult:
        return cls(success=False, message=exc.message, data=dict(exc.details), error=exc.kind)


class DungeonMasterService:
    """Tagged-result facade over the session manager.

    Example:
        >>> service = DungeonMasterService.from_settings()
        >>> result = await service.start("vc-1", "guild-1", "user-1", party_size=3)
        >>> result.success
        True
    """

    def __init__(self, manager: SessionManager, *, roller: DiceRoller | None = None) -> None:
        self.manager = manager
        self.roller = roller or manager.analyzer.roller

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        generator: NarrativeGenerator | None = None,
    ) -> DungeonMasterService:
        """Wire a service from configuration.

        Configures logging, uses Redis for persistence when enabled (an
        in-memory store otherwise) and narrates only when speech is enabled.
        """
        settings = settings or get_settings()
        configure_logging(
            level=settings.log_level,
            json_format=settings.log_json,
            log_file=settings.log_file,
        )
        ttl = settings.redis.session_ttl_seconds
        if settings.redis.enabled:
            store = RedisSessionStore.from_settings(settings.redis)
        else:
            store = InMemorySessionStore(default_ttl=ttl)

        narrator = None
        if settings.speech.enabled:
            narrator = Narrator(OpenAISpeechSynthesizer(settings.speech))

        manager = SessionManager(
            SessionRepository(store, ttl=ttl),
            generator or OpenAINarrativeGenerator(settings.ai),
            analyzer=ActionAnalyzer(),
            narrator=narrator,
            settings=settings,
        )
        return cls(manager)

    async def _run(
        self,
        operation: str,
        call: Callable[[], Awaitable[OperationResult]],
    ) -> OperationResult:
        try:
            return await call()
        except DungeonMasterError as exc:
            if exc.is_user_facing:
                logger.info(
                    "Operation rejected",
                    operation=operation,
                    kind=str(exc.kind),
                    reason=exc.message,
                )
            else:
                logger.error(
                    "Operation failed",
                    operation=operation,
                    kind=str(exc.kind),
                    error=str(exc),
                )
            return OperationResult.failed(exc)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(
        self,
        voice_channel_id: str,
        guild_id: str,
        creator_id: str,
        *,
        party_level: int = 1,
        party_size: int = 1,
        theme: str | None = None,
        language: str | None = None,
    ) -> OperationResult:
        async def call() -> OperationResult:
            started = await self.manager.start_session(
                voice_channel_id, guild_id, creator_id, party_level, party_size, theme, language
            )
            return OperationResult.ok(
                started.welcome_message,
                session_id=started.session.session_id,
                voice_channel_id=voice_channel_id,
                status=str(started.session.status),
            )

        return await self._run("start", call)

    async def add_character(
        self,
        identifier: str,
        user_id: str,
        username: str,
        name: str,
        character_class: str,
        race: str,
        background: str = "",
        description: str = "",
    ) -> OperationResult:
        async def call() -> OperationResult:
            added = await self.manager.add_character(
                identifier, user_id, username, name, character_class, race, background, description
            )
            character = added.character
            message = f"{character.name} the {character.race} {character.character_class} joins the party!"
            if added.opening_scene:
                message = f"{message}\n\n{added.opening_scene}"
            return OperationResult.ok(
                message,
                character=character.model_dump(mode="json"),
                session_started=added.session_started,
                opening_scene=added.opening_scene,
            )

        return await self._run("add_character", call)

    async def end_session(self, identifier: str, requestor_id: str) -> OperationResult:
        async def call() -> OperationResult:
            session = await self.manager.end_session(identifier, requestor_id)
            return OperationResult.ok(
                "The session has ended. Thanks for playing!",
                session_id=session.session_id,
                end_reason=session.end_reason,
                rounds=session.session_round,
            )

        return await self._run("end_session", call)

    async def handle_player_death(
        self, identifier: str, user_id: str, cause: str = "Unknown causes"
    ) -> OperationResult:
        async def call() -> OperationResult:
            outcome = await self.manager.handle_player_death(identifier, user_id, cause)
            return OperationResult.ok(outcome.message, session_ended=outcome.session_ended)

        return await self._run("handle_player_death", call)

    # -------------------------------------------------------------------------
    # Rounds
    # -------------------------------------------------------------------------

    async def track_player_action(
        self, identifier: str, user_id: str, action_text: str
    ) -> OperationResult:
        async def call() -> OperationResult:
            tracked = await self.manager.track_player_action(identifier, user_id, action_text)
            if tracked.all_acted:
                message = "Action recorded. Everyone has acted; the round is ready to resolve."
            else:
                message = f"Action recorded. Waiting on: {', '.join(tracked.waiting_on)}"
            if tracked.roll is not None:
                message = f"{message}\n{tracked.roll.summary()}"
            return OperationResult.ok(
                message,
                all_acted=tracked.all_acted,
                roll=tracked.roll.summary() if tracked.roll else None,
                waiting_on=tracked.waiting_on,
            )

        return await self._run("track_player_action", call)

    async def resolve_round(self, identifier: str) -> OperationResult:
        async def call() -> OperationResult:
            resolved = await self.manager.resolve_round(identifier)
            return OperationResult.ok(
                resolved.narrative,
                round=resolved.round,
                audio=resolved.audio,
            )

        return await self._run("resolve_round", call)

    async def generate_encounter(
        self, identifier: str, encounter_type: str = "combat", difficulty: str = "medium"
    ) -> OperationResult:
        async def call() -> OperationResult:
            encounter = await self.manager.generate_encounter(identifier, encounter_type, difficulty)
            return OperationResult.ok(encounter, encounter_type=encounter_type, difficulty=difficulty)

        return await self._run("generate_encounter", call)

    async def roll(self, notation: str) -> OperationResult:
        async def call() -> OperationResult:
            result = self.roller.roll_notation(notation)
            return OperationResult.ok(str(result), total=result.total, rolls=list(result.rolls))

        return await self._run("roll", call)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def get_status(self, identifier: str) -> OperationResult:
        async def call() -> OperationResult:
            report = await self.manager.get_status(identifier)
            lines = [f"Status: {report.status}", f"Round: {report.round}"]
            if report.party:
                lines.append("Party: " + "; ".join(report.party))
            if report.waiting:
                lines.append(f"Waiting on {len(report.waiting)} player(s)")
            return OperationResult.ok("\n".join(lines), **asdict(report))

        return await self._run("get_status", call)

    async def get_character(self, identifier: str, user_id: str) -> OperationResult:
        async def call() -> OperationResult:
            character = await self.manager.get_character(identifier, user_id)
            return OperationResult.ok(
                character.character_sheet(), character=character.model_dump(mode="json")
            )

        return await self._run("get_character", call)

    async def get_characters(self, identifier: str) -> OperationResult:
        async def call() -> OperationResult:
            characters = await self.manager.get_characters(identifier)
            return OperationResult.ok(
                "\n".join(pc.summary for pc in characters) or "No characters yet.",
                characters=[pc.model_dump(mode="json") for pc in characters],
            )

        return await self._run("get_characters", call)

    # -------------------------------------------------------------------------
    # Character sheet mutations
    # -------------------------------------------------------------------------

    async def update_currency(
        self, identifier: str, user_id: str, deltas: dict[str, int]
    ) -> OperationResult:
        async def call() -> OperationResult:
            currency = await self.manager.update_currency(identifier, user_id, deltas)
            return OperationResult.ok("Currency updated.", currency=currency.model_dump())

        return await self._run("update_currency", call)

    async def add_inventory_item(
        self, identifier: str, user_id: str, item: InventoryItem | dict[str, Any]
    ) -> OperationResult:
        async def call() -> OperationResult:
            added = await self.manager.add_inventory_item(identifier, user_id, item)
            return OperationResult.ok(f"Added {added.name}.", item=added.model_dump(mode="json"))

        return await self._run("add_inventory_item", call)

    async def remove_inventory_item(
        self, identifier: str, user_id: str, item_id: str
    ) -> OperationResult:
        async def call() -> OperationResult:
            removed = await self.manager.remove_inventory_item(identifier, user_id, item_id)
            if removed is None:
                return OperationResult.ok("No such item in the inventory.", removed=False)
            return OperationResult.ok(f"Removed {removed.name}.", removed=True, item_id=item_id)

        return await self._run("remove_inventory_item", call)

    async def update_spell_slots(
        self, identifier: str, user_id: str, level: int, used: int
    ) -> OperationResult:
        async def call() -> OperationResult:
            slot = await self.manager.update_spell_slots(identifier, user_id, level, used)
            return OperationResult.ok(
                f"Level {slot.level} slots: {slot.available}/{slot.total} available.",
                level=slot.level,
                total=slot.total,
                used=slot.used,
                available=slot.available,
            )

        return await self._run("update_spell_slots", call)

    async def add_cantrip(
        self, identifier: str, user_id: str, cantrip: dict[str, Any]
    ) -> OperationResult:
        async def call() -> OperationResult:
            known = await self.manager.add_cantrip(identifier, user_id, cantrip)
            return OperationResult.ok(f"Learned {known.name}.", cantrip=known.model_dump())

        return await self._run("add_cantrip", call)

    async def update_skill(
        self,
        identifier: str,
        user_id: str,
        skill: str,
        *,
        proficient: bool | None = None,
        modifier: int | None = None,
    ) -> OperationResult:
        async def call() -> OperationResult:
            entry = await self.manager.update_skill(
                identifier, user_id, skill, proficient=proficient, modifier=modifier
            )
            return OperationResult.ok("Skill updated.", skill=skill, **entry.model_dump())

        return await self._run("update_skill", call)

    # -------------------------------------------------------------------------
    # Story mutations
    # -------------------------------------------------------------------------

    async def track_npc_interaction(self, identifier: str, npc_name: str, text: str) -> OperationResult:
        async def call() -> OperationResult:
            await self.manager.track_npc_interaction(identifier, npc_name, text)
            return OperationResult.ok(f"Noted interaction with {npc_name}.")

        return await self._run("track_npc_interaction", call)

    async def update_quest(
        self, identifier: str, name: str, status: str = "active", progress: str = ""
    ) -> OperationResult:
        async def call() -> OperationResult:
            entry = await self.manager.update_quest(identifier, name, status, progress)
            return OperationResult.ok(f"Quest updated: {name}.", quest=name, **entry.model_dump())

        return await self._run("update_quest", call)

    async def update_environment(self, identifier: str, location: str, text: str) -> OperationResult:
        async def call() -> OperationResult:
            await self.manager.update_environment(identifier, location, text)
            return OperationResult.ok(f"Environment updated: {location}.")

        return await self._run("update_environment", call)

    async def add_important_event(self, identifier: str, text: str) -> OperationResult:
        async def call() -> OperationResult:
            await self.manager.add_important_event(identifier, text)
            return OperationResult.ok("Event recorded.")

        return await self._run("add_important_event", call)


__all__ = [
    "OperationResult",
    "DungeonMasterService",
]
