"""Session state machine.

A session moves forward through three states:

    character_creation --(party full)--> active --(ended / all dead)--> ended

During character creation participants join until the party is full; the
session then switches to active exactly once and the opening scene is
generated. While active, each alive participant submits one action per
round. Resolving the round folds every pending action, its dice summary and
the story context into a single generation, advances the round counter and
clears the pending actions.

Every mutation of a session runs under that session's own asyncio.Lock,
keyed by the session's canonical key (its voice channel id). Narration is
synthesized after the lock is released.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, TypeVar

from pydantic import ValidationError as PydanticValidationError

from dungeon_master.core.config import Settings, get_settings
from dungeon_master.core.constants import (
    FALLBACK_ENCOUNTER,
    FALLBACK_OPENING_SCENE,
    FALLBACK_STORY_CONTINUATION,
    FALLBACK_WELCOME,
)
from dungeon_master.core.exceptions import (
    AlreadyActedError,
    CharacterCreationClosedError,
    CharacterNotFoundError,
    DuplicateCharacterError,
    ForbiddenError,
    GenerationFailedError,
    NoPendingActionsError,
    PartyFullError,
    PlayerDeadError,
    SessionAlreadyExistsError,
    SessionNotActiveError,
    SessionNotFoundError,
    ValidationError,
)
from dungeon_master.core.logging import bind_context, get_logger, unbind_context
from dungeon_master.dm.generator import NarrativeGenerator
from dungeon_master.dm.languages import get_language, is_supported
from dungeon_master.dm.memory import StoryMemory
from dungeon_master.dm.narration import Narrator
from dungeon_master.dm.prompts import (
    build_encounter_prompt,
    build_opening_scene_prompt,
    build_round_prompt,
    build_system_prompt,
    build_welcome_prompt,
)
from dungeon_master.engine.action_analyzer import ActionAnalyzer, AutomaticDiceRoll
from dungeon_master.engine.character_factory import CharacterIdentity, create_character
from dungeon_master.models.character import (
    Cantrip,
    Currency,
    InventoryItem,
    PlayerCharacter,
    SkillEntry,
    SpellSlot,
)
from dungeon_master.models.enums import (
    EncounterDifficulty,
    EncounterType,
    QuestStatus,
    SessionEndReason,
    SessionStatus,
    Skill,
)
from dungeon_master.models.session import (
    PendingAction,
    PlayerDeathEvent,
    QuestEntry,
    Session,
    SessionEndEvent,
)
from dungeon_master.storage.repository import SessionRepository


logger = get_logger(__name__)

T = TypeVar("T")


# =============================================================================
# Operation Results
# =============================================================================


@dataclass(frozen=True)
class SessionStarted:
    session: Session
    welcome_message: str


@dataclass(frozen=True)
class CharacterAdded:
    """Outcome of a successful join.

    Attributes:
        character: The created character.
        session_started: True only for the join that filled the party.
        opening_scene: Opening narration, set when the session started.
    """

    character: PlayerCharacter
    session_started: bool = False
    opening_scene: str | None = None


@dataclass(frozen=True)
class ActionTracked:
    accepted: bool
    all_acted: bool
    roll: AutomaticDiceRoll | None = None
    waiting_on: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RoundResolved:
    narrative: str
    round: int
    audio: bytes | None = None


@dataclass(frozen=True)
class DeathOutcome:
    session_ended: bool
    message: str


@dataclass(frozen=True)
class SessionStatusReport:
    """Read-only view of a session for status displays."""

    session_id: str
    voice_channel_id: str
    status: str
    round: int
    language: str
    theme: str
    current_location: str
    party: list[str]
    alive: list[str]
    dead: list[str]
    pending: list[str]
    waiting: list[str]
    end_reason: str | None = None


# =============================================================================
# Session Manager
# =============================================================================


class SessionManager:
    """Coordinates session lifecycle, rounds and story memory.

    Example:
        >>> manager = SessionManager(SessionRepository(), OpenAINarrativeGenerator())
        >>> started = await manager.start_session("vc-1", "guild", "creator", 1, 2)
        >>> await manager.add_character("vc-1", "u1", "alice", "Aria", "Wizard", "Elf")
    """

    def __init__(
        self,
        repository: SessionRepository,
        generator: NarrativeGenerator,
        analyzer: ActionAnalyzer | None = None,
        narrator: Narrator | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.repository = repository
        self.generator = generator
        self.analyzer = analyzer or ActionAnalyzer()
        self.narrator = narrator
        self.settings = settings or get_settings()
        self._locks: dict[str, asyncio.Lock] = {}
        logger.info("SessionManager initialized", narration=narrator is not None)

    # -------------------------------------------------------------------------
    # Locking and lookup
    # -------------------------------------------------------------------------

    def _get_lock(self, key: str) -> asyncio.Lock:
        self._prune_locks()
        return self._locks.setdefault(key, asyncio.Lock())

    def _prune_locks(self) -> None:
        """Forget idle locks whose session is no longer cached."""
        idle = [
            key
            for key, lock in self._locks.items()
            if not lock.locked() and self.repository.cached(key) is None
        ]
        for key in idle:
            del self._locks[key]

    async def _require(self, identifier: str) -> Session:
        session = await self.repository.get(identifier)
        if session is None:
            raise SessionNotFoundError(
                f"No session found for {identifier}", session_id=identifier
            )
        return session

    @asynccontextmanager
    async def _locked(self, identifier: str) -> AsyncIterator[Session]:
        """Hold the session's lock and yield the current session object.

        The session is looked up again once the lock is held, since it may
        have been retired while waiting.
        """
        session = await self._require(identifier)
        async with self._get_lock(session.canonical_key):
            current = await self._require(identifier)
            if current.session_id != session.session_id:
                raise SessionNotFoundError(
                    f"Session {session.session_id} has ended", session_id=session.session_id
                )
            bind_context(session_id=current.session_id)
            try:
                yield current
            finally:
                unbind_context("session_id")

    @staticmethod
    def _require_character(session: Session, user_id: str) -> PlayerCharacter:
        character = session.players.get(user_id)
        if character is None:
            raise CharacterNotFoundError(
                "You don't have a character in this session",
                session_id=session.session_id,
                user_id=user_id,
            )
        return character

    @staticmethod
    def _require_active(session: Session, user_id: str | None = None) -> None:
        if session.status != SessionStatus.ACTIVE:
            raise SessionNotActiveError(
                "The adventure has not started yet"
                if session.status == SessionStatus.CHARACTER_CREATION
                else "This session has ended",
                current_state=str(session.status),
                expected_states=[SessionStatus.ACTIVE.value],
                session_id=session.session_id,
                user_id=user_id,
            )

    async def _generate(self, session: Session, user_prompt: str, fallback: str, beat: str) -> str:
        try:
            return await self.generator.generate(build_system_prompt(session), user_prompt)
        except GenerationFailedError as exc:
            logger.warning("Generation failed, using fallback", beat=beat, error=str(exc))
            return fallback

    async def _retire(self, session: Session) -> None:
        """Drop an ended session from the cache and the durable store."""
        await self.repository.delete(session.canonical_key)
        self._locks.pop(session.canonical_key, None)
        logger.info(
            "Session retired",
            voice_channel_id=session.voice_channel_id,
            reason=session.end_reason,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start_session(
        self,
        voice_channel_id: str,
        guild_id: str,
        creator_id: str,
        party_level: int = 1,
        party_size: int = 1,
        theme: str | None = None,
        language: str | None = None,
    ) -> SessionStarted:
        """Create a session in character creation and welcome the table.

        Raises:
            ValidationError: If the channel id, party level or party size is invalid.
            SessionAlreadyExistsError: If the channel already hosts a live session.
        """
        game = self.settings.game
        if not voice_channel_id:
            raise ValidationError("A voice channel is required", field_name="voice_channel_id")
        if not game.min_party_size <= party_size <= game.max_party_size:
            raise ValidationError(
                f"Party size must be between {game.min_party_size} and {game.max_party_size}",
                field_name="party_size",
                invalid_value=party_size,
            )
        if not 1 <= party_level <= game.max_party_level:
            raise ValidationError(
                f"Party level must be between 1 and {game.max_party_level}",
                field_name="party_level",
                invalid_value=party_level,
            )

        requested = language or game.default_language
        if not is_supported(requested):
            logger.warning("Unsupported language, using English", language=requested)

        async with self._get_lock(voice_channel_id):
            existing = await self.repository.get(voice_channel_id)
            if existing is not None and not existing.is_ended:
                raise SessionAlreadyExistsError(
                    "There is already an active session in this voice channel",
                    session_id=existing.session_id,
                )

            session = Session(
                voice_channel_id=voice_channel_id,
                guild_id=guild_id,
                creator_id=creator_id,
                party_level=party_level,
                party_size=party_size,
                max_players=party_size,
                language=get_language(requested).code,
                theme=theme or game.default_theme,
                current_location=game.default_location,
            )
            session.story_context = (
                f"A level {party_level} party of {party_size} adventurers begins "
                f"their journey in a {session.theme} campaign."
            )
            bind_context(session_id=session.session_id)
            try:
                welcome = await self._generate(
                    session, build_welcome_prompt(session), FALLBACK_WELCOME, "welcome"
                )
                StoryMemory(session).append_history(f"Session started: {welcome}")
                await self.repository.save(session)
                logger.info(
                    "Session started",
                    voice_channel_id=voice_channel_id,
                    party_size=party_size,
                    party_level=party_level,
                    language=session.language,
                )
            finally:
                unbind_context("session_id")

        return SessionStarted(session=session, welcome_message=welcome)

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
    ) -> CharacterAdded:
        """Create a participant's character; start the game when the party fills.

        Raises:
            SessionNotFoundError: If the session does not exist.
            CharacterCreationClosedError: If the session is past character creation.
            DuplicateCharacterError: If the participant already has a character.
            PartyFullError: If every slot is taken.
            ValidationError: If the participant id or name is missing.
        """
        async with self._locked(identifier) as session:
            if session.status != SessionStatus.CHARACTER_CREATION:
                raise CharacterCreationClosedError(
                    "Character creation is closed for this session",
                    current_state=str(session.status),
                    expected_states=[SessionStatus.CHARACTER_CREATION.value],
                    session_id=session.session_id,
                    user_id=user_id,
                )
            if user_id in session.players:
                raise DuplicateCharacterError(
                    "You already have a character in this session",
                    session_id=session.session_id,
                    user_id=user_id,
                )
            if session.is_full:
                raise PartyFullError(
                    "This session is already full",
                    max_players=session.max_players,
                    session_id=session.session_id,
                    user_id=user_id,
                )

            character = create_character(
                CharacterIdentity(user_id=user_id, username=username, name=name),
                character_class,
                race,
                background,
                description,
                level=session.party_level,
                roller=self.analyzer.roller,
            )
            session.players[user_id] = character
            memory = StoryMemory(session)
            memory.append_history(
                f"Character added: {character.name} ({character.race} {character.character_class})"
            )
            logger.info(
                "Character joined",
                user_id=user_id,
                character=character.name,
                party=f"{len(session.players)}/{session.max_players}",
            )

            opening_scene = None
            if session.is_full:
                session.transition_to(SessionStatus.ACTIVE)
                opening_scene = await self._generate(
                    session,
                    build_opening_scene_prompt(session),
                    FALLBACK_OPENING_SCENE,
                    "opening_scene",
                )
                memory.append_history(f"Game started: {opening_scene}")
                memory.apply_story_beat(opening_scene)
                logger.info("Session active", players=len(session.players))

            session.touch()
            await self.repository.save(session)

        return CharacterAdded(
            character=character,
            session_started=opening_scene is not None,
            opening_scene=opening_scene,
        )

    async def end_session(
        self,
        identifier: str,
        requestor_id: str,
        *,
        reason: SessionEndReason = SessionEndReason.SESSION_ENDED,
    ) -> Session:
        """End a session on its creator's request and retire it.

        Raises:
            ForbiddenError: If the requestor did not create the session.
        """
        async with self._locked(identifier) as session:
            if requestor_id != session.creator_id:
                raise ForbiddenError(
                    "Only the session creator can end the session",
                    session_id=session.session_id,
                    user_id=requestor_id,
                )
            session.transition_to(SessionStatus.ENDED, reason=reason)
            session.end_event = SessionEndEvent(
                reason=reason,
                dead_players=[pc.name for pc in session.dead_players()],
            )
            StoryMemory(session).append_history(f"Session ended: {reason}")
            await self._retire(session)
        return session

    # -------------------------------------------------------------------------
    # Rounds
    # -------------------------------------------------------------------------

    async def track_player_action(
        self,
        identifier: str,
        user_id: str,
        action_text: str,
    ) -> ActionTracked:
        """Record a participant's action for the current round.

        A dice roll is made automatically when the action calls for one,
        and its summary is stored with the action.

        Raises:
            SessionNotActiveError: If the session is not active.
            CharacterNotFoundError: If the participant has no character.
            PlayerDeadError: If the character is dead.
            AlreadyActedError: If the participant already acted this round.
            ValidationError: If the action text is empty.
        """
        if not action_text or not action_text.strip():
            raise ValidationError("An action is required", field_name="action_text")
        action_text = action_text.strip()

        async with self._locked(identifier) as session:
            self._require_active(session, user_id)
            character = self._require_character(session, user_id)
            if not character.is_alive:
                raise PlayerDeadError(
                    f"{character.name} is dead and cannot act",
                    session_id=session.session_id,
                    user_id=user_id,
                )
            if user_id in session.pending_actions:
                raise AlreadyActedError(
                    "You have already acted this round",
                    session_id=session.session_id,
                    user_id=user_id,
                )

            roll = self.analyzer.generate_automatic_roll(action_text, character)
            session.pending_actions[user_id] = PendingAction(
                action_text=action_text,
                dice_summary=roll.summary() if roll else None,
            )
            session.player_actions.setdefault(user_id, []).append(action_text)
            session.touch()

            all_acted = session.all_alive_acted()
            waiting_on = [pc.name for pc in session.waiting_on()]
            logger.info(
                "Action tracked",
                user_id=user_id,
                rolled=roll is not None,
                all_acted=all_acted,
                waiting=len(waiting_on),
            )
            await self.repository.save(session)

        return ActionTracked(accepted=True, all_acted=all_acted, roll=roll, waiting_on=waiting_on)

    async def resolve_round(self, identifier: str) -> RoundResolved:
        """Resolve every pending action into one story continuation.

        The lock is held for the whole resolution, so a round resolves
        exactly once.

        Raises:
            SessionNotActiveError: If the session is not active.
            NoPendingActionsError: If nobody has acted this round.
        """
        async with self._locked(identifier) as session:
            self._require_active(session)
            if not session.pending_actions:
                raise NoPendingActionsError(
                    "No actions have been submitted this round",
                    session_id=session.session_id,
                )

            narrative = await self._generate(
                session,
                build_round_prompt(session),
                FALLBACK_STORY_CONTINUATION,
                "round",
            )

            memory = StoryMemory(session)
            for user_id, action in session.pending_actions.items():
                character = session.players.get(user_id)
                actor = character.name if character else user_id
                memory.append_event(f"Player action: {actor}: {action.action_text}")
            memory.append_event(f"DM response: {narrative}")
            memory.apply_story_beat(narrative)

            resolved = len(session.pending_actions)
            session.session_round += 1
            session.pending_actions.clear()
            session.touch()
            round_number = session.session_round
            language = session.language
            await self.repository.save(session)
            logger.info("Round resolved", round=round_number, actions=resolved)

        audio = await self.narrator.narrate(narrative, language) if self.narrator else None
        return RoundResolved(narrative=narrative, round=round_number, audio=audio)

    async def generate_encounter(
        self,
        identifier: str,
        encounter_type: EncounterType | str = EncounterType.COMBAT,
        difficulty: EncounterDifficulty | str = EncounterDifficulty.MEDIUM,
    ) -> str:
        """Generate an encounter without touching the round's pending actions.

        Raises:
            ValidationError: If the type or difficulty is unknown.
            SessionNotActiveError: If the session is not active.
        """
        try:
            encounter_type = EncounterType(encounter_type)
            difficulty = EncounterDifficulty(difficulty)
        except ValueError as exc:
            raise ValidationError(
                f"Unknown encounter type or difficulty: {encounter_type}, {difficulty}",
                field_name="encounter",
            ) from exc

        async with self._locked(identifier) as session:
            self._require_active(session)
            encounter = await self._generate(
                session,
                build_encounter_prompt(session, encounter_type, difficulty),
                FALLBACK_ENCOUNTER,
                "encounter",
            )
            StoryMemory(session).append_history(
                f"Generated {encounter_type} encounter: {encounter}"
            )
            session.touch()
            await self.repository.save(session)
            logger.info("Encounter generated", type=str(encounter_type), difficulty=str(difficulty))
        return encounter

    async def handle_player_death(
        self,
        identifier: str,
        user_id: str,
        cause: str = "Unknown causes",
    ) -> DeathOutcome:
        """Mark a character dead; end the session if nobody is left alive.

        Reporting a character that is already dead changes nothing.
        """
        async with self._locked(identifier) as session:
            character = self._require_character(session, user_id)
            if not character.is_alive:
                return DeathOutcome(
                    session_ended=session.is_ended,
                    message=f"{character.name} has already fallen.",
                )

            character.mark_dead()
            session.death_events.append(
                PlayerDeathEvent(
                    player_id=user_id,
                    character_name=character.name,
                    cause=cause,
                )
            )
            StoryMemory(session).add_important_event(f"{character.name} died: {cause}")
            logger.info("Player died", user_id=user_id, character=character.name, cause=cause)

            survivors = session.alive_players()
            if survivors:
                session.touch()
                await self.repository.save(session)
                names = ", ".join(pc.name for pc in survivors)
                return DeathOutcome(
                    session_ended=False,
                    message=(
                        f"{character.name} has died ({cause}). "
                        f"The adventure continues with: {names}."
                    ),
                )

            session.transition_to(SessionStatus.ENDED, reason=SessionEndReason.ALL_PLAYERS_DEAD)
            fallen = [pc.name for pc in session.players.values()]
            session.end_event = SessionEndEvent(
                reason=SessionEndReason.ALL_PLAYERS_DEAD,
                dead_players=fallen,
            )
            await self._retire(session)

        return DeathOutcome(
            session_ended=True,
            message=(
                f"{character.name} has died ({cause}). The whole party has fallen: "
                f"{', '.join(fallen)}. Game over."
            ),
        )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def get_session(self, identifier: str) -> Session:
        """Raises SessionNotFoundError if nothing is registered under identifier."""
        return await self._require(identifier)

    async def get_character(self, identifier: str, user_id: str) -> PlayerCharacter:
        session = await self._require(identifier)
        return self._require_character(session, user_id)

    async def get_characters(self, identifier: str) -> list[PlayerCharacter]:
        session = await self._require(identifier)
        return list(session.players.values())

    async def get_status(self, identifier: str) -> SessionStatusReport:
        session = await self._require(identifier)
        return SessionStatusReport(
            session_id=session.session_id,
            voice_channel_id=session.voice_channel_id,
            status=str(session.status),
            round=session.session_round,
            language=session.language,
            theme=session.theme,
            current_location=session.current_location,
            party=[pc.summary for pc in session.players.values()],
            alive=[pc.name for pc in session.alive_players()],
            dead=[pc.name for pc in session.dead_players()],
            pending=list(session.pending_actions),
            waiting=[pc.user_id for pc in session.waiting_on()],
            end_reason=session.end_reason,
        )

    # -------------------------------------------------------------------------
    # Character sheet mutations
    # -------------------------------------------------------------------------

    async def _mutate_character(
        self,
        identifier: str,
        user_id: str,
        mutate: Callable[[PlayerCharacter], T],
        operation: str,
    ) -> T:
        async with self._locked(identifier) as session:
            character = self._require_character(session, user_id)
            try:
                result = mutate(character)
            except PydanticValidationError as exc:
                raise ValidationError(
                    f"Invalid {operation} update: {exc}", field_name=operation
                ) from exc
            session.touch()
            await self.repository.save(session)
            logger.debug("Character updated", user_id=user_id, operation=operation)
        return result

    async def update_currency(
        self, identifier: str, user_id: str, deltas: dict[str, int]
    ) -> Currency:
        return await self._mutate_character(
            identifier, user_id, lambda pc: pc.update_currency(deltas), "currency"
        )

    async def add_inventory_item(
        self, identifier: str, user_id: str, item: InventoryItem | dict[str, Any]
    ) -> InventoryItem:
        return await self._mutate_character(
            identifier, user_id, lambda pc: pc.add_inventory_item(item), "add_item"
        )

    async def remove_inventory_item(
        self, identifier: str, user_id: str, item_id: str
    ) -> InventoryItem | None:
        return await self._mutate_character(
            identifier, user_id, lambda pc: pc.remove_inventory_item(item_id), "remove_item"
        )

    async def update_spell_slots(
        self, identifier: str, user_id: str, level: int, used: int
    ) -> SpellSlot:
        return await self._mutate_character(
            identifier, user_id, lambda pc: pc.update_spell_slots(level, used), "spell_slots"
        )

    async def add_cantrip(
        self, identifier: str, user_id: str, cantrip: Cantrip | dict[str, Any]
    ) -> Cantrip:
        return await self._mutate_character(
            identifier, user_id, lambda pc: pc.add_cantrip(cantrip), "cantrip"
        )

    async def update_skill(
        self,
        identifier: str,
        user_id: str,
        skill: Skill | str,
        *,
        proficient: bool | None = None,
        modifier: int | None = None,
    ) -> SkillEntry:
        return await self._mutate_character(
            identifier,
            user_id,
            lambda pc: pc.update_skill(skill, proficient=proficient, modifier=modifier),
            "skill",
        )

    # -------------------------------------------------------------------------
    # Story mutations
    # -------------------------------------------------------------------------

    async def _mutate_story(
        self,
        identifier: str,
        mutate: Callable[[StoryMemory], T],
    ) -> T:
        async with self._locked(identifier) as session:
            result = mutate(StoryMemory(session))
            session.touch()
            await self.repository.save(session)
        return result

    async def track_npc_interaction(self, identifier: str, npc_name: str, text: str) -> None:
        await self._mutate_story(identifier, lambda m: m.track_npc_interaction(npc_name, text))

    async def update_quest(
        self,
        identifier: str,
        name: str,
        status: QuestStatus | str = QuestStatus.ACTIVE,
        progress: str = "",
    ) -> QuestEntry:
        try:
            status = QuestStatus(status)
        except ValueError as exc:
            raise ValidationError(
                f"Unknown quest status: {status}", field_name="status", invalid_value=status
            ) from exc
        return await self._mutate_story(identifier, lambda m: m.update_quest(name, status, progress))

    async def update_environment(self, identifier: str, location: str, text: str) -> None:
        await self._mutate_story(identifier, lambda m: m.update_environment(location, text))

    async def add_important_event(self, identifier: str, text: str) -> None:
        await self._mutate_story(identifier, lambda m: m.add_important_event(text))


__all__ = [
    "SessionStarted",
    "CharacterAdded",
    "ActionTracked",
    "RoundResolved",
    "DeathOutcome",
    "SessionStatusReport",
    "SessionManager",
]
