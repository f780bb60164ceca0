"""Session models.

The Session is the closed, typed record of one game bound to a voice
channel: lifecycle status, party, the round's pending actions and the
narrative memory fed back into every prompt.
"""

from __future__ import annotations

import secrets
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from dungeon_master.core.exceptions import InvalidSessionStateError
from dungeon_master.models.character import PlayerCharacter
from dungeon_master.models.enums import (
    PlayerStatus,
    QuestStatus,
    SessionEndReason,
    SessionStatus,
)


def utc_now() -> datetime:
    return datetime.now(UTC)


def generate_session_id() -> str:
    """Generate a session id of the form ``session_<millis>_<random>``."""
    millis = int(utc_now().timestamp() * 1000)
    return f"session_{millis}_{secrets.token_hex(4)}"


class SessionRecord(BaseModel):
    """Base for session-level records."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",
        use_enum_values=True,
    )


class PendingAction(SessionRecord):
    """A submitted action waiting for the round to resolve."""

    action_text: str = Field(..., min_length=1)
    dice_summary: str | None = None
    timestamp: datetime = Field(default_factory=utc_now)


class QuestEntry(SessionRecord):
    """Latest known state of one quest. Replaced wholesale on update."""

    status: QuestStatus = QuestStatus.ACTIVE
    progress: str = ""


class PlayerDeathEvent(SessionRecord):
    player_id: str
    character_name: str
    cause: str = "Unknown causes"
    timestamp: datetime = Field(default_factory=utc_now)


class SessionEndEvent(SessionRecord):
    reason: SessionEndReason
    dead_players: list[str] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=utc_now)


class Session(SessionRecord):
    """One game instance bound to a voice channel.

    Attributes:
        session_id: Logical session identifier.
        voice_channel_id: Voice channel hosting the game; the canonical key.
        creator_id: Participant allowed to administer the session.
        status: Lifecycle state; only moves forward.
        players: Characters keyed by participant id, in join order.
        pending_actions: This round's submissions, at most one per participant.
        session_round: Number of resolved rounds.
    """

    session_id: str = Field(default_factory=generate_session_id)
    voice_channel_id: str = Field(..., min_length=1)
    guild_id: str = ""
    creator_id: str = ""
    created_at: datetime = Field(default_factory=utc_now)
    last_activity: datetime = Field(default_factory=utc_now)

    status: SessionStatus = SessionStatus.CHARACTER_CREATION
    end_reason: SessionEndReason | None = None

    party_level: int = Field(default=1, ge=1, le=20)
    party_size: int = Field(default=1, ge=1)
    max_players: int = Field(default=1, ge=1)
    language: str = "en"
    theme: str = ""
    current_location: str = ""
    story_context: str = ""

    players: dict[str, PlayerCharacter] = Field(default_factory=dict)
    pending_actions: dict[str, PendingAction] = Field(default_factory=dict)
    player_actions: dict[str, list[str]] = Field(default_factory=dict)

    recent_events: list[str] = Field(default_factory=list)
    session_history: list[str] = Field(default_factory=list)
    story_summary: str = ""
    current_scene: str = ""
    important_events: list[str] = Field(default_factory=list)
    npc_interactions: dict[str, list[str]] = Field(default_factory=dict)
    quest_progress: dict[str, QuestEntry] = Field(default_factory=dict)
    environmental_state: dict[str, str] = Field(default_factory=dict)
    last_story_beat: str = ""
    session_round: int = Field(default=0, ge=0)

    death_events: list[PlayerDeathEvent] = Field(default_factory=list)
    end_event: SessionEndEvent | None = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def canonical_key(self) -> str:
        """Key the session is stored and locked under."""
        return self.voice_channel_id

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.max_players

    @property
    def is_ended(self) -> bool:
        return self.status == SessionStatus.ENDED

    def transition_to(
        self,
        status: SessionStatus,
        *,
        reason: SessionEndReason | None = None,
    ) -> None:
        """Move the session forward in its lifecycle.

        Raises:
            InvalidSessionStateError: If the transition would move backward
                or stay in place.
        """
        current = SessionStatus(self.status)
        if status.order <= current.order:
            raise InvalidSessionStateError(
                f"Cannot move session from {current} to {status}",
                current_state=current.value,
                expected_states=[
                    s.value for s in SessionStatus if s.order > current.order
                ],
                session_id=self.session_id,
            )
        self.status = status
        if status == SessionStatus.ENDED:
            self.end_reason = reason or SessionEndReason.SESSION_ENDED
        self.touch()

    def touch(self) -> None:
        self.last_activity = utc_now()

    # -------------------------------------------------------------------------
    # Party views
    # -------------------------------------------------------------------------

    def alive_players(self) -> list[PlayerCharacter]:
        """Characters that still have to act each round (unconscious included)."""
        return [pc for pc in self.players.values() if pc.status != PlayerStatus.DEAD]

    def dead_players(self) -> list[PlayerCharacter]:
        return [pc for pc in self.players.values() if pc.status == PlayerStatus.DEAD]

    def waiting_on(self) -> list[PlayerCharacter]:
        """Alive characters that have not yet submitted an action this round."""
        return [pc for pc in self.alive_players() if pc.user_id not in self.pending_actions]

    def all_alive_acted(self) -> bool:
        alive = self.alive_players()
        return bool(alive) and all(pc.user_id in self.pending_actions for pc in alive)


__all__ = [
    "utc_now",
    "generate_session_id",
    "SessionRecord",
    "PendingAction",
    "QuestEntry",
    "PlayerDeathEvent",
    "SessionEndEvent",
    "Session",
]
