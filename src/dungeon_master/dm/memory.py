"""Story memory for DM context windows.

The narrative memory of a session lives on the Session record itself so it
persists with it. StoryMemory is the only code that mutates those fields,
and it owns the bounds that keep the context window from growing without
limit:

1. Recent events: the latest entries, with the full log kept in history
2. Important events: at most 10, oldest dropped first
3. NPC interactions: at most 5 per NPC, oldest dropped first
4. Quests and environment: latest state only, replaced wholesale

``build_prompt_context`` renders exactly what the narrative model sees each
round.
"""

from __future__ import annotations

import re

from dungeon_master.core.constants import (
    MAX_IMPORTANT_EVENTS,
    MAX_NPC_INTERACTIONS,
    MAX_RECENT_EVENTS,
    MAX_STORY_BEAT_LENGTH,
    PROMPT_IMPORTANT_EVENTS,
    PROMPT_NPC_INTERACTIONS,
    PROMPT_RECENT_EVENTS,
)
from dungeon_master.core.logging import get_logger
from dungeon_master.models.enums import QuestStatus
from dungeon_master.models.session import QuestEntry, Session


logger = get_logger(__name__)

SCENE_KEYWORDS = ("scene", "location")
"""Words that mark a DM response as describing where the party now is."""

_SENTENCE_END = re.compile(r"(?<=[.!?])\s")


def first_sentence(text: str) -> str:
    """Return text up to and including the first sentence terminator."""
    stripped = text.strip()
    if not stripped:
        return ""
    parts = _SENTENCE_END.split(stripped, maxsplit=1)
    return parts[0].strip()


class StoryMemory:
    """Mutation operations over a session's narrative fields.

    Usage:
        >>> memory = StoryMemory(session)
        >>> memory.append_event("Thorin kicks open the door")
        >>> memory.track_npc_interaction("Barkeep", "Warned the party about wolves")
        >>> prompt_context = memory.build_prompt_context()
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # -------------------------------------------------------------------------
    # Event logs
    # -------------------------------------------------------------------------

    def append_event(self, text: str) -> None:
        """Record an event in recent events and the permanent history."""
        self.session.recent_events.append(text)
        if len(self.session.recent_events) > MAX_RECENT_EVENTS:
            self.session.recent_events = self.session.recent_events[-MAX_RECENT_EVENTS:]
        self.session.session_history.append(text)

    def append_history(self, text: str) -> None:
        """Record text in the permanent history only."""
        self.session.session_history.append(text)

    def add_important_event(self, text: str) -> None:
        events = self.session.important_events
        events.append(text)
        if len(events) > MAX_IMPORTANT_EVENTS:
            self.session.important_events = events[-MAX_IMPORTANT_EVENTS:]

    def track_npc_interaction(self, npc_name: str, text: str) -> None:
        log = self.session.npc_interactions.setdefault(npc_name, [])
        log.append(text)
        if len(log) > MAX_NPC_INTERACTIONS:
            del log[: len(log) - MAX_NPC_INTERACTIONS]

    # -------------------------------------------------------------------------
    # Latest-state maps
    # -------------------------------------------------------------------------

    def update_quest(
        self,
        name: str,
        status: QuestStatus | str = QuestStatus.ACTIVE,
        progress: str = "",
    ) -> QuestEntry:
        """Replace a quest's entry; earlier progress text is not kept."""
        entry = QuestEntry(status=QuestStatus(status), progress=progress)
        self.session.quest_progress[name] = entry
        logger.debug("Quest updated", quest=name, status=str(entry.status))
        return entry

    def update_environment(self, location: str, text: str) -> None:
        self.session.environmental_state[location] = text

    def set_scene(self, text: str) -> None:
        self.session.current_scene = text

    def set_story_summary(self, text: str) -> None:
        self.session.story_summary = text

    # -------------------------------------------------------------------------
    # Heuristic post-processing
    # -------------------------------------------------------------------------

    def apply_story_beat(self, response: str) -> None:
        """Update the last story beat and, heuristically, the current scene.

        If the response mentions a scene or location keyword, its first
        sentence becomes the current scene. This is best-effort tracking,
        not an authoritative scene record.
        """
        self.session.last_story_beat = response
        lowered = response.lower()
        if any(keyword in lowered for keyword in SCENE_KEYWORDS):
            scene = first_sentence(response)
            if scene:
                self.session.current_scene = scene

    # -------------------------------------------------------------------------
    # Prompt context
    # -------------------------------------------------------------------------

    def build_prompt_context(self) -> str:
        """Assemble the narrative context window for the next generation.

        Includes the last 10 recent events, the last 5 important events,
        the last 3 interactions of every NPC, every quest and environment
        entry, the current scene, the last story beat (trimmed to
        MAX_STORY_BEAT_LENGTH characters) and the round number.
        """
        session = self.session
        sections: list[str] = [f"Round: {session.session_round}"]

        if session.current_scene:
            sections.append(f"Current Scene: {session.current_scene}")

        recent = session.recent_events[-PROMPT_RECENT_EVENTS:]
        if recent:
            sections.append("Recent Events:\n" + "\n".join(f"- {e}" for e in recent))

        important = session.important_events[-PROMPT_IMPORTANT_EVENTS:]
        if important:
            sections.append("Important Events:\n" + "\n".join(f"- {e}" for e in important))

        if session.npc_interactions:
            lines = []
            for npc, log in session.npc_interactions.items():
                lines.append(f"- {npc}: " + "; ".join(log[-PROMPT_NPC_INTERACTIONS:]))
            sections.append("NPC Interactions:\n" + "\n".join(lines))

        if session.quest_progress:
            lines = [
                f"- {name} [{entry.status}]" + (f": {entry.progress}" if entry.progress else "")
                for name, entry in session.quest_progress.items()
            ]
            sections.append("Quests:\n" + "\n".join(lines))

        if session.environmental_state:
            lines = [f"- {loc}: {state}" for loc, state in session.environmental_state.items()]
            sections.append("Environment:\n" + "\n".join(lines))

        if session.last_story_beat:
            beat = session.last_story_beat[:MAX_STORY_BEAT_LENGTH]
            sections.append(f"Last Story Beat: {beat}")

        return "\n\n".join(sections)


__all__ = [
    "SCENE_KEYWORDS",
    "first_sentence",
    "StoryMemory",
]
