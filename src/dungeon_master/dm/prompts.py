"""DM prompts: persona instructions and per-beat user prompts.

Every generation is a system prompt (persona plus language directive) and a
user prompt built from session state. The narrative generator only ever sees
text assembled here.
"""

from __future__ import annotations

from dungeon_master.dm.languages import language_directive
from dungeon_master.dm.memory import StoryMemory
from dungeon_master.models.enums import EncounterDifficulty, EncounterType
from dungeon_master.models.session import PendingAction, Session


# =============================================================================
# System Prompt
# =============================================================================


DM_SYSTEM_PROMPT = """You are the Dungeon Master of a D&D 5e game played by voice. Stay in character.

## VOICE & STYLE

- Narrate vividly with sensory detail; your words will be read aloud.
- Speak to the characters directly. No meta-commentary, no game-mechanics lectures.
- Keep each response to 2-3 short paragraphs so narration stays brisk.

## DICE & OUTCOMES

- Dice results are rolled by the game and given to you. Never invent or change them.
- A natural 20 is an exceptional success; a natural 1 is a dramatic mishap.
- Respect success and failure against the listed difficulty class.

## CONTINUITY

- Use the story context below: recent events, NPCs, quests and locations.
- Resolve every character's action in a single, coherent continuation.
- End with a situation that invites the players to act again.

{language_directive}"""


def build_system_prompt(session: Session) -> str:
    return DM_SYSTEM_PROMPT.format(language_directive=language_directive(session.language))


# =============================================================================
# Session Beats
# =============================================================================


WELCOME_PROMPT = """A new adventure is being prepared.

Theme: {theme}
Party Size: {party_size}
Party Level: {party_level}

Welcome the players to the table and set the mood for a {theme} adventure.
Invite each of them to create a character by choosing a name, class, race and background.
Keep it to 2-3 paragraphs."""


OPENING_SCENE_PROMPT = """All players have created their characters. Begin the adventure.

Party Members:
{party}

Theme: {theme}
Starting Location: {location}

Create an engaging opening scene: set the atmosphere, describe the surroundings, and
present an initial hook or quest that draws the party into the story."""


ROUND_PROMPT = """Continue the story as the Dungeon Master.

Session Context:
- Party Level: {party_level}
- Current Location: {location}
- Theme: {theme}
- Party Members: {party}
{summary}
Story Context:
{context}

Player Actions This Round:
{actions}

Describe what happens next as a result of all of these actions together. Consider
environmental consequences, NPC reactions and story progression."""


ENCOUNTER_PROMPT = """Create a {encounter_type} encounter.

Session Context:
- Party Level: {party_level}
- Party Size: {party_size}
- Current Location: {location}
- Difficulty: {difficulty}

Story Context:
{context}

Guidance:
- Combat: describe enemies, their tactics and the battlefield
- Social: present NPCs, what they want and the social challenge
- Exploration: describe the environment, hidden dangers and discoveries
- Puzzle: present a logical or magical puzzle with clues

Make it appropriate for a level {party_level} party and focus on the {encounter_type} aspect."""


def party_listing(session: Session) -> str:
    return "\n".join(f"- {pc.summary}" for pc in session.players.values())


def build_welcome_prompt(session: Session) -> str:
    return WELCOME_PROMPT.format(
        theme=session.theme,
        party_size=session.party_size,
        party_level=session.party_level,
    )


def build_opening_scene_prompt(session: Session) -> str:
    return OPENING_SCENE_PROMPT.format(
        party=party_listing(session),
        theme=session.theme,
        location=session.current_location,
    )


def format_pending_action(session: Session, user_id: str, action: PendingAction) -> str:
    """Render one pending action with the acting character's name and roll."""
    character = session.players.get(user_id)
    name = character.name if character else user_id
    line = f"- {name}: {action.action_text}"
    if action.dice_summary:
        line += f"\n  Dice: {action.dice_summary}"
    return line


def build_round_prompt(session: Session) -> str:
    """Combine every pending action and the story context into one prompt."""
    actions = "\n".join(
        format_pending_action(session, user_id, action)
        for user_id, action in session.pending_actions.items()
    )
    party = ", ".join(pc.name for pc in session.players.values())
    summary = f"- Story So Far: {session.story_summary}\n" if session.story_summary else ""
    return ROUND_PROMPT.format(
        party_level=session.party_level,
        location=session.current_location,
        theme=session.theme,
        party=party,
        summary=summary,
        context=StoryMemory(session).build_prompt_context(),
        actions=actions,
    )


def build_encounter_prompt(
    session: Session,
    encounter_type: EncounterType,
    difficulty: EncounterDifficulty,
) -> str:
    return ENCOUNTER_PROMPT.format(
        encounter_type=encounter_type,
        difficulty=difficulty,
        party_level=session.party_level,
        party_size=session.party_size,
        location=session.current_location,
        context=StoryMemory(session).build_prompt_context(),
    )


__all__ = [
    "DM_SYSTEM_PROMPT",
    "WELCOME_PROMPT",
    "OPENING_SCENE_PROMPT",
    "ROUND_PROMPT",
    "ENCOUNTER_PROMPT",
    "build_system_prompt",
    "party_listing",
    "build_welcome_prompt",
    "build_opening_scene_prompt",
    "format_pending_action",
    "build_round_prompt",
    "build_encounter_prompt",
]
