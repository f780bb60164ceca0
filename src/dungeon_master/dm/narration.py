"""Voice narration.

Narration is best-effort: a synthesis failure is logged and the turn carries
on as text. The voice used for a passage is picked by a keyword heuristic
over the passage itself. Bracketed stage directions such as ``[whispers]``
take priority, then scene keywords (combat, magic, dialogue, environment,
tension).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from openai import AsyncOpenAI, OpenAIError

from dungeon_master.core.config import SpeechSettings, get_settings
from dungeon_master.core.exceptions import SynthesisFailedError
from dungeon_master.core.logging import get_logger
from dungeon_master.dm.languages import get_language


logger = get_logger(__name__)


@dataclass(frozen=True)
class VoiceStyle:
    """Voice, speaking rate and whether dramatic pauses are inserted."""

    voice: str = "alloy"
    speed: float = 1.0
    dramatic: bool = False


DEFAULT_VOICE_STYLE = VoiceStyle()

EXPRESSION_STYLES: dict[str, VoiceStyle] = {
    "sarcastically": VoiceStyle("echo", 0.9, True),
    "sarcastic": VoiceStyle("echo", 0.9, True),
    "whispers": VoiceStyle("shimmer", 0.7, False),
    "whisper": VoiceStyle("shimmer", 0.7, False),
    "whispering": VoiceStyle("shimmer", 0.7, False),
    "giggles": VoiceStyle("nova", 1.1, False),
    "giggle": VoiceStyle("nova", 1.1, False),
    "laughing": VoiceStyle("nova", 1.1, False),
    "angrily": VoiceStyle("onyx", 0.8, True),
    "angry": VoiceStyle("onyx", 0.8, True),
    "sadly": VoiceStyle("fable", 0.8, False),
    "sad": VoiceStyle("fable", 0.8, False),
    "excitedly": VoiceStyle("nova", 1.2, True),
    "excited": VoiceStyle("nova", 1.2, True),
    "fearfully": VoiceStyle("shimmer", 0.7, True),
    "fearful": VoiceStyle("shimmer", 0.7, True),
    "scared": VoiceStyle("shimmer", 0.7, True),
    "mysteriously": VoiceStyle("fable", 0.85, True),
    "mysterious": VoiceStyle("fable", 0.85, True),
}

# Checked in order; English and Indonesian keywords.
KEYWORD_STYLES: tuple[tuple[tuple[str, ...], VoiceStyle], ...] = (
    (
        ("sword", "attack", "battle", "enemy", "fight", "combat", "blood", "weapon",
         "pedang", "serang", "pertempuran", "musuh", "darah", "senjata"),
        VoiceStyle("onyx", 0.9, True),
    ),
    (
        ("magic", "spell", "mysterious", "ancient", "portal", "enchanted", "crystal",
         "rune", "arcane", "sihir", "misterius", "kuno", "kristal"),
        VoiceStyle("shimmer", 0.85, True),
    ),
    (
        ('"', "says", "speaks", "replies", "responds", "asks",
         "berkata", "berbicara", "menjawab", "bertanya"),
        VoiceStyle("echo", 0.95, False),
    ),
    (
        ("forest", "cave", "mountain", "river", "castle", "dungeon", "dark", "wind",
         "hutan", "gua", "gunung", "sungai", "kastil", "gelap", "angin"),
        VoiceStyle("fable", 0.9, False),
    ),
    (
        ("danger", "threat", "warning", "suddenly", "unexpected", "surprise",
         "bahaya", "ancaman", "tiba-tiba", "kejutan"),
        VoiceStyle("nova", 0.8, True),
    ),
)

_EXPRESSION_PATTERN = re.compile(r"\[([^\]]+)\]")


def analyze_voice_style(text: str) -> VoiceStyle:
    """Pick a voice style for a passage of narration."""
    lowered = text.lower()

    expressions = _EXPRESSION_PATTERN.findall(lowered)
    if expressions:
        style = EXPRESSION_STYLES.get(expressions[0].strip())
        if style is not None:
            return style

    for keywords, style in KEYWORD_STYLES:
        if any(keyword in lowered for keyword in keywords):
            return style
    return DEFAULT_VOICE_STYLE


def apply_dramatic_pauses(text: str) -> str:
    """Lengthen pauses between sentences for dramatic delivery."""
    return re.sub(r"(?<!\.)\.(?!\.)(\s+|$)", "... ", text).strip()


def prepare_for_speech(text: str, style: VoiceStyle) -> str:
    """Strip stage directions and markdown, adding pauses for dramatic styles."""
    cleaned = _EXPRESSION_PATTERN.sub("", text)
    cleaned = re.sub(r"[*_#`]", "", cleaned)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return apply_dramatic_pauses(cleaned) if style.dramatic else cleaned


# =============================================================================
# Speech Synthesizer
# =============================================================================


@runtime_checkable
class SpeechSynthesizer(Protocol):
    """Text-to-speech collaborator."""

    async def synthesize(self, text: str, voice_hint: VoiceStyle, language_code: str) -> bytes:
        """Render text as audio.

        Raises:
            SynthesisFailedError: If audio could not be produced.
        """
        ...


class OpenAISpeechSynthesizer:
    """SpeechSynthesizer backed by an OpenAI-compatible speech endpoint."""

    def __init__(
        self,
        settings: SpeechSettings | None = None,
        *,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self.settings = settings or get_settings().speech
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            api_key = self.settings.api_key
            self._client = AsyncOpenAI(
                api_key=api_key.get_secret_value() if api_key else "not-configured",
                base_url=self.settings.base_url,
                timeout=self.settings.timeout_seconds,
                max_retries=0,
            )
        return self._client

    async def synthesize(self, text: str, voice_hint: VoiceStyle, language_code: str) -> bytes:
        """Synthesize speech.

        The language code is not sent to the endpoint, which infers the
        language from the text; it is kept for logging.

        Raises:
            SynthesisFailedError: On any API failure or empty audio.
        """
        try:
            response = await self._get_client().audio.speech.create(
                model=self.settings.model,
                voice=voice_hint.voice or self.settings.default_voice,
                input=text,
                speed=voice_hint.speed,
                response_format="mp3",
            )
        except OpenAIError as exc:
            raise SynthesisFailedError(
                f"Speech synthesis failed: {exc}",
                model=self.settings.model,
                provider=self.settings.base_url,
                details={"language_code": language_code},
            ) from exc

        audio = response.content
        if not audio:
            raise SynthesisFailedError(
                "Speech endpoint returned no audio",
                model=self.settings.model,
                provider=self.settings.base_url,
            )
        return audio


# =============================================================================
# Narrator
# =============================================================================


class Narrator:
    """Turns DM text into audio without ever failing the turn."""

    def __init__(self, synthesizer: SpeechSynthesizer) -> None:
        self.synthesizer = synthesizer

    async def narrate(self, text: str, language: str | None = None) -> bytes | None:
        """Synthesize narration for a passage.

        Returns:
            Audio bytes, or None if there was nothing to say or synthesis
            failed (the failure is logged).
        """
        style = analyze_voice_style(text)
        speech = prepare_for_speech(text, style)
        if not speech:
            return None

        speech_code = get_language(language).speech_code
        try:
            audio = await self.synthesizer.synthesize(speech, style, speech_code)
        except SynthesisFailedError as exc:
            logger.warning("Narration skipped", error=str(exc), voice=style.voice)
            return None
        except Exception:
            logger.exception("Narration failed unexpectedly", voice=style.voice)
            return None

        logger.info(
            "Narration synthesized",
            voice=style.voice,
            speed=style.speed,
            dramatic=style.dramatic,
            bytes=len(audio),
        )
        return audio


__all__ = [
    "VoiceStyle",
    "DEFAULT_VOICE_STYLE",
    "EXPRESSION_STYLES",
    "KEYWORD_STYLES",
    "analyze_voice_style",
    "apply_dramatic_pauses",
    "prepare_for_speech",
    "SpeechSynthesizer",
    "OpenAISpeechSynthesizer",
    "Narrator",
]
