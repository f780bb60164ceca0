"""Tests for voice narration."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

import pytest
from openai import OpenAIError

from dungeon_master.core.config import SpeechSettings
from dungeon_master.core.exceptions import SynthesisFailedError
from dungeon_master.dm.narration import (
    DEFAULT_VOICE_STYLE,
    Narrator,
    OpenAISpeechSynthesizer,
    VoiceStyle,
    analyze_voice_style,
    apply_dramatic_pauses,
    prepare_for_speech,
)


class TestVoiceStyle:
    """Tests for the voice style heuristic."""

    def test_stage_direction_wins(self) -> None:
        style = analyze_voice_style("[whispers] The sword is behind the altar.")

        assert style.voice == "shimmer"
        assert style.speed == 0.7

    def test_unknown_stage_direction_falls_through(self) -> None:
        style = analyze_voice_style("[coughs] The battle begins.")

        assert style.voice == "onyx"

    @pytest.mark.parametrize(
        ("text", "voice"),
        [
            ("You draw your sword.", "onyx"),
            ("An ancient rune glows.", "shimmer"),
            ('The innkeeper says "welcome".', "echo"),
            ("Wind howls through the forest.", "fable"),
            ("Suddenly, the floor gives way.", "nova"),
            ("Musuh menyerang dari gua.", "onyx"),
        ],
    )
    def test_keyword_styles(self, text: str, voice: str) -> None:
        assert analyze_voice_style(text).voice == voice

    def test_default_style(self) -> None:
        assert analyze_voice_style("You rest.") == DEFAULT_VOICE_STYLE


class TestSpeechText:
    """Tests for speech preparation."""

    def test_dramatic_pauses(self) -> None:
        assert apply_dramatic_pauses("It waits. It watches.") == "It waits... It watches..."

    def test_existing_ellipsis_kept(self) -> None:
        assert apply_dramatic_pauses("And then...") == "And then..."

    def test_prepare_strips_markup(self) -> None:
        text = prepare_for_speech("[whispers] **Run**  now", VoiceStyle())

        assert text == "Run now"

    def test_prepare_dramatic(self) -> None:
        text = prepare_for_speech("Steel rings. Blood spills.", VoiceStyle("onyx", 0.9, True))

        assert text == "Steel rings... Blood spills..."


class TestNarrator:
    """Tests for best-effort narration."""

    def test_returns_audio(self, stub_synthesizer: Any) -> None:
        narrator = Narrator(stub_synthesizer)

        audio = asyncio.run(narrator.narrate("The dragon attacks!", "id"))

        assert audio == b"ID3-audio"
        text, style, code = stub_synthesizer.calls[0]
        assert style.voice == "onyx"
        assert code == "id-ID"
        assert text.endswith("!")

    def test_failure_returns_none(self, failing_synthesizer: Any) -> None:
        narrator = Narrator(failing_synthesizer)

        assert asyncio.run(narrator.narrate("Hello there.")) is None
        assert len(failing_synthesizer.calls) == 1

    def test_unexpected_failure_returns_none(self) -> None:
        class ExplodingSynthesizer:
            async def synthesize(self, text: str, voice_hint: Any, language_code: str) -> bytes:
                raise RuntimeError("socket closed")

        narrator = Narrator(ExplodingSynthesizer())

        assert asyncio.run(narrator.narrate("Hello there.")) is None

    def test_nothing_to_say(self, stub_synthesizer: Any) -> None:
        narrator = Narrator(stub_synthesizer)

        assert asyncio.run(narrator.narrate("[whispers]")) is None
        assert stub_synthesizer.calls == []


class FakeSpeech:
    def __init__(self, content: bytes = b"mp3", error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.kwargs: dict[str, Any] = {}

    async def create(self, **kwargs: Any) -> Any:
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=self.content)


def _client(speech: FakeSpeech) -> Any:
    return SimpleNamespace(audio=SimpleNamespace(speech=speech))


class TestOpenAISpeechSynthesizer:
    """Tests for the OpenAI speech adapter."""

    def test_synthesize(self) -> None:
        speech = FakeSpeech(b"audio-bytes")
        synthesizer = OpenAISpeechSynthesizer(SpeechSettings(), client=_client(speech))

        audio = asyncio.run(synthesizer.synthesize("Hi", VoiceStyle("fable", 0.8), "en-US"))

        assert audio == b"audio-bytes"
        assert speech.kwargs["voice"] == "fable"
        assert speech.kwargs["speed"] == 0.8
        assert speech.kwargs["input"] == "Hi"

    def test_api_error_wrapped(self) -> None:
        speech = FakeSpeech(error=OpenAIError("down"))
        synthesizer = OpenAISpeechSynthesizer(SpeechSettings(), client=_client(speech))

        with pytest.raises(SynthesisFailedError) as exc_info:
            asyncio.run(synthesizer.synthesize("Hi", VoiceStyle(), "en-US"))

        assert exc_info.value.details["language_code"] == "en-US"

    def test_empty_audio(self) -> None:
        synthesizer = OpenAISpeechSynthesizer(SpeechSettings(), client=_client(FakeSpeech(b"")))

        with pytest.raises(SynthesisFailedError):
            asyncio.run(synthesizer.synthesize("Hi", VoiceStyle(), "en-US"))
