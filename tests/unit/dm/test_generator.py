"""Tests for the narrative generator."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

import httpx
import pytest
from openai import APIConnectionError, OpenAIError

from dungeon_master.core.config import AIProviderSettings
from dungeon_master.core.exceptions import GenerationFailedError
from dungeon_master.dm.generator import NarrativeGenerator, OpenAINarrativeGenerator


class FakeCompletions:
    """Stands in for ``client.chat.completions``."""

    def __init__(self, content: str | None = "  The crypt is silent.  ", error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _generator(completions: FakeCompletions) -> OpenAINarrativeGenerator:
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    settings = AIProviderSettings(model="test-model", temperature=0.5, max_tokens=300)
    return OpenAINarrativeGenerator(settings, client=client)


class TestOpenAINarrativeGenerator:
    """Tests for OpenAINarrativeGenerator."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(_generator(FakeCompletions()), NarrativeGenerator)

    def test_generate(self) -> None:
        completions = FakeCompletions()

        text = asyncio.run(_generator(completions).generate("system", "user"))

        assert text == "The crypt is silent."
        call = completions.calls[0]
        assert call["model"] == "test-model"
        assert call["temperature"] == 0.5
        assert call["max_tokens"] == 300
        assert call["messages"] == [
            {"role": "system", "content": "system"},
            {"role": "user", "content": "user"},
        ]

    def test_single_call_per_beat(self) -> None:
        completions = FakeCompletions(error=OpenAIError("boom"))

        with pytest.raises(GenerationFailedError):
            asyncio.run(_generator(completions).generate("system", "user"))

        assert len(completions.calls) == 1

    def test_connection_error_wrapped(self) -> None:
        request = httpx.Request("POST", "https://example.invalid/v1/chat/completions")
        completions = FakeCompletions(error=APIConnectionError(request=request))

        with pytest.raises(GenerationFailedError) as exc_info:
            asyncio.run(_generator(completions).generate("system", "user"))

        assert "connect" in exc_info.value.message
        assert exc_info.value.details["model"] == "test-model"

    @pytest.mark.parametrize("content", [None, "", "   "])
    def test_empty_content(self, content: str | None) -> None:
        with pytest.raises(GenerationFailedError):
            asyncio.run(_generator(FakeCompletions(content=content)).generate("system", "user"))
