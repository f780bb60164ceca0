"""Narrative generator.

The session state machine talks to the language model through the
NarrativeGenerator protocol: system prompt and user prompt in, text out.
OpenAINarrativeGenerator implements it against any OpenAI-compatible chat
endpoint. Each game beat makes exactly one call; failures are not retried
here and are reported as GenerationFailedError so the caller can fall back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from openai import APIConnectionError, APIStatusError, AsyncOpenAI, OpenAIError, RateLimitError

from dungeon_master.core.config import AIProviderSettings, get_settings
from dungeon_master.core.exceptions import GenerationFailedError
from dungeon_master.core.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Mapping


logger = get_logger(__name__)


@runtime_checkable
class NarrativeGenerator(Protocol):
    """Text-in, text-out chat completion collaborator."""

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Generate narrative text.

        Raises:
            GenerationFailedError: If no text could be produced.
        """
        ...


class OpenAINarrativeGenerator:
    """NarrativeGenerator backed by an OpenAI-compatible chat endpoint.

    Example:
        >>> generator = OpenAINarrativeGenerator()
        >>> text = await generator.generate(system_prompt, "The party enters the crypt.")
    """

    def __init__(
        self,
        settings: AIProviderSettings | None = None,
        *,
        client: AsyncOpenAI | None = None,
        default_headers: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            settings: Endpoint settings; the application settings by default.
            client: Pre-built client, mainly for tests.
            default_headers: Extra headers sent with every request.
        """
        self.settings = settings or get_settings().ai
        self._client = client
        self._default_headers = dict(default_headers or {})

    @property
    def model(self) -> str:
        return self.settings.model

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the async OpenAI client."""
        if self._client is None:
            api_key = self.settings.api_key
            self._client = AsyncOpenAI(
                api_key=api_key.get_secret_value() if api_key else "not-configured",
                base_url=self.settings.base_url,
                timeout=self.settings.timeout_seconds,
                max_retries=0,
                default_headers=self._default_headers or None,
            )
        return self._client

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Generate one narrative beat.

        Args:
            system_prompt: Persona and language instructions.
            user_prompt: Session context and the beat to narrate.

        Returns:
            The generated text, stripped.

        Raises:
            GenerationFailedError: On connection, rate-limit or API errors,
                or when the model returns no content.
        """
        client = self._get_client()
        provider = self.settings.base_url
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
            )
        except RateLimitError as exc:
            raise GenerationFailedError(
                f"Rate limited by narrative provider: {exc}",
                model=self.model,
                provider=provider,
            ) from exc
        except APIConnectionError as exc:
            raise GenerationFailedError(
                f"Failed to connect to narrative provider: {exc}",
                model=self.model,
                provider=provider,
            ) from exc
        except APIStatusError as exc:
            raise GenerationFailedError(
                f"Narrative provider error: {exc}",
                model=self.model,
                provider=provider,
                details={"status_code": exc.status_code},
            ) from exc
        except OpenAIError as exc:
            raise GenerationFailedError(
                f"Narrative generation failed: {exc}",
                model=self.model,
                provider=provider,
            ) from exc

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise GenerationFailedError(
                "Narrative provider returned no content",
                model=self.model,
                provider=provider,
            )

        logger.debug("Narrative generated", model=self.model, length=len(content))
        return content.strip()


__all__ = [
    "NarrativeGenerator",
    "OpenAINarrativeGenerator",
]
