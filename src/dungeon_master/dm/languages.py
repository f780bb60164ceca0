"""Narration languages.

A session's language is fixed when it starts. It decides the directive
appended to every system prompt and the language code handed to speech
synthesis.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    code: str
    name: str
    native_name: str
    speech_code: str


SUPPORTED_LANGUAGES: dict[str, Language] = {
    "en": Language("en", "English", "English", "en-US"),
    "id": Language("id", "Indonesian", "Bahasa Indonesia", "id-ID"),
    "fr": Language("fr", "French", "Français", "fr-FR"),
    "es": Language("es", "Spanish", "Español", "es-ES"),
    "de": Language("de", "German", "Deutsch", "de-DE"),
    "it": Language("it", "Italian", "Italiano", "it-IT"),
    "pt": Language("pt", "Portuguese", "Português", "pt-BR"),
    "ru": Language("ru", "Russian", "Русский", "ru-RU"),
}

DEFAULT_LANGUAGE = "en"


def get_language(code: str | None) -> Language:
    """Look up a language by code, falling back to English."""
    if code:
        language = SUPPORTED_LANGUAGES.get(code.strip().lower())
        if language is not None:
            return language
    return SUPPORTED_LANGUAGES[DEFAULT_LANGUAGE]


def is_supported(code: str | None) -> bool:
    return bool(code) and code.strip().lower() in SUPPORTED_LANGUAGES


def language_directive(code: str | None) -> str:
    """Instruction appended to system prompts so narration stays in one language."""
    language = get_language(code)
    return (
        f"Respond entirely in {language.name} ({language.native_name}). "
        "Keep game terms such as ability names and dice notation recognisable."
    )


__all__ = [
    "Language",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_LANGUAGE",
    "get_language",
    "is_supported",
    "language_directive",
]
