# SPDX-License-Identifier: Apache-2.0
"""Base classes and protocols for translation backends."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

ENGLISH = "en"


class TranslatorError(Exception):
    """Base exception for translator module."""

    pass


class ConfigurationError(TranslatorError):
    """Configuration error (missing API key, unknown provider, etc.).

    This error type is NOT retryable - fix the configuration first.
    """

    pass


class TransportError(TranslatorError):
    """Network-level failure reaching the provider (connection, timeout)."""

    pass


class ProtocolError(TranslatorError):
    """Provider responded, but not in a shape we understand."""

    pass


class ProviderError(TranslatorError):
    """Provider explicitly reported a failure.

    Attributes:
        status: HTTP status of the response, if known.
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


@dataclass(frozen=True)
class LanguageEntry:
    """A supported target language."""

    code: str
    name: str

    @classmethod
    def from_provider(cls, code: Any, name: Any = None) -> LanguageEntry:
        """Build an entry from provider JSON values.

        A missing or empty name falls back to the code.

        Raises:
            TypeError: If code or name is not a string.
            ValueError: If code is empty.
        """
        if not isinstance(code, str):
            raise TypeError(f"language code must be a string, got {code!r}")
        if not code:
            raise ValueError("language code is empty")
        if name is None or name == "":
            name = code
        if not isinstance(name, str):
            raise TypeError(f"language name must be a string, got {name!r}")
        return cls(code=code, name=name)

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "name": self.name}


def _collation_key(name: str) -> tuple[str, str]:
    # Accent-insensitive, case-insensitive primary key; the raw name breaks ties.
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), name


def normalize_languages(entries: Iterable[LanguageEntry]) -> list[LanguageEntry]:
    """Deduplicate by code, sort by display name, and put English first.

    The first entry seen for a code wins. English is always present at
    index 0, using the provider's name for it when one was returned. It is
    added even when the provider does not list it: English is the language
    of the source page, and the client selects it to restore the original
    rather than to request a translation.

    Args:
        entries: Languages as reported by a provider.

    Returns:
        Normalized language list.
    """
    by_code: dict[str, LanguageEntry] = {}
    for entry in entries:
        if entry.code not in by_code:
            by_code[entry.code] = entry

    english = by_code.pop(ENGLISH, None) or LanguageEntry(ENGLISH, "English")
    rest = sorted(by_code.values(), key=lambda e: _collation_key(e.name))
    return [english, *rest]


@runtime_checkable
class TranslatorBackend(Protocol):
    """Protocol definition for translation backends.

    All translator implementations must conform to this protocol.
    """

    @property
    def name(self) -> str:
        """Backend name ("google", "libre")."""
        ...

    async def translate(self, text: str, target_lang: str) -> str:
        """Translate a single text.

        Args:
            text: Text to translate. Empty text is returned without a call.
            target_lang: Target language code ("fr", "hi").

        Returns:
            Translated text.

        Raises:
            ConfigurationError: Required setting is missing.
            TransportError: Provider could not be reached.
            ProtocolError: Provider response had an unexpected shape.
            ProviderError: Provider reported a failure.
        """
        ...

    async def list_languages(self) -> list[LanguageEntry]:
        """Return supported languages, normalized by normalize_languages().

        The first entry is always English, whether or not the provider
        lists it as a translation target.
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...


class ProviderKind(str, Enum):
    """Supported translation providers."""

    GOOGLE = "google"
    LIBRE = "libre"

    @classmethod
    def parse(cls, value: str | None) -> ProviderKind:
        """Parse a provider name case-insensitively (default: libre).

        Raises:
            ConfigurationError: For an unknown provider name.
        """
        if not value:
            return cls.LIBRE
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(kind.value for kind in cls)
            raise ConfigurationError(
                f"Unknown translation provider '{value}' (expected one of: {choices})"
            ) from None


@dataclass(frozen=True)
class ProviderConfig:
    """Selects and parametrizes a translation backend.

    Attributes:
        kind: Which provider to use.
        api_key: Provider API key (required for Google, optional for Libre).
        endpoint: Base URL override.
        call_timeout: Per-call timeout in seconds (None: backend default).
    """

    kind: ProviderKind = ProviderKind.LIBRE
    api_key: str | None = None
    endpoint: str | None = None
    call_timeout: float | None = None
