# SPDX-License-Identifier: Apache-2.0
"""LibreTranslate backend."""

from __future__ import annotations

from typing import Any

from html_translator.translators.base import (
    LanguageEntry,
    ProtocolError,
    ProviderError,
    normalize_languages,
)
from html_translator.translators.http import JsonHttpBackend


class LibreTranslator(JsonHttpBackend):
    """LibreTranslate backend.

    Talks to a public or self-hosted LibreTranslate instance. The source
    language is always auto-detected.

    Attributes:
        name: Backend identifier ("libre").
    """

    DEFAULT_ENDPOINT = "https://libretranslate.de"

    def __init__(
        self,
        endpoint: str | None = None,
        api_key: str | None = None,
        call_timeout: float | None = None,
    ) -> None:
        """Initialize LibreTranslator.

        Args:
            endpoint: Instance base URL (default: libretranslate.de).
            api_key: Optional key for instances that require one.
            call_timeout: Per-call timeout in seconds.
        """
        super().__init__(call_timeout)
        self._endpoint = (endpoint or self.DEFAULT_ENDPOINT).rstrip("/")
        self._api_key = api_key or ""

    @property
    def name(self) -> str:
        """Return backend name."""
        return "libre"

    async def translate(self, text: str, target_lang: str) -> str:
        """Translate a single text with source auto-detection.

        Args:
            text: Text to translate.
            target_lang: Target language code.

        Returns:
            Translated text.

        Raises:
            TransportError: On network failure.
            ProtocolError: On an unexpected response shape.
            ProviderError: When the instance reports an error.
        """
        if not text or not text.strip():
            return text

        payload = {"q": text, "source": "auto", "target": target_lang, "format": "text"}
        if self._api_key:
            payload["api_key"] = self._api_key

        status, data = await self._post_json(f"{self._endpoint}/translate", payload)
        self._raise_for_error(status, data)

        if isinstance(data, dict):
            # "translated" is accepted from older instances
            for key in ("translatedText", "translated"):
                value = data.get(key)
                if isinstance(value, str):
                    return value
        raise ProtocolError(f"Unexpected LibreTranslate response: {data!r:.200}")

    async def list_languages(self) -> list[LanguageEntry]:
        """List languages supported by the instance.

        Returns:
            Normalized language list. English comes first even if
            the provider does not list it as a target.
        """
        status, data = await self._get_json(f"{self._endpoint}/languages")
        self._raise_for_error(status, data)

        if not isinstance(data, list):
            raise ProtocolError(f"Unexpected LibreTranslate languages response: {data!r:.200}")
        try:
            entries = [
                LanguageEntry.from_provider(lang["code"], lang.get("name"))
                for lang in data
            ]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ProtocolError(
                f"Unexpected LibreTranslate languages response: {data!r:.200}"
            ) from e
        return normalize_languages(entries)

    def _raise_for_error(self, status: int, data: Any) -> None:
        if isinstance(data, dict) and data.get("error"):
            raise ProviderError(str(data["error"]), status=status)
        if not 200 <= status < 300:
            raise ProviderError(
                f"LibreTranslate error (status {status})", status=status
            )
