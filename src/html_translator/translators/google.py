# SPDX-License-Identifier: Apache-2.0
"""Google Cloud Translation (v2) backend."""

from __future__ import annotations

import json
from typing import Any

from html_translator.translators.base import (
    ConfigurationError,
    LanguageEntry,
    ProtocolError,
    ProviderError,
    normalize_languages,
)
from html_translator.translators.http import JsonHttpBackend


class GoogleTranslator(JsonHttpBackend):
    """Google Translate backend.

    This backend uses the Cloud Translation v2 REST API and requires an
    API key. The key is checked per call, so a missing key fails the
    request without touching the network.

    Attributes:
        name: Backend identifier ("google").
    """

    DEFAULT_ENDPOINT = "https://translation.googleapis.com"
    API_PATH = "/language/translate/v2"

    def __init__(
        self,
        api_key: str | None = None,
        endpoint: str | None = None,
        call_timeout: float | None = None,
    ) -> None:
        """Initialize GoogleTranslator.

        Args:
            api_key: Google Cloud API key.
            endpoint: Base URL override (default: public Google endpoint).
            call_timeout: Per-call timeout in seconds.
        """
        super().__init__(call_timeout)
        self._api_key = api_key or ""
        self._endpoint = (endpoint or self.DEFAULT_ENDPOINT).rstrip("/")

    @property
    def name(self) -> str:
        """Return backend name."""
        return "google"

    @property
    def _api_url(self) -> str:
        return f"{self._endpoint}{self.API_PATH}"

    def _require_key(self) -> str:
        if not self._api_key:
            raise ConfigurationError("GOOGLE_API_KEY not configured on server")
        return self._api_key

    async def translate(self, text: str, target_lang: str) -> str:
        """Translate a single text using Google Translate.

        Google may split the result into several translations; they are
        joined with a newline.

        Args:
            text: Text to translate.
            target_lang: Target language code.

        Returns:
            Translated text.

        Raises:
            ConfigurationError: If no API key is configured.
            TransportError: On network failure.
            ProtocolError: On an unexpected response shape.
            ProviderError: When Google reports an error.
        """
        # Early return for empty or whitespace-only text
        if not text or not text.strip():
            return text

        key = self._require_key()
        payload = {"q": text, "target": target_lang, "format": "text"}
        status, data = await self._post_json(self._api_url, payload, params={"key": key})
        self._raise_for_error(status, data)

        try:
            translations = data["data"]["translations"]
            return "\n".join(t["translatedText"] for t in translations)
        except (KeyError, TypeError) as e:
            raise ProtocolError(
                f"Unexpected Google translate response: {_preview(data)}"
            ) from e

    async def list_languages(self) -> list[LanguageEntry]:
        """List languages Google can translate into, named in English.

        Returns:
            Normalized language list. English comes first even if
            the provider does not list it as a target.
        """
        key = self._require_key()
        status, data = await self._get_json(
            f"{self._api_url}/languages", params={"key": key, "target": "en"}
        )
        self._raise_for_error(status, data)

        try:
            languages = data["data"]["languages"]
            entries = [
                LanguageEntry.from_provider(lang["language"], lang.get("name"))
                for lang in languages
            ]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ProtocolError(
                f"Unexpected Google languages response: {_preview(data)}"
            ) from e
        return normalize_languages(entries)

    def _raise_for_error(self, status: int, data: Any) -> None:
        """Raise ProviderError for Google's ``{"error": {...}}`` payloads.

        Raises:
            ProviderError: If the payload carries an error or the status is non-2xx.
        """
        if isinstance(data, dict) and data.get("error"):
            error = data["error"]
            if isinstance(error, dict):
                message = error.get("message") or json.dumps(error)
            else:
                message = str(error)
            raise ProviderError(message, status=status)
        if not 200 <= status < 300:
            raise ProviderError(f"Google API error (status {status})", status=status)


def _preview(data: Any, limit: int = 200) -> str:
    text = json.dumps(data, ensure_ascii=False)
    return text if len(text) <= limit else text[:limit] + "..."
