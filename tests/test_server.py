# SPDX-License-Identifier: Apache-2.0
"""Tests for the HTTP API."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import test_utils

from html_translator.config import ServerConfig
from html_translator.pipeline import PipelineConfig
from html_translator.server import create_app
from html_translator.translators import (
    ConfigurationError,
    LanguageEntry,
    ProtocolError,
    ProviderConfig,
    ProviderError,
    ProviderKind,
    TransportError,
)


@pytest.fixture
def mock_translator() -> MagicMock:
    """Create a mock translator that upper-cases text."""
    translator = MagicMock()
    translator.name = "google"

    async def translate(text: str, target_lang: str) -> str:
        return text.upper()

    translator.translate = AsyncMock(side_effect=translate)
    translator.list_languages = AsyncMock(
        return_value=[LanguageEntry("en", "English"), LanguageEntry("fr", "French")]
    )
    translator.close = AsyncMock()
    return translator


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig(provider=ProviderConfig(kind=ProviderKind.GOOGLE, api_key="k"))


@pytest.fixture
async def client(
    config: ServerConfig, mock_translator: MagicMock
) -> AsyncIterator[test_utils.TestClient]:
    app = create_app(config, translator=mock_translator)
    async with test_utils.TestClient(test_utils.TestServer(app)) as test_client:
        yield test_client


class TestProviderRoute:
    """Tests for GET /api/provider."""

    async def test_provider(self, client: test_utils.TestClient) -> None:
        resp = await client.get("/api/provider")
        assert resp.status == 200
        assert await resp.json() == {"provider": "google"}


class TestLanguagesRoute:
    """Tests for GET /api/languages."""

    async def test_languages(self, client: test_utils.TestClient) -> None:
        resp = await client.get("/api/languages")
        assert resp.status == 200
        assert await resp.json() == [
            {"code": "en", "name": "English"},
            {"code": "fr", "name": "French"},
        ]

    @pytest.mark.parametrize(
        "error",
        [
            ConfigurationError("GOOGLE_API_KEY not configured on server"),
            ProviderError("Forbidden", status=403),
            TransportError("unreachable"),
            ProtocolError("odd shape"),
        ],
    )
    async def test_languages_error(
        self, client: test_utils.TestClient, mock_translator: MagicMock, error: Exception
    ) -> None:
        mock_translator.list_languages.side_effect = error
        resp = await client.get("/api/languages")
        assert resp.status == 500
        assert await resp.json() == {"error": str(error)}

    async def test_unexpected_error_is_json_500(
        self, client: test_utils.TestClient, mock_translator: MagicMock
    ) -> None:
        """Unexpected exceptions still answer with a JSON error body."""
        mock_translator.list_languages.side_effect = RuntimeError("boom")
        resp = await client.get("/api/languages")
        assert resp.status == 500
        assert resp.content_type == "application/json"
        assert await resp.json() == {"error": "Internal server error"}


class TestTranslateRoute:
    """Tests for POST /api/translate."""

    async def test_translate(self, client: test_utils.TestClient) -> None:
        resp = await client.post(
            "/api/translate", json={"target": "fr", "html": "<p>hi</p>X<li>yo</li>"}
        )
        assert resp.status == 200
        assert await resp.json() == {"translatedHtml": "<p>HI</p>X<li>YO</li>"}

    @pytest.mark.parametrize(
        "body",
        [
            {"html": "<p>hi</p>"},
            {"target": "fr"},
            {"target": "", "html": "<p>hi</p>"},
            {"target": "fr", "html": ""},
            ["fr", "<p>hi</p>"],
        ],
    )
    async def test_missing_fields(self, client: test_utils.TestClient, body: object) -> None:
        resp = await client.post("/api/translate", json=body)
        assert resp.status == 400
        assert await resp.json() == {"error": "target and html required"}

    async def test_invalid_json(self, client: test_utils.TestClient) -> None:
        resp = await client.post(
            "/api/translate",
            data="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status == 400
        assert await resp.json() == {"error": "target and html required"}

    async def test_invalid_utf8(self, client: test_utils.TestClient) -> None:
        """A body that is not UTF-8 is a 400 JSON error, not a crash."""
        resp = await client.post(
            "/api/translate",
            data=b'{"target":"fr","html":"\xff\xfe"}',
            headers={"Content-Type": "application/json"},
        )
        assert resp.status == 400
        assert resp.content_type == "application/json"
        assert await resp.json() == {"error": "target and html required"}

    async def test_provider_failure(
        self, client: test_utils.TestClient, mock_translator: MagicMock
    ) -> None:
        """A failing block fails the request with 500."""
        mock_translator.translate.side_effect = ProviderError("quota exceeded")
        resp = await client.post(
            "/api/translate", json={"target": "fr", "html": "<p>a</p><p>b</p>"}
        )
        assert resp.status == 500
        assert await resp.json() == {"error": "quota exceeded"}

    async def test_body_too_large(self, client: test_utils.TestClient) -> None:
        html = "<p>" + "a" * (300 * 1024) + "</p>"
        resp = await client.post("/api/translate", json={"target": "fr", "html": html})
        assert resp.status == 413


class TestTimeout:
    """Request timeout is applied from configuration."""

    async def test_timeout_is_500(self, mock_translator: MagicMock) -> None:
        async def slow(text: str, target_lang: str) -> str:
            await asyncio.sleep(5)
            return text

        mock_translator.translate.side_effect = slow
        config = ServerConfig(pipeline=PipelineConfig(request_timeout=0.05))
        app = create_app(config, translator=mock_translator)

        async with test_utils.TestClient(test_utils.TestServer(app)) as test_client:
            resp = await test_client.post(
                "/api/translate", json={"target": "fr", "html": "<p>a</p>"}
            )
            assert resp.status == 500
            body = await resp.json()
            assert "timed out" in body["error"]


class TestLifecycle:
    """Translator lifecycle tied to the application."""

    async def test_translator_closed_on_cleanup(
        self, config: ServerConfig, mock_translator: MagicMock
    ) -> None:
        app = create_app(config, translator=mock_translator)
        async with test_utils.TestClient(test_utils.TestServer(app)):
            pass
        mock_translator.close.assert_awaited_once()

    async def test_translator_built_from_config(self) -> None:
        config = ServerConfig(provider=ProviderConfig(kind=ProviderKind.LIBRE))
        app = create_app(config)
        async with test_utils.TestClient(test_utils.TestServer(app)) as test_client:
            resp = await test_client.get("/api/provider")
            assert await resp.json() == {"provider": "libre"}
