# SPDX-License-Identifier: Apache-2.0
"""Shared aiohttp plumbing for JSON translation APIs."""

from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any

import aiohttp

from html_translator.translators.base import ProtocolError, TransportError

logger = logging.getLogger(__name__)


class JsonHttpBackend(ABC):
    """Session handling and JSON decoding shared by the HTTP backends.

    Subclasses implement ``name`` and call ``_get_json`` / ``_post_json``. The
    session is created lazily so a backend can be constructed outside of
    a running event loop.
    """

    DEFAULT_CALL_TIMEOUT = 15.0

    def __init__(self, call_timeout: float | None = None) -> None:
        self._call_timeout = call_timeout or self.DEFAULT_CALL_TIMEOUT
        self._session: aiohttp.ClientSession | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name, used in error messages."""

    async def __aenter__(self) -> JsonHttpBackend:
        """Enter async context manager."""
        await self._ensure_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session exists.

        Returns:
            Active aiohttp session.
        """
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._call_timeout)
            )
        return self._session

    async def _get_json(
        self, url: str, params: dict[str, str] | None = None
    ) -> tuple[int, Any]:
        session = await self._ensure_session()
        return await self._send(session.get(url, params=params), url)

    async def _post_json(
        self,
        url: str,
        payload: dict[str, Any],
        params: dict[str, str] | None = None,
    ) -> tuple[int, Any]:
        session = await self._ensure_session()
        return await self._send(session.post(url, params=params, json=payload), url)

    async def _send(self, request: Any, url: str) -> tuple[int, Any]:
        """Perform a request and decode its body.

        Returns:
            (HTTP status, decoded JSON body). The body is None when a non-2xx
            response is not JSON.

        Raises:
            TransportError: On connection failure or timeout.
            ProtocolError: When a 2xx response body is not JSON.
        """
        try:
            async with request as response:
                status = response.status
                body = await response.text()
        except aiohttp.ClientError as e:
            raise TransportError(f"{self.name} request failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise TransportError(f"{self.name} request timed out") from e

        logger.debug("%s %s -> %d (%d bytes)", self.name, url, status, len(body))

        try:
            return status, json.loads(body)
        except ValueError as e:
            if 200 <= status < 300:
                raise ProtocolError(
                    f"{self.name} returned a non-JSON response (status {status})"
                ) from e
            return status, None

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
