# SPDX-License-Identifier: Apache-2.0
"""Block-preserving HTML translation pipeline."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from html_translator.core.block_splitter import split_blocks
from html_translator.core.models import Block, Segment
from html_translator.core.reassembler import block_texts, reassemble
from html_translator.pipeline.errors import (
    PipelineError,
    TranslationTimeoutError,
    ValidationError,
)
from html_translator.pipeline.progress import ProgressCallback
from html_translator.translators.base import TranslatorBackend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineConfig:
    """HTML translation pipeline configuration."""

    # Concurrent block translations per document
    max_concurrent: int = 5

    # Upper bound in seconds for all block calls of one document combined
    request_timeout: float = 30.0

    # HTML-escape translated text before putting it back into the markup
    escape_html: bool = False


@dataclass
class TranslationResult:
    """HTML translation result."""

    html: str
    stats: dict[str, Any] | None = None


class HtmlTranslationPipeline:
    """Split HTML into blocks, translate each block, and reassemble.

    A failed block fails the whole document; no partially translated
    HTML is ever returned.
    """

    def __init__(
        self,
        translator: TranslatorBackend,
        config: PipelineConfig | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Initialize HtmlTranslationPipeline."""
        self._translator = translator
        self._config = config or PipelineConfig()
        self._progress_callback = progress_callback

    async def translate(self, html: Any, target_lang: Any) -> TranslationResult:
        """Translate the text blocks of an HTML fragment.

        Args:
            html: HTML fragment.
            target_lang: Target language code.

        Returns:
            Translated HTML and block statistics.

        Raises:
            ValidationError: If html or target_lang is missing.
            TranslationTimeoutError: If the request timeout elapses.
            TranslatorError: If any block translation fails.
        """
        self._validate(html, target_lang)

        segments = self._stage_split(html)
        texts = block_texts(segments)
        translations = await self._stage_translate(texts, target_lang)
        translated_html = reassemble(
            segments, translations, escape=self._config.escape_html
        )
        self._notify("reassemble", 1, 1)

        stats = {
            "blocks": len(texts),
            "raw_segments": len(segments) - len(texts),
            "translated_blocks": sum(1 for t in texts if t.strip()),
        }
        return TranslationResult(html=translated_html, stats=stats)

    def _validate(self, html: Any, target_lang: Any) -> None:
        if (
            not isinstance(html, str)
            or not isinstance(target_lang, str)
            or not html
            or not target_lang.strip()
        ):
            raise ValidationError("target and html required", stage="validate")

    def _stage_split(self, html: str) -> list[Segment]:
        segments = split_blocks(html)
        blocks = sum(isinstance(s, Block) for s in segments)
        self._notify("split", blocks, blocks)
        return segments

    async def _stage_translate(self, texts: list[str], target_lang: str) -> list[str]:
        if not texts:
            return []

        try:
            return await asyncio.wait_for(
                self._translate_all(texts, target_lang),
                timeout=self._config.request_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise TranslationTimeoutError(
                f"Translation timed out after {self._config.request_timeout:g}s",
                stage="translate",
                cause=exc,
            ) from exc

    async def _translate_all(self, texts: list[str], target_lang: str) -> list[str]:
        """Translate blocks concurrently; results keep input order."""
        semaphore = asyncio.Semaphore(max(1, self._config.max_concurrent))
        total = len(texts)
        done = 0

        async def translate_one(text: str) -> str:
            nonlocal done
            async with semaphore:
                result = await self._translator.translate(text, target_lang)
            done += 1
            self._notify("translate", done, total)
            return result

        tasks = [asyncio.ensure_future(translate_one(text)) for text in texts]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        if len(results) != total:
            raise PipelineError(
                "Translator returned unexpected number of results",
                stage="translate",
            )
        logger.debug("Translated %d blocks into %s", total, target_lang)
        return list(results)

    def _notify(self, stage: str, current: int, total: int, message: str = "") -> None:
        if self._progress_callback is None:
            return
        self._progress_callback(stage, current, total, message)
