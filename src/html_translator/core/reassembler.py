# SPDX-License-Identifier: Apache-2.0
"""Rebuild HTML from segments and per-block translations."""

from __future__ import annotations

import html as html_lib
from collections.abc import Sequence

from .models import Block, Segment


def block_texts(segments: Sequence[Segment]) -> list[str]:
    """Inner texts of every Block, in document order."""
    return [s.text for s in segments if isinstance(s, Block)]


def reassemble(
    segments: Sequence[Segment],
    translations: Sequence[str],
    escape: bool = False,
) -> str:
    """Substitute translated text into each Block and join all segments.

    Raw segments are emitted byte-identical. Translated text is inserted
    verbatim unless ``escape`` is set; verbatim text becomes HTML content,
    so only use it with providers trusted to return plain text.

    Args:
        segments: Output of split_blocks().
        translations: One text per Block, in the same order.
        escape: HTML-escape translated text before insertion.

    Returns:
        Final HTML.

    Raises:
        ValueError: If the number of translations does not match the blocks.
    """
    block_count = sum(isinstance(s, Block) for s in segments)
    if len(translations) != block_count:
        raise ValueError(
            f"Expected {block_count} translations, got {len(translations)}"
        )

    parts: list[str] = []
    pending = iter(translations)
    for segment in segments:
        if isinstance(segment, Block):
            text = next(pending)
            if escape:
                text = html_lib.escape(text, quote=False)
            parts.append(segment.render(text))
        else:
            parts.append(segment.render())
    return "".join(parts)
