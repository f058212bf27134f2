# SPDX-License-Identifier: Apache-2.0
"""Split an HTML fragment into translatable blocks and raw passthrough.

This is a single-pass, left-to-right scanner over a fixed tag whitelist,
not an HTML parser. Known boundaries:

- Blocks do not nest. The first closing tag with the same name ends the
  block, so ``<li>a<li>b</li></li>`` yields one block with inner text
  ``a<li>b`` followed by a raw ``</li>``.
- An opening tag with no matching closing tag is left in the raw output.
- Tags inside a block (``<b>``, ``<a>`` ...) stay in the block's text.
- Opening tags may not contain ``<`` (not even in quoted attributes).
"""

from __future__ import annotations

import logging
import re

from .models import BLOCK_TAGS, Block, Raw, Segment

logger = logging.getLogger(__name__)

_BLOCK_TAG_NAMES = r"p|blockquote|h[1-6]|li"

# group 1: tag name.
# (?![\w-]) keeps <pre>, <link>, <header> etc. from matching as p/li/h1.
OPEN_TAG_PATTERN = re.compile(
    rf"<({_BLOCK_TAG_NAMES})(?![\w-])[^<>]*>",
    re.IGNORECASE,
)

CLOSE_TAG_PATTERNS: dict[str, re.Pattern[str]] = {
    name: re.compile(rf"</{name}\s*>", re.IGNORECASE) for name in BLOCK_TAGS
}


class _CloseTagFinder:
    """Finds the first closing tag of a name at or after an offset.

    The last search per tag name is remembered: a later offset that is
    not past the remembered result gets the same answer, so an unclosed
    tag name never rescans the rest of the input.
    """

    def __init__(self, html: str) -> None:
        self._html = html
        self._last: dict[str, tuple[int, re.Match[str] | None]] = {}

    def find(self, name: str, pos: int) -> re.Match[str] | None:
        last = self._last.get(name)
        if last is not None:
            searched_from, match = last
            if searched_from <= pos and (match is None or match.start() >= pos):
                return match

        match = CLOSE_TAG_PATTERNS[name].search(self._html, pos)
        self._last[name] = (pos, match)
        return match


def split_blocks(html: str) -> list[Segment]:
    """Split HTML into an ordered list of Raw and Block segments.

    Empty gaps between adjacent blocks produce no Raw segment. Runs in
    time linear in the input length.

    Args:
        html: HTML fragment.

    Returns:
        Segments that render back to ``html`` when joined in order.
    """
    segments: list[Segment] = []
    closing_tags = _CloseTagFinder(html)
    last_index = 0
    pos = 0

    while True:
        opening = OPEN_TAG_PATTERN.search(html, pos)
        if opening is None:
            break

        tag_name = opening.group(1).lower()
        closing = closing_tags.find(tag_name, opening.end())
        if closing is None:
            pos = opening.start() + 1
            continue

        if opening.start() > last_index:
            segments.append(Raw(html[last_index : opening.start()]))
        segments.append(
            Block(
                tag_name=tag_name,
                open_tag=opening.group(0),
                text=html[opening.end() : closing.start()],
                close_tag=closing.group(0),
            )
        )
        last_index = pos = closing.end()

    if last_index < len(html):
        segments.append(Raw(html[last_index:]))

    logger.debug(
        "Split %d chars into %d segments (%d blocks)",
        len(html),
        len(segments),
        sum(isinstance(s, Block) for s in segments),
    )
    return segments


def join_segments(segments: list[Segment]) -> str:
    """Render segments back to HTML without translating anything."""
    return "".join(segment.render() for segment in segments)
