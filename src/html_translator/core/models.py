# SPDX-License-Identifier: Apache-2.0
"""Segment models for block-preserving HTML translation.

An HTML fragment decomposes into an ordered sequence of segments.
Rendering every segment in order reproduces the fragment exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# Block-level tags whose inner content is translated as one unit.
BLOCK_TAGS: frozenset[str] = frozenset(
    {"p", "blockquote", "h1", "h2", "h3", "h4", "h5", "h6", "li"}
)


@dataclass(frozen=True)
class Raw:
    """Opaque passthrough HTML, never translated."""

    html: str

    def render(self) -> str:
        return self.html


@dataclass(frozen=True)
class Block:
    """A translatable block element.

    Attributes:
        tag_name: Lower-cased tag name, one of BLOCK_TAGS.
        open_tag: Opening tag exactly as written, attributes included.
        text: Inner content between the tags.
        close_tag: Closing tag exactly as written.
    """

    tag_name: str
    open_tag: str
    text: str
    close_tag: str

    def __post_init__(self) -> None:
        if self.tag_name not in BLOCK_TAGS:
            raise ValueError(f"Not a block tag: {self.tag_name!r}")

    def render(self, text: str | None = None) -> str:
        """Render the block, optionally with replacement inner text."""
        inner = self.text if text is None else text
        return f"{self.open_tag}{inner}{self.close_tag}"


Segment = Union[Raw, Block]
