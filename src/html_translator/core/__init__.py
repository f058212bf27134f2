# SPDX-License-Identifier: Apache-2.0
"""Core HTML segmenting modules."""

from .block_splitter import OPEN_TAG_PATTERN, join_segments, split_blocks
from .models import BLOCK_TAGS, Block, Raw, Segment
from .reassembler import block_texts, reassemble

__all__ = [
    "BLOCK_TAGS",
    "Block",
    "OPEN_TAG_PATTERN",
    "Raw",
    "Segment",
    "block_texts",
    "join_segments",
    "reassemble",
    "split_blocks",
]
