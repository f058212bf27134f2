#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
"""HTML translation sample script.

Shows the library API without the HTTP server: split an HTML fragment
into blocks, translate them concurrently, and print the result.

Usage:
    cd examples
    python translate_html.py

Environment variables (loaded from .env automatically):
    TRANSLATE_PROVIDER: "google" or "libre"
    GOOGLE_API_KEY: required for Google
    LIBRE_ENDPOINT: LibreTranslate instance URL
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add the project to the path (for development)
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

load_dotenv(PROJECT_ROOT / ".env")

from html_translator.config import load_config  # noqa: E402
from html_translator.pipeline import HtmlTranslationPipeline  # noqa: E402
from html_translator.translators import create_translator  # noqa: E402

# =============================================================================
# Settings
# =============================================================================

TARGET_LANG = "es"

SAMPLE_HTML = """\
<article>
  <h1>The lighthouse keeper</h1>
  <p>Every night the keeper climbed the <em>two hundred</em> steps.</p>
  <blockquote>The sea keeps no calendar.</blockquote>
  <ul>
    <li>Oil for the lamp</li>
    <li>Bread for the keeper</li>
  </ul>
</article>
"""


def print_progress(stage: str, current: int, total: int, message: str = "") -> None:
    print(f"  [{stage}] {current}/{total}", file=sys.stderr)


async def main() -> int:
    config = load_config()
    print(f"Provider: {config.provider.kind.value}", file=sys.stderr)

    async with create_translator(config.provider) as translator:
        pipeline = HtmlTranslationPipeline(
            translator, config.pipeline, progress_callback=print_progress
        )
        result = await pipeline.translate(SAMPLE_HTML, TARGET_LANG)

    print(result.html)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
