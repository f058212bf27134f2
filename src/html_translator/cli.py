# SPDX-License-Identifier: Apache-2.0
"""
HTML Translator - CLI Tool

Runs the translation proxy for the browser client, or translates a local
HTML fragment while preserving its block structure.

Usage:
    html-translator serve [options]
    html-translator translate <input.html> -t <lang> [options]
    html-translator languages [options]

Examples:
    html-translator serve --port 8080
    html-translator translate article.html -t fr -o article.fr.html
    html-translator languages --provider google
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import NoReturn

from dotenv import load_dotenv

from html_translator.config import ServerConfig, load_config
from html_translator.pipeline import HtmlTranslationPipeline, PipelineError
from html_translator.server import run_server
from html_translator.translators import ConfigurationError, TranslatorError, create_translator

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="html-translator",
        description="Translation proxy that preserves HTML block structure",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  TRANSLATE_PROVIDER  "google" or "libre" (default: libre)
  GOOGLE_API_KEY      Google Cloud Translation API key (provider=google)
  LIBRE_ENDPOINT      LibreTranslate URL (default: https://libretranslate.de)
  LIBRE_API_KEY       LibreTranslate API key, if the instance requires one
  REQUEST_TIMEOUT     Seconds allowed per document (default: 30)
  MAX_CONCURRENT      Concurrent block translations (default: 5)
  ESCAPE_HTML         HTML-escape translated text (default: false)
""",
    )

    # Options shared by every command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-p",
        "--provider",
        choices=["google", "libre"],
        help="Translation provider (overrides TRANSLATE_PROVIDER)",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", parents=[common], help="Run the HTTP API")
    serve.add_argument("--host", help="Listen address (default: HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, help="Listen port (default: PORT or 3000)")

    translate = commands.add_parser(
        "translate", parents=[common], help="Translate a local HTML fragment"
    )
    translate.add_argument("input", type=Path, help="HTML file to translate")
    translate.add_argument("-t", "--target", required=True, help="Target language code")
    translate.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file path (default: stdout)",
    )
    translate.add_argument(
        "--escape-html",
        action="store_true",
        help="HTML-escape translated text before inserting it",
    )

    commands.add_parser("languages", parents=[common], help="List supported languages")

    return parser.parse_args(argv)


async def run_translate(args: argparse.Namespace, config: ServerConfig) -> int:
    """Translate one HTML file.

    Returns:
        Exit code (0: success, 1: failure).
    """
    input_path: Path = args.input
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    html = input_path.read_text(encoding="utf-8")
    pipeline_config = config.pipeline
    if args.escape_html:
        pipeline_config = replace(pipeline_config, escape_html=True)

    translator = create_translator(config.provider)
    try:
        pipeline = HtmlTranslationPipeline(translator, pipeline_config)
        result = await pipeline.translate(html, args.target)
    except (TranslatorError, PipelineError) as e:
        print(f"Error: Translation failed: {e}", file=sys.stderr)
        return 1
    finally:
        await translator.close()

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(result.html, encoding="utf-8")
        stats = result.stats or {}
        print(f"Complete: {args.output}", file=sys.stderr)
        print(f"  Blocks: {stats.get('blocks', 0)}", file=sys.stderr)
        print(f"  Translated: {stats.get('translated_blocks', 0)}", file=sys.stderr)
    else:
        sys.stdout.write(result.html)
    return 0


async def run_languages(config: ServerConfig) -> int:
    """Print supported languages as "name — code" lines.

    Returns:
        Exit code (0: success, 1: failure).
    """
    translator = create_translator(config.provider)
    try:
        languages = await translator.list_languages()
    except TranslatorError as e:
        print(f"Error: Could not list languages: {e}", file=sys.stderr)
        return 1
    finally:
        await translator.close()

    for lang in languages:
        print(f"{lang.name} — {lang.code}")
    return 0


def run(args: argparse.Namespace) -> int:
    """Execute the selected command.

    Returns:
        Exit code (0: success, 1: failure).
    """
    try:
        config = load_config(provider=args.provider)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command == "serve":
        if args.host or args.port:
            config = replace(
                config, host=args.host or config.host, port=args.port or config.port
            )
        run_server(config)
        return 0
    if args.command == "translate":
        return asyncio.run(run_translate(args, config))
    return asyncio.run(run_languages(config))


def main() -> NoReturn:
    """Main entry point."""
    args = parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    if args.command == "serve" and not args.verbose:
        log_level = logging.INFO
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    load_dotenv()
    sys.exit(run(args))


if __name__ == "__main__":
    main()
