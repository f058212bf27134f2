# SPDX-License-Identifier: Apache-2.0
"""HTTP API for the browser client (aiohttp.web).

Routes:
    GET  /api/provider   -> {"provider": "google" | "libre"}
    GET  /api/languages  -> [{"code", "name"}, ...]
    POST /api/translate  {"target", "html"} -> {"translatedHtml"}
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable

from aiohttp import web

from html_translator.config import MAX_BODY_SIZE, ServerConfig
from html_translator.pipeline import HtmlTranslationPipeline, PipelineError, ValidationError
from html_translator.translators import TranslatorBackend, TranslatorError, create_translator

logger = logging.getLogger(__name__)

CONFIG_KEY = web.AppKey("config", ServerConfig)
TRANSLATOR_KEY = web.AppKey("translator", TranslatorBackend)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _error(status: int, message: str) -> web.Response:
    return web.json_response({"error": message}, status=status)


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Map domain errors to JSON error responses."""
    try:
        return await handler(request)
    except ValidationError as e:
        return _error(400, str(e))
    except (TranslatorError, PipelineError) as e:
        logger.warning("%s %s failed: %s", request.method, request.path, e)
        return _error(500, str(e) or type(e).__name__)
    except web.HTTPException:
        raise
    except Exception:
        logger.exception("%s %s failed unexpectedly", request.method, request.path)
        return _error(500, "Internal server error")


async def handle_provider(request: web.Request) -> web.Response:
    config = request.app[CONFIG_KEY]
    return web.json_response({"provider": config.provider.kind.value})


async def handle_languages(request: web.Request) -> web.Response:
    translator = request.app[TRANSLATOR_KEY]
    languages = await translator.list_languages()
    return web.json_response([lang.to_dict() for lang in languages])


async def handle_translate(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except ValueError:
        # Malformed JSON or a body that is not valid UTF-8
        body = None
    if not isinstance(body, dict):
        raise ValidationError("target and html required", stage="validate")

    pipeline = HtmlTranslationPipeline(
        request.app[TRANSLATOR_KEY], request.app[CONFIG_KEY].pipeline
    )
    result = await pipeline.translate(body.get("html"), body.get("target"))
    stats = result.stats or {}
    logger.info("Translated %d blocks to %s", stats.get("blocks", 0), body.get("target"))
    return web.json_response({"translatedHtml": result.html})


def _translator_context(
    translator: TranslatorBackend | None,
) -> Callable[[web.Application], AsyncIterator[None]]:
    async def context(app: web.Application) -> AsyncIterator[None]:
        backend = translator or create_translator(app[CONFIG_KEY].provider)
        app[TRANSLATOR_KEY] = backend
        logger.info("Translation provider: %s", backend.name)
        yield
        await backend.close()

    return context


def create_app(
    config: ServerConfig,
    translator: TranslatorBackend | None = None,
) -> web.Application:
    """Build the aiohttp application.

    Args:
        config: Server configuration.
        translator: Backend to use instead of one built from config.

    Returns:
        Application ready to run.
    """
    app = web.Application(client_max_size=MAX_BODY_SIZE, middlewares=[error_middleware])
    app[CONFIG_KEY] = config
    app.cleanup_ctx.append(_translator_context(translator))
    app.router.add_get("/api/provider", handle_provider)
    app.router.add_get("/api/languages", handle_languages)
    app.router.add_post("/api/translate", handle_translate)
    return app


def run_server(config: ServerConfig) -> None:
    """Serve the API until interrupted."""
    logger.info(
        "Translator proxy running on %s:%d, provider=%s",
        config.host,
        config.port,
        config.provider.kind.value,
    )
    web.run_app(create_app(config), host=config.host, port=config.port, print=None)
