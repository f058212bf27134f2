# SPDX-License-Identifier: Apache-2.0
"""Process configuration read from the environment.

Configuration is read once at startup and never reloaded.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from html_translator.pipeline.html_pipeline import PipelineConfig
from html_translator.translators.base import ConfigurationError, ProviderConfig, ProviderKind

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000

# Matches the JSON body limit of the browser-facing API
MAX_BODY_SIZE = 256 * 1024

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"", "0", "false", "no", "off"}


@dataclass(frozen=True)
class ServerConfig:
    """Everything the proxy needs to start.

    Attributes:
        provider: Translation backend selection.
        pipeline: Block translation settings.
        host: Listen address.
        port: Listen port.
    """

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def _get_number(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got '{raw}'") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got '{raw}'")
    return value


def _get_bool(env: Mapping[str, str], name: str) -> bool:
    raw = env.get(name, "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got '{raw}'")


def load_config(
    environ: Mapping[str, str] | None = None,
    provider: str | None = None,
) -> ServerConfig:
    """Build a ServerConfig from environment variables.

    Args:
        environ: Variables to read (default: os.environ).
        provider: Provider name overriding TRANSLATE_PROVIDER.

    Returns:
        Immutable configuration.

    Raises:
        ConfigurationError: On an unknown provider or invalid number.
    """
    env = os.environ if environ is None else environ
    kind = ProviderKind.parse(provider or env.get("TRANSLATE_PROVIDER"))

    if kind is ProviderKind.GOOGLE:
        api_key = env.get("GOOGLE_API_KEY") or None
        endpoint = env.get("GOOGLE_ENDPOINT") or None
        if api_key is None:
            # Not fatal: each request reports it instead.
            logger.warning("GOOGLE_API_KEY is not set; Google requests will fail")
    else:
        api_key = env.get("LIBRE_API_KEY") or None
        endpoint = env.get("LIBRE_ENDPOINT") or None

    request_timeout = _get_number(env, "REQUEST_TIMEOUT", PipelineConfig.request_timeout)
    pipeline = PipelineConfig(
        max_concurrent=int(_get_number(env, "MAX_CONCURRENT", PipelineConfig.max_concurrent)),
        request_timeout=request_timeout,
        escape_html=_get_bool(env, "ESCAPE_HTML"),
    )

    return ServerConfig(
        provider=ProviderConfig(
            kind=kind,
            api_key=api_key,
            endpoint=endpoint,
            call_timeout=request_timeout,
        ),
        pipeline=pipeline,
        host=env.get("HOST") or DEFAULT_HOST,
        port=int(_get_number(env, "PORT", DEFAULT_PORT)),
    )
