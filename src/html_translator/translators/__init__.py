# SPDX-License-Identifier: Apache-2.0
"""Translation backend modules.

This module provides translation backends for Google Cloud Translation
and LibreTranslate, both satisfying the TranslatorBackend protocol.

Usage:
    from html_translator.translators import ProviderConfig, ProviderKind, create_translator

    translator = create_translator(ProviderConfig(kind=ProviderKind.LIBRE))
    async with translator:
        result = await translator.translate("Hello", "fr")
"""

from html_translator.translators.base import (
    ConfigurationError,
    LanguageEntry,
    ProtocolError,
    ProviderConfig,
    ProviderError,
    ProviderKind,
    TranslatorBackend,
    TranslatorError,
    TransportError,
    normalize_languages,
)
from html_translator.translators.google import GoogleTranslator
from html_translator.translators.libre import LibreTranslator

__all__ = [
    # Protocol, models and exceptions
    "TranslatorBackend",
    "LanguageEntry",
    "ProviderConfig",
    "ProviderKind",
    "TranslatorError",
    "ConfigurationError",
    "TransportError",
    "ProtocolError",
    "ProviderError",
    "normalize_languages",
    # Backends
    "GoogleTranslator",
    "LibreTranslator",
    "create_translator",
]


def create_translator(config: ProviderConfig) -> GoogleTranslator | LibreTranslator:
    """Create the backend selected by configuration.

    Args:
        config: Provider configuration.

    Returns:
        Translator instance.
    """
    if config.kind is ProviderKind.GOOGLE:
        return GoogleTranslator(
            api_key=config.api_key,
            endpoint=config.endpoint,
            call_timeout=config.call_timeout,
        )
    return LibreTranslator(
        endpoint=config.endpoint,
        api_key=config.api_key,
        call_timeout=config.call_timeout,
    )
