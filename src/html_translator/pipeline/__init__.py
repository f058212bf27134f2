# SPDX-License-Identifier: Apache-2.0
"""HTML translation pipeline package."""

from .errors import PipelineError, TranslationTimeoutError, ValidationError
from .html_pipeline import HtmlTranslationPipeline, PipelineConfig, TranslationResult
from .progress import ProgressCallback

__all__ = [
    "HtmlTranslationPipeline",
    "PipelineConfig",
    "PipelineError",
    "ProgressCallback",
    "TranslationResult",
    "TranslationTimeoutError",
    "ValidationError",
]
