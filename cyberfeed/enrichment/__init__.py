"""LLM analysis and translation of feed items."""

from .llm_provider import (
    AnalysisError,
    LLMProvider,
    MockLLMProvider,
    OpenAIProvider,
    analyze_feed_item,
    get_llm_provider,
    user_error,
)
from .translation import TranslatedItem, TranslationCache, Translator

__all__ = [
    "LLMProvider",
    "OpenAIProvider",
    "MockLLMProvider",
    "AnalysisError",
    "analyze_feed_item",
    "get_llm_provider",
    "user_error",
    "TranslationCache",
    "TranslatedItem",
    "Translator",
]
