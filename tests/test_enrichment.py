"""Tests for LLM analysis and cached translation."""

from unittest.mock import MagicMock

import httpx
import openai
import pytest

from cyberfeed.enrichment import (
    AnalysisError,
    MockLLMProvider,
    OpenAIProvider,
    TranslatedItem,
    TranslationCache,
    Translator,
    analyze_feed_item,
    get_llm_provider,
)
from cyberfeed.enrichment.llm_provider import build_analysis_prompt
from cyberfeed.ingestion import FeedItem

ITEM = FeedItem(
    title="Ransomware hits port",
    description="Operations halted",
    content_snippet="Operations halted",
    link="https://example.com/port",
)


class FailingProvider(MockLLMProvider):
    def translate(self, text, language):
        self.calls.append(("translate", text))
        raise AnalysisError("Rate limit exceeded. Please try again later.")


def completion(content: str, total_tokens: int = 42):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    response.usage.total_tokens = total_tokens
    return response


class TestTranslationCache:
    def test_get_or_compute_computes_once(self):
        cache = TranslationCache()
        compute = MagicMock(return_value="مرحبا")

        assert cache.get_or_compute("hello", "ar", compute) == "مرحبا"
        assert cache.get_or_compute("hello", "ar", compute) == "مرحبا"

        compute.assert_called_once_with("hello", "ar")
        assert len(cache) == 1
        assert ("hello", "ar") in cache

    def test_keys_include_language(self):
        cache = TranslationCache()
        cache.set("hello", "ar", "مرحبا")

        assert cache.get("hello", "ar") == "مرحبا"
        assert cache.get("hello", "fr") is None


class TestTranslator:
    def test_translate_text_uses_cache(self):
        provider = MockLLMProvider()
        translator = Translator(provider)

        assert translator.translate_text("hello", "ar") == "[ar] hello"
        assert translator.translate_text("hello", "ar") == "[ar] hello"
        assert provider.calls == [("translate", "hello")]

    def test_cache_is_injected(self):
        cache = TranslationCache()
        cache.set("hello", "ar", "cached")
        provider = MockLLMProvider()

        assert Translator(provider, cache).translate_text("hello", "ar") == "cached"
        assert provider.calls == []

    def test_english_and_blank_text_are_untouched(self):
        provider = MockLLMProvider()
        translator = Translator(provider)

        assert translator.translate_text("hello", "en") == "hello"
        assert translator.translate_text("   ", "ar") == "   "
        assert translator.translate_text("", "ar") == ""
        assert provider.calls == []

    def test_failure_returns_original_and_is_not_cached(self):
        provider = FailingProvider()
        translator = Translator(provider)

        assert translator.translate_text("hello", "ar") == "hello"
        assert translator.translate_text("hello", "ar") == "hello"
        assert len(provider.calls) == 2
        assert len(translator.cache) == 0

    def test_translate_item_keeps_original(self):
        translated = Translator(MockLLMProvider()).translate_item(ITEM, "ar")

        assert isinstance(translated, TranslatedItem)
        assert translated.title == "[ar] Ransomware hits port"
        assert translated.description == "[ar] Operations halted"
        assert translated.original is ITEM

    def test_translate_item_in_english(self):
        translated = Translator(MockLLMProvider()).translate_item(ITEM, "en")

        assert translated.title == ITEM.title
        assert translated.language == "en"

    def test_translate_visible_only_touches_the_window(self):
        items = [FeedItem(title=f"item {i}") for i in range(5)]

        result = Translator(MockLLMProvider()).translate_visible(items, "ar", start=1, end=3)

        assert result[0] is items[0]
        assert [r.title for r in result[1:3]] == ["[ar] item 1", "[ar] item 2"]
        assert result[3] is items[3] and result[4] is items[4]


class TestProviders:
    def test_analyze_feed_item_with_mock(self):
        provider = MockLLMProvider()

        analysis = analyze_feed_item(provider, ITEM)

        assert "Ransomware hits port" in analysis
        assert provider.calls == [("analyze", "Ransomware hits port")]

    def test_analysis_prompt_languages(self):
        assert "Title: T" in build_analysis_prompt("T", "D")
        assert "العنوان: T" in build_analysis_prompt("T", "D", language="ar")
        assert "No description available" in build_analysis_prompt("T", "")

    def test_openai_provider_returns_content(self):
        provider = OpenAIProvider(api_key="sk-test")
        provider.client = MagicMock()
        provider.client.chat.completions.create.return_value = completion("  Risky.  ")

        assert provider.analyze_item("T", "D") == "Risky."
        assert provider.get_usage_stats()["total_tokens"] == 42
        assert provider.get_usage_stats()["api_calls"] == 1

    def test_openai_rate_limit_maps_to_user_message(self):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        error = openai.RateLimitError(
            "rate limited", response=httpx.Response(429, request=request), body=None
        )
        provider = OpenAIProvider(api_key="sk-test")
        provider.client = MagicMock()
        provider.client.chat.completions.create.side_effect = error

        with pytest.raises(AnalysisError, match="Rate limit exceeded"):
            provider.analyze_item("T", "D")

        with pytest.raises(AnalysisError, match="تم تجاوز الحد المسموح"):
            provider.analyze_item("T", "D", language="ar")

    def test_openai_connection_error_maps_to_network_message(self):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        provider = OpenAIProvider(api_key="sk-test")
        provider.client = MagicMock()
        provider.client.chat.completions.create.side_effect = openai.APIConnectionError(request=request)

        with pytest.raises(AnalysisError, match="Network error"):
            provider.analyze_item("T", "D")

    def test_empty_completion_is_an_error(self):
        provider = OpenAIProvider(api_key="sk-test")
        provider.client = MagicMock()
        provider.client.chat.completions.create.return_value = completion("")

        with pytest.raises(AnalysisError, match="Invalid response format"):
            provider.translate("hello", "ar")

    def test_get_llm_provider_without_key_is_disabled(self):
        assert get_llm_provider({"provider": "openai", "api_key": None}) is None
        assert get_llm_provider({"provider": "openai", "api_key": ""}) is None

    def test_get_llm_provider_unknown_provider_is_disabled(self):
        assert get_llm_provider({"provider": "anthropomorphic"}) is None

    def test_get_llm_provider_mock_only_when_configured(self):
        assert isinstance(get_llm_provider({"provider": "mock"}), MockLLMProvider)

    def test_get_llm_provider_with_key(self):
        provider = get_llm_provider({"provider": "openai", "api_key": "sk-test", "model": "gpt-4o-mini"})

        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o-mini"
