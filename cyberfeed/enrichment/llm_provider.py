"""LLM provider interface and implementations."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import openai
from openai import OpenAI
from rich.console import Console

from ..ingestion.models import FeedItem

console = Console()

LANGUAGE_NAMES = {"ar": "Arabic", "en": "English"}

ERROR_MESSAGES = {
    "auth": {
        "en": "API key error. Please check the API key.",
        "ar": "خطأ في مفتاح API. يرجى التحقق من المفتاح.",
    },
    "rate_limit": {
        "en": "Rate limit exceeded. Please try again later.",
        "ar": "تم تجاوز الحد المسموح. يرجى المحاولة لاحقاً.",
    },
    "network": {
        "en": "Network error. Please check your internet connection.",
        "ar": "خطأ في الاتصال. يرجى التحقق من الاتصال بالإنترنت.",
    },
    "other": {
        "en": "Analysis error: {error}",
        "ar": "خطأ في التحليل: {error}",
    },
}


class AnalysisError(Exception):
    """LLM request failed; the message is meant for the user."""


def user_error(kind: str, language: str = "en", error: str = "") -> AnalysisError:
    messages = ERROR_MESSAGES[kind]
    template = messages.get(language, messages["en"])
    return AnalysisError(template.format(error=error))


def build_analysis_prompt(title: str, description: str, language: str = "en") -> str:
    """Build the prompt asking for a cybersecurity news analysis."""
    title = title or "No title"
    description = description or "No description available"

    if language == "ar":
        return (
            "قم بتحليل هذا الخبر الأمني السيبراني وقدم ملخصاً مفصلاً بالعربية:\n\n"
            f"العنوان: {title}\n\n"
            f"الوصف: {description}\n\n"
            "قدم تحليلاً شاملاً يتضمن: المخاطر المحتملة، التأثير، والتوصيات."
        )

    return (
        "Analyze this cybersecurity news item and provide a detailed summary:\n\n"
        f"Title: {title}\n\n"
        f"Description: {description}\n\n"
        "Provide a comprehensive analysis including: potential risks, impact, and recommendations."
    )


def build_translation_prompt(text: str, language: str) -> str:
    target = LANGUAGE_NAMES.get(language, language)
    return (
        f"Translate the following text to {target}. "
        f'Return only the translation, no explanations: "{text}"'
    )


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    def analyze_item(self, title: str, description: str, language: str = "en") -> str:
        """
        Analyze a news item.

        Args:
            title: Item title
            description: Item description
            language: Language of the analysis (en, ar)

        Returns:
            Analysis text covering risks, impact and recommendations

        Raises:
            AnalysisError: With a user-facing message if the request fails
        """
        pass

    @abstractmethod
    def translate(self, text: str, language: str) -> str:
        """
        Translate text into the target language.

        Raises:
            AnalysisError: If the request fails
        """
        pass

    @abstractmethod
    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        pass


class OpenAIProvider(LLMProvider):
    """OpenAI implementation of LLM provider."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        base_url: Optional[str] = None,
    ) -> None:
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Model name to use
            base_url: Custom base URL (for testing)
        """
        self.client = OpenAI(api_key=api_key, base_url=base_url)
        self.model = model
        self.total_tokens = 0
        self.api_calls = 0

    def _complete(
        self,
        prompt: str,
        max_tokens: int,
        temperature: float,
        language: str = "en",
    ) -> str:
        try:
            self.api_calls += 1
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.AuthenticationError as e:
            raise user_error("auth", language) from e
        except openai.RateLimitError as e:
            raise user_error("rate_limit", language) from e
        except openai.APIConnectionError as e:
            raise user_error("network", language) from e
        except openai.OpenAIError as e:
            raise user_error("other", language, str(e)) from e

        # Update usage stats
        if response.usage:
            self.total_tokens += response.usage.total_tokens

        if not response.choices or not response.choices[0].message.content:
            raise user_error("other", language, "Invalid response format from OpenAI")

        return response.choices[0].message.content.strip()

    def analyze_item(self, title: str, description: str, language: str = "en") -> str:
        """Analyze an item using OpenAI."""
        prompt = build_analysis_prompt(title, description, language)
        return self._complete(prompt, max_tokens=500, temperature=0.7, language=language)

    def translate(self, text: str, language: str) -> str:
        """Translate text using OpenAI."""
        prompt = build_translation_prompt(text, language)
        return self._complete(prompt, max_tokens=300, temperature=0.3)

    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        return {
            "total_tokens": self.total_tokens,
            "api_calls": self.api_calls,
            "model": self.model,
        }


class MockLLMProvider(LLMProvider):
    """Mock LLM provider for testing and offline use."""

    def __init__(self) -> None:
        """Initialize mock provider."""
        self.calls: List[Tuple[str, Any]] = []

    def analyze_item(self, title: str, description: str, language: str = "en") -> str:
        """Mock item analysis."""
        self.calls.append(("analyze", title))

        return (
            f"Mock analysis of '{title[:50]}'\n\n"
            "Potential risks: exposure of sensitive data.\n"
            "Impact: depends on affected systems.\n"
            "Recommendations: patch, monitor and review access controls."
        )

    def translate(self, text: str, language: str) -> str:
        """Mock translation: tags the text with the target language."""
        self.calls.append(("translate", text))
        return f"[{language}] {text}"

    def get_usage_stats(self) -> Dict:
        """Get mock usage statistics."""
        return {
            "total_tokens": len(self.calls) * 100,
            "api_calls": len(self.calls),
            "model": "mock",
        }


def get_llm_provider(llm_config: Dict[str, Any]) -> Optional[LLMProvider]:
    """
    Get the configured LLM provider.

    Returns None when OpenAI is selected without an API key, or when the
    provider is unknown; callers then leave text untranslated and refuse
    analysis. The mock provider is only used when configured explicitly.
    """
    provider = llm_config.get("provider")
    if provider == "openai":
        api_key = llm_config.get("api_key")
        if not api_key:
            return None

        return OpenAIProvider(
            api_key=api_key,
            model=llm_config.get("model") or "gpt-3.5-turbo",
            base_url=llm_config.get("base_url"),
        )

    if provider == "mock":
        return MockLLMProvider()

    console.print(f"[yellow]Warning: Unknown LLM provider '{provider}'. LLM features disabled.[/yellow]")
    return None


def analyze_feed_item(provider: LLMProvider, item: FeedItem, language: str = "en") -> str:
    """Analyze a feed item's title and description."""
    return provider.analyze_item(item.title, item.content_snippet or item.description, language)
