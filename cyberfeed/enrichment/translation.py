"""Cached translation of feed items."""

from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field
from rich.console import Console

from ..ingestion.models import FeedItem
from .llm_provider import AnalysisError, LLMProvider

console = Console()

SOURCE_LANGUAGE = "en"


class TranslationCache:
    """Memo table of translations keyed by (text, language).

    Entries are never evicted; the working set is a few pages of headlines.
    """

    def __init__(self) -> None:
        self._entries: Dict[Tuple[str, str], str] = {}

    def get(self, text: str, language: str) -> Optional[str]:
        return self._entries.get((text, language))

    def set(self, text: str, language: str, translated: str) -> None:
        self._entries[(text, language)] = translated

    def get_or_compute(self, text: str, language: str, compute: Callable[[str, str], str]) -> str:
        """Return the cached translation, computing and storing it on a miss."""
        key = (text, language)
        if key not in self._entries:
            self._entries[key] = compute(text, language)
        return self._entries[key]

    def __contains__(self, key: Tuple[str, str]) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class TranslatedItem(BaseModel):
    """Feed item with translated display text; the original stays for tagging."""

    original: FeedItem = Field(..., description="Untranslated item")
    title: str = Field(..., description="Translated title")
    description: str = Field(..., description="Translated description")
    language: str = Field(..., description="Target language")

    @classmethod
    def untranslated(cls, item: FeedItem) -> "TranslatedItem":
        return cls(
            original=item,
            title=item.title,
            description=item.content_snippet or item.description,
            language=SOURCE_LANGUAGE,
        )


class Translator:
    """Translate item text through an LLM provider with an injected cache."""

    def __init__(self, provider: LLMProvider, cache: Optional[TranslationCache] = None) -> None:
        self.provider = provider
        self.cache = cache if cache is not None else TranslationCache()

    def translate_text(self, text: str, language: str) -> str:
        """
        Translate text, returning the input unchanged when there is nothing to do.

        Failed translations fall back to the original text and are not cached,
        so a later call can retry them.
        """
        if not text or not text.strip() or language == SOURCE_LANGUAGE:
            return text

        try:
            return self.cache.get_or_compute(text, language, self.provider.translate)
        except AnalysisError as e:
            console.print(f"[yellow]Translation failed, using original text: {e}[/yellow]")
            return text

    def translate_item(self, item: FeedItem, language: str) -> TranslatedItem:
        """Translate the title and description of an item."""
        if language == SOURCE_LANGUAGE:
            return TranslatedItem.untranslated(item)

        return TranslatedItem(
            original=item,
            title=self.translate_text(item.title, language),
            description=self.translate_text(item.content_snippet or item.description, language),
            language=language,
        )

    def translate_visible(
        self,
        items: Sequence[FeedItem],
        language: str,
        start: int = 0,
        end: int = 10,
    ) -> List[Union[FeedItem, TranslatedItem]]:
        """Translate only items[start:end]; the rest are returned untouched."""
        items = list(items)
        if language == SOURCE_LANGUAGE or not items:
            return list(items)

        visible = [self.translate_item(item, language) for item in items[start:end]]
        return items[:start] + visible + items[end:]
