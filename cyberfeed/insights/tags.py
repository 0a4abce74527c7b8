"""Keyword tags for feed items."""

from typing import Dict, List

from pydantic import BaseModel, Field

from ..ingestion.models import FeedItem

HIGHLIGHT_KEYWORDS = ["vulnerability", "breach", "ransomware", "attack"]
NORMAL_KEYWORDS = ["malware", "phishing", "data", "security", "cyber", "threat"]
MAX_TAGS = 3

TAG_NAMES: Dict[str, Dict[str, str]] = {
    "en": {
        "attack": "Attack",
        "breach": "Breach",
        "vulnerability": "Vulnerability",
        "ransomware": "Ransomware",
        "malware": "Malware",
        "phishing": "Phishing",
        "data": "Data",
        "security": "Security",
        "cyber": "Cyber",
        "threat": "Threat",
    },
    "ar": {
        "attack": "هجوم",
        "breach": "خرق",
        "vulnerability": "ثغرة",
        "ransomware": "برمجية فدية",
        "malware": "برمجية خبيثة",
        "phishing": "تصيد",
        "data": "بيانات",
        "security": "أمن",
        "cyber": "سيبراني",
        "threat": "تهديد",
    },
}


class Tag(BaseModel):
    """Keyword tag shown next to an item."""

    name: str = Field(..., description="Display name in the requested language")
    keyword: str = Field(..., description="English keyword that matched")
    highlight: bool = Field(False, description="Whether the tag marks a severe topic")


def tag_name(keyword: str, language: str = "en") -> str:
    return TAG_NAMES.get(language, TAG_NAMES["en"]).get(keyword, keyword)


def keyword_for_name(name: str) -> str:
    """Map a localized tag name back to its English keyword ("" if unknown)."""
    needle = name.strip().lower()
    for names in TAG_NAMES.values():
        for keyword, display in names.items():
            if display.lower() == needle:
                return keyword
    return ""


def extract_tags(item: FeedItem, language: str = "en") -> List[Tag]:
    """
    Extract up to three keyword tags from an item.

    Highlight keywords come first; normal keywords only fill remaining slots.
    Matching is a plain substring test on the lowercased title and description.
    """
    text = f"{item.title} {item.content_snippet or item.description}".lower()
    tags: List[Tag] = []

    for keyword in HIGHLIGHT_KEYWORDS:
        if keyword in text:
            tags.append(Tag(name=tag_name(keyword, language), keyword=keyword, highlight=True))

    for keyword in NORMAL_KEYWORDS:
        if keyword in text and len(tags) < MAX_TAGS:
            tags.append(Tag(name=tag_name(keyword, language), keyword=keyword))

    return tags[:MAX_TAGS]
