"""Content domain: article lifecycle, style-guide vocabularies and slug rules."""
import random
import re
import string
from enum import Enum


class ArticleStatus(str, Enum):
    """Article lifecycle status."""
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class ContentTone(str, Enum):
    """Voice applied to generated copy."""
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    INSPIRATIONAL = "inspirational"
    EDUCATIONAL = "educational"


class ContentLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class ReadingLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Formality(str, Enum):
    CASUAL = "casual"
    NEUTRAL = "neutral"
    FORMAL = "formal"


class GuideLanguage(str, Enum):
    KOREAN = "ko"
    ENGLISH = "en"


# Lowercase alphanumeric runs joined by single hyphens
SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

_HANGUL = re.compile(r"[ㄱ-힝]")
_SLUG_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_PATTERN.match(slug))


def generate_slug(text: str) -> str:
    """Convert text to a URL-safe slug.

    Hangul is dropped (no romanization), everything else that is not a word
    character, whitespace or hyphen is removed, and separators collapse to
    a single hyphen.
    """
    text = text.lower().strip()
    text = _HANGUL.sub("", text)
    text = re.sub(r"[^a-z0-9\s_-]", "", text)
    text = re.sub(r"[\s_-]+", "-", text)
    return text.strip("-")[:190].rstrip("-")


def generate_unique_slug(text: str) -> str:
    """Slug with a random 6-character base-36 suffix.

    Falls back to ``article`` when the text yields an empty slug (e.g. a
    title written entirely in Hangul).
    """
    base = generate_slug(text) or "article"
    suffix = "".join(random.choices(_SLUG_SUFFIX_ALPHABET, k=6))
    return f"{base}-{suffix}"
