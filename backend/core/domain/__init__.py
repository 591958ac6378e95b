# Domain vocabulary and pure rules
from .content import (
    ArticleStatus,
    ContentLength,
    ContentTone,
    Formality,
    GuideLanguage,
    ReadingLevel,
    generate_slug,
    generate_unique_slug,
    is_valid_slug,
)
from .keywords import (
    KeywordSource,
    SuggestionItem,
    is_valid_keyword_phrase,
    keyword_phrase_error,
    normalize_keyword,
    validate_keyword_phrase,
)

__all__ = [
    "ArticleStatus",
    "ContentTone",
    "ContentLength",
    "ReadingLevel",
    "Formality",
    "GuideLanguage",
    "generate_slug",
    "generate_unique_slug",
    "is_valid_slug",
    "KeywordSource",
    "SuggestionItem",
    "normalize_keyword",
    "keyword_phrase_error",
    "is_valid_keyword_phrase",
    "validate_keyword_phrase",
]
