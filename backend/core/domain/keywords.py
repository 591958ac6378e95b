"""
Keyword phrase canonicalization and validation.

Pure functions with no I/O: the normalized form is the deduplication key
stored in the ``keywords.normalized`` unique column.
"""
import re
import unicodedata
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional

from core.errors import InvalidKeywordPhraseError

MAX_KEYWORD_LENGTH = 100

_WHITESPACE_RUN = re.compile(r"\s+")
# ASCII letters/digits or a precomposed Hangul syllable
_MEANINGFUL_CHAR = re.compile(r"[a-zA-Z0-9가-힣]")


class KeywordSource(str, Enum):
    """Where a stored keyword came from."""
    MANUAL = "manual"
    EXTERNAL = "external"


def normalize_keyword(phrase: str) -> str:
    """
    Canonical dedup key for a keyword phrase.

    NFC composition, lowercase, trim, then collapse whitespace runs to a
    single space, so ``"React  Framework"`` and ``" react framework"`` map
    to the same key.
    """
    text = unicodedata.normalize("NFC", phrase).lower().strip()
    return _WHITESPACE_RUN.sub(" ", text)


def keyword_phrase_error(phrase: str) -> str | None:
    """Return the reason a phrase is invalid, or None when it is acceptable."""
    trimmed = phrase.strip()
    if not trimmed:
        return "Keyword must not be empty"
    if len(trimmed) > MAX_KEYWORD_LENGTH:
        return f"Keyword must not exceed {MAX_KEYWORD_LENGTH} characters"
    if not _MEANINGFUL_CHAR.search(trimmed):
        return "Keyword must contain at least one meaningful character"
    return None


def is_valid_keyword_phrase(phrase: str) -> bool:
    return keyword_phrase_error(phrase) is None


def validate_keyword_phrase(phrase: str) -> None:
    """Raise InvalidKeywordPhraseError when the phrase is not acceptable."""
    error = keyword_phrase_error(phrase)
    if error:
        raise InvalidKeywordPhraseError(error)


@dataclass(frozen=True)
class SuggestionItem:
    """A keyword suggestion returned by the research provider."""

    keyword: str
    search_volume: Optional[int] = None
    cpc: Optional[float] = None
    competition: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SuggestionItem":
        return cls(
            keyword=data["keyword"],
            search_volume=data.get("search_volume"),
            cpc=data.get("cpc"),
            competition=data.get("competition"),
        )
