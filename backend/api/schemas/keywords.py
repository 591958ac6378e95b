"""
Keyword API schemas.
"""

from datetime import datetime

from pydantic import Field, field_validator

from core.domain.keywords import MAX_KEYWORD_LENGTH, KeywordSource

from .base import CamelModel


class CreateKeywordRequest(CamelModel):
    """Request to add a single keyword."""

    phrase: str = Field(..., min_length=1, max_length=MAX_KEYWORD_LENGTH)


class BulkCreateKeywordsRequest(CamelModel):
    """Request to import many keywords at once.

    Individual phrases are checked by the service, which drops invalid ones.
    """

    phrases: list[str] = Field(..., min_length=1, max_length=50)

    @field_validator("phrases")
    @classmethod
    def validate_lengths(cls, v: list[str]) -> list[str]:
        for phrase in v:
            if not 1 <= len(phrase) <= MAX_KEYWORD_LENGTH:
                raise ValueError(
                    f"Each phrase must be between 1 and {MAX_KEYWORD_LENGTH} characters"
                )
        return v


class KeywordResponse(CamelModel):
    """Stored keyword."""

    id: str
    phrase: str
    normalized: str
    source: KeywordSource
    search_volume: int | None = None
    cpc: float | None = None
    created_at: datetime
    updated_at: datetime


class KeywordListResponse(CamelModel):
    """Paginated keyword list."""

    items: list[KeywordResponse]
    total: int
    page: int
    limit: int
    has_more: bool


class BulkCreateKeywordsResponse(CamelModel):
    """Result of a bulk import."""

    created: int
    skipped: int
    keywords: list[KeywordResponse]


class KeywordSuggestionsRequest(CamelModel):
    """Request for keyword-research suggestions."""

    seeds: list[str] = Field(..., min_length=1, max_length=5)
    language_name: str = Field(default="Korean", min_length=1, max_length=100)
    location_code: int = Field(default=2410, ge=1)
    limit: int = Field(default=25, ge=1, le=100)
    force_refresh: bool = False

    @field_validator("seeds")
    @classmethod
    def validate_seeds(cls, v: list[str]) -> list[str]:
        seeds = [seed.strip() for seed in v]
        if any(not seed for seed in seeds):
            raise ValueError("Seed keywords must not be empty")
        return seeds


class SuggestionItemResponse(CamelModel):
    """One suggested keyword with its metrics."""

    keyword: str
    search_volume: int | None = None
    cpc: float | None = None
    competition: str | None = None


class KeywordSuggestionsResponse(CamelModel):
    """Suggestions, from the cache or a fresh provider call."""

    suggestions: list[SuggestionItemResponse]
    cached: bool
    cache_expires_at: datetime | None = None
