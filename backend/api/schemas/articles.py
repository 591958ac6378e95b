"""
Article API schemas.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from core.domain.content import (
    SLUG_PATTERN,
    ArticleStatus,
    ContentLength,
    ContentTone,
    ReadingLevel,
)
from core.plans import QuotaTier

from .base import CamelModel


class CreateArticleRequest(CamelModel):
    """Request to store an article as a draft."""

    title: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=200, pattern=SLUG_PATTERN.pattern)
    keywords: list[str] = Field(default_factory=list)
    description: str | None = Field(None, max_length=500)
    content: str = Field(..., min_length=1)
    style_guide_id: UUID | None = None
    tone: ContentTone | None = None
    content_length: ContentLength | None = None
    reading_level: ReadingLevel | None = None
    meta_title: str | None = Field(None, max_length=60)
    meta_description: str | None = Field(None, max_length=160)


class UpdateArticleRequest(CamelModel):
    """Partial article update. Only fields present in the body are applied."""

    title: str | None = Field(None, min_length=1, max_length=200)
    slug: str | None = Field(None, min_length=1, max_length=200, pattern=SLUG_PATTERN.pattern)
    keywords: list[str] | None = None
    description: str | None = Field(None, max_length=500)
    content: str | None = Field(None, min_length=1)
    style_guide_id: UUID | None = None
    tone: ContentTone | None = None
    content_length: ContentLength | None = None
    reading_level: ReadingLevel | None = None
    meta_title: str | None = Field(None, max_length=60)
    meta_description: str | None = Field(None, max_length=160)
    status: ArticleStatus | None = None


class ArticleResponse(CamelModel):
    """Stored article."""

    id: str
    user_id: str
    title: str
    slug: str
    keywords: list[str]
    description: str | None = None
    content: str
    style_guide_id: str | None = None
    tone: str | None = None
    content_length: str | None = None
    reading_level: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    status: ArticleStatus
    published_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ArticleListResponse(CamelModel):
    """Offset-paginated article list."""

    articles: list[ArticleResponse]
    total: int
    limit: int
    offset: int


class DashboardStatsResponse(CamelModel):
    """Per-user article statistics."""

    monthly_articles: int
    total_articles: int
    published_articles: int
    draft_articles: int
    saved_hours: int


class QuotaStatusResponse(CamelModel):
    """Generation quota for the caller."""

    allowed: bool
    tier: QuotaTier
    current_count: int
    limit: int
    remaining: int


class GenerateArticleRequest(CamelModel):
    """Request to generate and store an article with AI."""

    topic: str = Field(..., min_length=1, max_length=500)
    style_guide_id: UUID | None = None
    keywords: list[str] | None = Field(None, max_length=20)
    additional_instructions: str | None = Field(None, max_length=1000)


class GeneratedContentResponse(CamelModel):
    """Parsed model output."""

    title: str
    content: str
    meta_description: str
    keywords: list[str]
    headings: list[str]


class GenerateArticleResponse(CamelModel):
    """Generation result: the stored draft plus the raw parsed content."""

    article: ArticleResponse
    generated_content: GeneratedContentResponse
    quota_remaining: int
