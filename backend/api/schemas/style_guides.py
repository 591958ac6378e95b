"""
Style guide API schemas.
"""

from datetime import datetime

from pydantic import Field

from core.domain.content import (
    ContentLength,
    ContentTone,
    Formality,
    GuideLanguage,
    ReadingLevel,
)

from .base import CamelModel


class StyleGuideRequest(CamelModel):
    """Onboarding form data; used for both create and update."""

    brand_name: str = Field(..., min_length=1, max_length=100)
    brand_description: str = Field(..., min_length=1, max_length=1000)
    personality: list[str] = Field(..., min_length=1, max_length=10)
    formality: Formality
    target_audience: str = Field(..., min_length=1, max_length=500)
    pain_points: str = Field(..., min_length=1, max_length=1000)
    language: GuideLanguage = GuideLanguage.KOREAN.value
    tone: ContentTone
    content_length: ContentLength
    reading_level: ReadingLevel
    notes: str | None = Field(None, max_length=2000)


class StyleGuideResponse(CamelModel):
    """Stored style guide."""

    id: str
    user_id: str
    brand_name: str
    brand_description: str
    personality: list[str]
    formality: str
    target_audience: str
    pain_points: str
    language: str
    tone: str
    content_length: str
    reading_level: str
    notes: str | None = None
    is_default: bool
    created_at: datetime
    updated_at: datetime
