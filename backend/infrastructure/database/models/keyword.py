"""Keyword and keyword suggestion cache models."""
from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Float, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from core.domain.keywords import KeywordSource

from .base import Base, TimestampMixin


class Keyword(Base, TimestampMixin):
    """A tracked keyword phrase, deduplicated on its normalized form."""

    __tablename__ = "keywords"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    # As typed by the user or returned by the research provider
    phrase: Mapped[str] = mapped_column(String(100), nullable=False)
    # Dedup key, see core.domain.keywords.normalize_keyword
    normalized: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    source: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=KeywordSource.MANUAL.value,
    )
    search_volume: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    cpc: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    __table_args__ = (
        Index("ix_keywords_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Keyword(id={self.id}, normalized={self.normalized})>"


class KeywordSuggestionCache(Base, TimestampMixin):
    """Cached keyword-research responses.

    Rows are append-only: a refresh inserts a new row rather than updating the
    old one, and expired rows are simply ignored by readers.
    """

    __tablename__ = "keyword_suggestions_cache"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    # Seed terms the response was fetched for
    seeds: Mapped[list] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False
    )
    language_name: Mapped[str] = mapped_column(String(100), nullable=False)
    location_code: Mapped[int] = mapped_column(Integer, nullable=False)
    response_data: Mapped[list] = mapped_column(JSON, nullable=False)
    """
    Structure:
    [
        {"keyword": "...", "search_volume": 1200, "cpc": 0.8, "competition": "LOW"},
        ...
    ]
    """
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        Index(
            "ix_kw_suggestions_locale",
            "language_name",
            "location_code",
        ),
    )
