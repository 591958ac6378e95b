"""
Article database model.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import JSON, CheckConstraint, DateTime, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from core.domain.content import ArticleStatus

from .base import Base, TimestampMixin


class Article(Base, TimestampMixin):
    """Article content model."""

    __tablename__ = "articles"

    # Primary key
    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Owner (provider user ID)
    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )

    # Weak reference: deleting the guide leaves this value dangling
    style_guide_id: Mapped[Optional[str]] = mapped_column(
        UUID(as_uuid=False),
        nullable=True,
    )

    # Content
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    keywords: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Voice
    tone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    content_length: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    reading_level: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # SEO
    meta_title: Mapped[Optional[str]] = mapped_column(String(60), nullable=True)
    meta_description: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)

    # Publishing
    status: Mapped[str] = mapped_column(
        String(20),
        default=ArticleStatus.DRAFT.value,
        nullable=False,
        index=True,
    )
    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index("ix_articles_user_created", "user_id", "created_at"),
        CheckConstraint(
            "status IN ('draft', 'published', 'archived')", name="ck_articles_status"
        ),
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, title={self.title[:30]}...)>"
