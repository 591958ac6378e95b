"""
Style guide database model.
"""

from typing import Optional
from uuid import uuid4

from sqlalchemy import JSON, Boolean, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from core.domain.content import GuideLanguage

from .base import Base, TimestampMixin


class StyleGuide(Base, TimestampMixin):
    """Brand voice parameters applied to AI generation."""

    __tablename__ = "style_guides"

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

    # Brand
    brand_name: Mapped[str] = mapped_column(String(100), nullable=False)
    brand_description: Mapped[str] = mapped_column(Text, nullable=False)
    personality: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    formality: Mapped[str] = mapped_column(String(20), nullable=False)

    # Audience
    target_audience: Mapped[str] = mapped_column(Text, nullable=False)
    pain_points: Mapped[str] = mapped_column(Text, nullable=False)

    # Output
    language: Mapped[str] = mapped_column(
        String(5),
        nullable=False,
        default=GuideLanguage.KOREAN.value,
    )
    tone: Mapped[str] = mapped_column(String(50), nullable=False)
    content_length: Mapped[str] = mapped_column(String(20), nullable=False)
    reading_level: Mapped[str] = mapped_column(String(20), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<StyleGuide(id={self.id}, brand_name={self.brand_name})>"
