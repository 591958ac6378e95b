"""
Generation quota database model.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from core.plans import QuotaTier

from .base import Base, TimestampMixin, utcnow


class GenerationQuota(Base, TimestampMixin):
    """Per-user AI generation counter.

    The tier limit is checked by the application before generating; the
    database does not enforce ``generation_count <= limit``.
    """

    __tablename__ = "generation_quota"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # One row per provider user ID
    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    tier: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=QuotaTier.FREE.value,
    )
    """Values: 'free', 'pro'"""

    generation_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    last_reset_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<GenerationQuota(user_id={self.user_id}, tier={self.tier}, count={self.generation_count})>"
