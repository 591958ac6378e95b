"""
Time-boxed cache of keyword-research responses.

Entries are keyed by (seed set, language, location). A lookup hits when an
unexpired entry for the same locale was fetched for a superset of the
requested seeds; the newest such entry wins.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import List, Optional

from sqlalchemy import Select, select, type_coerce
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import SQLAlchemyError

from core.domain.keywords import SuggestionItem
from infrastructure.database.models.base import utcnow
from infrastructure.database.models.keyword import KeywordSuggestionCache
from services.context import RequestContext


@dataclass
class CacheEntry:
    suggestions: List[SuggestionItem]
    expires_at: datetime


@dataclass
class CacheWriteResult:
    """Outcome of a best-effort cache write. Failures are reported, never raised."""

    ok: bool
    expires_at: Optional[datetime] = None
    error: Optional[str] = None


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _fresh_for_locale(language_name: str, location_code: int, now: datetime) -> tuple:
    return (
        KeywordSuggestionCache.language_name == language_name,
        KeywordSuggestionCache.location_code == location_code,
        KeywordSuggestionCache.expires_at > now,
    )


def superset_lookup(
    seeds: List[str],
    language_name: str,
    location_code: int,
    now: datetime,
) -> Select:
    """Newest fresh entry whose seeds contain ``seeds``, using JSONB ``@>``."""
    return (
        select(KeywordSuggestionCache)
        .where(
            *_fresh_for_locale(language_name, location_code, now),
            type_coerce(KeywordSuggestionCache.seeds, JSONB).contains(list(seeds)),
        )
        .order_by(KeywordSuggestionCache.created_at.desc())
        .limit(1)
    )


class SuggestionCache:
    """Reads and appends rows of ``keyword_suggestions_cache``."""

    def __init__(self, ctx: RequestContext):
        self.db = ctx.db
        self.logger = ctx.logger
        self.ttl = timedelta(hours=ctx.settings.keyword_suggestion_cache_ttl_hours)

    async def get(
        self,
        seeds: List[str],
        language_name: str,
        location_code: int,
    ) -> Optional[CacheEntry]:
        """Newest unexpired entry covering all ``seeds``, or None.

        A failed lookup is treated as a miss.
        """
        try:
            if self.db.get_bind().dialect.name == "postgresql":
                row = await self.db.scalar(
                    superset_lookup(seeds, language_name, location_code, utcnow())
                )
            else:
                row = await self._scan_for_superset(seeds, language_name, location_code)
        except SQLAlchemyError as e:
            self.logger.warning("Suggestion cache lookup failed: %s", e)
            return None

        if row is None:
            return None
        return CacheEntry(
            suggestions=[SuggestionItem.from_dict(item) for item in row.response_data],
            expires_at=_as_utc(row.expires_at),
        )

    async def _scan_for_superset(
        self,
        seeds: List[str],
        language_name: str,
        location_code: int,
    ) -> Optional[KeywordSuggestionCache]:
        # No JSON containment operator: compare seed sets here, loading only
        # the response of the winning row
        wanted = set(seeds)
        candidates = await self.db.execute(
            select(KeywordSuggestionCache.id, KeywordSuggestionCache.seeds)
            .where(*_fresh_for_locale(language_name, location_code, utcnow()))
            .order_by(KeywordSuggestionCache.created_at.desc())
        )
        for row_id, row_seeds in candidates:
            if wanted.issubset(row_seeds or []):
                return await self.db.get(KeywordSuggestionCache, row_id)
        return None

    async def put(
        self,
        seeds: List[str],
        language_name: str,
        location_code: int,
        suggestions: List[SuggestionItem],
    ) -> CacheWriteResult:
        """Append a new entry expiring after the configured TTL."""
        expires_at = utcnow() + self.ttl
        entry = KeywordSuggestionCache(
            seeds=list(seeds),
            language_name=language_name,
            location_code=location_code,
            response_data=[item.to_dict() for item in suggestions],
            expires_at=expires_at,
        )
        try:
            self.db.add(entry)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            return CacheWriteResult(ok=False, expires_at=expires_at, error=str(e))
        return CacheWriteResult(ok=True, expires_at=expires_at)
