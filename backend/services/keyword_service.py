"""
Keyword store: create, bulk import and paginated search.
"""

from dataclasses import dataclass
from typing import List, Optional
from uuid import uuid4

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from api.utils import escape_like
from core.domain.keywords import (
    KeywordSource,
    is_valid_keyword_phrase,
    normalize_keyword,
    validate_keyword_phrase,
)
from core.errors import DatabaseError, DuplicateKeywordError, NoValidKeywordsError
from infrastructure.database.models.base import utcnow
from infrastructure.database.models.keyword import Keyword
from services.context import RequestContext


@dataclass
class BulkCreateResult:
    created_count: int
    skipped_count: int
    created: List[Keyword]


@dataclass
class KeywordPage:
    items: List[Keyword]
    total: int
    page: int
    limit: int

    @property
    def has_more(self) -> bool:
        return self.total > self.page * self.limit


def _dialect_insert(dialect_name: str):
    """INSERT construct that supports ON CONFLICT for the bound dialect."""
    if dialect_name == "sqlite":
        return sqlite.insert
    return postgresql.insert


class KeywordService:
    """Keyword CRUD. Keywords are shared across users; callers must be authenticated."""

    def __init__(self, ctx: RequestContext):
        self.ctx = ctx
        self.db = ctx.db
        self.logger = ctx.logger

    async def create(self, phrase: str) -> Keyword:
        """
        Add one manually entered keyword.

        Raises:
            InvalidKeywordPhraseError: If the phrase fails validation
            DuplicateKeywordError: If an equivalent phrase is already stored
        """
        validate_keyword_phrase(phrase)

        normalized = normalize_keyword(phrase)
        keyword = Keyword(
            phrase=phrase.strip(),
            normalized=normalized,
            source=KeywordSource.MANUAL.value,
        )
        self.db.add(keyword)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateKeywordError(
                f"Keyword '{normalized}' already exists"
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            self.logger.error("Failed to create keyword: %s", e)
            raise DatabaseError("Failed to create keyword", code="KEYWORD_CREATE_ERROR")

        await self.db.refresh(keyword)
        return keyword

    async def bulk_create(
        self,
        phrases: List[str],
        source: KeywordSource = KeywordSource.EXTERNAL,
    ) -> BulkCreateResult:
        """
        Import many keywords in one statement, skipping duplicates.

        Invalid phrases are dropped without being reported. Duplicates, within
        the batch or against stored rows, are counted as skipped.

        Raises:
            NoValidKeywordsError: If no phrase in the batch is valid
        """
        valid = [p for p in phrases if is_valid_keyword_phrase(p)]
        if not valid:
            raise NoValidKeywordsError()

        now = utcnow()
        rows = {}
        for phrase in valid:
            normalized = normalize_keyword(phrase)
            if normalized in rows:
                continue
            rows[normalized] = {
                "id": str(uuid4()),
                "phrase": phrase.strip(),
                "normalized": normalized,
                "source": source.value,
                "created_at": now,
                "updated_at": now,
            }

        insert = _dialect_insert(self.db.get_bind().dialect.name)
        stmt = (
            insert(Keyword)
            .values(list(rows.values()))
            .on_conflict_do_nothing(index_elements=["normalized"])
            .returning(Keyword)
        )

        try:
            created = list((await self.db.scalars(stmt)).all())
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            self.logger.error("Bulk keyword insert failed: %s", e)
            raise DatabaseError(
                "Unexpected error during bulk insert", code="KEYWORD_BULK_INSERT_ERROR"
            )

        skipped = len(valid) - len(created)
        self.logger.info("Bulk insert: %d created, %d skipped", len(created), skipped)
        return BulkCreateResult(
            created_count=len(created),
            skipped_count=skipped,
            created=created,
        )

    async def list(
        self,
        query: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> KeywordPage:
        """Newest-first page of keywords, optionally filtered by a phrase substring."""
        stmt = select(Keyword)
        if query and query.strip():
            pattern = f"%{escape_like(query.strip())}%"
            stmt = stmt.where(Keyword.phrase.ilike(pattern, escape="\\"))

        try:
            total = await self.db.scalar(
                select(func.count()).select_from(stmt.subquery())
            )
            result = await self.db.scalars(
                stmt.order_by(Keyword.created_at.desc(), Keyword.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
        except SQLAlchemyError as e:
            self.logger.error("Failed to list keywords: %s", e)
            raise DatabaseError("Failed to fetch keywords", code="KEYWORD_FETCH_ERROR")

        return KeywordPage(items=list(result.all()), total=total or 0, page=page, limit=limit)
