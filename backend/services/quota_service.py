"""
Generation quota ledger.

Each user has one ``generation_quota`` row, created lazily on the first
check. The tier limit is advisory: it is checked before generating and
the counter is bumped afterwards with a compare-and-swap update.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.errors import QuotaCheckFailedError, QuotaIncrementFailedError
from core.plans import QuotaTier, get_quota_limit
from infrastructure.database.models.base import utcnow
from infrastructure.database.models.generation import GenerationQuota
from services.context import RequestContext


@dataclass
class QuotaCheck:
    allowed: bool
    tier: str
    current_count: int
    limit: int
    remaining: int

    @classmethod
    def for_count(cls, tier: str, count: int) -> "QuotaCheck":
        limit = get_quota_limit(tier)
        return cls(
            allowed=count < limit,
            tier=tier,
            current_count=count,
            limit=limit,
            remaining=max(0, limit - count),
        )


@dataclass
class QuotaIncrement:
    new_count: int
    remaining: int


@dataclass
class QuotaIncrementOutcome:
    """Result of a best-effort increment after a successful generation."""

    ok: bool
    increment: Optional[QuotaIncrement] = None
    error: Optional[str] = None


class QuotaService:
    """Per-user generation counters."""

    def __init__(self, ctx: RequestContext):
        self.db = ctx.db
        self.logger = ctx.logger

    async def _get_record(self, user_id: str) -> Optional[GenerationQuota]:
        result = await self.db.execute(
            select(GenerationQuota)
            .where(GenerationQuota.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _get_or_create_record(self, user_id: str) -> GenerationQuota:
        record = await self._get_record(user_id)
        if record:
            return record

        record = GenerationQuota(
            user_id=user_id,
            tier=QuotaTier.FREE.value,
            generation_count=0,
        )
        self.db.add(record)
        try:
            await self.db.commit()
        except IntegrityError:
            # Created concurrently by another request
            await self.db.rollback()
            record = await self._get_record(user_id)
            if record is None:
                raise QuotaCheckFailedError()
        return record

    async def check_quota(self, user_id: str) -> QuotaCheck:
        """Whether the user may generate now. Creates a free-tier record if missing."""
        try:
            record = await self._get_or_create_record(user_id)
        except SQLAlchemyError as e:
            await self.db.rollback()
            self.logger.error("Quota check failed: %s", e)
            raise QuotaCheckFailedError(f"Quota check failed: {e}")
        return QuotaCheck.for_count(record.tier, record.generation_count)

    async def increment_quota(self, user_id: str) -> QuotaIncrement:
        """
        Add one generation to the user's count.

        Raises:
            QuotaIncrementFailedError: If the count changed between read and
                write (a concurrent increment won) or the datastore failed.
                The call is not retried.
        """
        try:
            record = await self._get_or_create_record(user_id)
            observed = record.generation_count
            result = await self.db.execute(
                update(GenerationQuota)
                .where(
                    GenerationQuota.user_id == user_id,
                    GenerationQuota.generation_count == observed,
                )
                .values(generation_count=observed + 1, updated_at=utcnow())
            )
            if result.rowcount == 0:
                await self.db.rollback()
                raise QuotaIncrementFailedError(
                    "Failed to increment quota: count changed concurrently"
                )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            self.logger.error("Quota increment failed: %s", e)
            raise QuotaIncrementFailedError(f"Quota increment failed: {e}")

        new_count = observed + 1
        return QuotaIncrement(
            new_count=new_count,
            remaining=max(0, get_quota_limit(record.tier) - new_count),
        )

    async def try_increment_quota(self, user_id: str) -> QuotaIncrementOutcome:
        """``increment_quota`` that reports failure instead of raising."""
        try:
            increment = await self.increment_quota(user_id)
        except QuotaIncrementFailedError as e:
            return QuotaIncrementOutcome(ok=False, error=e.message)
        return QuotaIncrementOutcome(ok=True, increment=increment)

    async def get_quota_status(self, user_id: str) -> QuotaCheck:
        """Like ``check_quota`` but never creates a record."""
        try:
            record = await self._get_record(user_id)
        except SQLAlchemyError as e:
            self.logger.error("Quota status lookup failed: %s", e)
            raise QuotaCheckFailedError(f"Quota check failed: {e}")
        if record is None:
            return QuotaCheck.for_count(QuotaTier.FREE.value, 0)
        return QuotaCheck.for_count(record.tier, record.generation_count)
