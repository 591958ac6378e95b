"""
Tests for the generation quota ledger.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select

from core.errors import QuotaIncrementFailedError
from infrastructure.database.models.generation import GenerationQuota
from services.quota_service import QuotaService

pytestmark = pytest.mark.asyncio


async def quota_rows(db, user_id: str) -> int:
    return await db.scalar(
        select(func.count()).select_from(GenerationQuota).where(GenerationQuota.user_id == user_id)
    )


class TestCheckQuota:
    async def test_new_user_gets_free_tier(self, ctx, user_id):
        check = await QuotaService(ctx).check_quota(user_id)

        assert check.allowed is True
        assert check.tier == "free"
        assert check.current_count == 0
        assert check.limit == 10
        assert check.remaining == 10
        assert await quota_rows(ctx.db, user_id) == 1

    async def test_check_is_idempotent(self, ctx, user_id):
        service = QuotaService(ctx)
        await service.check_quota(user_id)
        await service.check_quota(user_id)

        assert await quota_rows(ctx.db, user_id) == 1

    async def test_limit_reached(self, ctx, user_id):
        service = QuotaService(ctx)
        for _ in range(10):
            await service.increment_quota(user_id)

        check = await service.check_quota(user_id)

        assert check.allowed is False
        assert check.current_count == 10
        assert check.remaining == 0

    async def test_paid_tier_limit(self, ctx, user_id):
        ctx.db.add(GenerationQuota(user_id=user_id, tier="pro", generation_count=10))
        await ctx.db.commit()

        check = await QuotaService(ctx).check_quota(user_id)

        assert check.allowed is True
        assert check.limit == 100
        assert check.remaining == 90


class TestIncrementQuota:
    async def test_increment(self, ctx, user_id):
        service = QuotaService(ctx)

        first = await service.increment_quota(user_id)
        second = await service.increment_quota(user_id)

        assert first.new_count == 1
        assert first.remaining == 9
        assert second.new_count == 2
        assert second.remaining == 8

    async def test_concurrent_change_fails_without_retry(self, ctx, user_id):
        service = QuotaService(ctx)
        await service.increment_quota(user_id)

        # Simulate a read taken before another request bumped the count
        stale = SimpleNamespace(tier="free", generation_count=0)
        with patch.object(service, "_get_or_create_record", AsyncMock(return_value=stale)):
            with pytest.raises(QuotaIncrementFailedError) as exc_info:
                await service.increment_quota(user_id)

        assert exc_info.value.code == "QUOTA_INCREMENT_FAILED"
        status = await service.get_quota_status(user_id)
        assert status.current_count == 1

    async def test_try_increment_reports_failure(self, ctx, user_id):
        service = QuotaService(ctx)
        await service.increment_quota(user_id)

        stale = SimpleNamespace(tier="free", generation_count=0)
        with patch.object(service, "_get_or_create_record", AsyncMock(return_value=stale)):
            outcome = await service.try_increment_quota(user_id)

        assert outcome.ok is False
        assert outcome.increment is None
        assert "concurrently" in outcome.error

    async def test_try_increment_success(self, ctx, user_id):
        outcome = await QuotaService(ctx).try_increment_quota(user_id)

        assert outcome.ok is True
        assert outcome.increment.new_count == 1


class TestQuotaStatus:
    async def test_status_does_not_create_record(self, ctx, user_id):
        status = await QuotaService(ctx).get_quota_status(user_id)

        assert status.tier == "free"
        assert status.current_count == 0
        assert status.remaining == 10
        assert await quota_rows(ctx.db, user_id) == 0

    async def test_users_are_isolated(self, make_context, user_id, other_user_id):
        service = QuotaService(make_context(user_id))
        await service.increment_quota(user_id)

        other = await QuotaService(make_context(other_user_id)).get_quota_status(other_user_id)

        assert other.current_count == 0
