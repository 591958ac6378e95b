"""
Owner-scoped style guide CRUD.
"""

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from api.schemas.style_guides import StyleGuideRequest
from core.errors import DatabaseError, StyleGuideNotFoundError
from infrastructure.database.models.style_guide import StyleGuide
from services.context import RequestContext
from services.profile_service import ensure_profile


class StyleGuideService:
    """Style guides belong to one user; other users' guides are reported as not found."""

    def __init__(self, ctx: RequestContext):
        self.ctx = ctx
        self.db = ctx.db
        self.user_id = ctx.user_id
        self.logger = ctx.logger

    async def _commit(self, code: str, message: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            self.logger.error("%s: %s", message, e)
            raise DatabaseError(message, code=code)

    async def get(self, guide_id: str) -> StyleGuide:
        guide = await self.db.scalar(
            select(StyleGuide).where(
                StyleGuide.id == guide_id,
                StyleGuide.user_id == self.user_id,
            )
        )
        if not guide:
            raise StyleGuideNotFoundError()
        return guide

    async def get_default(self) -> Optional[StyleGuide]:
        """The caller's default guide, if one is marked."""
        return await self.db.scalar(
            select(StyleGuide)
            .where(StyleGuide.user_id == self.user_id, StyleGuide.is_default.is_(True))
            .order_by(StyleGuide.updated_at.desc())
            .limit(1)
        )

    async def list(self) -> List[StyleGuide]:
        result = await self.db.scalars(
            select(StyleGuide)
            .where(StyleGuide.user_id == self.user_id)
            .order_by(StyleGuide.created_at.desc(), StyleGuide.id.desc())
        )
        return list(result.all())

    async def create(self, data: StyleGuideRequest) -> StyleGuide:
        await ensure_profile(self.ctx)
        guide = StyleGuide(user_id=self.user_id, is_default=False, **data.model_dump())
        self.db.add(guide)
        await self._commit("STYLE_GUIDE_CREATE_ERROR", "Failed to create style guide")
        await self.db.refresh(guide)
        return guide

    async def update(self, guide_id: str, data: StyleGuideRequest) -> StyleGuide:
        guide = await self.get(guide_id)
        for field, value in data.model_dump().items():
            setattr(guide, field, value)
        await self._commit("STYLE_GUIDE_UPDATE_ERROR", "Failed to update style guide")
        await self.db.refresh(guide)
        return guide

    async def delete(self, guide_id: str) -> None:
        """Delete a guide. Articles referencing it keep the dangling id."""
        guide = await self.get(guide_id)
        await self.db.delete(guide)
        await self._commit("STYLE_GUIDE_DELETE_ERROR", "Failed to delete style guide")

    async def set_default(self, guide_id: str) -> StyleGuide:
        """Mark one guide as default and clear the flag on the caller's others."""
        guide = await self.get(guide_id)
        await self.db.execute(
            update(StyleGuide)
            .where(StyleGuide.user_id == self.user_id, StyleGuide.id != guide.id)
            .values(is_default=False)
        )
        guide.is_default = True
        await self._commit("STYLE_GUIDE_UPDATE_ERROR", "Failed to set default style guide")
        await self.db.refresh(guide)
        return guide
