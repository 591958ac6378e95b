"""
Local profiles for provider identities.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.errors import DatabaseError
from infrastructure.database.models.profile import Profile
from services.context import RequestContext


async def ensure_profile(ctx: RequestContext) -> Profile:
    """Return the caller's profile, creating it on first use."""
    db = ctx.db
    try:
        profile = await db.scalar(select(Profile).where(Profile.user_id == ctx.user_id))
        if profile:
            return profile

        profile = Profile(user_id=ctx.user_id)
        db.add(profile)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            profile = await db.scalar(select(Profile).where(Profile.user_id == ctx.user_id))
            if profile is None:
                raise DatabaseError("Failed to create profile", code="PROFILE_CREATE_ERROR")
        else:
            ctx.logger.info("Created profile for new user")
        return profile
    except SQLAlchemyError as e:
        await db.rollback()
        ctx.logger.error("Profile lookup failed: %s", e)
        raise DatabaseError("Failed to load profile", code="PROFILE_FETCH_ERROR")
