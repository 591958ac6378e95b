"""
Style guide API routes.
"""

from uuid import UUID

from fastapi import APIRouter, status

from api.dependencies import CurrentContext
from api.schemas.style_guides import StyleGuideRequest, StyleGuideResponse
from services.style_guide_service import StyleGuideService

router = APIRouter(prefix="/style-guides", tags=["style-guides"])


@router.post("", response_model=StyleGuideResponse, status_code=status.HTTP_201_CREATED)
async def create_style_guide(body: StyleGuideRequest, ctx: CurrentContext):
    """Create a style guide from onboarding form data."""
    guide = await StyleGuideService(ctx).create(body)
    return StyleGuideResponse.model_validate(guide)


@router.get("", response_model=list[StyleGuideResponse])
async def list_style_guides(ctx: CurrentContext):
    guides = await StyleGuideService(ctx).list()
    return [StyleGuideResponse.model_validate(g) for g in guides]


@router.get("/{guide_id}", response_model=StyleGuideResponse)
async def get_style_guide(guide_id: UUID, ctx: CurrentContext):
    guide = await StyleGuideService(ctx).get(str(guide_id))
    return StyleGuideResponse.model_validate(guide)


@router.patch("/{guide_id}", response_model=StyleGuideResponse)
async def update_style_guide(guide_id: UUID, body: StyleGuideRequest, ctx: CurrentContext):
    """Replace every field of a style guide."""
    guide = await StyleGuideService(ctx).update(str(guide_id), body)
    return StyleGuideResponse.model_validate(guide)


@router.post("/{guide_id}/default", response_model=StyleGuideResponse)
async def set_default_style_guide(guide_id: UUID, ctx: CurrentContext):
    """Make this the guide used when generation does not name one."""
    guide = await StyleGuideService(ctx).set_default(str(guide_id))
    return StyleGuideResponse.model_validate(guide)


@router.delete("/{guide_id}")
async def delete_style_guide(guide_id: UUID, ctx: CurrentContext):
    """Delete a style guide. Articles referencing it are kept."""
    await StyleGuideService(ctx).delete(str(guide_id))
    return {"id": str(guide_id)}
