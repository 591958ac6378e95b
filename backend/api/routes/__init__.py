"""API Routes."""

from fastapi import APIRouter

from .articles import router as articles_router
from .health import router as health_router
from .keywords import router as keywords_router
from .style_guides import router as style_guides_router

# Create main API router
api_router = APIRouter()

# Include route modules
api_router.include_router(health_router, tags=["Health"])
api_router.include_router(keywords_router)
api_router.include_router(articles_router)
api_router.include_router(style_guides_router)
