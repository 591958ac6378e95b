"""
Keyword API routes.
"""

from typing import Optional

from fastapi import APIRouter, Query, Request, status

from api.dependencies import CurrentContext
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.keywords import (
    BulkCreateKeywordsRequest,
    BulkCreateKeywordsResponse,
    CreateKeywordRequest,
    KeywordListResponse,
    KeywordResponse,
    KeywordSuggestionsRequest,
    KeywordSuggestionsResponse,
    SuggestionItemResponse,
)
from services.keyword_service import KeywordService
from services.suggestion_service import SuggestionService

router = APIRouter(prefix="/keywords", tags=["keywords"])


@router.get("", response_model=KeywordListResponse)
async def list_keywords(
    ctx: CurrentContext,
    query: Optional[str] = Query(None, max_length=100),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """
    List keywords, newest first, optionally filtered by a case-insensitive
    substring of the phrase.
    """
    result = await KeywordService(ctx).list(query=query, page=page, limit=limit)
    return KeywordListResponse(
        items=[KeywordResponse.model_validate(k) for k in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        has_more=result.has_more,
    )


@router.post("", response_model=KeywordResponse, status_code=status.HTTP_201_CREATED)
async def create_keyword(body: CreateKeywordRequest, ctx: CurrentContext):
    """Add a keyword. Equivalent phrases (case, spacing) conflict with 409."""
    keyword = await KeywordService(ctx).create(body.phrase)
    return KeywordResponse.model_validate(keyword)


@router.post(
    "/bulk",
    response_model=BulkCreateKeywordsResponse,
    status_code=status.HTTP_201_CREATED,
)
async def bulk_create_keywords(body: BulkCreateKeywordsRequest, ctx: CurrentContext):
    """Import up to 50 keywords; invalid phrases and duplicates are skipped."""
    result = await KeywordService(ctx).bulk_create(body.phrases)
    return BulkCreateKeywordsResponse(
        created=result.created_count,
        skipped=result.skipped_count,
        keywords=[KeywordResponse.model_validate(k) for k in result.created],
    )


@router.post("/suggestions", response_model=KeywordSuggestionsResponse)
@limiter.limit(get_rate_limit("keyword_suggestions"))
async def get_keyword_suggestions(
    request: Request,
    body: KeywordSuggestionsRequest,
    ctx: CurrentContext,
):
    """Keyword suggestions for up to 5 seed terms, served from cache when fresh."""
    result = await SuggestionService(ctx).fetch_suggestions(
        seeds=body.seeds,
        language_name=body.language_name,
        location_code=body.location_code,
        limit=body.limit,
        force_refresh=body.force_refresh,
    )
    return KeywordSuggestionsResponse(
        suggestions=[SuggestionItemResponse.model_validate(s) for s in result.suggestions],
        cached=result.cached,
        cache_expires_at=result.cache_expires_at,
    )
