"""
Article API routes.
"""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Query, Request, status

from api.dependencies import CurrentContext
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.articles import (
    ArticleListResponse,
    ArticleResponse,
    CreateArticleRequest,
    DashboardStatsResponse,
    GeneratedContentResponse,
    GenerateArticleRequest,
    GenerateArticleResponse,
    QuotaStatusResponse,
    UpdateArticleRequest,
)
from services.article_service import ArticleService
from services.quota_service import QuotaService

router = APIRouter(prefix="/articles", tags=["articles"])


# Static paths are registered before /{article_id}


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(ctx: CurrentContext):
    """Article counts for the dashboard."""
    stats = await ArticleService(ctx).dashboard_stats()
    return DashboardStatsResponse.model_validate(stats)


@router.get("/quota", response_model=QuotaStatusResponse)
async def get_quota_status(ctx: CurrentContext):
    """Generation quota for the caller. Read-only."""
    quota = await QuotaService(ctx).get_quota_status(ctx.user_id)
    return QuotaStatusResponse.model_validate(quota)


@router.post(
    "/generate",
    response_model=GenerateArticleResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(get_rate_limit("article_generation"))
async def generate_article(
    request: Request,
    body: GenerateArticleRequest,
    ctx: CurrentContext,
):
    """
    Generate an article with AI and save it as a draft.

    Counts against the caller's generation quota.
    """
    result = await ArticleService(ctx).generate(body)
    return GenerateArticleResponse(
        article=ArticleResponse.model_validate(result.article),
        generated_content=GeneratedContentResponse.model_validate(result.generated),
        quota_remaining=result.quota_remaining,
    )


@router.post("/draft", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_draft(body: CreateArticleRequest, ctx: CurrentContext):
    """Store an article as a draft."""
    article = await ArticleService(ctx).create_draft(body)
    return ArticleResponse.model_validate(article)


@router.get("", response_model=ArticleListResponse)
async def list_articles(
    ctx: CurrentContext,
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    status_filter: Literal["all", "draft", "published", "archived"] = Query("all", alias="status"),
    sort_by: Literal["created_at", "updated_at", "published_at", "title"] = Query(
        "created_at", alias="sortBy"
    ),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
):
    """List the caller's articles with offset pagination."""
    page = await ArticleService(ctx).list(
        limit=limit,
        offset=offset,
        status=status_filter,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return ArticleListResponse(
        articles=[ArticleResponse.model_validate(a) for a in page.articles],
        total=page.total,
        limit=page.limit,
        offset=page.offset,
    )


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(article_id: UUID, ctx: CurrentContext):
    """Get one of the caller's articles."""
    article = await ArticleService(ctx).get(str(article_id))
    return ArticleResponse.model_validate(article)


@router.patch("/{article_id}", response_model=ArticleResponse)
async def update_article(article_id: UUID, body: UpdateArticleRequest, ctx: CurrentContext):
    """Partially update an article. Publishing stamps publishedAt once."""
    article = await ArticleService(ctx).update(str(article_id), body)
    return ArticleResponse.model_validate(article)


@router.delete("/{article_id}")
async def delete_article(article_id: UUID, ctx: CurrentContext):
    """Delete an article."""
    await ArticleService(ctx).delete(str(article_id))
    return {"id": str(article_id)}
