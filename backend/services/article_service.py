"""
Owner-scoped article persistence and AI generation.

Every query filters on the caller's user id, so another user's article is
indistinguishable from a missing one.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy import case, func, select
from sqlalchemy.exc import SQLAlchemyError

from adapters.ai.anthropic_adapter import AnthropicContentService, GeneratedArticle, content_ai_service
from api.schemas.articles import CreateArticleRequest, GenerateArticleRequest, UpdateArticleRequest
from core.domain.content import ArticleStatus, generate_unique_slug
from core.errors import ArticleNotFoundError, DatabaseError, QuotaExceededError
from core.plans import HOURS_SAVED_PER_ARTICLE
from infrastructure.database.models.base import utcnow
from infrastructure.database.models.content import Article
from services.context import RequestContext
from services.profile_service import ensure_profile
from services.quota_service import QuotaService
from services.style_guide_service import StyleGuideService

REQUIRED_FIELDS = ("title", "slug", "content", "keywords", "status")

SORT_COLUMNS = {
    "created_at": Article.created_at,
    "updated_at": Article.updated_at,
    "published_at": Article.published_at,
    "title": Article.title,
}


@dataclass
class ArticlePage:
    articles: List[Article]
    total: int
    limit: int
    offset: int


@dataclass
class DashboardStats:
    monthly_articles: int
    total_articles: int
    published_articles: int
    draft_articles: int
    saved_hours: int


@dataclass
class GenerationResult:
    article: Article
    generated: GeneratedArticle
    quota_remaining: int


def month_start(now: datetime) -> datetime:
    """First instant of ``now``'s calendar month."""
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


class ArticleService:
    """Article CRUD, dashboard statistics and AI generation for one caller."""

    def __init__(
        self,
        ctx: RequestContext,
        ai_service: Optional[AnthropicContentService] = None,
    ):
        self.ctx = ctx
        self.db = ctx.db
        self.user_id = ctx.user_id
        self.logger = ctx.logger
        self.ai = ai_service or content_ai_service

    async def _commit(self, code: str, message: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            self.logger.error("%s: %s", message, e)
            raise DatabaseError(message, code=code)

    async def get(self, article_id: str) -> Article:
        try:
            article = await self.db.scalar(
                select(Article).where(
                    Article.id == article_id,
                    Article.user_id == self.user_id,
                )
            )
        except SQLAlchemyError as e:
            self.logger.error("Failed to fetch article: %s", e)
            raise DatabaseError("Failed to fetch article", code="ARTICLE_FETCH_ERROR")
        if not article:
            raise ArticleNotFoundError()
        return article

    async def create_draft(self, data: CreateArticleRequest) -> Article:
        await ensure_profile(self.ctx)
        values = data.model_dump()
        if values["style_guide_id"] is not None:
            values["style_guide_id"] = str(values["style_guide_id"])

        article = Article(
            user_id=self.user_id,
            status=ArticleStatus.DRAFT.value,
            **values,
        )
        self.db.add(article)
        await self._commit("ARTICLE_CREATE_ERROR", "Failed to create article")
        await self.db.refresh(article)
        return article

    async def update(self, article_id: str, data: UpdateArticleRequest) -> Article:
        """
        Apply the fields present in ``data``.

        Moving to ``published`` stamps ``published_at`` the first time only;
        publishing an already-published article keeps the original timestamp.
        """
        article = await self.get(article_id)
        changes = data.model_dump(exclude_unset=True)
        # Explicit nulls cannot clear required columns
        for field in REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                del changes[field]

        if "style_guide_id" in changes and changes["style_guide_id"] is not None:
            changes["style_guide_id"] = str(changes["style_guide_id"])

        for field, value in changes.items():
            setattr(article, field, value)

        if changes.get("status") == ArticleStatus.PUBLISHED.value and article.published_at is None:
            article.published_at = utcnow()

        await self._commit("ARTICLE_UPDATE_ERROR", "Failed to update article")
        await self.db.refresh(article)
        return article

    async def delete(self, article_id: str) -> None:
        article = await self.get(article_id)
        await self.db.delete(article)
        await self._commit("ARTICLE_DELETE_ERROR", "Failed to delete article")

    async def list(
        self,
        limit: int = 10,
        offset: int = 0,
        status: str = "all",
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> ArticlePage:
        stmt = select(Article).where(Article.user_id == self.user_id)
        if status != "all":
            stmt = stmt.where(Article.status == status)

        column = SORT_COLUMNS[sort_by]
        if sort_order == "asc":
            order = (column.asc(), Article.id.asc())
        else:
            order = (column.desc(), Article.id.desc())

        try:
            total = await self.db.scalar(select(func.count()).select_from(stmt.subquery()))
            result = await self.db.scalars(stmt.order_by(*order).offset(offset).limit(limit))
        except SQLAlchemyError as e:
            self.logger.error("Failed to list articles: %s", e)
            raise DatabaseError("Failed to fetch articles", code="ARTICLE_FETCH_ERROR")

        return ArticlePage(articles=list(result.all()), total=total or 0, limit=limit, offset=offset)

    async def dashboard_stats(self) -> DashboardStats:
        """Counts for the caller's dashboard. Months are calendar months in UTC."""
        since = month_start(utcnow())
        stmt = select(
            func.count(Article.id),
            func.count(case((Article.created_at >= since, 1))),
            func.count(case((Article.status == ArticleStatus.PUBLISHED.value, 1))),
            func.count(case((Article.status == ArticleStatus.DRAFT.value, 1))),
        ).where(Article.user_id == self.user_id)

        try:
            total, monthly, published, drafts = (await self.db.execute(stmt)).one()
        except SQLAlchemyError as e:
            self.logger.error("Failed to compute dashboard stats: %s", e)
            raise DatabaseError("Failed to fetch dashboard stats", code="ARTICLE_STATS_ERROR")

        return DashboardStats(
            monthly_articles=monthly,
            total_articles=total,
            published_articles=published,
            draft_articles=drafts,
            saved_hours=total * HOURS_SAVED_PER_ARTICLE,
        )

    async def generate(self, request: GenerateArticleRequest) -> GenerationResult:
        """
        Generate an article with AI and store it as a draft.

        Raises:
            QuotaExceededError: If the caller has used their tier's allowance
            StyleGuideNotFoundError: If ``style_guide_id`` is not the caller's guide
            AIGenerationFailedError: If the model call fails
        """
        quota_service = QuotaService(self.ctx)
        quota = await quota_service.check_quota(self.user_id)
        if not quota.allowed:
            raise QuotaExceededError(
                f"Generation quota exceeded ({quota.current_count}/{quota.limit})"
            )

        guides = StyleGuideService(self.ctx)
        if request.style_guide_id:
            guide = await guides.get(str(request.style_guide_id))
        else:
            guide = await guides.get_default()

        generated = await self.ai.generate_article(
            topic=request.topic,
            style_guide=guide,
            keywords=request.keywords or [],
            additional_instructions=request.additional_instructions,
        )

        await ensure_profile(self.ctx)
        title = generated.title[:200] or request.topic[:200]
        article = Article(
            user_id=self.user_id,
            title=title,
            slug=generate_unique_slug(title),
            keywords=generated.keywords or request.keywords or [],
            description=generated.meta_description[:500] or None,
            content=generated.content,
            style_guide_id=guide.id if guide else None,
            tone=guide.tone if guide else None,
            content_length=guide.content_length if guide else None,
            reading_level=guide.reading_level if guide else None,
            meta_title=title[:60],
            meta_description=generated.meta_description[:160] or None,
            status=ArticleStatus.DRAFT.value,
        )
        self.db.add(article)
        await self._commit("ARTICLE_CREATE_ERROR", "Failed to save generated article")
        await self.db.refresh(article)

        outcome = await quota_service.try_increment_quota(self.user_id)
        if outcome.ok:
            remaining = outcome.increment.remaining
        else:
            self.logger.warning(
                "Quota increment after generation failed; usage may be undercounted: %s",
                outcome.error,
            )
            remaining = max(0, quota.remaining - 1)

        self.logger.info("Generated article %s", article.id)
        return GenerationResult(article=article, generated=generated, quota_remaining=remaining)
