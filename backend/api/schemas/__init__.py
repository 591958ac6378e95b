"""
API request and response schemas.
"""

from .articles import (
    ArticleListResponse,
    ArticleResponse,
    CreateArticleRequest,
    DashboardStatsResponse,
    GenerateArticleRequest,
    GenerateArticleResponse,
    QuotaStatusResponse,
    UpdateArticleRequest,
)
from .keywords import (
    BulkCreateKeywordsRequest,
    BulkCreateKeywordsResponse,
    CreateKeywordRequest,
    KeywordListResponse,
    KeywordResponse,
    KeywordSuggestionsRequest,
    KeywordSuggestionsResponse,
)
from .style_guides import StyleGuideRequest, StyleGuideResponse

__all__ = [
    "CreateKeywordRequest",
    "BulkCreateKeywordsRequest",
    "BulkCreateKeywordsResponse",
    "KeywordResponse",
    "KeywordListResponse",
    "KeywordSuggestionsRequest",
    "KeywordSuggestionsResponse",
    "CreateArticleRequest",
    "UpdateArticleRequest",
    "ArticleResponse",
    "ArticleListResponse",
    "DashboardStatsResponse",
    "QuotaStatusResponse",
    "GenerateArticleRequest",
    "GenerateArticleResponse",
    "StyleGuideRequest",
    "StyleGuideResponse",
]
