"""
Application error taxonomy.

Every error carries an HTTP status and a stable machine-readable code; the
API layer renders them as ``{"code": ..., "detail": ...}``.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        details: Any = None,
    ):
        self.message = message or self.message
        if code:
            self.code = code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"code": self.code, "detail": self.message}
        if self.details is not None:
            body["errors"] = self.details
        return body


# ---------------------------------------------------------------------------
# Validation (400) / conflict (409)
# ---------------------------------------------------------------------------


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"
    message = "Invalid request"


class InvalidKeywordPhraseError(ValidationError):
    code = "INVALID_KEYWORD_PHRASE"
    message = "Invalid keyword phrase"


class NoValidKeywordsError(ValidationError):
    code = "KEYWORD_BULK_INSERT_ERROR"
    message = "No valid keywords to insert"


class DuplicateKeywordError(AppError):
    status_code = 409
    code = "DUPLICATE_KEYWORD_NORMALIZED"
    message = "Keyword already exists"


# ---------------------------------------------------------------------------
# Not found (404) — also used for rows owned by another user
# ---------------------------------------------------------------------------


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Not found"


class ArticleNotFoundError(NotFoundError):
    code = "ARTICLE_NOT_FOUND"
    message = "Article not found"


class StyleGuideNotFoundError(NotFoundError):
    code = "STYLE_GUIDE_NOT_FOUND"
    message = "Style guide not found"


# ---------------------------------------------------------------------------
# Quota
# ---------------------------------------------------------------------------


class QuotaExceededError(AppError):
    status_code = 429
    code = "QUOTA_EXCEEDED"
    message = "Generation quota exceeded"


class QuotaCheckFailedError(AppError):
    code = "QUOTA_CHECK_FAILED"
    message = "Failed to retrieve or create quota record"


class QuotaIncrementFailedError(AppError):
    """The conditional count update matched no row (a concurrent increment won)."""

    code = "QUOTA_INCREMENT_FAILED"
    message = "Failed to increment quota"


# ---------------------------------------------------------------------------
# Upstream providers
# ---------------------------------------------------------------------------


class AIGenerationFailedError(AppError):
    code = "AI_GENERATION_FAILED"
    message = "AI generation failed"


class SuggestionError(AppError):
    """Keyword-research provider failure."""

    code = "DATAFORSEO_API_ERROR"
    message = "Keyword research provider error"


class SuggestionInvalidCredentialsError(SuggestionError):
    status_code = 401
    code = "DATAFORSEO_INVALID_CREDENTIALS"
    message = "Invalid DataForSEO credentials"


class SuggestionRateLimitedError(SuggestionError):
    status_code = 429
    code = "DATAFORSEO_RATE_LIMIT"
    message = "DataForSEO rate limit exceeded"


class SuggestionTimeoutError(SuggestionError):
    status_code = 504
    code = "DATAFORSEO_TIMEOUT"
    message = "DataForSEO request timed out"


class SuggestionProviderError(SuggestionError):
    status_code = 500
    code = "DATAFORSEO_API_ERROR"


# ---------------------------------------------------------------------------
# Datastore
# ---------------------------------------------------------------------------


class DatabaseError(AppError):
    """Wraps a datastore failure with a stable per-operation code. Never retried."""

    code = "DATABASE_ERROR"
    message = "Database operation failed"


class AuthenticationError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"
    message = "Not authenticated"
