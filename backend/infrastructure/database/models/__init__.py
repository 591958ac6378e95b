"""
SQLAlchemy database models.
"""

from .base import Base, TimestampMixin, utcnow
from .content import Article
from .generation import GenerationQuota
from .keyword import Keyword, KeywordSuggestionCache
from .profile import Profile
from .style_guide import StyleGuide

__all__ = [
    "Base",
    "TimestampMixin",
    "utcnow",
    "Profile",
    "Keyword",
    "KeywordSuggestionCache",
    "GenerationQuota",
    "Article",
    "StyleGuide",
]
