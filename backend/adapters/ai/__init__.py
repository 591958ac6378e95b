# AI Adapters
# Anthropic integration

from .anthropic_adapter import (
    AnthropicContentService,
    GeneratedArticle,
    content_ai_service,
)
from .response_parser import ParsedArticle, extract_headings, parse_generated_text

__all__ = [
    "AnthropicContentService",
    "content_ai_service",
    "GeneratedArticle",
    "ParsedArticle",
    "parse_generated_text",
    "extract_headings",
]
