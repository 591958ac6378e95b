"""
Anthropic Claude adapter for AI article generation.
"""

import asyncio
import logging
import random
import re
from dataclasses import dataclass
from typing import List, Optional

import anthropic

from core.errors import AIGenerationFailedError
from infrastructure.config.settings import settings
from infrastructure.database.models.style_guide import StyleGuide

from .response_parser import extract_headings, parse_generated_text

logger = logging.getLogger(__name__)


async def _retry_with_backoff(coro_factory, max_retries=3, base_delay=1.0):
    """Retry an async operation with exponential backoff + jitter."""
    for attempt in range(max_retries + 1):
        try:
            return await coro_factory()
        except Exception as e:
            error_str = str(e).lower()
            is_transient = any(k in error_str for k in ["rate_limit", "429", "500", "502", "503", "504", "overloaded", "connection", "timeout"])
            if not is_transient or attempt == max_retries:
                raise
            delay = base_delay * (2 ** attempt) + random.uniform(0, 1)
            logger.warning("Transient API error (attempt %d/%d), retrying in %.1fs: %s", attempt + 1, max_retries, delay, str(e))
            await asyncio.sleep(delay)


@dataclass
class GeneratedArticle:
    """Generated article result."""

    title: str
    content: str
    meta_description: str
    keywords: List[str]
    headings: List[str]


# Per-language phrasing for each style guide option
_CONTENT_LENGTH_GUIDE = {
    "ko": {"short": "1000-1500자", "medium": "2000-3000자", "long": "4000-6000자"},
    "en": {"short": "500-800 words", "medium": "1000-1500 words", "long": "2000-3000 words"},
}
_READING_LEVEL_GUIDE = {
    "ko": {"beginner": "초보자도 쉽게 이해할 수 있는", "intermediate": "중급 수준의", "advanced": "전문적이고 심화된"},
    "en": {"beginner": "beginner-friendly", "intermediate": "intermediate-level", "advanced": "advanced and in-depth"},
}
_TONE_GUIDE = {
    "ko": {
        "professional": "전문적이고 신뢰감 있는",
        "friendly": "친근하고 대화하는 듯한",
        "inspirational": "영감을 주고 동기부여하는",
        "educational": "교육적이고 정보 전달에 충실한",
    },
    "en": {
        "professional": "professional and trustworthy",
        "friendly": "friendly and conversational",
        "inspirational": "inspirational and motivating",
        "educational": "educational and informative",
    },
}


class AnthropicContentService:
    """AI content generation service using Anthropic Claude."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        api_key = api_key if api_key is not None else settings.anthropic_api_key
        if api_key:
            self._client = anthropic.AsyncAnthropic(
                api_key=api_key,
                timeout=float(timeout or settings.anthropic_timeout),
            )
        else:
            self._client = None
        self._model = model or settings.anthropic_model
        self._max_tokens = max_tokens or settings.anthropic_max_tokens

    @staticmethod
    def _sanitize_prompt_input(text: Optional[str], max_length: int) -> str:
        """Strip control characters and limit length to prevent prompt injection."""
        if not text:
            return ""
        text = re.sub(r'[\r\n\t\x00-\x1f\x7f]', ' ', text)
        text = re.sub(r' +', ' ', text).strip()
        return text[:max_length]

    def _get_system_prompt(self, language: str) -> str:
        if language == "ko":
            return (
                "당신은 전문 블로그 콘텐츠 작가입니다. 모든 글은 자연스러운 한국어로 작성하고, "
                "요청된 출력 형식을 정확히 지켜주세요."
            )
        return (
            "You are a professional blog content writer. Write in natural, "
            "publication-ready English and follow the requested output format exactly."
        )

    def build_prompt(
        self,
        topic: str,
        style_guide: Optional[StyleGuide],
        keywords: List[str],
        additional_instructions: Optional[str] = None,
    ) -> str:
        """
        Build the user prompt for article generation.

        The prompt is written in Korean unless the style guide asks for
        English. Without a style guide, generic defaults are used.
        """
        language = style_guide.language if style_guide else "ko"
        lang = "ko" if language == "ko" else "en"

        topic = self._sanitize_prompt_input(topic, 500)
        keywords = [self._sanitize_prompt_input(k, 100) for k in keywords if k]
        instructions = self._sanitize_prompt_input(additional_instructions, 1000)

        if lang == "ko":
            if style_guide:
                brand = (
                    f"- 브랜드명: {style_guide.brand_name}\n"
                    f"- 브랜드 설명: {style_guide.brand_description}\n"
                    f"- 브랜드 성격: {', '.join(style_guide.personality)}\n"
                    f"- 격식 수준: {style_guide.formality}\n"
                    f"- 타겟 독자: {style_guide.target_audience}\n"
                    f"- 독자의 고민: {style_guide.pain_points}"
                )
                tone = _TONE_GUIDE["ko"].get(style_guide.tone, style_guide.tone)
                length = _CONTENT_LENGTH_GUIDE["ko"].get(style_guide.content_length, style_guide.content_length)
                level = _READING_LEVEL_GUIDE["ko"].get(style_guide.reading_level, style_guide.reading_level)
            else:
                brand = "일반적인 블로그 스타일로 작성"
                tone, length, level = "친근하고 전문적인", "2000-3000자", "중급 수준의"

            keyword_line = ", ".join(keywords) if keywords else "주제와 관련된 키워드를 자연스럽게 포함"
            extra = f"\n**추가 지시사항**: {instructions}\n" if instructions else ""

            return f"""다음 조건에 맞춰 고품질 블로그 글을 작성해주세요.

**주제**: {topic}

**브랜드 정보**:
{brand}

**작성 스타일**:
- 어조: {tone}
- 글 길이: {length}
- 난이도: {level}

**키워드**: {keyword_line}
{extra}
**작성 요구사항**:
1. 제목은 SEO에 최적화되고 클릭을 유도할 수 있도록 작성
2. 본문은 Markdown 형식으로 작성 (제목, 소제목, 목록, 강조 등 활용)
3. 서론, 본론, 결론 구조를 갖추되 자연스럽게 전개
4. 실용적이고 실행 가능한 정보 제공
5. 독자의 고민을 해결하는 데 집중
6. Meta Description은 160자 이내로 요약
7. 주요 키워드를 자연스럽게 본문에 포함
8. 소제목(headings)은 명확하고 구조적으로 구성

**출력 형식**: 다음 키를 가진 JSON 객체 하나를 ```json 코드블록으로 출력
- title: 블로그 글 제목
- content: Markdown 형식의 본문 (제목 제외)
- metaDescription: SEO를 위한 메타 설명 (160자 이내)
- keywords: 관련 키워드 배열 (5-10개)
- headings: 본문의 주요 소제목 배열
"""

        if style_guide:
            brand = (
                f"- Brand Name: {style_guide.brand_name}\n"
                f"- Brand Description: {style_guide.brand_description}\n"
                f"- Brand Personality: {', '.join(style_guide.personality)}\n"
                f"- Formality Level: {style_guide.formality}\n"
                f"- Target Audience: {style_guide.target_audience}\n"
                f"- Audience Pain Points: {style_guide.pain_points}"
            )
            tone = _TONE_GUIDE["en"].get(style_guide.tone, style_guide.tone)
            length = _CONTENT_LENGTH_GUIDE["en"].get(style_guide.content_length, style_guide.content_length)
            level = _READING_LEVEL_GUIDE["en"].get(style_guide.reading_level, style_guide.reading_level)
        else:
            brand = "Write in a general blog style"
            tone, length, level = "friendly and professional", "1000-1500 words", "intermediate-level"

        keyword_line = ", ".join(keywords) if keywords else "Naturally include relevant keywords"
        extra = f"\n**Additional Instructions**: {instructions}\n" if instructions else ""

        return f"""Create a high-quality blog post according to the following requirements.

**Topic**: {topic}

**Brand Information**:
{brand}

**Writing Style**:
- Tone: {tone}
- Content Length: {length}
- Reading Level: {level}

**Keywords**: {keyword_line}
{extra}
**Writing Requirements**:
1. Create an SEO-optimized title that encourages clicks
2. Write the body in Markdown format (use headings, subheadings, lists, emphasis, etc.)
3. Structure with introduction, body, and conclusion in a natural flow
4. Provide practical and actionable information
5. Focus on solving the reader's pain points
6. Summarize in Meta Description (max 160 characters)
7. Naturally incorporate main keywords throughout the content
8. Organize headings clearly and structurally

**Output Format**: a single JSON object in a ```json code block with these keys
- title: Blog post title
- content: Markdown-formatted body (excluding title)
- metaDescription: SEO meta description (max 160 chars)
- keywords: Array of relevant keywords (5-10)
- headings: Array of main subheadings from the content
"""

    async def generate_article(
        self,
        topic: str,
        style_guide: Optional[StyleGuide] = None,
        keywords: Optional[List[str]] = None,
        additional_instructions: Optional[str] = None,
    ) -> GeneratedArticle:
        """
        Generate a full article for a topic.

        Args:
            topic: What the article is about
            style_guide: Brand voice to apply, if any
            keywords: Keywords to weave into the text
            additional_instructions: Free-form extra guidance

        Returns:
            GeneratedArticle with title, body, meta description, keywords and headings

        Raises:
            AIGenerationFailedError: If the API call fails or returns nothing usable
        """
        keywords = keywords or []

        if not self._client:
            logger.warning("Anthropic API key not configured, returning mock article")
            return self._mock_article(topic, keywords)

        language = style_guide.language if style_guide else "ko"
        prompt = self.build_prompt(topic, style_guide, keywords, additional_instructions)

        try:
            message = await _retry_with_backoff(lambda: self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=self._get_system_prompt(language),
                messages=[{"role": "user", "content": prompt}],
            ))
        except anthropic.APIError as e:
            logger.error("Article generation failed: %s", e)
            raise AIGenerationFailedError(f"AI generation failed: {e}")

        if message.stop_reason == "max_tokens":
            logger.warning(
                "Article generation truncated (max_tokens=%d, language=%s)",
                self._max_tokens, language,
            )

        if not message.content:
            raise AIGenerationFailedError("AI returned empty response")

        parsed = parse_generated_text(message.content[0].text)
        if not parsed.content:
            raise AIGenerationFailedError("AI response did not contain article content")

        return GeneratedArticle(
            title=parsed.title,
            content=parsed.content,
            meta_description=(parsed.meta_description or "")[:160],
            keywords=parsed.keywords or keywords,
            headings=parsed.headings or extract_headings(parsed.content),
        )

    def _mock_article(self, topic: str, keywords: List[str]) -> GeneratedArticle:
        """Generate mock article for development."""
        headings = ["Overview", f"Why {topic} matters", "Getting started"]
        content_parts = []
        for heading in headings:
            content_parts.append(f"## {heading}\n")
            content_parts.append(f"This section covers {topic.lower()}.\n")

        return GeneratedArticle(
            title=topic,
            content="\n".join(content_parts),
            meta_description=f"Learn about {topic} in this comprehensive guide."[:160],
            keywords=keywords,
            headings=headings,
        )


# Singleton instance
content_ai_service = AnthropicContentService()
