"""
Tests for parsing model output into articles.
"""

from adapters.ai.response_parser import DEFAULT_TITLE, extract_headings, parse_generated_text


class TestParseGeneratedText:
    def test_fenced_json(self):
        raw = (
            "Here is your article:\n"
            "```json\n"
            '{"title": "SEO Basics", "content": "## Intro\\nBody", '
            '"metaDescription": "Learn SEO", "keywords": ["seo", "blog"], '
            '"headings": ["Intro"]}\n'
            "```"
        )

        parsed = parse_generated_text(raw)

        assert parsed.title == "SEO Basics"
        assert parsed.content == "## Intro\nBody"
        assert parsed.meta_description == "Learn SEO"
        assert parsed.keywords == ["seo", "blog"]
        assert parsed.headings == ["Intro"]

    def test_fenced_json_with_code_block_in_content(self):
        raw = (
            "```json\n"
            '{"title": "Python Tips", '
            '"content": "## Intro\\n```python\\nprint(1)\\n```\\nDone", '
            '"metaDescription": "Tips", "keywords": ["python"]}\n'
            "```"
        )

        parsed = parse_generated_text(raw)

        assert parsed.title == "Python Tips"
        assert parsed.content == "## Intro\n```python\nprint(1)\n```\nDone"
        assert parsed.keywords == ["python"]

    def test_code_fence_before_json_is_skipped(self):
        raw = 'Example:\n```python\nx = 1\n```\n```json\n{"title": "T", "content": "C"}\n```'

        parsed = parse_generated_text(raw)

        assert parsed.title == "T"
        assert parsed.content == "C"

    def test_bare_json(self):
        parsed = parse_generated_text('{"title": "T", "content": "C"}')

        assert parsed.title == "T"
        assert parsed.content == "C"
        assert parsed.keywords == []
        assert parsed.headings is None

    def test_key_value_blocks(self):
        raw = "\n".join(
            [
                "title: My Title",
                "metaDescription: Short summary",
                "keywords: seo, blog, marketing",
                "content:",
                "## Intro",
                "Body text",
            ]
        )

        parsed = parse_generated_text(raw)

        assert parsed.title == "My Title"
        assert parsed.meta_description == "Short summary"
        assert parsed.keywords == ["seo", "blog", "marketing"]
        assert parsed.content == "## Intro\nBody text"

    def test_key_value_list_items(self):
        raw = "title: T\nkeywords:\n- seo\n- blog\nheadings:\n- One\n- Two\ncontent: Body"

        parsed = parse_generated_text(raw)

        assert parsed.keywords == ["seo", "blog"]
        assert parsed.headings == ["One", "Two"]
        assert parsed.content == "Body"

    def test_markdown_h1_fallback(self):
        parsed = parse_generated_text("# Heading One\n\nParagraph text")

        assert parsed.title == "Heading One"
        assert parsed.content == "Paragraph text"

    def test_unstructured_text_gets_default_title(self):
        parsed = parse_generated_text("just some text")

        assert parsed.title == DEFAULT_TITLE
        assert parsed.content == "just some text"

    def test_invalid_json_falls_through(self):
        parsed = parse_generated_text("```json\n{not json}\n```\n# Title\nBody")

        assert parsed.title == "Title"
        assert parsed.content == "Body"


class TestExtractHeadings:
    def test_levels_one_to_six(self):
        text = "# A\ntext\n## B\n### C\n####### too deep\nno heading"
        assert extract_headings(text) == ["A", "B", "C"]

    def test_empty(self):
        assert extract_headings("plain paragraph") == []
