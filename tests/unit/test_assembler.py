"""Unit tests for assembling Posts from Notion pages."""

import copy

import pytest
from pydantic import ValidationError

from notion_blog.collectors.normalization.schema import (
    CodeContent,
    ContentKind,
    Post,
    TextContent,
)
from notion_blog.collectors.notion.models import parse_block, parse_page
from notion_blog.collectors.notion.normalizer import assemble_post


class TestAssemblePost:
    """Tests for assemble_post."""

    def test_hello_post(self, sample_page, sample_blocks):
        """The reference page/blocks pair produces the expected Post."""
        post = assemble_post(sample_page, sample_blocks)

        assert post == Post(
            id="p1",
            title="Hello",
            slug="hello",
            create_ts="2023-01-01T00:00:00Z",
            last_edited_ts="2023-01-02T00:00:00Z",
            contents=[
                TextContent(kind=ContentKind.HEADING2, text="Intro"),
                TextContent(kind=ContentKind.PARAGRAPH, text=None),
            ],
        )

    def test_page_without_properties(self):
        """A record with no properties keeps only its ID."""
        post = assemble_post(
            {
                "object": "page",
                "id": "partial",
                "created_time": "2023-01-01T00:00:00Z",
                "last_edited_time": "2023-01-02T00:00:00Z",
            },
            [{"type": "paragraph", "paragraph": {"rich_text": [{"plain_text": "ignored"}]}}],
        )

        assert post.id == "partial"
        assert post.title is None
        assert post.slug is None
        assert post.create_ts is None
        assert post.last_edited_ts is None
        assert post.contents == ()

    def test_name_with_wrong_type_has_no_title(self, sample_page, sample_blocks):
        """Name is only read when its declared type is title."""
        page = copy.deepcopy(sample_page)
        page["properties"]["Name"] = {
            "type": "rich_text",
            "rich_text": [{"plain_text": "Not a title"}],
            "title": [{"plain_text": "Looks like a title"}],
        }

        post = assemble_post(page, sample_blocks)

        assert post.title is None
        assert post.slug == "hello"

    def test_slug_with_wrong_type_is_absent(self, sample_page, sample_blocks):
        page = copy.deepcopy(sample_page)
        page["properties"]["Slug"] = {"type": "url", "url": "https://example.com"}

        assert assemble_post(page, sample_blocks).slug is None

    def test_missing_name_and_slug(self, sample_page):
        page = copy.deepcopy(sample_page)
        del page["properties"]["Name"]
        del page["properties"]["Slug"]

        post = assemble_post(page, [])

        assert post.title is None
        assert post.slug is None
        assert post.create_ts == "2023-01-01T00:00:00Z"

    def test_empty_title_runs(self, sample_page):
        page = copy.deepcopy(sample_page)
        page["properties"]["Name"]["title"] = []

        assert assemble_post(page, []).title is None

    def test_empty_properties_dict_is_a_page(self):
        """An empty properties map still copies timestamps and blocks."""
        post = assemble_post(
            {"id": "p2", "created_time": "2024-05-01T10:00:00.000Z", "properties": {}},
            [{"type": "quote", "quote": {"rich_text": [{"plain_text": "q"}]}}],
        )

        assert post.create_ts == "2024-05-01T10:00:00.000Z"
        assert post.last_edited_ts is None
        assert post.contents == (TextContent(kind=ContentKind.QUOTE, text="q"),)

    def test_unsupported_blocks_dropped_order_kept(self, sample_page):
        blocks = [
            {"type": "heading_3", "heading_3": {"rich_text": [{"plain_text": "A"}]}},
            {"type": "image", "image": {"type": "external"}},
            {"type": "code", "code": {"rich_text": [{"plain_text": "B"}], "language": "rust"}},
            {"object": "list"},
            {"type": "paragraph", "paragraph": {"rich_text": [{"plain_text": "C"}]}},
        ]

        post = assemble_post(sample_page, blocks)

        assert post.contents == (
            TextContent(kind=ContentKind.HEADING3, text="A"),
            CodeContent(text="B", language="rust"),
            TextContent(kind=ContentKind.PARAGRAPH, text="C"),
        )

    def test_accepts_parsed_models(self, sample_page, sample_blocks):
        """Validated page and blocks give the same result as raw dicts."""
        parsed = assemble_post(
            parse_page(sample_page), [parse_block(b) for b in sample_blocks]
        )

        assert parsed == assemble_post(sample_page, sample_blocks)

    def test_post_is_frozen(self, sample_page, sample_blocks):
        post = assemble_post(sample_page, sample_blocks)

        with pytest.raises(ValidationError):
            post.title = "changed"

    def test_serializes_camel_case_timestamps(self, sample_page, sample_blocks):
        data = assemble_post(sample_page, sample_blocks).model_dump(mode="json", by_alias=True)

        assert data["createTs"] == "2023-01-01T00:00:00Z"
        assert data["lastEditedTs"] == "2023-01-02T00:00:00Z"
        assert data["contents"][0] == {"kind": "heading2", "text": "Intro"}
