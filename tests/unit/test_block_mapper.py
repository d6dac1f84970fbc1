"""Unit tests for mapping Notion blocks to Content."""

import pytest

from notion_blog.collectors.normalization.schema import (
    CodeContent,
    ContentKind,
    TextContent,
)
from notion_blog.collectors.notion.models import UnsupportedBlock, parse_block
from notion_blog.collectors.notion.normalizer import map_block


def _block(block_type: str, *texts: str, **payload) -> dict:
    payload["rich_text"] = [{"type": "text", "plain_text": t} for t in texts]
    return {"object": "block", "type": block_type, block_type: payload}


class TestSupportedBlocks:
    """Each supported tag maps to exactly one content kind."""

    @pytest.mark.parametrize(
        "block_type,kind",
        [
            ("paragraph", ContentKind.PARAGRAPH),
            ("heading_2", ContentKind.HEADING2),
            ("heading_3", ContentKind.HEADING3),
            ("quote", ContentKind.QUOTE),
        ],
    )
    def test_text_blocks(self, block_type, kind):
        """Text blocks keep the first rich-text run."""
        content = map_block(_block(block_type, "first", "second"))

        assert isinstance(content, TextContent)
        assert content.kind == kind
        assert content.text == "first"

    def test_code_block_carries_language(self):
        """Code blocks also extract the language."""
        content = map_block(_block("code", "print('hi')", language="python"))

        assert content == CodeContent(text="print('hi')", language="python")
        assert content.kind == ContentKind.CODE

    @pytest.mark.parametrize("block_type", ["paragraph", "heading_2", "heading_3", "quote", "code"])
    def test_empty_runs_give_no_text(self, block_type):
        """A block without rich-text runs maps with text None."""
        content = map_block(_block(block_type))

        assert content is not None
        assert content.text is None

    def test_missing_payload_gives_no_text(self):
        """A supported tag without its payload object still maps."""
        content = map_block({"type": "quote"})

        assert content == TextContent(kind=ContentKind.QUOTE, text=None)

    def test_null_payload_gives_no_text(self):
        content = map_block({"type": "paragraph", "paragraph": None})

        assert content == TextContent(kind=ContentKind.PARAGRAPH, text=None)

    def test_null_plain_text_gives_no_text(self):
        content = map_block(
            {"type": "heading_2", "heading_2": {"rich_text": [{"plain_text": None}]}}
        )

        assert content == TextContent(kind=ContentKind.HEADING2, text=None)

    def test_code_without_language(self):
        content = map_block(_block("code", "x = 1"))

        assert content.language is None

    def test_accepts_parsed_block(self):
        """Already validated blocks are mapped without re-parsing."""
        parsed = parse_block(_block("heading_3", "Details"))

        assert map_block(parsed) == TextContent(kind=ContentKind.HEADING3, text="Details")


class TestDroppedBlocks:
    """Anything outside the five supported tags maps to None."""

    @pytest.mark.parametrize(
        "block_type",
        ["heading_1", "bulleted_list_item", "image", "to_do", "divider", "child_page", ""],
    )
    def test_unrecognized_type(self, block_type):
        assert map_block({"type": block_type, block_type: {"rich_text": []}}) is None

    def test_missing_type(self):
        """Entries without a type tag are not blocks."""
        assert map_block({"object": "page", "id": "p1"}) is None

    def test_null_type(self):
        assert map_block({"type": None}) is None

    def test_unsupported_block_instance(self):
        assert map_block(UnsupportedBlock(type="table")) is None

    def test_non_block_object_raises(self):
        """Passing something that is neither dict nor block is a programming error."""
        with pytest.raises(TypeError):
            map_block(42)


class TestPurity:
    def test_same_input_same_output(self):
        raw = _block("paragraph", "stable")

        assert map_block(raw) == map_block(raw)
        assert raw["paragraph"]["rich_text"][0]["plain_text"] == "stable"
