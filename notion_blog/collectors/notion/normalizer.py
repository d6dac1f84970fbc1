"""Notion data normalizer transformers.

Provides functions to transform Notion pages and blocks into the
normalized Post schema. Both are pure: no I/O, no configuration, and the
result depends only on the arguments.
"""

from typing import Iterable, Union

from notion_blog.collectors.normalization.schema import (
    CodeContent,
    Content,
    ContentKind,
    Post,
    TextContent,
)
from notion_blog.collectors.notion.models import (
    CodeBlock,
    Heading2Block,
    Heading3Block,
    NotionBlock,
    NotionPage,
    ParagraphBlock,
    QuoteBlock,
    RichTextProperty,
    TitleProperty,
    UnsupportedBlock,
    first_plain_text,
    parse_block,
    parse_page,
)

RawBlock = Union[dict, NotionBlock]
RawPage = Union[dict, NotionPage]

TITLE_PROPERTY = "Name"
SLUG_PROPERTY = "Slug"


def map_block(raw: RawBlock) -> Content | None:
    """Map one Notion block to a Content item.

    Args:
        raw: Raw block dictionary or an already validated block.

    Returns:
        The matching Content, or None for block types the blog does not render
        (including entries without a type).
    """
    block = parse_block(raw) if isinstance(raw, dict) else raw

    if isinstance(block, ParagraphBlock):
        return TextContent(
            kind=ContentKind.PARAGRAPH,
            text=first_plain_text(block.paragraph.rich_text),
        )
    if isinstance(block, Heading2Block):
        return TextContent(
            kind=ContentKind.HEADING2,
            text=first_plain_text(block.heading_2.rich_text),
        )
    if isinstance(block, Heading3Block):
        return TextContent(
            kind=ContentKind.HEADING3,
            text=first_plain_text(block.heading_3.rich_text),
        )
    if isinstance(block, QuoteBlock):
        return TextContent(
            kind=ContentKind.QUOTE,
            text=first_plain_text(block.quote.rich_text),
        )
    if isinstance(block, CodeBlock):
        return CodeContent(
            text=first_plain_text(block.code.rich_text),
            language=block.code.language,
        )
    if isinstance(block, UnsupportedBlock):
        return None

    raise TypeError(f"Not a Notion block: {type(block).__name__}")


def assemble_post(raw_page: RawPage, raw_blocks: Iterable[RawBlock]) -> Post:
    """Build a Post from a database page and its child blocks.

    A page without a properties section (for example a partial object)
    keeps only its ID; title, slug, timestamps and contents stay empty.

    Args:
        raw_page: Raw page dictionary or an already validated page.
        raw_blocks: The page's child blocks, in Notion order.

    Returns:
        Normalized Post instance
    """
    page = parse_page(raw_page) if isinstance(raw_page, dict) else raw_page

    if page.properties is None:
        return Post(id=page.id)

    title = None
    name = page.properties.get(TITLE_PROPERTY)
    if isinstance(name, TitleProperty):
        title = first_plain_text(name.title)

    slug = None
    slug_property = page.properties.get(SLUG_PROPERTY)
    if isinstance(slug_property, RichTextProperty):
        slug = first_plain_text(slug_property.rich_text)

    contents = [
        content
        for content in (map_block(block) for block in raw_blocks)
        if content is not None
    ]

    return Post(
        id=page.id,
        title=title,
        slug=slug,
        create_ts=page.created_time,
        last_edited_ts=page.last_edited_time,
        contents=contents,
    )
