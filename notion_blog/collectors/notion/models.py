"""Schemas for the subset of Notion API objects the blog consumes.

Raw pages and blocks are validated here, at the fetch boundary, so the
normalizer only deals with typed records. Both blocks and page properties
are tagged unions keyed on their ``type`` field. Tags the blog does not
render land in an explicit Unsupported* arm instead of failing validation.

Leaf values are read leniently: a null or wrongly typed payload, run list,
plain text or timestamp becomes its empty value, so one odd field blanks
that field rather than dropping the whole page or block.

API Reference: https://developers.notion.com/reference/block
"""

from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    WrapValidator,
)

# Block tags the normalizer knows how to render
SUPPORTED_BLOCK_TYPES = frozenset(
    {"paragraph", "heading_2", "heading_3", "quote", "code"}
)

UNSUPPORTED = "unsupported"


class NotionModel(BaseModel):
    """Base for raw Notion records; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _object_or_empty(value: Any) -> Any:
    if isinstance(value, (dict, BaseModel)):
        return value
    return {}


def _runs_or_empty(value: Any) -> list:
    if not isinstance(value, list):
        return []
    return [run for run in value if isinstance(run, (dict, BaseModel))]


LenientStr = Annotated[str | None, BeforeValidator(_str_or_none)]


# =============================================================================
# Rich text
# =============================================================================


class RichText(NotionModel):
    """One rich-text run. Only its plain-text projection is used."""

    plain_text: LenientStr = None


RichTextRuns = Annotated[list[RichText], BeforeValidator(_runs_or_empty)]


def first_plain_text(runs: list[RichText]) -> str | None:
    """Return the first run's plain text, or None when there are no runs."""
    return runs[0].plain_text if runs else None


class TextPayload(NotionModel):
    """Payload shared by paragraph, heading and quote blocks."""

    rich_text: RichTextRuns = Field(default_factory=list)


class CodePayload(TextPayload):
    """Payload of a code block."""

    language: LenientStr = None


TextPayloadField = Annotated[TextPayload, BeforeValidator(_object_or_empty)]
CodePayloadField = Annotated[CodePayload, BeforeValidator(_object_or_empty)]


# =============================================================================
# Blocks
# =============================================================================


class ParagraphBlock(NotionModel):
    type: Literal["paragraph"]
    paragraph: TextPayloadField = Field(default_factory=TextPayload)


class Heading2Block(NotionModel):
    type: Literal["heading_2"]
    heading_2: TextPayloadField = Field(default_factory=TextPayload)


class Heading3Block(NotionModel):
    type: Literal["heading_3"]
    heading_3: TextPayloadField = Field(default_factory=TextPayload)


class QuoteBlock(NotionModel):
    type: Literal["quote"]
    quote: TextPayloadField = Field(default_factory=TextPayload)


class CodeBlock(NotionModel):
    type: Literal["code"]
    code: CodePayloadField = Field(default_factory=CodePayload)


class UnsupportedBlock(NotionModel):
    """Any block type the blog does not render, or an entry with no type."""

    type: Any = None


def _block_tag(value: Any) -> str:
    if isinstance(value, dict):
        block_type = value.get("type")
    else:
        block_type = getattr(value, "type", None)
    if isinstance(block_type, str) and block_type in SUPPORTED_BLOCK_TYPES:
        return block_type
    return UNSUPPORTED


NotionBlock = Annotated[
    Union[
        Annotated[ParagraphBlock, Tag("paragraph")],
        Annotated[Heading2Block, Tag("heading_2")],
        Annotated[Heading3Block, Tag("heading_3")],
        Annotated[QuoteBlock, Tag("quote")],
        Annotated[CodeBlock, Tag("code")],
        Annotated[UnsupportedBlock, Tag(UNSUPPORTED)],
    ],
    Discriminator(_block_tag),
]


# =============================================================================
# Page properties
# =============================================================================


class TitleProperty(NotionModel):
    type: Literal["title"]
    title: RichTextRuns = Field(default_factory=list)


class RichTextProperty(NotionModel):
    type: Literal["rich_text"]
    rich_text: RichTextRuns = Field(default_factory=list)


class UnsupportedProperty(NotionModel):
    """Checkbox, date, select and every other property type.

    Also stands in for a title or rich-text property that could not be read.
    """

    type: Any = None


def _property_tag(value: Any) -> str:
    if isinstance(value, dict):
        property_type = value.get("type")
    else:
        property_type = getattr(value, "type", None)
    if property_type in ("title", "rich_text"):
        return property_type
    return UNSUPPORTED


def _unsupported_on_error(value: Any, handler) -> Any:
    try:
        return handler(value)
    except ValidationError:
        property_type = value.get("type") if isinstance(value, dict) else None
        return UnsupportedProperty(type=property_type)


NotionProperty = Annotated[
    Union[
        Annotated[TitleProperty, Tag("title")],
        Annotated[RichTextProperty, Tag("rich_text")],
        Annotated[UnsupportedProperty, Tag(UNSUPPORTED)],
    ],
    Discriminator(_property_tag),
    WrapValidator(_unsupported_on_error),
]


def _properties_or_empty(value: Any) -> Any:
    if value is None or isinstance(value, dict):
        return value
    return {}


# =============================================================================
# Pages
# =============================================================================


class NotionPage(NotionModel):
    """A database query result.

    ``properties`` is None when the record carried no properties key at all
    (partial or non-page objects); an empty dict means a page with no
    properties, or properties that were not an object.
    """

    id: str
    created_time: LenientStr = None
    last_edited_time: LenientStr = None
    properties: Annotated[
        dict[str, NotionProperty] | None, BeforeValidator(_properties_or_empty)
    ] = None


_block_adapter: TypeAdapter[NotionBlock] = TypeAdapter(NotionBlock)


def parse_block(raw: dict) -> NotionBlock:
    """Validate one raw block dictionary.

    Malformed payloads of supported blocks are read as empty, so this only
    fails for values that are not blocks at all.

    Raises:
        pydantic.ValidationError: If the value cannot be read as a block.
    """
    return _block_adapter.validate_python(raw)


def parse_page(raw: dict) -> NotionPage:
    """Validate one raw page dictionary.

    Raises:
        pydantic.ValidationError: If the record has no string ID.
    """
    return NotionPage.model_validate(raw)
