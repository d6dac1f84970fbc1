"""Normalized, render-ready document model.

Provides the ContentKind enum, the Content union and the Post model that
the presentation layer consumes. Every model is frozen: a Post is built
once per fetch and never mutated afterwards.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ContentKind(str, Enum):
    """Kinds of content block a post can contain."""

    PARAGRAPH = "paragraph"
    QUOTE = "quote"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    CODE = "code"


class TextContent(BaseModel):
    """A block that only carries text: paragraph, quote or heading."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal[
        ContentKind.PARAGRAPH,
        ContentKind.QUOTE,
        ContentKind.HEADING2,
        ContentKind.HEADING3,
    ]
    text: str | None = None


class CodeContent(BaseModel):
    """A code block with its highlighting language."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal[ContentKind.CODE] = ContentKind.CODE
    text: str | None = None
    language: str | None = None


Content = Annotated[Union[TextContent, CodeContent], Field(discriminator="kind")]


class Post(BaseModel):
    """One published document, normalized for rendering.

    Serializes with camelCase timestamp keys (createTs, lastEditedTs).
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    id: str = Field(..., description="Notion page ID")
    title: str | None = None
    slug: str | None = None
    create_ts: str | None = Field(
        None, alias="createTs", description="ISO-8601 creation timestamp"
    )
    last_edited_ts: str | None = Field(
        None, alias="lastEditedTs", description="ISO-8601 last edit timestamp"
    )
    contents: tuple[Content, ...] = Field(default_factory=tuple)
