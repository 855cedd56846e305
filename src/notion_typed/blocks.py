"""Blocks: the content of pages.

Block types this package does not model are decoded as UnsupportedBlock,
which keeps the original type and payload, instead of failing the whole
list of children.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .registry import REGISTRY, register
from .richtext import RichText
from .wire import (
    ANY,
    BOOLEAN,
    STRING,
    ListOf,
    OneOf,
    WireModel,
    envelope,
    payload,
    tag,
    value,
)

BLOCK = REGISTRY.define("block", fallback="unsupported")


@dataclass(frozen=True, kw_only=True)
class Block(WireModel):
    FAMILY = "block"

    object: str = envelope(codec=STRING, default="block")
    id: Optional[str] = envelope(codec=STRING, default=None)
    created_time: Optional[str] = envelope(codec=STRING, default=None)
    last_edited_time: Optional[str] = envelope(codec=STRING, default=None)
    has_children: Optional[bool] = envelope(codec=BOOLEAN, default=None)


@dataclass(frozen=True, kw_only=True)
class TextBlock(Block):
    text: list[RichText] = payload(codec=ListOf(OneOf("rich_text")), default_factory=list)


@dataclass(frozen=True, kw_only=True)
class NestingTextBlock(TextBlock):
    """A text block that can hold child blocks."""
    children: list[Block] = payload(
        codec=ListOf(OneOf("block")), omit_empty=True, default_factory=list
    )


@register("block", "paragraph")
@dataclass(frozen=True, kw_only=True)
class ParagraphBlock(NestingTextBlock):
    pass


@register("block", "heading_1")
@dataclass(frozen=True, kw_only=True)
class Heading1Block(TextBlock):
    pass


@register("block", "heading_2")
@dataclass(frozen=True, kw_only=True)
class Heading2Block(TextBlock):
    pass


@register("block", "heading_3")
@dataclass(frozen=True, kw_only=True)
class Heading3Block(TextBlock):
    pass


@register("block", "bulleted_list_item")
@dataclass(frozen=True, kw_only=True)
class BulletedListItemBlock(NestingTextBlock):
    pass


@register("block", "numbered_list_item")
@dataclass(frozen=True, kw_only=True)
class NumberedListItemBlock(NestingTextBlock):
    pass


@register("block", "to_do")
@dataclass(frozen=True, kw_only=True)
class ToDoBlock(NestingTextBlock):
    checked: bool = payload(codec=BOOLEAN, default=False)


@register("block", "toggle")
@dataclass(frozen=True, kw_only=True)
class ToggleBlock(NestingTextBlock):
    pass


@register("block", "child_page")
@dataclass(frozen=True, kw_only=True)
class ChildPageBlock(Block):
    WRITABLE = False

    title: str = payload(codec=STRING)


@register("block", "unsupported")
@dataclass(frozen=True, kw_only=True)
class UnsupportedBlock(Block):
    """Placeholder for any block type without a registered variant.

    ``block_type`` holds the type found on the wire and ``content`` the raw
    object stored under it, so the block encodes back unchanged.
    """
    WRITABLE = False

    block_type: str = tag(default="unsupported")
    content: Any = value(codec=ANY, default_factory=dict)

    @property
    def type(self) -> str:
        return self.block_type
