"""Rich text spans and mentions."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .registry import REGISTRY, register
from .wire import (
    BOOLEAN,
    STRING,
    OneOf,
    Record,
    WireModel,
    envelope,
    payload,
    value,
)

if TYPE_CHECKING:
    from .users import User

RICH_TEXT = REGISTRY.define("rich_text")
MENTION = REGISTRY.define("mention")


@dataclass(frozen=True, kw_only=True)
class Annotations(WireModel):
    """Formatting applied to a rich text span."""
    bold: bool = envelope(codec=BOOLEAN, default=False)
    italic: bool = envelope(codec=BOOLEAN, default=False)
    strikethrough: bool = envelope(codec=BOOLEAN, default=False)
    underline: bool = envelope(codec=BOOLEAN, default=False)
    code: bool = envelope(codec=BOOLEAN, default=False)
    color: str = envelope(codec=STRING, default="default")


@dataclass(frozen=True, kw_only=True)
class Link(WireModel):
    url: str = envelope(codec=STRING)


@dataclass(frozen=True, kw_only=True)
class DateRange(WireModel):
    """A date or date-time, optionally with an end (ISO 8601 strings)."""
    start: str = envelope(codec=STRING)
    end: Optional[str] = envelope(codec=STRING, default=None)
    time_zone: Optional[str] = envelope(codec=STRING, default=None)


# =============================================================================
# Rich Text
# =============================================================================

@dataclass(frozen=True, kw_only=True)
class RichText(WireModel):
    """A span of rich text. Variants: text, mention, equation."""
    FAMILY = "rich_text"

    plain_text: Optional[str] = envelope(codec=STRING, default=None)
    href: Optional[str] = envelope(codec=STRING, default=None)
    annotations: Optional[Annotations] = envelope(codec=Record(Annotations), default=None)


@register("rich_text", "text")
@dataclass(frozen=True, kw_only=True)
class RichTextText(RichText):
    content: str = payload(codec=STRING)
    link: Optional[Link] = payload(codec=Record(Link), default=None)


@register("rich_text", "mention")
@dataclass(frozen=True, kw_only=True)
class RichTextMention(RichText):
    mention: "Mention" = value(codec=OneOf("mention"))


@register("rich_text", "equation")
@dataclass(frozen=True, kw_only=True)
class RichTextEquation(RichText):
    expression: str = payload(codec=STRING)


# =============================================================================
# Mentions
# =============================================================================

@dataclass(frozen=True, kw_only=True)
class Mention(WireModel):
    """Inline reference to a user, page, database or date."""
    FAMILY = "mention"


@register("mention", "user")
@dataclass(frozen=True, kw_only=True)
class UserMention(Mention):
    user: "User" = value(codec=OneOf("user"))


@register("mention", "page")
@dataclass(frozen=True, kw_only=True)
class PageMention(Mention):
    page_id: str = payload("id", STRING)


@register("mention", "database")
@dataclass(frozen=True, kw_only=True)
class DatabaseMention(Mention):
    database_id: str = payload("id", STRING)


@register("mention", "date")
@dataclass(frozen=True, kw_only=True)
class DateMention(Mention):
    date: DateRange = value(codec=Record(DateRange))


def text(content: str, link: Optional[str] = None, **annotations) -> RichTextText:
    """Build a text span.

    Args:
        content: The text.
        link: Optional URL the span links to.
        **annotations: Annotations fields (bold=True, color="red", ...).
            Left out entirely when none are given.

    Example:
        >>> text("Lacinato kale", bold=True).to_wire()["annotations"]["bold"]
        True
    """
    return RichTextText(
        content=content,
        link=Link(url=link) if link else None,
        annotations=Annotations(**annotations) if annotations else None,
    )

