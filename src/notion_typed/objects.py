"""Top-level API objects (pages, databases) and paginated list responses."""

from dataclasses import dataclass
from typing import Optional

from .blocks import Block
from .parents import Parent
from .properties import PropertySchema, PropertyValue
from .registry import REGISTRY, register
from .richtext import RichText
from .users import User
from .wire import (
    BOOLEAN,
    STRING,
    ListOf,
    MapOf,
    OneOf,
    WireModel,
    envelope,
)

# Pages and databases are told apart by their "object" key and keep all of
# their fields at the top level.
OBJECT = REGISTRY.define("object", discriminant="object", nested=False)


@dataclass(frozen=True, kw_only=True)
class SearchableObject(WireModel):
    """A page or a database, as returned by search."""
    FAMILY = "object"

    @property
    def object(self) -> str:
        return self.TYPE


@register("object", "page")
@dataclass(frozen=True, kw_only=True)
class Page(SearchableObject):
    """A Notion page.

    ``properties`` maps property names to their values, in the order the API
    returned them.
    """
    id: str = envelope(codec=STRING)
    created_time: Optional[str] = envelope(codec=STRING, default=None)
    last_edited_time: Optional[str] = envelope(codec=STRING, default=None)
    archived: bool = envelope(codec=BOOLEAN, default=False)
    url: Optional[str] = envelope(codec=STRING, default=None)
    parent: Optional[Parent] = envelope(codec=OneOf("parent"), default=None)
    properties: dict[str, PropertyValue] = envelope(
        codec=MapOf(OneOf("property_value")), default_factory=dict
    )


@register("object", "database")
@dataclass(frozen=True, kw_only=True)
class Database(SearchableObject):
    """A Notion database and its property schema."""
    id: str = envelope(codec=STRING)
    created_time: Optional[str] = envelope(codec=STRING, default=None)
    last_edited_time: Optional[str] = envelope(codec=STRING, default=None)
    title: list[RichText] = envelope(codec=ListOf(OneOf("rich_text")), default_factory=list)
    url: Optional[str] = envelope(codec=STRING, default=None)
    parent: Optional[Parent] = envelope(codec=OneOf("parent"), default=None)
    properties: dict[str, PropertySchema] = envelope(
        codec=MapOf(OneOf("property")), default_factory=dict
    )


# =============================================================================
# Paginated Lists
# =============================================================================

@dataclass(frozen=True, kw_only=True)
class PaginatedList(WireModel):
    object: str = envelope(codec=STRING, default="list")
    has_more: bool = envelope(codec=BOOLEAN, default=False)
    next_cursor: Optional[str] = envelope(codec=STRING, default=None)


@dataclass(frozen=True, kw_only=True)
class BlocksChildrenListResponse(PaginatedList):
    results: list[Block] = envelope(codec=ListOf(OneOf("block")), default_factory=list)


@dataclass(frozen=True, kw_only=True)
class DatabasesListResponse(PaginatedList):
    results: list[Database] = envelope(
        codec=ListOf(OneOf("object", Database)), default_factory=list
    )


@dataclass(frozen=True, kw_only=True)
class DatabasesQueryResponse(PaginatedList):
    results: list[Page] = envelope(codec=ListOf(OneOf("object", Page)), default_factory=list)


@dataclass(frozen=True, kw_only=True)
class UsersListResponse(PaginatedList):
    results: list[User] = envelope(codec=ListOf(OneOf("user")), default_factory=list)


@dataclass(frozen=True, kw_only=True)
class SearchResponse(PaginatedList):
    results: list[SearchableObject] = envelope(
        codec=ListOf(OneOf("object")), default_factory=list
    )
