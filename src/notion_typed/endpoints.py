"""Resource clients: one method per API operation.

Each method builds a ``Request`` and returns ``client.request(request,
codec)``. The same resource classes serve the sync and the async client: for
``AsyncNotionClient`` the returned value is awaitable.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Union
from urllib.parse import quote

from .blocks import Block
from .errors import UnimplementedError
from .filters import Filter, SearchFilter, SearchSort, Sort
from .objects import (
    BlocksChildrenListResponse,
    Database,
    DatabasesListResponse,
    DatabasesQueryResponse,
    Page,
    SearchResponse,
    UsersListResponse,
)
from .parents import Parent
from .properties import PropertyValue
from .transport import Request
from .wire import OneOf, Record, WireModel

if TYPE_CHECKING:
    from .client import AsyncNotionClient, NotionClient

    Client = Union[NotionClient, AsyncNotionClient]

BLOCKS_CHILDREN = "/v1/blocks/{block_id}/children"
PAGES = "/v1/pages"
PAGE = "/v1/pages/{page_id}"
DATABASES = "/v1/databases"
DATABASE = "/v1/databases/{database_id}"
DATABASE_QUERY = "/v1/databases/{database_id}/query"
USERS = "/v1/users"
USER = "/v1/users/{user_id}"
USERS_ME = "/v1/users/me"
SEARCH = "/v1/search"


def expand_path(template: str, **params: str) -> str:
    """Substitute ``{name}`` placeholders with URL-quoted values.

    Raises:
        ValueError: A placeholder value is empty.
    """
    for name, value in params.items():
        if not value:
            raise ValueError(f"{name} is required")
        template = template.replace(f"{{{name}}}", quote(value, safe=""))
    return template


def check_writable(obj: WireModel) -> None:
    """Refuse variants the API only returns, including nested block children.

    Raises:
        UnimplementedError: ``obj`` or one of its children is read-only.
    """
    if not obj.WRITABLE:
        raise UnimplementedError(
            f"{type(obj).__name__} ({obj.type}) is read-only and cannot be written"
        )
    for child in getattr(obj, "children", None) or ():
        check_writable(child)


# =============================================================================
# Parameters
# =============================================================================

@dataclass(frozen=True, kw_only=True)
class PaginationParameters:
    """Cursor pagination, sent as query parameters.

    Empty cursor and zero page size are not sent.
    """
    start_cursor: str = ""
    page_size: int = 0

    def pagination(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.start_cursor:
            out["start_cursor"] = self.start_cursor
        if self.page_size:
            out["page_size"] = self.page_size
        return out


@dataclass(frozen=True, kw_only=True)
class BlocksChildrenListParameters(PaginationParameters):
    block_id: str


@dataclass(frozen=True, kw_only=True)
class BlocksChildrenAppendParameters:
    block_id: str
    children: list[Block] = field(default_factory=list)


@dataclass(frozen=True, kw_only=True)
class PagesRetrieveParameters:
    page_id: str


@dataclass(frozen=True, kw_only=True)
class PagesCreateParameters:
    parent: Parent
    properties: dict[str, PropertyValue] = field(default_factory=dict)
    children: list[Block] = field(default_factory=list)


@dataclass(frozen=True, kw_only=True)
class PagesUpdateParameters:
    page_id: str
    properties: dict[str, PropertyValue] = field(default_factory=dict)
    archived: Optional[bool] = None


@dataclass(frozen=True, kw_only=True)
class DatabasesRetrieveParameters:
    database_id: str


@dataclass(frozen=True, kw_only=True)
class DatabasesListParameters(PaginationParameters):
    pass


@dataclass(frozen=True, kw_only=True)
class DatabasesQueryParameters(PaginationParameters):
    database_id: str
    filter: Optional[Filter] = None
    sorts: list[Sort] = field(default_factory=list)


@dataclass(frozen=True, kw_only=True)
class UsersRetrieveParameters:
    user_id: str


@dataclass(frozen=True, kw_only=True)
class UsersListParameters(PaginationParameters):
    pass


@dataclass(frozen=True, kw_only=True)
class SearchParameters(PaginationParameters):
    query: str = ""
    sort: Optional[SearchSort] = None
    filter: Optional[SearchFilter] = None


# =============================================================================
# Resources
# =============================================================================

class _Resource:
    def __init__(self, client: "Client"):
        self._client = client

    def _encode(self, obj: WireModel) -> dict:
        return self._client.encoder.encode(obj)

    def _encode_properties(self, properties: dict[str, PropertyValue]) -> dict:
        for value in properties.values():
            check_writable(value)
        return {name: self._encode(value) for name, value in properties.items()}

    def _encode_blocks(self, blocks: list[Block]) -> list[dict]:
        for block in blocks:
            check_writable(block)
        return [self._encode(block) for block in blocks]


class BlockChildrenResource(_Resource):
    def list(self, params: BlocksChildrenListParameters):
        """List the direct children of a block or page."""
        request = Request(
            "GET",
            expand_path(BLOCKS_CHILDREN, block_id=params.block_id),
            query=params.pagination(),
        )
        return self._client.request(request, Record(BlocksChildrenListResponse))

    def append(self, params: BlocksChildrenAppendParameters):
        """Append blocks after the last child. Returns the parent block."""
        body = {"children": self._encode_blocks(params.children)}
        request = Request("PATCH", expand_path(BLOCKS_CHILDREN, block_id=params.block_id), body=body)
        return self._client.request(request, OneOf("block"))


class BlocksResource(_Resource):
    def __init__(self, client: "Client"):
        super().__init__(client)
        self.children = BlockChildrenResource(client)


class PagesResource(_Resource):
    def retrieve(self, params: PagesRetrieveParameters):
        request = Request("GET", expand_path(PAGE, page_id=params.page_id))
        return self._client.request(request, OneOf("object", Page))

    def create(self, params: PagesCreateParameters):
        """Create a page under a database or another page."""
        body: dict[str, Any] = {
            "parent": self._encode(params.parent),
            "properties": self._encode_properties(params.properties),
        }
        if params.children:
            body["children"] = self._encode_blocks(params.children)
        return self._client.request(Request("POST", PAGES, body=body), OneOf("object", Page))

    def update(self, params: PagesUpdateParameters):
        """Update page properties. Properties not named are left unchanged."""
        body: dict[str, Any] = {"properties": self._encode_properties(params.properties)}
        if params.archived is not None:
            body["archived"] = params.archived
        request = Request("PATCH", expand_path(PAGE, page_id=params.page_id), body=body)
        return self._client.request(request, OneOf("object", Page))


class DatabasesResource(_Resource):
    def retrieve(self, params: DatabasesRetrieveParameters):
        request = Request("GET", expand_path(DATABASE, database_id=params.database_id))
        return self._client.request(request, OneOf("object", Database))

    def list(self, params: Optional[DatabasesListParameters] = None):
        params = params or DatabasesListParameters()
        request = Request("GET", DATABASES, query=params.pagination())
        return self._client.request(request, Record(DatabasesListResponse))

    def query(self, params: DatabasesQueryParameters):
        """Query the pages of a database with an optional filter and sorts."""
        body: dict[str, Any] = {}
        if params.filter is not None:
            body["filter"] = self._encode(params.filter)
        if params.sorts:
            body["sorts"] = [self._encode(sort) for sort in params.sorts]
        request = Request(
            "POST",
            expand_path(DATABASE_QUERY, database_id=params.database_id),
            query=params.pagination(),
            body=body,
        )
        return self._client.request(request, Record(DatabasesQueryResponse))


class UsersResource(_Resource):
    def retrieve(self, params: UsersRetrieveParameters):
        request = Request("GET", expand_path(USER, user_id=params.user_id))
        return self._client.request(request, OneOf("user"))

    def list(self, params: Optional[UsersListParameters] = None):
        params = params or UsersListParameters()
        request = Request("GET", USERS, query=params.pagination())
        return self._client.request(request, Record(UsersListResponse))

    def me(self):
        """The bot user of the integration token."""
        return self._client.request(Request("GET", USERS_ME), OneOf("user"))


class SearchResource(_Resource):
    def search(self, params: Optional[SearchParameters] = None):
        """Search the pages and databases shared with the integration."""
        params = params or SearchParameters()
        body: dict[str, Any] = {}
        if params.query:
            body["query"] = params.query
        if params.sort is not None:
            body["sort"] = self._encode(params.sort)
        if params.filter is not None:
            body["filter"] = self._encode(params.filter)
        request = Request("POST", SEARCH, query=params.pagination(), body=body)
        return self._client.request(request, Record(SearchResponse))
