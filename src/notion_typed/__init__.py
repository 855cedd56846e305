"""Typed client for the Notion API.

Every polymorphic wire record (blocks, rich text, property schemas and
values, filters, parents, users...) is decoded into a frozen dataclass
variant and encoded back to the same JSON shape.
"""

from .blocks import (
    Block,
    BulletedListItemBlock,
    ChildPageBlock,
    Heading1Block,
    Heading2Block,
    Heading3Block,
    NumberedListItemBlock,
    ParagraphBlock,
    ToDoBlock,
    ToggleBlock,
    UnsupportedBlock,
)
from .client import AsyncNotionClient, NotionClient
from .codec import Decoder, Encoder, decode, decode_json, encode
from .config import ClientConfig
from .dsl import build_filter, compile_filter, parse_filter, parse_sorts
from .endpoints import (
    BlocksChildrenAppendParameters,
    BlocksChildrenListParameters,
    DatabasesListParameters,
    DatabasesQueryParameters,
    DatabasesRetrieveParameters,
    PagesCreateParameters,
    PagesRetrieveParameters,
    PagesUpdateParameters,
    SearchParameters,
    UsersListParameters,
    UsersRetrieveParameters,
)
from .errors import (
    APIErrorCode,
    APIResponseError,
    DecodeError,
    FilterParseError,
    NotionError,
    RegistryError,
    UnimplementedError,
    UnknownTypeError,
)
from .files import ExternalFile, File, HostedFile
from .filters import (
    CheckboxCondition,
    CheckboxFilter,
    CompoundFilter,
    DateCondition,
    DateFilter,
    Filter,
    NumberCondition,
    NumberFilter,
    PropertyFilter,
    SearchFilter,
    SearchSort,
    SelectCondition,
    SelectFilter,
    Sort,
    TextCondition,
    TitleFilter,
)
from .helpers import (
    database_title,
    extract_uuid_from_url,
    iterate_paginated,
    normalize_uuid,
    page_title,
    plain_text,
)
from .objects import (
    BlocksChildrenListResponse,
    Database,
    DatabasesListResponse,
    DatabasesQueryResponse,
    Page,
    SearchableObject,
    SearchResponse,
    UsersListResponse,
)
from .parents import DatabaseParent, PageParent, Parent, WorkspaceParent
from .properties import (
    CheckboxPropertyValue,
    DatePropertyValue,
    FormulaPropertyValue,
    FormulaValue,
    MultiSelectPropertyValue,
    NumberPropertyValue,
    PropertySchema,
    PropertyValue,
    RichTextPropertyValue,
    RollupValue,
    SelectOption,
    SelectPropertyValue,
    TitlePropertyValue,
)
from .registry import REGISTRY, VariantRegistry, register
from .richtext import (
    Annotations,
    DateRange,
    Link,
    Mention,
    RichText,
    RichTextEquation,
    RichTextMention,
    RichTextText,
    text,
)
from .transport import AsyncHttpxTransport, HttpxTransport, Request, Response
from .users import BotUser, PersonUser, User

REGISTRY.freeze()

__version__ = "0.1.0"
