"""Small utilities on top of the typed models."""

import re
from dataclasses import replace
from typing import Callable, Iterator, Optional, TypeVar

from .endpoints import PaginationParameters
from .objects import Database, PaginatedList, Page
from .properties import TitlePropertyValue
from .richtext import RichText, RichTextEquation, RichTextText

P = TypeVar("P", bound=PaginationParameters)

UUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-?[0-9a-f]{4}-?[0-9a-f]{4}-?[0-9a-f]{4}-?[0-9a-f]{12}$',
    re.IGNORECASE
)
NOTION_URL_PATTERN = re.compile(
    r'https?://(?:www\.)?notion\.(?:so|site)/(?:[^/]+/)?([^?#]+)',
    re.IGNORECASE
)


def normalize_uuid(uuid_str: str) -> str:
    """Normalize a UUID to the dashed, lowercase form the API returns.

    Args:
        uuid_str: UUID with or without dashes.

    Returns:
        UUID in format xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx

    Raises:
        ValueError: If input is not a valid UUID (wrong length or invalid chars).
    """
    clean = uuid_str.replace('-', '').lower()
    if len(clean) != 32:
        raise ValueError(f"Invalid UUID length: {uuid_str}")
    if not all(c in '0123456789abcdef' for c in clean):
        raise ValueError(f"Invalid UUID characters: {uuid_str}")
    return f"{clean[:8]}-{clean[8:12]}-{clean[12:16]}-{clean[16:20]}-{clean[20:]}"


def extract_uuid_from_url(url: str) -> Optional[str]:
    """Extract the page or database ID from a Notion URL.

    Handles ``https://www.notion.so/workspace/Page-Title-<32 hex>`` and
    ``https://notion.so/<dashed uuid>``.

    Returns:
        Normalized UUID or None if the URL holds none.
    """
    match = NOTION_URL_PATTERN.match(url)
    if not match:
        return None
    uuid_match = re.search(r'([0-9a-f]{32}|[0-9a-f-]{36})$', match.group(1), re.IGNORECASE)
    if uuid_match:
        return normalize_uuid(uuid_match.group(1))
    return None


def plain_text(rich_text: list[RichText]) -> str:
    """Concatenate the plain text of rich text spans.

    Spans built locally have no ``plain_text``; their content (or equation
    expression) is used instead.
    """
    parts = []
    for span in rich_text:
        if span.plain_text is not None:
            parts.append(span.plain_text)
        elif isinstance(span, RichTextText):
            parts.append(span.content)
        elif isinstance(span, RichTextEquation):
            parts.append(span.expression)
    return "".join(parts)


def page_title(page: Page, default: str = "Untitled") -> str:
    for value in page.properties.values():
        if isinstance(value, TitlePropertyValue):
            return plain_text(value.title) or default
    return default


def database_title(database: Database, default: str = "Untitled") -> str:
    return plain_text(database.title) or default


def iterate_paginated(list_fn: Callable[[P], PaginatedList], params: P) -> Iterator:
    """Yield every result of a list operation, following ``next_cursor``.

    Args:
        list_fn: A sync list operation, e.g. ``client.databases.query``.
        params: Parameters of the first call; later calls reuse them with
            the cursor of the previous page.

    Example:
        >>> for page in iterate_paginated(client.databases.query, params):
        ...     print(page_title(page))
    """
    while True:
        response = list_fn(params)
        yield from response.results
        if not response.has_more or not response.next_cursor:
            return
        params = replace(params, start_cursor=response.next_cursor)
