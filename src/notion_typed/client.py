"""Notion API clients.

Example:
    >>> with NotionClient(ClientConfig.from_env()) as notion:
    ...     page = notion.pages.retrieve(PagesRetrieveParameters(page_id=page_id))
    ...     print(page_title(page))
"""

import logging
from typing import Any, Optional

from .codec import Decoder, Encoder, parse_json
from .config import ClientConfig
from .endpoints import (
    BlocksResource,
    DatabasesResource,
    PagesResource,
    SearchParameters,
    SearchResource,
    UsersResource,
)
from .errors import APIResponseError
from .registry import REGISTRY, VariantRegistry
from .transport import (
    AsyncHttpxTransport,
    AsyncTransport,
    HttpxTransport,
    Request,
    Response,
    Transport,
)
from .wire import Codec

logger = logging.getLogger("notion-typed")


class _BaseClient:
    def __init__(self, config: Optional[ClientConfig], registry: VariantRegistry):
        self.config = config or ClientConfig.from_env()
        self.decoder = Decoder(registry)
        self.encoder = Encoder(registry)
        self.blocks = BlocksResource(self)
        self.pages = PagesResource(self)
        self.databases = DatabasesResource(self)
        self.users = UsersResource(self)
        self._search = SearchResource(self)

    def search(self, params: Optional[SearchParameters] = None):
        """Search pages and databases (see ``SearchResource.search``)."""
        return self._search.search(params)

    def _handle(self, request: Request, response: Response, codec: Codec) -> Any:
        """Raise for error statuses, otherwise decode the body with ``codec``."""
        if not response.ok:
            error = APIResponseError.from_response(
                response.status_code, response.content, response.headers
            )
            logger.warning(f"{request.method} {request.path} failed: {error}")
            raise error
        return codec.decode(parse_json(response.content), self.decoder, "$")


class NotionClient(_BaseClient):
    """Synchronous client.

    Args:
        config: Connection settings. Defaults to ``ClientConfig.from_env()``.
        transport: Object with a ``send(Request) -> Response`` method.
            Defaults to an httpx-backed transport owned by the client.
        registry: Variant registry used for decoding and encoding.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
        registry: VariantRegistry = REGISTRY,
    ):
        super().__init__(config, registry)
        self.transport = transport or HttpxTransport(self.config)

    def request(self, request: Request, codec: Codec) -> Any:
        response = self.transport.send(request)
        return self._handle(request, response, codec)

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "NotionClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AsyncNotionClient(_BaseClient):
    """Asynchronous client; every operation returns an awaitable."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[AsyncTransport] = None,
        registry: VariantRegistry = REGISTRY,
    ):
        super().__init__(config, registry)
        self.transport = transport or AsyncHttpxTransport(self.config)

    async def request(self, request: Request, codec: Codec) -> Any:
        response = await self.transport.send(request)
        return self._handle(request, response, codec)

    async def aclose(self) -> None:
        aclose = getattr(self.transport, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> "AsyncNotionClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
