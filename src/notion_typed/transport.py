"""Request transport: the only place that talks HTTP.

Resource clients build a ``Request`` and hand it to a transport, which
returns the raw ``Response``. Status handling and decoding happen in the
client, so tests can swap in any object with a ``send`` method.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol

import httpx

from .config import ClientConfig

logger = logging.getLogger("notion-typed")


@dataclass(frozen=True)
class Request:
    method: str
    path: str
    query: Mapping[str, Any] = field(default_factory=dict)
    body: Optional[Any] = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Response:
    status_code: int
    content: bytes
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    def send(self, request: Request) -> Response:
        ...


class AsyncTransport(Protocol):
    async def send(self, request: Request) -> Response:
        ...


def build_headers(config: ClientConfig, request: Request) -> dict[str, str]:
    """Headers sent with every request: auth, API version and user agent."""
    headers = {
        "Authorization": f"Bearer {config.require_token()}",
        "Notion-Version": config.notion_version,
        "User-Agent": config.user_agent,
    }
    if request.body is not None:
        headers["Content-Type"] = "application/json"
    headers.update(request.headers)
    return headers


def _encode_body(body: Any) -> Optional[bytes]:
    if body is None:
        return None
    return json.dumps(body).encode("utf-8")


def _to_response(response: httpx.Response) -> Response:
    return Response(
        status_code=response.status_code,
        content=response.content,
        headers=dict(response.headers),
    )


class HttpxTransport:
    """Synchronous transport backed by one ``httpx.Client``."""

    def __init__(self, config: ClientConfig, client: Optional[httpx.Client] = None):
        self.config = config
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=config.timeout)

    def send(self, request: Request) -> Response:
        headers = build_headers(self.config, request)
        url = f"{self.config.base_url}{request.path}"
        logger.debug(f"{request.method} {url} query={dict(request.query)}")
        response = self.client.request(
            request.method,
            url,
            params=dict(request.query) or None,
            content=_encode_body(request.body),
            headers=headers,
        )
        logger.debug(f"{request.method} {url} -> {response.status_code}")
        return _to_response(response)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()


class AsyncHttpxTransport:
    """Asynchronous transport backed by one ``httpx.AsyncClient``."""

    def __init__(self, config: ClientConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=config.timeout)

    async def send(self, request: Request) -> Response:
        headers = build_headers(self.config, request)
        url = f"{self.config.base_url}{request.path}"
        logger.debug(f"{request.method} {url} query={dict(request.query)}")
        response = await self.client.request(
            request.method,
            url,
            params=dict(request.query) or None,
            content=_encode_body(request.body),
            headers=headers,
        )
        logger.debug(f"{request.method} {url} -> {response.status_code}")
        return _to_response(response)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
