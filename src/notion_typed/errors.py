"""Error types raised by the Notion client.

Decode errors, API errors and unimplemented operations are kept apart so
callers can branch on them without inspecting messages.
"""

import json
from enum import Enum
from typing import Mapping, Optional, Union


class NotionError(Exception):
    """Base class for every error raised by this package."""


class RegistryError(NotionError):
    """Variant registry misuse (duplicate registration, late registration)."""


class DecodeError(NotionError):
    """A wire document does not match the shape expected at its position."""

    def __init__(self, message: str, path: str = "$"):
        super().__init__(f"{message} (at {path})")
        self.message = message
        self.path = path


class UnknownTypeError(DecodeError):
    """A well-formed envelope carries a discriminant with no registered variant."""

    def __init__(self, family: str, value: str, path: str = "$"):
        super().__init__(f"Unknown {family} type: {value!r}", path)
        self.family = family
        self.value = value


class UnimplementedError(NotionError, NotImplementedError):
    """The requested operation is not wired to a Notion endpoint."""


class FilterParseError(NotionError):
    """Error while parsing or compiling a filter/sort expression."""

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.position = position


class APIErrorCode(str, Enum):
    """Error codes documented by the Notion API."""
    INVALID_JSON = "invalid_json"
    INVALID_REQUEST_URL = "invalid_request_url"
    INVALID_REQUEST = "invalid_request"
    VALIDATION_ERROR = "validation_error"
    MISSING_VERSION = "missing_version"
    UNAUTHORIZED = "unauthorized"
    RESTRICTED_RESOURCE = "restricted_resource"
    OBJECT_NOT_FOUND = "object_not_found"
    CONFLICT_ERROR = "conflict_error"
    RATE_LIMITED = "rate_limited"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    SERVICE_UNAVAILABLE = "service_unavailable"
    DATABASE_CONNECTION_UNAVAILABLE = "database_connection_unavailable"


_VALIDATION_CODES = {
    APIErrorCode.INVALID_JSON,
    APIErrorCode.INVALID_REQUEST_URL,
    APIErrorCode.INVALID_REQUEST,
    APIErrorCode.VALIDATION_ERROR,
    APIErrorCode.MISSING_VERSION,
}

_RETRYABLE_CODES = {
    APIErrorCode.RATE_LIMITED,
    APIErrorCode.CONFLICT_ERROR,
    APIErrorCode.INTERNAL_SERVER_ERROR,
    APIErrorCode.SERVICE_UNAVAILABLE,
    APIErrorCode.DATABASE_CONNECTION_UNAVAILABLE,
}


class APIResponseError(NotionError):
    """Notion answered with a non-success HTTP status.

    The classification properties describe the failure; nothing in this
    package retries on them.
    """

    def __init__(
        self,
        status: int,
        code: Union[APIErrorCode, str, None],
        message: str,
        retry_after: Optional[float] = None,
    ):
        super().__init__(f"StatusCode: {status}, Code: {_code_text(code)}, Message: {message}")
        self.status = status
        self.code = code
        self.message = message
        self.retry_after = retry_after

    @classmethod
    def from_response(
        cls,
        status: int,
        content: bytes,
        headers: Optional[Mapping[str, str]] = None,
        max_len: int = 300,
    ) -> "APIResponseError":
        """Build an error from a failed response body.

        Args:
            status: HTTP status code.
            content: Raw response body (normally a JSON error object).
            headers: Response headers, used for Retry-After.
            max_len: Maximum length of the message kept for non-JSON bodies.

        Returns:
            The populated error. Bodies that are not a Notion error object
            produce ``code=None`` and a truncated text message.
        """
        code: Union[APIErrorCode, str, None] = None
        try:
            body = json.loads(content)
        except ValueError:
            body = None

        if isinstance(body, dict) and isinstance(body.get("code"), str):
            code = _parse_code(body["code"])
            message = str(body.get("message", ""))
        else:
            message = content.decode("utf-8", errors="replace")[:max_len]

        retry_after = None
        for key, value in (headers or {}).items():
            if key.lower() == "retry-after":
                try:
                    retry_after = float(value)
                except ValueError:
                    retry_after = None
        return cls(status, code, message, retry_after)

    @property
    def is_rate_limited(self) -> bool:
        return self.code == APIErrorCode.RATE_LIMITED or self.status == 429

    @property
    def is_not_found(self) -> bool:
        return self.code == APIErrorCode.OBJECT_NOT_FOUND or self.status == 404

    @property
    def is_validation_error(self) -> bool:
        return self.code in _VALIDATION_CODES

    @property
    def is_retryable(self) -> bool:
        if self.code in _RETRYABLE_CODES:
            return True
        return self.status == 429 or self.status >= 500


def _parse_code(raw: str) -> Union[APIErrorCode, str]:
    try:
        return APIErrorCode(raw)
    except ValueError:
        return raw


def _code_text(code: Union[APIErrorCode, str, None]) -> str:
    if isinstance(code, APIErrorCode):
        return code.value
    return code or "unknown"
