"""Client configuration."""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger("notion-typed")

NOTION_API_BASE = "https://api.notion.com"
NOTION_VERSION = "2021-05-13"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "notion-typed/0.1.0"
TOKEN_ENV_VAR = "NOTION_TOKEN"


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings shared by every request of a client.

    Attributes:
        auth_token: Integration token sent as a Bearer credential. May be
            None here; building a request without it raises RuntimeError.
        base_url: API origin; endpoint paths (``/v1/...``) are appended to it.
        notion_version: Value of the Notion-Version header.
        timeout: Request timeout in seconds.
        user_agent: Value of the User-Agent header.
    """
    auth_token: Optional[str] = None
    base_url: str = NOTION_API_BASE
    notion_version: str = NOTION_VERSION
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    def __repr__(self) -> str:
        token = "***" if self.auth_token else None
        return (
            f"ClientConfig(auth_token={token!r}, base_url={self.base_url!r}, "
            f"notion_version={self.notion_version!r}, timeout={self.timeout!r})"
        )

    @classmethod
    def from_token_file(cls, path: Union[str, Path], **kwargs) -> "ClientConfig":
        """Read the token from a file (surrounding whitespace is stripped).

        Raises:
            FileNotFoundError: The file does not exist.
            ValueError: The file is empty.
        """
        token_path = Path(path).expanduser()
        if not token_path.exists():
            raise FileNotFoundError(f"Token file not found: {token_path}")
        token = token_path.read_text().strip()
        if not token:
            raise ValueError(f"Token file is empty: {token_path}")
        logger.info(f"Notion token loaded from {token_path}")
        return cls(auth_token=token, **kwargs)

    @classmethod
    def from_env(cls, var: str = TOKEN_ENV_VAR, **kwargs) -> "ClientConfig":
        """Take the token from an environment variable (None when unset)."""
        token = os.environ.get(var, "").strip() or None
        return cls(auth_token=token, **kwargs)

    def with_token(self, token: str) -> "ClientConfig":
        return replace(self, auth_token=token)

    def require_token(self) -> str:
        if not self.auth_token:
            raise RuntimeError(
                f"No Notion token. Set {TOKEN_ENV_VAR} or use ClientConfig.from_token_file()."
            )
        return self.auth_token
