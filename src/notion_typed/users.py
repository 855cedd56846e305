"""Users: people and bots."""

from dataclasses import dataclass
from typing import Any, Optional

from .registry import REGISTRY, register
from .wire import ANY, STRING, WireModel, envelope, payload, value

USER = REGISTRY.define("user")


@dataclass(frozen=True, kw_only=True)
class User(WireModel):
    FAMILY = "user"

    id: str = envelope(codec=STRING)
    object: str = envelope(codec=STRING, default="user")
    name: Optional[str] = envelope(codec=STRING, default=None)
    avatar_url: Optional[str] = envelope(codec=STRING, default=None)


@register("user", "person")
@dataclass(frozen=True, kw_only=True)
class PersonUser(User):
    email: Optional[str] = payload(codec=STRING, default=None)


@register("user", "bot")
@dataclass(frozen=True, kw_only=True)
class BotUser(User):
    # Bot details (owner, workspace_name) are passed through untyped.
    bot: dict[str, Any] = value(codec=ANY, default_factory=dict)
