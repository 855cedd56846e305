"""File objects attached to pages (files property values)."""

from dataclasses import dataclass
from typing import Optional

from .registry import REGISTRY, register
from .wire import STRING, WireModel, envelope, payload

FILE = REGISTRY.define("file")


@dataclass(frozen=True, kw_only=True)
class File(WireModel):
    FAMILY = "file"

    name: Optional[str] = envelope(codec=STRING, default=None)


@register("file", "external")
@dataclass(frozen=True, kw_only=True)
class ExternalFile(File):
    url: str = payload(codec=STRING)


@register("file", "file")
@dataclass(frozen=True, kw_only=True)
class HostedFile(File):
    """A file uploaded to Notion. The URL is temporary and expires."""
    url: str = payload(codec=STRING)
    expiry_time: Optional[str] = payload(codec=STRING, default=None)
