"""Parent references of pages and databases."""

from dataclasses import dataclass

from .registry import REGISTRY, register
from .wire import BOOLEAN, STRING, WireModel, value

PARENT = REGISTRY.define("parent")


@dataclass(frozen=True, kw_only=True)
class Parent(WireModel):
    FAMILY = "parent"


@register("parent", "database_id")
@dataclass(frozen=True, kw_only=True)
class DatabaseParent(Parent):
    database_id: str = value(codec=STRING)


@register("parent", "page_id")
@dataclass(frozen=True, kw_only=True)
class PageParent(Parent):
    page_id: str = value(codec=STRING)


@register("parent", "workspace")
@dataclass(frozen=True, kw_only=True)
class WorkspaceParent(Parent):
    workspace: bool = value(codec=BOOLEAN, default=True)
