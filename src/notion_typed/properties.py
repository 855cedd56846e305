"""Database property schemas and page property values.

A database describes its columns with PropertySchema variants; each page in
it carries one PropertyValue per column. Both families share the same set of
discriminants but not the same payloads: a schema holds configuration
(``{"type": "number", "number": {"format": "dollar"}}``), a value holds the
cell content (``{"type": "number", "number": 2.5}``).
"""

from dataclasses import dataclass
from typing import Optional

from .files import File
from .registry import REGISTRY, register
from .richtext import DateRange, RichText
from .users import User
from .wire import (
    BOOLEAN,
    NUMBER,
    STRING,
    ListOf,
    Nullable,
    OneOf,
    Record,
    WireModel,
    envelope,
    payload,
    value,
)

PROPERTY = REGISTRY.define("property")
PROPERTY_VALUE = REGISTRY.define("property_value")
FORMULA_VALUE = REGISTRY.define("formula_value")
ROLLUP_VALUE = REGISTRY.define("rollup_value")

_RICH_TEXT_LIST = ListOf(OneOf("rich_text"))


@dataclass(frozen=True, kw_only=True)
class SelectOption(WireModel):
    """A select/multi-select/status option. Writes may name an option only."""
    id: Optional[str] = envelope(codec=STRING, default=None)
    name: Optional[str] = envelope(codec=STRING, default=None)
    color: Optional[str] = envelope(codec=STRING, default=None)


@dataclass(frozen=True, kw_only=True)
class PageReference(WireModel):
    id: str = envelope(codec=STRING)


_OPTIONS = ListOf(Record(SelectOption))


# =============================================================================
# Property Schemas
# =============================================================================

@dataclass(frozen=True, kw_only=True)
class PropertySchema(WireModel):
    """A database column definition."""
    FAMILY = "property"

    id: Optional[str] = envelope(codec=STRING, default=None)
    name: Optional[str] = envelope(codec=STRING, default=None)


@register("property", "title")
@dataclass(frozen=True, kw_only=True)
class TitleProperty(PropertySchema):
    pass


@register("property", "rich_text")
@dataclass(frozen=True, kw_only=True)
class RichTextProperty(PropertySchema):
    pass


@register("property", "number")
@dataclass(frozen=True, kw_only=True)
class NumberProperty(PropertySchema):
    format: str = payload(codec=STRING, default="number")


@register("property", "select")
@dataclass(frozen=True, kw_only=True)
class SelectProperty(PropertySchema):
    options: list[SelectOption] = payload(codec=_OPTIONS, default_factory=list)


@register("property", "multi_select")
@dataclass(frozen=True, kw_only=True)
class MultiSelectProperty(PropertySchema):
    options: list[SelectOption] = payload(codec=_OPTIONS, default_factory=list)


@register("property", "status")
@dataclass(frozen=True, kw_only=True)
class StatusProperty(PropertySchema):
    options: list[SelectOption] = payload(codec=_OPTIONS, default_factory=list)


@register("property", "date")
@dataclass(frozen=True, kw_only=True)
class DateProperty(PropertySchema):
    pass


@register("property", "people")
@dataclass(frozen=True, kw_only=True)
class PeopleProperty(PropertySchema):
    pass


@register("property", "files")
@dataclass(frozen=True, kw_only=True)
class FilesProperty(PropertySchema):
    pass


# Older API versions named the files column type "file".
@register("property", "file")
@dataclass(frozen=True, kw_only=True)
class FileProperty(FilesProperty):
    pass


@register("property", "checkbox")
@dataclass(frozen=True, kw_only=True)
class CheckboxProperty(PropertySchema):
    pass


@register("property", "url")
@dataclass(frozen=True, kw_only=True)
class URLProperty(PropertySchema):
    pass


@register("property", "email")
@dataclass(frozen=True, kw_only=True)
class EmailProperty(PropertySchema):
    pass


@register("property", "phone_number")
@dataclass(frozen=True, kw_only=True)
class PhoneNumberProperty(PropertySchema):
    pass


@register("property", "formula")
@dataclass(frozen=True, kw_only=True)
class FormulaProperty(PropertySchema):
    expression: str = payload(codec=STRING)


@register("property", "relation")
@dataclass(frozen=True, kw_only=True)
class RelationProperty(PropertySchema):
    database_id: str = payload(codec=STRING)
    synced_property_name: Optional[str] = payload(codec=STRING, default=None)
    synced_property_id: Optional[str] = payload(codec=STRING, default=None)


@register("property", "rollup")
@dataclass(frozen=True, kw_only=True)
class RollupProperty(PropertySchema):
    """Aggregates a property of related pages.

    ``function`` is kept as the string the API sends (count_all, sum, ...).
    """
    function: str = payload(codec=STRING)
    relation_property_name: Optional[str] = payload(codec=STRING, default=None)
    relation_property_id: Optional[str] = payload(codec=STRING, default=None)
    rollup_property_name: Optional[str] = payload(codec=STRING, default=None)
    rollup_property_id: Optional[str] = payload(codec=STRING, default=None)


@register("property", "created_time")
@dataclass(frozen=True, kw_only=True)
class CreatedTimeProperty(PropertySchema):
    pass


@register("property", "created_by")
@dataclass(frozen=True, kw_only=True)
class CreatedByProperty(PropertySchema):
    pass


@register("property", "last_edited_time")
@dataclass(frozen=True, kw_only=True)
class LastEditedTimeProperty(PropertySchema):
    pass


@register("property", "last_edited_by")
@dataclass(frozen=True, kw_only=True)
class LastEditedByProperty(PropertySchema):
    pass


# =============================================================================
# Formula and Rollup Values
# =============================================================================

@dataclass(frozen=True, kw_only=True)
class FormulaValue(WireModel):
    FAMILY = "formula_value"


@register("formula_value", "string")
@dataclass(frozen=True, kw_only=True)
class StringFormulaValue(FormulaValue):
    string: Optional[str] = value(codec=Nullable(STRING), default=None)


@register("formula_value", "number")
@dataclass(frozen=True, kw_only=True)
class NumberFormulaValue(FormulaValue):
    number: Optional[float] = value(codec=Nullable(NUMBER), default=None)


@register("formula_value", "boolean")
@dataclass(frozen=True, kw_only=True)
class BooleanFormulaValue(FormulaValue):
    boolean: Optional[bool] = value(codec=Nullable(BOOLEAN), default=None)


@register("formula_value", "date")
@dataclass(frozen=True, kw_only=True)
class DateFormulaValue(FormulaValue):
    date: Optional[DateRange] = value(codec=Nullable(Record(DateRange)), default=None)


@dataclass(frozen=True, kw_only=True)
class RollupValue(WireModel):
    FAMILY = "rollup_value"

    function: Optional[str] = envelope(codec=STRING, default=None)


@register("rollup_value", "number")
@dataclass(frozen=True, kw_only=True)
class NumberRollupValue(RollupValue):
    number: Optional[float] = value(codec=Nullable(NUMBER), default=None)


@register("rollup_value", "date")
@dataclass(frozen=True, kw_only=True)
class DateRollupValue(RollupValue):
    date: Optional[DateRange] = value(codec=Nullable(Record(DateRange)), default=None)


@register("rollup_value", "array")
@dataclass(frozen=True, kw_only=True)
class ArrayRollupValue(RollupValue):
    """Rolled-up values of the related pages, one property value each."""
    array: list["PropertyValue"] = value(
        codec=ListOf(OneOf("property_value")), default_factory=list
    )


# =============================================================================
# Property Values
# =============================================================================

@dataclass(frozen=True, kw_only=True)
class PropertyValue(WireModel):
    """The value of one property on a page."""
    FAMILY = "property_value"

    id: Optional[str] = envelope(codec=STRING, default=None)


@register("property_value", "title")
@dataclass(frozen=True, kw_only=True)
class TitlePropertyValue(PropertyValue):
    title: list[RichText] = value(codec=_RICH_TEXT_LIST, default_factory=list)


@register("property_value", "rich_text")
@dataclass(frozen=True, kw_only=True)
class RichTextPropertyValue(PropertyValue):
    rich_text: list[RichText] = value(codec=_RICH_TEXT_LIST, default_factory=list)


@register("property_value", "number")
@dataclass(frozen=True, kw_only=True)
class NumberPropertyValue(PropertyValue):
    number: Optional[float] = value(codec=Nullable(NUMBER), default=None)


@register("property_value", "select")
@dataclass(frozen=True, kw_only=True)
class SelectPropertyValue(PropertyValue):
    select: Optional[SelectOption] = value(codec=Nullable(Record(SelectOption)), default=None)


@register("property_value", "status")
@dataclass(frozen=True, kw_only=True)
class StatusPropertyValue(PropertyValue):
    status: Optional[SelectOption] = value(codec=Nullable(Record(SelectOption)), default=None)


@register("property_value", "multi_select")
@dataclass(frozen=True, kw_only=True)
class MultiSelectPropertyValue(PropertyValue):
    multi_select: list[SelectOption] = value(codec=_OPTIONS, default_factory=list)


@register("property_value", "date")
@dataclass(frozen=True, kw_only=True)
class DatePropertyValue(PropertyValue):
    date: Optional[DateRange] = value(codec=Nullable(Record(DateRange)), default=None)


@register("property_value", "people")
@dataclass(frozen=True, kw_only=True)
class PeoplePropertyValue(PropertyValue):
    people: list[User] = value(codec=ListOf(OneOf("user")), default_factory=list)


@register("property_value", "files")
@dataclass(frozen=True, kw_only=True)
class FilesPropertyValue(PropertyValue):
    files: list[File] = value(codec=ListOf(OneOf("file")), default_factory=list)


@register("property_value", "checkbox")
@dataclass(frozen=True, kw_only=True)
class CheckboxPropertyValue(PropertyValue):
    checkbox: bool = value(codec=BOOLEAN, default=False)


@register("property_value", "url")
@dataclass(frozen=True, kw_only=True)
class URLPropertyValue(PropertyValue):
    url: Optional[str] = value(codec=Nullable(STRING), default=None)


@register("property_value", "email")
@dataclass(frozen=True, kw_only=True)
class EmailPropertyValue(PropertyValue):
    email: Optional[str] = value(codec=Nullable(STRING), default=None)


@register("property_value", "phone_number")
@dataclass(frozen=True, kw_only=True)
class PhoneNumberPropertyValue(PropertyValue):
    phone_number: Optional[str] = value(codec=Nullable(STRING), default=None)


@register("property_value", "relation")
@dataclass(frozen=True, kw_only=True)
class RelationPropertyValue(PropertyValue):
    relation: list[PageReference] = value(
        codec=ListOf(Record(PageReference)), default_factory=list
    )


@register("property_value", "formula")
@dataclass(frozen=True, kw_only=True)
class FormulaPropertyValue(PropertyValue):
    WRITABLE = False

    formula: FormulaValue = value(codec=OneOf("formula_value"))


@register("property_value", "rollup")
@dataclass(frozen=True, kw_only=True)
class RollupPropertyValue(PropertyValue):
    WRITABLE = False

    rollup: RollupValue = value(codec=OneOf("rollup_value"))


@register("property_value", "created_time")
@dataclass(frozen=True, kw_only=True)
class CreatedTimePropertyValue(PropertyValue):
    WRITABLE = False

    created_time: str = value(codec=STRING)


@register("property_value", "created_by")
@dataclass(frozen=True, kw_only=True)
class CreatedByPropertyValue(PropertyValue):
    WRITABLE = False

    created_by: User = value(codec=OneOf("user"))


@register("property_value", "last_edited_time")
@dataclass(frozen=True, kw_only=True)
class LastEditedTimePropertyValue(PropertyValue):
    WRITABLE = False

    last_edited_time: str = value(codec=STRING)


@register("property_value", "last_edited_by")
@dataclass(frozen=True, kw_only=True)
class LastEditedByPropertyValue(PropertyValue):
    WRITABLE = False

    last_edited_by: User = value(codec=OneOf("user"))
