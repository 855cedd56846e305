"""Database query filters and sorts.

Filters carry no ``type`` key. A compound filter is recognised by its
``or``/``and`` key; a property filter by the single condition key next to
``property``::

    {"or": [{"property": "In stock", "checkbox": {"equals": true}}]}

Conditions are plain records whose unset operators are left out of the
request body.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .registry import REGISTRY, register
from .wire import (
    ANY,
    BOOLEAN,
    NUMBER,
    STRING,
    ListOf,
    OneOf,
    Record,
    WireModel,
    envelope,
    value,
)


def _peek_filter(raw: dict) -> Optional[str]:
    if "or" in raw:
        return "or"
    if "and" in raw:
        return "and"
    keys = [key for key in raw if key != "property"]
    if len(keys) == 1:
        return keys[0]
    return None


FILTER = REGISTRY.define("filter", discriminant=None, peek=_peek_filter)

ASCENDING = "ascending"
DESCENDING = "descending"


# =============================================================================
# Conditions
# =============================================================================

@dataclass(frozen=True, kw_only=True)
class TextCondition(WireModel):
    equals: Optional[str] = envelope(codec=STRING, default=None)
    does_not_equal: Optional[str] = envelope(codec=STRING, default=None)
    contains: Optional[str] = envelope(codec=STRING, default=None)
    does_not_contain: Optional[str] = envelope(codec=STRING, default=None)
    starts_with: Optional[str] = envelope(codec=STRING, default=None)
    ends_with: Optional[str] = envelope(codec=STRING, default=None)
    is_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)
    is_not_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)


@dataclass(frozen=True, kw_only=True)
class NumberCondition(WireModel):
    equals: Optional[float] = envelope(codec=NUMBER, default=None)
    does_not_equal: Optional[float] = envelope(codec=NUMBER, default=None)
    greater_than: Optional[float] = envelope(codec=NUMBER, default=None)
    less_than: Optional[float] = envelope(codec=NUMBER, default=None)
    greater_than_or_equal_to: Optional[float] = envelope(codec=NUMBER, default=None)
    less_than_or_equal_to: Optional[float] = envelope(codec=NUMBER, default=None)
    is_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)
    is_not_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)


@dataclass(frozen=True, kw_only=True)
class CheckboxCondition(WireModel):
    equals: Optional[bool] = envelope(codec=BOOLEAN, default=None)
    does_not_equal: Optional[bool] = envelope(codec=BOOLEAN, default=None)


@dataclass(frozen=True, kw_only=True)
class SelectCondition(WireModel):
    equals: Optional[str] = envelope(codec=STRING, default=None)
    does_not_equal: Optional[str] = envelope(codec=STRING, default=None)
    is_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)
    is_not_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)


@dataclass(frozen=True, kw_only=True)
class MultiSelectCondition(WireModel):
    contains: Optional[str] = envelope(codec=STRING, default=None)
    does_not_contain: Optional[str] = envelope(codec=STRING, default=None)
    is_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)
    is_not_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)


@dataclass(frozen=True, kw_only=True)
class DateCondition(WireModel):
    """Date operators. Dates are ISO 8601 strings.

    The relative operators (``past_week``, ``next_month``...) take an empty
    object on the wire: set them to ``{}``.
    """
    equals: Optional[str] = envelope(codec=STRING, default=None)
    before: Optional[str] = envelope(codec=STRING, default=None)
    after: Optional[str] = envelope(codec=STRING, default=None)
    on_or_before: Optional[str] = envelope(codec=STRING, default=None)
    on_or_after: Optional[str] = envelope(codec=STRING, default=None)
    is_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)
    is_not_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)
    past_week: Optional[dict[str, Any]] = envelope(codec=ANY, default=None)
    past_month: Optional[dict[str, Any]] = envelope(codec=ANY, default=None)
    past_year: Optional[dict[str, Any]] = envelope(codec=ANY, default=None)
    next_week: Optional[dict[str, Any]] = envelope(codec=ANY, default=None)
    next_month: Optional[dict[str, Any]] = envelope(codec=ANY, default=None)
    next_year: Optional[dict[str, Any]] = envelope(codec=ANY, default=None)


@dataclass(frozen=True, kw_only=True)
class PeopleCondition(WireModel):
    contains: Optional[str] = envelope(codec=STRING, default=None)
    does_not_contain: Optional[str] = envelope(codec=STRING, default=None)
    is_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)
    is_not_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)


@dataclass(frozen=True, kw_only=True)
class FilesCondition(WireModel):
    is_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)
    is_not_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)


@dataclass(frozen=True, kw_only=True)
class RelationCondition(WireModel):
    contains: Optional[str] = envelope(codec=STRING, default=None)
    does_not_contain: Optional[str] = envelope(codec=STRING, default=None)
    is_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)
    is_not_empty: Optional[bool] = envelope(codec=BOOLEAN, default=None)


@dataclass(frozen=True, kw_only=True)
class FormulaCondition(WireModel):
    """Condition on a formula result; set the one matching its result type."""
    text: Optional[TextCondition] = envelope(codec=Record(TextCondition), default=None)
    checkbox: Optional[CheckboxCondition] = envelope(codec=Record(CheckboxCondition), default=None)
    number: Optional[NumberCondition] = envelope(codec=Record(NumberCondition), default=None)
    date: Optional[DateCondition] = envelope(codec=Record(DateCondition), default=None)


# =============================================================================
# Filters
# =============================================================================

@dataclass(frozen=True, kw_only=True)
class Filter(WireModel):
    FAMILY = "filter"


@register("filter", "or", "and")
@dataclass(frozen=True, kw_only=True)
class CompoundFilter(Filter):
    """Boolean combination of filters. Children may be compound themselves.

    Normally only one of ``or_``/``and_`` is set.

    Raises:
        ValueError: Both ``or_`` and ``and_`` are empty.
    """
    TYPE = None

    or_: list[Filter] = envelope("or", ListOf(OneOf("filter")), omit_empty=True, default_factory=list)
    and_: list[Filter] = envelope("and", ListOf(OneOf("filter")), omit_empty=True, default_factory=list)

    def __post_init__(self):
        # an empty compound encodes to {} and could not be told apart on decode
        if not self.or_ and not self.and_:
            raise ValueError("CompoundFilter needs at least one 'or' or 'and' child")


@dataclass(frozen=True, kw_only=True)
class PropertyFilter(Filter):
    """Condition on one database property, named by ``property``."""
    property: str = envelope(codec=STRING)


@register("filter", "title")
@dataclass(frozen=True, kw_only=True)
class TitleFilter(PropertyFilter):
    condition: TextCondition = value(codec=Record(TextCondition))


@register("filter", "rich_text")
@dataclass(frozen=True, kw_only=True)
class RichTextFilter(PropertyFilter):
    condition: TextCondition = value(codec=Record(TextCondition))


# Name used by older API versions for rich_text conditions.
@register("filter", "text")
@dataclass(frozen=True, kw_only=True)
class TextFilter(PropertyFilter):
    condition: TextCondition = value(codec=Record(TextCondition))


@register("filter", "url")
@dataclass(frozen=True, kw_only=True)
class URLFilter(PropertyFilter):
    condition: TextCondition = value(codec=Record(TextCondition))


@register("filter", "email")
@dataclass(frozen=True, kw_only=True)
class EmailFilter(PropertyFilter):
    condition: TextCondition = value(codec=Record(TextCondition))


@register("filter", "phone_number")
@dataclass(frozen=True, kw_only=True)
class PhoneNumberFilter(PropertyFilter):
    condition: TextCondition = value(codec=Record(TextCondition))


@register("filter", "number")
@dataclass(frozen=True, kw_only=True)
class NumberFilter(PropertyFilter):
    condition: NumberCondition = value(codec=Record(NumberCondition))


@register("filter", "checkbox")
@dataclass(frozen=True, kw_only=True)
class CheckboxFilter(PropertyFilter):
    condition: CheckboxCondition = value(codec=Record(CheckboxCondition))


@register("filter", "select")
@dataclass(frozen=True, kw_only=True)
class SelectFilter(PropertyFilter):
    condition: SelectCondition = value(codec=Record(SelectCondition))


@register("filter", "status")
@dataclass(frozen=True, kw_only=True)
class StatusFilter(PropertyFilter):
    condition: SelectCondition = value(codec=Record(SelectCondition))


@register("filter", "multi_select")
@dataclass(frozen=True, kw_only=True)
class MultiSelectFilter(PropertyFilter):
    condition: MultiSelectCondition = value(codec=Record(MultiSelectCondition))


@register("filter", "date")
@dataclass(frozen=True, kw_only=True)
class DateFilter(PropertyFilter):
    condition: DateCondition = value(codec=Record(DateCondition))


@register("filter", "created_time")
@dataclass(frozen=True, kw_only=True)
class CreatedTimeFilter(PropertyFilter):
    condition: DateCondition = value(codec=Record(DateCondition))


@register("filter", "last_edited_time")
@dataclass(frozen=True, kw_only=True)
class LastEditedTimeFilter(PropertyFilter):
    condition: DateCondition = value(codec=Record(DateCondition))


@register("filter", "people")
@dataclass(frozen=True, kw_only=True)
class PeopleFilter(PropertyFilter):
    condition: PeopleCondition = value(codec=Record(PeopleCondition))


@register("filter", "created_by")
@dataclass(frozen=True, kw_only=True)
class CreatedByFilter(PropertyFilter):
    condition: PeopleCondition = value(codec=Record(PeopleCondition))


@register("filter", "last_edited_by")
@dataclass(frozen=True, kw_only=True)
class LastEditedByFilter(PropertyFilter):
    condition: PeopleCondition = value(codec=Record(PeopleCondition))


@register("filter", "files")
@dataclass(frozen=True, kw_only=True)
class FilesFilter(PropertyFilter):
    condition: FilesCondition = value(codec=Record(FilesCondition))


@register("filter", "relation")
@dataclass(frozen=True, kw_only=True)
class RelationFilter(PropertyFilter):
    condition: RelationCondition = value(codec=Record(RelationCondition))


@register("filter", "formula")
@dataclass(frozen=True, kw_only=True)
class FormulaFilter(PropertyFilter):
    condition: FormulaCondition = value(codec=Record(FormulaCondition))


# =============================================================================
# Sorts
# =============================================================================

@dataclass(frozen=True, kw_only=True)
class Sort(WireModel):
    """Database query sort. Set either ``property`` or ``timestamp``."""
    property: Optional[str] = envelope(codec=STRING, default=None)
    timestamp: Optional[str] = envelope(codec=STRING, default=None)
    direction: str = envelope(codec=STRING, default=ASCENDING)


@dataclass(frozen=True, kw_only=True)
class SearchFilter(WireModel):
    """Restricts search results to pages or databases."""
    value: str = envelope(codec=STRING)
    property: str = envelope(codec=STRING, default="object")


@dataclass(frozen=True, kw_only=True)
class SearchSort(WireModel):
    direction: str = envelope(codec=STRING, default=DESCENDING)
    timestamp: str = envelope(codec=STRING, default="last_edited_time")
