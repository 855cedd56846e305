"""Compact filter and sort expressions for database queries.

Filter syntax::

    Status = Done & (Due < -7d | Priority >= 3)
    "Last Contact" ?

Operators: ``=`` ``!=`` ``~`` (contains) ``!~`` ``<`` ``>`` ``<=`` ``>=``
``?`` (is empty) ``!?`` (is not empty). ``&`` binds tighter than ``|``.
Names and values containing spaces or operator characters are double-quoted;
``\\"`` escapes a quote inside them. Dates accept ISO 8601 or a relative
offset in days/weeks (``-7d``, ``+2w``).

Sort syntax::

    Due desc, Status

Expressions are parsed into a small syntax tree (``parse_filter``) and then
compiled against a database schema (``compile_filter``), which resolves
property names case-insensitively and picks the typed filter matching each
property's type.
"""

import re
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional, Union

import parsy as P

from .errors import FilterParseError
from .filters import (
    ASCENDING,
    DESCENDING,
    CheckboxCondition,
    CompoundFilter,
    DateCondition,
    FilesCondition,
    Filter,
    MultiSelectCondition,
    NumberCondition,
    PeopleCondition,
    RelationCondition,
    SelectCondition,
    Sort,
    TextCondition,
)
from .objects import Database
from .properties import PropertySchema
from .registry import REGISTRY

# =============================================================================
# Tokenizer
# =============================================================================


@dataclass(frozen=True)
class Token:
    kind: str  # WORD, QUOTED, OP, AND, OR, LPAREN, RPAREN, COMMA, EOF
    text: str
    pos: int


def _make_tokenizer():
    """Build the token parser using parsy combinators."""

    whitespace = P.regex(r"\s*")

    def token(kind, parser):
        return P.seq(P.index, parser).combine(lambda pos, text: Token(kind, text, pos))

    @P.generate
    def quoted():
        start = yield P.index
        yield P.string('"')
        body = yield (P.string("\\") >> P.any_char | P.regex(r'[^"\\]+')).many().concat()
        closing = yield P.string('"').optional()
        if closing is None:
            raise FilterParseError("Unterminated quoted string", start)
        return Token("QUOTED", body, start)

    any_token = (
        quoted
        | token("OP", P.regex(r"!=|!~|!\?|<=|>=|[=~<>?]"))
        | token("AND", P.string("&"))
        | token("OR", P.string("|"))
        | token("LPAREN", P.string("("))
        | token("RPAREN", P.string(")"))
        | token("COMMA", P.string(","))
        | token("WORD", P.regex(r'[^\s&|()"=!~<>?,]+'))
    )
    return whitespace >> (any_token << whitespace).many()


_tokenizer = _make_tokenizer()


def tokenize(text: str) -> list[Token]:
    """Split an expression into tokens, ending with an EOF token.

    Raises:
        FilterParseError: Unterminated quote or a character that starts no token.
    """
    tokens, rest = _tokenizer.parse_partial(text)
    if rest:
        pos = len(text) - len(rest)
        raise FilterParseError(f"Unexpected character {rest[0]!r} at position {pos}", pos)
    return tokens + [Token("EOF", "", len(text))]


# =============================================================================
# Parser
# =============================================================================

UNARY_OPERATORS = {"?", "!?"}


@dataclass(frozen=True)
class FilterAtom:
    """One ``property operator value`` comparison, before type resolution."""
    property: str
    operator: str
    value: str = ""
    pos: int = 0


@dataclass(frozen=True)
class FilterCompound:
    op: str  # "&" or "|"
    children: list = field(default_factory=list)


FilterNode = Union[FilterAtom, FilterCompound]


class _Parser:
    """Recursive descent over tokens: or_expr := and_expr ('|' and_expr)*."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.index = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def advance(self) -> Token:
        tok = self.tokens[self.index]
        if tok.kind != "EOF":
            self.index += 1
        return tok

    def error(self, message: str) -> FilterParseError:
        tok = self.current
        found = "end of input" if tok.kind == "EOF" else repr(tok.text)
        return FilterParseError(f"{message} at position {tok.pos}, found {found}", tok.pos)

    def parse(self) -> FilterNode:
        node = self.or_expr()
        if self.current.kind != "EOF":
            raise self.error("Expected '&', '|' or end of filter")
        return node

    def or_expr(self) -> FilterNode:
        return self._chain("OR", "|", self.and_expr)

    def and_expr(self) -> FilterNode:
        return self._chain("AND", "&", self.primary)

    def _chain(self, kind, op, operand) -> FilterNode:
        children = [operand()]
        while self.current.kind == kind:
            self.advance()
            children.append(operand())
        if len(children) == 1:
            return children[0]
        return FilterCompound(op, children)

    def primary(self) -> FilterNode:
        if self.current.kind == "LPAREN":
            self.advance()
            node = self.or_expr()
            if self.current.kind != "RPAREN":
                raise self.error("Expected ')'")
            self.advance()
            return node
        return self.atom()

    def atom(self) -> FilterAtom:
        if self.current.kind not in ("WORD", "QUOTED"):
            raise self.error("Expected property name")
        name = self.advance()
        if self.current.kind != "OP":
            raise self.error(f"Expected operator after {name.text!r}")
        op = self.advance().text
        if op in UNARY_OPERATORS:
            return FilterAtom(name.text, op, "", name.pos)
        if self.current.kind not in ("WORD", "QUOTED"):
            raise self.error(f"Expected value after {op!r}")
        return FilterAtom(name.text, op, self.advance().text, name.pos)


def parse_filter(text: str) -> FilterNode:
    """Parse a filter expression into a syntax tree.

    Args:
        text: Filter expression, e.g. ``Status = Done & Due < 2024-01-15``.

    Returns:
        A FilterAtom, or a FilterCompound whose children are parsed
        expressions. Chains of the same operator are flattened.

    Raises:
        FilterParseError: The expression is malformed.
    """
    return _Parser(tokenize(text)).parse()


# =============================================================================
# Compiler
# =============================================================================

_TEXT_OPS = {
    "=": "equals", "!=": "does_not_equal", "~": "contains", "!~": "does_not_contain",
    "?": "is_empty", "!?": "is_not_empty",
}
_NUMBER_OPS = {
    "=": "equals", "!=": "does_not_equal", "<": "less_than", ">": "greater_than",
    "<=": "less_than_or_equal_to", ">=": "greater_than_or_equal_to",
    "?": "is_empty", "!?": "is_not_empty",
}
_CHECKBOX_OPS = {"=": "equals", "!=": "does_not_equal"}
_SELECT_OPS = {"=": "equals", "!=": "does_not_equal", "?": "is_empty", "!?": "is_not_empty"}
_CONTAINS_OPS = {
    "~": "contains", "!~": "does_not_contain", "?": "is_empty", "!?": "is_not_empty",
}
_DATE_OPS = {
    "=": "equals", "<": "before", ">": "after", "<=": "on_or_before", ">=": "on_or_after",
    "?": "is_empty", "!?": "is_not_empty",
}
_EMPTY_OPS = {"?": "is_empty", "!?": "is_not_empty"}

# property type -> (condition record, operator -> condition field)
CONDITIONS = {
    "title": (TextCondition, _TEXT_OPS),
    "rich_text": (TextCondition, _TEXT_OPS),
    "url": (TextCondition, _TEXT_OPS),
    "email": (TextCondition, _TEXT_OPS),
    "phone_number": (TextCondition, _TEXT_OPS),
    "number": (NumberCondition, _NUMBER_OPS),
    "checkbox": (CheckboxCondition, _CHECKBOX_OPS),
    "select": (SelectCondition, _SELECT_OPS),
    "status": (SelectCondition, _SELECT_OPS),
    "multi_select": (MultiSelectCondition, _CONTAINS_OPS),
    "date": (DateCondition, _DATE_OPS),
    "created_time": (DateCondition, _DATE_OPS),
    "last_edited_time": (DateCondition, _DATE_OPS),
    "people": (PeopleCondition, _CONTAINS_OPS),
    "created_by": (PeopleCondition, _CONTAINS_OPS),
    "last_edited_by": (PeopleCondition, _CONTAINS_OPS),
    "files": (FilesCondition, _EMPTY_OPS),
    "relation": (RelationCondition, _CONTAINS_OPS),
}

DATE_TYPES = {"date", "created_time", "last_edited_time"}

_RELATIVE_DATE = re.compile(r"^([+-])(\d+)([dw])$")
_ISO_DATE = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(?:T\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:\d{2})?)?$"
)
_TRUE_VALUES = {"true", "1", "yes", "y"}
_FALSE_VALUES = {"false", "0", "no", "n"}


def _property_type(schema: PropertySchema) -> str:
    # Legacy "file" columns filter as "files".
    return "files" if schema.type == "file" else schema.type


def find_property(database: Database, name: str) -> tuple[str, PropertySchema]:
    """Resolve a property name against the database schema.

    Exact matches win; otherwise the first case-insensitive match is used.

    Raises:
        FilterParseError: No property has that name.
    """
    if name in database.properties:
        return name, database.properties[name]
    folded = name.casefold()
    for prop_name, schema in database.properties.items():
        if prop_name.casefold() == folded:
            return prop_name, schema
    available = ", ".join(sorted(database.properties))
    raise FilterParseError(f"Unknown property {name!r}. Available: {available}")


def coerce_value(raw: str, property_type: str, today: Optional[date] = None) -> Union[str, int, float, bool]:
    """Convert a literal from the expression to the type a condition expects.

    Args:
        raw: The value as written.
        property_type: Notion property type the value is compared against.
        today: Reference date for relative dates (defaults to today).

    Raises:
        FilterParseError: The literal does not fit the property type.
    """
    if property_type == "number":
        try:
            number = float(raw)
        except ValueError:
            raise FilterParseError(f"Invalid number value {raw!r}") from None
        return int(number) if number.is_integer() and re.fullmatch(r"[+-]?\d+", raw) else number

    if property_type == "checkbox":
        lowered = raw.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise FilterParseError(f"Invalid checkbox value {raw!r} (use true/false or 1/0)")

    if property_type in DATE_TYPES:
        m = _RELATIVE_DATE.match(raw)
        if m:
            sign, amount, unit = m.groups()
            days = int(amount) * (7 if unit == "w" else 1)
            delta = timedelta(days=days if sign == "+" else -days)
            return ((today or date.today()) + delta).isoformat()
        if _ISO_DATE.match(raw):
            return raw
        raise FilterParseError(
            f"Invalid date value {raw!r} (use YYYY-MM-DD, an ISO date-time, or -7d / +2w)"
        )

    return raw


def _compile_atom(atom: FilterAtom, database: Database, today: Optional[date]) -> Filter:
    name, schema = find_property(database, atom.property)
    ptype = _property_type(schema)
    if ptype not in CONDITIONS:
        raise FilterParseError(f"Filtering on {ptype} property {name!r} is not supported")

    condition_cls, operators = CONDITIONS[ptype]
    if atom.operator not in operators:
        valid = " ".join(operators)
        raise FilterParseError(
            f"Operator {atom.operator!r} is not valid for {ptype} property {name!r} (valid: {valid})",
            atom.pos,
        )

    if atom.operator in UNARY_OPERATORS:
        operand: Union[str, int, float, bool] = True
    else:
        operand = coerce_value(atom.value, ptype, today)

    condition = condition_cls(**{operators[atom.operator]: operand})
    filter_cls = REGISTRY.lookup("filter", ptype)
    return filter_cls(property=name, condition=condition)


def compile_filter(node: FilterNode, database: Database, today: Optional[date] = None) -> Filter:
    """Compile a parsed filter against a database schema.

    Args:
        node: Result of ``parse_filter``.
        database: The database being queried (its property schema is used).
        today: Reference date for relative date values.

    Returns:
        A typed Filter ready for ``DatabasesQueryParameters.filter``.

    Raises:
        FilterParseError: Unknown property, operator not valid for the
            property type, or a value of the wrong type.
    """
    if isinstance(node, FilterAtom):
        return _compile_atom(node, database, today)
    children = [compile_filter(child, database, today) for child in node.children]
    if node.op == "&":
        return CompoundFilter(and_=children)
    return CompoundFilter(or_=children)


def build_filter(text: str, database: Database, today: Optional[date] = None) -> Filter:
    """Parse and compile a filter expression in one step."""
    return compile_filter(parse_filter(text), database, today)


# =============================================================================
# Sorts
# =============================================================================

_DIRECTIONS = {
    "asc": ASCENDING,
    "ascending": ASCENDING,
    "desc": DESCENDING,
    "descending": DESCENDING,
}
TIMESTAMPS = {"created_time", "last_edited_time"}


def parse_sorts(text: str, database: Database) -> list[Sort]:
    """Parse a sort expression such as ``Due desc, Status``.

    Names are resolved like filter properties. ``created_time`` and
    ``last_edited_time`` sort by the page timestamps unless the database has
    a property of that name. The direction defaults to ascending.

    Raises:
        FilterParseError: Unknown property or direction, or malformed input.
    """
    tokens = tokenize(text)
    sorts: list[Sort] = []
    i = 0
    while tokens[i].kind != "EOF":
        tok = tokens[i]
        if tok.kind not in ("WORD", "QUOTED"):
            raise FilterParseError(f"Expected property name at position {tok.pos}", tok.pos)
        i += 1

        direction = ASCENDING
        if tokens[i].kind == "WORD":
            word = tokens[i].text.lower()
            if word not in _DIRECTIONS:
                raise FilterParseError(
                    f"Invalid sort direction {tokens[i].text!r} (use asc or desc)", tokens[i].pos
                )
            direction = _DIRECTIONS[word]
            i += 1

        sorts.append(_make_sort(tok.text, direction, database))

        if tokens[i].kind == "COMMA":
            i += 1
        elif tokens[i].kind != "EOF":
            raise FilterParseError(f"Expected ',' at position {tokens[i].pos}", tokens[i].pos)
    return sorts


def _make_sort(name: str, direction: str, database: Database) -> Sort:
    if name.lower() in TIMESTAMPS and not any(
        prop.casefold() == name.casefold() for prop in database.properties
    ):
        return Sort(timestamp=name.lower(), direction=direction)
    prop_name, _ = find_property(database, name)
    return Sort(property=prop_name, direction=direction)
