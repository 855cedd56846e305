"""Tests for the filter and sort expression language."""

from datetime import date

import pytest

from notion_typed import (
    CompoundFilter,
    Database,
    FilterParseError,
    SelectFilter,
    Sort,
    build_filter,
    compile_filter,
    parse_filter,
    parse_sorts,
)
from notion_typed.dsl import FilterAtom, FilterCompound, coerce_value, tokenize
from notion_typed.properties import (
    CheckboxProperty,
    CreatedTimeProperty,
    DateProperty,
    FileProperty,
    FormulaProperty,
    MultiSelectProperty,
    NumberProperty,
    PeopleProperty,
    RichTextProperty,
    SelectProperty,
    StatusProperty,
    TitleProperty,
)

SAMPLE_DB = Database(
    id="db-1",
    properties={
        "Title": TitleProperty(id="title"),
        "Status": SelectProperty(),
        "Stage": StatusProperty(),
        "Due": DateProperty(),
        "Done": CheckboxProperty(),
        "Priority": NumberProperty(),
        "Tags": MultiSelectProperty(),
        "Notes": RichTextProperty(),
        "Last Contact": DateProperty(),
        "Owner": PeopleProperty(),
        "Attachments": FileProperty(),
        "Created": CreatedTimeProperty(),
        "Total": FormulaProperty(expression="prop(\"Priority\") * 2"),
    },
)

TODAY = date(2024, 1, 20)


def _wire(expression):
    return build_filter(expression, SAMPLE_DB, today=TODAY).to_wire()


class TestTokenizer:
    """Tests for tokenize."""

    def test_simple_equality(self):
        kinds = [t.kind for t in tokenize("Status = Done")]
        assert kinds == ["WORD", "OP", "WORD", "EOF"]

    def test_quoted_property(self):
        tokens = tokenize('"Last Contact" >= 2026-02-01')
        assert (tokens[0].kind, tokens[0].text) == ("QUOTED", "Last Contact")
        assert (tokens[1].kind, tokens[1].text) == ("OP", ">=")
        assert tokens[2].text == "2026-02-01"

    def test_and_or_parentheses(self):
        kinds = [t.kind for t in tokenize("(A = 1 | B = 2) & C = 3")]
        assert kinds == ["LPAREN", "WORD", "OP", "WORD", "OR",
                         "WORD", "OP", "WORD", "RPAREN", "AND",
                         "WORD", "OP", "WORD", "EOF"]

    def test_operators_without_spaces(self):
        texts = [t.text for t in tokenize("Priority>=3")]
        assert texts == ["Priority", ">=", "3", ""]

    def test_unary_operators(self):
        ops = [t.text for t in tokenize("Title ? & Notes !?") if t.kind == "OP"]
        assert ops == ["?", "!?"]

    def test_all_comparison_ops(self):
        for op in ("=", "!=", "~", "!~", "<", ">", "<=", ">="):
            assert tokenize(f"X {op} Y")[1].text == op

    def test_escaped_quote(self):
        tokens = tokenize(r'Title = "say \"hello\""')
        assert tokens[2].text == 'say "hello"'

    def test_positions(self):
        tokens = tokenize("A = 1")
        assert [t.pos for t in tokens] == [0, 2, 4, 5]

    def test_unterminated_quote(self):
        with pytest.raises(FilterParseError, match="Unterminated") as exc_info:
            tokenize('Status = "In Progress')
        assert exc_info.value.position == 9

    def test_unexpected_character(self):
        with pytest.raises(FilterParseError, match="Unexpected character '!'"):
            tokenize("Status ! Done")

    def test_empty(self):
        assert [t.kind for t in tokenize("   ")] == ["EOF"]


class TestParseFilter:
    """Tests for parse_filter."""

    def test_simple_atom(self):
        node = parse_filter("Status = Done")
        assert node == FilterAtom("Status", "=", "Done", 0)

    def test_and_chain_is_flat(self):
        node = parse_filter("A = 1 & B = 2 & C = 3")
        assert isinstance(node, FilterCompound)
        assert node.op == "&"
        assert len(node.children) == 3

    def test_and_binds_tighter_than_or(self):
        node = parse_filter("A = 1 | B = 2 & C = 3")
        assert node.op == "|"
        assert isinstance(node.children[0], FilterAtom)
        assert node.children[1].op == "&"

    def test_parentheses_override_precedence(self):
        node = parse_filter("(A = 1 | B = 2) & C = 3")
        assert node.op == "&"
        assert node.children[0].op == "|"

    def test_unary(self):
        node = parse_filter("Title ?")
        assert node.operator == "?"
        assert node.value == ""

    def test_missing_operator(self):
        with pytest.raises(FilterParseError, match="Expected operator after 'Status'"):
            parse_filter("Status Done")

    def test_missing_value(self):
        with pytest.raises(FilterParseError, match="Expected value after '='"):
            parse_filter("Status = ")

    def test_missing_paren(self):
        with pytest.raises(FilterParseError, match=r"Expected '\)'"):
            parse_filter("(A = 1 | B = 2")

    def test_missing_property(self):
        with pytest.raises(FilterParseError, match="Expected property name"):
            parse_filter("&")

    def test_trailing_tokens(self):
        with pytest.raises(FilterParseError, match="end of filter"):
            parse_filter("A = 1 )")


class TestCompileFilter:
    """Tests for compile_filter against a typed database schema."""

    def test_text_contains(self):
        assert _wire("Title ~ bug") == {"property": "Title", "title": {"contains": "bug"}}

    def test_select_equals(self):
        flt = build_filter("Status = Done", SAMPLE_DB)
        assert isinstance(flt, SelectFilter)
        assert flt.to_wire() == {"property": "Status", "select": {"equals": "Done"}}

    def test_status_equals(self):
        assert _wire('Stage = "In progress"') == {"property": "Stage", "status": {"equals": "In progress"}}

    def test_date_operators(self):
        assert _wire("Due < 2024-01-15") == {"property": "Due", "date": {"before": "2024-01-15"}}
        assert _wire("Due >= 2024-01-15") == {"property": "Due", "date": {"on_or_after": "2024-01-15"}}

    def test_relative_date(self):
        assert _wire('"Last Contact" >= -7d') == {
            "property": "Last Contact",
            "date": {"on_or_after": "2024-01-13"},
        }
        assert _wire("Due <= +2w") == {"property": "Due", "date": {"on_or_before": "2024-02-03"}}

    def test_number(self):
        assert _wire("Priority > 3") == {"property": "Priority", "number": {"greater_than": 3}}
        assert _wire("Priority = 3.5") == {"property": "Priority", "number": {"equals": 3.5}}

    def test_checkbox(self):
        assert _wire("Done = 1") == {"property": "Done", "checkbox": {"equals": True}}
        assert _wire("Done = false") == {"property": "Done", "checkbox": {"equals": False}}

    def test_multi_select_and_people(self):
        assert _wire("Tags ~ urgent") == {"property": "Tags", "multi_select": {"contains": "urgent"}}
        assert _wire("Owner !~ u1") == {"property": "Owner", "people": {"does_not_contain": "u1"}}

    def test_is_empty(self):
        assert _wire("Notes ?") == {"property": "Notes", "rich_text": {"is_empty": True}}
        assert _wire("Notes !?") == {"property": "Notes", "rich_text": {"is_not_empty": True}}

    def test_legacy_files_column(self):
        assert _wire("Attachments ?") == {"property": "Attachments", "files": {"is_empty": True}}

    def test_created_time(self):
        assert _wire("Created > 2024-01-01") == {"property": "Created", "created_time": {"after": "2024-01-01"}}

    def test_and_or(self):
        assert _wire("Status = Done & Due < 2024-01-15") == {
            "and": [
                {"property": "Status", "select": {"equals": "Done"}},
                {"property": "Due", "date": {"before": "2024-01-15"}},
            ]
        }
        flt = build_filter("Status = Done | Status = Todo", SAMPLE_DB)
        assert isinstance(flt, CompoundFilter)
        assert len(flt.or_) == 2

    def test_case_insensitive_property(self):
        assert _wire("status = Done")["property"] == "Status"
        assert _wire('"last contact" ?')["property"] == "Last Contact"

    def test_unknown_property(self):
        with pytest.raises(FilterParseError, match="Unknown property 'Unknown'"):
            compile_filter(parse_filter("Unknown = foo"), SAMPLE_DB)

    def test_operator_not_valid_for_type(self):
        with pytest.raises(FilterParseError, match="not valid for select property 'Status'"):
            compile_filter(parse_filter("Status ~ Done"), SAMPLE_DB)

    def test_formula_not_supported(self):
        with pytest.raises(FilterParseError, match="not supported"):
            compile_filter(parse_filter("Total = 2"), SAMPLE_DB)


class TestCoerceValue:
    """Tests for coerce_value."""

    def test_bad_checkbox(self):
        with pytest.raises(FilterParseError, match="Invalid checkbox"):
            coerce_value("maybe", "checkbox")

    def test_bad_number(self):
        with pytest.raises(FilterParseError, match="Invalid number"):
            coerce_value("abc", "number")

    def test_integer_stays_integer(self):
        assert coerce_value("42", "number") == 42
        assert isinstance(coerce_value("42", "number"), int)
        assert coerce_value("-1.25", "number") == -1.25

    def test_iso_dates(self):
        assert coerce_value("2026-01-25", "date") == "2026-01-25"
        assert coerce_value("2026-01-25T14:30", "date") == "2026-01-25T14:30"
        assert coerce_value("2026-01-25T14:30:00Z", "last_edited_time") == "2026-01-25T14:30:00Z"

    def test_relative_date(self):
        assert coerce_value("-14d", "date", today=TODAY) == "2024-01-06"

    def test_relative_date_not_applied_to_text(self):
        assert coerce_value("-14d", "rich_text") == "-14d"

    @pytest.mark.parametrize("raw", ["yesterday", "not-a-date", "14d"])
    def test_invalid_date(self, raw):
        with pytest.raises(FilterParseError, match="Invalid date value"):
            coerce_value(raw, "created_time")


class TestParseSorts:
    """Tests for parse_sorts."""

    def test_single(self):
        assert parse_sorts("Due desc", SAMPLE_DB) == [Sort(property="Due", direction="descending")]

    def test_default_direction(self):
        assert parse_sorts("Due", SAMPLE_DB) == [Sort(property="Due", direction="ascending")]

    def test_multiple(self):
        sorts = parse_sorts("Due desc, Status asc", SAMPLE_DB)
        assert [s.property for s in sorts] == ["Due", "Status"]
        assert [s.direction for s in sorts] == ["descending", "ascending"]

    def test_quoted_and_case_insensitive(self):
        assert parse_sorts('"last contact" DESC', SAMPLE_DB) == [
            Sort(property="Last Contact", direction="descending")
        ]

    def test_timestamp(self):
        sorts = parse_sorts("last_edited_time desc", SAMPLE_DB)
        assert sorts == [Sort(timestamp="last_edited_time", direction="descending")]
        assert sorts[0].to_wire() == {"timestamp": "last_edited_time", "direction": "descending"}

    def test_empty(self):
        assert parse_sorts("", SAMPLE_DB) == []

    def test_unknown_property(self):
        with pytest.raises(FilterParseError, match="Unknown property"):
            parse_sorts("Unknown desc", SAMPLE_DB)

    def test_invalid_direction(self):
        with pytest.raises(FilterParseError, match="Invalid sort direction"):
            parse_sorts("Due sideways", SAMPLE_DB)

    def test_missing_comma(self):
        with pytest.raises(FilterParseError, match="Expected ','"):
            parse_sorts("Due desc Status", SAMPLE_DB)
