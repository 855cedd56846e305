"""Tests for helpers: IDs, titles and pagination."""

import pytest

from notion_typed import (
    Database,
    DatabasesQueryParameters,
    DatabasesQueryResponse,
    Page,
    RichTextEquation,
    TitlePropertyValue,
    database_title,
    extract_uuid_from_url,
    iterate_paginated,
    normalize_uuid,
    page_title,
    plain_text,
    text,
)


class TestNormalizeUuid:
    """Tests for normalize_uuid function."""

    def test_with_dashes(self):
        uuid = "12345678-1234-1234-1234-123456789abc"
        assert normalize_uuid(uuid) == "12345678-1234-1234-1234-123456789abc"

    def test_without_dashes(self):
        uuid = "123456781234123412341234567890ab"
        assert normalize_uuid(uuid) == "12345678-1234-1234-1234-1234567890ab"

    def test_uppercase(self):
        uuid = "12345678-1234-1234-1234-123456789ABC"
        assert normalize_uuid(uuid) == "12345678-1234-1234-1234-123456789abc"

    def test_invalid_length(self):
        with pytest.raises(ValueError, match="Invalid UUID length"):
            normalize_uuid("12345")

    def test_invalid_characters(self):
        with pytest.raises(ValueError, match="Invalid UUID characters"):
            normalize_uuid("12345678-1234-1234-1234-12345678zzzz")


class TestExtractUuidFromUrl:
    """Tests for extract_uuid_from_url function."""

    def test_page_url_with_title(self):
        url = "https://www.notion.so/workspace/Tuscan-Kale-251d2b5f268c4de2afe9c71ff92ca95c"
        assert extract_uuid_from_url(url) == "251d2b5f-268c-4de2-afe9-c71ff92ca95c"

    def test_bare_dashed_uuid(self):
        url = "https://notion.so/251d2b5f-268c-4de2-afe9-c71ff92ca95c"
        assert extract_uuid_from_url(url) == "251d2b5f-268c-4de2-afe9-c71ff92ca95c"

    def test_query_string_ignored(self):
        url = "https://www.notion.so/251d2b5f268c4de2afe9c71ff92ca95c?v=abc"
        assert extract_uuid_from_url(url) == "251d2b5f-268c-4de2-afe9-c71ff92ca95c"

    def test_not_notion(self):
        assert extract_uuid_from_url("https://example.com/251d2b5f268c4de2afe9c71ff92ca95c") is None

    def test_no_uuid(self):
        assert extract_uuid_from_url("https://www.notion.so/workspace/About") is None


class TestTitles:
    """plain_text, page_title and database_title."""

    def test_plain_text_prefers_api_text(self):
        spans = [text("Hello "), RichTextEquation(expression="E=mc^2", plain_text="E = mc²")]
        assert plain_text(spans) == "Hello E = mc²"

    def test_plain_text_local_equation(self):
        assert plain_text([RichTextEquation(expression="x^2")]) == "x^2"

    def test_page_title(self):
        page = Page(id="p1", properties={"Name": TitlePropertyValue(title=[text("Tuscan Kale")])})
        assert page_title(page) == "Tuscan Kale"

    def test_page_title_default(self):
        assert page_title(Page(id="p1")) == "Untitled"
        empty = Page(id="p1", properties={"Name": TitlePropertyValue()})
        assert page_title(empty, default="-") == "-"

    def test_database_title(self):
        assert database_title(Database(id="db1", title=[text("Grocery List")])) == "Grocery List"
        assert database_title(Database(id="db1")) == "Untitled"


class TestIteratePaginated:
    """iterate_paginated follows next_cursor until has_more is false."""

    def test_follows_cursor(self):
        pages = {
            "": DatabasesQueryResponse(results=[Page(id="p1"), Page(id="p2")], has_more=True, next_cursor="c2"),
            "c2": DatabasesQueryResponse(results=[Page(id="p3")], has_more=False),
        }
        seen = []

        def query(params):
            seen.append(params)
            return pages[params.start_cursor]

        params = DatabasesQueryParameters(database_id="db1", page_size=2)
        ids = [page.id for page in iterate_paginated(query, params)]
        assert ids == ["p1", "p2", "p3"]
        assert [p.start_cursor for p in seen] == ["", "c2"]
        assert all(p.page_size == 2 and p.database_id == "db1" for p in seen)

    def test_stops_without_cursor(self):
        calls = []

        def query(params):
            calls.append(params)
            return DatabasesQueryResponse(results=[Page(id="p1")], has_more=True, next_cursor=None)

        assert len(list(iterate_paginated(query, DatabasesQueryParameters(database_id="db1")))) == 1
        assert len(calls) == 1
