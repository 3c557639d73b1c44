"""Heading ids and the document heading table."""

from hojas import FeatureRegistry, parse


def _ids(source: str) -> list[str | None]:
    return [h.id for h in parse(source).headings]


class TestSlugs:
    def test_slug_from_text(self) -> None:
        assert _ids("# Hello World") == ["hello-world"]

    def test_slug_ignores_markup(self) -> None:
        assert _ids("## Using *the* `parse()` API") == ["using-the-parse-api"]

    def test_duplicates_get_numeric_suffixes(self) -> None:
        assert _ids("# Intro\n# Intro\n# Intro") == ["intro", "intro-1", "intro-2"]

    def test_empty_slug_falls_back(self) -> None:
        assert _ids("# !!!\n# ???") == ["section", "section-1"]


class TestExplicitIds:
    def test_explicit_id(self) -> None:
        doc = parse("# Install {#setup}")

        heading = doc.children[0]
        assert heading.id == "setup"
        assert heading.explicit_id == "setup"
        assert heading.children[0].content == "Install"

    def test_explicit_ids_are_reserved_first(self) -> None:
        assert _ids("# Setup\n\n# Other {#setup}") == ["setup-1", "setup"]

    def test_repeated_explicit_id_gets_suffix(self) -> None:
        assert _ids("# A {#x}\n# B {#x}") == ["x", "x-1"]

    def test_id_must_follow_whitespace(self) -> None:
        doc = parse("# A{#x}")

        assert doc.children[0].explicit_id is None
        assert doc.children[0].children[0].content == "A{#x}"

    def test_id_must_start_with_letter(self) -> None:
        assert parse("# A {#1x}").children[0].explicit_id is None


class TestHeadingTable:
    def test_headings_in_document_order(self) -> None:
        doc = parse("# One\n\n> ## Two\n\n- ### Three")

        assert [h.level for h in doc.headings] == [1, 2, 3]
        assert [h.id for h in doc.headings] == ["one", "two", "three"]

    def test_lookup_by_id(self) -> None:
        doc = parse("# First\n\n## Second")

        assert doc.heading("second").level == 2
        assert doc.heading("third") is None
        assert list(doc.heading_table()) == ["first", "second"]

    def test_ids_off(self) -> None:
        doc = parse("# Title {#t}", features=FeatureRegistry.all().disable("heading-id"))

        heading = doc.children[0]
        assert heading.id is None
        assert heading.explicit_id is None
        assert heading.children[0].content == "Title {#t}"
        assert doc.heading_table() == {}
