"""Public API surface: parse, Markdown and package exports."""

import pytest

import hojas
from hojas import (
    Document,
    FeatureRegistry,
    Heading,
    Markdown,
    ParseConfig,
    Strikethrough,
    get_parse_config,
    parse,
    parse_blocks,
    parse_inline,
)


class TestExports:
    def test_version(self) -> None:
        assert hojas.__version__ == "0.1.0"

    @pytest.mark.parametrize("name", hojas.__all__)
    def test_every_export_exists(self, name: str) -> None:
        assert hasattr(hojas, name)


class TestParse:
    def test_returns_document(self) -> None:
        doc = parse("# Hi")

        assert isinstance(doc, Document)
        assert isinstance(doc.children[0], Heading)

    def test_features_per_call(self) -> None:
        doc = parse("~~x~~", features=["strikethrough"])

        assert isinstance(doc.children[0].children[0], Strikethrough)

    def test_features_per_call_do_not_leak(self) -> None:
        parse("~~x~~", features=[])

        assert get_parse_config() == ParseConfig()

    def test_source_file_in_diagnostics(self) -> None:
        doc = parse("```\nopen", source_file="a.md")

        assert str(doc.diagnostics[0]).startswith("a.md:1:1: unterminated-fence")

    def test_parse_is_deterministic(self) -> None:
        source = "# A\n\n- [x] b\n\n[c]: /d\n\n[c]"

        assert parse(source) == parse(source)

    def test_trees_are_immutable(self) -> None:
        doc = parse("text")

        with pytest.raises(AttributeError):
            doc.children = ()  # type: ignore[misc]


class TestMarkdown:
    def test_call_and_parse_agree(self) -> None:
        md = Markdown(features=["heading"])

        assert md("# Hi") == md.parse("# Hi")

    def test_config_property(self) -> None:
        md = Markdown(features=["table"], max_nesting_depth=10)

        assert md.config.features == FeatureRegistry.from_names(["table"])
        assert md.config.max_nesting_depth == 10

    def test_parse_many(self) -> None:
        docs = Markdown().parse_many(["# One", "two", ""])

        assert len(docs) == 3
        assert docs[0].headings[0].id == "one"
        assert docs[2].children == ()

    def test_parse_many_keeps_documents_separate(self) -> None:
        docs = Markdown().parse_many(["[a]: /x", "[a]"])

        assert docs[1].children[0].children[0].content == "[a]"

    def test_source_file(self) -> None:
        doc = Markdown().parse("x", source_file="notes.md")

        assert doc.location.source_file == "notes.md"
        assert doc.children[0].location.source_file == "notes.md"


class TestLowLevel:
    def test_parse_blocks_leaves_inline_spans(self) -> None:
        from hojas.nodes import InlineSpan

        blocks = parse_blocks("para *em*")

        assert isinstance(blocks[0].children[0], InlineSpan)
        assert blocks[0].children[0].raw == "para *em*"

    def test_parse_inline_with_references(self) -> None:
        nodes = parse_inline("[a]", link_refs={"a": ("/x", None)})

        assert nodes[0].url == "/x"
