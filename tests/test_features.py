"""Feature registry and feature gating.

Disabled syntax must stay literal text: it is never an error and never
produces the node it would produce when enabled.
"""

import pytest

from hojas import (
    CodeBlock,
    ConfigurationError,
    Emphasis,
    Feature,
    FeatureRegistry,
    Heading,
    Markdown,
    Paragraph,
    Table,
    Text,
    UnknownFeatureError,
    parse,
)
from hojas.visitor import BaseVisitor


class _NodeTypes(BaseVisitor[None]):
    def __init__(self) -> None:
        self.seen: set[str] = set()

    def visit_default(self, node) -> None:  # type: ignore[no-untyped-def]
        self.seen.add(type(node).__name__)


def _node_types(doc) -> set[str]:  # type: ignore[no-untyped-def]
    visitor = _NodeTypes()
    visitor.visit(doc)
    return visitor.seen


class TestFeatureRegistry:
    def test_default_enables_everything(self) -> None:
        registry = FeatureRegistry.all()

        assert all(registry.is_enabled(f) for f in Feature)

    def test_none_enables_nothing(self) -> None:
        registry = FeatureRegistry.none()

        assert not any(registry.is_enabled(f) for f in Feature)

    def test_from_names_accepts_tags_and_members(self) -> None:
        registry = FeatureRegistry.from_names(["table", Feature.EMOJI])

        assert registry.is_enabled("table")
        assert registry.is_enabled(Feature.EMOJI)
        assert not registry.is_enabled("heading")

    def test_unknown_tag_fails_fast(self) -> None:
        with pytest.raises(UnknownFeatureError) as exc_info:
            FeatureRegistry.from_names(["table", "tabel"])

        assert exc_info.value.names == ("tabel",)
        assert "tabel" in str(exc_info.value)

    def test_unknown_feature_error_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            FeatureRegistry.from_names(["nope"])

    def test_enable_and_disable_return_new_registries(self) -> None:
        base = FeatureRegistry.from_names(["heading"])
        more = base.enable("table")
        less = more.disable(Feature.HEADING)

        assert not base.is_enabled("table")
        assert more.is_enabled("table")
        assert not less.is_enabled("heading")
        assert less.is_enabled("table")

    def test_contains(self) -> None:
        registry = FeatureRegistry.from_names(["bold"])

        assert "bold" in registry
        assert Feature.ITALIC not in registry

    def test_names_are_sorted_tags(self) -> None:
        assert FeatureRegistry.from_names(["table", "bold"]).names() == ["bold", "table"]

    def test_registry_is_hashable_value(self) -> None:
        a = FeatureRegistry.from_names(["bold", "table"])
        b = FeatureRegistry.from_names(["table", "bold"])

        assert a == b
        assert hash(a) == hash(b)


class TestDisabledFeaturesStayLiteral:
    @pytest.mark.parametrize(
        ("feature", "source", "forbidden"),
        [
            ("heading", "# Title", "Heading"),
            ("bold", "**strong**", "Emphasis"),
            ("italic", "*soft*", "Emphasis"),
            ("blockquote", "> quote", "BlockQuote"),
            ("ordered-list", "1. one", "List"),
            ("unordered-list", "- one", "List"),
            ("code", "`code`", "CodeSpan"),
            ("horizontal-rule", "***", "HorizontalRule"),
            ("link", "[a](/b)", "Link"),
            ("image", "![a](b.png)", "Image"),
            ("table", "| a |\n| - |\n| 1 |", "Table"),
            ("fenced-code-block", "```\ncode\n```", "CodeBlock"),
            ("footnote", "a[^1]\n\n[^1]: note", "FootnoteReference"),
            ("definition-list", "Term\n: meaning", "DefinitionList"),
            ("strikethrough", "~~gone~~", "Strikethrough"),
            ("task-list", "- [x] done", "checked"),
            ("emoji", ":rocket:", "Emoji"),
            ("highlight", "==mark==", "Highlight"),
            ("subscript", "H~2~O", "Subscript"),
            ("superscript", "x^2^", "Superscript"),
        ],
    )
    def test_feature_off(self, feature: str, source: str, forbidden: str) -> None:
        enabled = FeatureRegistry.all().disable(feature)
        doc = parse(source, features=enabled)

        if forbidden == "checked":
            assert doc.children[0].items[0].checked is None
        else:
            assert forbidden not in _node_types(doc)
        assert doc.diagnostics == ()

    def test_bold_syntax_with_only_italic_is_literal(self) -> None:
        doc = parse("**bold**", features=["italic"])

        para = doc.children[0]
        assert para.children == (Text(location=para.children[0].location, content="**bold**"),)

    def test_italic_syntax_with_only_bold_is_literal(self) -> None:
        doc = parse("*bold*", features=["bold"])

        assert doc.children[0].children[0].content == "*bold*"

    def test_asterisk_emphasis_is_literal_without_bold(self) -> None:
        doc = parse("*bold*", features=[f for f in Feature if f != Feature.BOLD])

        para = doc.children[0]
        assert len(para.children) == 1
        assert isinstance(para.children[0], Text)
        assert para.children[0].content == "*bold*"

    @pytest.mark.parametrize("source", ["***x***", "___x___", "__x__"])
    def test_long_runs_are_literal_without_bold(self, source: str) -> None:
        doc = parse(source, features=FeatureRegistry.all().disable("bold"))

        assert doc.children[0].children[0].content == source
        assert "Emphasis" not in _node_types(doc)

    def test_underscore_italic_survives_without_bold(self) -> None:
        doc = parse("_soft_", features=FeatureRegistry.all().disable("bold"))

        node = doc.children[0].children[0]
        assert isinstance(node, Emphasis)
        assert not node.strong

    def test_double_asterisk_bold_survives_without_italic(self) -> None:
        doc = parse("**strong**", features=FeatureRegistry.all().disable("italic"))

        node = doc.children[0].children[0]
        assert isinstance(node, Emphasis)
        assert node.strong

    def test_heading_text_kept_when_heading_off(self) -> None:
        doc = parse("## Title", features=[])

        assert isinstance(doc.children[0], Paragraph)
        assert doc.children[0].children[0].content == "## Title"

    def test_no_features_gives_only_paragraphs(self) -> None:
        source = "# h\n\n> q\n\n- l\n\n```\nc\n```\n\n| a |\n| - |"
        doc = parse(source, features=FeatureRegistry.none())

        assert {type(b) for b in doc.children} == {Paragraph}
        assert _node_types(doc) <= {"Document", "Paragraph", "Text", "SoftBreak"}

    def test_code_off_keeps_indented_lines_as_text(self) -> None:
        doc = parse("    indented", features=FeatureRegistry.all().disable("code"))

        assert not isinstance(doc.children[0], CodeBlock)

    def test_fenced_code_off_keeps_other_features(self) -> None:
        doc = parse(
            "# Title\n\n```\ncode\n```",
            features=FeatureRegistry.all().disable("fenced-code-block"),
        )

        assert isinstance(doc.children[0], Heading)
        assert "CodeBlock" not in _node_types(doc)

    def test_table_off_leaves_pipes_in_text(self) -> None:
        md = Markdown(features=FeatureRegistry.all().disable("table"))
        doc = md.parse("| a | b |\n|---|---|")

        assert not isinstance(doc.children[0], Table)
        assert "| a | b |" in doc.children[0].children[0].content
