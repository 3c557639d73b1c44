"""Block structure: headings, code, quotes, lists, rules, definitions."""

import pytest

from hojas import (
    BlockQuote,
    CodeBlock,
    DefinitionList,
    Emphasis,
    Heading,
    HorizontalRule,
    List,
    Paragraph,
    SoftBreak,
    Text,
    parse,
)


def _texts(nodes) -> list[str]:  # type: ignore[no-untyped-def]
    return [n.content for n in nodes if isinstance(n, Text)]


class TestHeadings:
    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_atx_levels(self, level: int) -> None:
        doc = parse("#" * level + " Title")

        heading = doc.children[0]
        assert isinstance(heading, Heading)
        assert heading.level == level
        assert _texts(heading.children) == ["Title"]

    def test_seven_hashes_is_paragraph(self) -> None:
        doc = parse("####### nope")

        assert isinstance(doc.children[0], Paragraph)

    def test_hash_without_space_is_paragraph(self) -> None:
        doc = parse("#hashtag")

        assert isinstance(doc.children[0], Paragraph)
        assert _texts(doc.children[0].children) == ["#hashtag"]

    def test_closing_hashes_are_dropped(self) -> None:
        doc = parse("## Title ##")

        assert _texts(doc.children[0].children) == ["Title"]

    def test_heading_inline_content(self) -> None:
        doc = parse("# Hello *world*")

        children = doc.children[0].children
        assert isinstance(children[1], Emphasis)

    def test_heading_interrupts_paragraph(self) -> None:
        doc = parse("text\n# Heading")

        assert [type(b) for b in doc.children] == [Paragraph, Heading]


class TestParagraphs:
    def test_lines_join_with_soft_breaks(self) -> None:
        doc = parse("one\ntwo")

        para = doc.children[0]
        assert isinstance(para.children[1], SoftBreak)
        assert _texts(para.children) == ["one", "two"]

    def test_blank_line_separates_paragraphs(self) -> None:
        doc = parse("one\n\ntwo")

        assert len(doc.children) == 2

    def test_indented_line_continues_paragraph(self) -> None:
        doc = parse("one\n    two")

        assert len(doc.children) == 1
        assert _texts(doc.children[0].children) == ["one", "two"]

    def test_ordered_item_not_at_one_does_not_interrupt(self) -> None:
        doc = parse("The year\n2. was good")

        assert len(doc.children) == 1
        assert isinstance(doc.children[0], Paragraph)

    def test_empty_document(self) -> None:
        doc = parse("")

        assert doc.children == ()
        assert doc.diagnostics == ()


class TestCodeBlocks:
    def test_fenced_code_with_language(self) -> None:
        doc = parse("```python\nprint('hi')\n```")

        block = doc.children[0]
        assert isinstance(block, CodeBlock)
        assert block.fenced
        assert block.language == "python"
        assert block.code == "print('hi')"

    def test_info_string_keeps_first_word(self) -> None:
        doc = parse("~~~ rust extra words\nfn main() {}\n~~~")

        assert doc.children[0].language == "rust"

    def test_fence_content_is_not_parsed(self) -> None:
        doc = parse("```\n# not a heading\n*not emphasis*\n```")

        assert doc.children[0].code == "# not a heading\n*not emphasis*"

    def test_fence_indent_is_removed_from_content(self) -> None:
        doc = parse("  ```\n    indented\n  code\n  ```")

        assert doc.children[0].code == "  indented\ncode"

    def test_indented_code(self) -> None:
        doc = parse("    line one\n\n    line two")

        block = doc.children[0]
        assert not block.fenced
        assert block.language is None
        assert block.code == "line one\n\nline two"

    def test_indented_code_cannot_interrupt_paragraph(self) -> None:
        doc = parse("text\n    more")

        assert [type(b) for b in doc.children] == [Paragraph]


class TestHorizontalRules:
    @pytest.mark.parametrize("source", ["---", "***", "___", "- - -", " ** * **"])
    def test_rule_forms(self, source: str) -> None:
        doc = parse(source)

        assert isinstance(doc.children[0], HorizontalRule)

    def test_rule_wins_over_list_item(self) -> None:
        doc = parse("* * *")

        assert isinstance(doc.children[0], HorizontalRule)


class TestBlockQuotes:
    def test_simple_quote(self) -> None:
        doc = parse("> quoted")

        quote = doc.children[0]
        assert isinstance(quote, BlockQuote)
        assert _texts(quote.children[0].children) == ["quoted"]

    def test_lazy_continuation(self) -> None:
        doc = parse("> first\nsecond")

        quote = doc.children[0]
        assert len(doc.children) == 1
        assert _texts(quote.children[0].children) == ["first", "second"]

    def test_nested_quote(self) -> None:
        doc = parse("> outer\n>\n> > inner")

        outer = doc.children[0]
        inner = outer.children[1]
        assert isinstance(inner, BlockQuote)
        assert _texts(inner.children[0].children) == ["inner"]

    def test_quote_holds_blocks(self) -> None:
        doc = parse("> # Title\n> - item\n> ```\n> code\n> ```")

        kinds = [type(b) for b in doc.children[0].children]
        assert kinds == [Heading, List, CodeBlock]

    def test_blank_line_ends_quote(self) -> None:
        doc = parse("> a\n\nb")

        assert [type(b) for b in doc.children] == [BlockQuote, Paragraph]


class TestLists:
    def test_unordered_tight_list(self) -> None:
        doc = parse("- one\n- two\n- three")

        lst = doc.children[0]
        assert isinstance(lst, List)
        assert not lst.ordered
        assert lst.tight
        assert [_texts(item.children) for item in lst.items] == [["one"], ["two"], ["three"]]

    def test_ordered_list_start(self) -> None:
        doc = parse("3. three\n4. four")

        lst = doc.children[0]
        assert lst.ordered
        assert lst.start == 3
        assert len(lst.items) == 2

    def test_blank_between_items_makes_list_loose(self) -> None:
        doc = parse("- one\n\n- two")

        lst = doc.children[0]
        assert not lst.tight
        assert all(isinstance(item.children[0], Paragraph) for item in lst.items)

    def test_item_with_two_paragraphs_is_loose(self) -> None:
        doc = parse("- one\n\n  more\n- two")

        lst = doc.children[0]
        assert not lst.tight
        assert len(lst.items[0].children) == 2

    def test_changing_bullet_starts_new_list(self) -> None:
        doc = parse("- a\n- b\n+ c")

        first, second = doc.children
        assert len(first.items) == 2
        assert len(second.items) == 1

    def test_changing_delimiter_starts_new_list(self) -> None:
        doc = parse("1. a\n2) b")

        assert len(doc.children) == 2

    def test_nested_list(self) -> None:
        doc = parse("- outer\n  - inner\n- next")

        lst = doc.children[0]
        assert len(lst.items) == 2
        nested = lst.items[0].children[1]
        assert isinstance(nested, List)
        assert _texts(nested.items[0].children) == ["inner"]

    def test_lazy_item_continuation(self) -> None:
        doc = parse("- item\ncontinued")

        item = doc.children[0].items[0]
        assert _texts(item.children) == ["item", "continued"]

    def test_code_block_inside_item(self) -> None:
        doc = parse("1. step\n\n   ```sh\n   make\n   ```")

        item = doc.children[0].items[0]
        assert isinstance(item.children[1], CodeBlock)
        assert item.children[1].code == "make"

    def test_empty_item(self) -> None:
        doc = parse("-\n- b")

        lst = doc.children[0]
        assert lst.items[0].children == ()
        assert len(lst.items) == 2


class TestTaskLists:
    def test_checked_and_unchecked(self) -> None:
        doc = parse("- [ ] todo\n- [x] done\n- [X] also done\n- plain")

        checked = [item.checked for item in doc.children[0].items]
        assert checked == [False, True, True, None]

    def test_marker_text_is_removed(self) -> None:
        doc = parse("- [x] ship it")

        assert _texts(doc.children[0].items[0].children) == ["ship it"]

    def test_marker_needs_following_space(self) -> None:
        doc = parse("- [x]nope")

        assert doc.children[0].items[0].checked is None


class TestDefinitionLists:
    def test_term_and_definitions(self) -> None:
        doc = parse("Apple\n: A fruit\n: A company")

        dl = doc.children[0]
        assert isinstance(dl, DefinitionList)
        item = dl.items[0]
        assert _texts(item.term) == ["Apple"]
        assert len(item.definitions) == 2
        assert _texts(item.definitions[1].children[0].children) == ["A company"]

    def test_several_terms(self) -> None:
        doc = parse("Apple\n: fruit\nCarrot\n: vegetable")

        dl = doc.children[0]
        assert [_texts(item.term) for item in dl.items] == [["Apple"], ["Carrot"]]

    def test_definition_continuation_lines(self) -> None:
        doc = parse("Term\n: first line\n  second line")

        definition = doc.children[0].items[0].definitions[0]
        assert _texts(definition.children[0].children) == ["first line", "second line"]

    def test_definition_holds_blocks(self) -> None:
        doc = parse("Term\n: para\n\n  - item")

        definition = doc.children[0].items[0].definitions[0]
        assert [type(b) for b in definition.children] == [Paragraph, List]

    def test_colon_without_term_is_text(self) -> None:
        doc = parse(": lonely")

        assert isinstance(doc.children[0], Paragraph)
