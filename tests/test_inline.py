"""Inline parsing: code spans, links, images, escapes, breaks, emoji."""

import pytest

from hojas import (
    CodeSpan,
    DiagnosticCode,
    Emoji,
    Emphasis,
    Highlight,
    Image,
    LineBreak,
    Link,
    Markdown,
    SoftBreak,
    Strikethrough,
    Subscript,
    Superscript,
    Text,
    parse,
    parse_inline,
)


def _inlines(source: str):  # type: ignore[no-untyped-def]
    return parse(source).children[0].children


class TestText:
    def test_plain_text_is_one_node(self) -> None:
        nodes = parse_inline("just words here")

        assert len(nodes) == 1
        assert nodes[0].content == "just words here"

    def test_adjacent_text_is_merged(self) -> None:
        nodes = _inlines("a \\* b [c")

        assert len(nodes) == 1
        assert nodes[0].content == "a * b [c"

    @pytest.mark.parametrize("char", list("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"))
    def test_backslash_escapes_ascii_punctuation(self, char: str) -> None:
        nodes = _inlines(f"x\\{char}y")

        assert nodes[0].content == f"x{char}y"

    def test_backslash_before_letter_is_literal(self) -> None:
        assert _inlines("a\\b")[0].content == "a\\b"

    @pytest.mark.parametrize(
        ("source", "expected"),
        [("&amp;", "&"), ("&copy;", "©"), ("&#35;", "#"), ("&#x41;", "A"), ("&bogus;", "&bogus;")],
    )
    def test_entities(self, source: str, expected: str) -> None:
        assert _inlines(source)[0].content == expected


class TestBreaks:
    def test_soft_break(self) -> None:
        nodes = _inlines("a\nb")

        assert isinstance(nodes[1], SoftBreak)

    def test_two_trailing_spaces_make_hard_break(self) -> None:
        nodes = _inlines("a  \nb")

        assert isinstance(nodes[1], LineBreak)
        assert nodes[0].content == "a"

    def test_backslash_newline_makes_hard_break(self) -> None:
        nodes = _inlines("a\\\nb")

        assert isinstance(nodes[1], LineBreak)


class TestCodeSpans:
    def test_simple(self) -> None:
        nodes = _inlines("use `print()` here")

        assert isinstance(nodes[1], CodeSpan)
        assert nodes[1].code == "print()"

    def test_double_backticks_hold_single(self) -> None:
        assert _inlines("``a ` b``")[0].code == "a ` b"

    def test_one_space_stripped_each_side(self) -> None:
        assert _inlines("`` `x` ``")[0].code == "`x`"

    def test_content_is_not_parsed(self) -> None:
        assert _inlines("`*not em*`")[0].code == "*not em*"

    def test_unmatched_backticks_are_text(self) -> None:
        nodes = _inlines("``not closed`")

        assert nodes == (Text(location=nodes[0].location, content="``not closed`"),)


class TestLinks:
    def test_inline_link(self) -> None:
        link = _inlines('[text](https://example.com "Title")')[0]

        assert isinstance(link, Link)
        assert link.url == "https://example.com"
        assert link.title == "Title"
        assert link.children[0].content == "text"

    def test_angle_destination_allows_spaces(self) -> None:
        link = _inlines("[a](<my file.md>)")[0]

        assert link.url == "my file.md"

    def test_balanced_parens_in_destination(self) -> None:
        link = _inlines("[wiki](https://en.wikipedia.org/wiki/Foo_(bar))")[0]

        assert link.url == "https://en.wikipedia.org/wiki/Foo_(bar)"

    def test_reference_link_full_collapsed_shortcut(self) -> None:
        source = '[full][ref] [ref][] [ref]\n\n[ref]: /target "T"'
        nodes = [n for n in _inlines(source) if isinstance(n, Link)]

        assert len(nodes) == 3
        assert {(n.url, n.title) for n in nodes} == {("/target", "T")}

    def test_reference_labels_are_case_insensitive(self) -> None:
        link = _inlines("[Go][FOO]\n\n[foo]: /url")[0]

        assert link.url == "/url"

    def test_definition_after_use_still_resolves(self) -> None:
        doc = parse("[x]\n\n> [x]: /later")

        assert isinstance(doc.children[0].children[0], Link)

    def test_first_definition_wins(self) -> None:
        link = _inlines("[x]\n\n[x]: /first\n[x]: /second")[0]

        assert link.url == "/first"

    def test_unknown_full_reference_reports(self) -> None:
        doc = parse("[text][missing]")

        assert isinstance(doc.children[0].children[0], Text)
        assert [d.code for d in doc.diagnostics] == [DiagnosticCode.UNRESOLVED_LINK_REFERENCE]

    def test_unknown_shortcut_is_plain_text(self) -> None:
        doc = parse("[not a link]")

        assert doc.children[0].children[0].content == "[not a link]"
        assert doc.diagnostics == ()

    def test_links_do_not_nest(self) -> None:
        nodes = _inlines("[a [b](/inner)](/outer)")

        links = [n for n in nodes if isinstance(n, Link)]
        assert [link.url for link in links] == ["/inner"]

    def test_failed_outer_link_reports_once(self) -> None:
        doc = parse("[[x][missing] [y](/u)](/v)")

        links = [n for n in doc.children[0].children if isinstance(n, Link)]
        assert [link.url for link in links] == ["/u"]
        assert [d.code for d in doc.diagnostics] == [DiagnosticCode.UNRESOLVED_LINK_REFERENCE]

    def test_uri_autolink(self) -> None:
        link = _inlines("<https://example.com/a?b=c>")[0]

        assert link.url == "https://example.com/a?b=c"
        assert link.children[0].content == "https://example.com/a?b=c"

    def test_email_autolink(self) -> None:
        link = _inlines("<me@example.com>")[0]

        assert link.url == "mailto:me@example.com"
        assert link.children[0].content == "me@example.com"

    def test_emphasis_inside_link_text(self) -> None:
        link = _inlines("[*hi*](/x)")[0]

        assert isinstance(link.children[0], Emphasis)


class TestImages:
    def test_image(self) -> None:
        image = _inlines('![a *cat*](cat.png "Cat")')[0]

        assert isinstance(image, Image)
        assert image.url == "cat.png"
        assert image.alt == "a cat"
        assert image.title == "Cat"

    def test_image_inside_link(self) -> None:
        link = _inlines("[![logo](logo.svg)](/home)")[0]

        assert isinstance(link, Link)
        assert isinstance(link.children[0], Image)


class TestExtendedInline:
    def test_strikethrough(self) -> None:
        node = _inlines("~~gone~~")[0]

        assert isinstance(node, Strikethrough)

    def test_subscript(self) -> None:
        nodes = _inlines("H~2~O")

        assert isinstance(nodes[1], Subscript)
        assert nodes[1].children[0].content == "2"

    def test_superscript(self) -> None:
        nodes = _inlines("x^2^")

        assert isinstance(nodes[1], Superscript)

    def test_highlight(self) -> None:
        node = _inlines("==marked==")[0]

        assert isinstance(node, Highlight)

    def test_single_equals_is_text(self) -> None:
        assert _inlines("a = b")[0].content == "a = b"

    def test_mismatched_tilde_runs_are_text(self) -> None:
        nodes = _inlines("~~a~")

        assert all(isinstance(n, Text) for n in nodes)


class TestEmoji:
    def test_known_shortcode(self) -> None:
        node = _inlines(":rocket:")[0]

        assert isinstance(node, Emoji)
        assert node.shortcode == "rocket"
        assert node.glyph == "\U0001f680"

    def test_unknown_shortcode_stays_text(self) -> None:
        assert _inlines(":not_an_emoji_name:")[0].content == ":not_an_emoji_name:"

    def test_time_is_not_emoji(self) -> None:
        assert _inlines("at 10:30:00")[0].content == "at 10:30:00"

    def test_injected_resolver_extends_table(self) -> None:
        md = Markdown(emoji_resolver=lambda name: "\U0001f99c" if name == "parrot" else None)

        node = md.parse(":parrot:").children[0].children[0]
        assert isinstance(node, Emoji)
        assert node.glyph == "\U0001f99c"

    def test_builtin_table_wins_over_resolver(self) -> None:
        md = Markdown(emoji_resolver=lambda name: "X")

        node = md.parse(":rocket:").children[0].children[0]
        assert node.glyph == "\U0001f680"
