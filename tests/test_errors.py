"""Error hierarchy and the parse-never-raises contract."""

import pytest

from hojas import (
    ConfigurationError,
    HojasError,
    Markdown,
    SerializationError,
    UnknownFeatureError,
    parse,
)


class TestHierarchy:
    def test_all_errors_share_a_base(self) -> None:
        assert issubclass(ConfigurationError, HojasError)
        assert issubclass(UnknownFeatureError, ConfigurationError)
        assert issubclass(SerializationError, HojasError)

    def test_unknown_feature_message_lists_names(self) -> None:
        err = UnknownFeatureError(["b", "a"], ["table", "emoji"])

        assert err.names == ("b", "a")
        assert str(err) == "Unknown feature(s): 'b', 'a'. Available: emoji, table"


class TestConfigurationFailsFast:
    def test_markdown_with_unknown_feature(self) -> None:
        with pytest.raises(UnknownFeatureError):
            Markdown(features=["heading", "maths"])

    def test_parse_with_unknown_feature(self) -> None:
        with pytest.raises(UnknownFeatureError):
            parse("text", features=["maths"])

    def test_markdown_with_bad_depth(self) -> None:
        with pytest.raises(ConfigurationError):
            Markdown(max_nesting_depth=0)


class TestParseNeverRaises:
    @pytest.mark.parametrize(
        "source",
        [
            "```",
            "[",
            "](",
            "[a](",
            "[a]: ",
            "<",
            "<http://",
            "![",
            "*" * 50,
            "_" * 50,
            "~~~~~",
            "|",
            "|-|",
            "> " * 10,
            "- " * 10,
            "1." * 10,
            "[^",
            "[^x]:",
            ": ",
            "#" * 10,
            "\\",
            "&#;",
            "&#xFFFFFFFF;",
            "&#0;",
            ":::",
            "\t\t- \tx",
            "\x00",
        ],
    )
    def test_malformed_input(self, source: str) -> None:
        doc = parse(source)

        assert doc.location.end_offset == len(source)
