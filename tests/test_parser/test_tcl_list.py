"""Tests for the TclList value type."""

import pytest

from just_tcl import TclList


class TestParse:
    """Test splitting strings into list elements."""

    def test_whitespace_separated(self):
        assert TclList.parse("a b c") == ["a", "b", "c"]

    def test_runs_of_whitespace(self):
        assert TclList.parse("  a \t b\n c  ") == ["a", "b", "c"]

    def test_braced_element(self):
        assert TclList.parse("a {b c} d") == ["a", "b c", "d"]

    def test_nested_braces(self):
        assert TclList.parse("{a {b c}} d") == ["a {b c}", "d"]

    def test_empty_input(self):
        assert TclList.parse("") == []
        assert TclList.parse("   ") == []

    def test_empty_braced_element(self):
        assert TclList.parse("{} a") == ["", "a"]

    def test_custom_split_characters(self):
        assert TclList.parse("a,b,,c", ",") == ["a", "b", "c"]

    def test_custom_split_keeps_trailing_empty_element(self):
        assert TclList.parse("a,b,", ",") == ["a", "b", ""]

    def test_result_is_tcl_list(self):
        assert isinstance(TclList.parse("a"), TclList)


class TestFormat:
    """Test formatting lists back into strings."""

    def test_braces_every_element(self):
        assert str(TclList(["a", "b c"])) == "{a} {b c}"

    def test_empty_list(self):
        assert TclList().format() == ""

    def test_empty_element(self):
        assert str(TclList(["", "x"])) == "{} {x}"


class TestRoundTrip:
    """Parsing a formatted list gives the same elements back."""

    @pytest.mark.parametrize(
        "text",
        [
            "a b c",
            "a {b c} d",
            "{a {b c}} d",
            "{} a {}",
            "x{ y}",
            "a{b c}",
            "{{a} b}",
            "one {two {three four}} five",
        ],
    )
    def test_round_trip(self, text):
        elements = TclList.parse(text)
        assert TclList.parse(str(elements)) == elements
