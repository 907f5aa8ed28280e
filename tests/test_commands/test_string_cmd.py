"""Tests for the string command."""

import pytest
from just_tcl import Tcl


async def string_result(script):
    tcl = Tcl()
    result = await tcl.exec(script)
    assert result.exit_code == 0, result.stderr
    return result.result


class TestStringInspection:
    """Test length, index and range."""

    @pytest.mark.asyncio
    async def test_length(self):
        assert await string_result('string length "hello world"') == "11"

    @pytest.mark.asyncio
    async def test_length_empty(self):
        assert await string_result('string length ""') == "0"

    @pytest.mark.asyncio
    async def test_index(self):
        assert await string_result("string index abc 1") == "b"

    @pytest.mark.asyncio
    async def test_range_excludes_end(self):
        assert await string_result("string range abcdef 1 4") == "bcd"

    @pytest.mark.asyncio
    async def test_index_out_of_range(self):
        tcl = Tcl()
        result = await tcl.exec("string index abc 7")
        assert result.exit_code == 1
        assert "(in string)" in result.stderr

    @pytest.mark.asyncio
    async def test_index_not_integer(self):
        tcl = Tcl()
        result = await tcl.exec("string index abc x")
        assert result.exit_code == 1
        assert "must be an integer" in result.stderr


class TestStringComparison:
    """Test compare, match, first and last."""

    @pytest.mark.asyncio
    async def test_compare(self):
        assert await string_result("string compare apple banana") == "-1"
        assert await string_result("string compare same same") == "0"
        assert await string_result("string compare b a") == "1"

    @pytest.mark.asyncio
    async def test_match(self):
        assert await string_result("string match a*c abbbc") == "1"
        assert await string_result("string match a?c abbc") == "0"

    @pytest.mark.asyncio
    async def test_first_and_last(self):
        assert await string_result("string first b abcb") == "1"
        assert await string_result("string last b abcb") == "3"
        assert await string_result("string first z abc") == "-1"


class TestStringWords:
    """Test wordstart and wordend."""

    @pytest.mark.asyncio
    async def test_wordstart(self):
        assert await string_result('string wordstart "hello world" 8') == "6"

    @pytest.mark.asyncio
    async def test_wordend(self):
        assert await string_result('string wordend "hello world" 1') == "5"

    @pytest.mark.asyncio
    async def test_non_word_character(self):
        assert await string_result('string wordstart "a b" 1') == "1"
        assert await string_result('string wordend "a b" 1') == "2"


class TestStringTransforms:
    """Test case conversion and trimming."""

    @pytest.mark.asyncio
    async def test_case(self):
        assert await string_result("string toupper abc") == "ABC"
        assert await string_result("string tolower ABC") == "abc"

    @pytest.mark.asyncio
    async def test_trim_whitespace(self):
        assert await string_result('string trim "  x  "') == "x"

    @pytest.mark.asyncio
    async def test_trim_chars(self):
        assert await string_result("string trim xxaxx x") == "a"
        assert await string_result("string trimleft xxaxx x") == "axx"
        assert await string_result("string trimright xxaxx x") == "xxa"

    @pytest.mark.asyncio
    async def test_unknown_subcommand(self):
        tcl = Tcl()
        result = await tcl.exec("string reverse abc")
        assert result.exit_code == 1
        assert "Unknown string subcommand reverse" in result.stderr
