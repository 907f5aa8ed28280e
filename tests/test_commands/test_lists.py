"""Tests for list, lindex, llength and split."""

import pytest
from just_tcl import Tcl


class TestList:
    """Test list construction and inspection."""

    @pytest.mark.asyncio
    async def test_list_braces_elements(self):
        tcl = Tcl()
        result = await tcl.exec("list a {b c} d")
        assert result.result == "{a} {b c} {d}"

    @pytest.mark.asyncio
    async def test_empty_list(self):
        tcl = Tcl()
        result = await tcl.exec("list")
        assert result.result == ""

    @pytest.mark.asyncio
    async def test_llength(self):
        tcl = Tcl()
        result = await tcl.exec("llength {a {b c} d}")
        assert result.result == "3"

    @pytest.mark.asyncio
    async def test_llength_of_built_list(self):
        tcl = Tcl()
        result = await tcl.exec("set l [list x {y z}]\nllength $l")
        assert result.result == "2"


class TestLindex:
    """Test lindex."""

    @pytest.mark.asyncio
    async def test_single_index(self):
        tcl = Tcl()
        result = await tcl.exec("lindex {a {b c} d} 1")
        assert result.result == "b c"

    @pytest.mark.asyncio
    async def test_nested_indices(self):
        tcl = Tcl()
        result = await tcl.exec("lindex {a {b c} d} 1 1")
        assert result.result == "c"

    @pytest.mark.asyncio
    async def test_index_list_operand(self):
        tcl = Tcl()
        result = await tcl.exec("lindex {a {b c} d} {1 0}")
        assert result.result == "b"

    @pytest.mark.asyncio
    async def test_no_index_returns_list(self):
        tcl = Tcl()
        result = await tcl.exec("lindex {a b}")
        assert result.result == "a b"

    @pytest.mark.asyncio
    async def test_out_of_range(self):
        tcl = Tcl()
        result = await tcl.exec("lindex {a b} 5")
        assert result.exit_code == 1
        assert "exceeded" in result.stderr

    @pytest.mark.asyncio
    async def test_non_integer_index(self):
        tcl = Tcl()
        result = await tcl.exec("lindex {a b} x")
        assert result.exit_code == 1
        assert "must be an integer" in result.stderr


class TestSplit:
    """Test split."""

    @pytest.mark.asyncio
    async def test_split_on_whitespace(self):
        tcl = Tcl()
        result = await tcl.exec('split "  a  b "')
        assert result.result == "{a} {b}"

    @pytest.mark.asyncio
    async def test_split_on_chars(self):
        tcl = Tcl()
        result = await tcl.exec('split "a,b;c" ",;"')
        assert result.result == "{a} {b} {c}"

    @pytest.mark.asyncio
    async def test_split_into_characters(self):
        tcl = Tcl()
        result = await tcl.exec('split abc ""')
        assert result.result == "{a} {b} {c}"
