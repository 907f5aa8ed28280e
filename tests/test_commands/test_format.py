"""Tests for the format command."""

import pytest
from just_tcl import Tcl


class TestFormat:
    """Test printf-style formatting."""

    @pytest.mark.asyncio
    async def test_integer_and_string(self):
        tcl = Tcl()
        result = await tcl.exec('format "%d-%s" 3 a')
        assert result.result == "3-a"

    @pytest.mark.asyncio
    async def test_width_and_precision(self):
        tcl = Tcl()
        result = await tcl.exec("format %6.2f 3.14159")
        assert result.result == "  3.14"

    @pytest.mark.asyncio
    async def test_hex(self):
        tcl = Tcl()
        result = await tcl.exec("format %x 255")
        assert result.result == "ff"

    @pytest.mark.asyncio
    async def test_character(self):
        tcl = Tcl()
        result = await tcl.exec("format <%c> z")
        assert result.result == "<z>"

    @pytest.mark.asyncio
    async def test_literal_percent(self):
        tcl = Tcl()
        result = await tcl.exec("format 100%%")
        assert result.result == "100%"

    @pytest.mark.asyncio
    async def test_substituted_arguments(self):
        tcl = Tcl()
        result = await tcl.exec('set n 7\nformat "n=%d" $n')
        assert result.result == "n=7"


class TestFormatErrors:
    """Test format error handling."""

    @pytest.mark.asyncio
    async def test_argument_mismatch(self):
        tcl = Tcl()
        result = await tcl.exec("format %d abc")
        assert result.exit_code == 1
        assert "does not match the formatter %d" in result.stderr

    @pytest.mark.asyncio
    async def test_too_few_arguments(self):
        tcl = Tcl()
        result = await tcl.exec('format "%d %d" 1')
        assert result.exit_code == 1
        assert "exceed the number of arguments" in result.stderr

    @pytest.mark.asyncio
    async def test_unsupported_conversion(self):
        tcl = Tcl()
        result = await tcl.exec("format %q 1")
        assert result.exit_code == 1
        assert "Unsupported formatter %q" in result.stderr
