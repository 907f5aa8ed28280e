"""String builtin implementation.

Usage: string subcommand arg [arg ...]

Subcommands:
  length s            Number of characters in s
  index s i           Character at index i
  range s first last  Characters from first up to (excluding) last
  compare a b         -1, 0 or 1 comparing a with b
  match pattern s     1 if s matches the glob pattern
  first needle s      Index of the first occurrence of needle, or -1
  last needle s       Index of the last occurrence of needle, or -1
  wordstart s i       Index of the first character of the word at i
  wordend s i         Index after the last character of the word at i
  tolower s / toupper s
  trim s [chars] / trimleft s [chars] / trimright s [chars]
"""

import fnmatch
from typing import TYPE_CHECKING, Optional

from ...errors import ExecutionError

if TYPE_CHECKING:
    from ...ast.types import Node
    from ..types import InterpreterContext


def _index(value: str, node: "Node") -> int:
    try:
        return int(value)
    except ValueError:
        raise ExecutionError("The index of a string must be an integer number!", node) from None


def _check_bounds(text: str, index: int) -> None:
    if not 0 <= index < len(text):
        raise IndexError(f"string index {index} out of range")


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def _word_start(text: str, index: int) -> int:
    _check_bounds(text, index)
    if not _is_word_char(text[index]):
        return index
    while index > 0 and _is_word_char(text[index - 1]):
        index -= 1
    return index


def _word_end(text: str, index: int) -> int:
    _check_bounds(text, index)
    if not _is_word_char(text[index]):
        return index + 1
    while index < len(text) and _is_word_char(text[index]):
        index += 1
    return index


async def handle_string(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute the string builtin."""
    subcommand = args[0]
    text = args[1]

    if subcommand == "length":
        return str(len(text))
    if subcommand == "index":
        index = _index(args[2], node)
        _check_bounds(text, index)
        return text[index]
    if subcommand == "range":
        first = _index(args[2], node)
        last = _index(args[3], node)
        if not 0 <= first <= last <= len(text):
            raise IndexError(f"string range {first} {last} out of range")
        return text[first:last]
    if subcommand == "compare":
        other = args[2]
        return str((text > other) - (text < other))
    if subcommand == "match":
        return "1" if fnmatch.fnmatchcase(args[2], text) else "0"
    if subcommand == "first":
        return str(args[2].find(text))
    if subcommand == "last":
        return str(args[2].rfind(text))
    if subcommand == "wordstart":
        return str(_word_start(text, _index(args[2], node)))
    if subcommand == "wordend":
        return str(_word_end(text, _index(args[2], node)))
    if subcommand == "tolower":
        return text.lower()
    if subcommand == "toupper":
        return text.upper()
    if subcommand in ("trim", "trimleft", "trimright"):
        chars = args[2] if len(args) > 2 else None
        if subcommand == "trimleft":
            return text.lstrip(chars)
        if subcommand == "trimright":
            return text.rstrip(chars)
        return text.strip(chars)
    raise ExecutionError(f"Unknown string subcommand {subcommand}!", node)
