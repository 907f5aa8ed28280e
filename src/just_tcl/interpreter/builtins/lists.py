"""List builtins: list, lindex, llength, split.

Usage:
  list [value ...]
  lindex list [index ...]
  llength list
  split string [chars]
"""

from typing import TYPE_CHECKING, Optional

from ...errors import ExecutionError
from ...parser.tcl_list import TclList

if TYPE_CHECKING:
    from ...ast.types import Node
    from ..types import InterpreterContext


async def handle_list(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute the list builtin."""
    return str(TclList(args))


async def handle_lindex(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute the lindex builtin.

    Each index operand is itself a list of indices; the indices are
    applied in turn, descending into nested lists.
    """
    indices: list[str] = []
    for arg in args[1:]:
        indices.extend(TclList.parse(arg))

    value = args[0]
    for index in indices:
        try:
            position = int(index)
        except ValueError:
            raise ExecutionError("The index of a list element must be an integer number!", node) from None
        elements = TclList.parse(value)
        if not 0 <= position < len(elements):
            raise ExecutionError("The index of a list exceeded list's dimensions!", node)
        value = elements[position]
    return value


async def handle_llength(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute the llength builtin."""
    return str(len(TclList.parse(args[0])))


async def handle_split(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute the split builtin.

    Without chars the string is split on whitespace; with empty chars it
    is split into single characters.
    """
    text = args[0]
    if len(args) > 1 and args[1] == "":
        return str(TclList(text))
    split_chars = args[1] if len(args) > 1 else None
    return str(TclList.parse(text, split_chars))
