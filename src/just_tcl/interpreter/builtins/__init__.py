"""Builtin commands for just-tcl."""

from ..control_flow import handle_for, handle_if, handle_while
from ..types import NativeCommand
from .format import handle_format
from .lists import handle_lindex, handle_list, handle_llength, handle_split
from .output import handle_expr, handle_puts
from .strings import handle_string
from .variables import handle_append, handle_lappend, handle_set, handle_unset

BUILTINS: dict[str, NativeCommand] = {
    command.name: command
    for command in (
        NativeCommand("set", 1, handle_set),
        NativeCommand("append", 1, handle_append),
        NativeCommand("unset", 1, handle_unset),
        NativeCommand("lappend", 1, handle_lappend),
        NativeCommand("puts", 1, handle_puts),
        NativeCommand("expr", 1, handle_expr),
        NativeCommand("if", 2, handle_if),
        NativeCommand("for", 4, handle_for),
        NativeCommand("while", 2, handle_while),
        NativeCommand("string", 2, handle_string),
        NativeCommand("format", 1, handle_format),
        NativeCommand("list", 0, handle_list),
        NativeCommand("lindex", 1, handle_lindex),
        NativeCommand("llength", 1, handle_llength),
        NativeCommand("split", 1, handle_split),
    )
}


def create_command_table() -> dict[str, NativeCommand]:
    """Return a fresh command table holding the builtins."""
    return dict(BUILTINS)


__all__ = ["BUILTINS", "create_command_table"]
