"""Variable builtins: set, append, lappend, unset.

Usage:
  set name [value]
  append name [value ...]
  lappend name [value ...]
  unset name

A name of the form ``arr(index)`` refers to an array element.
"""

from typing import TYPE_CHECKING, Optional

from ...errors import ExecutionError

if TYPE_CHECKING:
    from ...ast.types import Node
    from ..types import InterpreterContext


async def handle_set(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute the set builtin."""
    name = args[0]
    if len(args) > 1:
        value = args[1]
        ctx.scope.set(name, value)
    else:
        value = ctx.scope.get(name)
        if value is None:
            raise ExecutionError(f'can\'t read "{name}": no such variable', node)
    ctx.record(f" {name}={value};\n")
    return value


async def handle_append(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute the append builtin."""
    name = args[0]
    value = (ctx.scope.get(name) or "") + "".join(args[1:])
    ctx.scope.set(name, value)
    ctx.record(f" {name}={value};\n")
    return value


async def handle_lappend(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute the lappend builtin."""
    name = args[0]
    value = ctx.scope.get(name) or ""
    for arg in args[1:]:
        value = f"{value} {arg}" if value else arg
    ctx.scope.set(name, value)
    ctx.record(f" {name}={value};\n")
    return value


async def handle_unset(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute the unset builtin; returns the removed value."""
    name = args[0]
    value = ctx.scope.get(name)
    ctx.scope.delete(name)
    ctx.record(f" {name}=undefined;\n")
    return value
