"""Output and expression builtins: puts, expr.

Usage:
  puts [-nonewline] value
  expr arg [arg ...]
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ...ast.types import Node
    from ..types import InterpreterContext


async def handle_puts(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute the puts builtin."""
    newline = "\n"
    if len(args) > 1 and args[0] == "-nonewline":
        newline = ""
        args = args[1:]
    value = args[0]
    ctx.state.write(f"{ctx.state.options.output_prefix}{value}{newline}")
    ctx.record(f" output: {value};\n")
    return value


async def handle_expr(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute the expr builtin.

    Operands are joined with spaces before evaluation.
    """
    result = await ctx.evaluate_expression(" ".join(args), node)
    ctx.record(f" expression={result};\n")
    return result
