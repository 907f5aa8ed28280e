"""Control Flow Execution.

Handles the control commands:
- if/elseif/else
- for loops
- while loops

Bodies run as nested scripts sharing the caller's scope. Conditions are
evaluated directly, so a failing condition aborts the command.
"""

from typing import TYPE_CHECKING, Optional

from ..errors import ExecutionLimitError

if TYPE_CHECKING:
    from ..ast.types import Node
    from .types import InterpreterContext


def _check_iterations(ctx: "InterpreterContext", node: "Node", name: str, iterations: int) -> None:
    limit = ctx.state.limits.max_loop_iterations
    if iterations > limit:
        raise ExecutionLimitError(f"{name} loop: too many iterations ({limit})", node)


async def handle_if(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute an if command.

    Usage: if cond [then] body [elseif cond [then] body]... [[else] body]
    """
    result: Optional[str] = None
    condition = await ctx.evaluate_condition(args[0], node)
    i = 1
    while i < len(args):
        body = args[i]
        i += 1
        if body == "then":
            if i >= len(args):
                break
            body = args[i]
            i += 1
        if condition:
            result = await ctx.evaluate_script(body)
            break
        if i >= len(args):
            break

        keyword = args[i]
        i += 1
        if keyword == "elseif":
            if i >= len(args):
                break
            condition = await ctx.evaluate_condition(args[i], node)
            i += 1
            continue
        if keyword == "else":
            if i >= len(args):
                break
            keyword = args[i]
        # Remaining operand is the else body
        result = await ctx.evaluate_script(keyword)
        break

    ctx.record(f" if=then: {result};\n")
    return result


async def handle_for(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute a for loop.

    Usage: for init cond step body
    """
    init, condition, step, body = args[:4]
    result: Optional[str] = None
    iterations = 0

    await ctx.evaluate_script(init)
    while await ctx.evaluate_condition(condition, node):
        iterations += 1
        _check_iterations(ctx, node, "for", iterations)
        result = await ctx.evaluate_script(body)
        await ctx.evaluate_script(step)

    ctx.record(f" 'for' expression={result};\n")
    return result


async def handle_while(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute a while loop.

    Usage: while cond body
    """
    condition, body = args[:2]
    result: Optional[str] = None
    iterations = 0

    while await ctx.evaluate_condition(condition, node):
        iterations += 1
        _check_iterations(ctx, node, "while", iterations)
        result = await ctx.evaluate_script(body)

    ctx.record(f" 'while' expression={result};\n")
    return result
