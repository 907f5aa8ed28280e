"""Format builtin implementation.

Usage: format fmt [arg ...]

Formats arguments printf-style. Supported conversions:
  s              string
  d i u o x X    integer
  e E f g G      floating point
  c              single character
"""

import re
from typing import TYPE_CHECKING, Optional, Union

from ...errors import ExecutionError

if TYPE_CHECKING:
    from ...ast.types import Node
    from ..types import InterpreterContext


# %[flags][width][.precision]conversion, or a literal %%
SPEC_PATTERN = re.compile(r"%(?:%|[-+# 0]*\d*(?:\.\d*)?(.))")

INTEGER_CONVERSIONS = "diuoxX"
FLOAT_CONVERSIONS = "eEfgG"


def _specifiers(fmt: str, node: "Node") -> list[str]:
    """Return the conversion character of each specifier in fmt."""
    conversions = []
    for match in SPEC_PATTERN.finditer(fmt):
        conversion = match.group(1)
        if conversion is None:
            continue
        if conversion not in "s" + INTEGER_CONVERSIONS + FLOAT_CONVERSIONS + "c":
            raise ExecutionError(f"Unsupported formatter %{conversion}!", node)
        conversions.append(conversion)
    return conversions


def _coerce(conversion: str, arg: str, node: "Node") -> Union[str, int, float]:
    try:
        if conversion == "s":
            return arg
        if conversion in INTEGER_CONVERSIONS:
            return int(arg)
        if conversion in FLOAT_CONVERSIONS:
            return float(arg)
        if len(arg) != 1:
            raise ValueError(arg)
        return arg
    except ValueError:
        raise ExecutionError(f"An argument does not match the formatter %{conversion}!", node) from None


async def handle_format(ctx: "InterpreterContext", node: "Node", args: list[str]) -> Optional[str]:
    """Execute the format builtin."""
    fmt = args[0]
    conversions = _specifiers(fmt, node)
    values = args[1:]
    if len(values) < len(conversions):
        raise ExecutionError("The number of formatters exceed the number of arguments!", node)

    coerced = tuple(
        _coerce(conversion, value, node) for conversion, value in zip(conversions, values)
    )
    try:
        return fmt % coerced
    except (TypeError, ValueError) as error:
        raise ExecutionError(f"Illegal format string: {error}", node) from error
