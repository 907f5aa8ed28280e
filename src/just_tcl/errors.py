"""Error taxonomy for just-tcl.

Every malformed construct in a script maps to one of these exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .ast.types import Node
    from .interpreter.types import CommandDef
    from .parser.lexer import TokenType


class TclError(Exception):
    """Base class for all script errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ParseError(TclError):
    """A lexical or grammatical mismatch between expected and found tokens."""

    def __init__(
        self,
        message: str,
        found: Optional["TokenType"] = None,
        expected: Optional["TokenType"] = None,
    ):
        super().__init__(message)
        self.found = found
        self.expected = expected

    def __str__(self) -> str:
        parts = [self.message]
        if self.found is not None:
            parts.append(f"found {self.found.name}")
        if self.expected is not None:
            parts.append(f"expected {self.expected.name}")
        return ", ".join(parts)


class UnbalancedParenthesesError(ParseError):
    """Parentheses in an expression do not pair up."""


class ExecutionError(TclError):
    """A semantic failure while evaluating a node."""

    def __init__(self, message: str, node: Optional["Node"] = None):
        super().__init__(message)
        self.node = node

    def __str__(self) -> str:
        if self.node is None:
            return self.message
        return f"{self.message} (at {self.node})"


class ExecutionLimitError(ExecutionError):
    """A configured execution limit was exceeded.

    Unlike other execution errors this one is never swallowed by
    nested script evaluation.
    """


class CommandError(TclError):
    """Arity violation or an out-of-range access inside a command."""

    def __init__(self, message: str, command: Optional["CommandDef"] = None):
        super().__init__(message)
        self.command = command

    def __str__(self) -> str:
        if self.command is None:
            return self.message
        return f"{self.message} (in {self.command.name})"
