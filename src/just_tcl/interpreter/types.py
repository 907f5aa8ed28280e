"""Interpreter types for just-tcl."""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, TextIO, Union

if TYPE_CHECKING:
    from ..ast.types import Node
    from ..types import ExecutionLimits, TclOptions


def split_element_name(name: str) -> tuple[str, Optional[str]]:
    """Split ``arr(index)`` into its array name and index.

    Any name ending in ``)`` with an earlier ``(`` is an array element
    reference; the index runs from the last ``(`` to the final ``)``.
    Returns ``(name, None)`` for scalar names.
    """
    if name.endswith(")"):
        start = name.rfind("(", 0, len(name) - 1)
        if start != -1:
            return name[:start], name[start + 1:-1]
    return name, None


class Context:
    """A variable scope.

    Holds scalar variables and arrays. A context may link to an enclosing
    context; lookups fall back to it, writes always stay local. The link
    is a weak reference: the enclosing context is owned elsewhere.
    """

    def __init__(self, parent: Optional[Context] = None):
        self.variables: dict[str, str] = {}
        self.arrays: dict[str, dict[str, str]] = {}
        self._parent = weakref.ref(parent) if parent is not None else None

    @property
    def parent(self) -> Optional[Context]:
        return self._parent() if self._parent is not None else None

    def _lookup(self, table: str, name: str):
        scope: Optional[Context] = self
        while scope is not None:
            values = getattr(scope, table)
            if name in values:
                return values[name]
            scope = scope.parent
        return None

    # Scalars

    def get_variable(self, name: str) -> Optional[str]:
        return self._lookup("variables", name)

    def set_variable(self, name: str, value: str) -> None:
        self.variables[name] = value

    def delete_variable(self, name: str) -> None:
        self.variables.pop(name, None)

    # Arrays

    def get_array(self, name: str) -> Optional[dict[str, str]]:
        return self._lookup("arrays", name)

    def get_array_element(self, name: str, index: str) -> Optional[str]:
        array = self.get_array(name)
        if array is None:
            return None
        return array.get(index)

    def set_array_element(self, name: str, index: str, value: str) -> None:
        self.arrays.setdefault(name, {})[index] = value

    def delete_array_element(self, name: str, index: str) -> None:
        """Remove an element; an array left empty is removed too."""
        array = self.arrays.get(name)
        if array is None:
            return
        array.pop(index, None)
        if not array:
            del self.arrays[name]

    # Scalar-or-element access by full name

    def get(self, name: str) -> Optional[str]:
        base, index = split_element_name(name)
        if index is None:
            return self.get_variable(name)
        return self.get_array_element(base, index)

    def set(self, name: str, value: str) -> None:
        base, index = split_element_name(name)
        if index is None:
            self.set_variable(name, value)
        else:
            self.set_array_element(base, index, value)

    def delete(self, name: str) -> None:
        base, index = split_element_name(name)
        if index is None:
            self.delete_variable(name)
        else:
            self.delete_array_element(base, index)

    def clear(self) -> None:
        self.variables.clear()
        self.arrays.clear()


# Native command handler: (ctx, command node, substituted operands) -> result
CommandHandler = Callable[["InterpreterContext", "Node", list[str]], Awaitable[Optional[str]]]


@dataclass
class NativeCommand:
    """A command implemented in Python."""

    name: str
    min_arity: int
    handler: CommandHandler


@dataclass
class ScriptCommand:
    """A command whose body is a Tcl script.

    Each invocation runs the body in a fresh child of the captured context
    with the parameters bound as local variables.
    """

    name: str
    params: list[str]
    body: str
    context: Context
    out: Optional[TextIO] = None

    @property
    def min_arity(self) -> int:
        return len(self.params)


CommandDef = Union[NativeCommand, ScriptCommand]


@dataclass
class InterpreterState:
    """Mutable state shared by an interpreter and its nested interpreters."""

    commands: dict[str, CommandDef]
    """Command table."""

    out: TextIO
    """Output sink for puts."""

    limits: "ExecutionLimits"
    """Execution limits."""

    options: "TclOptions"
    """Interpreter options."""

    stdout: list[str] = field(default_factory=list)
    """Everything written to the output sink."""

    command_count: int = 0
    """Commands executed so far."""

    def write(self, text: str) -> None:
        self.out.write(text)
        self.stdout.append(text)


@dataclass
class InterpreterContext:
    """Context provided to command handlers."""

    state: InterpreterState
    """Shared interpreter state."""

    scope: Context
    """Variable scope of the running script."""

    record: Callable[[str], None]
    """Function to append an entry to the execution trace."""

    evaluate_script: Callable[[str], Awaitable[Optional[str]]]
    """Function to evaluate a nested script in the current scope."""

    evaluate_expression: Callable[[str, "Node"], Awaitable[str]]
    """Function to substitute and evaluate an expression."""

    evaluate_condition: Callable[[str, "Node"], Awaitable[bool]]
    """Function to evaluate an expression as a boolean."""
