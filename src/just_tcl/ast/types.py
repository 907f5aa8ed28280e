"""AST node types.

Command scripts parse into PROGRAM > COMMAND > OPERAND > fragment trees,
expressions into trees of operator and literal nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional


class NodeType(Enum):
    """Kinds of AST nodes."""

    PROGRAM = auto()
    COMMAND = auto()
    LIST = auto()
    OPERAND = auto()
    WORD = auto()
    NAME = auto()
    STRING = auto()
    SUBSTRING = auto()
    QSTRING = auto()
    NUMBER = auto()
    UNARYOP = auto()
    BINARYOP = auto()
    TERNARYOP = auto()
    FUNC = auto()


@dataclass
class Node:
    """A node owning an ordered list of child nodes."""

    type: NodeType
    value: Optional[str] = None
    children: list[Node] = field(default_factory=list)

    def add(self, child: Node) -> Node:
        """Append a child and return it."""
        self.children.append(child)
        return child

    def __str__(self) -> str:
        if self.value is None:
            return self.type.name
        return f"{self.type.name}({self.value})"
