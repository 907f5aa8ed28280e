"""AST for just-tcl."""

from .types import Node, NodeType

__all__ = ["Node", "NodeType"]
