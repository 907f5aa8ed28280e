"""Interpreter module for just-tcl."""

from .expression import ExpressionEvaluator, OpResult, evaluate_expression
from .interpreter import Interpreter, read_boolean
from .types import (
    CommandDef,
    Context,
    InterpreterContext,
    InterpreterState,
    NativeCommand,
    ScriptCommand,
    split_element_name,
)

__all__ = [
    # Interpreter
    "Interpreter",
    "read_boolean",
    # Expressions
    "ExpressionEvaluator",
    "OpResult",
    "evaluate_expression",
    # Types
    "CommandDef",
    "Context",
    "InterpreterContext",
    "InterpreterState",
    "NativeCommand",
    "ScriptCommand",
    "split_element_name",
]
