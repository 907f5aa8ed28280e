"""just-tcl: a Tcl-like scripting language interpreter."""

from .errors import (
    CommandError,
    ExecutionError,
    ExecutionLimitError,
    ParseError,
    TclError,
    UnbalancedParenthesesError,
)
from .parser.tcl_list import TclList
from .tcl import Tcl
from .types import ExecResult, ExecutionLimits, TclOptions

__version__ = "0.1.0"

__all__ = [
    "Tcl",
    "ExecResult",
    "ExecutionLimits",
    "TclOptions",
    "TclList",
    "TclError",
    "ParseError",
    "UnbalancedParenthesesError",
    "ExecutionError",
    "ExecutionLimitError",
    "CommandError",
]
