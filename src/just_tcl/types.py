"""Public types for just-tcl."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ExecResult:
    """Result of executing a script."""

    result: Optional[str] = None
    """Value of the last command that produced one, or None."""

    stdout: str = ""
    """Everything written by puts during this execution."""

    stderr: str = ""
    """Error message when the script failed."""

    exit_code: int = 0
    """0 on success, 1 when an error aborted the script."""

    trace: str = ""
    """Execution trace, one entry per command."""

    variables: dict[str, str] = field(default_factory=dict)
    """Snapshot of the global scalar variables after execution."""


@dataclass
class ExecutionLimits:
    """Limits that stop runaway scripts."""

    max_command_count: int = 100000
    """Maximum number of commands executed by one exec call."""

    max_loop_iterations: int = 10000
    """Maximum iterations of a single for/while invocation."""

    max_nesting_depth: int = 64
    """Maximum depth of nested script evaluation."""


@dataclass
class TclOptions:
    """Interpreter options."""

    output_prefix: str = "Tcl> "
    """Text written before every value printed by puts."""

    parallel_lexer: bool = False
    """Lex scripts on a background thread feeding a bounded token queue."""
