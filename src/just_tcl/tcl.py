"""Main Tcl class - the primary API for just-tcl.

Example usage:
    from just_tcl import Tcl

    # Synchronous usage (for REPL, scripts)
    tcl = Tcl()
    result = tcl.run("set x 5; expr $x * 2")
    print(result.result)  # "10"

    # Async usage (for async applications)
    tcl = Tcl()
    result = await tcl.exec("puts hello")
    print(result.stdout)  # "Tcl> hello\\n"

    # With execution limits
    tcl = Tcl(limits=ExecutionLimits(max_loop_iterations=100))
"""

import asyncio
import sys
from typing import Optional, TextIO

import nest_asyncio  # type: ignore[import-untyped]

from .errors import TclError
from .interpreter import CommandDef, Context, Interpreter, InterpreterState, ScriptCommand
from .interpreter.builtins import create_command_table
from .types import ExecResult, ExecutionLimits, TclOptions


class Tcl:
    """Main Tcl interpreter class.

    Provides a high-level API for executing Tcl scripts. Variables persist
    across executions on the same instance.
    """

    def __init__(
        self,
        *,
        out: Optional[TextIO] = None,
        variables: Optional[dict[str, str]] = None,
        limits: Optional[ExecutionLimits] = None,
        commands: Optional[dict[str, CommandDef]] = None,
        output_prefix: str = "Tcl> ",
        parallel_lexer: bool = False,
    ):
        """Initialize the Tcl interpreter.

        Args:
            out: Output sink for puts. Defaults to standard output.
            variables: Initial global variables; ``arr(index)`` names set
                array elements.
            limits: Execution limits for runaway scripts.
            commands: Custom command table. If not provided, uses the builtins.
            output_prefix: Text written before every value printed by puts.
            parallel_lexer: Lex scripts on a background thread.
        """
        self._out = out
        self._limits = limits or ExecutionLimits()
        self._commands = commands if commands is not None else create_command_table()
        self._options = TclOptions(output_prefix=output_prefix, parallel_lexer=parallel_lexer)
        self._initial_variables = dict(variables or {})
        self._context = Context()
        self.reset()

    @property
    def context(self) -> Context:
        """Get the global scope."""
        return self._context

    @property
    def variables(self) -> dict[str, str]:
        """Get the global scalar variables."""
        return self._context.variables

    @property
    def commands(self) -> dict[str, CommandDef]:
        """Get the command table."""
        return self._commands

    def define_command(self, name: str, params: list[str], body: str) -> ScriptCommand:
        """Register a command whose body is a Tcl script.

        The body runs in a fresh scope nested in the global scope, with
        each parameter bound to the corresponding operand.
        """
        command = ScriptCommand(name=name, params=list(params), body=body, context=self._context)
        self._commands[name] = command
        return command

    async def exec(self, script: str) -> ExecResult:
        """Execute a Tcl script.

        Args:
            script: The Tcl script to execute.

        Returns:
            ExecResult with the script result, output, trace and variables.
        """
        state = InterpreterState(
            commands=self._commands,
            out=self._out if self._out is not None else sys.stdout,
            limits=self._limits,
            options=self._options,
        )
        interpreter = Interpreter(script, state, self._context)
        try:
            result = await interpreter.run()
        except TclError as error:
            return ExecResult(
                stdout="".join(state.stdout),
                stderr=f"tcl: {error}\n",
                exit_code=1,
                trace=interpreter.trace,
                variables=dict(self._context.variables),
            )
        return ExecResult(
            result=result,
            stdout="".join(state.stdout),
            trace=interpreter.trace,
            variables=dict(self._context.variables),
        )

    def run(self, script: str) -> ExecResult:
        """Execute a Tcl script synchronously.

        This is a convenience wrapper around exec() that works in any context,
        including Jupyter notebooks and async frameworks.

        Example:
            >>> tcl = Tcl()
            >>> tcl.run('set greeting "Hello"').result
            'Hello'
        """
        try:
            asyncio.get_running_loop()
            # Already inside an event loop; allow asyncio.run to nest
            nest_asyncio.apply()
        except RuntimeError:
            # No running event loop, asyncio.run() will work fine
            pass
        return asyncio.run(self.exec(script))

    def reset(self) -> None:
        """Reset the global scope to the initial variables."""
        self._context.clear()
        for name, value in self._initial_variables.items():
            self._context.set(name, value)
