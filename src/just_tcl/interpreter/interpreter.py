"""Interpreter - AST Execution Engine.

Main interpreter class that executes Tcl scripts. Handles:
- Command dispatch through the command table
- Operand substitution ($name and [script])
- Nested script and expression evaluation
- The execution trace
"""

import logging
from typing import Optional

from ..ast.types import Node, NodeType
from ..errors import CommandError, ExecutionError, ExecutionLimitError, TclError
from ..parser.lexer import ScriptLexer
from ..parser.parallel import ParallelLexer
from ..parser.parser import ScriptParser, parse_substitutions
from .expression import evaluate_expression
from .types import (
    Context,
    InterpreterContext,
    InterpreterState,
    NativeCommand,
    ScriptCommand,
    split_element_name,
)

LOG = logging.getLogger(__name__)

TRUE_STRINGS = frozenset({"true", "yes", "on"})
FALSE_STRINGS = frozenset({"false", "no", "off"})


def read_boolean(value: str) -> Optional[bool]:
    """Read a Tcl boolean, or return None when value is not one."""
    try:
        return float(value) != 0
    except ValueError:
        pass
    lowered = value.strip().lower()
    if lowered in TRUE_STRINGS:
        return True
    if lowered in FALSE_STRINGS:
        return False
    return None


class Interpreter:
    """Executes one script against a scope."""

    def __init__(
        self,
        script: str,
        state: InterpreterState,
        scope: Context,
        *,
        name: str = "Tcl script",
        depth: int = 0,
    ):
        """Initialize the interpreter.

        Args:
            script: Script text to execute.
            state: State shared with nested interpreters.
            scope: Variable scope the script runs in.
            name: Name shown in the trace header.
            depth: Nesting depth of this interpreter.
        """
        self.script = script
        self.state = state
        self.scope = scope
        self.name = name
        self.depth = depth
        self._trace: list[str] = []
        self._recorded = False
        self._ctx = InterpreterContext(
            state=state,
            scope=scope,
            record=self._record,
            evaluate_script=self.evaluate_script,
            evaluate_expression=self.evaluate_expression,
            evaluate_condition=self.evaluate_condition,
        )

    @property
    def trace(self) -> str:
        """Execution trace accumulated so far."""
        return "".join(self._trace)

    def _record(self, entry: str) -> None:
        self._recorded = True
        self._trace.append(entry)

    def parse(self) -> Node:
        """Parse the script into a PROGRAM node."""
        lexer = ScriptLexer(self.script)
        if not self.state.options.parallel_lexer:
            return ScriptParser(lexer, self.name).parse()
        parallel = ParallelLexer(lexer)
        try:
            return ScriptParser(parallel, self.name).parse()
        finally:
            parallel.close()

    async def run(self) -> Optional[str]:
        """Parse and execute the script.

        Returns:
            The result of the last command that produced a value.

        Raises:
            ParseError, ExecutionError or CommandError.
        """
        limit = self.state.limits.max_nesting_depth
        if self.depth > limit:
            raise ExecutionLimitError(f"too many nested evaluations ({limit})")
        program = self.parse()
        self._trace.append(f"Executing {program.value}:\n")
        return await self.execute_program(program)

    async def execute_program(self, program: Node) -> Optional[str]:
        """Execute each command in order."""
        result: Optional[str] = None
        for command in program.children:
            value = await self.execute_command(command)
            if value is not None:
                result = value
        return result

    async def execute_command(self, node: Node) -> Optional[str]:
        """Look up, substitute and invoke one command."""
        self.state.command_count += 1
        limit = self.state.limits.max_command_count
        if self.state.command_count > limit:
            raise ExecutionLimitError(f"too many commands executed ({limit})", node)

        name = node.value or ""
        command = self.state.commands.get(name)
        if command is None:
            raise ExecutionError(f"The command {name} is not defined!", node)

        args = [await self.read_operand(operand) for operand in node.children]
        if len(args) < command.min_arity:
            raise CommandError(
                f"The command {name} requires at least {command.min_arity} operand(s)", command
            )

        LOG.debug("Executing %s with %d operand(s)", name, len(args))
        self._recorded = False
        try:
            if isinstance(command, NativeCommand):
                result = await command.handler(self._ctx, node, args)
            else:
                result = await self._invoke_script_command(command, args)
        except IndexError as error:
            raise CommandError(f"Index out of range: {error}", command) from error

        if not self._recorded:
            self._record(
                f" Command: {name} with args: {', '.join(args)} producing result: {result}\n"
            )
        return result

    async def _invoke_script_command(self, command: ScriptCommand, args: list[str]) -> Optional[str]:
        scope = Context(parent=command.context)
        for param, value in zip(command.params, args):
            scope.set_variable(param, value)

        sub = Interpreter(command.body, self.state, scope, name=command.name, depth=self.depth + 1)
        saved_out = self.state.out
        if command.out is not None:
            self.state.out = command.out
        try:
            return await sub.run()
        finally:
            self.state.out = saved_out
            self._trace.append(f"[{sub.trace}]\n")

    async def read_operand(self, node: Node) -> str:
        """Reduce an operand to its string value by substitution."""
        parts: list[str] = []
        for child in node.children:
            if child.type == NodeType.NAME:
                parts.append(await self.read_variable(child))
            elif child.type == NodeType.PROGRAM:
                parts.append(await self.evaluate_script(child.value or "") or "")
            elif child.type == NodeType.LIST:
                parts.append(await self.read_operand(child))
            else:
                parts.append(child.value or "")
        return "".join(parts)

    async def read_variable(self, node: Node) -> str:
        """Resolve a $name reference.

        An array index containing substitutions is substituted first.
        """
        name = node.value or ""
        base, index = split_element_name(name)
        if index is None:
            value = self.scope.get_variable(name)
        else:
            if "$" in index or "[" in index:
                index = await self.read_operand(parse_substitutions(index))
            value = self.scope.get_array_element(base, index)
        if value is None:
            raise ExecutionError(f'can\'t read "{name}": no such variable', node)
        return value

    async def evaluate_script(self, script: str) -> Optional[str]:
        """Evaluate a nested script in the current scope.

        Errors other than limit violations are logged and yield None.
        """
        sub = Interpreter(script, self.state, self.scope, name="nested script", depth=self.depth + 1)
        try:
            return await sub.run()
        except ExecutionLimitError:
            raise
        except TclError as error:
            LOG.error("Error in nested script: %s", error)
            return None
        finally:
            self._trace.append(f"[{sub.trace}]\n")

    async def evaluate_expression(self, text: str, node: Node) -> str:
        """Substitute variables and commands in text, then evaluate it."""
        substituted = await self.read_operand(parse_substitutions(text))
        return evaluate_expression(substituted)

    async def evaluate_condition(self, text: str, node: Node) -> bool:
        """Evaluate text as an expression and read the result as a boolean."""
        value = await self.evaluate_expression(text, node)
        truth = read_boolean(value)
        if truth is None:
            raise ExecutionError(f'expected boolean value but got "{value}"', node)
        return truth
