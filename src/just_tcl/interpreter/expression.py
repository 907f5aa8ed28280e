"""Expression evaluation.

Walks an expression tree producing :class:`OpResult` values that are
integers, doubles or strings. Integer arithmetic wraps at 64 bits.
"""

from __future__ import annotations

import math
from typing import Callable, Union

from ..ast.types import Node, NodeType
from ..errors import ExecutionError
from ..parser.parser import parse_expression
from ..parser.tcl_list import TclList

Value = Union[int, float, str]


def to_int64(value: int) -> int:
    """Wrap an integer to the signed 64-bit range."""
    value &= 0xFFFFFFFFFFFFFFFF
    if value >= 0x8000000000000000:
        value -= 0x10000000000000000
    return value


def format_double(value: float) -> str:
    if math.isinf(value):
        return "Inf" if value > 0 else "-Inf"
    if math.isnan(value):
        return "NaN"
    return repr(value)


class OpResult:
    """Intermediate expression value."""

    __slots__ = ("value",)

    def __init__(self, value: Value):
        self.value = value

    @classmethod
    def from_text(cls, text: str) -> OpResult:
        """Read text as an integer, else a double, else keep the string."""
        try:
            return cls(to_int64(int(text)))
        except ValueError:
            pass
        try:
            return cls(float(text))
        except ValueError:
            return cls(text)

    @property
    def is_integer(self) -> bool:
        return isinstance(self.value, int)

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.value, (int, float))

    @property
    def truth(self) -> bool:
        return self.value != 0

    def __str__(self) -> str:
        if isinstance(self.value, float):
            return format_double(self.value)
        return str(self.value)

    def __repr__(self) -> str:
        return f"OpResult({self.value!r})"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


# Math functions by argument and result type
INT_TO_DOUBLE_FUNCTIONS: dict[str, Callable[[int], float]] = {
    "double": float,
}

DOUBLE_TO_INT_FUNCTIONS: dict[str, Callable[[float], int]] = {
    "round": _round_half_up,
    "int": math.trunc,
    "wide": math.trunc,
    "entier": math.trunc,
}

DOUBLE_TO_DOUBLE_FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "asin": math.asin,
    "acos": math.acos,
    "atan": math.atan,
    "sinh": math.sinh,
    "cosh": math.cosh,
    "tanh": math.tanh,
    "sqrt": math.sqrt,
    "exp": math.exp,
    "log": math.log,
    "log10": math.log10,
    "floor": math.floor,
    "ceil": math.ceil,
    "abs": abs,
}

INTEGER_OPERATORS = frozenset({"%", "<<", ">>", "&", "^", "|"})
NUMERIC_OPERATORS = frozenset({"-", "*", "/", "**", "<", ">", "<=", ">=", "&&", "||"})


def _int_divide(left: int, right: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


class ExpressionEvaluator:
    """Evaluates expression trees."""

    def evaluate(self, node: Node) -> OpResult:
        if node.type == NodeType.NUMBER:
            return OpResult.from_text(node.value or "")
        if node.type in (NodeType.QSTRING, NodeType.STRING):
            return OpResult(node.value or "")
        if node.type == NodeType.UNARYOP:
            return self._unary(node, self.evaluate(node.children[0]))
        if node.type == NodeType.BINARYOP:
            left = self.evaluate(node.children[0])
            right = self.evaluate(node.children[1])
            return self._binary(node, left, right)
        if node.type == NodeType.TERNARYOP:
            condition = self.evaluate(node.children[0])
            if not condition.is_numeric:
                raise ExecutionError(
                    "The first argument of a ternary operation must be a number!", node
                )
            return self.evaluate(node.children[1] if condition.truth else node.children[2])
        if node.type == NodeType.FUNC:
            return self._function(node, self.evaluate(node.children[0]))
        raise ExecutionError("Unexpected node in expression", node)

    def _unary(self, node: Node, operand: OpResult) -> OpResult:
        op = node.value
        if op == "~":
            if not operand.is_integer:
                raise ExecutionError("Operation ~ is only applicable to integer types", node)
            return OpResult(~operand.value)
        if not operand.is_numeric:
            raise ExecutionError(f"Operation {op} is only applicable to numeric types", node)
        if op == "+":
            return operand
        if op == "-":
            if operand.is_integer:
                return OpResult(to_int64(-operand.value))
            return OpResult(-operand.value)
        if op == "!":
            return OpResult(0 if operand.truth else 1)
        raise ExecutionError(f"Unknown operation {op}", node)

    def _binary(self, node: Node, left: OpResult, right: OpResult) -> OpResult:
        op = node.value or ""
        if op in ("eq", "=="):
            return OpResult(int(self._equal(left, right)))
        if op in ("ne", "!="):
            return OpResult(int(not self._equal(left, right)))
        if op in ("in", "ni"):
            found = str(left) in TclList.parse(str(right))
            return OpResult(int(found if op == "in" else not found))
        if op == "+":
            if left.is_numeric and right.is_numeric:
                return self._arithmetic(node, left, right)
            return OpResult(str(left) + str(right))
        if op in INTEGER_OPERATORS:
            if not (left.is_integer and right.is_integer):
                raise ExecutionError(f"Operation {op} is only applicable to integer types", node)
            return self._integer(node, left.value, right.value)
        if op in NUMERIC_OPERATORS:
            if not (left.is_numeric and right.is_numeric):
                raise ExecutionError(f"Operation {op} is only applicable to numeric types", node)
            if op in ("&&", "||"):
                truth = (left.truth and right.truth) if op == "&&" else (left.truth or right.truth)
                return OpResult(int(truth))
            if op in ("<", ">", "<=", ">="):
                return OpResult(int(self._compare(op, left.value, right.value)))
            return self._arithmetic(node, left, right)
        raise ExecutionError(f"Unknown operation {op}", node)

    def _equal(self, left: OpResult, right: OpResult) -> bool:
        if left.is_numeric and right.is_numeric:
            return left.value == right.value
        return str(left) == str(right)

    def _compare(self, op: str, left: Union[int, float], right: Union[int, float]) -> bool:
        if op == "<":
            return left < right
        if op == ">":
            return left > right
        if op == "<=":
            return left <= right
        return left >= right

    def _arithmetic(self, node: Node, left: OpResult, right: OpResult) -> OpResult:
        op = node.value
        a, b = left.value, right.value
        if op == "**":
            try:
                return OpResult(math.pow(a, b))
            except (OverflowError, ValueError) as error:
                raise ExecutionError(f"Operation ** failed: {error}", node) from error
        if op == "/" and b == 0:
            raise ExecutionError("divide by zero", node)
        if left.is_integer and right.is_integer:
            if op == "+":
                return OpResult(to_int64(a + b))
            if op == "-":
                return OpResult(to_int64(a - b))
            if op == "*":
                return OpResult(to_int64(a * b))
            return OpResult(to_int64(_int_divide(a, b)))
        a, b = float(a), float(b)
        if op == "+":
            return OpResult(a + b)
        if op == "-":
            return OpResult(a - b)
        if op == "*":
            return OpResult(a * b)
        return OpResult(a / b)

    def _integer(self, node: Node, a: int, b: int) -> OpResult:
        op = node.value
        if op == "%":
            if b == 0:
                raise ExecutionError("divide by zero", node)
            return OpResult(a - b * _int_divide(a, b))
        if op == "<<":
            return OpResult(to_int64(a << (b & 63)))
        if op == ">>":
            return OpResult(a >> (b & 63))
        if op == "&":
            return OpResult(a & b)
        if op == "^":
            return OpResult(a ^ b)
        return OpResult(a | b)

    def _function(self, node: Node, argument: OpResult) -> OpResult:
        name = node.value or ""
        try:
            if name in INT_TO_DOUBLE_FUNCTIONS:
                if not argument.is_integer:
                    raise ExecutionError(f"Function {name} requires an integer argument", node)
                return OpResult(INT_TO_DOUBLE_FUNCTIONS[name](argument.value))
            if name in DOUBLE_TO_INT_FUNCTIONS:
                if not argument.is_numeric:
                    raise ExecutionError(f"Function {name} requires a numeric argument", node)
                return OpResult(to_int64(DOUBLE_TO_INT_FUNCTIONS[name](float(argument.value))))
            if name in DOUBLE_TO_DOUBLE_FUNCTIONS:
                if not argument.is_numeric:
                    raise ExecutionError(f"Function {name} requires a numeric argument", node)
                return OpResult(float(DOUBLE_TO_DOUBLE_FUNCTIONS[name](float(argument.value))))
        except (OverflowError, ValueError) as error:
            raise ExecutionError(f"Function {name} failed: {error}", node) from error
        raise ExecutionError(f"Unknown math function {name}", node)


def evaluate_expression(text: str) -> str:
    """Parse and evaluate an already substituted expression."""
    return str(ExpressionEvaluator().evaluate(parse_expression(text)))
