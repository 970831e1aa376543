"""
Arithmetic tool that evaluates expressions without ``eval``.
"""

from __future__ import annotations

import ast
import math
import operator
from typing import Callable, Dict, Type, Union

from ..core.primitives.errors import InvalidToolInputError, ToolExecutionError
from ..core.primitives.tools import BaseTool

Number = Union[int, float]

_BINARY_OPERATORS: Dict[Type[ast.operator], Callable[[Number, Number], Number]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPERATORS: Dict[Type[ast.unaryop], Callable[[Number], Number]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

# Upper bound on the size of a power result, in bits.
MAX_RESULT_BITS = 4096


def evaluate_expression(expression: str) -> Number:
    tree = ast.parse(expression, mode="eval")
    return _evaluate(tree.body)


def _evaluate(node: ast.AST) -> Number:
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
        return node.value
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPERATORS:
        left = _evaluate(node.left)
        right = _evaluate(node.right)
        if isinstance(node.op, ast.Pow):
            _check_power(left, right)
        return _BINARY_OPERATORS[type(node.op)](left, right)
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPERATORS:
        return _UNARY_OPERATORS[type(node.op)](_evaluate(node.operand))
    raise ValueError(f"Unsupported expression element: {ast.dump(node)}")


def _check_power(base: Number, exponent: Number) -> None:
    if abs(base) <= 1 or exponent <= 0:
        return
    if exponent * math.log2(abs(base)) > MAX_RESULT_BITS:
        raise ValueError(f"Result of {base} ** {exponent} is too large")


def format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class CalculatorTool(BaseTool):
    name = "calculator"
    description = "Performs mathematical calculations"

    def execute(self, tool_input: str) -> str:
        expression = tool_input.strip()
        if not expression:
            raise InvalidToolInputError(tool_input)
        try:
            # str() of an oversized int raises ValueError too
            return format_number(evaluate_expression(expression))
        except (SyntaxError, ValueError, ZeroDivisionError, OverflowError) as exc:
            raise ToolExecutionError(f"Could not evaluate expression: {tool_input}") from exc
