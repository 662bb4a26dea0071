"""Evaluator - interprets expression trees against a render context."""

from __future__ import annotations

import operator
from collections.abc import Mapping
from typing import Any, Callable, Dict

from vtlite.errors import EvaluationError
from vtlite.expr.builtins import GLOBALS, BuiltinFunction, Namespace
from vtlite.expr.node import (
    Binary,
    Call,
    Expr,
    Literal,
    Logical,
    Member,
    Name,
    Unary,
    Variable,
)
from vtlite.expr.parser import parse_expression
from vtlite.expr.values import coerce_numeric_like, is_number, to_text, truthy

_RELATIONAL: Dict[str, Callable[[Any, Any], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def _remainder(left: Any, right: Any) -> Any:
    # Sign follows the dividend, as in C
    result = abs(left) % abs(right)
    return -result if left < 0 else result


_ARITHMETIC: Dict[str, Callable[[Any, Any], Any]] = {
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "%": _remainder,
}


def loose_equals(left: Any, right: Any) -> bool:
    """Equality where a number equals a string that spells the same number."""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if is_number(left) and isinstance(right, str):
        right = coerce_numeric_like(right)
    elif isinstance(left, str) and is_number(right):
        left = coerce_numeric_like(left)
    return left == right


class Evaluator:
    """Evaluates `Expr` trees.

    Variables are looked up in `context`; bare names only in the builtin
    globals. Nothing else is reachable from an expression.
    """

    def __init__(self, context: Mapping[str, Any]):
        self.context = context

    def resolve(self, name: str) -> Any:
        return coerce_numeric_like(self.context.get(name))

    def evaluate(self, node: Expr) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Variable):
            return self.resolve(node.name)
        if isinstance(node, Name):
            if node.name not in GLOBALS:
                raise EvaluationError(f"Unknown name '{node.name}'")
            return GLOBALS[node.name]
        if isinstance(node, Logical):
            left = self.evaluate(node.left)
            if node.op == "&&":
                return self.evaluate(node.right) if truthy(left) else left
            return left if truthy(left) else self.evaluate(node.right)
        if isinstance(node, Unary):
            return self._unary(node.op, self.evaluate(node.operand))
        if isinstance(node, Binary):
            return self._binary(
                node.op, self.evaluate(node.left), self.evaluate(node.right)
            )
        if isinstance(node, Member):
            return self._member(self.evaluate(node.target), node.name)
        if isinstance(node, Call):
            callee = self.evaluate(node.callee)
            args = [self.evaluate(arg) for arg in node.args]
            if not isinstance(callee, BuiltinFunction):
                raise EvaluationError(f"{to_text(callee)!r} is not a function")
            return callee(*args)
        raise EvaluationError(f"Unsupported expression node {type(node).__name__}")

    def _member(self, target: Any, name: str) -> Any:
        if isinstance(target, Namespace):
            return target.member(name)
        if isinstance(target, Mapping):
            return coerce_numeric_like(target.get(name))
        raise EvaluationError(f"Cannot read property '{name}' of {target!r}")

    def _unary(self, op: str, value: Any) -> Any:
        if op == "!":
            return not truthy(value)
        return -self._number(op, value)

    def _binary(self, op: str, left: Any, right: Any) -> Any:
        if op == "==":
            return loose_equals(left, right)
        if op == "!=":
            return not loose_equals(left, right)
        if op in _RELATIONAL:
            return self._compare(op, left, right)
        if op == "+" and (isinstance(left, str) or isinstance(right, str)):
            return to_text(left) + to_text(right)
        if op == "+":
            return self._number(op, left) + self._number(op, right)

        left, right = self._number(op, left), self._number(op, right)
        if op in ("/", "%") and right == 0:
            raise EvaluationError("Division by zero")
        return _ARITHMETIC[op](left, right)

    def _compare(self, op: str, left: Any, right: Any) -> bool:
        if not (isinstance(left, str) and isinstance(right, str)):
            left, right = coerce_numeric_like(left), coerce_numeric_like(right)
            # Absent or non-numeric operands never satisfy an ordering
            if not (is_number(left) and is_number(right)):
                return False
        return _RELATIONAL[op](left, right)

    @staticmethod
    def _number(op: str, value: Any) -> Any:
        coerced = coerce_numeric_like(value)
        if not is_number(coerced):
            raise EvaluationError(f"Unsupported operand for '{op}': {value!r}")
        return coerced


def evaluate_expression(expression: str, context: Mapping[str, Any]) -> Any:
    """Parse and evaluate `expression` against `context`.

    Raises:
        EvaluationError: On malformed syntax or an unevaluable expression.
            The error names the expression text.
    """
    try:
        return Evaluator(context).evaluate(parse_expression(expression))
    except EvaluationError as exc:
        if exc.expression is None:
            raise EvaluationError(exc.message, expression) from exc
        raise
    except (ArithmeticError, ValueError, TypeError, RecursionError) as exc:
        raise EvaluationError(str(exc), expression) from exc
