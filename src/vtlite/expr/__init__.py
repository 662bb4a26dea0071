"""Sandboxed expression language used by #set, #if and #elseif."""

from vtlite.expr.builtins import BUILT_INS, GLOBALS, RESERVED_NAMES, Namespace
from vtlite.expr.evaluator import Evaluator, evaluate_expression
from vtlite.expr.parser import parse_expression
from vtlite.expr.values import coerce_numeric_like, to_text

__all__ = [
    "BUILT_INS",
    "GLOBALS",
    "RESERVED_NAMES",
    "Namespace",
    "Evaluator",
    "evaluate_expression",
    "parse_expression",
    "coerce_numeric_like",
    "to_text",
]
