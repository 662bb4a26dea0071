"""Builtin namespaces and helpers visible to template expressions.

Only the objects in this module can be called from a template. Each
namespace exposes an explicit member table; no Python attribute of any
value is reachable from an expression.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping

from vtlite.errors import EvaluationError
from vtlite.expr.values import coerce_numeric_like, is_number, to_text

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class BuiltinFunction:
    """A named, callable helper."""

    name: str
    fn: Callable[..., Any]

    def __call__(self, *args: Any) -> Any:
        return self.fn(*args)

    def __str__(self) -> str:
        return f"function {self.name}()"


class Namespace:
    """A read-only group of builtin functions, e.g. ``Integer`` or ``Math``."""

    def __init__(self, name: str, members: Dict[str, Callable[..., Any]]):
        self._name = name
        self._members = MappingProxyType(
            {key: BuiltinFunction(f"{name}.{key}", fn) for key, fn in members.items()}
        )

    def member(self, key: str) -> BuiltinFunction:
        try:
            return self._members[key]
        except KeyError:
            raise EvaluationError(f"{self._name} has no member '{key}'") from None

    def __getattr__(self, key: str) -> BuiltinFunction:
        # Lets attribute-based engines (Velocity) call $Integer.parseInt(...)
        if key.startswith("_"):
            raise AttributeError(key)
        try:
            return self._members[key]
        except KeyError:
            raise AttributeError(key) from None

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Namespace({self._name!r}, members={sorted(self._members)})"


def parse_int(value: Any) -> int:
    """Parse the leading base-10 integer of a value's text form.

    >>> parse_int("251229")
    251229
    >>> parse_int(" 12px")
    12
    """
    match = _LEADING_INT.match(to_text(value))
    if not match:
        raise EvaluationError(f"Unable to parse integer from value: {value!r}")
    return int(match.group(1))


def to_number(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    coerced = coerce_numeric_like(value)
    if not is_number(coerced):
        raise EvaluationError(f"Unable to convert value to a number: {value!r}")
    return coerced


def _numeric(name: str, *args: Any) -> list:
    values = [coerce_numeric_like(arg) for arg in args]
    for original, value in zip(args, values):
        if not is_number(value):
            raise EvaluationError(f"{name} expects numbers, got {original!r}")
    return values


def _unary(name: str, fn: Callable[[Any], Any]) -> Callable[[Any], Any]:
    def helper(value: Any) -> Any:
        (number,) = _numeric(name, value)
        return fn(number)

    return helper


def _variadic(name: str, fn: Callable[..., Any]) -> Callable[..., Any]:
    def helper(*args: Any) -> Any:
        if not args:
            raise EvaluationError(f"{name} expects at least one argument")
        return fn(*_numeric(name, *args))

    return helper


def _round_half_up(value: Any) -> int:
    return math.floor(value + 0.5)


def _pow(base: Any, exponent: Any) -> float:
    base, exponent = _numeric("Math.pow", base, exponent)
    return math.pow(base, exponent)


INTEGER = Namespace("Integer", {"parseInt": parse_int})

MATH = Namespace(
    "Math",
    {
        "floor": _unary("Math.floor", math.floor),
        "ceil": _unary("Math.ceil", math.ceil),
        "round": _unary("Math.round", _round_half_up),
        "trunc": _unary("Math.trunc", math.trunc),
        "abs": _unary("Math.abs", abs),
        "sqrt": _unary("Math.sqrt", math.sqrt),
        "min": _variadic("Math.min", min),
        "max": _variadic("Math.max", max),
        "pow": _pow,
    },
)

# Context entries that templates and callers can never overwrite.
BUILT_INS: Mapping[str, Any] = MappingProxyType({"Integer": INTEGER})

RESERVED_NAMES = frozenset(BUILT_INS)

# Bare names an expression may use without a `$` prefix.
GLOBALS: Mapping[str, Any] = MappingProxyType(
    {
        "Math": MATH,
        "Number": BuiltinFunction("Number", to_number),
        "parseInt": BuiltinFunction("parseInt", parse_int),
    }
)
