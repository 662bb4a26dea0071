from __future__ import annotations

from typing import Any, Tuple, Union

import msgspec


class Node(msgspec.Struct, frozen=True):
    pass


class Literal(Node, frozen=True):
    """A number, string, boolean or null literal."""

    value: Any


class Variable(Node, frozen=True):
    """A `$name` reference, resolved against the render context."""

    name: str


class Name(Node, frozen=True):
    """A bare name such as `Math`, resolved against the evaluation globals."""

    name: str


class Member(Node, frozen=True):
    target: Expr
    name: str


class Call(Node, frozen=True):
    callee: Expr
    args: Tuple[Expr, ...] = ()


class Unary(Node, frozen=True):
    op: str
    operand: Expr


class Binary(Node, frozen=True):
    """Arithmetic, equality and relational operators."""

    op: str
    left: Expr
    right: Expr


class Logical(Node, frozen=True):
    """Short-circuiting `&&` and `||`."""

    op: str
    left: Expr
    right: Expr


Expr = Union[Literal, Variable, Name, Member, Call, Unary, Binary, Logical]
