"""Directive interpreter - runs the token stream through the #if frame stack."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, MutableMapping, Optional

from vtlite.ast.spec import Else, ElseIf, End, If, Set, Text, Token
from vtlite.ast.tokenizer import tokenize
from vtlite.errors import (
    DirectiveSyntaxError,
    EvaluationError,
    StructuralError,
    describe_position,
)
from vtlite.expr.builtins import RESERVED_NAMES
from vtlite.expr.evaluator import evaluate_expression
from vtlite.expr.values import truthy
from vtlite.renderer.context import assign, create_context
from vtlite.renderer.interpolate import interpolate

log = logging.getLogger(__name__)

SET_BODY = re.compile(r"\s*\$([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(\S.*)", re.DOTALL)


@dataclass
class Frame:
    """Activation record of one open #if/#elseif/#else chain."""

    parent_active: bool
    active: bool
    branch_satisfied: bool
    offset: int = 0  # where the #if was opened


def normalize_value(value: Any, expression: Optional[str] = None) -> Any:
    """Truncate non-integer numbers toward zero; pass everything else through."""
    if isinstance(value, float):
        if not math.isfinite(value):
            raise EvaluationError(f"Cannot assign non-finite number {value}", expression)
        return math.trunc(value)
    return value


class Interpreter:
    """Consumes tokens and produces the rendered output.

    The context is mutated in place by #set directives.
    """

    def __init__(self, context: MutableMapping[str, Any], template: str = ""):
        self.context = context
        self.template = template
        self.frames: List[Frame] = []
        self.output: List[str] = []
        self._handlers: Dict[type, Callable[[Any], None]] = {
            Text: self._text,
            Set: self._set,
            If: self._if,
            ElseIf: self._elseif,
            Else: self._else,
            End: self._end,
        }

    @property
    def active(self) -> bool:
        """True when every open frame lets its body run.

        Frames below the top are never mutated while the top is open, so the
        top frame's `parent_active` already holds the AND of everything below.
        """
        if not self.frames:
            return True
        top = self.frames[-1]
        return top.parent_active and top.active

    def run(self, tokens: List[Token]) -> str:
        for token in tokens:
            self._handlers[type(token)](token)

        if self.frames:
            raise StructuralError(
                f"Unclosed #if block detected (opened at {self._where(self.frames[-1].offset)})"
            )
        return "".join(self.output)

    def _where(self, offset: int) -> str:
        return describe_position(self.template, offset)

    def _top(self, directive: str, offset: int) -> Frame:
        if not self.frames:
            raise StructuralError(
                f"{directive} without matching #if at {self._where(offset)}"
            )
        return self.frames[-1]

    # -- token handlers --------------------------------------------------

    def _text(self, token: Text) -> None:
        if self.active:
            self.output.append(interpolate(token.value, self.context))

    def _set(self, token: Set) -> None:
        if not self.active:
            return

        match = SET_BODY.fullmatch(token.content)
        if not match:
            raise DirectiveSyntaxError(
                f"Unable to parse set directive: {token.content!r} "
                f"at {self._where(token.offset)}"
            )
        name, expression = match.groups()
        if name in RESERVED_NAMES:
            log.debug("Ignoring #set of reserved name %r", name)
            return
        value = evaluate_expression(expression, self.context)
        assign(self.context, name, normalize_value(value, expression))

    def _if(self, token: If) -> None:
        parent_active = self.active
        condition_met = parent_active and truthy(
            evaluate_expression(token.content, self.context)
        )
        self.frames.append(
            Frame(
                parent_active=parent_active,
                active=condition_met,
                branch_satisfied=condition_met,
                offset=token.offset,
            )
        )

    def _elseif(self, token: ElseIf) -> None:
        frame = self._top("#elseif", token.offset)
        if not frame.parent_active or frame.branch_satisfied:
            frame.active = False
            return
        condition_met = truthy(evaluate_expression(token.content, self.context))
        frame.active = condition_met
        frame.branch_satisfied = condition_met

    def _else(self, token: Else) -> None:
        frame = self._top("#else", token.offset)
        should_activate = frame.parent_active and not frame.branch_satisfied
        frame.active = should_activate
        frame.branch_satisfied = frame.branch_satisfied or should_activate

    def _end(self, token: End) -> None:
        self._top("#end", token.offset)
        self.frames.pop()


def render(template: str, user_context: Optional[Mapping[str, Any]] = None) -> str:
    """Render a template with the built-in interpreter.

    Args:
        template: Template text using #set/#if/#elseif/#else/#end and $name.
        user_context: Caller supplied values. Builtin names are ignored.

    Returns:
        The rendered text.

    Raises:
        VtliteError: Any tokenize, syntax, structural or evaluation error.
    """
    context = create_context(user_context)
    tokens = tokenize(template)
    log.debug("Rendering template with %d tokens", len(tokens))
    return Interpreter(context, template).run(tokens)
