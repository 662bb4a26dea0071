"""vtlite Exceptions

Errors raised while tokenizing, parsing or evaluating a template.
"""

from __future__ import annotations

from typing import Optional


def describe_position(text: str, offset: int) -> str:
    """Return a human readable ``line N, column M`` for an offset into text."""
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return f"line {line}, column {column}"


class VtliteError(Exception):
    """Base exception for all template errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TokenizeError(VtliteError):
    """Raised when a parenthesized directive is never closed."""

    def __init__(self, message: str, offset: int):
        self.offset = offset
        super().__init__(message)


class DirectiveSyntaxError(VtliteError):
    """Raised when a #set body is not of the form `$name = expression`."""

    pass


class StructuralError(VtliteError):
    """Raised for #elseif/#else/#end without #if, or an unclosed #if."""

    pass


class EvaluationError(VtliteError):
    """Raised when an expression cannot be parsed or evaluated."""

    def __init__(self, message: str, expression: Optional[str] = None):
        self.expression = expression
        if expression is not None:
            message = f"{message} in expression: {expression!r}"
        super().__init__(message)
