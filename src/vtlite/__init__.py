"""vtlite - a small, sandboxed Velocity-style template renderer.

Supports `#set`, `#if`, `#elseif`, `#else`, `#end` and `$name` interpolation.
Numbers assigned with `#set` are truncated toward zero.
"""

from vtlite._version import __version__
from vtlite.ast import tokenize
from vtlite.errors import (
    DirectiveSyntaxError,
    EvaluationError,
    StructuralError,
    TokenizeError,
    VtliteError,
)
from vtlite.expr import evaluate_expression
from vtlite.renderer import (
    RenderOptions,
    create_context,
    interpolate,
    render,
    render_template,
)

__all__ = [
    "__version__",
    "DirectiveSyntaxError",
    "EvaluationError",
    "RenderOptions",
    "StructuralError",
    "TokenizeError",
    "VtliteError",
    "create_context",
    "evaluate_expression",
    "interpolate",
    "render",
    "render_template",
    "tokenize",
]
