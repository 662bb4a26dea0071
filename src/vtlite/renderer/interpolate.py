"""Text interpolation of $name references."""

import re
from typing import Any, Mapping

from vtlite.expr.values import to_text

REFERENCE = re.compile(r"\$([A-Za-z_][A-Za-z0-9_]*)")


def interpolate(text: str, context: Mapping[str, Any]) -> str:
    """Replace every `$name` in text with the string form of its value.

    Absent and null values become the empty string.

    Example:
        >>> interpolate("Hello $name!", {"name": "world"})
        'Hello world!'
    """
    return REFERENCE.sub(lambda match: to_text(context.get(match.group(1))), text)
