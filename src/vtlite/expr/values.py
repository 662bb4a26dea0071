"""Value helpers shared by the evaluator, the interpolator and the builtins."""

import math
import re
from typing import Any

NUMERIC_LIKE = re.compile(r"-?\d+(\.\d+)?")


def is_number(value: Any) -> bool:
    """True for ints and floats, but not for booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def coerce_numeric_like(value: Any) -> Any:
    """Turn strings such as "42", " -7 " or "3.5" into numbers.

    Anything that does not look like a plain decimal number is returned
    unchanged, including the empty string.
    """
    if isinstance(value, str):
        trimmed = value.strip()
        if trimmed and NUMERIC_LIKE.fullmatch(trimmed):
            if "." in trimmed:
                return float(trimmed)
            return int(trimmed)
    return value


def to_text(value: Any) -> str:
    """String form used when a value is written into output text.

    Absent values become the empty string, booleans are lower case and
    integral floats drop their fractional part (``5.0`` renders as ``5``).
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def truthy(value: Any) -> bool:
    """Truthiness of a template value. Mappings and namespaces are always true."""
    if value is None:
        return False
    if isinstance(value, (bool, int, float, str)):
        return bool(value)
    return True
