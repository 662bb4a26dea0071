"""Context builder - the variable namespace for one render pass."""

import logging
from typing import Any, Dict, Mapping, MutableMapping, Optional

from vtlite.expr.builtins import BUILT_INS, RESERVED_NAMES

log = logging.getLogger(__name__)


def create_context(user_context: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Build a fresh context: builtins first, then the caller's values.

    Caller entries that collide with a builtin name are dropped; builtins
    always win.
    """
    context: Dict[str, Any] = dict(BUILT_INS)

    for key, value in (user_context or {}).items():
        if key in RESERVED_NAMES:
            log.debug("Ignoring context value for reserved name %r", key)
            continue
        context[key] = value

    return context


def assign(context: MutableMapping[str, Any], name: str, value: Any) -> bool:
    """Store `value` under `name` unless the name is reserved.

    Returns:
        True if the value was stored, False if the write was dropped.
    """
    if name in RESERVED_NAMES:
        log.debug("Ignoring #set of reserved name %r", name)
        return False
    context[name] = value
    return True
