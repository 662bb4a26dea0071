"""Alternate rendering backends and the `render_template` entry point.

An alternate renderer is any callable ``(template, context) -> str | None``.
It is tried first when `prefer_velocity` is set; a None result or any
exception falls through to the built-in interpreter.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Protocol

from vtlite.renderer.context import create_context
from vtlite.renderer.interpreter import render
from vtlite.renderer.options import RenderOptions

log = logging.getLogger(__name__)


class AlternateRenderer(Protocol):
    def __call__(
        self, template: str, user_context: Optional[Mapping[str, Any]]
    ) -> Optional[str]: ...


def velocity_renderer(
    template: str, user_context: Optional[Mapping[str, Any]] = None
) -> Optional[str]:
    """Render with the `airspeed` Velocity engine (the `velocity` extra).

    The engine starts from a context built by `create_context`, so caller
    values cannot replace `Integer`. Assignments made by the template itself
    follow airspeed's own rules and are not filtered.

    Raises ImportError when airspeed is not installed.
    """
    import airspeed

    context = create_context(user_context)
    return airspeed.Template(template).merge(context)


def render_template(
    template: str,
    user_context: Optional[Mapping[str, Any]] = None,
    options: "RenderOptions | Mapping[str, Any] | None" = None,
    alternate: Optional[AlternateRenderer] = None,
) -> str:
    """Render a template, optionally preferring an alternate backend.

    Args:
        template: Template text.
        user_context: Caller supplied values.
        options: `RenderOptions` or a mapping such as ``{"preferVelocity": True}``.
        alternate: Renderer to try first. Defaults to `velocity_renderer`.

    Returns:
        The alternate renderer's string if it produced one, otherwise the
        output of the built-in `render`.
    """
    opts = RenderOptions.coerce(options)

    if opts.prefer_velocity:
        renderer = alternate or velocity_renderer
        try:
            rendered = renderer(template, user_context)
        except ImportError as exc:
            log.debug("Alternate renderer unavailable, using built-in renderer: %s", exc)
        except Exception as exc:
            log.warning("Alternate renderer failed, using built-in renderer: %s", exc)
        else:
            if isinstance(rendered, str):
                return rendered
            log.warning(
                "Alternate renderer returned %s, using built-in renderer",
                type(rendered).__name__,
            )

    return render(template, user_context)
