"""Render options."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field


class RenderOptions(BaseModel):
    """Options accepted by `render_template`."""

    model_config = {"populate_by_name": True, "extra": "ignore"}

    prefer_velocity: bool = Field(
        default=False,
        alias="preferVelocity",
        description="Try the alternate (Velocity) renderer before the built-in one",
    )

    @classmethod
    def coerce(cls, options: "RenderOptions | Mapping[str, Any] | None") -> "RenderOptions":
        """Accept a RenderOptions instance, a plain mapping, or None."""
        if options is None:
            return cls()
        if isinstance(options, RenderOptions):
            return options
        return cls.model_validate(dict(options))
