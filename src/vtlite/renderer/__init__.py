"""Renderer - context building, interpolation and directive interpretation."""

from vtlite.renderer.backends import AlternateRenderer, render_template, velocity_renderer
from vtlite.renderer.context import assign, create_context
from vtlite.renderer.interpolate import interpolate
from vtlite.renderer.interpreter import Frame, Interpreter, normalize_value, render
from vtlite.renderer.options import RenderOptions

__all__ = [
    "AlternateRenderer",
    "Frame",
    "Interpreter",
    "RenderOptions",
    "assign",
    "create_context",
    "interpolate",
    "normalize_value",
    "render",
    "render_template",
    "velocity_renderer",
]
