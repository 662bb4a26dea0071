"""vtlite CLI Main Entry Point

Usage:
    vtlite template.vm                         # render to stdout
    vtlite template.vm --values values.yaml    # values from a YAML mapping
    vtlite template.vm --var name=Ada          # values from the command line
    vtlite template.vm -o out.txt              # write to a file
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from vtlite._version import __version__
from vtlite.renderer import RenderOptions, render_template

from .utils import handle_error, load_values_yaml, parse_var_pairs, setup_logging

log = logging.getLogger(__name__)

typer_app = typer.Typer()


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"vtlite {__version__}")
        raise typer.Exit()


@typer_app.command()
def cli(
    template: Path = typer.Argument(..., help="Template file to render."),
    values: Optional[Path] = typer.Option(
        None, "--values", "-f", help="YAML file with a mapping of template values."
    ),
    var: Optional[List[str]] = typer.Option(
        None, "--var", "-D", help="NAME=VALUE pair; overrides the values file."
    ),
    prefer_velocity: bool = typer.Option(
        False, "--prefer-velocity", help="Try the Velocity engine first."
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the result to a file instead of stdout."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Render a #set/#if template with the given values."""
    setup_logging(verbose)

    try:
        source = template.read_text(encoding="utf-8")
        context = load_values_yaml(values)
        context.update(parse_var_pairs(var))
        log.info("Rendering %s with %d values", template, len(context))

        rendered = render_template(
            source, context, RenderOptions(prefer_velocity=prefer_velocity)
        )
    except Exception as exc:
        handle_error(exc)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
        log.info("Wrote %s", output)
    else:
        typer.echo(rendered, nl=False)


def app() -> None:
    """Entry point for the installed `vtlite` script."""
    typer_app()


if __name__ == "__main__":
    app()
