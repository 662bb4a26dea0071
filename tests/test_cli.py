"""Tests for the vtlite command line."""

import logging

import pytest
from typer.testing import CliRunner

from vtlite.cli.main import typer_app
from vtlite.renderer import backends

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_vtlite_logger():
    logger = logging.getLogger("vtlite")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def template_file(tmp_path):
    path = tmp_path / "greeting.vm"
    path.write_text("#if($name == \"\")nobody#else Hello $name, $age#end\n")
    return path


def test_render_with_var(template_file):
    result = runner.invoke(typer_app, [str(template_file), "--var", "name=Ada"])
    assert result.exit_code == 0
    assert result.output == " Hello Ada, \n"


def test_render_with_values_file_and_override(template_file, tmp_path):
    """--var values win over the values file."""
    values = tmp_path / "values.yaml"
    values.write_text("name: Grace\nage: 85\n")
    result = runner.invoke(
        typer_app, [str(template_file), "-f", str(values), "-D", "age=86"]
    )
    assert result.exit_code == 0
    assert result.output == " Hello Grace, 86\n"


def test_writes_output_file(template_file, tmp_path):
    out = tmp_path / "out" / "result.txt"
    result = runner.invoke(
        typer_app, [str(template_file), "--var", "name=", "-o", str(out)]
    )
    assert result.exit_code == 0
    assert out.read_text() == "nobody\n"


def test_template_error_exits_with_status_1(tmp_path):
    path = tmp_path / "broken.vm"
    path.write_text("#if(true)\nnever closed")
    result = runner.invoke(typer_app, [str(path)])
    assert result.exit_code == 1
    assert "Error: Unclosed #if block" in result.output


def test_bad_var_pair_exits_with_status_1(template_file):
    result = runner.invoke(typer_app, [str(template_file), "--var", "novalue"])
    assert result.exit_code == 1
    assert "NAME=VALUE" in result.output


def test_values_file_must_be_mapping(template_file, tmp_path):
    values = tmp_path / "values.yaml"
    values.write_text("- a\n- b\n")
    result = runner.invoke(typer_app, [str(template_file), "-f", str(values)])
    assert result.exit_code == 1
    assert "mapping" in result.output


def test_prefer_velocity_falls_back(template_file, monkeypatch):
    """With no usable Velocity output the built-in renderer is used."""
    monkeypatch.setattr(backends, "velocity_renderer", lambda t, c: None)
    result = runner.invoke(
        typer_app, [str(template_file), "--prefer-velocity", "--var", "name=Ada"]
    )
    assert result.exit_code == 0
    assert "Hello Ada" in result.output


def test_version():
    result = runner.invoke(typer_app, ["--version"])
    assert result.exit_code == 0
    assert result.output.startswith("vtlite ")
