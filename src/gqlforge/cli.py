"""gqlforge command-line interface."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from gqlforge import __version__
from gqlforge.config import CONFIG_NAME, ForgeConfig, find_config, load_config
from gqlforge.errors import Diagnostic, DiagnosticRenderer, GenerationError, Severity
from gqlforge.generator import Generator
from gqlforge.loader import load_model
from gqlforge.model import SchemaModel
from gqlforge.validate import validate_model


def _render(diagnostics: list[Diagnostic]) -> None:
    renderer = DiagnosticRenderer(color=True)
    for diag in diagnostics:
        click.echo(renderer.render(diag), err=True)


def _load_project(path: str) -> tuple[ForgeConfig, Path, SchemaModel]:
    """Find the config above *path* and load the model it points at."""
    try:
        config_path = find_config(Path(path))
    except FileNotFoundError:
        click.echo(f"error: no {CONFIG_NAME} found", err=True)
        raise SystemExit(1)

    config = load_config(config_path)
    project_dir = config_path.parent
    model_path = project_dir / config.generate.model
    if not model_path.is_file():
        click.echo(f"error: model file not found: {model_path}", err=True)
        raise SystemExit(1)

    try:
        model = config.apply(load_model(model_path))
    except GenerationError as e:
        _render(e.diagnostics)
        raise SystemExit(1)
    return config, project_dir, model


@click.group()
@click.version_option(__version__, prog_name="gqlforge")
@click.option("-v", "--verbose", is_flag=True, help="Log generation steps.")
def main(verbose: bool) -> None:
    """Generate GraphQL field dispatchers from a resolved schema model."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )


@main.command()
@click.argument("path", default=".", type=click.Path(exists=True))
@click.option("--stdout", "to_stdout", is_flag=True, help="Write the module to stdout.")
@click.option("--check", is_flag=True, help="Fail if the output file is out of date.")
def generate(path: str, to_stdout: bool, check: bool) -> None:
    """Generate the resolver module for a project."""
    config, project_dir, model = _load_project(path)

    generator = Generator(model, scalars=config.scalars)
    try:
        source = generator.generate()
    except GenerationError as e:
        _render(e.diagnostics)
        raise SystemExit(1)
    _render(generator.warnings)

    if to_stdout:
        click.echo(source, nl=False)
        return

    output = project_dir / config.generate.output
    if check:
        if not output.is_file() or output.read_text() != source:
            click.echo(f"would regenerate {output}")
            raise SystemExit(1)
        click.echo(f"{output} is up to date")
        return

    output.write_text(source)
    click.echo(f"generated {output}")


@main.command()
@click.argument("path", default=".", type=click.Path(exists=True))
def check(path: str) -> None:
    """Check a project's model without generating."""
    config, _project_dir, model = _load_project(path)

    diagnostics = validate_model(model, config.scalars)
    _render(diagnostics)
    errors = [d for d in diagnostics if d.severity == Severity.ERROR]
    if errors:
        click.echo(f"{len(errors)} error(s)", err=True)
        raise SystemExit(1)
    click.echo(f"checked {len(model.objects)} objects: no errors")
