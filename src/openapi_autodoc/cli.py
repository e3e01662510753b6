"""CLI entry point for openapi-autodoc."""

import logging
import sys
from pathlib import Path

import click
import structlog

from openapi_autodoc.app.application import load_application
from openapi_autodoc.config import load_config
from openapi_autodoc.document.assembler import DocumentAssembler
from openapi_autodoc.document.serialize import FORMATS, dump_document
from openapi_autodoc.errors import AutodocError


def _configure_logging(verbose: bool) -> None:
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if verbose else logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


@click.group()
def main():
    """openapi-autodoc: generate an OpenAPI document from routes and validation rules."""
    pass


@main.command()
@click.argument("app_path")
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the document.")
@click.option("--format", "fmt", default=None, type=click.Choice(FORMATS), help="Output format (default: from the file extension).")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="Configuration file.")
@click.option("--title", default=None, help="Override the document title.")
@click.option("--version-tag", default=None, help="Override the document version.")
@click.option("--app-dir", default=".", type=click.Path(file_okay=False, path_type=Path), help="Directory added to the import path before loading APP_PATH.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def generate(app_path: str, output: Path, fmt: str | None, config_path: Path | None, title: str | None, version_tag: str | None, app_dir: Path, verbose: bool):
    """Generate the document for APP_PATH ("package.module:app")."""
    _configure_logging(verbose)
    if fmt is None:
        fmt = "yaml" if output.suffix.lower() in (".yml", ".yaml") else "json"

    click.echo(f"Loading application {app_path}...")
    sys.path.insert(0, str(app_dir.resolve()))
    try:
        app = load_application(app_path)
    except (ImportError, AttributeError, TypeError, ValueError) as e:
        raise click.ClickException(f"Cannot load application '{app_path}': {e}") from e

    try:
        config = load_config(config_path)
        if title:
            config.title = title
        if version_tag:
            config.version = version_tag
        document = DocumentAssembler(app, config).generate()
    except AutodocError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Documented {len(document.paths)} paths.")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dump_document(document, fmt), encoding="utf-8")
    click.echo(f"Document saved to {output}")
