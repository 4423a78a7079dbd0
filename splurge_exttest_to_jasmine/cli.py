"""Command-line interface for the Ext.Test to Jasmine conversion tool.

This module defines the public CLI commands of the
``splurge-exttest-to-jasmine`` application. It uses ``typer`` to expose the
program entrypoint while delegating the work to the programmatic API in
:mod:`splurge_exttest_to_jasmine.main`, so the same logic can be used from
Python code or the CLI.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from pathlib import Path

import typer

from . import main as main_module
from .cli_helpers import build_config, setup_logging, setup_logging_with_level
from .context import ContextManager
from .exceptions import ConfigurationError
from .helpers.path_utils import normalize_path_for_display

# Initialize typer app
app = typer.Typer(
    name="splurge-exttest-to-jasmine", help="Convert Ext.Test/YUI Test files to Jasmine specs", add_completion=False
)

logger = logging.getLogger(__name__)


@app.command("convert")
def convert(
    input_path: str = typer.Argument(..., help="Input test file, or a directory of test files"),
    output_path: str | None = typer.Argument(
        None, help="Output file (prints to stdout when omitted), or the output directory for a directory input"
    ),
    input_mask: str | None = typer.Option(
        None, "--input-mask", help="Wildcard mask selecting input files in a directory (default: *Test.js)"
    ),
    output_mask: str | None = typer.Option(
        None, "--output-mask", help="Wildcard mask naming output files; the input's '*' part fills its '*'"
    ),
    indent: str | None = typer.Option(
        None, "--indent", help="Indent unit of the generated code: 'tab' or a number of spaces (default: tab)"
    ),
    config_file: str | None = typer.Option(
        None, "--config", "-c", help="YAML configuration file to load settings from (flags override it)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the converted code instead of writing files", is_flag=True
    ),
    fail_fast: bool = typer.Option(False, "--fail-fast", help="Stop on the first file that fails", is_flag=True),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging output", is_flag=True),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    ),
) -> None:
    """Convert Ext.Test files to Jasmine.

    Examples:
        # Print the converted file
        splurge-exttest-to-jasmine convert MyTest.js

        # Convert one file to another
        splurge-exttest-to-jasmine convert MyTest.js MySpec.js

        # Convert a directory tree, mapping file names
        splurge-exttest-to-jasmine convert --input-mask "*Test.js" --output-mask "*Spec.js" test/ spec/
    """
    try:
        config = build_config(
            config_file,
            input_mask=input_mask,
            output_mask=output_mask,
            indent_str=indent,
            log_level=log_level,
            dry_run=dry_run or None,
            fail_fast=fail_fast or None,
        )
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from None

    if debug:
        setup_logging(True)
    else:
        setup_logging_with_level(config.log_level)

    for warning in ContextManager.validate_config(config).warnings:
        typer.echo(f"Warning: {warning}", err=True)

    to_stdout = output_path is None and not Path(input_path).is_dir()
    logger.debug(f"Converting {input_path} with {config}")

    result = main_module.convert_path(input_path, output_path, config)
    if result.is_error():
        typer.echo(f"Error: {result.error}", err=True)
        for suggestion in result.metadata.get("suggestions", []):
            typer.echo(f"  Suggestion: {suggestion}", err=True)
        raise typer.Exit(code=1) from None

    generated = result.metadata.get("generated_code", {})
    if to_stdout:
        for code in generated.values():
            typer.echo(code)
    elif config.dry_run:
        for path, code in generated.items():
            typer.echo(f"== JASMINE: {normalize_path_for_display(path)} ==")
            typer.echo(code)
    else:
        for path in result.unwrap():
            typer.echo(f"Converted: {normalize_path_for_display(path)}")

    if result.is_warning():
        for warning in result.warnings:
            typer.echo(f"Error: {warning}", err=True)
        raise typer.Exit(code=1)


@app.command("version")
def version() -> None:
    """Show the version of splurge-exttest-to-jasmine."""
    from . import __version__

    typer.echo(f"splurge-exttest-to-jasmine {__version__}")


def main() -> None:
    """Main entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
