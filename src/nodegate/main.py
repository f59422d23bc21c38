"""CLI entry point for nodegate.

This module defines the Click-based command-line interface.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from nodegate import __version__
from nodegate.cli.commands.check import check
from nodegate.cli.commands.interpreters import interpreters
from nodegate.cli.commands.render import render
from nodegate.cli.context import CLIContext, ExitCode
from nodegate.cli.output import format_error
from nodegate.config import load_config
from nodegate.exceptions import ConfigError
from nodegate.logging import configure_logging


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="nodegate")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides project/user config).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress non-essential output (ERROR level only).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    verbose: int,
    quiet: bool,
) -> None:
    """nodegate - prerequisite checks that gate work onto execution nodes."""
    ctx.ensure_object(dict)

    try:
        config_path = Path(config_file) if config_file else None
        config = load_config(config_path)
    except ConfigError as e:
        # Logging is not configured yet
        details = []
        if e.field:
            details.append(f"Field: {e.field}")
        if e.value is not None:
            details.append(f"Value: {e.value}")
        click.echo(format_error(e.message, details=details), err=True)
        ctx.exit(ExitCode.FAILURE)

    ctx.obj["cli_ctx"] = CLIContext(
        config=config,
        config_path=Path(config_file) if config_file else None,
        verbosity=verbose,
        quiet=quiet,
    )

    # Priority: quiet > verbose > config
    verbosity_map = {
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG,
    }
    if quiet:
        level = logging.ERROR
    elif verbose > 0:
        level = logging.INFO if verbose == 1 else logging.DEBUG
    else:
        level = verbosity_map.get(config.verbosity, logging.WARNING)

    configure_logging(level=level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(check)
cli.add_command(render)
cli.add_command(interpreters)

if __name__ == "__main__":
    cli()
