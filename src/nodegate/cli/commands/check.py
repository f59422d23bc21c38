from __future__ import annotations

from pathlib import Path

import click

from nodegate.cli.context import CLIContext, ExitCode
from nodegate.cli.output import format_blocked, format_error, format_success
from nodegate.config import load_job_config
from nodegate.exceptions import ConfigError
from nodegate.gate import PrerequisiteGate
from nodegate.logging import bind_context, clear_context, get_logger
from nodegate.models import ParameterGroup, ParameterValue, WorkItem
from nodegate.nodes import LocalNode

_TRUE_VALUES = frozenset({"true", "yes", "1", "on"})
_FALSE_VALUES = frozenset({"false", "no", "0", "off"})


def _split_assignment(raw: str, flag: str) -> tuple[str, str]:
    if "=" not in raw or raw.startswith("="):
        click.echo(
            format_error(
                f"Invalid parameter: {raw}",
                suggestion=f"Use NAME=VALUE format (e.g., {flag} BRANCH=main)",
            ),
            err=True,
        )
        raise SystemExit(ExitCode.FAILURE)
    name, value = raw.split("=", 1)
    return name, value


def parse_parameters(
    params: tuple[str, ...], bool_params: tuple[str, ...]
) -> ParameterGroup:
    """Turn -p and -b options into one parameter group, in option order."""
    values: list[ParameterValue] = []
    for raw in params:
        name, value = _split_assignment(raw, "-p")
        values.append(ParameterValue.string(name, value))
    for raw in bool_params:
        name, value = _split_assignment(raw, "-b")
        lowered = value.strip().lower()
        if lowered not in _TRUE_VALUES | _FALSE_VALUES:
            click.echo(
                format_error(
                    f"Invalid boolean for {name}: {value}",
                    suggestion="Use true or false",
                ),
                err=True,
            )
            raise SystemExit(ExitCode.FAILURE)
        values.append(ParameterValue.boolean(name, lowered in _TRUE_VALUES))
    return ParameterGroup(parameters=tuple(values))


@click.command("check")
@click.argument(
    "job_file", type=click.Path(exists=False, dir_okay=False, path_type=Path)
)
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Node root directory the script runs in (default: current directory).",
)
@click.option("--node-name", default="local", show_default=True, help="Node name.")
@click.option(
    "-p",
    "--param",
    "params",
    multiple=True,
    help="String parameter (NAME=VALUE format).",
)
@click.option(
    "-b",
    "--bool-param",
    "bool_params",
    multiple=True,
    help="Boolean parameter (NAME=true|false format).",
)
@click.pass_context
def check(
    ctx: click.Context,
    job_file: Path,
    root: Path | None,
    node_name: str,
    params: tuple[str, ...],
    bool_params: tuple[str, ...],
) -> None:
    """Run a job's prerequisite script on this machine.

    Exits 0 when the work item would be admitted and 1 when it would be
    blocked.

    Examples:
        nodegate check job.yaml
        nodegate check job.yaml --root /srv/agent -p BRANCH=main -b DEPLOY=true
    """
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    logger = get_logger(__name__)

    try:
        job = load_job_config(job_file)
    except ConfigError as e:
        details = [f"Field: {e.field}"] if e.field else None
        click.echo(format_error(e.message, details=details), err=True)
        ctx.exit(ExitCode.FAILURE)

    if job.prerequisites is None:
        if not cli_ctx.quiet:
            click.echo(format_success("No prerequisites configured"))
        ctx.exit(ExitCode.SUCCESS)

    item = WorkItem(
        id=job_file.stem,
        parameter_groups=(parse_parameters(params, bool_params),),
    )
    node = LocalNode(root if root is not None else Path.cwd(), name=node_name)
    gate = PrerequisiteGate.from_config(job.prerequisites, cli_ctx.config.check)

    bind_context(job=job_file.name)
    try:
        decision = gate.check_blocking(node, item)
    except KeyboardInterrupt:
        logger.warning("check_interrupted", node=node.name, item=item.id)
        click.echo("Interrupted", err=True)
        ctx.exit(ExitCode.INTERRUPTED)
    finally:
        clear_context()

    if decision.admitted:
        if not cli_ctx.quiet:
            click.echo(format_success(f"Prerequisites met on {node.name}"))
        ctx.exit(ExitCode.SUCCESS)

    assert decision.cause is not None
    click.echo(format_blocked(decision.cause.short_description), err=True)
    ctx.exit(ExitCode.FAILURE)
