from __future__ import annotations

from pathlib import Path

import click

from nodegate.cli.context import ExitCode
from nodegate.cli.output import format_error
from nodegate.config import load_job_config
from nodegate.exceptions import ConfigError
from nodegate.gate import render_script, script_extension
from nodegate.models import Platform


@click.command("render")
@click.argument(
    "job_file", type=click.Path(exists=False, dir_okay=False, path_type=Path)
)
@click.option(
    "--platform",
    "platform_name",
    type=click.Choice([p.value for p in Platform]),
    default=None,
    help="Target node platform (default: this machine's).",
)
@click.pass_context
def render(ctx: click.Context, job_file: Path, platform_name: str | None) -> None:
    """Print the script file a node would receive.

    Examples:
        nodegate render job.yaml
        nodegate render job.yaml --platform windows
    """
    try:
        job = load_job_config(job_file)
    except ConfigError as e:
        click.echo(format_error(e.message), err=True)
        ctx.exit(ExitCode.FAILURE)

    if job.prerequisites is None:
        click.echo(format_error(f"No prerequisites configured in {job_file}"), err=True)
        ctx.exit(ExitCode.FAILURE)

    platform = Platform(platform_name) if platform_name else Platform.current()
    click.echo(f"# {script_extension(platform)}", err=True)
    click.echo(render_script(job.prerequisites.script, platform), nl=False)
