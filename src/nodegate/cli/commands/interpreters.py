from __future__ import annotations

import click

from nodegate.descriptor import PrerequisiteDescriptor


@click.command("interpreters")
def interpreters() -> None:
    """List the interpreter choices a job can select."""
    for label in PrerequisiteDescriptor.interpreter_options():
        click.echo(label)
