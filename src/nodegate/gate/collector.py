"""Flatten a work item's parameters into a process environment."""

from __future__ import annotations

from nodegate.models import ParameterKind, WorkItem

__all__ = ["collect_environment"]


def collect_environment(item: WorkItem) -> dict[str, str]:
    """Build the environment a prerequisite script sees for ``item``.

    String parameters are passed verbatim and booleans become ``true`` or
    ``false``. Other parameter kinds are skipped. When a name appears more
    than once the last one in traversal order wins.

    Args:
        item: The work item awaiting admission.

    Returns:
        Mapping of parameter name to string value.
    """
    env: dict[str, str] = {}
    for parameter in item.iter_parameters():
        if parameter.kind is ParameterKind.STRING:
            env[parameter.name] = "" if parameter.value is None else str(parameter.value)
        elif parameter.kind is ParameterKind.BOOLEAN:
            env[parameter.name] = "true" if parameter.value else "false"
    return env
