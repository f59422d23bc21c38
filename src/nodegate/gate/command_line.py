"""Build the interpreter command line for a materialized script."""

from __future__ import annotations

from nodegate.models import Platform

__all__ = ["build_command_line"]


def build_command_line(script_path: str, platform: Platform) -> list[str]:
    """Return the argv that runs ``script_path`` on ``platform``.

    The path is always its own argv element and is never quoted or joined
    into a single command string.

    Example:
        >>> build_command_line("/tmp/x.sh", Platform.POSIX)
        ['bash', '/tmp/x.sh']
        >>> build_command_line("C:\\\\tmp\\\\x.bat", Platform.WINDOWS)
        ['cmd', '/c', 'call', 'C:\\\\tmp\\\\x.bat']
    """
    if platform is Platform.WINDOWS:
        return ["cmd", "/c", "call", script_path]
    return ["bash", script_path]
