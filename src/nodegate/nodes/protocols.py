"""Protocols for the node capabilities a prerequisite check needs.

A node is anything that can hold a script file and run a process: the local
host, an SSH agent, a container. The gate only talks to these protocols, so
remote transports plug in without touching the evaluation logic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from nodegate.models import Platform

__all__ = ["Node", "NodeProcess"]


@runtime_checkable
class NodeProcess(Protocol):
    """A process started on a node."""

    @property
    def output(self) -> str:
        """Standard output captured so far."""
        ...

    async def join(self, timeout: float | None) -> int:
        """Wait for the process to exit.

        Args:
            timeout: Seconds to wait, None to wait forever.

        Returns:
            The exit code.

        Raises:
            CommandTimeoutError: If the process outlived ``timeout``. The
                process has been stopped when this is raised.
            NodeError: If the wait itself failed.
        """
        ...


@runtime_checkable
class Node(Protocol):
    """An execution target with a filesystem root and process launching.

    Paths are plain strings in the node's own syntax, since a POSIX
    controller may drive a Windows node and vice versa.
    """

    @property
    def name(self) -> str: ...

    @property
    def root_path(self) -> str | None:
        """Working root directory, or None while the node is offline."""
        ...

    @property
    def platform(self) -> Platform:
        """Operating system family the node runs scripts on."""
        ...

    async def create_temp_file(
        self, directory: str, prefix: str, suffix: str, contents: str
    ) -> str:
        """Create a uniquely named text file and return its path.

        ``contents`` is written exactly, without newline translation.
        """
        ...

    async def delete(self, path: str) -> None: ...

    async def launch(
        self,
        command: Sequence[str],
        *,
        env: Mapping[str, str],
        cwd: str,
    ) -> NodeProcess:
        """Start ``command`` with ``env`` merged over the node's environment.

        Raises:
            LaunchError: If the process could not be started.
        """
        ...
