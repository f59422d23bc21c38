"""Exceptions raised by node primitives (file creation, launch, wait)."""

from __future__ import annotations

from collections.abc import Sequence

from nodegate.exceptions.base import NodegateError

__all__ = [
    "NodeError",
    "NodeUnavailableError",
    "LaunchError",
    "CommandTimeoutError",
]


class NodeError(NodegateError):
    """Base exception for failures talking to an execution node.

    Attributes:
        message: Human-readable error message.
        node_name: Name of the node the operation targeted.
    """

    def __init__(self, message: str, node_name: str | None = None) -> None:
        self.node_name = node_name
        super().__init__(message)


class NodeUnavailableError(NodeError):
    """Node is offline or has no usable root directory."""


class LaunchError(NodeError):
    """Process could not be started on the node.

    Attributes:
        message: Human-readable error message.
        node_name: Name of the node the launch targeted.
        command: The argv that failed to start.
    """

    def __init__(
        self,
        message: str,
        node_name: str | None = None,
        command: Sequence[str] | None = None,
    ) -> None:
        """Initialize the LaunchError.

        Args:
            message: Human-readable error message.
            node_name: Name of the node the launch targeted.
            command: The argv that failed to start.
        """
        self.command = list(command) if command is not None else None
        super().__init__(message, node_name=node_name)


class CommandTimeoutError(NodeError):
    """Process did not finish within the allowed wall-clock time.

    The process has already been terminated when this is raised.

    Attributes:
        message: Human-readable error message.
        node_name: Name of the node the process ran on.
        timeout_seconds: The timeout that was exceeded.
        output: Whatever the process wrote before it was stopped.
    """

    def __init__(
        self,
        message: str,
        node_name: str | None = None,
        timeout_seconds: float | None = None,
        output: str = "",
    ) -> None:
        """Initialize the CommandTimeoutError.

        Args:
            message: Human-readable error message.
            node_name: Name of the node the process ran on.
            timeout_seconds: The timeout value that was exceeded.
            output: Partial output captured before termination.
        """
        self.timeout_seconds = timeout_seconds
        self.output = output
        super().__init__(message, node_name=node_name)
