from __future__ import annotations

from nodegate.exceptions.base import NodegateError


class GateError(NodegateError):
    """Base exception for failures inside a prerequisite evaluation.

    These never escape :meth:`nodegate.gate.PrerequisiteGate.check`; the gate
    logs them and turns them into a blocking cause.
    """


class ScriptMaterializationError(GateError):
    """The prerequisite script could not be written to the node.

    Attributes:
        message: Human-readable error message.
        directory: Directory the script was to be created in.
    """

    def __init__(self, message: str, directory: str | None = None) -> None:
        self.directory = directory
        super().__init__(message)


class CleanupError(GateError):
    """A materialized script file could not be deleted.

    Attributes:
        message: Human-readable error message.
        path: Path of the file left behind.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)
