"""Data models for prerequisite evaluation.

This module defines:
- Platform and Interpreter enums
- PrerequisiteSpec: the per-job script configuration (pydantic, persisted)
- ParameterValue, ParameterGroup, WorkItem: the pending work being admitted
- CheckResult: the internal outcome of one script run
- BlockingCause and AdmissionDecision: what the gate hands back to a scheduler

Runtime values are frozen dataclasses with slots; the persisted job
configuration is a frozen pydantic model so it can be bound from YAML and
form data.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

__all__ = [
    "Platform",
    "Interpreter",
    "PrerequisiteSpec",
    "ParameterKind",
    "ParameterValue",
    "ParameterGroup",
    "WorkItem",
    "FailureKind",
    "CheckResult",
    "CheckOutcome",
    "BlockingCause",
    "NodeOfflineCause",
    "PrerequisitesNotMetCause",
    "AdmissionDecision",
]


class Platform(str, Enum):
    """Operating system family of the node that runs a script."""

    POSIX = "posix"
    WINDOWS = "windows"

    @classmethod
    def current(cls) -> Platform:
        """Platform of the running Python process."""
        return cls.POSIX if os.pathsep == ":" else cls.WINDOWS


class Interpreter(str, Enum):
    """Interpreter an operator selects for a job's prerequisite script.

    Values are the labels shown in the job configuration form.
    """

    SHELL_SCRIPT = "linux shell script"
    WINDOWS_BATCH = "windows batch script"

    @property
    def label(self) -> str:
        return self.value

    @property
    def platform(self) -> Platform:
        """Platform this interpreter is native to."""
        if self is Interpreter.WINDOWS_BATCH:
            return Platform.WINDOWS
        return Platform.POSIX


class PrerequisiteSpec(BaseModel):
    """Prerequisite script configured on a job.

    Attributes:
        script: Script source as written by the operator.
        interpreter: Interpreter selected in the job configuration.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    script: str
    interpreter: Interpreter = Interpreter.SHELL_SCRIPT


class ParameterKind(str, Enum):
    """Declared type of a work item parameter."""

    STRING = "string"
    BOOLEAN = "boolean"
    PASSWORD = "password"
    FILE = "file"
    RUN = "run"


@dataclass(frozen=True, slots=True)
class ParameterValue:
    """A named parameter bound on a work item.

    Attributes:
        name: Parameter name, used as the environment variable name.
        kind: Declared parameter type.
        value: Bound value; its Python type depends on ``kind``.
    """

    name: str
    kind: ParameterKind
    value: Any = None

    @classmethod
    def string(cls, name: str, value: str) -> ParameterValue:
        return cls(name=name, kind=ParameterKind.STRING, value=value)

    @classmethod
    def boolean(cls, name: str, value: bool) -> ParameterValue:
        return cls(name=name, kind=ParameterKind.BOOLEAN, value=value)


@dataclass(frozen=True, slots=True)
class ParameterGroup:
    """One set of parameters attached to a work item.

    A work item may carry several groups (for instance one from the trigger
    and one added later); they are traversed in order.
    """

    parameters: tuple[ParameterValue, ...] = ()


@dataclass(frozen=True, slots=True)
class WorkItem:
    """A unit of pending work awaiting admission to a node.

    Attributes:
        id: Identifier used in log events.
        parameter_groups: Parameter groups in traversal order.
    """

    id: str
    parameter_groups: tuple[ParameterGroup, ...] = ()

    def iter_parameters(self) -> list[ParameterValue]:
        """All parameters, group order first, then order within the group."""
        return [p for group in self.parameter_groups for p in group.parameters]


class FailureKind(str, Enum):
    """Why a prerequisite run did not succeed.

    Only visible in logs and on :class:`CheckResult`; every kind produces the
    same blocking cause for the caller.
    """

    MATERIALIZATION = "materialization"
    LAUNCH = "launch"
    TIMEOUT = "timeout"
    NON_ZERO_EXIT = "non_zero_exit"


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of running one prerequisite script.

    Attributes:
        returncode: Exit code, or None if the process never completed.
        output: Captured standard output (partial on launch failure or timeout).
        duration_ms: Time from launch to completion in milliseconds.
        failure: Failure classification, None on success.
    """

    returncode: int | None
    output: str = ""
    duration_ms: int = 0
    failure: FailureKind | None = None

    @property
    def success(self) -> bool:
        """True only for a completed run that exited 0."""
        return self.failure is None and self.returncode == 0

    @property
    def timed_out(self) -> bool:
        return self.failure is FailureKind.TIMEOUT


class CheckOutcome(str, Enum):
    """Admission outcome for one (node, work item) evaluation."""

    ADMITTED = "admitted"
    BLOCKED_OFFLINE = "blocked_offline"
    BLOCKED_FAILED = "blocked_failed"


@dataclass(frozen=True, slots=True)
class BlockingCause:
    """Why a work item may not start on a node.

    Attributes:
        node_name: Name of the node that was evaluated.
    """

    node_name: str

    @property
    def short_description(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.short_description


@dataclass(frozen=True, slots=True)
class NodeOfflineCause(BlockingCause):
    """The node has no usable root directory."""

    @property
    def short_description(self) -> str:
        return f"{self.node_name} is offline"


@dataclass(frozen=True, slots=True)
class PrerequisitesNotMetCause(BlockingCause):
    """The prerequisite script failed, errored, or timed out on the node."""

    @property
    def short_description(self) -> str:
        return f"Prerequisites are not met on {self.node_name}"


@dataclass(frozen=True, slots=True)
class AdmissionDecision:
    """Result of :meth:`nodegate.gate.PrerequisiteGate.check`.

    Attributes:
        outcome: Admitted or the kind of block.
        cause: Blocking cause, None when admitted.

    Whether a block came from a failing script, a launch error or a timeout is
    not visible here, only in the logs.
    """

    outcome: CheckOutcome
    cause: BlockingCause | None = None

    @property
    def admitted(self) -> bool:
        return self.outcome is CheckOutcome.ADMITTED

    @classmethod
    def admit(cls) -> AdmissionDecision:
        return cls(outcome=CheckOutcome.ADMITTED)

    @classmethod
    def node_offline(cls, node_name: str) -> AdmissionDecision:
        return cls(
            outcome=CheckOutcome.BLOCKED_OFFLINE,
            cause=NodeOfflineCause(node_name=node_name),
        )

    @classmethod
    def prerequisites_not_met(cls, node_name: str) -> AdmissionDecision:
        return cls(
            outcome=CheckOutcome.BLOCKED_FAILED,
            cause=PrerequisitesNotMetCause(node_name=node_name),
        )
