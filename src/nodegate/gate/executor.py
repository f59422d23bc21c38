"""Run a prerequisite command on a node and classify the outcome.

The executor makes exactly one launch attempt, waits at most the configured
timeout, and reduces whatever happens to a :class:`~nodegate.models.CheckResult`.
A timeout is always a failure, never a success. Cancellation of the waiting
task is not an outcome; it propagates to the caller.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import structlog

from nodegate.constants import DEFAULT_CHECK_TIMEOUT_SECONDS
from nodegate.exceptions import CommandTimeoutError, NodeError
from nodegate.logging import get_logger
from nodegate.models import CheckResult, FailureKind

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from nodegate.nodes import Node, NodeProcess

__all__ = ["CheckExecutor"]


class CheckExecutor:
    """Launch a command on a node with a wall-clock bound.

    Attributes:
        timeout: Seconds to wait for the process before stopping it.

    Example:
        ```python
        executor = CheckExecutor(timeout=60.0)
        result = await executor.execute(
            node, ["bash", "/srv/agent/nodegate123.sh"], env={"BRANCH": "main"},
            cwd="/srv/agent",
        )
        if result.success:
            ...
        ```
    """

    def __init__(
        self,
        timeout: float = DEFAULT_CHECK_TIMEOUT_SECONDS,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        if timeout <= 0:
            raise ValueError("Timeout must be positive")
        self._timeout = timeout
        self._logger = logger or get_logger(__name__)

    @property
    def timeout(self) -> float:
        return self._timeout

    async def execute(
        self,
        node: Node,
        command: Sequence[str],
        *,
        env: Mapping[str, str],
        cwd: str,
    ) -> CheckResult:
        """Run ``command`` once and classify the outcome.

        Args:
            node: Node to launch on.
            command: Interpreter argv.
            env: Variables merged over the node's ambient environment.
            cwd: Working directory on the node.

        Returns:
            CheckResult with the exit code, captured output and, on failure,
            the failure kind.
        """
        log = self._logger.bind(node=node.name)
        start_time = time.monotonic()
        process: NodeProcess | None = None

        try:
            process = await node.launch(command, env=env, cwd=cwd)
            returncode = await process.join(self._timeout)
        except CommandTimeoutError as e:
            result = CheckResult(
                returncode=None,
                output=e.output or _output_of(process),
                duration_ms=_elapsed_ms(start_time),
                failure=FailureKind.TIMEOUT,
            )
            log.warning(
                "prerequisite_script_timed_out",
                timeout_seconds=self._timeout,
                output=result.output,
            )
            return result
        except (OSError, NodeError) as e:
            result = CheckResult(
                returncode=None,
                output=_output_of(process),
                duration_ms=_elapsed_ms(start_time),
                failure=FailureKind.LAUNCH,
            )
            log.warning(
                "prerequisite_script_launch_failed",
                error=str(e),
                output=result.output,
                exc_info=True,
            )
            return result

        output = process.output
        duration_ms = _elapsed_ms(start_time)
        if returncode == 0:
            log.info(
                "prerequisite_script_succeeded",
                duration_ms=duration_ms,
                output=output,
            )
            return CheckResult(returncode=0, output=output, duration_ms=duration_ms)

        log.warning(
            "prerequisite_script_failed",
            returncode=returncode,
            duration_ms=duration_ms,
            output=output,
        )
        return CheckResult(
            returncode=returncode,
            output=output,
            duration_ms=duration_ms,
            failure=FailureKind.NON_ZERO_EXIT,
        )


def _output_of(process: NodeProcess | None) -> str:
    return process.output if process is not None else ""


def _elapsed_ms(start_time: float) -> int:
    return int((time.monotonic() - start_time) * 1000)
