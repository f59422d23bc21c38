"""Public entry point: decide whether a work item may start on a node.

Each call walks NotStarted → Materializing → Executing → Cleanup → Decided.
Once a script file exists, Cleanup always runs, including when the waiting
task is cancelled.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import TYPE_CHECKING

import structlog

from nodegate.constants import DEFAULT_CHECK_TIMEOUT_SECONDS, DEFAULT_TEMP_FILE_PREFIX
from nodegate.exceptions import CleanupError, ScriptMaterializationError
from nodegate.gate.collector import collect_environment
from nodegate.gate.command_line import build_command_line
from nodegate.gate.executor import CheckExecutor
from nodegate.gate.materializer import ScriptFile, ScriptMaterializer
from nodegate.logging import get_logger
from nodegate.models import AdmissionDecision, FailureKind

if TYPE_CHECKING:
    from nodegate.config import CheckConfig
    from nodegate.models import PrerequisiteSpec, WorkItem
    from nodegate.nodes import Node

__all__ = ["EvaluationState", "PrerequisiteGate"]


class EvaluationState(str, Enum):
    """Progress of a single evaluation, reported in debug logs."""

    NOT_STARTED = "not_started"
    MATERIALIZING = "materializing"
    EXECUTING = "executing"
    CLEANUP = "cleanup"
    DECIDED = "decided"


class PrerequisiteGate:
    """Run a job's prerequisite script on a node before admitting work.

    The gate holds no per-call state, so one instance may evaluate several
    (node, work item) pairs concurrently.

    Attributes:
        spec: The job's prerequisite script configuration.

    Example:
        ```python
        gate = PrerequisiteGate(PrerequisiteSpec(script="test -d /opt/sdk"))
        decision = await gate.check(node, item)
        if not decision.admitted:
            print(decision.cause.short_description)
        ```
    """

    def __init__(
        self,
        spec: PrerequisiteSpec,
        *,
        timeout: float = DEFAULT_CHECK_TIMEOUT_SECONDS,
        temp_file_prefix: str = DEFAULT_TEMP_FILE_PREFIX,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._spec = spec
        self._logger = logger or get_logger(__name__)
        self._materializer = ScriptMaterializer(
            prefix=temp_file_prefix, logger=self._logger
        )
        self._executor = CheckExecutor(timeout=timeout, logger=self._logger)

    @classmethod
    def from_config(
        cls,
        spec: PrerequisiteSpec,
        config: CheckConfig,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> PrerequisiteGate:
        return cls(
            spec,
            timeout=config.timeout_seconds,
            temp_file_prefix=config.temp_file_prefix,
            logger=logger,
        )

    @property
    def spec(self) -> PrerequisiteSpec:
        return self._spec

    async def check(self, node: Node, item: WorkItem) -> AdmissionDecision:
        """Evaluate the prerequisite script for ``item`` on ``node``.

        Never raises for script, launch, timeout or file errors; those all
        become a prerequisites-not-met decision. Cancellation propagates after
        the script file has been removed.

        Args:
            node: Candidate node.
            item: Work item awaiting admission.

        Returns:
            The admission decision.
        """
        log = self._logger.bind(node=node.name, item=item.id)
        log.debug("evaluation_state", state=EvaluationState.NOT_STARTED.value)

        root = node.root_path
        if root is None:
            log.debug("node_offline")
            return AdmissionDecision.node_offline(node.name)

        env = collect_environment(item)

        log.debug("evaluation_state", state=EvaluationState.MATERIALIZING.value)
        # The node may finish writing the file after the caller is cancelled
        materializing = asyncio.create_task(
            self._materializer.materialize(node, root, self._spec)
        )
        try:
            script_file = await asyncio.shield(materializing)
        except asyncio.CancelledError:
            await self._discard_materialized(node, materializing, log)
            raise
        except ScriptMaterializationError as e:
            log.warning(
                "prerequisites_not_met",
                failure=FailureKind.MATERIALIZATION.value,
                error=e.message,
            )
            return AdmissionDecision.prerequisites_not_met(node.name)

        try:
            log.debug("evaluation_state", state=EvaluationState.EXECUTING.value)
            command = build_command_line(script_file.path, script_file.platform)
            result = await self._executor.execute(node, command, env=env, cwd=root)
        finally:
            log.debug("evaluation_state", state=EvaluationState.CLEANUP.value)
            await asyncio.shield(self._remove_script(node, script_file, log))

        log.debug("evaluation_state", state=EvaluationState.DECIDED.value)
        if result.success:
            return AdmissionDecision.admit()

        assert result.failure is not None
        log.warning("prerequisites_not_met", failure=result.failure.value)
        return AdmissionDecision.prerequisites_not_met(node.name)

    def check_blocking(self, node: Node, item: WorkItem) -> AdmissionDecision:
        """Run :meth:`check` to completion on the calling thread.

        For schedulers that evaluate admission from worker threads. Must not
        be called from a thread that is already running an event loop.
        """
        return asyncio.run(self.check(node, item))

    async def _discard_materialized(
        self,
        node: Node,
        materializing: asyncio.Task[ScriptFile],
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        """Wait out an interrupted materialization and delete its file."""
        try:
            script_file = await asyncio.shield(materializing)
        except ScriptMaterializationError:
            return
        log.debug("evaluation_state", state=EvaluationState.CLEANUP.value)
        await asyncio.shield(self._remove_script(node, script_file, log))

    async def _remove_script(
        self,
        node: Node,
        script_file: ScriptFile,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        try:
            await self._materializer.remove(node, script_file)
        except CleanupError as e:
            log.warning("script_cleanup_failed", path=e.path, error=e.message)
