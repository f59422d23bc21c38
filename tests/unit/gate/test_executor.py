"""Tests for CheckExecutor outcome classification."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from nodegate.exceptions import CommandTimeoutError, LaunchError
from nodegate.gate.executor import CheckExecutor
from nodegate.models import CheckResult, FailureKind

COMMAND = ["bash", "/srv/agent/nodegate1234.sh"]


class TestCheckExecutor:
    """Tests for CheckExecutor.execute."""

    @pytest.mark.asyncio
    async def test_exit_zero_is_success(
        self, mock_node: MagicMock, mock_process: MagicMock
    ) -> None:
        result = await CheckExecutor().execute(
            mock_node, COMMAND, env={"BRANCH": "main"}, cwd="/srv/agent"
        )

        assert isinstance(result, CheckResult)
        assert result.success is True
        assert result.returncode == 0
        assert result.failure is None
        assert result.output == "checking toolchain\nok\n"
        mock_node.launch.assert_awaited_once_with(
            COMMAND, env={"BRANCH": "main"}, cwd="/srv/agent"
        )

    @pytest.mark.asyncio
    async def test_default_timeout_is_sixty_seconds(
        self, mock_node: MagicMock, mock_process: MagicMock
    ) -> None:
        executor = CheckExecutor()

        await executor.execute(mock_node, COMMAND, env={}, cwd="/srv/agent")

        assert executor.timeout == 60.0
        mock_process.join.assert_awaited_once_with(60.0)

    @pytest.mark.asyncio
    async def test_non_zero_exit_is_failure(
        self, mock_node: MagicMock, mock_process: MagicMock
    ) -> None:
        mock_process.join = AsyncMock(return_value=3)
        mock_process.output = "sdk missing\n"

        result = await CheckExecutor().execute(mock_node, COMMAND, env={}, cwd="/srv")

        assert result.success is False
        assert result.returncode == 3
        assert result.failure is FailureKind.NON_ZERO_EXIT
        assert result.output == "sdk missing\n"

    @pytest.mark.asyncio
    async def test_timeout_is_failure_never_success(
        self, mock_node: MagicMock, mock_process: MagicMock
    ) -> None:
        mock_process.join = AsyncMock(
            side_effect=CommandTimeoutError(
                "too slow", timeout_seconds=1.0, output="partial"
            )
        )

        result = await CheckExecutor(timeout=1.0).execute(
            mock_node, COMMAND, env={}, cwd="/srv"
        )

        assert result.success is False
        assert result.timed_out is True
        assert result.returncode is None
        assert result.output == "partial"

    @pytest.mark.asyncio
    async def test_launch_error_is_failure(self, mock_node: MagicMock) -> None:
        mock_node.launch = AsyncMock(
            side_effect=LaunchError("Command not found: bash", command=COMMAND)
        )

        result = await CheckExecutor().execute(mock_node, COMMAND, env={}, cwd="/srv")

        assert result.success is False
        assert result.failure is FailureKind.LAUNCH
        assert result.output == ""

    @pytest.mark.asyncio
    async def test_io_error_during_wait_is_failure(
        self, mock_node: MagicMock, mock_process: MagicMock
    ) -> None:
        mock_process.join = AsyncMock(side_effect=ConnectionResetError("channel"))
        mock_process.output = "half"

        result = await CheckExecutor().execute(mock_node, COMMAND, env={}, cwd="/srv")

        assert result.failure is FailureKind.LAUNCH
        assert result.output == "half"

    @pytest.mark.asyncio
    async def test_single_launch_attempt(
        self, mock_node: MagicMock, mock_process: MagicMock
    ) -> None:
        """Failures are not retried."""
        mock_process.join = AsyncMock(return_value=1)

        await CheckExecutor().execute(mock_node, COMMAND, env={}, cwd="/srv")

        assert mock_node.launch.await_count == 1

    @pytest.mark.asyncio
    async def test_cancellation_propagates(
        self, mock_node: MagicMock, mock_process: MagicMock
    ) -> None:
        mock_process.join = AsyncMock(side_effect=asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await CheckExecutor().execute(mock_node, COMMAND, env={}, cwd="/srv")

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(ValueError, match="Timeout must be positive"):
            CheckExecutor(timeout=0)
