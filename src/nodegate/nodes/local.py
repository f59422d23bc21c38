"""Node implementation backed by the local host.

LocalNode runs prerequisite scripts as asyncio subprocesses on the machine
the gate itself runs on. It is the node used by the CLI and the integration
tests, and a reference for remote node implementations.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import signal
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from nodegate.constants import TERMINATION_GRACE_PERIOD
from nodegate.exceptions import CommandTimeoutError, LaunchError, NodeUnavailableError
from nodegate.logging import get_logger
from nodegate.models import Platform

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

__all__ = ["LocalNode", "LocalProcess"]

logger = get_logger(__name__)

# Output still buffered in the pipe after a kill is read for at most this long
_DRAIN_TIMEOUT: float = 0.5


class LocalProcess:
    """A subprocess started by :class:`LocalNode`.

    Standard output and standard error are merged and read continuously into
    an in-memory buffer, so partial output survives a timeout.
    """

    def __init__(self, process: asyncio.subprocess.Process, node_name: str) -> None:
        self._process = process
        self._node_name = node_name
        self._chunks: list[bytes] = []
        self._reader = asyncio.create_task(self._pump())

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def output(self) -> str:
        return b"".join(self._chunks).decode("utf-8", errors="replace")

    async def _pump(self) -> None:
        stream = self._process.stdout
        if stream is None:
            return
        while True:
            chunk = await stream.read(4096)
            if not chunk:
                break
            self._chunks.append(chunk)

    async def join(self, timeout: float | None) -> int:
        try:
            returncode = await asyncio.wait_for(self._process.wait(), timeout=timeout)
        except TimeoutError:
            await self._stop()
            raise CommandTimeoutError(
                f"Process {self.pid} did not finish within {timeout}s",
                node_name=self._node_name,
                timeout_seconds=timeout,
                output=self.output,
            ) from None
        except asyncio.CancelledError:
            await asyncio.shield(self._stop())
            raise
        await self._drain()
        return returncode

    async def _stop(self) -> None:
        """Terminate the process tree: SIGTERM, grace period, then SIGKILL."""
        self._terminate()
        try:
            await asyncio.wait_for(
                self._process.wait(), timeout=TERMINATION_GRACE_PERIOD
            )
        except TimeoutError:
            self._kill()
            await self._process.wait()
        await self._drain()

    def _terminate(self) -> None:
        with contextlib.suppress(ProcessLookupError):
            if os.name == "posix":
                # Started in its own session, so the group id is the pid
                os.killpg(self._process.pid, signal.SIGTERM)
            else:
                self._process.terminate()

    def _kill(self) -> None:
        with contextlib.suppress(ProcessLookupError):
            if os.name == "posix":
                os.killpg(self._process.pid, signal.SIGKILL)
            else:
                self._process.kill()

    async def _drain(self) -> None:
        # Grandchildren may still hold the pipe open after the script exits
        try:
            await asyncio.wait_for(asyncio.shield(self._reader), _DRAIN_TIMEOUT)
        except TimeoutError:
            self._reader.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._reader


class LocalNode:
    """Execute prerequisite scripts on the local host.

    Attributes:
        name: Node name used in blocking causes and log events.
        root: Working root directory. A missing directory means offline.
        platform: Defaults to the platform of the running interpreter.
        env: Extra environment variables applied under the per-check ones.

    Example:
        ```python
        node = LocalNode(root=Path("/var/lib/agent"))
        process = await node.launch(["bash", "check.sh"], env={}, cwd=node.root_path)
        returncode = await process.join(timeout=60)
        ```
    """

    def __init__(
        self,
        root: Path | None,
        *,
        name: str = "local",
        platform: Platform | None = None,
        env: dict[str, str] | None = None,
    ) -> None:
        self._root = root
        self._name = name
        self._platform = platform or Platform.current()
        self._extra_env = env or {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def root_path(self) -> str | None:
        if self._root is None or not self._root.is_dir():
            return None
        return str(self._root)

    @property
    def platform(self) -> Platform:
        return self._platform

    def _build_env(self, extra_env: Mapping[str, str]) -> dict[str, str]:
        """Build environment by merging the parent env with overrides."""
        env = os.environ.copy()
        env.update(self._extra_env)
        env.update(extra_env)
        return env

    async def create_temp_file(
        self, directory: str, prefix: str, suffix: str, contents: str
    ) -> str:
        return await asyncio.to_thread(
            _write_temp_file, directory, prefix, suffix, contents
        )

    async def delete(self, path: str) -> None:
        await asyncio.to_thread(os.remove, path)

    async def launch(
        self,
        command: Sequence[str],
        *,
        env: Mapping[str, str],
        cwd: str,
    ) -> LocalProcess:
        if not Path(cwd).is_dir():
            raise NodeUnavailableError(
                f"Working directory does not exist: {cwd}", node_name=self._name
            )
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                stdin=asyncio.subprocess.DEVNULL,
                cwd=cwd,
                env=self._build_env(env),
                start_new_session=os.name == "posix",
            )
        except FileNotFoundError as e:
            raise LaunchError(
                f"Command not found: {command[0]}",
                node_name=self._name,
                command=command,
            ) from e
        except OSError as e:
            raise LaunchError(
                f"Unable to start {command[0]}: {e}",
                node_name=self._name,
                command=command,
            ) from e
        except ValueError as e:
            # NUL bytes or "=" in a variable name
            raise LaunchError(
                f"Invalid command or environment for {command[0]}: {e}",
                node_name=self._name,
                command=command,
            ) from e
        logger.debug("process_started", node=self._name, pid=process.pid)
        return LocalProcess(process, self._name)


def _write_temp_file(directory: str, prefix: str, suffix: str, contents: str) -> str:
    fd, path = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(contents)
    except BaseException:
        with contextlib.suppress(OSError):
            os.remove(path)
        raise
    return path
