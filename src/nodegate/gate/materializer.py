"""Write a prerequisite script to a node in that node's native format.

POSIX nodes get the operator's script unchanged as a ``.sh`` file. Windows
nodes get a ``.bat`` wrapper that calls the operator's script as a
subroutine and then echoes a marker-delimited ``CAUSE`` line:

    @set CAUSE=
    @echo off
    call :TheActualScript
    @echo off
    echo #:#:#CAUSE#:#:#%CAUSE%#:#:#
    goto :EOF
    :TheActualScript
    <operator script>

The cause line lets a batch script explain a failure by setting ``CAUSE``.
Nothing reads it yet.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from nodegate.constants import (
    BATCH_EXTENSION,
    CAUSE_MARKER,
    CAUSE_VARIABLE,
    CRLF,
    DEFAULT_TEMP_FILE_PREFIX,
    SCRIPT_LABEL,
    SHELL_EXTENSION,
)
from nodegate.exceptions import CleanupError, NodeError, ScriptMaterializationError
from nodegate.logging import get_logger
from nodegate.models import Platform

if TYPE_CHECKING:
    from nodegate.models import PrerequisiteSpec
    from nodegate.nodes import Node

__all__ = [
    "ScriptFile",
    "ScriptMaterializer",
    "render_script",
    "script_extension",
]


def render_script(script: str, platform: Platform) -> str:
    """Return the file contents that run ``script`` on ``platform``."""
    if platform is not Platform.WINDOWS:
        return script
    lines = [
        f"@set {CAUSE_VARIABLE}=",
        "@echo off",
        f"call :{SCRIPT_LABEL}",
        "@echo off",
        f"echo {CAUSE_MARKER}{CAUSE_VARIABLE}{CAUSE_MARKER}"
        f"%{CAUSE_VARIABLE}%{CAUSE_MARKER}",
        "goto :EOF",
        f":{SCRIPT_LABEL}",
        script,
    ]
    return "".join(line + CRLF for line in lines)


def script_extension(platform: Platform) -> str:
    return BATCH_EXTENSION if platform is Platform.WINDOWS else SHELL_EXTENSION


@dataclass(frozen=True, slots=True)
class ScriptFile:
    """A prerequisite script written to a node's filesystem.

    Attributes:
        path: Path in the node's own syntax.
        platform: Platform the contents were rendered for.
    """

    path: str
    platform: Platform


class ScriptMaterializer:
    """Create and remove temporary prerequisite script files on nodes.

    Args:
        prefix: File name prefix for created scripts.
        logger: Logger for diagnostics; defaults to this module's logger.
    """

    def __init__(
        self,
        prefix: str = DEFAULT_TEMP_FILE_PREFIX,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._prefix = prefix
        self._logger = logger or get_logger(__name__)

    async def materialize(
        self, node: Node, directory: str, spec: PrerequisiteSpec
    ) -> ScriptFile:
        """Write ``spec.script`` to a new temporary file in ``directory``.

        The node's platform, not the controller's, selects the format.

        Raises:
            ScriptMaterializationError: If the file could not be created.
        """
        platform = node.platform
        if spec.interpreter.platform is not platform:
            self._logger.info(
                "interpreter_platform_mismatch",
                node=node.name,
                interpreter=spec.interpreter.label,
                platform=platform.value,
            )
        try:
            path = await node.create_temp_file(
                directory,
                self._prefix,
                script_extension(platform),
                render_script(spec.script, platform),
            )
        except (OSError, UnicodeError, NodeError) as e:
            raise ScriptMaterializationError(
                f"Unable to produce a script file in {directory}: {e}",
                directory=directory,
            ) from e
        self._logger.debug("script_materialized", node=node.name, path=path)
        return ScriptFile(path=path, platform=platform)

    async def remove(self, node: Node, script_file: ScriptFile) -> None:
        """Delete a materialized script.

        Raises:
            CleanupError: If the file could not be deleted.
        """
        try:
            await node.delete(script_file.path)
        except (OSError, NodeError) as e:
            raise CleanupError(
                f"Unable to delete script file {script_file.path}: {e}",
                path=script_file.path,
            ) from e
