"""CLI context and exit codes for nodegate."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from nodegate.config import NodegateConfig

__all__ = [
    "ExitCode",
    "CLIContext",
]


class ExitCode(IntEnum):
    """Exit codes for the nodegate CLI.

    - 0 admitted / success
    - 1 blocked or error
    - 130 interrupted (128 + SIGINT=2)
    """

    SUCCESS = 0
    FAILURE = 1
    INTERRUPTED = 130


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global options and configuration shared by subcommands.

    Attributes:
        config: Loaded nodegate configuration.
        config_path: Path to config file (if specified via --config).
        verbosity: Verbosity level (0=default, 1=INFO, 2+=DEBUG).
        quiet: Suppress non-essential output.
    """

    config: NodegateConfig
    config_path: Path | None = None
    verbosity: int = 0
    quiet: bool = False
