"""nodegate exception hierarchy.

All exceptions can be imported from this package:
    from nodegate.exceptions import ConfigError, LaunchError, NodegateError
"""

from __future__ import annotations

# Base exception
from nodegate.exceptions.base import NodegateError

# Configuration exceptions
from nodegate.exceptions.config import ConfigError

# Evaluation exceptions
from nodegate.exceptions.gate import (
    CleanupError,
    GateError,
    ScriptMaterializationError,
)

# Node exceptions
from nodegate.exceptions.node import (
    CommandTimeoutError,
    LaunchError,
    NodeError,
    NodeUnavailableError,
)

__all__ = [
    "NodegateError",
    "ConfigError",
    "GateError",
    "ScriptMaterializationError",
    "CleanupError",
    "NodeError",
    "NodeUnavailableError",
    "LaunchError",
    "CommandTimeoutError",
]
