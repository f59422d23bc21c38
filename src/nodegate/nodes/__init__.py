"""Execution nodes a prerequisite script can run on."""

from __future__ import annotations

from nodegate.nodes.local import LocalNode, LocalProcess
from nodegate.nodes.protocols import Node, NodeProcess

__all__ = [
    "Node",
    "NodeProcess",
    "LocalNode",
    "LocalProcess",
]
