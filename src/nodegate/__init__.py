"""nodegate - prerequisite checks that gate work items onto execution nodes.

A job carries a :class:`~nodegate.models.PrerequisiteSpec` (a script plus an
interpreter). Before a queued work item may start on a node, the
:class:`~nodegate.gate.PrerequisiteGate` writes the script to the node, runs
it with the item's parameters in the environment, and turns the result into
an :class:`~nodegate.models.AdmissionDecision`.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
