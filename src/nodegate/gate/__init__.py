"""Prerequisite evaluation pipeline.

Components:
- collector: collect_environment - work item parameters to environment
- materializer: ScriptMaterializer - per-platform script files on a node
- command_line: build_command_line - interpreter argv for a script file
- executor: CheckExecutor - one bounded run, classified into a CheckResult
- gate: PrerequisiteGate - composes the above into an admission decision
"""

from __future__ import annotations

from nodegate.gate.collector import collect_environment
from nodegate.gate.command_line import build_command_line
from nodegate.gate.executor import CheckExecutor
from nodegate.gate.gate import EvaluationState, PrerequisiteGate
from nodegate.gate.materializer import (
    ScriptFile,
    ScriptMaterializer,
    render_script,
    script_extension,
)

__all__ = [
    "collect_environment",
    "build_command_line",
    "CheckExecutor",
    "EvaluationState",
    "PrerequisiteGate",
    "ScriptFile",
    "ScriptMaterializer",
    "render_script",
    "script_extension",
]
