"""Mock fixtures for nodegate nodes and work items.

The mocks satisfy the Node and NodeProcess protocols with AsyncMock methods so
tests can drive every outcome of an evaluation without starting processes.

Example:
    >>> @pytest.mark.asyncio
    ... async def test_blocked(mock_node, mock_process, work_item, shell_spec):
    ...     mock_process.join.return_value = 1
    ...     decision = await PrerequisiteGate(shell_spec).check(mock_node, work_item)
    ...     assert not decision.admitted
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, PropertyMock

import pytest

from nodegate.models import (
    Interpreter,
    ParameterGroup,
    ParameterKind,
    ParameterValue,
    Platform,
    PrerequisiteSpec,
    WorkItem,
)

MOCK_ROOT = "/srv/agent"
MOCK_SCRIPT_PATH = "/srv/agent/nodegate1234.sh"


@pytest.fixture
def mock_process() -> MagicMock:
    """Process that exits 0 with some output."""
    process = MagicMock()
    process.output = "checking toolchain\nok\n"
    process.join = AsyncMock(return_value=0)
    return process


@pytest.fixture
def mock_node(mock_process: MagicMock) -> MagicMock:
    """Online POSIX node whose launches return ``mock_process``."""
    node = MagicMock()
    type(node).name = PropertyMock(return_value="agent-1")
    type(node).root_path = PropertyMock(return_value=MOCK_ROOT)
    type(node).platform = PropertyMock(return_value=Platform.POSIX)
    node.create_temp_file = AsyncMock(return_value=MOCK_SCRIPT_PATH)
    node.delete = AsyncMock(return_value=None)
    node.launch = AsyncMock(return_value=mock_process)
    return node


@pytest.fixture
def work_item() -> WorkItem:
    return WorkItem(
        id="build-42",
        parameter_groups=(
            ParameterGroup(
                parameters=(
                    ParameterValue.string("BRANCH", "main"),
                    ParameterValue.boolean("DEPLOY", True),
                    ParameterValue(
                        name="UPLOAD", kind=ParameterKind.FILE, value=b"\x00\x01"
                    ),
                )
            ),
        ),
    )


@pytest.fixture
def shell_spec() -> PrerequisiteSpec:
    return PrerequisiteSpec(
        script='test "$BRANCH" = "main"', interpreter=Interpreter.SHELL_SCRIPT
    )
