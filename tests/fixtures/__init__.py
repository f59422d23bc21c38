"""Shared test fixtures for the nodegate test suite.

Available Fixtures
==================

Nodes (from tests/fixtures/nodes.py)
    - mock_node: MagicMock satisfying the Node protocol, online POSIX node
    - mock_process: MagicMock satisfying the NodeProcess protocol, exits 0
    - work_item: WorkItem with BRANCH/DEPLOY parameters
    - shell_spec: PrerequisiteSpec with a one-line shell script
"""
