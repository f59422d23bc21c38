"""Tests for the nodegate.logging module."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest
import structlog

from nodegate.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


class TestConfigureLogging:
    def test_configure_logging_default(self) -> None:
        configure_logging()

        assert structlog.get_logger() is not None

    def test_configure_logging_custom_level(self) -> None:
        configure_logging(level=logging.DEBUG)

        assert logging.getLogger().level == logging.DEBUG

    def test_configure_logging_level_from_env(self) -> None:
        with patch.dict(os.environ, {"NODEGATE_LOG_LEVEL": "ERROR"}):
            configure_logging()

        assert logging.getLogger().level == logging.ERROR

    def test_single_handler_after_reconfigure(self) -> None:
        configure_logging()
        configure_logging()

        assert len(logging.getLogger().handlers) == 1

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict(os.environ, {"NODEGATE_LOG_FORMAT": "json"}):
            configure_logging(level=logging.INFO)

        get_logger("nodegate.test").warning("prerequisite_script_failed", returncode=3)

        err = capsys.readouterr().err
        assert '"event": "prerequisite_script_failed"' in err
        assert '"returncode": 3' in err


class TestContext:
    def test_bind_and_clear(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(force_json=True, level=logging.INFO)
        try:
            bind_context(node="agent-5")
            get_logger("nodegate.test").info("evaluation_started")
        finally:
            clear_context()

        assert '"node": "agent-5"' in capsys.readouterr().err
