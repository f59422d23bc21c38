"""Tests for the job configuration descriptor."""

from __future__ import annotations

import pytest

from nodegate.descriptor import PrerequisiteDescriptor
from nodegate.exceptions import ConfigError
from nodegate.models import Interpreter, PrerequisiteSpec


@pytest.fixture
def descriptor() -> PrerequisiteDescriptor:
    return PrerequisiteDescriptor()


class TestPrerequisiteDescriptor:
    def test_display_name(self, descriptor: PrerequisiteDescriptor) -> None:
        assert descriptor.display_name.startswith("Check prerequisites")

    def test_interpreter_options(self) -> None:
        """Exactly two options, shell script first."""
        assert PrerequisiteDescriptor.interpreter_options() == [
            "linux shell script",
            "windows batch script",
        ]

    def test_is_applicable(self, descriptor: PrerequisiteDescriptor) -> None:
        assert descriptor.is_applicable("freestyle") is True
        assert descriptor.is_applicable("folder") is False

    def test_custom_job_types(self) -> None:
        descriptor = PrerequisiteDescriptor(frozenset({"pipeline"}))

        assert descriptor.is_applicable("pipeline") is True
        assert descriptor.is_applicable("freestyle") is False

    @pytest.mark.parametrize("form", [None, {}, {"prerequisites": None}, {"other": 1}])
    def test_empty_form_disables_check(
        self, descriptor: PrerequisiteDescriptor, form: dict | None
    ) -> None:
        assert descriptor.new_instance(form) is None

    def test_binds_section(self, descriptor: PrerequisiteDescriptor) -> None:
        spec = descriptor.new_instance(
            {
                "prerequisites": {
                    "script": "where cl.exe",
                    "interpreter": "windows batch script",
                }
            }
        )

        assert spec == PrerequisiteSpec(
            script="where cl.exe", interpreter=Interpreter.WINDOWS_BATCH
        )

    def test_invalid_section(self, descriptor: PrerequisiteDescriptor) -> None:
        with pytest.raises(ConfigError) as exc_info:
            descriptor.new_instance({"prerequisites": {"interpreter": "zsh"}})

        assert exc_info.value.field is not None
