"""Job configuration surface for the prerequisite check.

The descriptor is what a job configuration form talks to: it names the
feature, lists the interpreter choices and binds submitted form data into a
:class:`~nodegate.models.PrerequisiteSpec`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from nodegate.exceptions import ConfigError
from nodegate.models import Interpreter, PrerequisiteSpec

__all__ = ["PrerequisiteDescriptor", "FORM_SECTION"]

#: Key of the form object holding the prerequisite fields
FORM_SECTION = "prerequisites"


class PrerequisiteDescriptor:
    """Describes the prerequisite check to a job configuration UI.

    Args:
        buildable_job_types: Job type names the check may be attached to.
    """

    display_name = "Check prerequisites before job can build on an agent node"

    def __init__(self, buildable_job_types: frozenset[str] | None = None) -> None:
        self._buildable = buildable_job_types or frozenset({"freestyle", "matrix"})

    def is_applicable(self, job_type: str) -> bool:
        """Only buildable project types run on nodes."""
        return job_type in self._buildable

    @staticmethod
    def interpreter_options() -> list[str]:
        return [Interpreter.SHELL_SCRIPT.label, Interpreter.WINDOWS_BATCH.label]

    def new_instance(
        self, form_data: Mapping[str, Any] | None
    ) -> PrerequisiteSpec | None:
        """Bind submitted form data.

        Args:
            form_data: The job form. The prerequisite fields live under the
                ``prerequisites`` key.

        Returns:
            None if the form is empty or the section is absent (the check is
            switched off for the job), otherwise the bound spec.

        Raises:
            ConfigError: If the section is present but invalid.
        """
        if not form_data:
            return None
        section = form_data.get(FORM_SECTION)
        if not section:
            return None
        try:
            return PrerequisiteSpec.model_validate(section)
        except ValidationError as e:
            first_error = e.errors()[0]
            raise ConfigError(
                f"Invalid prerequisite configuration: {first_error['msg']}",
                field=".".join(str(loc) for loc in first_error["loc"]),
                value=first_error.get("input"),
            ) from e
