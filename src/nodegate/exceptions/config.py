from __future__ import annotations

from typing import Any

from nodegate.exceptions.base import NodegateError


class ConfigError(NodegateError):
    """Exception for configuration loading, parsing, and validation errors.

    Raised for YAML parsing failures, Pydantic validation errors, invalid
    environment variable values and malformed job configuration files.

    Attributes:
        message: Human-readable error message describing the configuration issue.
        field: Optional field name that caused the error (e.g., "check.timeout_seconds").
        value: Optional value that failed validation (for debugging).

    Examples:
        ```python
        raise ConfigError("Failed to parse job.yaml: invalid YAML syntax")

        raise ConfigError(
            "Invalid configuration value",
            field="check.timeout_seconds",
            value=-1,
        )
        ```
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize the ConfigError.

        Args:
            message: Human-readable error message.
            field: Optional field name that caused the error.
            value: Optional value that failed validation.
        """
        self.field = field
        self.value = value
        super().__init__(message)
