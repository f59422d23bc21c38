"""Output formatting helpers for the nodegate CLI."""

from __future__ import annotations

__all__ = [
    "format_error",
    "format_success",
    "format_blocked",
]


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error message with optional details and suggestion.

    Example:
        >>> print(format_error(
        ...     "Invalid parameter: BRANCH",
        ...     suggestion="Use NAME=VALUE format (e.g., -p BRANCH=main)",
        ... ))
        Error: Invalid parameter: BRANCH
        Suggestion: Use NAME=VALUE format (e.g., -p BRANCH=main)
    """
    lines = [f"Error: {message}"]

    if details:
        for detail in details:
            lines.append(f"  {detail}")

    if suggestion:
        lines.append(f"Suggestion: {suggestion}")

    return "\n".join(lines)


def format_success(message: str) -> str:
    return f"Success: {message}"


def format_blocked(message: str) -> str:
    """Format a blocking cause.

    Example:
        >>> format_blocked("Prerequisites are not met on local")
        'Blocked: Prerequisites are not met on local'
    """
    return f"Blocked: {message}"
