from __future__ import annotations


class NodegateError(Exception):
    """Base exception class for all nodegate errors.

    Everything raised by the node primitives, the script materializer and the
    configuration layer derives from this class, so callers can catch one type
    at a boundary while system exceptions propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            config = load_config()
        except NodegateError as e:
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the NodegateError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
