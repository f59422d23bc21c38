"""Command-line interface for nodegate."""
