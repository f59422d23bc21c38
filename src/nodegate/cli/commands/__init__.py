"""Click commands registered on the ``nodegate`` group."""
