"""Constants shared by the script materializer, executor and configuration."""

from __future__ import annotations

# =============================================================================
# Execution
# =============================================================================

#: Wall-clock ceiling for one prerequisite script run, in seconds
DEFAULT_CHECK_TIMEOUT_SECONDS: float = 60.0

#: Grace period between SIGTERM and SIGKILL when a script overruns
TERMINATION_GRACE_PERIOD: float = 2.0

#: Prefix for temporary script files written to a node's root directory
DEFAULT_TEMP_FILE_PREFIX: str = "nodegate"

# =============================================================================
# Windows batch wrapper
# =============================================================================

#: Delimiter around the cause line emitted by the batch wrapper
CAUSE_MARKER: str = "#:#:#"

#: Environment variable a batch script may set to explain a failure
CAUSE_VARIABLE: str = "CAUSE"

#: Label the operator's batch script is called as
SCRIPT_LABEL: str = "TheActualScript"

CRLF: str = "\r\n"

# =============================================================================
# Script files
# =============================================================================

SHELL_EXTENSION: str = ".sh"
BATCH_EXTENSION: str = ".bat"
