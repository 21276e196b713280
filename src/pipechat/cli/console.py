"""Rich consoles and debug output for the non-fullscreen modes."""

from typing import Any

from rich.console import Console

from ..ui.config import LogLevel
from ..ui.formatting import format_log_line

# Console for rich output
console = Console()

# Diagnostics go to stderr so stdout carries only the reply
err_console = Console(stderr=True)

# Skipped stream lines are reported even without --log-level
DEFAULT_LOG_LEVEL = "warning"


def make_debug_callback(log_level: str = DEFAULT_LOG_LEVEL, target: Console | None = None) -> Any:
    """Build a ``(level, component, message)`` callback printing to stderr.

    Args:
        log_level: Minimum level to print (debug/info/warning/error)
        target: Console to print to (default: stderr console)
    """
    threshold = LogLevel.parse(log_level)
    out = target or err_console

    def _callback(level: str, component: str, message: str) -> None:
        if LogLevel.parse(level) >= threshold:
            out.print(format_log_line(level, component, message))

    return _callback
