"""Display constants shared by the full-screen and line-mode views."""

from enum import IntEnum


class LogLevel(IntEnum):
    """Diagnostic levels, most verbose first."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def parse(cls, value: str) -> "LogLevel":
        """Level for a name such as ``"warning"`` (case-insensitive).

        Raises:
            ValueError: Unknown level name
        """
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown log level {value!r}, expected debug, info, warning or error") from None


# Transcript
USER_LABEL = "<you>"
BOT_LABEL = "<bot>"
CHAT_TIMESTAMP_FORMAT = "%H:%M"
GREETING = "What would you like to know?"

# Pending indicator
THINKING_TEXT = "thinking..."
THINKING_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
THINKING_INTERVAL = 0.1  # seconds per frame

# Input box
INPUT_HISTORY_MAX_SIZE = 100

# Log output
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # longer messages are cut with "..."
