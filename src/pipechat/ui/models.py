"""Data models for the TUI.

Hides the internal representation of displayed chat entries.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class ChatEntry:
    """An entry in the displayed transcript."""

    role: str  # "user", "assistant", "system" or "error"
    content: str
    timestamp: datetime = field(default_factory=datetime.now)
