"""Terminal UI module for pipechat.

Provides a Textual-based full-screen chat.

Module structure (each module hides a design decision):
- models.py: Data structures (displayed entries)
- config.py: Constants and log levels
- formatting.py: Transcript styling shared with line mode
- widgets.py: Custom widgets (input history, chat viewport, indicator, log)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatApp, TurnFinished, run_chat_tui
from .config import LogLevel
from .models import ChatEntry
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, ThinkingIndicator

__all__ = [
    "ChatApp",
    "ChatEntry",
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "ThinkingIndicator",
    "TurnFinished",
    "run_chat_tui",
]
