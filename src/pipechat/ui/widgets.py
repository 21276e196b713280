"""Custom Textual widgets for the TUI.

- HistoryInput / ChatInputBar: the input box with Up/Down recall
- ChatHistoryWidget: the scrolling transcript
- ThinkingIndicator: the animated pending line
- DebugPanel: the request trace
"""

from collections import deque
from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click, Key, Paste
from textual.message import Message
from textual.timer import Timer
from textual.widgets import Button, Input, Markdown, RichLog, Static

from .config import INPUT_HISTORY_MAX_SIZE, THINKING_FRAMES, THINKING_INTERVAL, LogLevel
from .formatting import format_header, format_log_line, format_thinking
from .models import ChatEntry


class ClickableEntry(Vertical):
    """A chat entry container that copies its content when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        """Copy entry content to the clipboard (OSC 52)."""
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=2)


class HistoryInput(Input):
    """Single-line input that recalls earlier submissions with Up/Down.

    Pasted text is collapsed onto one line.
    """

    def __init__(self, *args, max_history: int = INPUT_HISTORY_MAX_SIZE, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: deque[str] = deque(maxlen=max_history)
        # Position while recalling; None means editing a fresh line
        self._recall: int | None = None
        self._draft = ""

    @property
    def history(self) -> list[str]:
        return list(self._history)

    def _on_paste(self, event: Paste) -> None:
        if event.text:
            self.insert_text_at_cursor(" ".join(event.text.split()))
            event.prevent_default()
            event.stop()

    def _on_key(self, event: Key) -> None:
        if event.key not in ("up", "down"):
            return
        event.prevent_default()
        event.stop()
        recalled = self.recall(-1 if event.key == "up" else 1)
        if recalled is not None:
            self.value = recalled
            self.cursor_position = len(recalled)

    def recall(self, step: int) -> str | None:
        """Move through history; returns the text to show, or None to leave the box alone."""
        if not self._history:
            return None
        if self._recall is None:
            if step > 0:
                return None
            self._draft = self.value
            self._recall = len(self._history) - 1
        else:
            position = self._recall + step
            if position >= len(self._history):
                self._recall = None
                return self._draft
            self._recall = max(position, 0)
        return self._history[self._recall]

    def add_to_history(self, text: str) -> None:
        """Remember a submission unless it repeats the previous one."""
        if text and (not self._history or self._history[-1] != text):
            self._history.append(text)
        self._recall = None
        self._draft = ""


class ChatInputBar(Horizontal):
    """Input box with a Send button.

    Posts ``Submitted`` for every Enter or button press. The owner decides
    whether to accept the submission and then calls ``accept()``, which
    clears the box, so refused text stays editable.
    """

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield HistoryInput(id="chat-input", placeholder="Type a message and press Enter")
        yield Button("Send", id="send-btn", variant="success")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Submitted(event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self.post_message(self.Submitted(self.query_one("#chat-input", HistoryInput).value))

    def accept(self, value: str) -> None:
        """Record an accepted submission and clear the box."""
        text_input = self.query_one("#chat-input", HistoryInput)
        text_input.add_to_history(value)
        text_input.value = ""

    def focus_input(self) -> None:
        self.query_one("#chat-input", HistoryInput).focus()


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat viewport."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._entries: list[ChatEntry] = []

    @property
    def entries(self) -> list[ChatEntry]:
        return list(self._entries)

    def add_entry(self, role: str, content: str) -> ChatEntry:
        """Append an entry and scroll to it."""
        entry = ChatEntry(role=role, content=content)
        self._entries.append(entry)
        self._render_entry(entry)
        self.border_subtitle = f"{self._message_count()} messages"
        self.scroll_end(animate=False)
        return entry

    def _message_count(self) -> int:
        return sum(1 for e in self._entries if e.role in ("user", "assistant"))

    def clear_history(self) -> None:
        """Clear the displayed entries."""
        self._entries.clear()
        self.remove_children()
        self.border_subtitle = "Conversation history"

    def set_pending(self, pending: bool) -> None:
        self.set_class(pending, "-pending")

    def _render_entry(self, entry: ChatEntry) -> None:
        container = ClickableEntry(content=entry.content, classes=f"chat-entry {entry.role}-entry")
        container.compose_add_child(Static(format_header(entry.role, entry.timestamp), classes="entry-header"))

        if entry.role == "assistant":
            container.compose_add_child(Markdown(entry.content, classes="entry-content"))
        else:
            container.compose_add_child(Static(Text(entry.content), classes="entry-content"))

        self.mount(container)


class ThinkingIndicator(Static):
    """One-line ``<bot> thinking...`` indicator shown while a request is pending."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__("", *args, **kwargs)
        self._timer: Timer | None = None
        self._frame = 0
        self._started_at: datetime | None = None

    @property
    def active(self) -> bool:
        return self.has_class("-active")

    def start(self) -> None:
        self._frame = 0
        self._started_at = datetime.now()
        self.add_class("-active")
        self._tick()
        if self._timer is None:
            self._timer = self.set_interval(THINKING_INTERVAL, self._tick)

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
        self.remove_class("-active")
        self.update("")

    def _tick(self) -> None:
        frame = THINKING_FRAMES[self._frame % len(THINKING_FRAMES)]
        self._frame += 1
        self.update(format_thinking(self._started_at, frame))


class DebugPanel(RichLog):
    """Request trace panel, hidden until ``--log-level`` or Ctrl+D."""

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Hidden"

    def __init__(self, *args, threshold: LogLevel = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=False, highlight=False, wrap=True, **kwargs)
        self._threshold = threshold

    @property
    def threshold(self) -> LogLevel:
        return self._threshold

    @threshold.setter
    def threshold(self, level: LogLevel) -> None:
        self._threshold = level
        self._update_subtitle()

    def record(self, level: str, component: str, message: str) -> bool:
        """Write one trace line unless it is below the threshold.

        Returns:
            Whether the line was written
        """
        if LogLevel.parse(level) < self._threshold:
            return False
        self.write(format_log_line(level, component, message))
        return True

    def _update_subtitle(self) -> None:
        self.border_subtitle = f"≥ {self._threshold.name}" if self.display else "Hidden"

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Flip visibility and return the new state."""
        if self.display:
            self.hide()
        else:
            self.show()
        return bool(self.display)
