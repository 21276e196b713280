"""Main Textual TUI application.

Orchestrates the UI components and drives the session controller.

The request for each turn runs in a background worker so the input box and
the pending indicator stay live. The worker never touches the conversation:
it posts exactly one ``TurnFinished`` message, and the app's handler for it
is the only place a turn is completed or failed.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Footer, Header

from ..conversation import Conversation, PendingRequest
from ..llm.base import LLMProvider
from ..llm.errors import RequestPendingError
from ..session import SessionController
from .config import GREETING, LogLevel
from .formatting import describe_seed
from .styles import APP_CSS
from .themes import TERMINAL_DARK
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, ThinkingIndicator


class TurnFinished(Message):
    """Posted by the request worker when the pending request resolves."""

    def __init__(self, reply: str | None = None, error: Exception | None = None) -> None:
        super().__init__()
        self.reply = reply
        self.error = error


class ChatApp(App):
    """Full-screen chat with a scrollable viewport and an input box."""

    CSS = APP_CSS
    TITLE = "pipechat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("ctrl+k", "clear_chat", "Clear Chat", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        llm: LLMProvider,
        seed_content: str | None = None,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._llm = llm
        self._seed_content = seed_content
        self._log_level = log_level
        self._debug_panel: DebugPanel | None = None
        self._controller = SessionController(
            llm,
            Conversation.with_seed_content(seed_content),
            debug_callback=self._route_debug,
        )
        llm.set_debug_callback(self._route_debug)

    @property
    def controller(self) -> SessionController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield ThinkingIndicator(id="thinking")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Apply the theme, show the seed summary and focus the input box."""
        self.register_theme(TERMINAL_DARK)
        self.theme = "pipechat-dark"

        self._debug_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            self._debug_panel.threshold = LogLevel.parse(self._log_level)
            self._debug_panel.show()
            self._debug_panel.record("info", "TUI", f"Log panel enabled at {self._debug_panel.threshold.name}")

        self.sub_title = self._llm.model

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        if self._seed_content is not None:
            chat.add_entry("system", describe_seed(self._seed_content))
        chat.add_entry("system", GREETING)

        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Send provider and session tracing to the log panel."""
        if self._debug_panel is not None:
            self._debug_panel.record(level, component, message)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Open a turn for the submitted text, or refuse it while one is pending."""
        try:
            pending = self._controller.begin_turn(event.value)
        except RequestPendingError:
            self.notify("Still waiting for the previous reply", severity="warning", timeout=2)
            return

        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        if pending is None:
            input_bar.accept("")
            return

        user_message = pending.messages[-1]
        input_bar.accept(user_message.content)

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.add_entry("user", user_message.content)
        chat.set_pending(True)
        self.query_one("#thinking", ThinkingIndicator).start()

        self._send(pending)

    @work(group="request")
    async def _send(self, pending: PendingRequest) -> None:
        """Run the pending request as a background async worker."""
        try:
            reply = await self._controller.request(pending)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.post_message(TurnFinished(error=e))
            return
        self.post_message(TurnFinished(reply=reply))

    def on_turn_finished(self, message: TurnFinished) -> None:
        """Complete or fail the pending turn and redraw."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.set_pending(False)
        self.query_one("#thinking", ThinkingIndicator).stop()

        if message.error is not None:
            self._controller.fail_turn(message.error)
            chat.add_entry("error", f"Error: {message.error}")
            self.notify(f"Error: {str(message.error)[:50]}", severity="error", timeout=5)
            return

        reply = self._controller.complete_turn(message.reply or "")
        chat.add_entry("assistant", reply.content)

    def action_clear_chat(self) -> None:
        """Clear the visible chat panel. The conversation sent to the model is kept."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.clear_history()
        self.notify("Chat cleared", timeout=2)

    def action_toggle_debug(self) -> None:
        """Show or hide the request trace."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        reply = self._controller.conversation.last_reply()
        if reply is not None:
            self.copy_to_clipboard(reply.content)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_chat_tui(
    llm: LLMProvider,
    seed_content: str | None = None,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        llm: LLM provider instance
        seed_content: Piped text to analyze on the first turn
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = ChatApp(llm=llm, seed_content=seed_content, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
