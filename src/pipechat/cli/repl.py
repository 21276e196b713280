"""Line-mode interactive chat.

A plain scrolling transcript on the terminal: the user types after a
``HH:MM <you>`` prompt, a ``thinking...`` spinner runs while the request is
in flight, and the reply is printed as one ``HH:MM <bot>`` entry.
"""

from collections.abc import Callable
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from ..conversation import Conversation
from ..llm.base import LLMProvider
from ..llm.errors import ChatClientError
from ..session import SessionController
from ..ui.config import GREETING
from ..ui.formatting import SUBTLE_STYLE, describe_seed, format_header, format_thinking, render_transcript

EXIT_COMMANDS = ("exit", "quit", "q")


class LineChat:
    """Read-eval loop over a SessionController."""

    def __init__(
        self,
        llm: LLMProvider,
        seed_content: str | None = None,
        console: Console | None = None,
        err_console: Console | None = None,
        debug_callback: Any | None = None,
        read_line: Callable[[Text], str] | None = None,
    ) -> None:
        """Initialize the loop.

        Args:
            llm: Provider to send turns to
            seed_content: Piped text to analyze on the first turn
            console: Console for the transcript
            err_console: Console for errors (default: transcript console)
            debug_callback: Callable(level, component, message)
            read_line: Reads one line after showing the prompt; raises
                EOFError at end of input (default: console.input)
        """
        self._console = console or Console()
        self._err_console = err_console or self._console
        self._seed_content = seed_content
        self._controller = SessionController(
            llm,
            Conversation.with_seed_content(seed_content),
            debug_callback=debug_callback,
        )
        self._read_line = read_line or self._console.input

    @property
    def controller(self) -> SessionController:
        return self._controller

    def _prompt(self) -> Text:
        prompt = Text("\n")
        prompt.append_text(format_header("user"))
        prompt.append(" ")
        return prompt

    async def run(self) -> None:
        """Run until end of input, an exit command or Ctrl+C."""
        if self._seed_content is not None:
            self._console.print(Text(describe_seed(self._seed_content), style=SUBTLE_STYLE))
        self._console.print(Text(GREETING, style=SUBTLE_STYLE))

        while True:
            try:
                user_input = self._read_line(self._prompt())
            except (EOFError, KeyboardInterrupt):
                self._console.print("\n[dim]Goodbye![/dim]")
                break

            if user_input.strip().lower() in EXIT_COMMANDS:
                self._console.print("[dim]Goodbye![/dim]")
                break

            try:
                with self._console.status(format_thinking(), spinner="dots"):
                    reply = await self._controller.run_turn(user_input)
            except ChatClientError as e:
                self._err_console.print(f"[red]Error: {escape(str(e))}[/red]")
                continue
            except KeyboardInterrupt:
                self._console.print("\n[dim]Goodbye![/dim]")
                break

            if reply is None:
                continue

            # The user line is already on screen as the prompt
            conversation = self._controller.conversation
            self._console.print(render_transcript(conversation, start=len(conversation) - 1))
