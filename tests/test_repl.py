"""Tests for the line-mode chat loop."""
import io

import pytest
from rich.console import Console

from conftest import FakeProvider
from pipechat.cli.console import make_debug_callback
from pipechat.cli.repl import LineChat
from pipechat.conversation import SEED_HEADER
from pipechat.llm import TransportError


def scripted(*lines):
    """read_line stand-in that replays lines then signals end of input."""
    remaining = list(lines)
    prompts = []

    def _read(prompt):
        prompts.append(prompt.plain)
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    _read.prompts = prompts
    return _read


def _console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)


class TestLineChat:
    """Tests for LineChat.run."""

    @pytest.mark.asyncio
    async def test_transcript_and_goodbye(self, fake_provider):
        console = _console()
        read_line = scripted("hello", "and again")
        chat = LineChat(fake_provider, console=console, read_line=read_line)

        await chat.run()

        output = console.file.getvalue()
        assert "What would you like to know?" in output
        assert "<bot>" in output
        assert "first reply" in output
        assert "second reply" in output
        assert "Goodbye!" in output
        assert all("<you>" in prompt for prompt in read_line.prompts)
        assert len(fake_provider.calls) == 2

    @pytest.mark.asyncio
    async def test_reply_is_rendered_from_the_conversation(self, fake_provider):
        console = _console()
        chat = LineChat(fake_provider, console=console, read_line=scripted("what is this"))

        await chat.run()

        output = console.file.getvalue()
        assert "<bot> first reply" in output
        # The typed line is shown by the prompt, not printed again
        assert "what is this" not in output
        assert [m.content for m in chat.controller.conversation.render_view()] == ["what is this", "first reply"]

    @pytest.mark.asyncio
    async def test_seed_summary_and_hidden_preamble(self, fake_provider):
        console = _console()
        chat = LineChat(fake_provider, seed_content="a\nb\n", console=console, read_line=scripted("hi"))

        await chat.run()

        output = console.file.getvalue()
        assert "Content loaded: 2 lines" in output
        assert SEED_HEADER not in output
        assert fake_provider.calls[0][0].content == f"{SEED_HEADER}a\nb\n"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("command", ["exit", "quit", "Q"])
    async def test_exit_commands(self, fake_provider, command):
        console = _console()
        read_line = scripted(command, "never read")
        chat = LineChat(fake_provider, console=console, read_line=read_line)

        await chat.run()

        assert fake_provider.calls == []
        assert len(read_line.prompts) == 1

    @pytest.mark.asyncio
    async def test_blank_lines_are_not_sent(self, fake_provider):
        chat = LineChat(fake_provider, console=_console(), read_line=scripted("", "   ", "x"))

        await chat.run()

        assert len(fake_provider.calls) == 1

    @pytest.mark.asyncio
    async def test_error_is_shown_and_loop_continues(self):
        provider = FakeProvider(error=TransportError("failed to send request: refused"))
        console = _console()
        err_console = _console()
        chat = LineChat(provider, console=console, err_console=err_console, read_line=scripted("one", "two"))

        await chat.run()

        assert "failed to send request" in err_console.file.getvalue()
        assert len(provider.calls) == 2
        assert chat.controller.is_pending is False


class TestDebugCallback:
    """Tests for the stderr debug callback."""

    def test_filters_below_threshold(self):
        target = _console()
        callback = make_debug_callback("warning", target=target)

        callback("info", "Session", "hidden")
        callback("warning", "Stream", "Error parsing chunk: bad")

        output = target.file.getvalue()
        assert "hidden" not in output
        assert "WARNING" in output
        assert "[Stream]" in output

    def test_debug_level_shows_everything(self):
        target = _console()
        callback = make_debug_callback("debug", target=target)

        callback("debug", "Ollama", "POST /api/generate")

        assert "POST /api/generate" in target.file.getvalue()

    def test_unknown_level_is_rejected(self):
        with pytest.raises(ValueError, match="unknown log level"):
            make_debug_callback("loud")
