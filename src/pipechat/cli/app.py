"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.markup import escape

from ..llm import ChatClientError
from ..session import ask
from ..ui.config import LogLevel
from .console import DEFAULT_LOG_LEVEL, console, err_console, make_debug_callback
from .providers import get_llm
from .stdin import EmptyInputError, read_seed_content, reattach_tty, stdin_is_piped

# Load environment variables
load_dotenv()

USAGE_ERROR = "Error: Must specify either -it for interactive mode or -p for single prompt mode"


def _check_log_level(value: str | None) -> str | None:
    if value is not None:
        try:
            LogLevel.parse(value)
        except ValueError as e:
            raise typer.BadParameter(str(e)) from e
    return value


# Create Typer app
app = typer.Typer(
    name="pipechat",
    help="Chat with a local Ollama model about text piped on standard input",
    add_completion=False,
)


@app.command()
def chat(
    interactive: bool = typer.Option(
        False,
        "-it",
        "--interactive",
        help="Enable interactive chat mode"
    ),
    prompt: str = typer.Option(
        "",
        "-p",
        "--prompt",
        help="Single prompt to analyze content with"
    ),
    line: bool = typer.Option(
        False,
        "--line",
        help="Use the plain line-mode transcript instead of the full-screen UI (with -it)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model to use (default: $OLLAMA_MODEL or qwen2.5-coder)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show diagnostics at this level: debug, info, warning, or error",
        callback=_check_log_level,
    ),
):
    """Send piped content and a question to a local model.

    Examples:

        cat main.go | pipechat -p "summarize"

        git diff | pipechat -it
    """
    if not interactive and not prompt:
        err_console.print(USAGE_ERROR, markup=False)
        raise typer.Exit(code=2)

    seed_content = None
    if stdin_is_piped():
        try:
            seed_content = read_seed_content()
        except EmptyInputError as e:
            err_console.print(str(e), markup=False)
            raise typer.Exit(code=1)

    llm = get_llm(model)
    debug_callback = make_debug_callback(log_level or DEFAULT_LOG_LEVEL)

    if interactive:
        if prompt:
            err_console.print("[yellow]Warning: -p is ignored in interactive mode[/yellow]")

        if seed_content is not None:
            try:
                reattach_tty()
            except OSError as e:
                err_console.print(f"[red]Error opening /dev/tty: {escape(str(e))}[/red]")
                raise typer.Exit(code=1)

        if line:
            _run_line_mode(llm, seed_content, debug_callback)
        else:
            _run_fullscreen(llm, seed_content, log_level)
        return

    _run_single_prompt(llm, prompt, seed_content, debug_callback)


def _run_single_prompt(llm, prompt: str, seed_content: str | None, debug_callback) -> None:
    """Ask one question and print the raw reply."""
    async def _ask() -> str:
        llm.set_debug_callback(debug_callback)
        async with llm:
            try:
                return await ask(llm, prompt, seed_content)
            except ChatClientError as e:
                err_console.print(f"[red]Error: {escape(str(e))}[/red]")
                raise typer.Exit(code=1)

    response = asyncio.run(_ask())
    typer.echo(response)


def _run_line_mode(llm, seed_content: str | None, debug_callback) -> None:
    """Interactive chat as a scrolling transcript."""
    from .repl import LineChat

    async def _chat() -> None:
        llm.set_debug_callback(debug_callback)
        async with llm:
            repl = LineChat(
                llm,
                seed_content=seed_content,
                console=console,
                err_console=err_console,
                debug_callback=debug_callback,
            )
            await repl.run()

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


def _run_fullscreen(llm, seed_content: str | None, log_level: str | None) -> None:
    """Interactive chat in the full-screen UI."""
    from ..ui import run_chat_tui

    async def _tui() -> None:
        async with llm:
            await run_chat_tui(llm=llm, seed_content=seed_content, log_level=log_level)

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass
    console.print("[dim]Goodbye![/dim]")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
