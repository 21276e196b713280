"""Standard input handling for the CLI.

Hides how piped content is read and how the keyboard is recovered when
standard input was a pipe.
"""

import os
import sys
from typing import TextIO

TTY_PATH = "/dev/tty"


class EmptyInputError(Exception):
    """Standard input was piped but carried no content."""


def stdin_is_piped(stream: TextIO | None = None) -> bool:
    """Whether standard input is a pipe or file rather than a terminal."""
    stream = stream if stream is not None else sys.stdin
    if stream is None:
        return False
    try:
        return not stream.isatty()
    except ValueError:
        # Closed stream
        return False


def read_seed_content(stream: TextIO | None = None) -> str:
    """Read all piped lines, normalising each to end with a newline.

    The raw bytes are decoded as UTF-8 with invalid sequences replaced by
    U+FFFD, so any input can still be encoded into a request.

    Raises:
        EmptyInputError: If the stream is empty
    """
    stream = stream if stream is not None else sys.stdin
    raw = getattr(stream, "buffer", None)
    text = raw.read().decode("utf-8", errors="replace") if raw is not None else stream.read()

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    content = "".join(line.rstrip("\r") + "\n" for line in lines)
    if not content:
        raise EmptyInputError("No input received")
    return content


def reattach_tty(tty_path: str = TTY_PATH) -> None:
    """Make the controlling terminal file descriptor 0 again.

    After piped content has been consumed, keyboard input for the
    interactive modes has to come from the terminal.

    Raises:
        OSError: If there is no controlling terminal
    """
    fd = os.open(tty_path, os.O_RDONLY)
    try:
        os.dup2(fd, 0)
    finally:
        os.close(fd)
    sys.stdin = open(0, closefd=False)
