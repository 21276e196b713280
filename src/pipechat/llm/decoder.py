"""Incremental decoder for newline-delimited JSON response streams.

Hides the framing of the model server's streamed reply: one JSON object
per line, each carrying a text fragment and a completion flag.
"""

from collections.abc import AsyncIterable, Callable
from typing import Any

from pydantic import ValidationError

from .errors import StreamDecodeError
from .models import StreamRecord

DebugCallback = Callable[[str, str, str], Any]


def parse_record(line: str) -> StreamRecord:
    """Decode one stream line.

    Args:
        line: A single line of the response body, without its newline

    Returns:
        The decoded StreamRecord (missing fields take their defaults)

    Raises:
        StreamDecodeError: If the line is not a JSON object of the expected shape
    """
    try:
        return StreamRecord.model_validate_json(line)
    except ValidationError as e:
        errors = e.errors()
        reason = errors[0]["msg"] if errors else str(e)
        raise StreamDecodeError(line, reason) from e


async def accumulate_stream(
    lines: AsyncIterable[str],
    on_error: DebugCallback | None = None,
    on_final: Callable[[StreamRecord], Any] | None = None,
) -> str:
    """Concatenate the fragments of a response stream.

    Stops after the first record flagged final, or when the source is
    exhausted. Malformed lines are reported through ``on_error`` and
    skipped. Errors raised by the source itself propagate and the partial
    text is dropped.

    Args:
        lines: Lazy, non-restartable source of response lines
        on_error: Debug callback ``(level, component, message)``
        on_final: Called with the final record, if one arrives

    Returns:
        The accumulated response text
    """
    parts: list[str] = []

    async for line in lines:
        if not line.strip():
            continue

        try:
            record = parse_record(line)
        except StreamDecodeError as e:
            if on_error:
                on_error("warning", "Stream", f"{e} (line: {line[:80]!r})")
            continue

        parts.append(record.fragment)

        if record.is_final:
            if on_final:
                on_final(record)
            break

    return "".join(parts)
