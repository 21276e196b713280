"""Pytest configuration and shared fixtures."""
import asyncio
import json
import os
from collections.abc import Callable

import httpx
import pytest

from pipechat.llm import ChatMessage, LLMProvider, OllamaProvider


def ndjson(*records: dict) -> bytes:
    """Encode records as a newline-delimited JSON response body."""
    return b"".join(json.dumps(record).encode("utf-8") + b"\n" for record in records)


async def iter_lines(lines):
    """Async line source for the decoder."""
    for line in lines:
        yield line


class FakeProvider(LLMProvider):
    """In-process provider that records every conversation it is sent.

    Replies are taken from ``replies`` in order. When ``gate`` is set the
    reply is held until the event is set, which keeps a request pending.
    """

    def __init__(self, replies: list[str] | None = None, error: Exception | None = None) -> None:
        super().__init__()
        self.replies = list(replies or ["ok"])
        self.error = error
        self.calls: list[list[ChatMessage]] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def generate(self, messages: list[ChatMessage]) -> str:
        self.calls.append(list(messages))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else ""

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def ollama_config():
    """Return Ollama configuration for integration tests."""
    return {
        "base_url": os.getenv("OLLAMA_HOST", "http://localhost:11434"),
        "model": os.getenv("OLLAMA_MODEL", "qwen2.5-coder"),
    }


@pytest.fixture
def fake_provider():
    """A provider that answers without a server."""
    return FakeProvider(replies=["first reply", "second reply", "third reply"])


@pytest.fixture
def recorded_requests():
    """Requests seen by the mock transport."""
    return []


@pytest.fixture
def make_ollama(recorded_requests) -> Callable[..., OllamaProvider]:
    """Build an OllamaProvider backed by an httpx MockTransport.

    The handler may return an httpx.Response or raise an httpx exception.
    """
    def _make(handler: Callable[[httpx.Request], httpx.Response], **config) -> OllamaProvider:
        def _record(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        return OllamaProvider(transport=httpx.MockTransport(_record), **config)

    return _make
