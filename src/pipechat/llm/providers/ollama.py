from typing import Any

import httpx

from ..base import LLMProvider
from ..decoder import accumulate_stream
from ..errors import RequestEncodingError, TransportError
from ..models import ChatMessage, GenerateRequest, StreamRecord
from ..prompt import flatten_messages

DEFAULT_HOST = "http://localhost:11434"
DEFAULT_MODEL = "qwen2.5-coder"
GENERATE_PATH = "/api/generate"


def normalize_host(host: str | None) -> str:
    """Turn an OLLAMA_HOST style value into a base URL.

    Accepts bare ``host:port`` values the way the Ollama CLI does.
    """
    if not host or not host.strip():
        return DEFAULT_HOST
    host = host.strip().rstrip("/")
    if "://" not in host:
        host = f"http://{host}"
    return host


class OllamaProvider(LLMProvider):
    """Ollama provider using the streaming ``/api/generate`` endpoint.

    Hidden design decisions:
    - HTTP client initialization (httpx, no timeout)
    - Conversation flattening into a single prompt
    - Response stream decoding
    - Mapping of transport failures onto ChatClientError
    """

    def __init__(
        self,
        base_url: str = DEFAULT_HOST,
        model: str = DEFAULT_MODEL,
        **client_kwargs: Any
    ):
        """Initialize Ollama provider.

        Args:
            base_url: Server address, e.g. http://localhost:11434
            model: Model to generate with
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        super().__init__()
        self._model = model
        self._base_url = normalize_host(base_url)
        client_kwargs.setdefault("timeout", httpx.Timeout(None))
        self._client = httpx.AsyncClient(base_url=self._base_url, **client_kwargs)
        self._last_usage: dict[str, int] | None = None

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    @property
    def base_url(self) -> str:
        """Get the server base URL."""
        return self._base_url

    @property
    def last_usage(self) -> dict[str, int] | None:
        """Token usage reported by the last completed stream, if any."""
        return self._last_usage

    def build_request(self, messages: list[ChatMessage]) -> GenerateRequest:
        """Build the request body for a conversation."""
        return GenerateRequest(model=self._model, prompt=flatten_messages(messages))

    def encode_request(self, request: GenerateRequest) -> bytes:
        """Serialize a request body.

        Raises:
            RequestEncodingError: If the body cannot be encoded as UTF-8 JSON
        """
        try:
            return request.model_dump_json().encode("utf-8")
        except ValueError as e:
            raise RequestEncodingError(f"error marshalling JSON: {e}") from e

    async def generate(self, messages: list[ChatMessage]) -> str:
        """Generate a reply for the conversation.

        Args:
            messages: Conversation history (sent verbatim, in order)

        Returns:
            Full reply text

        Raises:
            RequestEncodingError: The request body could not be serialized
            TransportError: The POST failed, returned an error status,
                or the stream broke off before completing
        """
        body = self.encode_request(self.build_request(messages))
        self._last_usage = None

        self._debug(
            "debug", "LLM",
            f"POST {self._base_url}{GENERATE_PATH} model={self._model} "
            f"messages={len(messages)} bytes={len(body)}"
        )

        connected = False
        try:
            async with self._client.stream(
                "POST",
                GENERATE_PATH,
                content=body,
                headers={"Content-Type": "application/json"},
            ) as response:
                connected = True
                if response.status_code >= 400:
                    await response.aread()
                    raise TransportError(
                        f"server returned HTTP {response.status_code}: {response.text.strip()}"
                    )

                text = await accumulate_stream(
                    response.aiter_lines(),
                    on_error=self._debug_callback,
                    on_final=self._record_final,
                )
        except httpx.HTTPError as e:
            if connected:
                raise TransportError(f"error reading response stream: {e}") from e
            raise TransportError(f"failed to send request: {e}") from e

        self._debug("info", "LLM", f"Received {len(text)} characters")
        return text

    def _record_final(self, record: StreamRecord) -> None:
        """Capture usage from the final stream record."""
        self._last_usage = record.usage
        if record.usage:
            self._debug(
                "debug", "LLM",
                f"Tokens: prompt={record.usage['prompt_tokens']} "
                f"completion={record.usage['completion_tokens']}"
            )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
