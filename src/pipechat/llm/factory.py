from typing import Any

from .base import LLMProvider
from .providers import OllamaProvider


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider by name.

    Args:
        provider: Provider name, case-insensitive. Only 'ollama' is known.
        **config: Passed to the provider. For Ollama: ``base_url``,
            ``model`` and any httpx.AsyncClient keyword such as ``transport``.

    Raises:
        ValueError: If the provider name is unknown

    Example:
        >>> llm = create_llm_provider("ollama", base_url="gpu-box:11434", model="llama3")
    """
    if provider.lower() == "ollama":
        return OllamaProvider(**config)

    raise ValueError(f"Unsupported provider: {provider}. Supported providers: 'ollama'")
