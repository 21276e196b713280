"""Provider factory functions for CLI.

Centralizes creation of the LLM provider from environment variables.
Hides configuration details from command implementations.
"""

import os

from ..llm import LLMProvider, create_llm_provider
from ..llm.providers import DEFAULT_HOST, DEFAULT_MODEL


def get_llm(model: str | None = None) -> LLMProvider:
    """Create LLM provider from environment variables.

    Args:
        model: Model name, overriding OLLAMA_MODEL

    Returns:
        Ollama provider instance

    Environment variables:
        OLLAMA_HOST: Server address (default: http://localhost:11434)
        OLLAMA_MODEL: Model to use (default: qwen2.5-coder)
    """
    return create_llm_provider(
        "ollama",
        base_url=os.getenv("OLLAMA_HOST") or DEFAULT_HOST,
        model=model or os.getenv("OLLAMA_MODEL") or DEFAULT_MODEL,
    )
