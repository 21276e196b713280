from .ollama import DEFAULT_HOST, DEFAULT_MODEL, OllamaProvider, normalize_host

__all__ = ["DEFAULT_HOST", "DEFAULT_MODEL", "OllamaProvider", "normalize_host"]
