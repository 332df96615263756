"""LLM Client Package"""

from commit_genius.llm.base import (
    LLMClient, LLMResponse, LLMError, ProviderUnavailable, MissingCredential,
    SYSTEM_PROMPT, validate_commit_message, clean_commit_message,
)
from commit_genius.llm.claude import ClaudeClient
from commit_genius.llm.ollama import OllamaClient


def get_client(
    provider: str,
    model: str | None = None,
    api_key: str | None = None,
    host: str | None = None,
    timeout: int | None = None,
) -> LLMClient:
    """Get an LLM client. Provider can be 'claude' or 'ollama'."""
    if provider == "claude":
        return ClaudeClient(api_key=api_key, model=model, timeout=timeout)
    if provider == "ollama":
        return OllamaClient(model=model, host=host, timeout=timeout)

    raise ProviderUnavailable(f"Unknown provider: {provider}. Use 'simple', 'ollama' or 'claude'.")


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "ProviderUnavailable",
    "MissingCredential",
    "ClaudeClient",
    "OllamaClient",
    "get_client",
    "SYSTEM_PROMPT",
    "validate_commit_message",
    "clean_commit_message",
]
