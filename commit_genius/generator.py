"""Commit Message Generator - Choose a strategy and fall back to the heuristic."""

from dataclasses import dataclass
from typing import Callable, Optional

from commit_genius.config import Config
from commit_genius.heuristics import generate_simple_message
from commit_genius.llm import LLMClient, get_client
from commit_genius.output import print_warning
from commit_genius.prompts import PromptBuilder

SIMPLE_PROVIDER = "simple"


@dataclass(frozen=True)
class GenerationRequest:
    """Input for one generation. Unset fields fall back to the config."""
    diff: str
    provider: Optional[str] = None
    model: Optional[str] = None
    api_key: Optional[str] = None


class CommitMessageGenerator:
    """Produces a commit message for a diff; never raises to the caller.

    Provider failures of any kind (missing key, network, timeout, malformed
    completion) print a warning and return the heuristic message instead.
    """

    def __init__(
        self,
        config: Config | None = None,
        client_factory: Callable[..., LLMClient] = get_client,
        prompt_builder: PromptBuilder | None = None,
        warn: Callable[[str], None] = print_warning,
    ):
        self.config = config or Config()
        self._client_factory = client_factory
        self._prompt_builder = prompt_builder or PromptBuilder()
        self._warn = warn

    def select_provider(self, request: GenerationRequest) -> str:
        return request.provider or self.config.provider or SIMPLE_PROVIDER

    def generate(self, request: GenerationRequest) -> str:
        provider = self.select_provider(request)
        if provider == SIMPLE_PROVIDER:
            return generate_simple_message(request.diff)

        try:
            return self._generate_with_provider(provider, request)
        except Exception as e:
            self._warn(f"{provider} error, falling back to simple mode: {e}")
            return generate_simple_message(request.diff)

    def _generate_with_provider(self, provider: str, request: GenerationRequest) -> str:
        client = self._client_factory(
            provider,
            model=request.model or self.config.model,
            api_key=request.api_key or self.config.api_key,
            host=self.config.ollama_host,
            timeout=self.config.timeout,
        )
        response = client.generate(self._prompt_builder.build(request.diff))
        return response.content


def generate_commit_message(diff: str, provider: str | None = None, config: Config | None = None) -> str:
    """One-shot convenience wrapper around CommitMessageGenerator."""
    return CommitMessageGenerator(config).generate(GenerationRequest(diff=diff, provider=provider))
