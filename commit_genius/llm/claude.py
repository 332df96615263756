"""Claude (Anthropic) LLM Client"""

import os

from commit_genius.llm.base import LLMClient, LLMResponse, MissingCredential, ProviderUnavailable, SYSTEM_PROMPT


class ClaudeClient(LLMClient):
    """Claude API client. Key from argument, config or ANTHROPIC_API_KEY."""

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    DEFAULT_TIMEOUT = 60
    MAX_TOKENS = 300
    TEMPERATURE = 0.4

    def __init__(self, api_key: str | None = None, model: str | None = None, timeout: int | None = None):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout or int(os.environ.get("CM_TIMEOUT", self.DEFAULT_TIMEOUT))

        if not self.api_key:
            raise MissingCredential(
                "No API key found. Run 'cmg config' or set ANTHROPIC_API_KEY:\n"
                "  export ANTHROPIC_API_KEY='your-key-here'"
            )

        from anthropic import Anthropic
        self._client = Anthropic(api_key=self.api_key, timeout=self.timeout, max_retries=0)

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        from anthropic import APIError, APITimeoutError, AuthenticationError

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}]
            )
        except AuthenticationError:
            raise ProviderUnavailable("Invalid API key. Check your Claude API key.")
        except APITimeoutError:
            raise ProviderUnavailable(f"Request timed out after {self.timeout}s")
        except APIError as e:
            raise ProviderUnavailable(f"Claude API error: {e.message}")

        content = ""
        for block in response.content:
            if block.type == "text":
                content = block.text.strip()
                break

        return self._finish(content, tokens_used=response.usage.input_tokens + response.usage.output_tokens)
