"""LLM Base Classes and Shared Code"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from commit_genius import COMMIT_TYPE_NAMES


SYSTEM_PROMPT = ("You are a helpful assistant that generates meaningful git commit messages "
                 "following the Conventional Commits specification.")

TYPES_PATTERN = '|'.join(COMMIT_TYPE_NAMES)


def validate_commit_message(content: str) -> tuple[bool, str]:
    """Validate that response looks like a proper commit message."""
    if not content or len(content.strip()) < 10:
        return False, "Response too short"

    pattern = rf'^({TYPES_PATTERN})(\(.+\))?!?:'
    first_line = content.strip().split('\n')[0]

    if not re.match(pattern, first_line):
        return False, f"Missing conventional commit format. Got: {first_line[:50]}"

    return True, ""


def clean_commit_message(text: str) -> str:
    """Clean up LLM response to extract just the commit message."""
    lines = text.strip().split('\n')
    start_idx = 0
    for i, line in enumerate(lines):
        if re.match(rf'^[`\s]*({TYPES_PATTERN})[\(!:]', line):
            start_idx = i
            break

    # Cut off echoed diff output, code fences, etc.
    junk = re.compile(r'^(diff --git |@@\s|[+-]{3}\s[ab]/|index [0-9a-f]|```)')
    end_idx = len(lines)
    for i in range(start_idx + 1, len(lines)):
        if junk.match(lines[i]):
            end_idx = i
            break

    cleaned = '\n'.join(lines[start_idx:end_idx]).rstrip()
    lines = cleaned.split('\n')
    if lines:
        lines[0] = lines[0].strip('`').strip()

    return '\n'.join(lines)


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class ProviderUnavailable(LLMError):
    """Network, credential or response failure from a model provider."""
    pass


class MissingCredential(ProviderUnavailable):
    """The remote provider was selected without an API key."""
    pass


class LLMClient(ABC):
    """Abstract base for LLM clients. One generate() call is one request."""

    @abstractmethod
    def generate(self, prompt: str) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    def _finish(self, raw: str, tokens_used: int = 0) -> LLMResponse:
        """Clean and validate a raw completion, or raise ProviderUnavailable."""
        content = clean_commit_message(raw or "")
        is_valid, error = validate_commit_message(content)
        if not is_valid:
            raise ProviderUnavailable(f"Malformed response from {self.name}: {error}")
        return LLMResponse(content=content, model=getattr(self, 'model', ''), tokens_used=tokens_used)
