"""Prompt Construction Package"""

from commit_genius.prompts.builder import PromptBuilder

__all__ = ["PromptBuilder"]
