"""Prompt Builder - Construct the LLM prompt for commit message generation."""

from commit_genius import COMMIT_TYPES


class PromptBuilder:
    """Builds the fixed commit prompt around a raw staged diff."""

    DEFAULT_MAX_DIFF_CHARS = 12000  # ~3000 tokens at ~4 chars per token

    def __init__(self, max_diff_chars: int | None = None):
        self.max_diff_chars = max_diff_chars or self.DEFAULT_MAX_DIFF_CHARS

    def build(self, diff: str) -> str:
        sections = [
            self._build_role_section(),
            self._build_format_section(),
            self._build_diff_section(diff),
            self._build_instructions(),
        ]
        return "\n\n".join(filter(None, sections))

    def _build_role_section(self) -> str:
        return ("Analyze the following git diff and generate a concise, meaningful commit message "
                "following the Conventional Commits specification.\n"
                "Focus on the main changes and their purpose.")

    def _build_format_section(self) -> str:
        types_list = "\n".join(f"  - {t}: {desc}" for t, desc in COMMIT_TYPES.items())
        return f"""<format>
Requirements:
1. Use one of these types:
{types_list}
2. Format: <type>(<scope>): <description>  (scope is optional)
3. Keep the description clear and concise
4. Use present tense, imperative mood
5. Focus on WHY and WHAT, not HOW
</format>"""

    def _build_diff_section(self, diff: str) -> str:
        body, truncated = self._truncate(diff.strip())
        parts = ["<diff>", body]
        if truncated:
            parts.append(f"\n[Note: Diff truncated to {self.max_diff_chars} characters.]")
        parts.append("</diff>")
        return "\n".join(parts)

    def _build_instructions(self) -> str:
        return """<instructions>
Generate exactly ONE commit message.
- Start directly with the type line
- No markdown formatting, no preamble, no explanation after the message
</instructions>"""

    def _truncate(self, diff: str) -> tuple[str, bool]:
        if len(diff) <= self.max_diff_chars:
            return diff, False
        cut = diff[:self.max_diff_chars]
        # Keep whole lines
        if '\n' in cut:
            cut = cut[:cut.rindex('\n')]
        return cut, True

