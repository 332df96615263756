"""Message Assembler - Turn a diff into a conventional commit message."""

from typing import NamedTuple

from commit_genius.git.diff_parser import parse_diff
from commit_genius.heuristics.commit_type import infer_type
from commit_genius.heuristics.description import generate_description
from commit_genius.heuristics.rules import ChangeSet
from commit_genius.heuristics.scope import infer_scope


class Classification(NamedTuple):
    type: str
    scope: str
    description: str


def format_message(commit_type: str, scope: str, description: str) -> str:
    if scope:
        return f"{commit_type}({scope}): {description}"
    return f"{commit_type}: {description}"


def classify(diff: str) -> Classification:
    """Parse the diff once and run each extractor over the same records."""
    changes = ChangeSet(parse_diff(diff))
    return Classification(
        type=infer_type(changes),
        scope=infer_scope(changes),
        description=generate_description(changes),
    )


def generate_simple_message(diff: str) -> str:
    """Heuristic commit message. Never raises; '' gives 'chore: update code'."""
    return format_message(*classify(diff))
