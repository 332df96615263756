"""Heuristic Commit Classifier Package"""

from commit_genius.heuristics.commit_type import infer_type, TYPE_RULES
from commit_genius.heuristics.description import generate_description
from commit_genius.heuristics.message import Classification, classify, format_message, generate_simple_message
from commit_genius.heuristics.rules import ChangeSet, Rule, first_match
from commit_genius.heuristics.scope import infer_scope, SCOPE_RULES

__all__ = [
    "ChangeSet",
    "Rule",
    "first_match",
    "infer_scope",
    "infer_type",
    "generate_description",
    "Classification",
    "classify",
    "format_message",
    "generate_simple_message",
    "SCOPE_RULES",
    "TYPE_RULES",
]
