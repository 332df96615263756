"""Scope Inference - Pick a conventional commit scope from changed paths."""

from typing import Iterable

from commit_genius.git.diff_parser import ChangeRecord
from commit_genius.heuristics.rules import (
    ChangeSet, Rule, first_match, contains, endswith,
    DOC_SUFFIXES, STYLE_SUFFIXES, TEST_FILE_SUFFIXES,
)

# Directory segments first, then "every file is X" checks.
SCOPE_RULES: list[Rule] = [
    Rule("api", lambda c: c.any_path(contains('/api/', '/routes/')), 'api'),
    Rule("ui", lambda c: c.any_path(contains('/ui/', '/components/')), 'ui'),
    Rule("db", lambda c: c.any_path(contains('/db/', '/models/')), 'db'),
    Rule("auth", lambda c: c.any_path(contains('/auth/', 'security')), 'auth'),
    Rule("test-dir", lambda c: c.any_path(contains('/test/')), 'tests'),
    Rule("docs-dir", lambda c: c.any_path(contains('/docs/')), 'docs'),
    Rule("styles-only", lambda c: c.every_path(endswith(*STYLE_SUFFIXES)), 'styles'),
    Rule("tests-only", lambda c: c.every_path(endswith(*TEST_FILE_SUFFIXES)), 'tests'),
    Rule("docs-only", lambda c: c.every_path(endswith(*DOC_SUFFIXES)), 'docs'),
]


def infer_scope(records: Iterable[ChangeRecord] | ChangeSet) -> str:
    """Return a scope token, or '' when nothing identifies one."""
    changes = records if isinstance(records, ChangeSet) else ChangeSet(records)
    return first_match(SCOPE_RULES, changes, default='')
