"""Description Synthesis - Build an imperative summary phrase for the change."""

from pathlib import PurePosixPath
from typing import Iterable

from commit_genius.git.diff_parser import ChangeRecord
from commit_genius.heuristics.rules import (
    ChangeSet, is_doc_file, is_test_file, ROUTER_USAGE,
)

FALLBACK_DESCRIPTION = 'update code'
TEST_NAME_MARKERS = ('.test', '.spec')


def file_stem(path: str) -> str:
    """'docs/intro.md' -> 'intro', 'src/user.test.ts' -> 'user'."""
    stem = PurePosixPath(path).stem
    for marker in TEST_NAME_MARKERS:
        if stem.endswith(marker):
            return stem[:-len(marker)]
    return stem


def _stems(paths: list[str]) -> list[str]:
    return [s for s in (file_stem(p) for p in paths) if s]


def _docs_phrase(changes: ChangeSet) -> str | None:
    stems = _stems([p for p in changes.paths if is_doc_file(p)])
    if not stems:
        return None
    return f"add {', '.join(stems)} documentation"


def _tests_phrase(changes: ChangeSet) -> str | None:
    stems = _stems([p for p in changes.paths if is_test_file(p)])
    if not stems:
        return None
    return f"add tests for {', '.join(stems)}"


def _routes_phrase(changes: ChangeSet) -> str | None:
    touches_routes = changes.any_path(lambda p: '/routes/' in p) or any(
        ROUTER_USAGE in ' '.join(r.added_lines) for r in changes.records
    )
    if touches_routes and changes.file_count > 1:
        return 'move API routes to dedicated module'
    return None


# Every phrase that applies is kept, in this order.
PHRASE_BUILDERS = [_docs_phrase, _tests_phrase, _routes_phrase]


def generate_description(records: Iterable[ChangeRecord] | ChangeSet) -> str:
    """Lower-case imperative phrase, no trailing punctuation."""
    changes = records if isinstance(records, ChangeSet) else ChangeSet(records)
    phrases = [p for p in (build(changes) for build in PHRASE_BUILDERS) if p]
    return ' and '.join(phrases) if phrases else FALLBACK_DESCRIPTION
