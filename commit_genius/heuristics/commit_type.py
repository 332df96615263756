"""Type Inference - Pick a conventional commit type from paths and content."""

from typing import Iterable

from commit_genius.git.diff_parser import ChangeRecord
from commit_genius.heuristics.rules import (
    ChangeSet, Rule, first_match, contains, endswith, either, is_doc_file, is_test_file,
    DOC_SUFFIXES, STYLE_SUFFIXES, TEST_FILE_SUFFIXES, ROUTE_PATH_MARKERS,
    MANIFEST_NAMES, ROUTER_USAGE,
)


def _is_route_refactor(changes: ChangeSet) -> bool:
    return (
        changes.any_path(contains(*ROUTE_PATH_MARKERS))
        and ROUTER_USAGE in changes.content
        and changes.file_count > 1
    )


TYPE_RULES: list[Rule] = [
    # File patterns
    Rule("test-files", lambda c: c.any_path(either(contains('/test/'), endswith(*TEST_FILE_SUFFIXES))), 'test'),
    Rule("doc-files", lambda c: c.any_path(either(endswith(*DOC_SUFFIXES), contains('README'))), 'docs'),
    Rule("style-files", lambda c: c.any_path(endswith(*STYLE_SUFFIXES)), 'style'),
    Rule("manifest", lambda c: c.any_path(contains(*MANIFEST_NAMES)), 'build'),
    Rule("docs-only", lambda c: c.every_path(is_doc_file), 'docs'),
    Rule("tests-only", lambda c: c.every_path(is_test_file), 'test'),
    Rule("route-refactor", _is_route_refactor, 'refactor'),
    # Content keywords
    Rule("fix-words", lambda c: c.mentions('fix', 'bug'), 'fix'),
    Rule("refactor-words", lambda c: c.mentions('refactor', 'cleanup'), 'refactor'),
    Rule("perf-words", lambda c: c.mentions('perf', 'performance'), 'perf'),
    # Line balance
    Rule("mostly-added", lambda c: c.total_added > c.total_removed * 2, 'feat'),
    Rule("mostly-removed", lambda c: c.total_removed > c.total_added * 2, 'refactor'),
    Rule("any-change", lambda c: c.total_added > 0 or c.total_removed > 0, 'fix'),
]


def infer_type(records: Iterable[ChangeRecord] | ChangeSet) -> str:
    """Return one of COMMIT_TYPE_NAMES; 'chore' when nothing changed."""
    changes = records if isinstance(records, ChangeSet) else ChangeSet(records)
    return first_match(TYPE_RULES, changes, default='chore')
