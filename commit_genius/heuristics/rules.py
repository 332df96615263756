"""Rule Tables - Ordered (predicate, result) rules over a set of changed files."""

from dataclasses import dataclass
from typing import Callable, Iterable

from commit_genius.git.diff_parser import ChangeRecord

# Path fragments and suffixes shared by the scope, type and description rules.
# Matching is plain substring/suffix matching, case sensitive.
DOC_SUFFIXES = ('.md',)
STYLE_SUFFIXES = ('.css', '.scss')
TEST_FILE_SUFFIXES = ('.test.ts', '.spec.ts')
TEST_FILE_MARKERS = ('/tests/', '.test.', '.spec.')
DOC_PATH_MARKERS = ('/docs/',)
ROUTE_PATH_MARKERS = ('/routes/', 'Router')
MANIFEST_NAMES = ('package.json', 'package-lock.json')
ROUTER_USAGE = 'router.'


def normalize_path(path: str) -> str:
    return path.replace('\\', '/')


class ChangeSet:
    """Read-only view over parsed records with the aggregates rules need."""

    def __init__(self, records: Iterable[ChangeRecord]):
        self.records = tuple(records)
        self.paths = [normalize_path(r.path) for r in self.records]
        self.total_added = sum(r.additions for r in self.records)
        self.total_removed = sum(r.deletions for r in self.records)
        self.content = ' '.join(
            line
            for r in self.records
            for line in (*r.added_lines, *r.removed_lines, *r.context_lines)
        )
        self.lowered = self.content.lower()

    @property
    def file_count(self) -> int:
        return len(self.records)

    def any_path(self, test: Callable[[str], bool]) -> bool:
        return any(test(p) for p in self.paths)

    def every_path(self, test: Callable[[str], bool]) -> bool:
        """True when all paths pass. An empty set never qualifies."""
        return bool(self.paths) and all(test(p) for p in self.paths)

    def mentions(self, *words: str) -> bool:
        """Case-insensitive search of all changed and context text."""
        return any(w in self.lowered for w in words)


def contains(*needles: str) -> Callable[[str], bool]:
    return lambda path: any(n in path for n in needles)


def endswith(*suffixes: str) -> Callable[[str], bool]:
    return lambda path: path.endswith(suffixes)


def either(*tests: Callable[[str], bool]) -> Callable[[str], bool]:
    return lambda path: any(t(path) for t in tests)


is_doc_file = either(contains(*DOC_PATH_MARKERS), endswith(*DOC_SUFFIXES))
is_test_file = contains(*TEST_FILE_MARKERS)


@dataclass(frozen=True)
class Rule:
    """A named predicate and the value it yields when it matches."""
    name: str
    predicate: Callable[[ChangeSet], bool]
    result: str

    def matches(self, changes: ChangeSet) -> bool:
        return self.predicate(changes)


def first_match(rules: Iterable[Rule], changes: ChangeSet, default: str) -> str:
    """Evaluate rules in order; the first one that matches decides."""
    for rule in rules:
        if rule.matches(changes):
            return rule.result
    return default
