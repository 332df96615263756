"""Diff Parser - Split a unified diff into per-file change records."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class ChangeRecord:
    """One file touched by the diff."""
    path: str
    added_lines: tuple[str, ...] = ()
    removed_lines: tuple[str, ...] = ()
    context_lines: tuple[str, ...] = ()

    @property
    def additions(self) -> int:
        return len(self.added_lines)

    @property
    def deletions(self) -> int:
        return len(self.removed_lines)


class _State(Enum):
    NONE = "none"      # before the first file header
    HEADER = "header"  # file header open, no hunk seen yet
    HUNK = "hunk"      # inside @@ hunks


@dataclass
class _RecordBuilder:
    path: str
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    context: list[str] = field(default_factory=list)

    def freeze(self) -> ChangeRecord:
        return ChangeRecord(
            path=self.path,
            added_lines=tuple(self.added),
            removed_lines=tuple(self.removed),
            context_lines=tuple(self.context),
        )


FILE_HEADER = 'diff --git'
HUNK_HEADER = '@@'
NEW_PATH_MARKER = '+++'
OLD_PATH_MARKER = '---'


def _path_from_header(line: str) -> str:
    """Take the post-change path from a 'diff --git a/x b/x' line."""
    parts = line.split(' b/')
    if len(parts) > 1:
        return parts[1]
    tokens = line.split()
    last = tokens[-1] if len(tokens) > 2 else ''
    return last[2:] if last.startswith('b/') else last


def parse_diff(diff: str) -> tuple[ChangeRecord, ...]:
    """Parse unified diff text into records, in order of appearance.

    Text without any 'diff --git' header yields an empty tuple.
    """
    records: list[ChangeRecord] = []
    current: _RecordBuilder | None = None
    state = _State.NONE

    for line in (diff or '').split('\n'):
        line = line.rstrip('\r')
        if line.startswith(FILE_HEADER):
            if current:
                records.append(current.freeze())
            current = _RecordBuilder(path=_path_from_header(line))
            state = _State.HEADER
            continue

        if state is _State.NONE:
            continue

        if line.startswith(HUNK_HEADER):
            state = _State.HUNK
            continue

        if state is _State.HEADER and line.startswith((NEW_PATH_MARKER, OLD_PATH_MARKER)):
            continue

        if line.startswith('+'):
            current.added.append(line[1:].strip())
        elif line.startswith('-'):
            current.removed.append(line[1:].strip())
        elif line.startswith(' '):
            current.context.append(line[1:].strip())

    if current:
        records.append(current.freeze())

    return tuple(records)


def render_diff(records: tuple[ChangeRecord, ...] | list[ChangeRecord]) -> str:
    """Serialize records back into unified diff text that parse_diff accepts."""
    lines = []
    for record in records:
        old_count = len(record.context_lines) + record.deletions
        new_count = len(record.context_lines) + record.additions
        lines.extend([
            f"{FILE_HEADER} a/{record.path} b/{record.path}",
            f"{OLD_PATH_MARKER} a/{record.path}",
            f"{NEW_PATH_MARKER} b/{record.path}",
            f"{HUNK_HEADER} -1,{old_count} +1,{new_count} {HUNK_HEADER}",
        ])
        lines.extend(f" {line}" for line in record.context_lines)
        lines.extend(f"-{line}" for line in record.removed_lines)
        lines.extend(f"+{line}" for line in record.added_lines)
    return '\n'.join(lines) + '\n' if lines else ''
