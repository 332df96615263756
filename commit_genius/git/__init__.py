"""Git Operations Package"""

from commit_genius.git.diff_parser import ChangeRecord, parse_diff, render_diff
from commit_genius.git.repository import GitRepository, GitError, NoStagedChanges

__all__ = [
    "ChangeRecord",
    "parse_diff",
    "render_diff",
    "GitRepository",
    "GitError",
    "NoStagedChanges",
]
