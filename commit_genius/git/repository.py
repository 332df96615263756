"""Git Repository - Stage, diff and commit through the git binary."""

import subprocess


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class NoStagedChanges(GitError):
    """Raised when there is nothing staged to describe or commit."""
    pass


class GitRepository:
    """Thin wrapper around the git commands the commit flow needs."""

    def __init__(self):
        self._verify_git_available()
        self._verify_in_repo()

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            raise GitError("Not inside a git repository")

    def stage_files(self, paths: list[str]) -> None:
        if not paths:
            return
        self._run_git('add', '--', *paths)

    def get_staged_diff(self) -> str:
        """Diff of staged changes only. Raises NoStagedChanges when empty."""
        diff = self._run_git('diff', '--staged')
        if not diff.strip():
            raise NoStagedChanges("No staged changes. Run 'git add' first.")
        return diff

    def commit(self, message: str) -> None:
        self._run_git('commit', '-m', message)
