"""
Tests for configuration, the git wrapper and the CLI commit/config flows.

Git and the user's editor are never invoked: the repository is faked and
subprocess/input are monkeypatched.

Run with:
    pytest tests/test_cli.py -v
"""

import argparse
import io
import json
import re
import subprocess

import pytest

from commit_genius.cli import main as cli_main
from commit_genius.cli.args import parse_args
from commit_genius.cli.commands import run_commit, run_setup, display_config
from commit_genius.cli.main import main, _apply_env_timeout, _get_provider_and_model
from commit_genius.cli.utils import display_message, mask_secret, confirm
from commit_genius import COMMIT_TYPE_NAMES
from commit_genius.config import Config, ConfigManager
from commit_genius.git import GitRepository, GitError, NoStagedChanges
from commit_genius.heuristics import generate_simple_message
from commit_genius.output import COMMIT_TYPE_COLORS, Spinner, colorize_commit_type, paint, print_warning

ANSI_RE = re.compile(r'\033\[[0-9;]*m')

DOCS_DIFF = (
    "diff --git a/docs/intro.md b/docs/intro.md\n"
    "--- a/docs/intro.md\n"
    "+++ b/docs/intro.md\n"
    "@@ -0,0 +1,2 @@\n"
    "+# Intro\n"
    "+Welcome aboard\n"
)


class FakeRepo:
    def __init__(self, diff=DOCS_DIFF, commit_error=None):
        self.diff = diff
        self.commit_error = commit_error
        self.staged = []
        self.commits = []

    def stage_files(self, paths):
        self.staged.extend(paths)

    def get_staged_diff(self):
        if not self.diff:
            raise NoStagedChanges("No staged changes. Run 'git add' first.")
        return self.diff

    def commit(self, message):
        if self.commit_error:
            raise self.commit_error
        self.commits.append(message)


def commit_args(*argv):
    return parse_args(["commit", *argv])


def feed_input(monkeypatch, *answers):
    replies = iter(answers)
    monkeypatch.setattr("builtins.input", lambda *args: next(replies))


@pytest.fixture
def strip_ansi():
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


@pytest.fixture
def manager(tmp_path):
    (tmp_path / "home").mkdir()
    (tmp_path / "work").mkdir()
    return ConfigManager(cwd=tmp_path / "work", home=tmp_path / "home")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.provider is None
        assert config.model is None
        assert config.api_key is None
        assert config.timeout is None

    def test_to_dict_excludes_none(self):
        d = Config(provider="ollama").to_dict()
        assert d == {"provider": "ollama"}

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"provider": "claude", "template": "{type}: {description}"})
        assert config.provider == "claude"
        assert not hasattr(config, "template")

    def test_validate_invalid_provider(self):
        config = Config(provider="openai")
        warnings = config.validate()
        assert len(warnings) == 1
        assert config.provider is None

    @pytest.mark.parametrize("timeout", [0, -5, "30", True])
    def test_validate_invalid_timeout(self, timeout):
        config = Config(timeout=timeout)
        assert any("timeout" in w for w in config.validate())
        assert config.timeout is None

    def test_validate_valid_config_no_warnings(self):
        assert Config(provider="simple", timeout=10).validate() == []

    def test_from_dict_triggers_validation(self, capsys):
        Config.from_dict({"provider": "invalid"})
        assert "Config warning" in capsys.readouterr().err


class TestConfigManager:

    def test_load_returns_defaults_when_no_file(self, manager):
        assert manager.load() == Config()
        assert manager.get_config_path() is None

    def test_local_file_wins(self, manager):
        manager.local_path.write_text(json.dumps({"provider": "claude"}))
        manager.global_path.write_text(json.dumps({"provider": "ollama"}))

        assert manager.load().provider == "claude"
        assert manager.get_config_path() == manager.local_path

    def test_global_file_used_without_local(self, manager):
        manager.global_path.write_text(json.dumps({"provider": "ollama", "model": "mistral:7b"}))
        config = manager.load()
        assert (config.provider, config.model) == ("ollama", "mistral:7b")

    def test_save_and_load_roundtrip(self, manager, tmp_path):
        path = manager.save(Config(provider="claude", api_key="sk-test"), global_config=True)
        assert path == manager.global_path

        fresh = ConfigManager(cwd=tmp_path / "work", home=tmp_path / "home")
        loaded = fresh.load()
        assert loaded.provider == "claude"
        assert loaded.api_key == "sk-test"

    def test_save_local(self, manager):
        assert manager.save(Config(provider="simple"), global_config=False) == manager.local_path
        assert json.loads(manager.local_path.read_text())["provider"] == "simple"

    @pytest.mark.parametrize("content", ["not valid json {{{", "[1, 2]"])
    def test_bad_file_returns_defaults(self, manager, content, capsys):
        manager.local_path.write_text(content)
        assert manager.load() == Config()
        assert "Could not load" in capsys.readouterr().err

    def test_managers_do_not_share_state(self, tmp_path):
        a = ConfigManager(cwd=tmp_path, home=tmp_path)
        b = ConfigManager(cwd=tmp_path, home=tmp_path)
        a.load().provider = "ollama"
        assert b.load().provider is None


# ---------------------------------------------------------------------------
# Git wrapper
# ---------------------------------------------------------------------------

class TestGitRepository:

    @pytest.fixture
    def git_calls(self, monkeypatch):
        calls = []
        outputs = {}

        def fake_run(cmd, **kwargs):
            calls.append(cmd)
            return subprocess.CompletedProcess(cmd, 0, stdout=outputs.get(cmd[1], ""), stderr="")

        monkeypatch.setattr("subprocess.run", fake_run)
        return calls, outputs

    def test_get_staged_diff(self, git_calls):
        calls, outputs = git_calls
        outputs["diff"] = DOCS_DIFF
        assert GitRepository().get_staged_diff() == DOCS_DIFF
        assert calls[-1] == ["git", "diff", "--staged"]

    def test_empty_diff_raises_no_staged_changes(self, git_calls):
        with pytest.raises(NoStagedChanges):
            GitRepository().get_staged_diff()

    def test_stage_and_commit(self, git_calls):
        calls, _ = git_calls
        repo = GitRepository()
        repo.stage_files(["a.py", "b.py"])
        repo.stage_files([])
        repo.commit("feat: add things")

        assert ["git", "add", "--", "a.py", "b.py"] in calls
        assert calls[-1] == ["git", "commit", "-m", "feat: add things"]
        assert sum(1 for c in calls if c[1] == "add") == 1

    def test_not_a_repository(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            if cmd[1] == "rev-parse":
                raise subprocess.CalledProcessError(128, cmd, stderr="fatal: not a git repository")
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        monkeypatch.setattr("subprocess.run", fake_run)
        with pytest.raises(GitError, match="Not inside a git repository"):
            GitRepository()

    def test_git_missing(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise FileNotFoundError("git")

        monkeypatch.setattr("subprocess.run", fake_run)
        with pytest.raises(GitError, match="not installed"):
            GitRepository()


# ---------------------------------------------------------------------------
# commit command
# ---------------------------------------------------------------------------

class TestRunCommit:

    def test_commits_heuristic_message(self, capsys, strip_ansi):
        repo = FakeRepo()
        code = run_commit(commit_args("docs/intro.md"), Config(), None, None, repo_factory=lambda: repo)

        assert code == 0
        assert repo.staged == ["docs/intro.md"]
        assert repo.commits == ["docs(docs): add intro documentation"]
        out = strip_ansi(capsys.readouterr().out)
        assert "docs(docs): add intro documentation" in out
        assert "Successfully committed changes!" in out

    def test_custom_message_skips_generation(self):
        repo = FakeRepo()
        code = run_commit(commit_args("-m", "chore: bump deps"), Config(provider="ollama"), "ollama", None,
                          repo_factory=lambda: repo)
        assert code == 0
        assert repo.commits == ["chore: bump deps"]

    def test_no_staged_changes(self, capsys):
        repo = FakeRepo(diff="")
        code = run_commit(commit_args(), Config(), None, None, repo_factory=lambda: repo)

        assert code == 1
        assert repo.commits == []
        assert "No staged changes" in capsys.readouterr().err

    def test_git_error_on_open(self, capsys):
        def broken():
            raise GitError("Not inside a git repository")

        assert run_commit(commit_args(), Config(), None, None, repo_factory=broken) == 1
        assert "Not inside a git repository" in capsys.readouterr().err

    def test_git_error_on_commit(self, capsys):
        repo = FakeRepo(commit_error=GitError("Git command failed: git commit"))
        assert run_commit(commit_args(), Config(), None, None, repo_factory=lambda: repo) == 1

    def test_dry_run_prints_only(self, capsys):
        repo = FakeRepo()
        code = run_commit(commit_args("--dry-run"), Config(), None, None, repo_factory=lambda: repo)

        assert code == 0
        assert repo.commits == []
        assert capsys.readouterr().out.strip() == generate_simple_message(DOCS_DIFF)

    def test_provider_failure_still_commits_heuristic(self, monkeypatch, capsys):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        repo = FakeRepo()
        code = run_commit(commit_args("-p", "claude"), Config(), "claude", None, repo_factory=lambda: repo)

        assert code == 0
        assert repo.commits == [generate_simple_message(DOCS_DIFF)]
        assert "falling back" in capsys.readouterr().err

    def test_interactive_accept(self, monkeypatch):
        feed_input(monkeypatch, "")
        repo = FakeRepo()
        assert run_commit(commit_args("-i"), Config(), None, None, repo_factory=lambda: repo) == 0
        assert repo.commits == ["docs(docs): add intro documentation"]

    def test_interactive_edit(self, monkeypatch):
        feed_input(monkeypatch, "n")
        monkeypatch.setattr("commit_genius.cli.commands.edit_message", lambda message: "docs: write intro")
        repo = FakeRepo()
        assert run_commit(commit_args("-i"), Config(), None, None, repo_factory=lambda: repo) == 0
        assert repo.commits == ["docs: write intro"]

    def test_interactive_abort(self, monkeypatch, capsys):
        feed_input(monkeypatch, "n")
        monkeypatch.setattr("commit_genius.cli.commands.edit_message", lambda message: None)
        repo = FakeRepo()
        assert run_commit(commit_args("-i"), Config(), None, None, repo_factory=lambda: repo) == 0
        assert repo.commits == []
        assert "Commit aborted" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# config command
# ---------------------------------------------------------------------------

class TestConfigCommand:

    def test_setup_ollama(self, manager, monkeypatch):
        feed_input(monkeypatch, "9", "2", "mistral:7b")
        assert run_setup(manager) == 0

        saved = json.loads(manager.global_path.read_text())
        assert saved["provider"] == "ollama"
        assert saved["model"] == "mistral:7b"

    def test_setup_claude_reads_key_without_echo(self, manager, monkeypatch):
        feed_input(monkeypatch, "3")
        monkeypatch.setattr("getpass.getpass", lambda prompt: "sk-ant-123456789")
        assert run_setup(manager) == 0

        saved = json.loads(manager.global_path.read_text())
        assert saved == {"provider": "claude", "api_key": "sk-ant-123456789"}

    def test_setup_cancelled(self, manager, monkeypatch):
        def cancel(*args):
            raise EOFError

        monkeypatch.setattr("builtins.input", cancel)
        assert run_setup(manager) == 1
        assert not manager.global_path.exists()

    def test_show_masks_key(self, manager, capsys, strip_ansi):
        manager.save(Config(provider="claude", api_key="sk-ant-123456789"))
        assert display_config(manager) == 0

        out = strip_ansi(capsys.readouterr().out)
        assert "provider:    claude" in out
        assert "sk-ant-123456789" not in out
        assert "sk-a…6789" in out


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

class TestMain:

    def test_provider_precedence(self, monkeypatch):
        config = Config(provider="ollama", model="codellama")
        args = argparse.Namespace(provider=None, model=None)
        monkeypatch.setenv("CM_PROVIDER", "claude")
        monkeypatch.delenv("CM_MODEL", raising=False)
        assert _get_provider_and_model(args, config) == ("claude", "codellama")

        args = argparse.Namespace(provider="simple", model="m")
        assert _get_provider_and_model(args, config) == ("simple", "m")

    @pytest.mark.parametrize("env, expected", [
        ("5", 5),
        (" 12 ", 12),
        ("0", 30),
        ("-3", 30),
        ("soon", 30),
        ("", 30),
    ])
    def test_env_timeout_overrides_config(self, monkeypatch, env, expected):
        monkeypatch.setenv("CM_TIMEOUT", env)
        assert _apply_env_timeout(Config(provider="ollama", timeout=30)).timeout == expected

    def test_env_timeout_unset_keeps_config(self, monkeypatch):
        monkeypatch.delenv("CM_TIMEOUT", raising=False)
        config = Config(provider="ollama")
        assert _apply_env_timeout(config) is config
        assert config.timeout is None

    def test_commit_receives_env_timeout(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)
        (tmp_path / ".cmgrc").write_text(json.dumps({"provider": "ollama", "timeout": 30}))
        monkeypatch.setenv("CM_TIMEOUT", "5")
        seen = []

        def fake_run_commit(args, config, provider, model):
            seen.append(config.timeout)
            return 0

        monkeypatch.setattr(cli_main, "run_commit", fake_run_commit)
        assert main(["commit"]) == 0
        assert seen == [5]

    def test_uncaught_error_exits_1(self, monkeypatch, tmp_path, capsys):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)

        def boom(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(cli_main, "run_commit", boom)
        assert main(["commit"]) == 1
        assert "Error: boom" in capsys.readouterr().err

    def test_config_show(self, monkeypatch, tmp_path, capsys):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)
        assert main(["config", "--show"]) == 0
        assert "Current Configuration" in capsys.readouterr().out

    def test_command_required(self):
        with pytest.raises(SystemExit) as exc:
            parse_args([])
        assert exc.value.code == 2

    def test_rejects_unknown_provider(self):
        with pytest.raises(SystemExit):
            parse_args(["commit", "-p", "openai"])


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

class TestDisplay:

    def test_display_message_rules_match_width(self, capsys, strip_ansi):
        display_message("feat(api): add users")
        lines = strip_ansi(capsys.readouterr().out).strip('\n').split('\n')
        assert lines == ["─" * 20, "feat(api): add users", "─" * 20]

    @pytest.mark.parametrize("value, expected", [
        (None, "not set"),
        ("", "not set"),
        ("abc", "***"),
        ("sk-ant-123456789", "sk-a…6789"),
    ])
    def test_mask_secret(self, value, expected):
        assert mask_secret(value) == expected

    @pytest.mark.parametrize("answer, expected", [("", True), ("y", True), ("YES", True), ("n", False), ("x", False)])
    def test_confirm(self, monkeypatch, answer, expected):
        feed_input(monkeypatch, answer)
        assert confirm("Proceed?") is expected


class TestOutput:

    def test_no_color_off_a_tty(self, monkeypatch):
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.delenv("NO_COLOR", raising=False)
        assert paint("text", "bold", stream=io.StringIO()) == "text"

    def test_force_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("FORCE_COLOR", "1")
        assert paint("text", "bold", "green") == "\033[1;32mtext\033[0m"

    def test_no_color_wins(self, monkeypatch):
        monkeypatch.setenv("FORCE_COLOR", "1")
        monkeypatch.setenv("NO_COLOR", "1")
        assert paint("text", "bold") == "text"

    def test_every_commit_type_has_a_color(self):
        assert set(COMMIT_TYPE_COLORS) == set(COMMIT_TYPE_NAMES)

    def test_colorize_only_touches_prefix(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("FORCE_COLOR", "1")
        colored = colorize_commit_type("fix(api): handle nulls\n\n- body")
        assert colored.startswith("\033[1;31mfix(api):\033[0m handle nulls")
        assert colored.endswith("\n\n- body")

    def test_colorize_leaves_unknown_types(self, monkeypatch):
        monkeypatch.setenv("FORCE_COLOR", "1")
        assert colorize_commit_type("wip: stuff") == "wip: stuff"

    def test_warning_goes_to_stderr(self, capsys, strip_ansi):
        print_warning("ollama error, falling back to simple mode")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "ollama error, falling back to simple mode" in strip_ansi(captured.err)

    def test_spinner_silent_off_a_tty(self):
        stream = io.StringIO()
        with Spinner("Generating...", stream=stream) as spinner:
            assert not spinner.active
        assert stream.getvalue() == ""
