"""CLI Commands"""

import getpass
import os

from commit_genius.config import Config, ConfigManager
from commit_genius.generator import CommitMessageGenerator, GenerationRequest
from commit_genius.git import GitRepository, GitError, NoStagedChanges
from commit_genius.output import bold, dim, info, warning, print_success, print_error, Spinner, SPARKLE

from commit_genius.cli.utils import confirm, display_message, edit_message, mask_secret


def _choose_message(message: str) -> str | None:
    """Interactive confirmation. Returns the message to commit, or None to abort."""
    display_message(message)
    if confirm("\nDo you want to use this message?"):
        return message
    return edit_message(message)


def run_commit(args, config: Config, provider: str | None, model: str | None,
               repo_factory=GitRepository, generator: CommitMessageGenerator | None = None) -> int:
    """Stage, generate, optionally confirm, and commit."""
    try:
        repo = repo_factory()
        repo.stage_files(args.files)
        diff = repo.get_staged_diff()
    except NoStagedChanges as e:
        print_error(str(e))
        return 1
    except GitError as e:
        print_error(str(e))
        return 1

    message = args.message
    if not message:
        generator = generator or CommitMessageGenerator(config)
        request = GenerationRequest(diff=diff, provider=provider, model=model)
        with Spinner("Generating commit message..."):
            message = generator.generate(request)

    if args.dry_run:
        print(message)
        return 0

    if args.interactive:
        message = _choose_message(message)
        if not message:
            print(warning("Commit aborted"))
            return 0

    try:
        repo.commit(message)
    except GitError as e:
        print_error(str(e))
        return 1

    if not args.interactive:
        display_message(message)
    print_success(f"Successfully committed changes! {SPARKLE}")
    return 0


def display_config(manager: ConfigManager) -> int:
    """Display current configuration."""
    config = manager.load()
    config_path = manager.get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no {manager.CONFIG_FILENAME} found)")

    env_provider = os.environ.get('CM_PROVIDER')
    env_model = os.environ.get('CM_MODEL')
    env_timeout = os.environ.get('CM_TIMEOUT')
    if env_provider or env_model or env_timeout:
        print(f"  {dim('Environment overrides:')}")
        if env_provider:
            print(f"    CM_PROVIDER={env_provider}")
        if env_model:
            print(f"    CM_MODEL={env_model}")
        if env_timeout:
            print(f"    CM_TIMEOUT={env_timeout}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    provider:    {info(config.provider or 'simple')}")
    print(f"    model:       {info(config.model or 'default')}")
    print(f"    api_key:     {info(mask_secret(config.api_key))}")
    print(f"    ollama_host: {info(config.ollama_host or 'default')}")
    print(f"    timeout:     {info(f'{config.timeout}s' if config.timeout else 'default')}")

    print(f"\n  {dim('Run')} cmg config {dim('to configure')}\n")
    return 0


def run_setup(manager: ConfigManager) -> int:
    """Interactive setup wizard."""
    print(f"\n{bold('Setup Wizard')}\n")
    print("Choose provider:\n")
    print("  1. simple (heuristic, offline)")
    print("  2. ollama (free, local)")
    print("  3. claude (API key required)\n")

    choices = {'1': 'simple', '2': 'ollama', '3': 'claude'}
    while True:
        try:
            choice = input("Select [1/2/3]: ").strip()
        except (KeyboardInterrupt, EOFError):
            print()
            print_error("Setup cancelled")
            return 1
        if choice in choices:
            provider = choices[choice]
            break

    existing = manager.load()
    config = Config(provider=provider, ollama_host=existing.ollama_host, timeout=existing.timeout)

    if provider == 'ollama':
        print(f"\nRecommended: codellama, llama3.2:3b, mistral:7b\n")
        config.model = input("Model (Enter for codellama): ").strip() or None
    elif provider == 'claude':
        config.api_key = getpass.getpass("Claude API key: ").strip() or existing.api_key
        if not config.api_key:
            print(warning("No key saved; ANTHROPIC_API_KEY will be used if set."))

    path = manager.save(config, global_config=True)
    print_success(f"Configuration saved to {path}")
    return 0
