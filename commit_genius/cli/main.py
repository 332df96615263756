"""CLI Main Entry Point"""

import os
from dataclasses import replace

from commit_genius.config import Config, ConfigManager
from commit_genius.output import print_error

from commit_genius.cli.args import parse_args
from commit_genius.cli.commands import display_config, run_commit, run_setup


def _get_provider_and_model(args, config):
    """Resolve provider and model from args, env, or config.

    Precedence: CLI args > environment variables > config file
    """
    provider = args.provider or os.environ.get('CM_PROVIDER') or config.provider
    model = args.model or os.environ.get('CM_MODEL') or config.model
    return provider, model


def _apply_env_timeout(config: Config) -> Config:
    """CM_TIMEOUT (whole seconds) overrides the config file timeout."""
    value = os.environ.get('CM_TIMEOUT', '').strip()
    if value.isdigit() and int(value) > 0:
        return replace(config, timeout=int(value))
    return config


def _dispatch(args, manager: ConfigManager) -> int:
    if args.command == 'config':
        if args.show:
            return display_config(manager)
        return run_setup(manager)

    config = _apply_env_timeout(manager.load())
    provider, model = _get_provider_and_model(args, config)
    return run_commit(args, config, provider, model)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI. Uncaught errors exit with 1."""
    args = parse_args(argv)
    try:
        return _dispatch(args, ConfigManager())
    except KeyboardInterrupt:
        print()
        return 1
    except Exception as e:
        print_error(f"Error: {e}")
        return 1
