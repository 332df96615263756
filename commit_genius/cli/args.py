"""CLI Argument Parsing"""

import argparse
import argcomplete

from commit_genius import __version__
from commit_genius.config import VALID_PROVIDERS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cmg',
        description='Generate conventional commit messages and commit staged changes',
        epilog='Example: cmg commit -i src/app.py'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    commit = subparsers.add_parser('commit', help='Generate commit message and commit changes')
    commit.add_argument('files', nargs='*', metavar='FILE', help='Files to stage before committing')
    commit.add_argument('-m', '--message', type=str, metavar='MESSAGE', help='Use a custom commit message')
    commit.add_argument('-p', '--provider', type=str, choices=sorted(VALID_PROVIDERS), help='Message provider')
    commit.add_argument('--model', type=str, metavar='MODEL', help='Model name for the provider')
    commit.add_argument('-i', '--interactive', action='store_true', help='Confirm or edit the message before committing')
    commit.add_argument('--dry-run', action='store_true', help='Print the message without committing')

    config = subparsers.add_parser('config', help='Configure commit-genius')
    config.add_argument('--show', action='store_true', help='Show current configuration')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
