"""CLI Utility Functions"""

import os
import subprocess
import sys
import tempfile

from commit_genius.output import bold, dim, colorize_commit_type


def display_message(message: str) -> None:
    """Display commit message with horizontal rules and colored type."""
    lines = colorize_commit_type(message).split('\n')
    # Width from the raw message, ANSI codes excluded
    width = max((len(line) for line in message.split('\n')), default=40)
    print(f"\n{dim('─' * width)}")
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print(dim('─' * width))


def confirm(question: str, default: bool = True) -> bool:
    """Ask a yes/no question. Ctrl-C and EOF count as 'no'."""
    suffix = '[Y/n]' if default else '[y/N]'
    try:
        answer = input(f"{question} {dim(suffix)} ").strip().lower()
    except (KeyboardInterrupt, EOFError):
        print()
        return False
    if not answer:
        return default
    return answer in ('y', 'yes')


def mask_secret(value: str | None) -> str:
    if not value:
        return 'not set'
    if len(value) <= 8:
        return '*' * len(value)
    return f"{value[:4]}…{value[-4:]}"


def edit_message(message: str) -> str | None:
    """Open message in user's editor. Returns edited text or None on failure."""
    editor = os.environ.get('VISUAL') or os.environ.get('EDITOR')
    if not editor:
        editor = 'notepad' if sys.platform == 'win32' else 'vi'

    tmp = tempfile.NamedTemporaryFile(mode='w', suffix='.gitcommit', delete=False, encoding='utf-8')
    try:
        tmp.write(message)
        tmp.close()
        subprocess.run([editor, tmp.name], check=True)
        with open(tmp.name, 'r', encoding='utf-8') as f:
            edited = f.read().strip()
        return edited if edited else None
    except (subprocess.CalledProcessError, OSError):
        return None
    finally:
        try:
            os.unlink(tmp.name)
        except OSError as e:
            # Log to stderr so temp files don't silently accumulate
            print(f"Warning: Could not delete temp file {tmp.name}: {e}", file=sys.stderr)
