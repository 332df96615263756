"""Terminal Output - Colours, status lines and a spinner for the cmg CLI."""

import itertools
import os
import re
import sys
import threading

from commit_genius import COMMIT_TYPE_NAMES

ANSI_CODES = {
    'bold': '1',
    'dim': '2',
    'red': '31',
    'green': '32',
    'yellow': '33',
    'magenta': '35',
    'cyan': '36',
}

# Glyph and its plain-ASCII stand-in
SYMBOLS = {
    'ok': ('✓', '[OK]'),
    'fail': ('✗', '[X]'),
    'warn': ('⚠', '[!]'),
    'done': ('✨', '*'),
}


def _unicode_ok() -> bool:
    encoding = (getattr(sys.stdout, 'encoding', None) or 'utf-8').lower()
    return sys.platform != 'win32' or encoding.replace('-', '').startswith('utf8')


UNICODE_ENABLED = _unicode_ok()


def colors_enabled(stream=None) -> bool:
    """NO_COLOR wins, then FORCE_COLOR, then whether the stream is a TTY."""
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    stream = stream or sys.stdout
    return hasattr(stream, 'isatty') and stream.isatty()


def paint(text: str, *styles: str, stream=None) -> str:
    if not styles or not colors_enabled(stream):
        return text
    codes = ';'.join(ANSI_CODES[s] for s in styles)
    return f"\033[{codes}m{text}\033[0m"


def symbol(name: str) -> str:
    glyph, plain = SYMBOLS[name]
    return glyph if UNICODE_ENABLED else plain


SPARKLE = symbol('done')


def bold(text: str) -> str:
    return paint(text, 'bold')


def dim(text: str) -> str:
    return paint(text, 'dim')


def info(text: str) -> str:
    return paint(text, 'cyan')


def warning(text: str) -> str:
    return paint(text, 'yellow')


def _status(name: str, color: str, message: str, stream, color_message: bool = False) -> None:
    mark = paint(symbol(name), color, stream=stream)
    body = paint(message, color, stream=stream) if color_message else message
    print(f"{mark} {body}", file=stream)


def print_success(message: str) -> None:
    _status('ok', 'green', message, sys.stdout)


def print_error(message: str) -> None:
    _status('fail', 'red', message, sys.stderr, color_message=True)


def print_warning(message: str) -> None:
    # stderr keeps a piped commit message clean
    _status('warn', 'yellow', message, sys.stderr, color_message=True)


_TYPE_COLOR_OVERRIDES = {
    'feat': 'green',
    'perf': 'green',
    'fix': 'red',
    'refactor': 'yellow',
    'test': 'magenta',
    'style': 'dim',
    'chore': 'dim',
}
COMMIT_TYPE_COLORS = {name: _TYPE_COLOR_OVERRIDES.get(name, 'cyan') for name in COMMIT_TYPE_NAMES}

_HEADER_RE = re.compile(rf'^({"|".join(COMMIT_TYPE_NAMES)})(\([^)]*\))?!?:')


def colorize_commit_type(message: str) -> str:
    """Colour the 'type(scope):' prefix of the subject line."""
    subject, newline, body = message.partition('\n')
    match = _HEADER_RE.match(subject)
    if not match:
        return message
    prefix = match.group(0)
    painted = paint(prefix, 'bold', COMMIT_TYPE_COLORS[match.group(1)])
    return f"{painted}{subject[len(prefix):]}{newline}{body}"


class Spinner:
    """Animates a frame while the wrapped call blocks. Silent when not a TTY."""

    FRAMES = '⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏' if UNICODE_ENABLED else '-\\|/'
    INTERVAL = 0.08

    def __init__(self, text: str = "", stream=None):
        self.text = text
        self._stream = stream or sys.stdout
        self._stop = threading.Event()
        self._thread = None

    @property
    def active(self) -> bool:
        return hasattr(self._stream, 'isatty') and self._stream.isatty()

    def _run(self) -> None:
        for frame in itertools.cycle(self.FRAMES):
            if self._stop.is_set():
                break
            self._stream.write(f"\r\033[K{frame} {self.text}")
            self._stream.flush()
            self._stop.wait(self.INTERVAL)

    def __enter__(self):
        if self.active:
            self._stop.clear()
            self._thread = threading.Thread(target=self._run, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *exc_info):
        self._stop.set()
        if self._thread:
            self._thread.join()
            self._thread = None
            self._stream.write('\r\033[K')
            self._stream.flush()
        return False


__all__ = [
    "UNICODE_ENABLED", "SPARKLE", "COMMIT_TYPE_COLORS",
    "colors_enabled", "paint", "symbol",
    "bold", "dim", "info", "warning",
    "print_success", "print_error", "print_warning",
    "colorize_commit_type", "Spinner",
]
