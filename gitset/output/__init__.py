"""Terminal Output Formatting Package"""

import sys
import os
import threading
from datetime import datetime


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    CYAN = '\033[36m'
    BRIGHT_CYAN = '\033[38;2;126;255;247m'
    DARK_CYAN = '\033[38;2;75;208;214m'


def _supports_color() -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(sys.stdout, 'isatty') or not sys.stdout.isatty():
        return False
    if sys.platform == 'win32':
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
            return True
        except Exception:
            return False
    return True


def _supports_unicode() -> bool:
    if sys.platform == 'win32':
        try:
            '✓●'.encode(sys.stdout.encoding or 'utf-8')
            return True
        except (UnicodeEncodeError, LookupError):
            return False
    return True


COLORS_ENABLED = _supports_color()
UNICODE_ENABLED = _supports_unicode()

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'
DOT = '●' if UNICODE_ENABLED else '*'
SPARKLE = '✨' if UNICODE_ENABLED else '*'
RULE = '-' * 18

# Marker shown next to each staged file, keyed by git status code
STATUS_MARKERS = {
    'A': ('+ Added', Colors.GREEN),
    'M': ('~ Modified', Colors.YELLOW),
    'D': ('- Deleted', Colors.RED),
}


def _colorize(text: str, *codes: str) -> str:
    if not COLORS_ENABLED:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def error(text: str) -> str:
    return _colorize(text, Colors.RED)


def warning(text: str) -> str:
    return _colorize(text, Colors.YELLOW)


def info(text: str) -> str:
    return _colorize(text, Colors.CYAN)


def dim(text: str) -> str:
    return _colorize(text, Colors.DIM)


def bold(text: str) -> str:
    return _colorize(text, Colors.BOLD)


def print_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def log_step(step: str, message: str, is_error: bool = False) -> None:
    """Print a timestamped progress line: '● [12:00:00] Step: message'.

    Error lines use a red cross and go to stderr so piped output stays clean.
    """
    timestamp = datetime.now().strftime('%H:%M:%S')
    if is_error:
        line = f"{error(CROSS)} [{timestamp}] {error(step)}: {message}"
        print(line, file=sys.stderr)
    else:
        line = f"{_colorize(DOT, Colors.BRIGHT_CYAN)} [{timestamp}] {info(step)}: {message}"
        print(line)


def format_status(status: str) -> str:
    """Render a staged-file status code as a colored label."""
    label, color = STATUS_MARKERS.get(status, (status, ''))
    if not color:
        return label
    return _colorize(label, color)


def format_commit_message(message: str) -> str:
    """Style the title line and the optional body differently."""
    title, _, body = message.partition('\n')
    rendered = _colorize(title, Colors.BOLD, Colors.BRIGHT_CYAN)
    if body:
        rendered += '\n' + _colorize(body, Colors.DARK_CYAN)
    return rendered


def format_date(value) -> str:
    """Render an ISO-8601 date or timestamp as YYYY-MM-DD.

    Values that don't parse are shown as-is.
    """
    if not value:
        return 'unknown'
    text = str(value)
    try:
        parsed = datetime.fromisoformat(text.replace('Z', '+00:00'))
    except ValueError:
        return text
    return parsed.date().isoformat()


class Spinner:
    """Animated spinner for long operations. Use as context manager."""
    FRAMES_UNICODE = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']
    FRAMES_ASCII = ['-', '\\', '|', '/']

    def __init__(self):
        self._thread = None
        self._stop_event = threading.Event()
        self._frames = self.FRAMES_UNICODE if UNICODE_ENABLED else self.FRAMES_ASCII

    def _spin(self):
        idx = 0
        while not self._stop_event.is_set():
            frame = self._frames[idx % len(self._frames)]
            print(f'\r\033[K{frame} ', end='', flush=True)
            idx += 1
            self._stop_event.wait(0.08)

    def __enter__(self):
        if sys.stdout.isatty():
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *args):
        self._stop_event.set()
        if self._thread:
            self._thread.join()
        if sys.stdout.isatty():
            print('\r\033[K', end='', flush=True)


__all__ = [
    "Colors", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS", "DOT", "SPARKLE", "RULE", "STATUS_MARKERS",
    "error", "warning", "info", "dim", "bold",
    "print_error", "log_step",
    "format_status", "format_commit_message", "format_date", "Spinner",
]
