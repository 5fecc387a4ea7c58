"""Change Filter - Drop noise paths and oversized files."""

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional


# Matched as the whole path or its leading directory
IGNORED_FILES: list[str] = [
    'package-lock.json',
    'yarn.lock',
    'pnpm-lock.yaml',
    '.env',
    'venv',
    'node_modules',
    '.DS_Store',
    'dist',
    'build',
    '__pycache__',
    '.pytest_cache',
    'coverage',
]

# Also ignored when nested anywhere below the repository root
NESTED_IGNORED_DIRS: list[str] = ['node_modules', '__pycache__', 'venv']

DEFAULT_MAX_LINES = 3000


@dataclass
class ChangeFilter:
    """Path ignore list plus an optional line-count ceiling.

    max_lines=None disables the size check.
    """
    ignored: tuple[str, ...] = tuple(IGNORED_FILES)
    nested: tuple[str, ...] = tuple(NESTED_IGNORED_DIRS)
    max_lines: Optional[int] = None

    def is_ignored(self, path: str) -> bool:
        parts = PurePosixPath(path).parts
        if not parts:
            return False
        if path in self.ignored or parts[0] in self.ignored:
            return True
        # the last part is the file name, only directories count here
        return any(part in self.nested for part in parts[1:-1])

    def exceeds_size_limit(self, content: str) -> bool:
        if self.max_lines is None:
            return False
        return len(content.splitlines()) > self.max_lines
