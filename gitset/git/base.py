"""Git Backend Interface and Shared Types"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ChangeType(str, Enum):
    """Kind of change recorded in the index for one file."""
    ADDED = 'added'
    MODIFIED = 'modified'
    DELETED = 'deleted'


STATUS_CODES = {
    'A': ChangeType.ADDED,
    'M': ChangeType.MODIFIED,
    'D': ChangeType.DELETED,
}


def change_type_for(status: str) -> str:
    """Map a single-letter git status to its change type.

    Unrecognized codes (R100, C, T, ...) pass through unchanged.
    """
    change_type = STATUS_CODES.get(status)
    return change_type.value if change_type else status


@dataclass
class StagedFile:
    """One line of the staged-change listing."""
    status: str
    path: str

    @property
    def change_type(self) -> str:
        return change_type_for(self.status)


@dataclass
class FileContent:
    """Content of a file at HEAD and in the index."""
    previous: str
    current: str


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class GitBackend(ABC):
    """Read-only view of a repository's staged state."""

    @abstractmethod
    def list_staged_files(self) -> list[StagedFile]:
        pass

    @abstractmethod
    def get_file_content(self, path: str) -> Optional[FileContent]:
        pass

    @abstractmethod
    def get_repo_identity(self) -> str:
        pass

    @abstractmethod
    def list_recent_subjects(self, count: int) -> list[str]:
        pass
