"""Git Operations Package"""

from gitset.git.base import GitBackend, GitError, StagedFile, FileContent, ChangeType, change_type_for
from gitset.git.inspector import GitInspector, normalize_remote_url
from gitset.git.filters import ChangeFilter, IGNORED_FILES, DEFAULT_MAX_LINES
from gitset.git.payload import PayloadAssembler, FileChange, ChangeSetRequest, content_type_for

__all__ = [
    "GitBackend",
    "GitError",
    "StagedFile",
    "FileContent",
    "ChangeType",
    "change_type_for",
    "GitInspector",
    "normalize_remote_url",
    "ChangeFilter",
    "IGNORED_FILES",
    "DEFAULT_MAX_LINES",
    "PayloadAssembler",
    "FileChange",
    "ChangeSetRequest",
    "content_type_for",
]
