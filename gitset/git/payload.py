"""Payload Assembler - Turn staged files into the generation request."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Optional

from gitset.git.base import GitBackend, StagedFile, FileContent
from gitset.git.filters import ChangeFilter
from gitset.output import log_step

BINARY_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.gif', '.bmp', '.ico', '.webp', '.tiff', '.pdf'}

# Upper bound on concurrent 'git show' processes
MAX_FETCH_WORKERS = 8


def content_type_for(path: str) -> str:
    suffix = PurePosixPath(path).suffix.lower()
    return 'binary' if suffix in BINARY_EXTENSIONS else 'text'


@dataclass
class FileChange:
    """One file as the generation service expects it."""
    name: str
    path: str
    change_type: str
    content_type: str
    before: str = ""
    after: str = ""

    @classmethod
    def from_staged(cls, staged: StagedFile, content: FileContent) -> 'FileChange':
        return cls(
            name=PurePosixPath(staged.path).name,
            path=staged.path,
            change_type=staged.change_type,
            content_type=content_type_for(staged.path),
            before=content.previous,
            after=content.current,
        )

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'path': self.path,
            'changeType': self.change_type,
            'contentType': self.content_type,
            'changes': {
                'before': self.before,
                'after': self.after,
            },
        }


@dataclass
class ChangeSetRequest:
    """Body of POST /generate-commit-message."""
    repo_name: str
    file_changes: list[FileChange] = field(default_factory=list)
    mode: str = "semantic"
    commit_history: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.file_changes) == 0

    def to_dict(self) -> dict:
        return {
            'repo_name': self.repo_name,
            'file_changes': [change.to_dict() for change in self.file_changes],
            'mode': self.mode,
            'commit_history': self.commit_history,
        }


class PayloadAssembler:
    """Fetches content for staged files and builds a ChangeSetRequest."""

    def __init__(self, git: GitBackend, change_filter: ChangeFilter | None = None, fetch_workers: int = 1):
        self.git = git
        self.filter = change_filter or ChangeFilter()
        self.fetch_workers = max(1, min(fetch_workers, MAX_FETCH_WORKERS))

    def select(self, staged: list[StagedFile]) -> list[StagedFile]:
        """Drop ignored paths before any content is fetched."""
        return [f for f in staged if not self.filter.is_ignored(f.path)]

    def _build_change(self, staged: StagedFile) -> Optional[FileChange]:
        content = self.git.get_file_content(staged.path)
        if content is None:
            return None
        if self.filter.exceeds_size_limit(content.previous) or self.filter.exceeds_size_limit(content.current):
            log_step('Diff', f"Skipping {staged.path}: more than {self.filter.max_lines} lines", is_error=True)
            return None
        return FileChange.from_staged(staged, content)

    def build_changes(self, staged: list[StagedFile]) -> list[FileChange]:
        """FileChange per file, in listing order; failed fetches are dropped."""
        if self.fetch_workers == 1 or len(staged) <= 1:
            results = [self._build_change(f) for f in staged]
        else:
            # map() yields in submission order, so listing order is kept
            with ThreadPoolExecutor(max_workers=self.fetch_workers) as pool:
                results = list(pool.map(self._build_change, staged))
        return [change for change in results if change is not None]

    def assemble(self, staged: list[StagedFile], mode: str = "semantic", commit_count: int = 20) -> ChangeSetRequest:
        file_changes = self.build_changes(self.select(staged))
        repo_name = self.git.get_repo_identity()
        commit_history = self.git.list_recent_subjects(commit_count) if mode == 'custom' else []
        return ChangeSetRequest(
            repo_name=repo_name,
            file_changes=file_changes,
            mode=mode,
            commit_history=commit_history,
        )
