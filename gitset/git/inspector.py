"""Git Inspector - Read staged changes through the git executable."""

import re
import subprocess
from typing import Optional

from gitset.git.base import GitBackend, GitError, StagedFile, FileContent
from gitset.output import log_step, CHECK

# user@host: (scp-like SSH) or scheme://[user@]host/ (HTTPS, ssh://, git://)
REMOTE_PREFIX_RE = re.compile(r'^(?:[\w.+-]+://(?:[^@/]+@)?[^/]+/|[\w.-]+@[^:/]+:)')


def normalize_remote_url(url: str) -> str:
    """Reduce a remote URL to 'owner/repo'."""
    repo_path = REMOTE_PREFIX_RE.sub('', url.strip())
    repo_path = repo_path.rstrip('/')
    if repo_path.endswith('.git'):
        repo_path = repo_path[:-len('.git')]
    return repo_path


class GitInspector(GitBackend):
    """Runs git porcelain commands in the current working directory."""

    def __init__(self, cwd: str | None = None):
        self.cwd = cwd

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace',
                cwd=self.cwd,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr.strip()}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def verify(self) -> None:
        """Fail fast if git is missing or we're not inside a repository."""
        self._run_git('--version')
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            raise GitError("Not inside a git repository")

    def list_staged_files(self) -> list[StagedFile]:
        """Parse 'git diff --cached --name-status -z' output.

        NUL-separated fields keep non-ASCII and tab-containing paths verbatim.
        Renames and copies list two paths, joined here with a tab.
        """
        log_step('Git', 'Retrieving staged files...')
        try:
            output = self._run_git('diff', '--cached', '--name-status', '-z')
        except GitError as e:
            log_step('Git', f"Error: {e}", is_error=True)
            return []

        files = []
        fields = iter(output.split('\0'))
        for status in fields:
            if not status:
                continue
            path_count = 2 if status[0] in 'RC' else 1
            path_parts = [next(fields, '') for _ in range(path_count)]
            files.append(StagedFile(status=status, path='\t'.join(path_parts)))
        return files

    def get_file_content(self, path: str) -> Optional[FileContent]:
        """Fetch the file at HEAD (previous) and in the index (current).

        A file missing at HEAD is new; a file missing from the index was
        deleted. Either side degrades to empty text, but if neither side
        can be read the file is reported as failed.
        """
        log_step('Diff', f"Getting differences for {path}...")
        previous = current = None

        try:
            head = self._run_git('rev-parse', 'HEAD').strip()
            previous = self._run_git('show', f"{head}:{path}")
            log_step('Diff', f"{CHECK} Retrieved previous content")
        except GitError:
            log_step('Diff', f"New file detected: {path}")

        try:
            current = self._run_git('show', f":{path}")
            log_step('Diff', f"{CHECK} Retrieved current content")
        except GitError:
            log_step('Diff', f"Removed from index: {path}")

        if previous is None and current is None:
            log_step('Diff', f"Error processing {path}: no content at HEAD or in the index", is_error=True)
            return None
        return FileContent(previous=previous or '', current=current or '')

    def get_repo_identity(self) -> str:
        log_step('Repo', 'Retrieving repository information...')
        try:
            remote_url = self._run_git('config', '--get', 'remote.origin.url')
        except GitError:
            log_step('Repo', 'No remote configured', is_error=True)
            return ''
        repo_path = normalize_remote_url(remote_url)
        log_step('Repo', f"{CHECK} Repository identified: {repo_path}")
        return repo_path

    def list_recent_subjects(self, count: int) -> list[str]:
        """Most recent commit subjects, newest first."""
        log_step('History', f"Fetching last {count} commits...")
        try:
            output = self._run_git('log', f"-{count}", '--pretty=format:%s')
        except GitError as e:
            log_step('History', f"Error fetching commit history: {e}", is_error=True)
            return []
        subjects = [line for line in output.split('\n') if line]
        log_step('History', f"{CHECK} Retrieved {len(subjects)} commits")
        return subjects
