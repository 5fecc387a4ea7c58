"""
Tests for CLI output formatting.

Shows sample output for each scenario. Run with:
    pytest tests/test_display.py -v
    pytest tests/test_display.py -v -s   # see actual terminal output
"""

import re

import pytest

from gitset.cli.main import _display_file_list, _display_message
from gitset.git import StagedFile
from gitset.output import format_commit_message, format_date, format_status, log_step

ANSI_RE = re.compile(r'\033\[[0-9;]*m')


@pytest.fixture
def strip_ansi():
    """Return a function that removes ANSI escape codes."""
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


# ---------------------------------------------------------------------------
# Step log lines
# ---------------------------------------------------------------------------

class TestLogStep:

    def test_info_line_goes_to_stdout(self, capsys, strip_ansi):
        log_step('Git', 'Retrieving staged files...')
        out = capsys.readouterr()
        line = strip_ansi(out.out)
        assert re.search(r'\[\d{2}:\d{2}:\d{2}\] Git: Retrieving staged files\.\.\.', line)
        assert out.err == ""

    def test_error_line_goes_to_stderr(self, capsys, strip_ansi):
        log_step('Error', 'boom', is_error=True)
        out = capsys.readouterr()
        assert out.out == ""
        assert "Error: boom" in strip_ansi(out.err)


# ---------------------------------------------------------------------------
# Staged file list
# ---------------------------------------------------------------------------

class TestDisplayFileList:

    def test_marks_each_status(self, capsys, strip_ansi):
        _display_file_list([
            StagedFile("A", "src/app.ts"),
            StagedFile("M", "src/util.ts"),
            StagedFile("D", "src/legacy.ts"),
            StagedFile("T", "bin/run"),
        ])
        out = strip_ansi(capsys.readouterr().out)

        assert "Analyzing:" in out
        assert "+ Added: src/app.ts" in out
        assert "~ Modified: src/util.ts" in out
        assert "- Deleted: src/legacy.ts" in out
        assert "T: bin/run" in out

    def test_unknown_status_passes_through(self, strip_ansi):
        assert strip_ansi(format_status("R100")) == "R100"


# ---------------------------------------------------------------------------
# Commit message rendering
# ---------------------------------------------------------------------------

class TestCommitMessage:

    def test_title_and_body(self, strip_ansi):
        message = "feat(auth): add login\n\n- add endpoint\n- validate creds"
        assert strip_ansi(format_commit_message(message)) == message

    def test_title_only(self, strip_ansi):
        assert strip_ansi(format_commit_message("chore: bump version")) == "chore: bump version"

    def test_display_message_header(self, capsys, strip_ansi):
        _display_message("fix(api): handle timeout\n\n- retry once", "custom")
        out = strip_ansi(capsys.readouterr().out)
        lines = out.split('\n')

        assert lines[0] == "Suggested message (custom mode):"
        assert set(lines[1]) == {"-"}
        assert lines[2] == "fix(api): handle timeout"
        assert "- retry once" in out


class TestFormatDate:

    @pytest.mark.parametrize("value, expected", [
        ("2025-01-01", "2025-01-01"),
        ("2026-03-01T00:00:00Z", "2026-03-01"),
        ("2026-03-01T12:30:00.000000+00:00", "2026-03-01"),
        ("next tuesday", "next tuesday"),
        (None, "unknown"),
    ])
    def test_formats(self, value, expected):
        assert format_date(value) == expected
