"""Tests for the line editor command-line tool."""

import json

import pytest

from lineedit_tool.line_editor import cleanup_old_logs, main


@pytest.fixture
def note(tmp_path):
    """Create a three line note with a trailing newline."""
    path = tmp_path / "note.md"
    path.write_text("a\nb\nc\n", encoding='utf-8')
    return path


def write_edits(tmp_path, edits, reasoning=None):
    """Write an edit batch file."""
    data = {"edits": edits}
    if reasoning is not None:
        data["reasoning"] = reasoning

    path = tmp_path / "edits.json"
    path.write_text(json.dumps(data), encoding='utf-8')
    return path


SAMPLE_EDITS = [
    {"line": 1, "action": "delete", "content": ""},
    {"line": 0, "action": "insert", "content": "x"},
]


class TestLineEditorNumbered:
    """Test printing numbered notes."""

    def test_numbered_output(self, note, capsys):
        """Test the note is printed as the edit generator sees it."""
        assert main(["--file", str(note), "--numbered"]) == 0

        assert capsys.readouterr().out == "0 | a\n1 | b\n2 | c\n"

    def test_missing_file(self, tmp_path, capsys):
        """Test a missing note is an error."""
        assert main(["--file", str(tmp_path / "missing.md"), "--numbered"]) == 1

        assert "Source file not found" in capsys.readouterr().err


class TestLineEditorDryRun:
    """Test dry runs."""

    def test_dry_run_shows_preview_without_writing(self, tmp_path, note, capsys):
        """Test a dry run prints a diff and leaves the file alone."""
        edits = write_edits(tmp_path, SAMPLE_EDITS, reasoning="demo reasoning")

        assert main(["--file", str(note), "--edits", str(edits)]) == 0

        out = capsys.readouterr().out
        assert "demo reasoning" in out
        assert "+x" in out
        assert "-b" in out
        assert "Dry-run mode" in out
        assert note.read_text(encoding='utf-8') == "a\nb\nc\n"

    def test_dry_run_reports_errors(self, tmp_path, note, capsys):
        """Test invalid edits make a dry run fail."""
        edits = write_edits(tmp_path, [{"line": 9, "action": "replace", "content": "z"}])

        assert main(["--file", str(note), "--edits", str(edits)]) == 1

        assert "Line 9 does not exist (only 3 lines)" in capsys.readouterr().out

    def test_edits_required(self, note, capsys):
        """Test --edits is needed unless only numbering."""
        assert main(["--file", str(note)]) == 1

        assert "--edits is required" in capsys.readouterr().err

    def test_invalid_edits_file(self, tmp_path, note, capsys):
        """Test an unparseable batch is reported."""
        edits = tmp_path / "edits.json"
        edits.write_text("not json", encoding='utf-8')

        assert main(["--file", str(note), "--edits", str(edits)]) == 1

        assert "not valid JSON" in capsys.readouterr().err


class TestLineEditorApply:
    """Test applying edits to files."""

    def test_apply_writes_result(self, tmp_path, note):
        """Test applied edits are written, keeping the trailing newline."""
        edits = write_edits(tmp_path, SAMPLE_EDITS)

        assert main(["--file", str(note), "--edits", str(edits), "--apply"]) == 0

        assert note.read_text(encoding='utf-8') == "x\na\nc\n"

    def test_apply_without_trailing_newline(self, tmp_path):
        """Test files without a final newline do not gain one."""
        path = tmp_path / "note.txt"
        path.write_text("a\nb", encoding='utf-8')
        edits = write_edits(tmp_path, [{"line": 2, "action": "insert", "content": "c"}])

        assert main(["--file", str(path), "--edits", str(edits), "--apply"]) == 0

        assert path.read_text(encoding='utf-8') == "a\nb\nc"

    def test_apply_with_backup(self, tmp_path, note):
        """Test a backup of the original is kept."""
        edits = write_edits(tmp_path, SAMPLE_EDITS)

        assert main(["--file", str(note), "--edits", str(edits), "--apply", "--backup"]) == 0

        assert (tmp_path / "note.md.bak").read_text(encoding='utf-8') == "a\nb\nc\n"

    def test_apply_partial_batch(self, tmp_path, note, capsys):
        """Test valid edits are written even when some fail."""
        edits = write_edits(tmp_path, [
            {"line": 0, "action": "replace", "content": "A"},
            {"line": 8, "action": "insert", "content": "z"},
        ])

        assert main(["--file", str(note), "--edits", str(edits), "--apply"]) == 1

        assert note.read_text(encoding='utf-8') == "A\nb\nc\n"
        assert "Cannot insert at line 8 (only 3 lines)" in capsys.readouterr().out

    def test_strict_refuses_partial_batch(self, tmp_path, note, capsys):
        """Test strict mode writes nothing if any edit is invalid."""
        edits = write_edits(tmp_path, [
            {"line": 0, "action": "replace", "content": "A"},
            {"line": -1, "action": "delete", "content": ""},
        ])

        assert main(["--file", str(note), "--edits", str(edits), "--apply", "--strict"]) == 1

        captured = capsys.readouterr()
        assert "failed validation" in captured.err
        assert "Invalid line number: -1 (negative)" in captured.out
        assert note.read_text(encoding='utf-8') == "a\nb\nc\n"


class TestCleanupOldLogs:
    """Test log file housekeeping."""

    def test_removes_oldest_logs(self, tmp_path):
        """Test only the newest logs are kept."""
        for i in range(5):
            path = tmp_path / f"{i}.log"
            path.write_text("log", encoding='utf-8')

        cleanup_old_logs(str(tmp_path), max_logs=3)

        assert len(list(tmp_path.glob("*.log"))) == 3
