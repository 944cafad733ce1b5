"""Shared fixtures and utilities for line edit tests."""

from typing import List, Tuple

import pytest

from lineedit.document_surface import DocumentSurface, TextLinesSurface
from lineedit.lineedit_exceptions import LineEditApplicationError
from lineedit.lineedit_types import EditInstruction, LinePosition
from lineedit.patch_applier import PatchApplier
from lineedit.patch_planner import PatchPlanner


class StringDocumentSurface(DocumentSurface):
    """
    Surface that keeps its document as one string, like a text editor buffer.

    Range edits are applied to character offsets, so this exercises a different
    representation from TextLinesSurface.
    """

    def __init__(self, text: str = "") -> None:
        self._text = text
        self.calls: List[Tuple[str, LinePosition, LinePosition]] = []

    def line_count(self) -> int:
        return self._text.count('\n') + 1

    def get_line(self, index: int) -> str:
        lines = self._text.split('\n')
        if not 0 <= index < len(lines):
            raise LineEditApplicationError(f"No line {index}")

        return lines[index]

    def replace_range(self, text: str, start: LinePosition, end: LinePosition) -> None:
        self.calls.append((text, start, end))
        start_offset = self._offset(start)
        end_offset = self._offset(end)
        self._text = self._text[:start_offset] + text + self._text[end_offset:]

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text

    def _offset(self, position: LinePosition) -> int:
        lines = self._text.split('\n')
        line = self.get_line(position.line)
        if not 0 <= position.column <= len(line):
            raise LineEditApplicationError(f"No column {position.column} on line {position.line}")

        return sum(len(previous) + 1 for previous in lines[:position.line]) + position.column


class RejectingSurface(TextLinesSurface):
    """In-memory surface that refuses to touch one particular line."""

    def __init__(self, content: str, rejected_line: int) -> None:
        super().__init__(content)
        self._rejected_line = rejected_line

    def replace_range(self, text: str, start: LinePosition, end: LinePosition) -> None:
        if start.line == self._rejected_line:
            raise RuntimeError("surface rejected the edit")

        super().replace_range(text, start, end)


@pytest.fixture
def planner():
    """Create a patch planner for testing."""
    return PatchPlanner()


@pytest.fixture
def applier():
    """Create a patch applier for testing."""
    return PatchApplier()


class LineEditTestHelpers:
    """Helper utilities for line edit testing."""

    @staticmethod
    def document(lines: List[str]) -> TextLinesSurface:
        """Create an in-memory document from lines."""
        return TextLinesSurface.from_lines(lines)

    @staticmethod
    def string_document(lines: List[str]) -> StringDocumentSurface:
        """Create a string-backed document from lines."""
        return StringDocumentSurface('\n'.join(lines))

    @staticmethod
    def rejecting_document(lines: List[str], rejected_line: int) -> RejectingSurface:
        """Create a document that fails edits starting on one line."""
        return RejectingSurface('\n'.join(lines), rejected_line)

    @staticmethod
    def replace(line: int, content: str) -> EditInstruction:
        """Create a replace instruction."""
        return EditInstruction(line, "replace", content)

    @staticmethod
    def insert(line: int, content: str) -> EditInstruction:
        """Create an insert instruction."""
        return EditInstruction(line, "insert", content)

    @staticmethod
    def delete(line: int) -> EditInstruction:
        """Create a delete instruction."""
        return EditInstruction(line, "delete", "")


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return LineEditTestHelpers
