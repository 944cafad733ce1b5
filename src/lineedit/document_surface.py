"""Line-oriented document surfaces that edits are applied to."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List

from lineedit.lineedit_exceptions import LineEditApplicationError
from lineedit.lineedit_types import LinePosition


class DocumentSurface(ABC):
    """
    Abstract base class for documents that accept line edits.

    The patch engine only ever uses line_count(), get_line() and
    replace_range().  get_text() and set_text() exist for callers that need to
    snapshot or restore a whole document.
    """

    @abstractmethod
    def line_count(self) -> int:
        """
        Get the number of lines in the document.

        An empty document has one empty line.
        """

    @abstractmethod
    def get_line(self, index: int) -> str:
        """
        Get the content of a line, without its terminator.

        Args:
            index: Zero-based line number

        Raises:
            LineEditApplicationError: If the line does not exist
        """

    @abstractmethod
    def replace_range(self, text: str, start: LinePosition, end: LinePosition) -> None:
        """
        Replace the text between two positions.

        Args:
            text: Replacement text, which may contain newlines
            start: Start of the range (inclusive)
            end: End of the range (exclusive)

        Raises:
            LineEditApplicationError: If either position is outside the document
        """

    @abstractmethod
    def get_text(self) -> str:
        """Get the full document text."""

    @abstractmethod
    def set_text(self, text: str) -> None:
        """Replace the full document text."""

    @contextmanager
    def edit_block(self) -> Iterator[None]:
        """
        Group the changes made inside the block into one undoable step.

        Surfaces without an undo stack need not override this.
        """
        yield


class TextLinesSurface(DocumentSurface):
    """In-memory document held as a list of lines."""

    def __init__(self, content: str = "") -> None:
        """
        Initialize the surface.

        Args:
            content: Initial document text
        """
        self._lines: List[str] = content.split('\n')

    @classmethod
    def from_lines(cls, lines: List[str]) -> "TextLinesSurface":
        """Create a surface from a list of lines."""
        return cls('\n'.join(lines))

    @property
    def lines(self) -> List[str]:
        """Get a copy of the document lines."""
        return list(self._lines)

    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        if not 0 <= index < len(self._lines):
            raise LineEditApplicationError(
                f"Line {index} is outside the document ({len(self._lines)} lines)",
                {'line': index, 'line_count': len(self._lines)}
            )

        return self._lines[index]

    def replace_range(self, text: str, start: LinePosition, end: LinePosition) -> None:
        self._check_position(start)
        self._check_position(end)
        if (end.line, end.column) < (start.line, start.column):
            raise LineEditApplicationError(
                f"Range end {end.line}:{end.column} is before start {start.line}:{start.column}"
            )

        prefix = self._lines[start.line][:start.column]
        suffix = self._lines[end.line][end.column:]
        self._lines[start.line:end.line + 1] = (prefix + text + suffix).split('\n')

    def get_text(self) -> str:
        return '\n'.join(self._lines)

    def set_text(self, text: str) -> None:
        self._lines = text.split('\n')

    def _check_position(self, position: LinePosition) -> None:
        """
        Check that a position lies within the document.

        Raises:
            LineEditApplicationError: If it does not
        """
        line = self.get_line(position.line)
        if not 0 <= position.column <= len(line):
            raise LineEditApplicationError(
                f"Column {position.column} is outside line {position.line} ({len(line)} characters)",
                {'line': position.line, 'column': position.column}
            )
