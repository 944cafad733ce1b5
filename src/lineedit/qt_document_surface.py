"""Qt-specific document surface for editor widgets."""

from contextlib import contextmanager
import logging
from typing import Iterator

from PySide6.QtGui import QTextBlock, QTextCursor, QTextDocument

from lineedit.document_surface import DocumentSurface
from lineedit.lineedit_exceptions import LineEditApplicationError
from lineedit.lineedit_types import LinePosition


class QtDocumentSurface(DocumentSurface):
    """
    Document surface backed by a Qt text document.

    Each text block of the document is one line.  Wrapping a batch in
    edit_block() makes the whole batch a single step on the document's undo
    stack.
    """

    def __init__(self, document: QTextDocument) -> None:
        """
        Initialize the surface.

        Args:
            document: Qt text document to edit
        """
        self._document = document
        self._cursor = QTextCursor(document)
        self._logger = logging.getLogger("QtDocumentSurface")

    @property
    def document(self) -> QTextDocument:
        """Get the underlying Qt document."""
        return self._document

    def line_count(self) -> int:
        return self._document.blockCount()

    def get_line(self, index: int) -> str:
        return self._block(index).text()

    def replace_range(self, text: str, start: LinePosition, end: LinePosition) -> None:
        start_pos = self._position(start)
        end_pos = self._position(end)
        if end_pos < start_pos:
            raise LineEditApplicationError(
                f"Range end {end.line}:{end.column} is before start {start.line}:{start.column}"
            )

        self._cursor.setPosition(start_pos)
        self._cursor.setPosition(end_pos, QTextCursor.MoveMode.KeepAnchor)

        # insertText() turns each '\n' into a new block
        if text:
            self._cursor.insertText(text)

        else:
            self._cursor.removeSelectedText()

    def get_text(self) -> str:
        return self._document.toPlainText()

    def set_text(self, text: str) -> None:
        with self.edit_block():
            self._cursor.select(QTextCursor.SelectionType.Document)
            self._cursor.insertText(text)

    @contextmanager
    def edit_block(self) -> Iterator[None]:
        self._cursor.beginEditBlock()
        try:
            yield

        finally:
            self._cursor.endEditBlock()

    def _block(self, index: int) -> QTextBlock:
        """
        Find the block for a line.

        Raises:
            LineEditApplicationError: If the line does not exist
        """
        block = self._document.findBlockByNumber(index)
        if index < 0 or not block.isValid():
            raise LineEditApplicationError(
                f"Line {index} is outside the document ({self.line_count()} lines)",
                {'line': index, 'line_count': self.line_count()}
            )

        return block

    def _position(self, position: LinePosition) -> int:
        """
        Convert a line and column into an absolute document position.

        Raises:
            LineEditApplicationError: If the position is outside the document
        """
        block = self._block(position.line)
        line_length = len(block.text())
        if not 0 <= position.column <= line_length:
            self._logger.debug("Rejecting column %d on line %d", position.column, position.line)
            raise LineEditApplicationError(
                f"Column {position.column} is outside line {position.line} ({line_length} characters)",
                {'line': position.line, 'column': position.column}
            )

        # Qt positions count UTF-16 code units
        prefix = block.text()[:position.column]
        return block.position() + len(prefix.encode('utf-16-le')) // 2
