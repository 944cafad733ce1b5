"""Tests for the Qt document surface."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

QtGui = pytest.importorskip("PySide6.QtGui")

# pylint: disable=wrong-import-position
from lineedit.lineedit_exceptions import LineEditApplicationError
from lineedit.lineedit_types import EditInstruction, LinePosition
from lineedit.qt_document_surface import QtDocumentSurface
# pylint: enable=wrong-import-position


@pytest.fixture(scope="module")
def qt_app():
    """Create the Qt application needed by text documents."""
    app = QtGui.QGuiApplication.instance()
    if app is None:
        app = QtGui.QGuiApplication([])

    return app


@pytest.fixture
def make_surface(qt_app):
    """Factory for Qt surfaces holding some text."""
    def _create_surface(text: str) -> QtDocumentSurface:
        document = QtGui.QTextDocument()
        document.setPlainText(text)
        return QtDocumentSurface(document)

    return _create_surface


class TestQtDocumentSurface:
    """Test QtDocumentSurface primitives."""

    def test_lines(self, make_surface):
        """Test each block is a line."""
        surface = make_surface("a\nbc\n")

        assert surface.line_count() == 3
        assert surface.get_line(1) == "bc"
        assert surface.get_line(2) == ""

    def test_get_line_out_of_range(self, make_surface):
        """Test reading a missing line raises."""
        surface = make_surface("a")

        with pytest.raises(LineEditApplicationError):
            surface.get_line(1)

        with pytest.raises(LineEditApplicationError):
            surface.get_line(-1)

    def test_replace_range_across_lines(self, make_surface):
        """Test replacing text spanning a block boundary."""
        surface = make_surface("ab\ncd\nef")

        surface.replace_range("X", LinePosition(0, 1), LinePosition(1, 1))

        assert surface.get_text() == "aXd\nef"

    def test_replace_range_with_newlines(self, make_surface):
        """Test inserted newlines become new blocks."""
        surface = make_surface("ab")

        surface.replace_range("1\n2\n", LinePosition(0, 1), LinePosition(0, 1))

        assert surface.line_count() == 3
        assert surface.get_text() == "a1\n2\nb"

    def test_replace_range_rejects_bad_column(self, make_surface):
        """Test a column past the end of a line is rejected."""
        surface = make_surface("ab")

        with pytest.raises(LineEditApplicationError, match="Column 5"):
            surface.replace_range("x", LinePosition(0, 5), LinePosition(0, 5))

    def test_columns_after_non_bmp_characters(self, make_surface):
        """Test columns count characters even where Qt counts UTF-16 units."""
        surface = make_surface("\U0001F600ab")

        surface.replace_range("X", LinePosition(0, 1), LinePosition(0, 2))

        assert surface.get_text() == "\U0001F600Xb"

    def test_set_text(self, make_surface):
        """Test replacing the whole document."""
        surface = make_surface("old")

        surface.set_text("new\ntext")

        assert surface.get_text() == "new\ntext"


BATCHES = [
    [EditInstruction(1, "delete"), EditInstruction(0, "insert", "x")],
    [EditInstruction(2, "delete"), EditInstruction(3, "insert", "tail")],
    [EditInstruction(0, "delete"), EditInstruction(0, "delete"), EditInstruction(0, "delete")],
    [EditInstruction(1, "replace", "multi\nline"), EditInstruction(2, "insert", "between")],
    [EditInstruction(3, "delete"), EditInstruction(3, "delete")],
    [EditInstruction(0, "insert", "a"), EditInstruction(0, "insert", "b"), EditInstruction(0, "replace", "c")],
]


class TestQtDocumentSurfaceApply:
    """Test applying batches to Qt documents."""

    def test_concrete_batch(self, make_surface, applier):
        """Test the delete-plus-insert example on a live document."""
        surface = make_surface("a\nb\nc")

        result = applier.apply(surface, [EditInstruction(1, "delete"), EditInstruction(0, "insert", "x")])

        assert surface.get_text() == "x\na\nc"
        assert result.applied_count == 2

    def test_delete_only_line(self, make_surface, applier):
        """Test deleting the only line leaves one empty block."""
        surface = make_surface("only")

        applier.apply(surface, [EditInstruction(0, "delete")])

        assert surface.get_text() == ""
        assert surface.line_count() == 1

    @pytest.mark.parametrize("batch", BATCHES)
    def test_matches_preview(self, make_surface, applier, batch):
        """Test a Qt document ends up exactly like the preview."""
        content = "zero\none\ntwo\nthree"
        surface = make_surface(content)

        result = applier.apply(surface, batch)
        preview, preview_result = applier.simulate(content, batch)

        assert surface.get_text() == preview
        assert result.applied_count == preview_result.applied_count

    def test_batch_is_one_undo_step(self, make_surface, applier):
        """Test a batch applied in an edit block undoes in one step."""
        surface = make_surface("a\nb\nc")

        with surface.edit_block():
            applier.apply(surface, [
                EditInstruction(2, "replace", "C"),
                EditInstruction(1, "delete"),
                EditInstruction(0, "insert", "x"),
            ])

        assert surface.get_text() == "x\na\nC"

        surface.document.undo()

        assert surface.get_text() == "a\nb\nc"
