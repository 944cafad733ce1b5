"""
Line-indexed edit application.

This package applies batches of whole-line edits, all computed against one
snapshot of a document, to live documents or in-memory previews.  The
Qt-backed surface lives in lineedit.qt_document_surface so this package can
be used without Qt.
"""

from lineedit.change_fingerprint import content_changed, fingerprint
from lineedit.document_surface import DocumentSurface, TextLinesSurface
from lineedit.edit_batch_parser import EditBatchParser
from lineedit.edit_history import EditHistory, EditHistoryEntry
from lineedit.edit_prompt import DEFAULT_SYSTEM_PROMPT, EditRequest, build_system_prompt, build_user_message
from lineedit.edit_session import LineEditSession
from lineedit.line_indexer import LineIndexer
from lineedit.lineedit_exceptions import (
    LineEditApplicationError,
    LineEditConfigError,
    LineEditError,
    LineEditParseError,
    LineEditStaleDocumentError,
    LineEditValidationError,
)
from lineedit.lineedit_settings import LineEditSettings, SavedPrompt
from lineedit.lineedit_types import (
    ApplyResult,
    EditAction,
    EditBatch,
    EditInstruction,
    LinePosition,
    PlanResult,
    RangeEdit,
)
from lineedit.patch_applier import PatchApplier
from lineedit.patch_planner import PatchPlanner

__all__ = [
    # Exceptions
    'LineEditError',
    'LineEditParseError',
    'LineEditValidationError',
    'LineEditApplicationError',
    'LineEditConfigError',
    'LineEditStaleDocumentError',
    # Types
    'EditAction',
    'EditInstruction',
    'EditBatch',
    'LinePosition',
    'RangeEdit',
    'PlanResult',
    'ApplyResult',
    # Core classes
    'LineIndexer',
    'PatchPlanner',
    'PatchApplier',
    'DocumentSurface',
    'TextLinesSurface',
    'EditBatchParser',
    'fingerprint',
    'content_changed',
    # Orchestration
    'DEFAULT_SYSTEM_PROMPT',
    'EditRequest',
    'build_system_prompt',
    'build_user_message',
    'LineEditSettings',
    'SavedPrompt',
    'EditHistory',
    'EditHistoryEntry',
    'LineEditSession',
]
