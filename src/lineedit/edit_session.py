"""Orchestration of a complete AI edit request."""

import logging
from typing import Awaitable, Callable

from lineedit.change_fingerprint import content_changed, fingerprint
from lineedit.document_surface import DocumentSurface
from lineedit.edit_history import EditHistory, EditHistoryEntry
from lineedit.edit_prompt import EditRequest, build_system_prompt
from lineedit.line_indexer import LineIndexer
from lineedit.lineedit_exceptions import LineEditStaleDocumentError
from lineedit.lineedit_settings import LineEditSettings
from lineedit.lineedit_types import ApplyResult, EditBatch
from lineedit.patch_applier import PatchApplier


EditSource = Callable[[EditRequest], Awaitable[EditBatch]]
ConfirmCallback = Callable[[EditBatch, str, str], Awaitable[bool]]


class LineEditSession:
    """
    Runs edit requests against documents.

    A request renders the document with line numbers, asks the edit source for
    a batch, optionally asks the user to confirm a preview, records the change
    in the history and finally applies the batch to the live document.
    """

    def __init__(
        self,
        source: EditSource,
        settings: LineEditSettings,
        history: EditHistory,
        confirm: ConfirmCallback | None = None,
        applier: PatchApplier | None = None
    ) -> None:
        """
        Initialize the session.

        Args:
            source: Coroutine function that turns an EditRequest into an EditBatch
            settings: Settings to use
            history: History that applied batches are recorded in
            confirm: Coroutine function called with (batch, before, preview) that
                returns True to apply.  If not provided, previews are accepted.
            applier: Applier to use
        """
        self._source = source
        self._settings = settings
        self._history = history
        self._confirm = confirm
        self._applier = applier if applier is not None else PatchApplier()
        self._indexer = LineIndexer()
        self._logger = logging.getLogger("LineEditSession")

        self._history.set_max_entries(settings.max_history_entries)

    def build_request(self, content: str, instruction: str) -> EditRequest:
        """Build the request sent to the edit source for some content."""
        return EditRequest(
            numbered_content=self._indexer.render(content),
            instruction=instruction,
            system_prompt=build_system_prompt(self._settings.custom_system_prompt)
        )

    async def run(self, surface: DocumentSurface, instruction: str, note_path: str = "") -> ApplyResult | None:
        """
        Request and apply edits for a document.

        Args:
            surface: Live document to edit
            instruction: What the user wants done
            note_path: Path recorded in the history entry

        Returns:
            The ApplyResult, or None if the user declined the preview

        Raises:
            LineEditStaleDocumentError: If the document changed while the edits
                were being generated or confirmed
        """
        before = surface.get_text()
        expected = fingerprint(before)

        batch = await self._source(self.build_request(before, instruction))
        if not batch.edits:
            self._logger.info("No edits returned for %s", note_path or "document")
            return ApplyResult()

        self._check_unchanged(surface, expected)
        preview = self._applier.preview(before, batch.edits)

        if self._settings.confirm_before_apply and self._confirm is not None:
            if not await self._confirm(batch, before, preview):
                self._logger.info("Edits declined for %s", note_path or "document")
                return None

            self._check_unchanged(surface, expected)

        self._history.record(note_path, instruction, before, preview, len(batch))

        with surface.edit_block():
            result = self._applier.apply(surface, batch.edits)

        if result.success:
            self._logger.info("Applied %d edit(s) to %s", result.applied_count, note_path or "document")

        else:
            self._logger.warning(
                "Applied %d edit(s) to %s with errors: %s",
                result.applied_count, note_path or "document", "; ".join(result.errors)
            )

        return result

    def revert(self, surface: DocumentSurface, entry: EditHistoryEntry) -> None:
        """Restore a document to its content before a recorded edit."""
        with surface.edit_block():
            surface.set_text(entry.before_content)

        self._logger.info("Reverted %s to history entry %s", entry.note_path or "document", entry.id)

    def _check_unchanged(self, surface: DocumentSurface, expected: int) -> None:
        """
        Check a document still matches the fingerprint its edits were computed for.

        Raises:
            LineEditStaleDocumentError: If it does not
        """
        current = surface.get_text()
        if content_changed(current, expected):
            raise LineEditStaleDocumentError(
                "Document changed while edits were being prepared",
                {'expected_fingerprint': expected, 'actual_fingerprint': fingerprint(current)}
            )
