"""Application of planned edit batches to document surfaces."""

import logging
from typing import Iterable, Tuple

from lineedit.document_surface import DocumentSurface, TextLinesSurface
from lineedit.lineedit_exceptions import LineEditApplicationError
from lineedit.lineedit_types import ApplyResult, EditAction, EditInstruction, LinePosition, RangeEdit
from lineedit.patch_planner import PatchPlanner


class PatchApplier:
    """
    Applies edit batches bottom-up to a document surface.

    Live documents and previews go through exactly the same code: a preview is
    an apply() against an in-memory TextLinesSurface.  Every instruction is
    turned into a single replace_range() call by range_edit(), so the
    line semantics (including deletion of the last line) live in one place.
    """

    def __init__(self, planner: PatchPlanner | None = None) -> None:
        """
        Initialize the applier.

        Args:
            planner: Planner used to validate and order batches
        """
        self._planner = planner if planner is not None else PatchPlanner()
        self._logger = logging.getLogger("PatchApplier")

    def apply(self, surface: DocumentSurface, instructions: Iterable[EditInstruction]) -> ApplyResult:
        """
        Apply a batch of instructions to a surface.

        Instructions that fail validation or that the surface rejects are
        recorded as errors; the rest of the batch is still applied.

        Args:
            surface: Document to modify
            instructions: Instructions computed against the current document

        Returns:
            ApplyResult with the count of applied instructions and all errors
        """
        plan = self._planner.plan(surface, instructions)
        result = ApplyResult(errors=list(plan.errors))

        for instruction in plan.instructions:
            try:
                edit = self.range_edit(surface, instruction)
                surface.replace_range(edit.text, edit.start, edit.end)
                result.applied_count += 1

            except Exception as e:
                self._logger.warning(
                    "Failed to apply %s at line %d: %s", instruction.action_name, instruction.line, str(e)
                )
                result.errors.append(f"Error applying edit at line {instruction.line}: {e}")

        self._logger.debug("Applied %d edit(s) with %d error(s)", result.applied_count, len(result.errors))
        return result

    def simulate(self, content: str, instructions: Iterable[EditInstruction]) -> Tuple[str, ApplyResult]:
        """
        Apply a batch to a copy of some content.

        Args:
            content: Original document text
            instructions: Instructions computed against that text

        Returns:
            Tuple of (resulting text, ApplyResult)
        """
        surface = TextLinesSurface(content)
        result = self.apply(surface, instructions)
        return surface.get_text(), result

    def preview(self, content: str, instructions: Iterable[EditInstruction]) -> str:
        """
        Compute the text a batch would produce, without touching any live document.

        Args:
            content: Original document text
            instructions: Instructions computed against that text

        Returns:
            The resulting document text
        """
        text, _ = self.simulate(content, instructions)
        return text

    def range_edit(self, surface: DocumentSurface, instruction: EditInstruction) -> RangeEdit:
        """
        Translate an instruction into a range replacement on the surface as it is now.

        Args:
            surface: Document the instruction is about to be applied to
            instruction: A validated instruction

        Returns:
            The range edit that performs the instruction

        Raises:
            LineEditApplicationError: If the instruction's line is not on the surface
        """
        line = instruction.line
        line_count = surface.line_count()

        if instruction.action == EditAction.REPLACE:
            end_column = len(surface.get_line(line))
            return RangeEdit(instruction.content, LinePosition(line, 0), LinePosition(line, end_column))

        if instruction.action == EditAction.INSERT:
            if line == line_count:
                # Appending: there is no line to insert before, so start a new one after the last
                last = line_count - 1
                end = LinePosition(last, len(surface.get_line(last)))
                return RangeEdit('\n' + instruction.content, end, end)

            surface.get_line(line)
            start = LinePosition(line, 0)
            return RangeEdit(instruction.content + '\n', start, start)

        if instruction.action == EditAction.DELETE:
            line_text = surface.get_line(line)
            if line < line_count - 1:
                return RangeEdit('', LinePosition(line, 0), LinePosition(line + 1, 0))

            # The last line has no terminator of its own, so take the one before it
            end = LinePosition(line, len(line_text))
            if line == 0:
                return RangeEdit('', LinePosition(0, 0), end)

            return RangeEdit('', LinePosition(line - 1, len(surface.get_line(line - 1))), end)

        raise LineEditApplicationError(f"Unknown action: {instruction.action_name}")
