"""Validation and ordering of edit instructions."""

import logging
from typing import Iterable, List, Tuple

from lineedit.document_surface import DocumentSurface
from lineedit.lineedit_exceptions import LineEditValidationError
from lineedit.lineedit_types import EditAction, EditInstruction, PlanResult


class PatchPlanner:
    """
    Orders a batch of edit instructions for bottom-up application.

    Every instruction in a batch refers to the same original snapshot of the
    document.  Applying from the highest line number to the lowest means each
    instruction still sees the numbering it was written against: edits only
    ever shift the lines below them.
    """

    def __init__(self) -> None:
        """Initialize the planner."""
        self._logger = logging.getLogger("PatchPlanner")

    def plan(self, document: DocumentSurface, instructions: Iterable[EditInstruction]) -> PlanResult:
        """
        Validate instructions against a document and order them.

        Args:
            document: Document the instructions were computed against
            instructions: Instructions in any order

        Returns:
            PlanResult with the surviving instructions in application order and
            one error message per dropped instruction
        """
        line_count = document.line_count()
        errors: List[str] = []
        keyed: List[Tuple[Tuple[int, int, int], EditInstruction]] = []

        for index, instruction in enumerate(instructions):
            error = self.validate(instruction, line_count)
            if error is not None:
                self._logger.debug("Dropping edit: %s", error)
                errors.append(error)
                continue

            keyed.append((self._sort_key(instruction, index), instruction))

        keyed.sort(key=lambda item: item[0])
        ordered = [instruction for _, instruction in keyed]

        self._logger.debug("Planned %d edit(s), dropped %d", len(ordered), len(errors))
        return PlanResult(ordered, errors)

    def plan_strict(self, document: DocumentSurface, instructions: Iterable[EditInstruction]) -> PlanResult:
        """
        Plan a batch, refusing it outright if any instruction is invalid.

        Args:
            document: Document the instructions were computed against
            instructions: Instructions in any order

        Returns:
            PlanResult with no errors

        Raises:
            LineEditValidationError: If any instruction failed validation
        """
        result = self.plan(document, instructions)
        if result.errors:
            raise LineEditValidationError(
                f"{len(result.errors)} edit(s) failed validation",
                {'phase': 'validation', 'errors': list(result.errors)}
            )

        return result

    def validate(self, instruction: EditInstruction, line_count: int) -> str | None:
        """
        Check a single instruction against the document bounds.

        Args:
            instruction: Instruction to check
            line_count: Number of lines in the original document

        Returns:
            An error message, or None if the instruction is valid
        """
        line = instruction.line
        if line < 0:
            return f"Invalid line number: {line} (negative)"

        action = instruction.action
        if action in (EditAction.REPLACE, EditAction.DELETE):
            if line >= line_count:
                return f"Line {line} does not exist (only {line_count} lines)"

            return None

        if action == EditAction.INSERT:
            if line > line_count:
                return f"Cannot insert at line {line} (only {line_count} lines)"

            return None

        return f"Unknown action: {instruction.action_name}"

    def _sort_key(self, instruction: EditInstruction, index: int) -> Tuple[int, int, int]:
        """
        Build the application order key for an instruction.

        Lines run from highest to lowest.  On a shared line, replacements and
        deletions run first in submission order, then insertions in reverse
        submission order, which leaves the inserted lines in submission order
        directly above the original line.
        """
        if instruction.action == EditAction.INSERT:
            return (-instruction.line, 1, -index)

        return (-instruction.line, 0, index)
