"""Shared dataclasses for line edit operations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class EditAction(Enum):
    """The three whole-line edit actions."""

    REPLACE = "replace"
    INSERT = "insert"
    DELETE = "delete"


@dataclass
class EditInstruction:
    """
    A single line edit.

    Line numbers are zero-based and refer to the document as it was before any
    edit in the same batch was applied.  An action string that is not one of
    the known actions is kept as-is so it can be reported during planning.
    """

    line: int
    action: EditAction | str
    content: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.action, str):
            try:
                self.action = EditAction(self.action)

            except ValueError:
                pass

    @property
    def action_name(self) -> str:
        """Get the wire name of the action."""
        if isinstance(self.action, EditAction):
            return self.action.value

        return str(self.action)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditInstruction":
        """Create an instruction from its wire dictionary."""
        return cls(
            line=data["line"],
            action=data["action"],
            content=data.get("content", "")
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the instruction to its wire dictionary."""
        return {
            "line": self.line,
            "action": self.action_name,
            "content": self.content
        }


@dataclass
class EditBatch:
    """A set of edit instructions computed against one document snapshot."""

    edits: List[EditInstruction] = field(default_factory=list)
    reasoning: str | None = None

    def __len__(self) -> int:
        return len(self.edits)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditBatch":
        """Create a batch from a response envelope dictionary."""
        return cls(
            edits=[EditInstruction.from_dict(edit) for edit in data.get("edits", [])],
            reasoning=data.get("reasoning")
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the batch to a response envelope dictionary."""
        data: Dict[str, Any] = {"edits": [edit.to_dict() for edit in self.edits]}
        if self.reasoning is not None:
            data["reasoning"] = self.reasoning

        return data


@dataclass(frozen=True)
class LinePosition:
    """A zero-based line and column position within a document."""

    line: int
    column: int


@dataclass(frozen=True)
class RangeEdit:
    """Replacement of the text between two positions."""

    text: str
    start: LinePosition
    end: LinePosition


@dataclass
class PlanResult:
    """Validated instructions in application order, plus validation errors."""

    instructions: List[EditInstruction]
    errors: List[str] = field(default_factory=list)


@dataclass
class ApplyResult:
    """Result of applying an edit batch."""

    applied_count: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if no instruction failed."""
        return not self.errors
