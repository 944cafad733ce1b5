"""History of applied edit batches."""

from dataclasses import dataclass
from datetime import datetime, timezone
import json
import logging
from typing import Any, Dict, List
import uuid

from lineedit.lineedit_exceptions import LineEditConfigError


@dataclass
class EditHistoryEntry:
    """Before and after content for one applied edit batch."""

    id: str
    timestamp: datetime
    note_path: str
    instruction: str
    before_content: str
    after_content: str
    edits_applied: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "notePath": self.note_path,
            "instruction": self.instruction,
            "beforeContent": self.before_content,
            "afterContent": self.after_content,
            "editsApplied": self.edits_applied,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditHistoryEntry":
        """Create an entry from a dictionary produced by to_dict()."""
        return cls(
            id=data["id"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            note_path=data.get("notePath", ""),
            instruction=data.get("instruction", ""),
            before_content=data["beforeContent"],
            after_content=data["afterContent"],
            edits_applied=data.get("editsApplied", 0),
        )


class EditHistory:
    """
    Newest-first store of applied edit batches.

    The store is created by the caller and passed to whatever needs it, so
    several independent histories can exist side by side.
    """

    def __init__(self, max_entries: int = 50) -> None:
        """
        Initialize the history.

        Args:
            max_entries: Maximum number of entries kept
        """
        self._max_entries = max_entries
        self._entries: List[EditHistoryEntry] = []
        self._logger = logging.getLogger("EditHistory")

    @property
    def max_entries(self) -> int:
        """Get the maximum number of entries kept."""
        return self._max_entries

    def set_max_entries(self, max_entries: int) -> None:
        """Change the maximum number of entries, dropping the oldest if needed."""
        self._max_entries = max_entries
        self._trim()

    def record(
        self,
        note_path: str,
        instruction: str,
        before_content: str,
        after_content: str,
        edits_applied: int
    ) -> EditHistoryEntry:
        """
        Add a new entry to the front of the history.

        Returns:
            The new entry
        """
        entry = EditHistoryEntry(
            id=uuid.uuid4().hex,
            timestamp=datetime.now(timezone.utc),
            note_path=note_path,
            instruction=instruction,
            before_content=before_content,
            after_content=after_content,
            edits_applied=edits_applied
        )
        self._entries.insert(0, entry)
        self._trim()
        return entry

    def entries(self) -> List[EditHistoryEntry]:
        """Get all entries, newest first."""
        return list(self._entries)

    def find(self, entry_id: str) -> EditHistoryEntry | None:
        """Find an entry by ID."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry

        return None

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def load(self, path: str) -> None:
        """
        Replace the history with entries loaded from a JSON file.

        Raises:
            LineEditConfigError: If the file does not hold a list of valid entries
            json.JSONDecodeError: If the file contains invalid JSON
        """
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise LineEditConfigError("History must be a JSON array", {'path': path})

        try:
            self._entries = [EditHistoryEntry.from_dict(item) for item in data]

        except (KeyError, TypeError, ValueError) as e:
            raise LineEditConfigError(f"Invalid history entry: {e}", {'path': path}) from e

        self._trim()
        self._logger.debug("Loaded %d history entries from %s", len(self._entries), path)

    def save(self, path: str) -> None:
        """Save the history to a JSON file."""
        with open(path, 'w', encoding='utf-8') as f:
            json.dump([entry.to_dict() for entry in self._entries], f, indent=2)

    def _trim(self) -> None:
        """Drop the oldest entries beyond the maximum."""
        if len(self._entries) > self._max_entries:
            del self._entries[self._max_entries:]
