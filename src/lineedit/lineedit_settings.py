"""Persisted settings for line editing."""

from dataclasses import dataclass, field
import json
from typing import Any, Dict, List

from lineedit.lineedit_exceptions import LineEditConfigError


AUTO_IMPROVE_PROMPT = (
    "Review this note and make appropriate improvements: fix typos, improve grammar, enhance clarity, "
    "and complete any obvious missing information. Be conservative - only make changes that clearly "
    "improve the note."
)


@dataclass
class SavedPrompt:
    """A named instruction the user can reuse."""

    id: str
    name: str
    prompt: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to a JSON-compatible dictionary."""
        return {"id": self.id, "name": self.name, "prompt": self.prompt}


def default_saved_prompts() -> List[SavedPrompt]:
    """Get the prompts available before the user saves any of their own."""
    return [
        SavedPrompt("auto-improve", "Auto-improve", AUTO_IMPROVE_PROMPT),
        SavedPrompt("fix-grammar", "Fix grammar", "Fix spelling and grammar mistakes without changing the meaning."),
        SavedPrompt("summarize", "Add summary", "Insert a one-paragraph summary of the note at the top."),
    ]


@dataclass
class LineEditSettings:
    """
    Settings for line editing.

    This class handles the loading and saving of settings to a JSON file.
    """
    confirm_before_apply: bool = True
    show_reasoning: bool = True
    custom_system_prompt: str = ""
    max_history_entries: int = 50
    saved_prompts: List[SavedPrompt] = field(default_factory=default_saved_prompts)

    @classmethod
    def create_default(cls) -> "LineEditSettings":
        """Create a new LineEditSettings object with default values."""
        return cls()

    @classmethod
    def load(cls, path: str) -> "LineEditSettings":
        """
        Load settings from a JSON file.

        Missing keys keep their default values and unknown keys are ignored.

        Args:
            path: Path to the settings file

        Returns:
            LineEditSettings object with loaded values

        Raises:
            LineEditConfigError: If the file does not hold a settings object
            json.JSONDecodeError: If the file contains invalid JSON
        """
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Any) -> "LineEditSettings":
        """Build settings from a decoded JSON value."""
        if not isinstance(data, dict):
            raise LineEditConfigError("Settings must be a JSON object", {'type': type(data).__name__})

        settings = cls.create_default()
        settings.confirm_before_apply = bool(data.get("confirmBeforeApply", settings.confirm_before_apply))
        settings.show_reasoning = bool(data.get("showReasoning", settings.show_reasoning))
        settings.custom_system_prompt = str(data.get("customSystemPrompt", settings.custom_system_prompt))

        max_entries = data.get("maxHistoryEntries", settings.max_history_entries)
        if isinstance(max_entries, bool) or not isinstance(max_entries, int) or max_entries < 0:
            raise LineEditConfigError(
                "'maxHistoryEntries' must be a non-negative integer",
                {'field': 'maxHistoryEntries', 'value': max_entries}
            )

        settings.max_history_entries = max_entries

        if "savedPrompts" in data:
            try:
                settings.saved_prompts = [
                    SavedPrompt(str(p["id"]), str(p["name"]), str(p["prompt"])) for p in data["savedPrompts"]
                ]

            except (KeyError, TypeError) as e:
                raise LineEditConfigError(
                    f"Invalid saved prompt: {e}", {'field': 'savedPrompts'}
                ) from e

        return settings

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {
            "confirmBeforeApply": self.confirm_before_apply,
            "showReasoning": self.show_reasoning,
            "customSystemPrompt": self.custom_system_prompt,
            "maxHistoryEntries": self.max_history_entries,
            "savedPrompts": [prompt.to_dict() for prompt in self.saved_prompts],
        }

    def save(self, path: str) -> None:
        """Save settings to a JSON file."""
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)

    def find_prompt(self, prompt_id: str) -> SavedPrompt | None:
        """Find a saved prompt by ID."""
        for prompt in self.saved_prompts:
            if prompt.id == prompt_id:
                return prompt

        return None
