"""Prompts handed to the edit generator."""

from dataclasses import dataclass
from datetime import datetime


DEFAULT_SYSTEM_PROMPT = """You are an intelligent note editor assistant. Your task is to analyze the user's note and make specific edits based on their instructions.

## Input format
The note content is provided with 0-indexed line numbers in the format:
   0 | First line of content
   1 | Second line of content
   ...

## Output requirements
You must respond with a JSON object containing:
1. "reasoning" (optional): Brief explanation of what changes you're making and why
2. "edits": An array of edit instructions

## Edit instruction format
Each edit instruction must have:
- "line": The 0-indexed line number to edit
- "action": One of "replace", "insert", or "delete"
- "content": The new content (required for replace/insert, use an empty string for delete)

## Actions
- "replace": Replace the entire content of the specified line with new content
- "insert": Insert a new line before the specified line number (use the line count to append)
- "delete": Remove the specified line entirely

## Rules
1. Use 0-indexed line numbers (the first line is 0, not 1)
2. Every line number refers to the note exactly as shown, even when other edits add or remove lines
3. Only edit lines that need changes
4. Preserve formatting and structure unless asked to change it
5. For multi-line insertions, use one insert instruction per line, in order
6. Always provide the complete new content for replace and insert
7. If no changes are needed, return an empty edits array

## Example response
{
  "reasoning": "Marking the completed task and adding a timestamp",
  "edits": [
    {"line": 3, "action": "replace", "content": "- [x] Complete the report"},
    {"line": 4, "action": "insert", "content": "  - Completed: 2024-01-15"}
  ]
}"""


@dataclass
class EditRequest:
    """Everything an edit generator needs to produce an edit batch."""

    numbered_content: str
    instruction: str
    system_prompt: str

    def user_message(self) -> str:
        """Build the user message for this request."""
        return build_user_message(self.instruction, self.numbered_content)


def build_system_prompt(custom_addition: str = "", now: datetime | None = None) -> str:
    """
    Build the system prompt for an edit request.

    Args:
        custom_addition: Extra user-configured instructions, appended when not blank
        now: Current local time (defaults to the system clock)

    Returns:
        The complete system prompt
    """
    if now is None:
        now = datetime.now().astimezone()

    date_context = f"## Current date and time\nToday is {now.strftime('%A, %B %d, %Y, %H:%M')}"
    zone = now.tzname()
    if zone:
        date_context += f" ({zone})"

    prompt = f"{DEFAULT_SYSTEM_PROMPT}\n\n{date_context}"

    if custom_addition.strip():
        prompt += f"\n\n## Additional instructions\n{custom_addition}"

    return prompt


def build_user_message(instruction: str, numbered_content: str) -> str:
    """Combine the user's instruction with the numbered note content."""
    return f"{instruction}\n\n---\n\nNote content:\n{numbered_content}"
