"""Parsing of edit batches from AI responses."""

import json
import re
from typing import Any, Dict, List

from lineedit.lineedit_exceptions import LineEditParseError
from lineedit.lineedit_types import EditBatch, EditInstruction


class EditBatchParser:
    """
    Parser for the JSON response envelope returned by an edit generator.

    The envelope is ``{"reasoning": "...", "edits": [{"line": 0, "action":
    "replace", "content": "..."}]}``.  Models sometimes wrap it in a Markdown
    code fence, so a surrounding fence is removed before decoding.
    """

    _FENCE_START_RE = re.compile(r'^```(?:json)?[ \t]*\n?', re.IGNORECASE)
    _FENCE_END_RE = re.compile(r'\n?```$')

    def parse(self, text: str) -> EditBatch:
        """
        Parse response text into an edit batch.

        Args:
            text: Raw response text

        Returns:
            Parsed edit batch

        Raises:
            LineEditParseError: If the text is not a valid envelope
        """
        if not text or not text.strip():
            raise LineEditParseError("Empty response provided")

        json_text = self._strip_code_fence(text.strip())

        try:
            data = json.loads(json_text)

        except json.JSONDecodeError as e:
            raise LineEditParseError(
                f"Response is not valid JSON: {e}",
                {'position': e.pos, 'reason': e.msg}
            ) from e

        return self.parse_dict(data)

    def parse_dict(self, data: Any) -> EditBatch:
        """
        Validate a decoded envelope and build an edit batch from it.

        Args:
            data: Decoded JSON value

        Returns:
            Parsed edit batch

        Raises:
            LineEditParseError: If the value does not have the envelope shape
        """
        if not isinstance(data, dict):
            raise LineEditParseError("Response must be a JSON object", {'type': type(data).__name__})

        reasoning = data.get('reasoning')
        if reasoning is not None and not isinstance(reasoning, str):
            raise LineEditParseError("'reasoning' must be a string", {'field': 'reasoning'})

        edits = data.get('edits')
        if not isinstance(edits, list):
            raise LineEditParseError("Response must contain an 'edits' array", {'field': 'edits'})

        instructions: List[EditInstruction] = []
        for index, edit in enumerate(edits):
            instructions.append(self._parse_edit(edit, index))

        return EditBatch(instructions, reasoning)

    def _parse_edit(self, edit: Any, index: int) -> EditInstruction:
        """
        Parse a single edit instruction.

        Line bounds and action names are not checked here; the planner reports
        those per instruction.
        """
        details: Dict[str, Any] = {'edit_index': index}
        if not isinstance(edit, dict):
            raise LineEditParseError(f"Edit {index} must be a JSON object", details)

        line = edit.get('line')
        if isinstance(line, bool) or not isinstance(line, int):
            raise LineEditParseError(f"Edit {index} must have an integer 'line'", details)

        action = edit.get('action')
        if not isinstance(action, str):
            raise LineEditParseError(f"Edit {index} must have a string 'action'", details)

        content = edit.get('content', '')
        if not isinstance(content, str):
            raise LineEditParseError(f"Edit {index} 'content' must be a string", details)

        return EditInstruction(line, action, content)

    def _strip_code_fence(self, text: str) -> str:
        """Remove a Markdown code fence wrapped around the whole text."""
        if not text.startswith('```'):
            return text

        text = self._FENCE_START_RE.sub('', text, count=1)
        return self._FENCE_END_RE.sub('', text, count=1)
