"""Line-numbered rendering of document content."""

import re
from typing import List


class LineIndexer:
    """
    Renders documents with explicit zero-based line numbers.

    Each line is written as ``<index> | <content>`` with the index right-aligned
    to the width of the largest index, so every line of a rendering lines up
    regardless of document size.
    """

    SEPARATOR = " | "

    _PREFIX_RE = re.compile(r'^\s*\d+\s*\|\s?(.*)$')

    def render(self, content: str) -> str:
        """
        Render content with line numbers.

        Args:
            content: Plain document text

        Returns:
            Newline-joined numbered lines
        """
        lines = content.split('\n')
        width = len(str(len(lines) - 1))

        return '\n'.join(
            f"{str(index).rjust(width)}{self.SEPARATOR}{line}" for index, line in enumerate(lines)
        )

    def parse(self, numbered: str) -> List[str]:
        """
        Strip line number prefixes from a rendering.

        Lines without a recognisable prefix are returned unchanged.

        Args:
            numbered: Text produced by render() (or something close to it)

        Returns:
            List of plain line contents
        """
        lines: List[str] = []
        for line in numbered.split('\n'):
            match = self._PREFIX_RE.match(line)
            lines.append(match.group(1) if match else line)

        return lines

    def unrender(self, numbered: str) -> str:
        """Convert a rendering back into plain document text."""
        return '\n'.join(self.parse(numbered))
