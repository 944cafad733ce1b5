"""
CLI entry point for the line editor.

This allows the tool to be run as:
    python -m lineedit_tool --file notes.md --edits edits.json
"""

import sys
from .line_editor import main

if __name__ == "__main__":
    sys.exit(main())
