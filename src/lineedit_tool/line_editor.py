#!/usr/bin/env python3
"""
Line Editor - Command-line tool for applying line-indexed edit batches.

Edit batches are JSON documents of the form produced by an AI edit generator:
{"reasoning": "...", "edits": [{"line": 0, "action": "replace", "content": "..."}]}.
Line numbers are zero-based and refer to the file as it is before any edit.

Usage:
    python -m lineedit_tool --file <note_file> --edits <edits_file> [options]
    python -m lineedit_tool --file <note_file> --numbered

Options:
    --file PATH       File to edit (required)
    --edits PATH      JSON edit batch (required unless --numbered)
    --numbered        Print the file with line numbers and exit
    --apply           Actually apply the edits (default is dry-run)
    --backup          Create backup before applying (file.bak)
    --strict          Refuse the whole batch if any edit is invalid
    --log-dir DIR     Write a debug log to this directory
    --verbose         Show detailed output
    --help            Show this help message
"""

import argparse
from datetime import datetime, timezone
import difflib
import glob
import logging
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path
import shutil
import sys
from typing import List

from lineedit import (
    EditBatch,
    EditBatchParser,
    LineEditError,
    LineEditValidationError,
    LineIndexer,
    PatchApplier,
    PatchPlanner,
    TextLinesSurface,
)


class Colors:
    """ANSI color codes for terminal output."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'

    @classmethod
    def disable(cls) -> None:
        """Disable colors (for non-terminal output)."""
        cls.RESET = ''
        cls.BOLD = ''
        cls.RED = ''
        cls.GREEN = ''
        cls.YELLOW = ''
        cls.BLUE = ''
        cls.CYAN = ''


def setup_logging(log_dir: str) -> None:
    """Configure logging to timestamped, rotated files in a directory."""
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S-%f")[:23]
    log_file = os.path.join(log_dir, f"{timestamp}.log")

    # Keep up to 50 log files, max 1MB each
    handler = RotatingFileHandler(
        log_file,
        maxBytes=1024*1024,
        backupCount=49,
        encoding='utf-8'
    )

    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[handler]
    )

    cleanup_old_logs(log_dir, max_logs=50)


def cleanup_old_logs(log_dir: str, max_logs: int) -> None:
    """Remove oldest log files if we exceed maximum count."""
    log_files = glob.glob(os.path.join(log_dir, "*.log*"))
    log_files.sort(key=os.path.getctime)

    while len(log_files) > max_logs:
        try:
            os.remove(log_files.pop(0))

        except OSError:
            pass  # Another process may have removed it


class LineEditor:
    """
    Main line editor application.

    Coordinates:
    - Reading the note and the edit batch
    - Planning and previewing the batch
    - Writing results
    """

    def __init__(self, args: argparse.Namespace):
        """
        Initialize the editor with command-line arguments.

        Args:
            args: Parsed command-line arguments
        """
        self.args = args
        self.source_file = Path(args.file)
        self.edits_file = Path(args.edits) if args.edits else None
        self.verbose = args.verbose

        # Disable colors if not in terminal or if explicitly disabled
        if not sys.stdout.isatty() or args.no_color:
            Colors.disable()

        self.indexer = LineIndexer()
        self.parser = EditBatchParser()
        self.planner = PatchPlanner()
        self.applier = PatchApplier(self.planner)
        self._logger = logging.getLogger("LineEditor")

    def run(self) -> int:
        """
        Run the editor.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        try:
            if not self._validate_inputs():
                return 1

            content, trailing_newline = self._read_source_file()

            if self.args.numbered:
                print(self.indexer.render(content))
                return 0

            batch = self._read_batch()
            self._show_batch_info(batch)

            if not self._plan_batch(content, batch):
                return 1

            preview, result = self.applier.simulate(content, batch.edits)
            self._show_preview(content, preview)

            if not self.args.apply:
                self._show_errors(result.errors)
                self._show_dry_run_message()
                return 0 if result.success else 1

            return self._apply_batch(preview, trailing_newline, result.applied_count, result.errors)

        except KeyboardInterrupt:
            self._print_error("\nInterrupted by user")
            return 130

        except (OSError, LineEditError) as e:
            self._logger.error("Line edit failed: %s", str(e))
            self._print_error(str(e))
            return 1

    def _validate_inputs(self) -> bool:
        """Validate that input files exist."""
        if not self.source_file.is_file():
            self._print_error(f"Source file not found: {self.source_file}")
            return False

        if self.args.numbered:
            return True

        if self.edits_file is None:
            self._print_error("--edits is required unless --numbered is given")
            return False

        if not self.edits_file.is_file():
            self._print_error(f"Edits file not found: {self.edits_file}")
            return False

        return True

    def _read_source_file(self) -> tuple[str, bool]:
        """
        Read the source file.

        Returns:
            Tuple of (content without its final newline, whether it had one)
        """
        content = self.source_file.read_text(encoding='utf-8')
        trailing_newline = content.endswith('\n')
        if trailing_newline:
            content = content[:-1]

        line_count = len(content.split('\n'))
        self._print_verbose(f"Read {line_count} lines from {self.source_file}")
        return content, trailing_newline

    def _read_batch(self) -> EditBatch:
        """Read and parse the edit batch."""
        assert self.edits_file is not None
        batch = self.parser.parse(self.edits_file.read_text(encoding='utf-8'))
        self._print_verbose(f"Parsed {len(batch)} edit(s) from {self.edits_file}")
        return batch

    def _show_batch_info(self, batch: EditBatch) -> None:
        """Display information about the batch."""
        print(f"\n{Colors.BOLD}Edit Batch:{Colors.RESET}")
        print(f"  Source file: {Colors.CYAN}{self.source_file}{Colors.RESET}")
        print(f"  Edits file:  {Colors.CYAN}{self.edits_file}{Colors.RESET}")
        print(f"  Edits:       {Colors.CYAN}{len(batch)}{Colors.RESET}")

        if batch.reasoning:
            print(f"\n{Colors.BOLD}Reasoning:{Colors.RESET}")
            print(f"  {batch.reasoning}")

    def _plan_batch(self, content: str, batch: EditBatch) -> bool:
        """Validate the batch and show the order it will be applied in."""
        print(f"\n{Colors.BOLD}Planning edits...{Colors.RESET}")
        surface = TextLinesSurface(content)

        if self.args.strict:
            try:
                plan = self.planner.plan_strict(surface, batch.edits)

            except LineEditValidationError as e:
                self._print_error(str(e))
                errors = e.error_details['errors'] if e.error_details else []
                for error in errors:
                    print(f"  {error}")

                return False

        else:
            plan = self.planner.plan(surface, batch.edits)

        if self.verbose:
            for instruction in plan.instructions:
                print(f"  {instruction.action_name:<8} line {instruction.line}")

        if plan.errors:
            self._print_warning(f"{len(plan.errors)} edit(s) will be skipped")

        else:
            print(f"{Colors.GREEN}✓ All edits are within bounds{Colors.RESET}")

        return True

    def _show_preview(self, before: str, after: str) -> None:
        """Show the preview as a unified diff."""
        print(f"\n{Colors.BOLD}Preview:{Colors.RESET}")
        diff = list(difflib.unified_diff(
            before.split('\n'),
            after.split('\n'),
            fromfile=str(self.source_file),
            tofile=str(self.source_file),
            lineterm=''
        ))
        if not diff:
            print("  (no changes)")
            return

        for line in diff:
            if line.startswith('+') and not line.startswith('+++'):
                print(f"{Colors.GREEN}{line}{Colors.RESET}")

            elif line.startswith('-') and not line.startswith('---'):
                print(f"{Colors.RED}{line}{Colors.RESET}")

            else:
                print(line)

    def _apply_batch(self, preview: str, trailing_newline: bool, applied_count: int, errors: List[str]) -> int:
        """Write the edited content back to the source file."""
        print(f"\n{Colors.BOLD}Applying edits...{Colors.RESET}")

        if self.args.backup:
            self._create_backup()

        content = preview + '\n' if trailing_newline else preview
        self.source_file.write_text(content, encoding='utf-8')
        self._logger.info("Applied %d edit(s) to %s", applied_count, self.source_file)

        self._show_errors(errors)
        if errors:
            self._print_warning(f"Applied {applied_count} edit(s) with {len(errors)} error(s)")
            return 1

        print(f"{Colors.GREEN}✓ Applied {applied_count} edit(s){Colors.RESET}")
        print(f"  Modified: {Colors.CYAN}{self.source_file}{Colors.RESET}")
        return 0

    def _create_backup(self) -> None:
        """Create backup of source file."""
        backup_file = self.source_file.with_suffix(self.source_file.suffix + '.bak')
        shutil.copy2(self.source_file, backup_file)
        print(f"  Backup:   {Colors.CYAN}{backup_file}{Colors.RESET}")

    def _show_errors(self, errors: List[str]) -> None:
        """Show per-edit errors."""
        for error in errors:
            print(f"  {Colors.YELLOW}•{Colors.RESET} {error}")

    def _show_dry_run_message(self) -> None:
        """Show message about dry-run mode."""
        print(f"\n{Colors.YELLOW}Dry-run mode: No changes were made{Colors.RESET}")
        print(f"  Use {Colors.BOLD}--apply{Colors.RESET} to actually apply the edits")
        print(f"  Use {Colors.BOLD}--backup{Colors.RESET} to create a backup before applying")

    def _print_error(self, message: str) -> None:
        """Print error message."""
        print(f"{Colors.RED}Error:{Colors.RESET} {message}", file=sys.stderr)

    def _print_warning(self, message: str) -> None:
        """Print warning message."""
        print(f"{Colors.YELLOW}Warning:{Colors.RESET} {message}")

    def _print_verbose(self, message: str) -> None:
        """Print verbose message."""
        if self.verbose:
            print(f"{Colors.BLUE}[verbose]{Colors.RESET} {message}")


def parse_arguments(argv: List[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Apply line-indexed edit batches to a text file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the file as the edit generator sees it
  python -m lineedit_tool --file notes.md --numbered

  # Dry run (default) - show what would happen
  python -m lineedit_tool --file notes.md --edits edits.json

  # Apply the edits with a backup
  python -m lineedit_tool --file notes.md --edits edits.json --apply --backup

  # Refuse the batch if any edit is out of bounds
  python -m lineedit_tool --file notes.md --edits edits.json --apply --strict
        """
    )

    parser.add_argument(
        '--file',
        required=True,
        help='File to edit'
    )

    parser.add_argument(
        '--edits',
        help='JSON edit batch'
    )

    parser.add_argument(
        '--numbered',
        action='store_true',
        help='Print the file with line numbers and exit'
    )

    parser.add_argument(
        '--apply',
        action='store_true',
        help='Actually apply the edits (default is dry-run)'
    )

    parser.add_argument(
        '--backup',
        action='store_true',
        help='Create backup before applying (file.bak)'
    )

    parser.add_argument(
        '--strict',
        action='store_true',
        help='Refuse the whole batch if any edit is invalid'
    )

    parser.add_argument(
        '--log-dir',
        help='Write a debug log to this directory'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show detailed output'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output'
    )

    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    if args.log_dir:
        setup_logging(args.log_dir)

    editor = LineEditor(args)
    return editor.run()


if __name__ == "__main__":
    sys.exit(main())
