"""Command-line tool for applying line-indexed edit batches to files."""
