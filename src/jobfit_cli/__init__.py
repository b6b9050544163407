"""Command-line interface for jobfit."""
