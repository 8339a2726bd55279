"""CLI commands for Stillwater.

This package provides the command-line interface for the journal,
settings and session feedback.
"""

from stillwater.cli.main import cli, main

__all__ = ["cli", "main"]
