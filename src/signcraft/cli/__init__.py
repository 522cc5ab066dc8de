"""Command-line interface for signcraft.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Text from arguments or sign project files
- STL and 3MF output (single object, per part, colored)
- Verbose/quiet output modes
- Detailed error reporting
"""

from signcraft.cli.app import cli, main

__all__ = ["cli", "main"]
