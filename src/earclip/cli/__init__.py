"""Command-line interface for earclip.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Triangulation of polygon JSON and GeoJSON documents
- Triangulation of font glyph outlines
- Progress bars and per-polygon deviation summaries
- Verbose/quiet output modes
"""

from earclip.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
