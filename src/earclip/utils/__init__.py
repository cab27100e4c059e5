"""Utility functions for earclip.

This module provides utility functions including:

- Logging setup and configuration
- Triangulation statistics tracking
"""

from earclip.utils.logging import (
    NULL_LOGGER,
    TriangulationLogger,
    TriangulationStats,
    configure_logging,
)

__all__ = [
    "NULL_LOGGER",
    "TriangulationLogger",
    "TriangulationStats",
    "configure_logging",
]
