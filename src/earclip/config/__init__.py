"""Configuration management for earclip.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- TriangulationConfig: Ear-clipping kernel settings
- GlyphConfig: Glyph outline extraction settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- EarclipSettings: Main application settings
"""

from earclip.config.settings import (
    EarclipSettings,
    GlyphConfig,
    LoggingConfig,
    ProcessingConfig,
    TriangulationConfig,
    get_default_settings,
)

__all__ = [
    "EarclipSettings",
    "GlyphConfig",
    "LoggingConfig",
    "ProcessingConfig",
    "TriangulationConfig",
    "get_default_settings",
]
