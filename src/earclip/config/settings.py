"""Configuration settings for Earclip."""

from pathlib import Path

from pydantic import BaseModel, Field


class TriangulationConfig(BaseModel):
    """Configuration for the ear-clipping kernel.

    The defaults reproduce the classic earcut behaviour: exact coordinate
    comparison and z-order hashing for polygons above 80 vertices.
    """

    hash_threshold: int = Field(
        default=80,
        ge=0,
        description="Vertex count above which ear tests use the z-order index",
    )
    tolerance: float = Field(
        default=0.0,
        ge=0.0,
        description="Absolute tolerance for coordinate equality (0 = exact)",
    )
    max_split_depth: int = Field(
        default=200,
        ge=1,
        le=2000,
        description="Maximum nesting of diagonal splits before a remnant is abandoned",
    )


class GlyphConfig(BaseModel):
    """Configuration for glyph outline extraction with scale-relative tolerances.

    Tolerance values are specified at a reference UPM of 1000 and are
    scaled proportionally for fonts with different UPM values.
    """

    reference_upm: int = Field(
        default=1000,
        description="Reference UPM for tolerance values",
    )
    flatten_tolerance: float = Field(
        default=1.0,
        ge=0.01,
        le=50.0,
        description="Tolerance for Bezier curve flattening (at reference UPM)",
    )

    def scale_tolerance(self, base_value: float, upm: int) -> float:
        """Scale a tolerance value for the given UPM.

        Args:
            base_value: The tolerance value at reference UPM
            upm: The actual UPM of the font

        Returns:
            Scaled tolerance value
        """
        return base_value * (upm / self.reference_upm)

    def get_flatten_tolerance(self, upm: int) -> float:
        """Get Bezier flattening tolerance scaled for UPM."""
        return self.scale_tolerance(self.flatten_tolerance, upm)


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=1,
        ge=1,
        description="Max worker processes (1 = in-process, None = auto)",
    )
    check_deviation: bool = Field(
        default=True,
        description="Compute area deviation for every triangulation",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class EarclipSettings(BaseModel):
    """Main application settings."""

    triangulation: TriangulationConfig = Field(default_factory=TriangulationConfig)
    glyph: GlyphConfig = Field(default_factory=GlyphConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> EarclipSettings:
    """Get default application settings."""
    return EarclipSettings()
