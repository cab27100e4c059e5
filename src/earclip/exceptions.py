"""Exception hierarchy for Earclip."""


class EarclipError(Exception):
    """Base exception for all Earclip errors."""

    pass


class InvalidInputError(EarclipError):
    """Triangulation input violates a caller-controlled precondition.

    Raised for malformed coordinate arrays or hole indices. Geometric
    degeneracies (duplicate points, collinear runs, self-intersections)
    are never reported through this error.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid triangulation input: {reason}")


class PolygonError(EarclipError):
    """Errors related to polygon loading or saving."""

    pass


class PolygonLoadError(PolygonError):
    """Error loading a polygon file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load polygons from '{path}': {reason}")


class PolygonSaveError(PolygonError):
    """Error saving a triangulation file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save triangulation '{path}': {reason}")


class PolygonFormatError(PolygonError):
    """Unsupported or invalid polygon document."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid polygon format '{path}': {details}")


class FontError(EarclipError):
    """Errors related to reading glyph outlines from fonts."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphNotFoundError(FontError):
    """Requested glyph not found in font."""

    def __init__(self, glyph_name: str) -> None:
        self.glyph_name = glyph_name
        super().__init__(f"Glyph '{glyph_name}' not found in font")
