"""Structured logging for earclip.

Everything is logged through structlog. The kernel only ever receives a
logger; when none is given it uses NULL_LOGGER, which drops every event.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

LOGGER_NAME = "earclip"

NULL_LOGGER = structlog.wrap_logger(
    structlog.ReturnLogger(),
    processors=[],
    wrapper_class=structlog.BoundLogger,
)

# Run for structlog and stdlib records alike, before rendering
_PRE_CHAIN = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]


@dataclass
class TriangulationStats:
    """Counters for one batch of polygons."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    triangles_emitted: int = 0
    max_deviation: float = 0.0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return self.end_time - self.start_time


def _handler(
    handler: logging.Handler, level: str, renderer: structlog.typing.Processor
) -> logging.Handler:
    handler.setLevel(logging.getLevelName(level.upper()))
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=_PRE_CHAIN,
        )
    )
    return handler


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Route earclip logs to stderr and optionally to a JSON lines file.

    Calling this again replaces the handlers installed by the previous
    call.

    Args:
        log_file: JSON lines log file, none if None
        console_level: Minimum level printed to stderr
        file_level: Minimum level written to log_file
        quiet: Print nothing to stderr

    Returns:
        Logger bound to the "earclip" stdlib logger
    """
    stdlib_logger = logging.getLogger(LOGGER_NAME)
    for old in list(stdlib_logger.handlers):
        stdlib_logger.removeHandler(old)
        old.close()
    stdlib_logger.setLevel(logging.DEBUG)
    stdlib_logger.propagate = False

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        stdlib_logger.addHandler(
            _handler(
                logging.FileHandler(log_file, encoding="utf-8"),
                file_level,
                structlog.processors.JSONRenderer(),
            )
        )
    if not quiet:
        stdlib_logger.addHandler(
            _handler(
                logging.StreamHandler(),
                console_level,
                structlog.dev.ConsoleRenderer(colors=False),
            )
        )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_PRE_CHAIN,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logger = structlog.get_logger(LOGGER_NAME)
    logger.debug("Logging configured", log_file=str(log_file) if log_file else None)
    return logger


class TriangulationLogger:
    """Logs per-polygon outcomes of a batch and keeps its TriangulationStats."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = TriangulationStats()

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        return self._logger

    @property
    def stats(self) -> TriangulationStats:
        return self._stats

    def log_polygon_start(self, name: str, vertex_count: int, hole_count: int) -> None:
        self._logger.debug("Triangulating polygon", polygon=name, vertices=vertex_count, holes=hole_count)

    def log_polygon_complete(
        self,
        name: str,
        triangle_count: int,
        duration_ms: float,
        deviation: float | None = None,
    ) -> None:
        """Count a triangulated polygon and track the worst deviation."""
        self._logger.info(
            "Polygon triangulated",
            polygon=name,
            triangles=triangle_count,
            deviation=deviation,
            duration_ms=round(duration_ms, 2),
        )
        stats = self._stats
        stats.processed_count += 1
        stats.triangles_emitted += triangle_count
        if deviation is not None and deviation > stats.max_deviation:
            stats.max_deviation = deviation

    def log_polygon_skipped(self, name: str, reason: str) -> None:
        self._logger.debug("Polygon skipped", polygon=name, reason=reason)
        self._stats.skipped_count += 1

    def log_polygon_error(self, name: str, error: Exception) -> None:
        """Count a failed polygon and remember its message."""
        message = str(error)
        self._logger.error("Polygon triangulation failed", polygon=name, error=message)
        self._stats.error_count += 1
        self._stats.errors.append((name, message))
