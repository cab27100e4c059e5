"""Batch triangulation of many polygons.

This module triangulates a list of polygons, optionally in parallel with
ProcessPoolExecutor. Each polygon is an independent kernel call on its
own arrays, so workers share no state.

Key components:
- triangulate_polygon: Top-level picklable function for parallel execution
- PolygonProcessor: Orchestrates a batch and collects statistics
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any

from earclip.config import EarclipSettings, TriangulationConfig
from earclip.core.triangulator import deviation, tessellate
from earclip.domain import Polygon, Triangulation
from earclip.utils import NULL_LOGGER, TriangulationLogger, TriangulationStats


def triangulate_polygon(
    polygon_dict: dict[str, Any],
    config_dict: dict[str, Any],
    check: bool = True,
    logger: Any = None,
) -> dict[str, Any]:
    """Triangulate a single serialized polygon.

    Top-level function designed to be picklable for use with
    ProcessPoolExecutor.

    Args:
        polygon_dict: Serialized polygon (from Polygon.to_dict())
        config_dict: Serialized triangulation configuration
        check: Also compute the area deviation of the result
        logger: structlog logger for kernel events (in-process only)

    Returns:
        Dictionary containing either:
        - Success: {"triangles": list, "deviation": float | None, "duration_ms": float}
        - Error: {"error": str, "polygon_name": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        polygon = Polygon.from_dict(polygon_dict)
        config = TriangulationConfig(**config_dict)

        triangles = tessellate(
            polygon.vertices,
            polygon.hole_indices,
            polygon.dim,
            config=config,
            logger=logger,
        )
        dev = None
        if check:
            dev = float(deviation(polygon.vertices, triangles, polygon.hole_indices, polygon.dim))

        return {
            "triangles": triangles,
            "deviation": dev,
            "duration_ms": (time.time() - start_time) * 1000,
        }

    except Exception as e:
        return {
            "error": str(e),
            "polygon_name": polygon_dict.get("name") or "unknown",
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }


class PolygonProcessor:
    """Orchestrates triangulation of a batch of polygons.

    Example:
        processor = PolygonProcessor(EarclipSettings())
        results = processor.process(polygons, max_workers=4)
        print(processor.stats.triangles_emitted)
    """

    def __init__(self, settings: EarclipSettings, logger: Any = None) -> None:
        """Initialize the processor.

        Args:
            settings: Earclip settings
            logger: structlog logger, silent if None
        """
        self.settings = settings
        self.logger = logger if logger is not None else NULL_LOGGER
        self.triangulation_logger = TriangulationLogger(self.logger)

    @property
    def stats(self) -> TriangulationStats:
        """Statistics of the last processed batch."""
        return self.triangulation_logger.stats

    def process(
        self,
        polygons: list[Polygon],
        max_workers: int | None = None,
        check: bool | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> list[Triangulation]:
        """Triangulate every polygon of a batch.

        Polygons that fail (invalid input) are logged and left out of the
        result; empty polygons are skipped.

        Args:
            polygons: Polygons to triangulate
            max_workers: Worker processes; 1 runs in-process, None uses config
            check: Compute area deviation for every result, None uses config
            progress_callback: Optional callback(completed, total, name, success)

        Returns:
            Triangulations in input order
        """
        self.triangulation_logger = TriangulationLogger(self.logger)
        stats = self.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.settings.processing.max_workers
        if check is None:
            check = self.settings.processing.check_deviation

        tasks: list[tuple[int, Polygon]] = []
        for k, polygon in enumerate(polygons):
            name = polygon.name or f"polygon-{k}"
            if polygon.vertex_count == 0:
                self.triangulation_logger.log_polygon_skipped(name, "empty polygon")
                continue
            self.triangulation_logger.log_polygon_start(
                name, polygon.vertex_count, len(polygon.hole_indices)
            )
            tasks.append((k, polygon))

        config_dict = self.settings.triangulation.model_dump()
        results: dict[int, Triangulation] = {}
        total = len(tasks)
        completed = 0

        def collect(k: int, polygon: Polygon, result: dict[str, Any]) -> None:
            nonlocal completed
            name = polygon.name or f"polygon-{k}"
            success = "error" not in result
            if success:
                results[k] = Triangulation(
                    polygon=polygon,
                    triangles=result["triangles"],
                    deviation=result["deviation"],
                )
                self.triangulation_logger.log_polygon_complete(
                    name,
                    triangle_count=len(result["triangles"]) // 3,
                    duration_ms=result["duration_ms"],
                    deviation=result["deviation"],
                )
            else:
                self.triangulation_logger.log_polygon_error(name, Exception(result["error"]))
            completed += 1
            if progress_callback is not None:
                progress_callback(completed, total, name, success)

        if max_workers == 1 or total <= 1:
            for k, polygon in tasks:
                collect(k, polygon, triangulate_polygon(polygon.to_dict(), config_dict, check, self.logger))
        else:
            self.logger.info("Starting parallel triangulation", polygon_count=total, max_workers=max_workers)
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                futures = {
                    executor.submit(triangulate_polygon, polygon.to_dict(), config_dict, check): (k, polygon)
                    for k, polygon in tasks
                }
                for future in as_completed(futures):
                    k, polygon = futures[future]
                    try:
                        result = future.result()
                    except Exception as e:
                        result = {"error": str(e), "duration_ms": 0.0}
                    collect(k, polygon, result)

        stats.end_time = time.time()
        self.logger.info(
            "Triangulation complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            triangles=stats.triangles_emitted,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return [results[k] for k in sorted(results)]
