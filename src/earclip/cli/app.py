"""Typer application behind the ``earclip`` command.

Commands:
- triangulate: polygon JSON document in, triangles JSON out
- glyph: font glyph outlines in, triangles JSON out
"""

from pathlib import Path
from typing import Annotated, NoReturn

import structlog
import typer
from rich.markup import escape

from earclip import __version__
from earclip.cli.output import (
    console,
    create_progress,
    print_error,
    print_header,
    print_results_table,
    print_source_info,
    print_step,
    print_success,
)
from earclip.config import (
    EarclipSettings,
    GlyphConfig,
    LoggingConfig,
    ProcessingConfig,
    TriangulationConfig,
)
from earclip.core import PolygonProcessor
from earclip.domain import Polygon
from earclip.exceptions import (
    EarclipError,
    FontLoadError,
    GlyphNotFoundError,
    PolygonFormatError,
    PolygonLoadError,
    PolygonSaveError,
)
from earclip.io import GlyphOutlineReader, PolygonReader, TriangulationWriter
from earclip.utils import configure_logging

app = typer.Typer(
    name="earclip",
    help="Triangulate polygons with holes by ear clipping.",
    add_completion=False,
    no_args_is_help=True,
)

# Options shared by every command
OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Where to write the results JSON"),
]
CheckOption = Annotated[
    bool,
    typer.Option("--check/--no-check", help="Report the area deviation of each result"),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option("--log-file", help="Also write JSON logs to this file"),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--log-level", help="Console log level: DEBUG, INFO, WARNING or ERROR"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show debug logs and a per-polygon table"),
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Print nothing but errors"),
]


def version_callback(value: bool) -> None:
    if value:
        console.print(f"earclip {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Print the version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Triangulate polygons with holes by ear clipping."""


@app.command()
def triangulate(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Polygon document: flat objects, nested rings or GeoJSON",
            show_default=False,
        ),
    ],
    output: OutputOption = None,
    check: CheckOption = True,
    hash_threshold: Annotated[
        int,
        typer.Option(
            "--hash-threshold",
            min=0,
            help="Use the z-order index for polygons with more vertices than this",
        ),
    ] = 80,
    tolerance: Annotated[
        float,
        typer.Option(
            "--tolerance",
            "-t",
            min=0.0,
            help="Coordinates closer than this compare equal (0 compares exactly)",
        ),
    ] = 0.0,
    include_vertices: Annotated[
        bool,
        typer.Option("--include-vertices", help="Copy each polygon's vertices into the results"),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-j", min=1, help="Worker processes (1 runs in-process)"),
    ] = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Triangulate every polygon of a JSON document.

    Results go to <input>-triangles.json unless --output is given:

        earclip triangulate shapes.json
    """
    _validate_flags(verbose, quiet)
    _validate_input_path(input_file, "a polygon JSON document")

    settings = EarclipSettings(
        triangulation=TriangulationConfig(hash_threshold=hash_threshold, tolerance=tolerance),
        processing=ProcessingConfig(max_workers=workers or 1, check_deviation=check),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )

    if not quiet:
        print_header(__version__)

    try:
        logger = _configure_logging(settings, verbose, quiet)

        if not quiet:
            print_step("Reading polygons")
        reader = PolygonReader(input_file)
        try:
            reader.load()
        except FileNotFoundError as e:
            raise PolygonLoadError(str(input_file), str(e)) from e
        polygons = list(reader.iter_polygons())

        _run(
            polygons,
            source=input_file,
            output_path=output or TriangulationWriter.get_output_path(input_file),
            settings=settings,
            logger=logger,
            include_vertices=include_vertices,
            verbose=verbose,
            quiet=quiet,
        )

    except typer.Exit:
        raise
    except PolygonFormatError as e:
        _fail(f"Invalid polygon document: {e.details}")
    except PolygonLoadError as e:
        _fail(f"Could not load polygons: {e.reason}")
    except PolygonSaveError as e:
        _fail(f"Could not save triangulation: {e.reason}")
    except EarclipError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"Unexpected error: {e}")


@app.command()
def glyph(
    font_file: Annotated[
        Path,
        typer.Argument(help="TrueType or OpenType font", show_default=False),
    ],
    glyphs: Annotated[
        list[str],
        typer.Argument(help="Glyph names or single characters", show_default=False),
    ],
    output: OutputOption = None,
    flatness: Annotated[
        float,
        typer.Option(
            "--flatness",
            "-f",
            min=0.01,
            max=50.0,
            help="Curve flattening tolerance, in units of a 1000 UPM font",
        ),
    ] = 1.0,
    check: CheckOption = True,
    include_vertices: Annotated[
        bool,
        typer.Option(
            "--include-vertices/--no-vertices",
            help="Write the flattened outline next to the triangles",
        ),
    ] = True,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Triangulate glyph outlines of a font.

    Curves are flattened to polylines and counters (the holes of O, A, B,
    8) become polygon holes. Results go to <font>-glyphs.json unless
    --output is given:

        earclip glyph Roboto-Regular.ttf O A B
    """
    _validate_flags(verbose, quiet)
    _validate_input_path(font_file, "a TTF or OTF font file")

    settings = EarclipSettings(
        glyph=GlyphConfig(flatten_tolerance=flatness),
        processing=ProcessingConfig(check_deviation=check),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )

    if not quiet:
        print_header(__version__)

    try:
        logger = _configure_logging(settings, verbose, quiet)

        if not quiet:
            print_step("Reading glyphs")
        reader = GlyphOutlineReader(font_file)
        try:
            reader.load()
        except Exception as e:
            raise FontLoadError(str(font_file), str(e)) from e
        try:
            tolerance = settings.glyph.get_flatten_tolerance(reader.units_per_em)
            polygons: list[Polygon] = []
            for key in glyphs:
                polygons.extend(reader.read_glyph(key, tolerance))
        finally:
            reader.close()

        _run(
            polygons,
            source=font_file,
            output_path=output or TriangulationWriter.get_output_path(font_file, suffix="-glyphs"),
            settings=settings,
            logger=logger,
            include_vertices=include_vertices,
            verbose=verbose,
            quiet=quiet,
        )

    except typer.Exit:
        raise
    except FontLoadError as e:
        _fail(f"Could not load font: {e.reason}")
    except PolygonSaveError as e:
        _fail(f"Could not save triangulation: {e.reason}")
    except (GlyphNotFoundError, EarclipError) as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"Unexpected error: {e}")


def _fail(message: str, details: str | None = None) -> NoReturn:
    print_error(message, details=details)
    raise typer.Exit(code=1)


def _validate_flags(verbose: bool, quiet: bool) -> None:
    if verbose and quiet:
        _fail("Cannot use --verbose and --quiet together")


def _validate_input_path(path: Path, kind: str) -> None:
    """Exit with status 1 unless path is an existing file.

    Args:
        path: Input path from the command line
        kind: What the file should be, for the hint
    """
    if not path.exists():
        _fail(f"Input file not found: {path}", details=f"Expected {kind}.")
    if not path.is_file():
        _fail(f"Input path is not a file: {path}", details=f"Expected {kind}.")


def _configure_logging(
    settings: EarclipSettings, verbose: bool, quiet: bool
) -> structlog.stdlib.BoundLogger:
    return configure_logging(
        log_file=settings.logging.log_file,
        console_level="DEBUG" if verbose else settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )


def _run(
    polygons: list[Polygon],
    source: Path,
    output_path: Path,
    settings: EarclipSettings,
    logger: structlog.stdlib.BoundLogger,
    include_vertices: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Triangulate polygons, write the results and print a summary.

    Exits with status 0 without writing anything when there are no
    polygons. Polygons that fail are reported but do not fail the run.
    """
    if not quiet:
        print_source_info(
            path=str(source),
            polygon_count=len(polygons),
            vertex_count=sum(p.vertex_count for p in polygons),
        )

    if not polygons:
        if not quiet:
            console.print("\nNo polygons found. Nothing to do.")
        raise typer.Exit(code=0)

    processor = PolygonProcessor(settings, logger=logger)

    if quiet:
        results = processor.process(polygons)
    else:
        print_step("Triangulating")
        with create_progress() as progress:
            task_id = progress.add_task("", total=len(polygons))

            def on_polygon(completed: int, _total: int, name: str, _success: bool) -> None:
                progress.update(task_id, completed=completed, description=escape(name))

            results = processor.process(polygons, progress_callback=on_polygon)

    stats = processor.stats

    if verbose:
        print_step("Results")
        print_results_table(results)

    TriangulationWriter(output_path, include_vertices=include_vertices).write(results)

    if not quiet:
        for name, message in stats.errors:
            print_error(f"{name}: {message}")
        print_success(
            output_path=str(output_path),
            total_time_s=stats.duration_seconds,
            processed=stats.processed_count,
            triangles=stats.triangles_emitted,
            errors=stats.error_count,
            max_deviation=stats.max_deviation if settings.processing.check_deviation else None,
        )


def cli() -> None:
    """Console script entry point."""
    app()


def main() -> None:
    """Alias of cli()."""
    cli()


if __name__ == "__main__":
    cli()
