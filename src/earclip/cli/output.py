"""Console presentation for the earclip CLI.

All terminal output of the commands goes through the helpers below, which
render with Rich: a header rule, step markers, a per-polygon table, a
progress display and the final summary.
"""

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.rule import Rule
from rich.table import Table

from earclip.domain import Triangulation

console = Console()

MARK_STEP = "»"
MARK_OK = "✔"
MARK_FAIL = "✘"
SEP = "|"

# Deviations above this are highlighted as suspicious
DEVIATION_WARN = 1e-6


def create_progress() -> Progress:
    """Progress display showing the polygon being triangulated."""
    return Progress(
        SpinnerColumn(style="cyan"),
        BarColumn(bar_width=32, complete_style="cyan", finished_style="green"),
        MofNCompleteColumn(),
        TextColumn("[dim]{task.description}[/dim]"),
        TimeElapsedColumn(),
        console=console,
    )


def print_header(version: str) -> None:
    console.print(Rule(f"[bold cyan]earclip[/bold cyan] {version}", align="left", style="cyan"))


def print_step(message: str) -> None:
    console.print(f"\n[cyan]{MARK_STEP}[/cyan] [bold]{escape(message)}[/bold]")


def print_source_info(path: str, polygon_count: int, vertex_count: int) -> None:
    """Describe the loaded input.

    Args:
        path: Input file as given on the command line
        polygon_count: Polygons read from it
        vertex_count: Vertices over all polygons
    """
    console.print(f"  [dim]{escape(path)}[/dim]")
    console.print(f"  {polygon_count:,} polygons {SEP} {vertex_count:,} vertices")


def format_deviation(value: float | None) -> str:
    """Render a deviation, red when it exceeds DEVIATION_WARN."""
    if value is None:
        return "[dim]n/a[/dim]"
    colour = "red" if value > DEVIATION_WARN else "green"
    return f"[{colour}]{value:.2e}[/{colour}]"


def print_results_table(results: list[Triangulation], limit: int = 20) -> None:
    """Tabulate the first `limit` triangulations.

    Args:
        results: Triangulations in input order
        limit: Number of rows shown before the rest is summarized
    """
    table = Table(box=None, header_style="bold cyan", pad_edge=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", overflow="fold")
    table.add_column("Vertices", justify="right")
    table.add_column("Holes", justify="right")
    table.add_column("Triangles", justify="right")
    table.add_column("Deviation", justify="right")

    for row, result in enumerate(results[:limit]):
        polygon = result.polygon
        table.add_row(
            str(row),
            escape(polygon.name or "-"),
            f"{polygon.vertex_count:,}",
            f"{len(polygon.hole_indices):,}",
            f"{result.triangle_count:,}",
            format_deviation(result.deviation),
        )

    console.print(table)
    hidden = len(results) - limit
    if hidden > 0:
        console.print(f"  [dim]{hidden:,} more not shown[/dim]")


def format_duration(seconds: float) -> str:
    """Short human duration, e.g. 420ms, 3.2s or 2m05s."""
    if seconds >= 60:
        minutes, rest = divmod(int(round(seconds)), 60)
        return f"{minutes}m{rest:02d}s"
    if seconds >= 1:
        return f"{seconds:.1f}s"
    return f"{round(seconds * 1000)}ms"


def print_success(
    output_path: str,
    total_time_s: float,
    processed: int,
    triangles: int,
    errors: int,
    max_deviation: float | None = None,
) -> None:
    """Print the closing summary of a run.

    Args:
        output_path: Where the results were written
        total_time_s: Wall time of the triangulation
        processed: Polygons triangulated successfully
        triangles: Triangles emitted over all polygons
        errors: Polygons that failed
        max_deviation: Worst deviation, None when not checked
    """
    console.print(
        f"\n[bold green]{MARK_OK} Complete[/bold green] [dim]({format_duration(total_time_s)})[/dim]"
    )

    summary = Table.grid(padding=(0, 2))
    summary.add_column(style="dim")
    summary.add_column()
    summary.add_row("written", escape(output_path))
    summary.add_row("result", f"{processed} polygons {SEP} {triangles:,} triangles")
    if errors:
        summary.add_row("failed", f"[red]{errors}[/red]")
    if max_deviation is not None:
        summary.add_row("max deviation", format_deviation(max_deviation))
    console.print(summary)


def print_error(message: str, details: str | None = None) -> None:
    """Print an error line and optional detail line.

    Args:
        message: What went wrong
        details: Extra context, printed dimmed below
    """
    console.print(f"\n[bold red]{MARK_FAIL} {escape(message)}[/bold red]")
    if details:
        console.print(f"  [dim]{escape(details)}[/dim]")
