from __future__ import annotations

import time
from pathlib import Path
from typing import List, Optional

import numpy as np
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import DemoConfig, load_config
from .demo import run_demo
from .errors import NumorderError
from .log import setup_logging
from .ordering import NumberSequence, ascending_sort, is_descending, reverse_in_place
from .scaling import SHAPES, fit_summary, run_sweep, summarize

app = typer.Typer(
    help="numorder CLI: sort and reverse large float sequences in place, and run the library demo.",
    rich_markup_mode="rich",
)
console = Console()


def _fail(err: Exception) -> None:
    console.print(f"[red bold]Error:[/red bold] {escape(str(err))}")
    raise typer.Exit(1)


def _parse_ints(value: str) -> List[int]:
    try:
        return [int(v) for v in value.split(",") if v.strip()]
    except ValueError:
        raise typer.BadParameter(f"expected comma-separated integers, got {value!r}") from None


@app.command()
def run(
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Path to YAML config"),
    url: Optional[str] = typer.Option(None, help="URL of the JSON posts to fetch"),
    count: Optional[int] = typer.Option(None, min=0, help="How many random numbers to sort"),
    seed: Optional[int] = typer.Option(None, help="Seed for the random generator"),
    skip_http: bool = typer.Option(False, "--skip-http", help="Do not fetch anything over HTTP"),
    log_file: Optional[Path] = typer.Option(None, dir_okay=False, help="Also write the log to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
):
    """Run the demonstration: fetch posts, show text styles, sort and reverse random numbers.

    [bold]Example:[/bold]
        numorder run --count 100000 --seed 7
    """
    try:
        cfg = load_config(config) if config else DemoConfig()
    except NumorderError as e:
        _fail(e)
    if url is not None:
        cfg.url = url
    if count is not None:
        cfg.count = count
    if seed is not None:
        cfg.seed = seed
    if skip_http:
        cfg.skip_http = True
    if log_file is not None:
        cfg.log.file = str(log_file)
    if verbose:
        cfg.log.level = "DEBUG"

    setup_logging(cfg.log.level, Path(cfg.log.file) if cfg.log.file else None)
    try:
        result = run_demo(cfg, np.random.default_rng(cfg.seed))
    except NumorderError as e:
        _fail(e)
    if not result.descending:
        raise typer.Exit(1)


@app.command()
def order(
    count: int = typer.Option(1_000_000, min=0, help="How many numbers to generate"),
    seed: Optional[int] = typer.Option(None, help="Seed for the random generator"),
    show: int = typer.Option(5, min=0, help="How many leading values to print"),
):
    """Generate random numbers in [0, 1), sort them ascending, then reverse in place."""
    rng = np.random.default_rng(seed)
    seq = NumberSequence.random(count, rng)

    start = time.perf_counter()
    ascending_sort(seq)
    sort_ms = (time.perf_counter() - start) * 1000.0
    start = time.perf_counter()
    reverse_in_place(seq)
    reverse_ms = (time.perf_counter() - start) * 1000.0
    ok = is_descending(seq)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("", style="dim")
    table.add_column("", style="bold")
    table.add_row("Count", f"{count:,}")
    table.add_row("Sort", f"{sort_ms:.2f} ms")
    table.add_row("Reverse", f"{reverse_ms:.2f} ms")
    table.add_row("Descending", "[green]yes[/green]" if ok else "[red]no[/red]")
    if show and count:
        table.add_row("Head", ", ".join(f"{v:.6f}" for v in seq[:show]))
    console.print(Panel(table, title="numorder", border_style="blue"))
    if not ok:
        raise typer.Exit(1)


@app.command()
def scaling(
    sizes: str = typer.Option("10000,100000,1000000", help="Comma-separated input sizes"),
    shapes: str = typer.Option("random", help=f"Comma-separated input shapes ({', '.join(SHAPES)})"),
    repeats: int = typer.Option(3, min=1, help="Timed repetitions per point"),
    seed: int = typer.Option(42, help="Seed for data and sweep order"),
    out: Optional[Path] = typer.Option(None, dir_okay=False, help="Append raw runs to this JSONL file"),
):
    """Time sort+reverse across sizes and fit a complexity model per input shape.

    Exits with status 1 when any shape fits O(n^2) or worse.
    """
    size_list = _parse_ints(sizes)
    shape_list = [s.strip() for s in shapes.split(",") if s.strip()]
    try:
        records = run_sweep(size_list, shape_list, repeats=repeats, seed=seed, out_path=out)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    if not records:
        console.print("[yellow]No sizes or shapes given; nothing to time.[/yellow]")
        raise typer.Exit(1)

    summary = summarize(records)
    table = Table(title="Sort + reverse timings")
    table.add_column("Shape")
    table.add_column("n", justify="right")
    table.add_column("Median (ms)", justify="right")
    table.add_column("p10 (ms)", justify="right")
    table.add_column("p90 (ms)", justify="right")
    table.add_column("RSS (MB)", justify="right")
    for _, row in summary.iterrows():
        table.add_row(
            row["shape"],
            f"{int(row['n']):,}",
            f"{row['wall_ms_median']:.3f}",
            f"{row['wall_ms_p10']:.3f}",
            f"{row['wall_ms_p90']:.3f}",
            f"{row['rss_mb_median']:.1f}",
        )
    console.print(table)

    fits = fit_summary(summary)
    if fits.empty:
        console.print("[yellow]Need at least two sizes per shape to fit a complexity model.[/yellow]")
        raise typer.Exit(1)
    slow = []
    for _, row in fits.iterrows():
        mark = "[green]✓[/green]" if row["subquadratic"] else "[red]✗[/red]"
        console.print(f"{mark} {row['shape']}: best fit {row['model']}")
        if not row["subquadratic"]:
            slow.append(row["shape"])
    if out:
        console.print(f"[dim]Raw runs appended to {out}[/dim]")
    if slow or not summary["ok"].all():
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
