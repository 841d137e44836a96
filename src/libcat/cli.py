"""Command-line interface for the libcat catalog."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import structlog
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from libcat import exporters
from libcat.log import configure_logging
from libcat.models import Title
from libcat.seed import SeedEntry, SeedError, load_catalog, write_seed
from libcat.services import IndexedCatalog, SearchHit, verify_catalog
from libcat.settings import get_settings

console = Console()
app = typer.Typer(help="libcat – in-memory book catalog with keyword search")
logger = structlog.get_logger(__name__)

DEMO_TITLES = [
    SeedEntry(title=Title("Don Quixote", ["Miguel de Cervantes"], 1612), copies=2, checked_out=1),
    SeedEntry(title=Title("A Tale of Two Cities", ["Charles Dickens"], 1859)),
    SeedEntry(title=Title("Harry Potter and the Philosopher's Stone", ["J.K. Rowling"], 1997), copies=3),
    SeedEntry(title=Title("Harry Potter and the Deathly Hollows", ["J.K. Rowling"], 2007), copies=2, lost=1),
    SeedEntry(title=Title("Harry Potter and the Half-Blood Prince", ["J.K. Rowling"], 2005)),
]


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    configure_logging(get_settings())


def _open_catalog(seed: Path) -> IndexedCatalog:
    try:
        return load_catalog(seed, get_settings())
    except SeedError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc


@app.command()
def config(
    json_output: bool = typer.Option(False, "--json", help="Output settings as JSON"),
) -> None:
    """Display the resolved settings."""
    settings = get_settings()
    if json_output:
        typer.echo(settings.model_dump_json(indent=2))
        return
    table = Table(title="libcat Settings")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in settings.model_dump().items():
        if isinstance(value, frozenset):
            value = ", ".join(sorted(value))
        table.add_row(key, str(value))
    console.print(table)


@app.command()
def doctor() -> None:
    """Environment checks (Python and dependencies)."""
    checks: list[tuple[str, bool, str]] = []
    checks.append(("python>=3.10", sys.version_info >= (3, 10), sys.version.split()[0]))
    for mod in ("pydantic", "structlog", "rich"):
        try:
            module = __import__(mod)
            ver = getattr(module, "__version__", "unknown")
            checks.append((f"{mod} import", True, str(ver)))
        except ImportError as exc:  # pragma: no cover
            checks.append((f"{mod} import", False, str(exc)))

    passed = True
    for name, ok, note in checks:
        status = "[green]OK[/green]" if ok else "[red]FAIL[/red]"
        console.print(f"{status} {name} ({note})")
        passed = passed and ok
    if not passed:
        raise typer.Exit(code=1)
    console.print("[green]Doctor checks passed.[/green]")


@app.command()
def search(
    seed: Path = typer.Argument(..., help="JSON or CSV seed file"),
    query: str = typer.Argument(..., help='Keywords; wrap phrases in "double quotes"'),
    limit: Optional[int] = typer.Option(None, help="Maximum number of results"),
    scores: bool = typer.Option(False, "--scores", help="Show match weight and score"),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Ranked keyword search across the seeded catalog."""
    catalog = _open_catalog(seed)
    if limit is None:
        limit = get_settings().result_limit
    hits = catalog.find_hits(query, limit=limit)
    logger.info("cli.search", query=query, matches=len(hits))
    if json_output:
        typer.echo(exporters.export_hits_json(hits))
        return
    if not hits:
        console.print("[yellow]No matches. Try another query.")
        return
    _print_search_results(hits, scores=scores)


def _print_search_results(hits: list[SearchHit], *, scores: bool) -> None:
    table = Table(title="Search Results")
    table.add_column("#")
    table.add_column("Title")
    table.add_column("Authors")
    table.add_column("Year")
    if scores:
        table.add_column("Weight")
        table.add_column("Score")
    for rank, hit in enumerate(hits, start=1):
        row = [str(rank), escape(hit.title.text), escape(", ".join(hit.title.authors)), str(hit.title.year)]
        if scores:
            row.extend([str(hit.weight), str(hit.score)])
        table.add_row(*row)
    console.print(table)


@app.command()
def inventory(seed: Path = typer.Argument(..., help="JSON or CSV seed file")) -> None:
    """List titles with their available, checked-out and lost counts."""
    catalog = _open_catalog(seed)
    rows = exporters.inventory_rows(catalog)
    if not rows:
        console.print("[yellow]Catalog is empty.")
        return
    table = Table(title="Inventory")
    table.add_column("Title")
    table.add_column("Authors")
    table.add_column("Year")
    table.add_column("Available")
    table.add_column("Checked out")
    table.add_column("Lost")
    for row in rows:
        table.add_row(
            escape(row["title"]),
            escape(", ".join(row["authors"])),
            str(row["year"]),
            str(row["available"]),
            str(row["checked_out"]),
            str(row["lost"]),
        )
    console.print(table)


@app.command()
def verify(seed: Path = typer.Argument(..., help="JSON or CSV seed file")) -> None:
    """Recompute every catalog invariant and report violations."""
    catalog = _open_catalog(seed)
    violations = verify_catalog(catalog.store)
    if violations:
        for violation in violations:
            console.print(f"[red]FAIL[/red] {escape(str(violation))}")
        raise typer.Exit(code=1)
    console.print(
        f"[green]Catalog consistent[/green]: {len(catalog.titles())} titles, "
        f"{len(catalog)} active copies, {len(catalog.store.index)} keywords"
    )


@app.command()
def export(
    seed: Path = typer.Argument(..., help="JSON or CSV seed file"),
    format: str = typer.Option("json", "--format", "-f", help="csv or json", case_sensitive=False),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file"),
) -> None:
    """Export the catalog inventory as CSV or JSON."""
    fmt = format.lower()
    if fmt not in {"csv", "json"}:
        raise typer.BadParameter("Format must be 'csv' or 'json'.")
    catalog = _open_catalog(seed)
    payload = (
        exporters.export_inventory_csv(catalog)
        if fmt == "csv"
        else exporters.export_inventory_json(catalog)
    )
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(payload, encoding="utf-8")
        console.print(f"[green]Wrote {fmt} export to {output}")
    else:
        typer.echo(payload)


@app.command()
def demo(
    output: Path = typer.Option(Path("libcat-demo.json"), "--output", "-o", help="Seed file to write"),
) -> None:
    """Write a small sample seed file to try the other commands on."""
    write_seed(output, DEMO_TITLES)
    console.print(f"[green]Wrote demo seed[/green] ({len(DEMO_TITLES)} titles) to {output}")
