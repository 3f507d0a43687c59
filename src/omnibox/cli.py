"""Typer-based CLI for Omnibox."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .analytics import read_analytics_tail
from .cache.popularity import SqlitePopularityStore
from .calc import CalculatorError, ExpressionEvaluator, format_number
from .config import OmniboxConfig
from .models.context import SearchContext, UnitSystem, UserPreferences
from .models.query import QueryType
from .orchestrator import SuggestionOrchestrator
from .providers.corpus import JsonCorpusProvider
from .providers.weather import StaticWeatherProvider
from .routing import QueryClassifier, parse_command
from .units import UnitConverter

app = typer.Typer(
    name="omnibox",
    help="Omnibox - address-bar query classification and suggestion ranking",
    add_completion=False,
)

console = Console()


def _load_config(state_dir: Optional[str]) -> OmniboxConfig:
    try:
        return OmniboxConfig.from_env(cli_state_dir=state_dir)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def classify(query: str = typer.Argument(..., help="Address-bar input to classify")):
    """Show the query type the classifier assigns."""
    query_type = QueryClassifier().classify(query)
    console.print(f"[cyan]{query_type.value}[/cyan]")

    if query_type == QueryType.COMMAND:
        parsed = parse_command(query)
        if parsed is not None:
            command, argument = parsed
            console.print(f"[dim]Command:[/dim]  {command.value} ({command.description})")
            console.print(f"[dim]Argument:[/dim] {argument or '-'}")


@app.command()
def calc(expression: str = typer.Argument(..., help="Arithmetic expression, e.g. '2+2*3'")):
    """Evaluate an arithmetic expression."""
    try:
        result = ExpressionEvaluator().evaluate(expression)
    except CalculatorError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    console.print(format_number(result))


@app.command()
def convert(phrase: str = typer.Argument(..., help="Conversion phrase, e.g. '10 miles to km'")):
    """Convert a value between supported units."""
    suggestion = UnitConverter().convert(phrase)
    if suggestion is None:
        console.print(f"[red]Error: cannot convert '{phrase}'[/red]")
        raise typer.Exit(code=1)
    console.print(suggestion.title)


@app.command()
def resolve(
    query: str = typer.Argument(..., help="Address-bar input"),
    corpus_file: Optional[Path] = typer.Option(
        None,
        "--corpus",
        help="JSON file with bookmark/history/tab entries",
    ),
    location: Optional[str] = typer.Option(
        None,
        "--location",
        help="User location for weather suggestions",
    ),
    units: UnitSystem = typer.Option(
        UnitSystem.METRIC,
        "--units",
        help="Unit system for weather temperatures",
    ),
    engine: str = typer.Option(
        "google",
        "--engine",
        help="Search engine name or URL template containing {query}",
    ),
    offline: bool = typer.Option(
        False,
        "--offline",
        help="Use built-in sample weather instead of the network",
    ),
    state_dir: Optional[str] = typer.Option(
        None,
        "--state-dir",
        help="Directory for popularity and analytics files (default: OMNIBOX_STATE_DIR or ~/.omnibox)",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
):
    """Resolve a query into ranked suggestions and print them.

    Live weather arrives asynchronously; the command waits for it and prints
    the updated list when it lands.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    config = _load_config(state_dir)

    corpus = None
    if corpus_file is not None:
        try:
            corpus = JsonCorpusProvider(corpus_file)
        except (OSError, ValueError) as e:
            console.print(f"[red]Error: could not load corpus {corpus_file}: {e}[/red]")
            raise typer.Exit(code=1)

    updates = []
    weather_provider = StaticWeatherProvider() if offline else None
    preferences = UserPreferences(preferred_search_engine=engine, preferred_units=units, location=location)
    context = SearchContext.current(user_location=location)

    with SuggestionOrchestrator.from_config(config, corpus=corpus, weather_provider=weather_provider) as orchestrator:
        suggestions = orchestrator.resolve(query, context, preferences, on_update=updates.append)

    if updates:
        suggestions = updates[-1]

    if not suggestions:
        console.print("[dim]No suggestions[/dim]")
        return

    table = Table(title=f"Suggestions for '{query.strip()}'")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Type", style="magenta")
    table.add_column("Title", style="cyan")
    table.add_column("Subtitle", style="dim")
    table.add_column("Score", style="green")
    table.add_column("URL", style="yellow")

    for i, s in enumerate(suggestions, 1):
        url = s.url or "-"
        if len(url) > 60:
            url = url[:57] + "..."
        table.add_row(str(i), s.type.value, s.title, s.subtitle or "-", f"{s.relevance_score:.2f}", url)

    console.print(table)


@app.command()
def popular(
    top: int = typer.Option(20, "--top", help="Number of queries to show"),
    state_dir: Optional[str] = typer.Option(None, "--state-dir", help="State directory"),
):
    """Show the most popular queries recorded so far."""
    config = _load_config(state_dir)
    scores = SqlitePopularityStore(config.popularity_db_path).load_all()
    ranked = sorted(scores.items(), key=lambda kv: (-kv[1], kv[0]))[:top]

    if not ranked:
        console.print("[dim]No queries recorded yet[/dim]")
        return

    table = Table(title=f"Top {len(ranked)} Queries")
    table.add_column("Query", style="cyan")
    table.add_column("Popularity", style="green")
    for q, score in ranked:
        table.add_row(q, f"{score:.1f}")
    console.print(table)


analytics_app = typer.Typer(help="Analytics commands")
app.add_typer(analytics_app, name="analytics")


@analytics_app.command("tail")
def analytics_tail(
    n: int = typer.Option(20, "--n", help="Number of recent events to display"),
    state_dir: Optional[str] = typer.Option(None, "--state-dir", help="State directory"),
):
    """Display the last N analytics events.

    Skips malformed lines with warnings.
    """
    config = _load_config(state_dir)
    events = read_analytics_tail(config.analytics_path, n=n)

    if not events:
        console.print("[dim]No analytics events[/dim]")
        return

    table = Table(title=f"Last {len(events)} Analytics Event(s)")
    table.add_column("Timestamp (UTC)", style="cyan", no_wrap=True)
    table.add_column("Action", style="magenta")
    table.add_column("Query", style="yellow")
    table.add_column("Type", style="dim")
    table.add_column("Latency", style="green")

    for event in events:
        latency = f"{event.response_time_ms:.1f} ms" if event.response_time_ms is not None else "-"
        query_type = event.query_type.value if event.query_type is not None else "-"
        table.add_row(event.ts.strftime("%Y-%m-%d %H:%M:%S"), event.action.value, event.query, query_type, latency)

    console.print(table)


@app.command()
def version():
    """Show Omnibox version."""
    from . import __version__
    console.print(f"Omnibox v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
