"""Typer CLI entry point for EdgeBet Agent.

Commands:
- edgebet scan [--sport NBA] [--team celtics] [--json]
- edgebet arbitrage [--json]
- edgebet props --sport NBA [--json]
- edgebet analytics [--days 30] [--json]
- edgebet version
"""

import json
import os
from dataclasses import asdict

from dotenv import load_dotenv

# Load .env file before anything else
load_dotenv()

import typer
from rich.console import Console
from rich.table import Table

from edgebet_agent import __version__
from edgebet_agent.agents.analysis_agent.arbitrage import detect_arbitrage
from edgebet_agent.agents.analysis_agent.props import analyze_props, collect_props
from edgebet_agent.agents.lines_agent.agent import NoOddsDataError, collect_odds, run_sync
from edgebet_agent.cache import FeedCache
from edgebet_agent.cli.filters import get_filter_summary, suggest_relaxed_filters
from edgebet_agent.cli.formatters import (
    format_analytics_table,
    format_arbitrage_table,
    format_pick_detail,
    format_picks_table,
    format_props_table,
)
from edgebet_agent.config import SportConfig, get_settings
from edgebet_agent.graph.graph import run_scan
from edgebet_agent.history.analytics import summarize_picks
from edgebet_agent.history.repository import DiskPickHistory
from edgebet_agent.monitoring import configure_logging

NO_DATA_EXIT_CODE = 2
UNKNOWN_SPORT_EXIT_CODE = 1

cli = typer.Typer(
    name="edgebet",
    help="""EdgeBet - multi-agent sports betting scanner.

WHAT IT DOES:
  Pulls odds from many sportsbooks, removes the vig, and runs six signal
  agents (value, line movement, public money, sharp money, injury,
  situational) whose scores combine into ranked picks. Also finds
  cross-book arbitrage and soft player props.

QUICK START:
  edgebet scan
  edgebet scan --sport NBA --min-confidence 70
  edgebet arbitrage --json
  edgebet props --sport NBA
""",
    add_completion=False,
)

# Disable colors if NO_COLOR env var is set (standard convention)
console = Console(no_color=os.getenv("NO_COLOR") is not None)


def _print_json(payload) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


def _print_errors(errors: list[str]) -> None:
    if not errors:
        return
    table = Table(title="Processing Details", show_header=False)
    table.add_column("Agent", style="cyan")
    table.add_column("Status", style="dim")
    for error in errors:
        if ":" in error:
            agent, status = error.split(":", 1)
            table.add_row(agent.strip(), status.strip())
        else:
            table.add_row("System", error)
    console.print(table)


def _resolve_sports(keys: list[str] | None) -> list[SportConfig]:
    """Configured sports for the --sport values (every sport when none given).

    Exits with code 1 on a sport that is not configured.
    """
    settings = get_settings()
    if not keys:
        return list(settings.sports)

    resolved = []
    for key in keys:
        sport = settings.sport_by_key(key)
        if sport is None:
            console.print(f"[bold red]Error:[/bold red] unknown sport '{key}'")
            raise typer.Exit(code=UNKNOWN_SPORT_EXIT_CODE)
        resolved.append(sport)
    return resolved


def _no_data(json_output: bool, errors: list[str] | None = None) -> None:
    if json_output:
        _print_json({"error": "No odds data available", "errors": errors or []})
    else:
        console.print("[bold red]No odds data available[/bold red]")
        _print_errors(errors or [])
    raise typer.Exit(code=NO_DATA_EXIT_CODE)


@cli.command()
def scan(
    sport: list[str] = typer.Option(None, "--sport", "-s", help="Sport label or key (repeatable). Default: all"),
    team: list[str] = typer.Option(None, "--team", "-t", help="Only games involving this team (repeatable)"),
    min_confidence: int = typer.Option(None, "--min-confidence", "-c", help="Hide picks below this confidence (55-90)"),
    min_edge: float = typer.Option(None, "--min-edge", "-e", help="Hide picks below this edge %"),
    limit: int = typer.Option(0, "--limit", "-n", help="Rank at most N picks (0 = configured default)"),
    json_output: bool = typer.Option(False, "--json", help="Machine-readable JSON output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show per-pick breakdowns and processing details"),
):
    """Scan all configured sports and rank consensus picks.

    \b
    EXAMPLES:
      edgebet scan                        # Top 10 picks across every sport
      edgebet scan -s NBA -s NHL          # Only NBA and NHL
      edgebet scan -t celtics -v          # Celtics games with breakdowns
      edgebet scan --json > picks.json    # JSON for scripts

    \b
    UNDERSTANDING CONFIDENCE:
      55-90 scale. Picks need 65+ confidence and 3.5%+ edge to be listed.
    """
    settings = get_settings()
    _resolve_sports(sport)
    filter_params = {"min_confidence": min_confidence, "min_edge": min_edge}
    history = DiskPickHistory(settings.history_dir)

    try:
        result = run_scan(
            sports=sport or [],
            teams=team or [],
            top_n=limit,
            filter_params=filter_params,
            history=history,
        )
    except NoOddsDataError:
        _no_data(json_output)
        return
    finally:
        history.close()

    if json_output:
        _print_json(result.to_dict())
        return

    active_filters = {k: v for k, v in filter_params.items() if v is not None}
    if not result.picks and active_filters:
        console.print(f"No picks match your filters ({get_filter_summary(active_filters)}).")
        console.print(suggest_relaxed_filters(active_filters))
    else:
        console.print(format_picks_table(result.picks, active_filters=active_filters))

    if verbose:
        for pick in result.picks:
            console.print(format_pick_detail(pick))

    if result.arbitrage:
        console.print(format_arbitrage_table(result.arbitrage))

    if verbose:
        _print_errors(result.errors)


@cli.command()
def arbitrage(
    sport: list[str] = typer.Option(None, "--sport", "-s", help="Sport label or key (repeatable). Default: all"),
    json_output: bool = typer.Option(False, "--json", help="Machine-readable JSON output"),
):
    """Find cross-book arbitrage (guaranteed-profit) opportunities."""
    settings = get_settings()
    sports = _resolve_sports(sport)
    cache = FeedCache(settings.cache_dir) if settings.cache_enabled else None
    try:
        odds = run_sync(collect_odds(sports=sports, settings=settings, cache=cache))
    finally:
        if cache:
            cache.close()

    if not odds["games"]:
        _no_data(json_output, odds["errors"])
        return

    opportunities = detect_arbitrage(odds["games"])[: settings.arbitrage_limit]

    if json_output:
        _print_json(
            {
                "opportunities": [asdict(o) for o in opportunities],
                "count": len(opportunities),
                "errors": odds["errors"],
            }
        )
        return

    console.print(format_arbitrage_table(opportunities))


@cli.command()
def props(
    sport: str = typer.Option("NBA", "--sport", "-s", help="Sport label or key"),
    limit: int = typer.Option(10, "--limit", "-n", help="Show top N props"),
    json_output: bool = typer.Option(False, "--json", help="Machine-readable JSON output"),
):
    """Rank player props by best-price edge over the cross-book average."""
    settings = get_settings()
    sport_config = _resolve_sports([sport])[0]
    cache = FeedCache(settings.cache_dir) if settings.cache_enabled else None
    try:
        collected = run_sync(collect_props(sport_config, settings=settings, cache=cache))
    finally:
        if cache:
            cache.close()

    opportunities = analyze_props(collected["props"], top_n=limit)

    if json_output:
        _print_json(
            {
                "props": [
                    {**asdict(o), "description": o.description}
                    for o in opportunities
                ],
                "errors": collected["errors"],
            }
        )
        return

    console.print(format_props_table(opportunities))
    _print_errors(collected["errors"])


@cli.command()
def analytics(
    days: int = typer.Option(30, "--days", "-d", help="Lookback window in days"),
    json_output: bool = typer.Option(False, "--json", help="Machine-readable JSON output"),
):
    """Summarize picks recorded by previous scans."""
    settings = get_settings()
    history = DiskPickHistory(settings.history_dir)
    try:
        summary = summarize_picks(history.list_records(), days=days)
    finally:
        history.close()

    if json_output:
        _print_json(summary.to_dict())
        return

    console.print(format_analytics_table(summary))


@cli.command()
def version():
    """Show version and configuration info."""
    settings = get_settings()
    console.print(f"[bold cyan]EdgeBet Agent[/bold cyan] v{__version__}")
    console.print()
    console.print("[bold]Configuration:[/bold]")
    console.print(
        f"  Odds API: {'✓ configured' if settings.odds_api_key else '✗ missing EDGEBET_ODDS_API_KEY'}"
    )
    console.print(
        f"  Injury feed: {'✓ configured' if settings.sportsdata_api_key else '✗ disabled (no EDGEBET_SPORTSDATA_API_KEY)'}"
    )
    console.print(f"  Sports: {', '.join(s.label for s in settings.sports)}")
    console.print(f"  Sharp books: {', '.join(sorted(settings.sharp_books))}")
    console.print(f"  Cache: {'enabled' if settings.cache_enabled else 'disabled'} ({settings.cache_dir})")


def main():
    """Entry point for CLI."""
    configure_logging(get_settings().log_mode)
    cli()


if __name__ == "__main__":
    main()
