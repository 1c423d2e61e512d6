"""Rich table formatters for picks, arbitrage, props and analytics.

Formats scan output into terminal tables with color-coded confidence and
a detail panel for the per-agent breakdown.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from edgebet_agent.agents.analysis_agent.arbitrage import ArbitrageOpportunity
from edgebet_agent.agents.analysis_agent.consensus import Pick
from edgebet_agent.agents.analysis_agent.props import PropOpportunity
from edgebet_agent.agents.lines_agent.normalizer import format_point
from edgebet_agent.cli.filters import get_filter_summary
from edgebet_agent.history.analytics import AnalyticsSummary


def format_picks_table(picks: list[Pick], active_filters: dict | None = None) -> Table:
    """Format ranked picks as a Rich table (already in rank order)."""
    caption = None
    if active_filters:
        summary = get_filter_summary(active_filters)
        if summary:
            caption = f"Filters: {summary}"

    table = Table(
        title="Consensus Picks",
        caption=caption,
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("Rank", justify="right", style="dim", width=4)
    table.add_column("Sport", justify="left")
    table.add_column("Game", justify="left", style="white", no_wrap=True)
    table.add_column("Bet", justify="left", style="yellow")
    table.add_column("Odds", justify="right", style="magenta")
    table.add_column("Edge", justify="right", style="bold green")
    table.add_column("Confidence", justify="center")
    table.add_column("Best Book", justify="left", style="cyan")

    if not picks:
        table.add_row("", "", "[dim]No picks passed the consensus gate[/dim]", "", "", "", "", "")
        return table

    for pick in picks:
        table.add_row(
            str(pick.rank),
            f"{pick.emoji} {pick.sport}",
            pick.game,
            pick.bet,
            pick.odds,
            f"{pick.edge:.1f}%",
            _format_confidence(pick.confidence),
            pick.model_breakdown.best_book,
        )

    return table


def format_pick_detail(pick: Pick) -> Panel:
    """Detailed per-agent breakdown for one pick."""
    breakdown = pick.model_breakdown
    lines = [
        f"[bold white]{pick.game}[/bold white]",
        f"Bet: [yellow]{pick.bet}[/yellow] ({pick.bet_type}) at [magenta]{pick.odds}[/magenta]",
        f"Confidence: {_format_confidence(pick.confidence)}  Edge: [green]{pick.edge:.1f}%[/green]",
        "",
        "[bold]Model Breakdown:[/bold]",
        f"  Value: {breakdown.value}",
        f"  Line Movement: {breakdown.line_movement}",
        f"  Public Money: {breakdown.public_money}",
        f"  Sharp Action: {breakdown.sharp_action}",
        f"  Injury Report: {breakdown.injury_report}",
        f"  Situational: {breakdown.situational}",
        f"  Best Book: [cyan]{breakdown.best_book}[/cyan]",
    ]
    return Panel(
        "\n".join(lines),
        title=f"[bold]#{pick.rank} {pick.bet}[/bold]",
        border_style="green" if pick.confidence >= 75 else "yellow",
    )


def format_arbitrage_table(opportunities: list[ArbitrageOpportunity]) -> Table:
    """Format arbitrage opportunities (most profitable first)."""
    table = Table(title="Arbitrage Opportunities", show_header=True, header_style="bold cyan")

    table.add_column("Sport", justify="left")
    table.add_column("Game", justify="left", no_wrap=True)
    table.add_column("Type", justify="center", style="yellow")
    table.add_column("Away Leg", justify="left")
    table.add_column("Home Leg", justify="left")
    table.add_column("Profit", justify="right", style="bold green")
    table.add_column("Stakes (away/home)", justify="right")

    if not opportunities:
        table.add_row("", "[dim]No arbitrage found[/dim]", "", "", "", "", "")
        return table

    for opp in opportunities:
        table.add_row(
            opp.sport,
            opp.game,
            opp.type,
            _format_leg(opp.away_book, opp.away_odds, opp.away_line),
            _format_leg(opp.home_book, opp.home_odds, opp.home_line),
            f"{opp.profit:.2f}%",
            f"{opp.away_stake:.2f} / {opp.home_stake:.2f}",
        )

    return table


def format_props_table(opportunities: list[PropOpportunity]) -> Table:
    """Format ranked player props."""
    table = Table(title="Player Props", show_header=True, header_style="bold cyan")

    table.add_column("Game", justify="left", no_wrap=True)
    table.add_column("Prop", justify="left", style="yellow")
    table.add_column("Best Odds", justify="right", style="magenta")
    table.add_column("Books", justify="right")
    table.add_column("Edge", justify="right", style="bold green")
    table.add_column("Confidence", justify="center")
    table.add_column("Best Book", justify="left", style="cyan")

    if not opportunities:
        table.add_row("[dim]No props quoted by two or more books[/dim]", "", "", "", "", "", "")
        return table

    for opp in opportunities:
        table.add_row(
            opp.prop.game,
            opp.description,
            opp.best_odds,
            str(len(opp.prop.books)),
            f"{opp.edge:.1f}%",
            _format_confidence(round(opp.confidence)),
            opp.best_book,
        )

    return table


def format_analytics_table(summary: AnalyticsSummary) -> Table:
    """Format a pick-history summary."""
    table = Table(title=f"Pick Analytics (last {summary.days} days)", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value")

    table.add_row("Total Picks", str(summary.total_picks))
    table.add_row("Average Edge", f"{summary.avg_edge:.2f}%")
    table.add_row("High Confidence (75+)", str(summary.high_confidence_picks))
    for sport, count in sorted(summary.by_sport.items()):
        table.add_row(f"  {sport}", str(count))
    for agent, count in sorted(summary.by_agent.items()):
        table.add_row(f"  {agent} agent", str(count))

    return table


def render_to_text(*renderables) -> str:
    """Render Rich objects to a plain string."""
    console = Console(width=140, no_color=True)
    with console.capture() as capture:
        for renderable in renderables:
            console.print(renderable)
    return capture.get()


def _format_leg(book: str, odds: str, line: float | None) -> str:
    if line is None:
        return f"{book} {odds}"
    return f"{book} {format_point(line)} ({odds})"


def _format_confidence(confidence: int) -> str:
    """Color-code a 55-90 confidence score."""
    if confidence >= 80:
        return f"[bold green]{confidence}[/bold green]"
    elif confidence >= 70:
        return f"[yellow]{confidence}[/yellow]"
    else:
        return f"[dim]{confidence}[/dim]"
