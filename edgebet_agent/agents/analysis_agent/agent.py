"""Analysis Agent - scores a normalized slate into ranked picks.

Entry points:
- scan_games: pure scoring pass over normalized games (picks + arbitrage)
- analysis_agent_impl: LangGraph node producing ranked picks
- arbitrage_agent_impl: LangGraph node producing arbitrage opportunities

A fault while scoring one game skips that game and records an error; the
rest of the slate is still scored.
"""

import time
from dataclasses import asdict, dataclass, field

from edgebet_agent.agents.analysis_agent.arbitrage import ArbitrageOpportunity, detect_arbitrage
from edgebet_agent.agents.analysis_agent.consensus import (
    DEFAULT_TOP_N,
    Candidate,
    Pick,
    build_candidates,
    rank_candidates,
)
from edgebet_agent.agents.injury_agent.matching import attach_injuries
from edgebet_agent.agents.lines_agent.models import NormalizedGame
from edgebet_agent.config import get_settings
from edgebet_agent.monitoring import get_logger

log = get_logger()


@dataclass
class ScanResult:
    """Output of one scan.

    Attributes:
        picks: Ranked picks, best first
        arbitrage: Arbitrage opportunities, most profitable first
        errors: Error/warning messages from every stage
        games_analyzed: Number of games scored without error
    """

    picks: list[Pick] = field(default_factory=list)
    arbitrage: list[ArbitrageOpportunity] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    games_analyzed: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def score_games(games: list[NormalizedGame], top_n: int = DEFAULT_TOP_N) -> tuple[list[Pick], list[str], int]:
    """Score each game in isolation and rank the pooled candidates.

    Returns:
        Tuple of (picks, errors, games scored successfully)
    """
    candidates: list[Candidate] = []
    errors: list[str] = []
    analyzed = 0

    for game in games:
        try:
            candidates.extend(build_candidates(game))
            analyzed += 1
        except Exception as e:
            log.warning("game_scoring_failed", game_id=game.game_id, error=str(e))
            errors.append(f"Analysis Agent: {game.game} skipped ({type(e).__name__}: {e})")

    return rank_candidates(candidates, top_n=top_n), errors, analyzed


def scan_games(
    games: list[NormalizedGame],
    top_n: int = DEFAULT_TOP_N,
    arbitrage_limit: int | None = None,
) -> ScanResult:
    """Run the full scoring pass and arbitrage detection over a slate.

    Deterministic: the same games always produce the same result.

    Args:
        games: Normalized games
        top_n: Maximum picks to emit
        arbitrage_limit: Maximum arbitrage opportunities to keep (None = all)

    Returns:
        ScanResult with picks, arbitrage and per-game errors
    """
    start_time = time.perf_counter()

    picks, errors, analyzed = score_games(games, top_n=top_n)

    arbitrage = detect_arbitrage(games)
    if arbitrage_limit is not None:
        arbitrage = arbitrage[:arbitrage_limit]

    log.info(
        "scan_scored",
        games=len(games),
        games_analyzed=analyzed,
        picks=len(picks),
        arbitrage=len(arbitrage),
        duration_ms=int((time.perf_counter() - start_time) * 1000),
    )
    return ScanResult(picks=picks, arbitrage=arbitrage, errors=errors, games_analyzed=analyzed)


def _games_with_injuries(state: dict) -> list[NormalizedGame]:
    reports = state.get("injury_reports") or {}
    games = state.get("games") or []
    if not reports:
        return games
    return [attach_injuries(game, reports.get(game.sport, [])) for game in games]


def analysis_agent_impl(state: dict) -> dict:
    """Analysis Agent node: attach injuries, score, rank.

    Args:
        state: Workflow state (reads ``games``, ``injury_reports``, ``top_n``)

    Returns:
        Partial state update with ``picks`` and ``errors``
    """
    settings = get_settings()
    games = _games_with_injuries(state)
    if not games:
        log.warning("analysis_agent_no_games")
        return {"picks": [], "errors": []}

    picks, errors, analyzed = score_games(games, top_n=state.get("top_n") or settings.top_n)
    log.info("analysis_agent_completed", games_analyzed=analyzed, picks=len(picks))
    return {"picks": picks, "errors": errors}


def arbitrage_agent_impl(state: dict) -> dict:
    """Arbitrage node: detect cross-book arbitrage on the raw slate."""
    settings = get_settings()
    games = state.get("games") or []
    try:
        arbitrage = detect_arbitrage(games)[: settings.arbitrage_limit]
    except Exception as e:
        log.warning("arbitrage_agent_failed", error=str(e))
        return {"arbitrage": [], "errors": [f"Arbitrage Agent: {type(e).__name__}: {e}"]}
    return {"arbitrage": arbitrage, "errors": []}
