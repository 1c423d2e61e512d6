"""Consensus scorer: combine per-agent signals into ranked picks.

Every value pick is a candidate. Its composite score is the sum of capped
contributions from the other agents:

    value edge          min(edge * 4.5, 35)
    line movement       strong 20 / moderate 12 / weak 6
    public contrarian   public% > 68: 20, > 60: 13, else 7
    sharp money         strong 22 / moderate 13 / weak 7, +5 on RLM
    injury penalty      high_impact -15 / check_reports -10
    situational         strong 15 / moderate 9 / weak 5

Confidence maps the score into 55-90; candidates below 65 confidence or
3.5 displayed edge are dropped before ranking.
"""

import math
from dataclasses import dataclass, field

from edgebet_agent.agents.analysis_agent.injury import assess_injury_risk
from edgebet_agent.agents.analysis_agent.line_movement import detect_line_movement
from edgebet_agent.agents.analysis_agent.public_money import detect_public_money
from edgebet_agent.agents.analysis_agent.sharp_money import detect_sharp_money
from edgebet_agent.agents.analysis_agent.signals import (
    InjuryAssessment,
    LineImpact,
    LineMovementSignal,
    PublicMoneySignal,
    SharpMoneySignal,
    SituationalEdge,
    Strength,
    ValuePick,
)
from edgebet_agent.agents.analysis_agent.situational import find_situational_edges
from edgebet_agent.agents.analysis_agent.value import find_value_picks
from edgebet_agent.agents.analysis_agent.vig_removal import round_half_up
from edgebet_agent.agents.lines_agent.models import NormalizedGame
from edgebet_agent.monitoring import get_logger

log = get_logger()

VALUE_EDGE_MULTIPLIER = 4.5
VALUE_CAP = 35
LINE_MOVEMENT_POINTS = {Strength.STRONG: 20, Strength.MODERATE: 12, Strength.WEAK: 6}
SHARP_MONEY_POINTS = {Strength.STRONG: 22, Strength.MODERATE: 13, Strength.WEAK: 7}
RLM_BONUS = 5
SITUATIONAL_POINTS = {Strength.STRONG: 15, Strength.MODERATE: 9, Strength.WEAK: 5}
INJURY_PENALTY = {LineImpact.HIGH_IMPACT: -15, LineImpact.CHECK_REPORTS: -10, LineImpact.NONE: 0}

MIN_CONFIDENCE = 55
MAX_CONFIDENCE = 90
MAX_DISPLAY_EDGE = 14
EDGE_DISPLAY_FACTOR = 0.88

# Admission gate
GATE_CONFIDENCE = 65
GATE_EDGE = 3.5

DEFAULT_TOP_N = 10


@dataclass(frozen=True)
class GameSignals:
    """Every agent's output for one game."""

    value: list[ValuePick]
    line_movement: list[LineMovementSignal]
    public_money: list[PublicMoneySignal]
    sharp_money: list[SharpMoneySignal]
    injury: InjuryAssessment
    situational: list[SituationalEdge]


def collect_signals(game: NormalizedGame) -> GameSignals:
    """Run the six signal agents over one game."""
    return GameSignals(
        value=find_value_picks(game),
        line_movement=detect_line_movement(game),
        public_money=detect_public_money(game),
        sharp_money=detect_sharp_money(game),
        injury=assess_injury_risk(game),
        situational=find_situational_edges(game),
    )


@dataclass(frozen=True)
class ModelBreakdown:
    """Per-agent summary strings shown with each pick."""

    value: str
    line_movement: str
    public_money: str
    sharp_action: str
    injury_report: str
    situational: str
    best_book: str


@dataclass
class Candidate:
    """A value pick that passed the admission gate, not yet ranked."""

    game: NormalizedGame
    value_pick: ValuePick
    score: float
    confidence: int
    edge: float
    breakdown: ModelBreakdown
    order: int = 0


@dataclass(frozen=True)
class Pick:
    """An emitted, ranked recommendation.

    Attributes:
        id: Deterministic ``{game_id}_{rank}``
        rank: 1-based position in the ranking
        sport: Sport label
        emoji: Sport emoji
        game: Display game string
        game_id: Stable game identifier
        team: Team the bet is on
        bet: Bet description
        bet_type: "spread" or "moneyline"
        odds: Formatted American odds of the best price
        confidence: 55-90
        edge: Displayed edge percentage (0-14, one decimal)
        score: Raw composite score
        commence_time: ISO-8601 game start
        model_breakdown: Per-agent summary
    """

    id: str
    rank: int
    sport: str
    emoji: str
    game: str
    game_id: str
    team: str
    bet: str
    bet_type: str
    odds: str
    confidence: int
    edge: float
    score: float
    commence_time: str
    model_breakdown: ModelBreakdown = field(compare=False)


def _matching_public(pick: ValuePick, signals: GameSignals) -> PublicMoneySignal | None:
    return next((p for p in signals.public_money if p.market == pick.market), None)


def _matching_sharp(pick: ValuePick, signals: GameSignals) -> SharpMoneySignal | None:
    return next(
        (
            s
            for s in signals.sharp_money
            if s.sharp_side == pick.team or (s.public_side is not None and s.public_side != pick.team)
        ),
        None,
    )


def public_points(public_pct: int) -> int:
    if public_pct > 68:
        return 20
    if public_pct > 60:
        return 13
    return 7


def score_candidate(pick: ValuePick, signals: GameSignals) -> float:
    """Composite score for one value pick against its game's signals."""
    score = min(pick.edge * VALUE_EDGE_MULTIPLIER, VALUE_CAP)

    line_match = next((l for l in signals.line_movement if l.side == pick.team), None)
    if line_match:
        score += LINE_MOVEMENT_POINTS[line_match.strength]

    public = _matching_public(pick, signals)
    if public and public.contrarian_side == pick.team:
        score += public_points(public.public_pct)

    sharp = _matching_sharp(pick, signals)
    if sharp:
        score += SHARP_MONEY_POINTS[sharp.strength]
        if sharp.rlm_detected:
            score += RLM_BONUS

    score += INJURY_PENALTY[signals.injury.line_impact]

    situational = next((s for s in signals.situational if s.side == pick.team), None)
    if situational:
        score += SITUATIONAL_POINTS[situational.strength]

    return score


def confidence_from_score(score: float) -> int:
    """Map a composite score into the 55-90 confidence band.

    Examples:
        >>> confidence_from_score(0)
        55
        >>> confidence_from_score(97)
        83
    """
    return min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, round_half_up(score * 0.65 + 20)))


def display_edge(edge: float) -> float:
    """Shrink and clamp the raw edge for display (one decimal, 0-14)."""
    return max(0.0, min(float(MAX_DISPLAY_EDGE), round(edge * EDGE_DISPLAY_FACTOR, 1)))


def value_grade(edge: float) -> str:
    if edge >= 9:
        return "A"
    if edge >= 7:
        return "A-"
    return "B+"


def build_breakdown(pick: ValuePick, signals: GameSignals, edge: float) -> ModelBreakdown:
    """Summarize each agent's view for display alongside a pick."""
    public = _matching_public(pick, signals)
    if signals.sharp_money:
        sharp_action = "RLM detected" if signals.sharp_money[0].rlm_detected else "Active"
    else:
        sharp_action = "Quiet"

    return ModelBreakdown(
        value=f"{value_grade(edge)}: {edge:.1f}% edge",
        line_movement=signals.line_movement[0].strength.value if signals.line_movement else "stable",
        public_money=f"~{public.public_pct}% on {public.public_side}" if public else "Even",
        sharp_action=sharp_action,
        injury_report=signals.injury.summary,
        situational=signals.situational[0].edge if signals.situational else "Standard",
        best_book=pick.book,
    )


def build_candidates(game: NormalizedGame, signals: GameSignals | None = None) -> list[Candidate]:
    """Score every value pick in a game and apply the admission gate.

    Args:
        game: Normalized game
        signals: Precomputed signals (computed from ``game`` if omitted)

    Returns:
        Candidates with confidence >= 65 and displayed edge >= 3.5, in
        value-pick order. Picks with a non-finite score are skipped.
    """
    signals = signals or collect_signals(game)
    candidates: list[Candidate] = []

    for pick in signals.value:
        score = score_candidate(pick, signals)
        if not math.isfinite(score):
            log.warning("candidate_score_not_finite", game_id=game.game_id, bet=pick.bet)
            continue

        confidence = confidence_from_score(score)
        edge = display_edge(pick.edge)
        if confidence < GATE_CONFIDENCE or edge < GATE_EDGE:
            continue

        candidates.append(
            Candidate(
                game=game,
                value_pick=pick,
                score=score,
                confidence=confidence,
                edge=edge,
                breakdown=build_breakdown(pick, signals, edge),
            )
        )

    return candidates


def rank_candidates(candidates: list[Candidate], top_n: int = DEFAULT_TOP_N) -> list[Pick]:
    """Order candidates and emit the top N as picks.

    Ordering: score descending, then raw value edge descending, then earlier
    commence time, then the order candidates were supplied in.
    """
    for index, candidate in enumerate(candidates):
        candidate.order = index

    ordered = sorted(
        candidates,
        key=lambda c: (-c.score, -c.value_pick.edge, c.game.commence_time, c.order),
    )

    picks: list[Pick] = []
    for rank, candidate in enumerate(ordered[:top_n], start=1):
        game = candidate.game
        value_pick = candidate.value_pick
        picks.append(
            Pick(
                id=f"{game.game_id}_{rank}",
                rank=rank,
                sport=game.sport,
                emoji=game.emoji,
                game=game.game,
                game_id=game.game_id,
                team=value_pick.team,
                bet=value_pick.bet,
                bet_type=value_pick.market,
                odds=value_pick.odds_display,
                confidence=candidate.confidence,
                edge=candidate.edge,
                score=candidate.score,
                commence_time=game.commence_time.isoformat(),
                model_breakdown=candidate.breakdown,
            )
        )
    return picks
