"""Typed signals emitted by the per-game analysis agents.

Every agent is a pure function of one NormalizedGame. Signals are
immutable and live only for the duration of one scoring pass.
"""

from dataclasses import dataclass
from enum import Enum

from edgebet_agent.agents.lines_agent.normalizer import format_american_odds


class Strength(Enum):
    """Strength tier shared by line movement, sharp money and situational signals."""

    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"


class LineImpact(Enum):
    """Injury/anomaly classification used as a scoring penalty."""

    NONE = "none"
    CHECK_REPORTS = "check_reports"
    HIGH_IMPACT = "high_impact"


@dataclass(frozen=True)
class ValuePick:
    """Candidate bet where the best price beats the devigged consensus.

    Attributes:
        side: "home" or "away"
        team: Team name the bet is on
        bet: Bet description (e.g., "Miami Heat +6.5", "Miami Heat ML")
        odds: Best available American odds
        edge: True probability minus implied probability of the best price,
            in percentage points
        market: "spread" or "moneyline"
        book: Book offering the best price
    """

    side: str
    team: str
    bet: str
    odds: int
    edge: float
    market: str
    book: str

    @property
    def odds_display(self) -> str:
        return format_american_odds(self.odds)


@dataclass(frozen=True)
class LineMovementSignal:
    """Cross-book divergence on the spread.

    Attributes:
        kind: "line_range" (spread of away points across books) or
            "sharp_vs_square" (sharp books' mean vs square books' mean)
        side: Team the signal favors
        strength: Strength tier
        market: Always "spread"
        best_line: Most favorable away line (line_range only)
        best_book: Book offering best_line (line_range only)
        spread: Max minus min away point (line_range only)
        diff: Sharp mean minus square mean away point (sharp_vs_square only)
    """

    kind: str
    side: str
    strength: Strength
    market: str = "spread"
    best_line: str | None = None
    best_book: str | None = None
    spread: float | None = None
    diff: float | None = None


@dataclass(frozen=True)
class PublicMoneySignal:
    """Public side inferred from square-book juice.

    Attributes:
        market: Always "spread"
        public_side: Team with the heavier average juice
        public_pct: Calibrated public-betting percentage (55-80)
        contrarian_side: The other team
        contrarian_pct: 100 - public_pct
    """

    market: str
    public_side: str
    public_pct: int
    contrarian_side: str
    contrarian_pct: int


@dataclass(frozen=True)
class SharpMoneySignal:
    """Sharp action inferred from sharp/square divergence or juice imbalance.

    Attributes:
        kind: "RLM" or "juice_imbalance"
        sharp_side: Team sharp money is inferred on
        strength: Strength tier
        rlm_detected: True for reverse line movement
        market: Always "spread"
        public_side: Heavier-juiced team (juice_imbalance only)
        juice_diff: Absolute juice gap in percentage points (juice_imbalance only)
        description: Human-readable explanation
    """

    kind: str
    sharp_side: str
    strength: Strength
    rlm_detected: bool
    market: str = "spread"
    public_side: str | None = None
    juice_diff: float | None = None
    description: str = ""


@dataclass(frozen=True)
class InjuryFlag:
    """One injury or line-shape anomaly.

    Attributes:
        flag: Human-readable flag text
        severity: "high", "moderate" or "check"
        players: Players behind a feed-driven flag
    """

    flag: str
    severity: str
    players: tuple[str, ...] = ()


NO_INJURY_CONCERNS = "No significant injury concerns"


@dataclass(frozen=True)
class InjuryAssessment:
    """Injury/anomaly agent output for one game."""

    game: str
    flags: tuple[InjuryFlag, ...]
    line_impact: LineImpact

    @property
    def summary(self) -> str:
        return self.flags[0].flag if self.flags else NO_INJURY_CONCERNS


@dataclass(frozen=True)
class SituationalEdge:
    """Static spot-based edge.

    Attributes:
        edge: Edge name (e.g., "Road underdog spot")
        side: Team the edge favors
        bet_type: "spread" or "moneyline"
        strength: Strength tier
        note: Short rationale
        odds: American odds the edge refers to (moneyline edges only)
    """

    edge: str
    side: str
    bet_type: str
    strength: Strength
    note: str
    odds: int | None = None
