"""EdgeBet Agent - multi-signal sports betting odds analysis."""

__version__ = "3.0.0"
