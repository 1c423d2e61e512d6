"""Monitoring module for structured logging and observability.

Provides structlog configuration (JSON in production, console in
development), correlation ids for scans, and metrics dataclasses for
sportsbook coverage and feed cache performance.
"""

from edgebet_agent.monitoring.logging import (
    bind_correlation_id,
    configure_logging,
    get_logger,
    unbind_correlation_id,
)
from edgebet_agent.monitoring.metrics import CacheMetrics, SportsbookMetrics

__all__ = [
    "configure_logging",
    "get_logger",
    "bind_correlation_id",
    "unbind_correlation_id",
    "SportsbookMetrics",
    "CacheMetrics",
]
