"""LangGraph orchestration for the multi-agent scan."""

from edgebet_agent.graph.state import ScanState, initial_state
from edgebet_agent.graph.graph import build_graph, app, run_scan

__all__ = ["ScanState", "initial_state", "build_graph", "app", "run_scan"]
