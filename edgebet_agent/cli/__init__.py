"""CLI package for EdgeBet Agent.

The ``edgebet`` entry point lives in ``edgebet_agent.cli.main``; formatters
and filters are importable without pulling in the workflow graph.
"""
