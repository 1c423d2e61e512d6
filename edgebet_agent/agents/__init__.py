"""Agents package for multi-sport betting analysis.

Contains specialized agents for different aspects of a scan:
- lines_agent: Fetches and normalizes odds from sportsbooks
- injury_agent: Fetches injury reports and matches them to games
- analysis_agent: Signal agents, consensus ranking, arbitrage and props
"""
