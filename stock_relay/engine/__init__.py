"""Engine Layer - product availability matching

This module provides the availability engine:
- AvailabilityOrchestrator: walks catalog pages into a MatchSession
- MatchSession: per-request greedy matcher state
- build_report: match results + statistics
- MatchResult / MatchStats / AvailabilityReport: result types
"""

from .matcher import MatchSession, available_quantity, build_lookup, match, normalize_key
from .orchestrator import AvailabilityOrchestrator
from .report import build_report, format_match_rate
from .result import AvailabilityReport, MatchResult, MatchStats

__all__ = [
    "AvailabilityOrchestrator",
    "MatchSession",
    "MatchResult",
    "MatchStats",
    "AvailabilityReport",
    "available_quantity",
    "build_lookup",
    "build_report",
    "format_match_rate",
    "match",
    "normalize_key",
]
