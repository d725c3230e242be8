"""Availability Report Builder"""

from typing import Optional, Sequence

from .result import AvailabilityReport, MatchResult, MatchStats


def format_match_rate(matched: int, total: int) -> str:
    """Percentage with two decimals; "0.00" when total is zero"""
    if total <= 0:
        return "0.00"
    return f"{matched / total * 100:.2f}"


def build_report(
    results: Sequence[MatchResult],
    total_external: int,
    total_catalog_seen: int,
    unmatched_count: int,
    *,
    warning: Optional[str] = None,
    pages_fetched: int = 0,
) -> AvailabilityReport:
    """Assemble match results and summary statistics

    Args:
        results: match results in emission order
        total_external: distinct external products submitted
        total_catalog_seen: catalog products examined
        unmatched_count: external products left without a match
        warning: upstream error that cut pagination short, if any
        pages_fetched: catalog pages consumed

    Returns:
        AvailabilityReport
    """
    stats = MatchStats(
        total_external_products=total_external,
        total_catalog_products=total_catalog_seen,
        matched_products=len(results),
        unmatched_products=unmatched_count,
        match_rate=format_match_rate(len(results), total_external),
    )
    return AvailabilityReport(
        results=list(results),
        stats=stats,
        success=True,
        partial=warning is not None,
        warning=warning,
        pages_fetched=pages_fetched,
    )
