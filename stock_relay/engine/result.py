"""Match Result - Standardized result format

Result types shared by the matcher, the report builder and the API layer.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class MatchResult:
    """One external product bound to one catalog product

    Attributes:
        external_product: caller-supplied entry, echoed as-is
        catalog_product: trimmed projection {id, title, variants, images}
        available_quantity: sum of variant inventory_quantity
    """

    external_product: dict[str, Any]
    catalog_product: dict[str, Any]
    available_quantity: Union[int, float]

    def to_dict(self) -> dict[str, Any]:
        return {
            "externalProduct": self.external_product,
            "catalogProduct": self.catalog_product,
            "availableQuantity": self.available_quantity,
        }


@dataclass(frozen=True)
class MatchStats:
    """Summary counters of one availability run"""

    total_external_products: int
    total_catalog_products: int
    matched_products: int
    unmatched_products: int
    match_rate: str  # percentage, two decimals


@dataclass
class AvailabilityReport:
    """Availability lookup outcome

    partial/warning are set when pagination stopped early after at least
    one page; results and stats then cover the consumed pages only.
    """

    results: list[MatchResult]
    stats: MatchStats
    success: bool = True
    partial: bool = False
    warning: Optional[str] = None
    pages_fetched: int = 0
