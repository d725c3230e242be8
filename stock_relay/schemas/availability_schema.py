"""Pydantic schemas - product availability"""
from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stock_relay.engine.result import AvailabilityReport, MatchResult


class CamelModel(BaseModel):
    """Serialized with camelCase keys (dashboard contract)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CatalogProductData(CamelModel):
    """Trimmed Shopify product"""
    id: Any = Field(None, description="Shopify product id")
    title: Optional[str] = Field(None, description="Shopify product title")
    variants: List[Any] = Field(default_factory=list, description="Variants as returned by Shopify")
    images: List[Any] = Field(default_factory=list, description="Images as returned by Shopify")


class MatchResultData(CamelModel):
    """External product bound to a catalog product"""
    external_product: dict[str, Any] = Field(..., description="Submitted product, echoed as-is")
    catalog_product: CatalogProductData
    available_quantity: Union[int, float] = Field(..., description="Sum of variant inventory_quantity")

    @classmethod
    def from_result(cls, result: MatchResult) -> "MatchResultData":
        return cls(
            external_product=result.external_product,
            catalog_product=CatalogProductData(**result.catalog_product),
            available_quantity=result.available_quantity,
        )


class AvailabilityStats(CamelModel):
    total_external_products: int
    total_catalog_products: int
    matched_products: int
    unmatched_products: int
    match_rate: str = Field(..., description="Matched percentage, 2 decimals")


class AvailabilityResponse(CamelModel):
    """Availability lookup response"""
    success: bool = True
    results: List[MatchResultData]
    stats: AvailabilityStats
    partial: bool = Field(False, description="True when pagination stopped early")
    warning: Optional[str] = Field(None, description="Upstream error that stopped pagination")

    @classmethod
    def from_report(cls, report: AvailabilityReport) -> "AvailabilityResponse":
        stats = report.stats
        return cls(
            success=report.success,
            results=[MatchResultData.from_result(r) for r in report.results],
            stats=AvailabilityStats(
                total_external_products=stats.total_external_products,
                total_catalog_products=stats.total_catalog_products,
                matched_products=stats.matched_products,
                unmatched_products=stats.unmatched_products,
                match_rate=stats.match_rate,
            ),
            partial=report.partial,
            warning=report.warning,
        )


class ErrorResponse(BaseModel):
    """Error body shared by every endpoint"""
    success: bool = False
    error: str
    error_code: Optional[str] = None
