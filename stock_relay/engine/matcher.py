"""Product Matcher - greedy substring matching of external names to catalog titles

Rules:
- keys are ``name.strip().lower()``; nothing else is normalized
- a catalog title binds to the FIRST remaining key (insertion order) where
  either string contains the other
- a bound key leaves the lookup immediately, so it never matches again
- not globally optimal: an early loose match wins over a later better one
"""

from __future__ import annotations

from numbers import Number
from typing import Any, Iterable, Optional, Union

from stock_relay.core.exceptions import ValidationException
from stock_relay.core.logging import logger

from .result import MatchResult


def normalize_key(text: str) -> str:
    """Case-insensitive, whitespace-trimmed identity key"""
    return text.strip().lower()


def build_lookup(products: Any) -> dict[str, dict[str, Any]]:
    """Build the ordered key -> external product lookup

    Later duplicates overwrite earlier ones but keep the first position.

    Args:
        products: request ``products`` value

    Returns:
        insertion-ordered dict of normalized name -> product

    Raises:
        ValidationException: not a list, empty, or an entry without a usable name
    """
    if products is None:
        raise ValidationException("products", "field is required")
    if not isinstance(products, list):
        raise ValidationException("products", "must be a list")
    if not products:
        raise ValidationException("products", "must not be empty")

    lookup: dict[str, dict[str, Any]] = {}
    for index, product in enumerate(products):
        if not isinstance(product, dict):
            raise ValidationException(f"products[{index}]", "must be an object")
        name = product.get("name")
        if not isinstance(name, str):
            raise ValidationException(f"products[{index}].name", "field is required and must be a string")
        key = normalize_key(name)
        if not key:
            raise ValidationException(f"products[{index}].name", "must not be blank")
        lookup[key] = product

    duplicates = len(products) - len(lookup)
    if duplicates:
        logger.warning(f"[MATCHER] {duplicates} duplicate product names collapsed (last one kept)")
    return lookup


def available_quantity(catalog_product: dict[str, Any]) -> Union[int, float]:
    """Sum of inventory_quantity over all variants (missing/null -> 0)"""
    total = 0
    for variant in _as_list(catalog_product.get("variants")):
        if not isinstance(variant, dict):
            continue
        quantity = variant.get("inventory_quantity")
        # bool is a Number subclass
        if isinstance(quantity, Number) and not isinstance(quantity, bool):
            total += quantity
    return total


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def project_catalog_product(catalog_product: dict[str, Any]) -> dict[str, Any]:
    """Trimmed catalog product exposed in results (variants/images echoed as returned)"""
    return {
        "id": catalog_product.get("id"),
        "title": catalog_product.get("title"),
        "variants": _as_list(catalog_product.get("variants")),
        "images": _as_list(catalog_product.get("images")),
    }


class MatchSession:
    """Per-request matching state

    Owns the shrinking lookup of unmatched external products, the result
    list and the running catalog counters. Never shared between requests.
    """

    def __init__(self, lookup: dict[str, dict[str, Any]]):
        self.remaining = lookup
        self.total_external = len(lookup)
        self.results: list[MatchResult] = []
        self.total_catalog_products_seen = 0
        self.pages_seen = 0

    @classmethod
    def from_products(cls, products: Any) -> "MatchSession":
        return cls(build_lookup(products))

    @property
    def unmatched_count(self) -> int:
        return len(self.remaining)

    def _find_key(self, title_key: str) -> Optional[str]:
        for key in self.remaining:
            if key in title_key or title_key in key:
                return key
        return None

    def match_product(self, catalog_product: dict[str, Any]) -> Optional[MatchResult]:
        """Bind one catalog product to the first compatible external key

        Returns:
            MatchResult, or None when no remaining key matches
        """
        title = catalog_product.get("title")
        if not isinstance(title, str):
            logger.debug(f"[MATCHER] Skipping catalog product without title: id={catalog_product.get('id')}")
            return None

        # a blank title is contained in every key, so it binds to the first one
        key = self._find_key(normalize_key(title))
        if key is None:
            return None

        external_product = self.remaining.pop(key)
        result = MatchResult(
            external_product=external_product,
            catalog_product=project_catalog_product(catalog_product),
            available_quantity=available_quantity(catalog_product),
        )
        self.results.append(result)
        return result

    def consume_page(self, page: Iterable[dict[str, Any]]) -> int:
        """Match every catalog product of one page, in catalog order

        Returns:
            number of new matches on this page
        """
        matched = 0
        for catalog_product in page:
            self.total_catalog_products_seen += 1
            if not isinstance(catalog_product, dict):
                continue
            if self.match_product(catalog_product) is not None:
                matched += 1
        self.pages_seen += 1
        return matched


def match(external_products: Any, catalog_pages: Iterable[Iterable[dict[str, Any]]]) -> list[MatchResult]:
    """Match external products against already-fetched catalog pages"""
    session = MatchSession.from_products(external_products)
    for page in catalog_pages:
        session.consume_page(page)
    return session.results
