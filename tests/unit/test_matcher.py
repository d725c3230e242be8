"""Product matcher unit tests (no network)"""

from __future__ import annotations

import pytest

from stock_relay.core.exceptions import ValidationException
from stock_relay.engine import MatchSession, available_quantity, build_lookup, match, normalize_key

from fixtures.catalog import catalog_product


class TestNormalization:
    def test_lowercase_and_trim_only(self):
        assert normalize_key("  Blue Shirt  ") == "blue shirt"
        # no accent folding, no punctuation stripping
        assert normalize_key("Caffè-Latte!") == "caffè-latte!"

    def test_lookup_keeps_insertion_order(self):
        lookup = build_lookup([{"name": "B"}, {"name": "A"}, {"name": "C"}])
        assert list(lookup) == ["b", "a", "c"]

    def test_duplicate_keys_last_write_wins(self):
        first = {"name": "Blue Shirt", "sku": "1"}
        second = {"name": "  blue shirt ", "sku": "2"}
        lookup = build_lookup([first, {"name": "Hat"}, second])

        assert list(lookup) == ["blue shirt", "hat"]
        assert lookup["blue shirt"] is second


class TestValidation:
    @pytest.mark.parametrize("products", [None, {}, "Blue Shirt", 42])
    def test_not_a_list(self, products):
        with pytest.raises(ValidationException) as exc_info:
            build_lookup(products)
        assert exc_info.value.error_code == "VALIDATION_ERROR"
        assert exc_info.value.details["field"] == "products"

    def test_empty_list(self):
        with pytest.raises(ValidationException, match="must not be empty"):
            build_lookup([])

    @pytest.mark.parametrize(
        "entry, field",
        [
            ({"sku": "x"}, "products[1].name"),
            ({"name": 5}, "products[1].name"),
            ({"name": "   "}, "products[1].name"),
            ("Blue Shirt", "products[1]"),
        ],
    )
    def test_entry_without_usable_name(self, entry, field):
        with pytest.raises(ValidationException) as exc_info:
            build_lookup([{"name": "ok"}, entry])
        assert exc_info.value.details["field"] == field
        assert field in exc_info.value.message


class TestAvailableQuantity:
    def test_sum_treats_null_as_zero(self):
        product = catalog_product(1, "Shirt", 3, None, 2)
        assert available_quantity(product) == 5

    def test_missing_inventory_field(self):
        product = {"id": 1, "title": "Shirt", "variants": [{"id": 1}, {"inventory_quantity": 4}]}
        assert available_quantity(product) == 4

    def test_no_variants(self):
        assert available_quantity({"id": 1, "title": "Shirt", "variants": []}) == 0
        assert available_quantity({"id": 1, "title": "Shirt"}) == 0
        assert available_quantity({"id": 1, "title": "Shirt", "variants": None}) == 0

    def test_negative_inventory_is_summed(self):
        # Shopify reports oversold variants as negative quantities
        assert available_quantity(catalog_product(1, "Shirt", 5, -2)) == 3


class TestMatching:
    def test_greedy_first_inserted_key_wins(self):
        session = MatchSession.from_products([{"name": "Blue Shirt"}, {"name": "Shirt"}])
        session.consume_page([catalog_product(1, "Blue Shirt Deluxe", 1)])

        assert len(session.results) == 1
        assert session.results[0].external_product["name"] == "Blue Shirt"
        assert list(session.remaining) == ["shirt"]

    def test_insertion_order_decides_not_fit(self):
        session = MatchSession.from_products([{"name": "Shirt"}, {"name": "Blue Shirt"}])
        session.consume_page([catalog_product(1, "Blue Shirt Deluxe", 1)])

        assert session.results[0].external_product["name"] == "Shirt"

    def test_early_catalog_product_steals_loose_match(self):
        results = match(
            [{"name": "Coat"}],
            [[catalog_product(1, "Raincoat Kids", 1)], [catalog_product(2, "Coat", 7)]],
        )
        assert len(results) == 1
        assert results[0].catalog_product["title"] == "Raincoat Kids"

    def test_bidirectional_containment(self):
        # external name longer than the catalog title
        results = match([{"name": "Wool Coat - Black XL"}], [[catalog_product(1, "Wool Coat", 2)]])
        assert len(results) == 1
        assert results[0].available_quantity == 2

    def test_case_and_whitespace_insensitive(self):
        results = match([{"name": "  LEATHER boots "}], [[catalog_product(1, "Leather Boots", 1)]])
        assert len(results) == 1

    def test_no_match_no_crash(self):
        session = MatchSession.from_products([{"name": "Blue Shirt"}])
        matched = session.consume_page([catalog_product(1, "Unrelated Item", 3)])

        assert matched == 0
        assert session.results == []
        assert session.unmatched_count == 1
        assert session.total_catalog_products_seen == 1

    def test_zero_variant_product_still_matches(self):
        product = {"id": 9, "title": "Blue Shirt", "variants": [], "images": []}
        results = match([{"name": "Blue Shirt"}], [[product]])

        assert len(results) == 1
        assert results[0].available_quantity == 0

    def test_external_product_matched_once(self):
        session = MatchSession.from_products([{"name": "Shirt"}])
        session.consume_page([
            catalog_product(1, "Shirt Red", 1),
            catalog_product(2, "Shirt Blue", 2),
        ])
        session.consume_page([catalog_product(3, "Shirt Green", 3)])

        assert len(session.results) == 1
        assert session.results[0].catalog_product["id"] == 1
        assert session.total_catalog_products_seen == 3

    def test_results_unique_per_external_key(self):
        products = [{"name": n} for n in ["Shirt", "Blue Shirt", "Coat", "Hat", "Scarf"]]
        pages = [
            [catalog_product(1, "Blue Shirt", 1), catalog_product(2, "Shirt", 1)],
            [catalog_product(3, "Winter Coat", 1), catalog_product(4, "Coat Hanger", 1)],
            [catalog_product(5, "Shirt XL", 1), catalog_product(6, "Hat", 1)],
        ]
        results = match(products, pages)
        keys = [normalize_key(r.external_product["name"]) for r in results]

        assert len(keys) == len(set(keys))

    def test_catalog_product_without_title_skipped(self):
        session = MatchSession.from_products([{"name": "Shirt"}])
        session.consume_page([{"id": 1, "variants": []}, {"id": 2, "title": None}])

        assert session.results == []
        assert session.total_catalog_products_seen == 2

    def test_blank_title_binds_first_key(self):
        session = MatchSession.from_products([{"name": "Shirt"}, {"name": "Hat"}])
        session.consume_page([{"id": 2, "title": "  ", "variants": []}])

        assert [r.external_product["name"] for r in session.results] == ["Shirt"]
        assert list(session.remaining) == ["hat"]

    def test_fractional_and_null_variants(self):
        product = {"id": 3, "title": "Shirt", "variants": [None, {"inventory_quantity": 2.5}, {"inventory_quantity": 2}]}
        results = match([{"name": "Shirt"}], [[product]])

        assert results[0].available_quantity == 4.5
        assert results[0].catalog_product["variants"] == product["variants"]

    def test_non_list_variants_projected_empty(self):
        results = match([{"name": "Shirt"}], [[{"id": 4, "title": "Shirt", "variants": {"bad": 1}, "images": None}]])

        assert results[0].available_quantity == 0
        assert results[0].catalog_product["variants"] == []
        assert results[0].catalog_product["images"] == []

    def test_catalog_projection_is_trimmed(self):
        product = catalog_product(1, "Blue Shirt", 2)
        product["body_html"] = "<p>long</p>"
        results = match([{"name": "Blue Shirt", "extra": "kept"}], [[product]])

        assert set(results[0].catalog_product) == {"id", "title", "variants", "images"}
        assert results[0].external_product == {"name": "Blue Shirt", "extra": "kept"}

    def test_lookup_only_shrinks(self):
        session = MatchSession.from_products([{"name": "A"}, {"name": "B"}, {"name": "C"}])
        sizes = [len(session.remaining)]
        for title in ["a", "zzz", "b"]:
            session.consume_page([catalog_product(1, title, 1)])
            sizes.append(len(session.remaining))

        assert sizes == sorted(sizes, reverse=True)
        assert list(session.remaining) == ["c"]
