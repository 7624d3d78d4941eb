"""
Tests collection grid binding — states, slug/id equivalence, sorting, failure handling
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from page_builder.binding import (
    Category, MemoryCatalogSource, Product, fetch_block_data, fetch_collection_products, sort_products,
)
from page_builder.blocks import Block
from page_builder.core import CollectionContext


def _product(pid, name, price, day=None, **kw):
    return Product(
        id=pid, name=name, price=Decimal(price),
        created_at=datetime(2024, 1, day) if day else None, **kw,
    )


@pytest.fixture
def products():
    return [
        _product("p1", "Beta",  "20.00", day=1),
        _product("p2", "Alpha", "10.00", day=3),
        _product("p3", "Gamma", "10.00", day=2),
    ]


@pytest.fixture
def source(products):
    return MemoryCatalogSource(
        products=products,
        categories=[Category(id="c1", name="Shoes", slug="shoes")],
        collections={"summer": "col-1", "empty": "col-2"},
        memberships={"col-1": {"p1", "p2", "p3"}, "col-2": set()},
    )


# ── Sorting ────────────────────────────────────────────────────────────────

class TestSortProducts:
    def test_newest_default(self, products):
        assert [p.id for p in sort_products(products)] == ["p2", "p3", "p1"]

    def test_price_low_is_stable(self, products):
        # p2 and p3 tie on price and keep fetch order
        assert [p.id for p in sort_products(products, "price-low")] == ["p2", "p3", "p1"]

    def test_price_high_is_stable(self, products):
        assert [p.id for p in sort_products(products, "price-high")] == ["p1", "p2", "p3"]

    def test_price_high_ties_keep_fetch_order(self, products):
        reordered = [products[2], products[1], products[0]]
        assert [p.id for p in sort_products(reordered, "price-high")] == ["p1", "p3", "p2"]

    def test_name(self, products):
        assert [p.name for p in sort_products(products, "name")] == ["Alpha", "Beta", "Gamma"]

    def test_unknown_key_is_newest(self, products):
        assert sort_products(products, "random") == sort_products(products, "newest")

    def test_undated_last(self, products):
        undated = _product("p0", "Zero", "1.00")
        result = sort_products([undated] + products)
        assert result[-1].id == "p0"

    def test_naive_and_aware_timestamps_compare(self):
        naive = Product(id="n", name="N", price=Decimal("1"), created_at=datetime(2024, 1, 1))
        aware = Product(id="a", name="A", price=Decimal("1"), created_at=datetime(2024, 1, 2, tzinfo=timezone.utc))
        assert [p.id for p in sort_products([naive, aware])] == ["a", "n"]


# ── Collection products ────────────────────────────────────────────────────

class TestFetchCollectionProducts:
    def test_no_context_is_placeholder(self, source):
        assert fetch_collection_products(source, None).state == "placeholder"
        assert fetch_collection_products(source, CollectionContext()).state == "placeholder"

    def test_placeholder_issues_no_query(self):
        src = MagicMock()
        assert fetch_collection_products(src, CollectionContext()).state == "placeholder"
        assert src.method_calls == []

    def test_no_source_is_placeholder(self):
        ctx = CollectionContext(collection_id="col-1")
        assert fetch_collection_products(None, ctx).state == "placeholder"

    def test_by_id(self, source):
        data = fetch_collection_products(source, CollectionContext(collection_id="col-1"))
        assert data.state == "ready"
        assert [p.id for p in data.products] == ["p2", "p3", "p1"]

    def test_slug_equivalent_to_id(self, source):
        by_id = fetch_collection_products(source, CollectionContext(collection_id="col-1"), "name")
        by_slug = fetch_collection_products(source, CollectionContext(collection_slug="summer"), "name")
        assert by_id == by_slug

    def test_unknown_slug_is_empty(self, source):
        assert fetch_collection_products(source, CollectionContext(collection_slug="nope")).state == "empty"

    def test_no_members_is_empty(self, source):
        assert fetch_collection_products(source, CollectionContext(collection_id="col-2")).state == "empty"

    def test_members_without_records_is_empty(self):
        src = MemoryCatalogSource(memberships={"c": {"ghost"}})
        assert fetch_collection_products(src, CollectionContext(collection_id="c")).state == "empty"

    def test_id_skips_slug_lookup(self):
        src = MagicMock()
        src.list_collection_product_ids.return_value = []
        fetch_collection_products(src, CollectionContext(collection_id="c", collection_slug="s"))
        src.find_collection_id.assert_not_called()

    def test_source_failure_is_error(self):
        src = MagicMock()
        src.list_collection_product_ids.side_effect = RuntimeError("db down")
        data = fetch_collection_products(src, CollectionContext(collection_id="c"))
        assert data.state == "error"
        assert data.products == []

    def test_mixed_timestamps_ready(self):
        src = MemoryCatalogSource(
            products=[
                Product(id="a", name="A", price=Decimal("1"), created_at=datetime(2024, 1, 1)),
                Product(id="b", name="B", price=Decimal("1"), created_at=datetime(2024, 1, 2, tzinfo=timezone.utc)),
            ],
            memberships={"c": {"a", "b"}},
        )
        data = fetch_collection_products(src, CollectionContext(collection_id="c"))
        assert data.state == "ready"
        assert [p.id for p in data.products] == ["b", "a"]

    def test_sort_failure_is_error(self, source):
        with patch("page_builder.binding.collection.sort_products", side_effect=TypeError("bad key")):
            data = fetch_collection_products(source, CollectionContext(collection_id="col-1"))
        assert data.state == "error"


# ── Per-kind dispatch ──────────────────────────────────────────────────────

class TestFetchBlockData:
    def test_collection_grid_uses_sort_key(self, source):
        block = Block(id="b", type="collection-grid", content={"sortBy": "price-high"})
        data = fetch_block_data(block, source, CollectionContext(collection_id="col-1"))
        assert [p.id for p in data.products] == ["p1", "p2", "p3"]

    def test_category_grid(self, source):
        data = fetch_block_data(Block(id="b", type="category-grid"), source)
        assert data.state == "ready"
        assert data.categories[0].slug == "shoes"

    def test_product_grid_featured(self):
        src = MemoryCatalogSource(products=[
            _product("a", "A", "1", featured=True), _product("b", "B", "1"),
        ])
        data = fetch_block_data(Block(id="b", type="product-grid", content={"limit": 4}), src)
        assert [p.id for p in data.products] == ["a"]

    def test_product_grid_nothing_featured(self):
        data = fetch_block_data(Block(id="b", type="product-grid"), MemoryCatalogSource())
        assert data.state == "empty"

    def test_static_kind_has_no_data(self, source):
        assert fetch_block_data(Block(id="b", type="text"), source) is None

    def test_category_failure_is_error(self):
        src = MagicMock()
        src.list_categories.side_effect = RuntimeError("boom")
        assert fetch_block_data(Block(id="b", type="category-grid"), src).state == "error"
