"""
Catalogue binding for data-bound blocks.

Collection grid flow (same result whether the page was reached by id or slug):
  no id and no slug      → placeholder, nothing queried
  slug only              → slug → id lookup, unresolved → empty
  membership links       → none → empty
  product records        → sorted by the block's sort key → ready

Every source failure is caught here and logged; the block degrades to its
empty state and the host page keeps rendering.
"""
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from ..blocks import BlockKind, CategoryGridContent, CollectionGridContent, ProductGridContent
from ..blocks.base import Block
from ..core.context import CollectionContext
from .source import BlockData, CatalogSource, Product

log = logging.getLogger(__name__)

SORT_KEYS = ("newest", "price-low", "price-high", "name")


def sort_products(products: Iterable[Product], sort_by: str = "newest") -> List[Product]:
    """Stable single-key sort; equal keys keep fetch order."""
    items = list(products)
    if sort_by == "price-low":
        return sorted(items, key=lambda p: p.price)
    if sort_by == "price-high":
        return sorted(items, key=lambda p: p.price, reverse=True)
    if sort_by == "name":
        return sorted(items, key=lambda p: p.name)
    # newest first; undated products go last in fetch order
    dated   = [p for p in items if p.created_at is not None]
    undated = [p for p in items if p.created_at is None]
    return sorted(dated, key=lambda p: _utc(p.created_at), reverse=True) + undated


def _utc(ts: datetime) -> datetime:
    # naive timestamps are stored as UTC
    return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts


def fetch_collection_products(
    source: Optional[CatalogSource],
    collection: Optional[CollectionContext],
    sort_by: str = "newest",
) -> BlockData:
    if collection is None or not collection.is_live or source is None:
        return BlockData(state="placeholder")

    try:
        collection_id = collection.collection_id
        if not collection_id:
            collection_id = source.find_collection_id(collection.collection_slug)
        if not collection_id:
            log.info("Collection slug %r not found", collection.collection_slug)
            return BlockData(state="empty")

        product_ids = source.list_collection_product_ids(collection_id)
        if not product_ids:
            return BlockData(state="empty")

        products = source.get_products(list(product_ids))
        if not products:
            return BlockData(state="empty")
        return BlockData(state="ready", products=sort_products(products, sort_by))
    except Exception as e:
        log.warning("Collection products fetch failed (%s): %s",
                    collection.collection_id or collection.collection_slug, e)
        return BlockData(state="error")


def fetch_featured_products(source: Optional[CatalogSource], config: ProductGridContent) -> BlockData:
    if source is None:
        return BlockData(state="placeholder")
    try:
        products = source.list_featured_products(config.limit, config.featured_only)
    except Exception as e:
        log.warning("Featured products fetch failed: %s", e)
        return BlockData(state="error")
    return BlockData(state="ready" if products else "empty", products=products)


def fetch_categories(source: Optional[CatalogSource], config: CategoryGridContent) -> BlockData:
    if source is None:
        return BlockData(state="placeholder")
    try:
        categories = source.list_categories(config.limit)
    except Exception as e:
        log.warning("Categories fetch failed: %s", e)
        return BlockData(state="error")
    return BlockData(state="ready" if categories else "empty", categories=categories)


def fetch_block_data(
    block: Block,
    source: Optional[CatalogSource],
    collection: Optional[CollectionContext] = None,
) -> Optional[BlockData]:
    """Data for one block, None for kinds that do not query the catalogue."""
    kind = block.kind
    if kind == BlockKind.COLLECTION_GRID:
        config = CollectionGridContent.coerce(block.content)
        return fetch_collection_products(source, collection, config.sort_by)
    if kind == BlockKind.CATEGORY_GRID:
        return fetch_categories(source, CategoryGridContent.coerce(block.content))
    if kind == BlockKind.PRODUCT_GRID:
        return fetch_featured_products(source, ProductGridContent.coerce(block.content))
    return None
