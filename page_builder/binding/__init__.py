"""Catalogue binding — read model, source protocol, per-block fetches."""
from .source import BlockData, BlockState, CatalogSource, Category, Product
from .collection import (
    SORT_KEYS,
    fetch_block_data,
    fetch_categories,
    fetch_collection_products,
    fetch_featured_products,
    sort_products,
)
from .memory import MemoryCatalogSource
from .resolver import resolve_blocks

__all__ = [
    "BlockData", "BlockState", "CatalogSource", "Category", "Product",
    "SORT_KEYS", "fetch_block_data", "fetch_categories", "fetch_collection_products",
    "fetch_featured_products", "sort_products",
    "MemoryCatalogSource", "resolve_blocks",
]
