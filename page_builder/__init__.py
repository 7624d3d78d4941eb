"""
Storefront page builder — block model, catalogue binding, composition, HTML rendering.

    >>> from page_builder import PageDocument, RenderContext, render_page
    >>> doc = PageDocument.from_record({"title": "About", "slug": "about",
    ...     "content": [{"id": "b1", "type": "text", "content": {"text": "<p>Hi</p>"}}]})
    >>> html = render_page(doc, RenderContext())
"""
from .blocks import (
    BLOCK_CONTENT,
    DATA_BOUND_KINDS,
    Block,
    BlockContent,
    BlockKind,
    CategoryGridContent,
    CollectionGridContent,
    ProductGridContent,
    content_model,
)
from .binding import (
    BlockData,
    CatalogSource,
    Category,
    MemoryCatalogSource,
    Product,
    fetch_collection_products,
    resolve_blocks,
    sort_products,
)
from .composition import Composition, compose_collection_page
from .core import (
    PRESET_THEMES,
    CollectionContext,
    GridLayout,
    PageTheme,
    RenderContext,
    SiteSettings,
    resolve_grid_layout,
)
from .document import TEMPLATE_SLUGS, PageDocument, duplicate_block_ids
from .editor import (
    BlockNotFound,
    BuilderHistory,
    add_block,
    duplicate_block,
    move_block,
    move_to_index,
    remove_block,
    update_block_content,
)
from .renderer import render_block, render_blocks, render_collection_page, render_page

__version__ = "0.3.0"

__all__ = [
    "BLOCK_CONTENT", "DATA_BOUND_KINDS", "Block", "BlockContent", "BlockKind",
    "CategoryGridContent", "CollectionGridContent", "ProductGridContent", "content_model",
    "BlockData", "CatalogSource", "Category", "MemoryCatalogSource", "Product",
    "fetch_collection_products", "resolve_blocks", "sort_products",
    "Composition", "compose_collection_page",
    "CollectionContext", "GridLayout", "RenderContext", "SiteSettings", "resolve_grid_layout",
    "PRESET_THEMES", "PageTheme",
    "TEMPLATE_SLUGS", "PageDocument", "duplicate_block_ids",
    "BlockNotFound", "BuilderHistory", "add_block", "duplicate_block", "move_block",
    "move_to_index", "remove_block", "update_block_content",
    "render_block", "render_blocks", "render_collection_page", "render_page",
]
