"""
Catalogue-driven blocks: featured product grid, category grid, collection grid.

These are the data-bound kinds; their content drives a read query against
the catalogue (see ``page_builder.binding``).
"""
from typing import Literal, Optional

from pydantic import Field

from .base import BlockContent

Columns     = Literal[2, 3, 4, 5, 6]
Gap         = Literal["small", "medium", "large"]
Padding     = Literal["none", "small", "medium", "large"]
HeaderAlign = Literal["left", "center", "right"]
SortBy      = Literal["newest", "price-low", "price-high", "name"]

DEFAULT_EMPTY_MESSAGE = "No products in this collection yet."


class ProductGridContent(BlockContent):
    """Featured products. On collection pages the kind is only an insertion marker."""
    title: Optional[str] = None
    subtitle: str = "Curated Selection"
    description: Optional[str] = None
    limit: int = Field(default=4, ge=1, le=48)
    featured_only: bool = True


class CategoryGridContent(BlockContent):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    columns: Columns = 3
    limit: int = Field(default=6, ge=1, le=48)
    show_description: bool = False
    aspect_ratio: Literal["square", "portrait", "landscape", "wide"] = "landscape"
    overlay_style: Literal["gradient", "solid", "none"] = "gradient"
    overlay_color: str = "#000000"
    show_product_count: bool = False
    header_align: HeaderAlign = "center"
    gap: Gap = "medium"
    card_style: Literal["rounded", "square", "circle"] = "rounded"
    hover_effect: Literal["zoom", "lift", "none"] = "zoom"
    text_position: Literal["bottom", "center", "overlay"] = "bottom"
    padding: Padding = "medium"


class CollectionGridContent(BlockContent):
    columns: Columns = 4
    gap: Gap = "large"
    header_align: HeaderAlign = "left"
    padding: Padding = "medium"
    background_color: str = "transparent"
    show_empty_state: bool = True
    empty_message: str = DEFAULT_EMPTY_MESSAGE
    show_product_count: bool = True
    sort_by: SortBy = "newest"
