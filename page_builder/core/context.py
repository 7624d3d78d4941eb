"""
Render context — site settings and the hosting page's collection values,
passed explicitly through every render call.
"""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class SiteSettings(BaseModel):
    store_name: str = "Store"
    currency_symbol: str = "$"

    def format_price(self, price: Decimal) -> str:
        return f"{self.currency_symbol}{Decimal(price):.2f}"


class CollectionContext(BaseModel):
    """Values a collection page hands down to the blocks it hosts."""
    collection_id: Optional[str] = None
    collection_slug: Optional[str] = None
    collection_title: Optional[str] = None
    collection_description: Optional[str] = None
    collection_image: Optional[str] = None

    @property
    def is_live(self) -> bool:
        return bool(self.collection_id or self.collection_slug)


class RenderContext(BaseModel):
    site: SiteSettings = Field(default_factory=SiteSettings)
    collection: Optional[CollectionContext] = None
