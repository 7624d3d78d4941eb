"""
Catalogue read model and the query interface data-bound blocks depend on.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, Field


class Product(BaseModel):
    id: str
    name: str
    price: Decimal
    images: List[str] = Field(default_factory=list)
    category: Optional[str] = None
    stock: int = 0
    featured: bool = False
    created_at: Optional[datetime] = None

    @property
    def featured_image(self) -> Optional[str]:
        return self.images[0] if self.images else None


class Category(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    product_count: int = 0


BlockState = Literal["loading", "placeholder", "empty", "error", "ready"]


class BlockData(BaseModel):
    """Result of one block's data fetch."""
    state: BlockState
    products: List[Product] = Field(default_factory=list)
    categories: List[Category] = Field(default_factory=list)


@runtime_checkable
class CatalogSource(Protocol):
    """Read-only catalogue queries. Implementations may raise; callers degrade."""

    def find_collection_id(self, slug: str) -> Optional[str]: ...

    def list_collection_product_ids(self, collection_id: str) -> List[str]: ...

    def get_products(self, product_ids: Sequence[str]) -> List[Product]: ...

    def list_featured_products(self, limit: int, featured_only: bool = True) -> List[Product]: ...

    def list_categories(self, limit: int) -> List[Category]: ...
