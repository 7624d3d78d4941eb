"""In-memory catalogue, used for builder previews and tests."""
from typing import Dict, List, Optional, Sequence, Set

from .source import Category, Product


class MemoryCatalogSource:
    def __init__(
        self,
        products: Sequence[Product] = (),
        categories: Sequence[Category] = (),
        collections: Optional[Dict[str, str]] = None,
        memberships: Optional[Dict[str, Set[str]]] = None,
    ):
        self.products = list(products)
        self.categories = list(categories)
        self.collections = dict(collections or {})        # slug → id
        self.memberships = {k: set(v) for k, v in (memberships or {}).items()}

    def find_collection_id(self, slug: str) -> Optional[str]:
        return self.collections.get(slug)

    def list_collection_product_ids(self, collection_id: str) -> List[str]:
        return sorted(self.memberships.get(collection_id, ()))

    def get_products(self, product_ids: Sequence[str]) -> List[Product]:
        wanted = set(product_ids)
        return [p for p in self.products if p.id in wanted]

    def list_featured_products(self, limit: int, featured_only: bool = True) -> List[Product]:
        items = [p for p in self.products if p.featured or not featured_only]
        return items[:limit]

    def list_categories(self, limit: int) -> List[Category]:
        return self.categories[:limit]
