"""
SqlCatalogSource — catalogue queries for data-bound blocks, read from the ORM.

Every query opens and closes its own session: blocks are resolved on worker
threads and must not share one.
"""
from contextlib import contextmanager
from typing import Callable, List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from page_builder.binding import Category, Product

from .database import SessionLocal, jl
from .models import CategoryDB, CollectionDB, ProductCollectionDB, ProductDB


def product_from_row(row: ProductDB) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        price=row.price,
        images=[str(i) for i in jl(row.images)],
        category=row.category,
        stock=row.stock or 0,
        featured=bool(row.featured),
        created_at=row.created_at,
    )


class SqlCatalogSource:
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self._session_factory = session_factory

    @contextmanager
    def _session(self):
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def find_collection_id(self, slug: str) -> Optional[str]:
        with self._session() as db:
            row = db.query(CollectionDB.id).filter_by(slug=slug).first()
            return row[0] if row else None

    def list_collection_product_ids(self, collection_id: str) -> List[str]:
        with self._session() as db:
            rows = db.query(ProductCollectionDB.product_id).filter_by(collection_id=collection_id).all()
            return [r[0] for r in rows]

    def get_products(self, product_ids: Sequence[str]) -> List[Product]:
        if not product_ids:
            return []
        with self._session() as db:
            rows = db.query(ProductDB).filter(ProductDB.id.in_(list(product_ids))).all()
            return [product_from_row(r) for r in rows]

    def list_featured_products(self, limit: int, featured_only: bool = True) -> List[Product]:
        with self._session() as db:
            q = db.query(ProductDB)
            if featured_only:
                q = q.filter(ProductDB.featured.is_(True))
            rows = q.order_by(ProductDB.created_at.desc()).limit(limit).all()
            return [product_from_row(r) for r in rows]

    def list_categories(self, limit: int) -> List[Category]:
        with self._session() as db:
            rows = (db.query(CategoryDB)
                      .filter(CategoryDB.is_active.is_(True))
                      .order_by(CategoryDB.display_order, CategoryDB.name)
                      .limit(limit).all())
            counts = dict(
                db.query(ProductDB.category, func.count(ProductDB.id))
                  .filter(ProductDB.category.in_([r.name for r in rows]))
                  .group_by(ProductDB.category).all()
            ) if rows else {}
            return [
                Category(
                    id=r.id, name=r.name, slug=r.slug,
                    description=r.description, image_url=r.image_url,
                    product_count=counts.get(r.name, 0),
                )
                for r in rows
            ]
