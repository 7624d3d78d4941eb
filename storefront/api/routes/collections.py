"""
Admin — collections and their product membership.

GET    /api/admin/collections
POST   /api/admin/collections
GET    /api/admin/collections/{id}                        → collection + product ids
PATCH  /api/admin/collections/{id}
DELETE /api/admin/collections/{id}
POST   /api/admin/collections/{id}/products               {product_id}
DELETE /api/admin/collections/{id}/products/{product_id}
POST   /api/admin/products                                → catalogue seeding for layouts
"""
import logging, os

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ...database import (
    db_add_membership, db_create_collection, db_create_product, db_delete_collection,
    db_get_collection, db_get_collection_by_slug, db_get_page, db_get_product,
    db_list_collections, db_list_membership_ids, db_remove_membership,
    db_update_collection, get_db, jd,
)
from ...models import (
    CollectionCreate, CollectionDB, CollectionUpdate, MembershipInput, ProductCreate, ProductDB,
)

log = logging.getLogger(__name__)
router = APIRouter(tags=["Admin collections"])


def _check_token(request: Request):
    token = request.headers.get("X-Admin-Token") or request.query_params.get("token")
    if token != os.getenv("ADMIN_TOKEN", "changeme"):
        raise HTTPException(403, "Invalid admin token")


def _collection_out(c: CollectionDB, product_ids=None) -> dict:
    out = {
        "id":          c.id,
        "title":       c.title,
        "slug":        c.slug,
        "description": c.description,
        "image":       c.image,
        "is_visible":  bool(c.is_visible),
        "sort_order":  c.sort_order,
        "page_id":     c.page_id,
    }
    if product_ids is not None:
        out["product_ids"] = product_ids
    return out


def _get_or_404(db: Session, collection_id: str) -> CollectionDB:
    coll = db_get_collection(db, collection_id)
    if not coll:
        raise HTTPException(404, "Collection not found")
    return coll


def _check_page(db: Session, page_id):
    if page_id and not db_get_page(db, page_id):
        raise HTTPException(422, f"Unknown page: {page_id}")


@router.get("/api/admin/collections")
def list_collections(request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    return [_collection_out(c) for c in db_list_collections(db)]


@router.post("/api/admin/collections", status_code=201)
def create_collection(body: CollectionCreate, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    if db_get_collection_by_slug(db, body.slug):
        raise HTTPException(409, f"Slug already used: {body.slug}")
    _check_page(db, body.page_id)
    coll = db_create_collection(db, CollectionDB(**body.model_dump()))
    log.info("Collection created: %s", coll.slug)
    return _collection_out(coll, [])


@router.get("/api/admin/collections/{collection_id}")
def get_collection(collection_id: str, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    coll = _get_or_404(db, collection_id)
    return _collection_out(coll, db_list_membership_ids(db, coll.id))


@router.patch("/api/admin/collections/{collection_id}")
def update_collection(collection_id: str, body: CollectionUpdate, request: Request,
                      db: Session = Depends(get_db)):
    _check_token(request)
    coll = _get_or_404(db, collection_id)
    fields = body.model_dump(exclude_unset=True)
    if fields.get("slug") and fields["slug"] != coll.slug and db_get_collection_by_slug(db, fields["slug"]):
        raise HTTPException(409, f"Slug already used: {fields['slug']}")
    _check_page(db, fields.get("page_id"))
    coll = db_update_collection(db, coll, **{k: v for k, v in fields.items() if v is not None or k == "page_id"})
    return _collection_out(coll, db_list_membership_ids(db, coll.id))


@router.delete("/api/admin/collections/{collection_id}")
def delete_collection(collection_id: str, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    db_delete_collection(db, _get_or_404(db, collection_id))
    return {"deleted": collection_id}


@router.post("/api/admin/collections/{collection_id}/products", status_code=201)
def add_product(collection_id: str, body: MembershipInput, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    coll = _get_or_404(db, collection_id)
    if not db_get_product(db, body.product_id):
        raise HTTPException(404, "Product not found")
    db_add_membership(db, coll.id, body.product_id)
    return _collection_out(coll, db_list_membership_ids(db, coll.id))


@router.delete("/api/admin/collections/{collection_id}/products/{product_id}")
def remove_product(collection_id: str, product_id: str, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    coll = _get_or_404(db, collection_id)
    if not db_remove_membership(db, coll.id, product_id):
        raise HTTPException(404, "Product not in collection")
    return _collection_out(coll, db_list_membership_ids(db, coll.id))


@router.post("/api/admin/products", status_code=201)
def create_product(body: ProductCreate, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    p = db_create_product(db, ProductDB(
        name=body.name, price=body.price, images=jd(body.images),
        category=body.category, stock=body.stock, featured=body.featured,
    ))
    return {"id": p.id, "name": p.name, "price": str(p.price), "featured": bool(p.featured)}
