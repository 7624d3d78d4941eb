"""
Public storefront — builder pages rendered to HTML.
GET /                    → home page (published, is_home)
GET /pages/{slug}        → published page (template slugs are never public)
GET /collections/{slug}  → collection page, layout page spliced around the listing
"""
import logging, os
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from page_builder import CollectionContext, PageDocument, RenderContext, SiteSettings
from page_builder.document import TEMPLATE_SLUGS
from page_builder.renderer import render_collection_page, render_not_found, render_page

from ...catalog import SqlCatalogSource
from ...database import (
    SessionLocal, db_get_collection_by_slug, db_get_home_page, db_get_page,
    db_get_page_by_slug, get_db, jl, jo,
)
from ...models import CollectionDB, PageDB, PageStatus

log = logging.getLogger(__name__)
router = APIRouter(tags=["Storefront"])

COLLECTION_TEMPLATE_SLUG = os.getenv("COLLECTION_TEMPLATE_SLUG", "collection-template")


def site_settings() -> SiteSettings:
    return SiteSettings(
        store_name=os.getenv("STORE_NAME", "Store"),
        currency_symbol=os.getenv("CURRENCY_SYMBOL", "$"),
    )


def fetch_options() -> dict:
    return {
        "timeout":     float(os.getenv("BLOCK_FETCH_TIMEOUT", "5")),
        "max_workers": int(os.getenv("BLOCK_FETCH_WORKERS", "8")),
    }


def page_document(page: PageDB) -> PageDocument:
    return PageDocument.from_record({
        "id":               page.id,
        "title":            page.title,
        "slug":             page.slug,
        "content":          jl(page.content),
        "meta_title":       page.meta_title,
        "meta_description": page.meta_description,
        "meta_image":       page.meta_image,
        "status":           page.status,
        "is_home":          bool(page.is_home),
        "theme":            jo(page.theme) or None,
    })


def collection_context(coll: CollectionDB) -> CollectionContext:
    return CollectionContext(
        collection_id=coll.id,
        collection_slug=coll.slug,
        collection_title=coll.title,
        collection_description=coll.description,
        collection_image=coll.image,
    )


def _is_template(slug: str) -> bool:
    return slug in TEMPLATE_SLUGS or slug == COLLECTION_TEMPLATE_SLUG


def _not_found(ctx: RenderContext, message: str = "Page not found") -> HTMLResponse:
    return HTMLResponse(render_not_found(ctx, message), status_code=404)


@router.get("/", response_class=HTMLResponse)
def home(db: Session = Depends(get_db)):
    ctx = RenderContext(site=site_settings())
    page = db_get_home_page(db)
    if not page:
        return _not_found(ctx, "No home page published yet")
    return HTMLResponse(render_page(page_document(page), ctx, SqlCatalogSource(SessionLocal), **fetch_options()))


@router.get("/pages/{slug}", response_class=HTMLResponse)
def public_page(slug: str, db: Session = Depends(get_db)):
    ctx = RenderContext(site=site_settings())
    if _is_template(slug):
        return _not_found(ctx)
    page = db_get_page_by_slug(db, slug)
    if not page or page.status != PageStatus.PUBLISHED.value:
        return _not_found(ctx)
    return HTMLResponse(render_page(page_document(page), ctx, SqlCatalogSource(SessionLocal), **fetch_options()))


def _layout_page(db: Session, coll: CollectionDB) -> Optional[PageDB]:
    """The collection's own page, else the shared collection template."""
    if coll.page_id:
        page = db_get_page(db, coll.page_id)
        if page:
            return page
        log.warning("Collection %s links to missing page %s", coll.slug, coll.page_id)
    return db_get_page_by_slug(db, COLLECTION_TEMPLATE_SLUG)


@router.get("/collections/{slug}", response_class=HTMLResponse)
def collection_page(slug: str, db: Session = Depends(get_db)):
    ctx = RenderContext(site=site_settings())
    coll = db_get_collection_by_slug(db, slug)
    if not coll or not coll.is_visible:
        return _not_found(ctx, "Collection not found")
    page = _layout_page(db, coll)
    document = page_document(page) if page else None
    html = render_collection_page(
        collection_context(coll), document, ctx, SqlCatalogSource(SessionLocal), **fetch_options()
    )
    return HTMLResponse(html)
