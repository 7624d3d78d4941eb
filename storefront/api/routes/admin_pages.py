"""
Admin — builder pages (protected by ADMIN_TOKEN header or ?token=)

GET    /api/admin/pages                                   → list
POST   /api/admin/pages                                   → create
GET    /api/admin/pages/{id}                              → page + blocks
PATCH  /api/admin/pages/{id}                              → metadata / status / home
DELETE /api/admin/pages/{id}
PUT    /api/admin/pages/{id}/content                      → replace the whole block sequence
POST   /api/admin/pages/{id}/blocks                       → add block
POST   /api/admin/pages/{id}/blocks/move                  → reorder
PATCH  /api/admin/pages/{id}/blocks/{block_id}            → edit block content
DELETE /api/admin/pages/{id}/blocks/{block_id}
POST   /api/admin/pages/{id}/blocks/{block_id}/duplicate
GET    /api/admin/pages/{id}/versions                     → last 20 snapshots
POST   /api/admin/pages/{id}/versions                     → snapshot current content
POST   /api/admin/pages/{id}/versions/{vid}/restore
GET    /api/admin/pages/{id}/preview                      → HTML, any status
GET    /api/page-builder/catalog                          → block kinds + config schemas
GET    /api/page-builder/themes                           → preset page themes
"""
import logging, os
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from page_builder import BLOCK_CONTENT, DATA_BOUND_KINDS, PRESET_THEMES, Block, PageTheme, RenderContext
from page_builder.document import blocks_from_records, blocks_to_records, duplicate_block_ids
from page_builder.editor import (
    BlockNotFound, add_block, duplicate_block, move_block, move_to_index,
    remove_block, update_block_content,
)
from page_builder.renderer import render_page

from ...catalog import SqlCatalogSource
from ...database import (
    SessionLocal, db_create_page, db_create_version, db_delete_page, db_get_page,
    db_get_page_by_slug, db_get_version, db_list_pages, db_list_versions,
    db_set_home_page, db_update_page, get_db, jd, jl, jo,
)
from ...models import (
    BlockAdd, BlockContentPatch, BlockMove, ContentReplace, PageCreate, PageDB,
    PageUpdate, PageVersionDB, VersionCreate,
)
from .storefront import fetch_options, page_document, site_settings

log = logging.getLogger(__name__)
router = APIRouter(tags=["Admin pages"])


def _check_token(request: Request):
    token = request.headers.get("X-Admin-Token") or request.query_params.get("token")
    if token != os.getenv("ADMIN_TOKEN", "changeme"):
        raise HTTPException(403, "Invalid admin token")


# ── Serialisation ───────────────────────────────────────────────────────────

def _page_out(p: PageDB, with_content: bool = True) -> dict:
    out = {
        "id":               p.id,
        "title":            p.title,
        "slug":             p.slug,
        "meta_title":       p.meta_title,
        "meta_description": p.meta_description,
        "meta_image":       p.meta_image,
        "status":           p.status,
        "is_home":          bool(p.is_home),
        "theme":            jo(p.theme) or None,
        "created_at":       p.created_at.isoformat() if p.created_at else None,
        "updated_at":       p.updated_at.isoformat() if p.updated_at else None,
    }
    if with_content:
        out["content"] = jl(p.content)
    return out


def _version_out(v: PageVersionDB) -> dict:
    return {
        "id":             v.id,
        "page_id":        v.page_id,
        "version_number": v.version_number,
        "content":        jl(v.content),
        "meta_title":     v.meta_title,
        "description":    v.description,
        "meta_image":     v.meta_image,
        "created_by":     v.created_by,
        "created_at":     v.created_at.isoformat() if v.created_at else None,
    }


# ── Helpers ─────────────────────────────────────────────────────────────────

def _get_page_or_404(db: Session, page_id: str) -> PageDB:
    page = db_get_page(db, page_id)
    if not page:
        raise HTTPException(404, "Page not found")
    return page


def _theme_json(payload: Optional[dict]) -> Optional[str]:
    theme = PageTheme.coerce(payload)
    return jd(theme.to_record()) if theme else None


def _blocks(page: PageDB) -> List[Block]:
    return blocks_from_records(jl(page.content))


def _validated_blocks(records: list) -> List[Block]:
    blocks = blocks_from_records(records)
    if len(blocks) != len(records):
        raise HTTPException(422, "Every block needs a string 'type'")
    dupes = duplicate_block_ids(blocks)
    if dupes:
        raise HTTPException(422, f"Duplicate block ids: {', '.join(dupes)}")
    return blocks


def _save_blocks(db: Session, page: PageDB, blocks: List[Block]) -> dict:
    """Whole-sequence replace; the last save wins."""
    page = db_update_page(db, page, content=jd(blocks_to_records(blocks)))
    return _page_out(page)


# ── Pages ───────────────────────────────────────────────────────────────────

@router.get("/api/admin/pages")
def list_pages(request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    return [_page_out(p, with_content=False) for p in db_list_pages(db)]


@router.post("/api/admin/pages", status_code=201)
def create_page(body: PageCreate, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    if db_get_page_by_slug(db, body.slug):
        raise HTTPException(409, f"Slug already used: {body.slug}")
    blocks = _validated_blocks(body.content)
    page = db_create_page(db, PageDB(
        title=body.title,
        slug=body.slug,
        content=jd(blocks_to_records(blocks)),
        meta_title=body.meta_title,
        meta_description=body.meta_description,
        meta_image=body.meta_image,
        status=body.status.value,
        theme=_theme_json(body.theme),
    ))
    if body.is_home:
        page = db_set_home_page(db, page)
    log.info("Page created: %s (%s)", page.slug, page.id)
    return _page_out(page)


@router.get("/api/admin/pages/{page_id}")
def get_page(page_id: str, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    return _page_out(_get_page_or_404(db, page_id))


@router.patch("/api/admin/pages/{page_id}")
def update_page(page_id: str, body: PageUpdate, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page = _get_page_or_404(db, page_id)
    fields = body.model_dump(exclude_unset=True)
    make_home = fields.pop("is_home", None)
    if fields.get("slug") and fields["slug"] != page.slug:
        if db_get_page_by_slug(db, fields["slug"]):
            raise HTTPException(409, f"Slug already used: {fields['slug']}")
    if fields.get("status") is not None:
        fields["status"] = fields["status"].value
    if "theme" in fields:
        fields["theme"] = _theme_json(fields["theme"])
    page = db_update_page(db, page, **{k: v for k, v in fields.items() if v is not None or k.startswith("meta_") or k == "theme"})
    if make_home:
        page = db_set_home_page(db, page)
    elif make_home is False:
        page = db_update_page(db, page, is_home=False)
    return _page_out(page)


@router.delete("/api/admin/pages/{page_id}")
def delete_page(page_id: str, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    db_delete_page(db, _get_page_or_404(db, page_id))
    return {"deleted": page_id}


@router.put("/api/admin/pages/{page_id}/content")
def replace_content(page_id: str, body: ContentReplace, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page = _get_page_or_404(db, page_id)
    return _save_blocks(db, page, _validated_blocks(body.content))


# ── Blocks ──────────────────────────────────────────────────────────────────

@router.post("/api/admin/pages/{page_id}/blocks", status_code=201)
def create_block(page_id: str, body: BlockAdd, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page = _get_page_or_404(db, page_id)
    try:
        blocks = add_block(_blocks(page), body.type, body.content, body.index)
    except ValueError:
        raise HTTPException(422, f"Unknown block type: {body.type}")
    return _save_blocks(db, page, blocks)


@router.post("/api/admin/pages/{page_id}/blocks/move")
def reorder_block(page_id: str, body: BlockMove, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page = _get_page_or_404(db, page_id)
    if body.target_id is None and body.index is None:
        raise HTTPException(422, "target_id or index required")
    try:
        if body.target_id is not None:
            blocks = move_block(_blocks(page), body.block_id, body.target_id)
        else:
            blocks = move_to_index(_blocks(page), body.block_id, body.index)
    except BlockNotFound as e:
        raise HTTPException(404, f"Block not found: {e.args[0]}")
    return _save_blocks(db, page, blocks)


@router.patch("/api/admin/pages/{page_id}/blocks/{block_id}")
def edit_block(page_id: str, block_id: str, body: BlockContentPatch, request: Request,
               db: Session = Depends(get_db)):
    _check_token(request)
    page = _get_page_or_404(db, page_id)
    try:
        blocks = update_block_content(_blocks(page), block_id, body.content, merge=body.merge)
    except BlockNotFound:
        raise HTTPException(404, f"Block not found: {block_id}")
    return _save_blocks(db, page, blocks)


@router.delete("/api/admin/pages/{page_id}/blocks/{block_id}")
def delete_block(page_id: str, block_id: str, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page = _get_page_or_404(db, page_id)
    try:
        blocks = remove_block(_blocks(page), block_id)
    except BlockNotFound:
        raise HTTPException(404, f"Block not found: {block_id}")
    return _save_blocks(db, page, blocks)


@router.post("/api/admin/pages/{page_id}/blocks/{block_id}/duplicate", status_code=201)
def copy_block(page_id: str, block_id: str, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page = _get_page_or_404(db, page_id)
    try:
        blocks = duplicate_block(_blocks(page), block_id)
    except BlockNotFound:
        raise HTTPException(404, f"Block not found: {block_id}")
    return _save_blocks(db, page, blocks)


# ── Versions ────────────────────────────────────────────────────────────────

@router.get("/api/admin/pages/{page_id}/versions")
def list_versions(page_id: str, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    _get_page_or_404(db, page_id)
    return [_version_out(v) for v in db_list_versions(db, page_id)]


@router.post("/api/admin/pages/{page_id}/versions", status_code=201)
def snapshot_version(page_id: str, request: Request, body: Optional[VersionCreate] = None,
                     db: Session = Depends(get_db)):
    _check_token(request)
    page = _get_page_or_404(db, page_id)
    version = db_create_version(db, page, created_by=body.created_by if body else None)
    log.info("Page %s → version %d", page.slug, version.version_number)
    return _version_out(version)


@router.post("/api/admin/pages/{page_id}/versions/{version_id}/restore")
def restore_version(page_id: str, version_id: str, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page = _get_page_or_404(db, page_id)
    version = db_get_version(db, page_id, version_id)
    if not version:
        raise HTTPException(404, "Version not found")
    page = db_update_page(
        db, page,
        content=version.content,
        meta_title=version.meta_title,
        meta_description=version.description,
        meta_image=version.meta_image,
    )
    return _page_out(page)


# ── Preview / catalog ───────────────────────────────────────────────────────

@router.get("/api/admin/pages/{page_id}/preview", response_class=HTMLResponse)
def preview_page(page_id: str, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page = _get_page_or_404(db, page_id)
    ctx = RenderContext(site=site_settings())
    return HTMLResponse(render_page(page_document(page), ctx, SqlCatalogSource(SessionLocal), **fetch_options()))


@router.get("/api/page-builder/catalog")
def block_catalog():
    return [
        {
            "type":       kind.value,
            "data_bound": kind in DATA_BOUND_KINDS,
            "defaults":   model().model_dump(by_alias=True, mode="json"),
            "schema":     model.model_json_schema(by_alias=True),
        }
        for kind, model in BLOCK_CONTENT.items()
    ]


@router.get("/api/page-builder/themes")
def theme_presets():
    return [t.to_record() for t in PRESET_THEMES.values()]
