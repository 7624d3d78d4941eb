"""
HTML renderer — dispatch by block kind, page and collection page documents.

The kind → renderer table is total over ``BlockKind``. Unknown types render
nothing. A block that fails to render is logged and dropped; the rest of the
page is unaffected.
"""
import logging
from html import escape as e
from typing import Callable, Dict, Iterable, Optional

from ..binding.resolver import DEFAULT_TIMEOUT, DEFAULT_WORKERS, resolve_blocks
from ..binding.source import BlockData, CatalogSource
from ..blocks import BlockKind
from ..blocks.base import Block, BlockContent
from ..composition import compose_collection_page
from ..core.context import CollectionContext, RenderContext
from ..core.theme import PageTheme, theme_style
from ..document import PageDocument
from . import blocks as static
from .commerce import (
    render_category_grid,
    render_collection_grid,
    render_collection_listing,
    render_product_grid,
)

log = logging.getLogger(__name__)

# resolved alongside the layout blocks so it shares their pool and deadline
LISTING_ID = "__collection-listing__"

BlockRenderer = Callable[[BlockContent, RenderContext, Optional[BlockData]], str]


def _static(fn) -> BlockRenderer:
    def render(config, ctx, data):
        return fn(config, ctx)
    render.__name__ = fn.__name__
    return render


RENDERERS: Dict[BlockKind, BlockRenderer] = {
    BlockKind.HERO:            _static(static.render_hero),
    BlockKind.TEXT:            _static(static.render_text),
    BlockKind.IMAGE:           _static(static.render_image),
    BlockKind.GALLERY:         _static(static.render_gallery),
    BlockKind.VIDEO:           _static(static.render_video),
    BlockKind.PRODUCT_GRID:    render_product_grid,
    BlockKind.COLLECTION_GRID: render_collection_grid,
    BlockKind.CATEGORY_GRID:   render_category_grid,
    BlockKind.FEATURES:        _static(static.render_features),
    BlockKind.NEWSLETTER:      _static(static.render_newsletter),
    BlockKind.FAQ:             _static(static.render_faq),
    BlockKind.TESTIMONIALS:    _static(static.render_testimonials),
    BlockKind.CTA:             _static(static.render_cta),
    BlockKind.COLUMNS:         _static(static.render_columns),
    BlockKind.SPACER:          _static(static.render_spacer),
    BlockKind.COUNTDOWN:       _static(static.render_countdown),
    BlockKind.STATS:           _static(static.render_stats),
    BlockKind.LOGO_CAROUSEL:   _static(static.render_logo_carousel),
    BlockKind.MAP:             _static(static.render_map),
    BlockKind.SOCIAL_FEED:     _static(static.render_social_feed),
}


# ── Blocks ──────────────────────────────────────────────────────────────────

def render_block(
    block: Block,
    ctx: Optional[RenderContext] = None,
    data: Optional[BlockData] = None,
) -> str:
    kind = block.kind
    if kind is None:
        log.debug("Skipping unknown block type %r (%s)", block.type, block.id)
        return ""
    ctx = ctx or RenderContext()
    try:
        html = RENDERERS[kind](block.config(), ctx, data)
    except Exception:
        log.exception("Block %s (%s) failed to render", block.id, block.type)
        return ""
    return f'<div class="page-block" data-block-id="{e(block.id)}" data-block-type="{e(block.type)}">\n{html}\n</div>'


def render_blocks(
    blocks: Iterable[Block],
    ctx: Optional[RenderContext] = None,
    data: Optional[Dict[str, BlockData]] = None,
) -> str:
    data = data or {}
    parts = [render_block(b, ctx, data.get(b.id)) for b in blocks]
    return "\n".join(p for p in parts if p)


# ── Documents ───────────────────────────────────────────────────────────────

def _document(title: str, body: str, ctx: RenderContext, description: Optional[str] = None,
              image: Optional[str] = None, extra_head: str = "",
              theme: Optional[PageTheme] = None) -> str:
    meta = ""
    if description:
        meta += f'\n  <meta name="description" content="{e(description)}">'
        meta += f'\n  <meta property="og:description" content="{e(description)}">'
    if image:
        meta += f'\n  <meta property="og:image" content="{e(image)}">'
    style = theme_style(theme)
    if style:
        meta += f"\n  {style}"

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{e(title)}</title>
  <meta property="og:title" content="{e(title)}">{meta}
  {extra_head}
</head>
<body>
<main>
{body}
</main>
</body>
</html>"""


def _title(page_title: Optional[str], ctx: RenderContext) -> str:
    return f"{page_title} | {ctx.site.store_name}" if page_title else ctx.site.store_name


def render_page(
    document: PageDocument,
    ctx: Optional[RenderContext] = None,
    source: Optional[CatalogSource] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    max_workers: int = DEFAULT_WORKERS,
    extra_head: str = "",
) -> str:
    """Full HTML document for a builder page."""
    ctx = ctx or RenderContext()
    data = resolve_blocks(document.content, source, ctx.collection, timeout, max_workers)
    body = render_blocks(document.content, ctx, data)
    return _document(
        _title(document.meta_title or document.title, ctx),
        body,
        ctx,
        description=document.meta_description,
        image=document.meta_image,
        extra_head=extra_head,
        theme=document.theme,
    )


def render_collection_header(collection: CollectionContext) -> str:
    desc = (f'<p class="collection-header__description">{e(collection.collection_description)}</p>'
            if collection.collection_description else "")
    return f"""<div class="collection-header container mx-auto px-6 py-16">
  <p class="collection-header__eyebrow">Collection</p>
  <h1 class="collection-header__title">{e(collection.collection_title or "")}</h1>
  {desc}
</div>"""


def render_collection_body(
    collection: CollectionContext,
    document: Optional[PageDocument],
    ctx: Optional[RenderContext] = None,
    source: Optional[CatalogSource] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    max_workers: int = DEFAULT_WORKERS,
) -> str:
    ctx = (ctx or RenderContext()).model_copy(update={"collection": collection})
    composition = compose_collection_page(document.content if document else [])
    bound = composition.blocks
    if composition.show_listing:
        bound = bound + [Block(id=LISTING_ID, type=BlockKind.COLLECTION_GRID.value, content={"sortBy": "newest"})]
    data = resolve_blocks(bound, source, collection, timeout, max_workers)

    parts = [render_blocks(composition.before, ctx, data)]
    if composition.show_header:
        parts.append(render_collection_header(collection))
    if composition.show_listing:
        parts.append(render_collection_listing(data.get(LISTING_ID), ctx))
    parts.append(render_blocks(composition.after, ctx, data))
    return "\n".join(p for p in parts if p)


def render_collection_page(
    collection: CollectionContext,
    document: Optional[PageDocument],
    ctx: Optional[RenderContext] = None,
    source: Optional[CatalogSource] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    max_workers: int = DEFAULT_WORKERS,
) -> str:
    """Full HTML document for a collection page, with its layout page spliced in."""
    ctx = ctx or RenderContext()
    body = render_collection_body(collection, document, ctx, source, timeout, max_workers)
    title = (document.meta_title if document else None) or collection.collection_title
    description = (document.meta_description if document else None) or collection.collection_description
    image = (document.meta_image if document else None) or collection.collection_image
    return _document(_title(title, ctx), body, ctx, description=description, image=image,
                     theme=document.theme if document else None)


def render_not_found(ctx: Optional[RenderContext] = None, message: str = "Page not found") -> str:
    ctx = ctx or RenderContext()
    body = f'<div class="not-found text-center py-24"><h1>404</h1><p>{e(message)}</p></div>'
    return _document(_title("Not found", ctx), body, ctx)
