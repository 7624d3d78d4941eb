"""
Renderers for catalogue-bound blocks: product grid, category grid,
collection grid. Each takes the block's typed config plus the result of its
own data fetch (None = not resolved yet → loading skeleton).
"""
from html import escape as e
from typing import List, Optional

from ..binding.source import BlockData, Category, Product
from ..blocks import BlockKind, CategoryGridContent, CollectionGridContent, ProductGridContent
from ..blocks.commerce import DEFAULT_EMPTY_MESSAGE
from ..core.context import RenderContext
from ..core.layout import resolve_grid_layout

FEATURED_GRID = "grid grid-cols-1 md:grid-cols-2 lg:grid-cols-4 gap-8"
LISTING_GRID  = "grid grid-cols-2 md:grid-cols-3 lg:grid-cols-4 gap-6 md:gap-8"
SKELETON_COUNT = 8


def _cls(*parts: str) -> str:
    return " ".join(p for p in parts if p)


def _product_count(n: int) -> str:
    return f"{n} product{'' if n == 1 else 's'}"


def render_product_card(product: Product, ctx: RenderContext) -> str:
    image = product.featured_image
    img_html = (f'<img src="{e(image)}" alt="{e(product.name)}" class="product-card__image">'
                if image else '<div class="product-card__image product-card__image--empty"></div>')
    category = f'<p class="product-card__category">{e(product.category)}</p>' if product.category else ""
    return f"""<a href="/products/{e(product.id)}" class="product-card group block">
  <div class="product-card__media aspect-[3/4]">{img_html}</div>
  {category}
  <h3 class="product-card__name">{e(product.name)}</h3>
  <p class="product-card__price">{e(ctx.site.format_price(product.price))}</p>
</a>"""


def _skeletons(grid_cls: str, count: int, item_cls: str = "aspect-[3/4]") -> str:
    items = "".join(f'<div class="skeleton {item_cls}"></div>' for _ in range(count))
    return f'<div class="{grid_cls}" data-state="loading">{items}</div>'


# ── Product grid (featured) ─────────────────────────────────────────────────

def render_product_grid(config: ProductGridContent, ctx: RenderContext, data: Optional[BlockData]) -> str:
    header = ""
    if config.title:
        desc = f'<p class="block-header__description">{e(config.description)}</p>' if config.description else ""
        header = f"""<div class="block-header text-center">
    <p class="block-header__subtitle">{e(config.subtitle)}</p>
    <h2 class="block-header__title">{e(config.title)}</h2>
    {desc}
  </div>"""

    if data is None or data.state in ("loading", "placeholder"):
        body = _skeletons(FEATURED_GRID, config.limit)
    else:
        cards = "".join(render_product_card(p, ctx) for p in data.products)
        body = f'<div class="{FEATURED_GRID}">{cards}</div>'

    return f"""<section class="product-grid container mx-auto px-6 py-24">
  {header}
  {body}
</section>"""


# ── Category grid ───────────────────────────────────────────────────────────

def _overlay_html(config: CategoryGridContent) -> str:
    if config.overlay_style == "gradient":
        return '<div class="absolute inset-0 bg-gradient-to-t from-black/70 via-black/20 to-transparent"></div>'
    if config.overlay_style == "solid":
        return f'<div class="absolute inset-0" style="background-color:{e(config.overlay_color)};opacity:0.5"></div>'
    return '<div class="absolute inset-0" style="opacity:0"></div>'


def _render_category_card(cat: Category, config: CategoryGridContent) -> str:
    layout = resolve_grid_layout(BlockKind.CATEGORY_GRID, config)
    img = (f'<img src="{e(cat.image_url)}" alt="{e(cat.name)}" '
           f'class="{_cls("w-full h-full object-cover", layout.hover_effect)}">' if cat.image_url else "")
    title_size = "text-base" if config.columns >= 5 else "text-xl"
    count = (f'<span class="category-card__count">{cat.product_count} Products</span>'
             if config.show_product_count else "")
    desc = (f'<p class="category-card__description">{e(cat.description)}</p>'
            if config.show_description and cat.description else "")
    lift = "hover:shadow-xl transition-shadow" if config.hover_effect == "lift" else ""
    return f"""<a href="/category/{e(cat.slug)}" class="{_cls("category-card group relative overflow-hidden", layout.aspect_ratio, layout.card_style, lift)}">
  {img}
  {_overlay_html(config)}
  <div class="{_cls("category-card__content absolute left-0 right-0 p-6", layout.text_position)}">
    <h3 class="{_cls("category-card__name", title_size)}">{e(cat.name)}</h3>
    {count}
    {desc}
  </div>
</a>"""


def render_category_grid(config: CategoryGridContent, ctx: RenderContext, data: Optional[BlockData]) -> str:
    layout = resolve_grid_layout(BlockKind.CATEGORY_GRID, config)
    grid_cls = _cls("grid", layout.columns, layout.gap)

    header = ""
    if config.title or config.subtitle:
        sub = f'<p class="block-header__subtitle">{e(config.subtitle)}</p>' if config.subtitle else ""
        title = f'<h2 class="block-header__title">{e(config.title)}</h2>' if config.title else ""
        header = f'<div class="{_cls("block-header", layout.header_align)}">{sub}{title}</div>'

    if data is None or data.state in ("loading", "placeholder"):
        body = _skeletons(grid_cls, config.limit, _cls(layout.aspect_ratio, layout.card_style))
    else:
        cards = "".join(_render_category_card(c, config) for c in data.categories)
        body = f'<div class="{grid_cls}">{cards}</div>'

    return f"""<section class="{_cls("category-grid", layout.padding)}">
  <div class="container mx-auto">
    {header}
    {body}
  </div>
</section>"""


# ── Collection grid ─────────────────────────────────────────────────────────

def render_collection_grid(config: CollectionGridContent, ctx: RenderContext, data: Optional[BlockData]) -> str:
    layout = resolve_grid_layout(BlockKind.COLLECTION_GRID, config)
    grid_cls = _cls("grid", layout.columns, layout.gap)
    bg = config.background_color
    style = f' style="background-color:{e(bg)}"' if bg and bg != "transparent" else ""
    section_cls = _cls("collection-grid container mx-auto px-6", layout.padding)

    if data is None:
        state = "loading"
    else:
        state = data.state

    if state == "placeholder":
        return f"""<section class="{section_cls}"{style} data-state="placeholder">
  <div class="collection-grid__placeholder">
    <p class="collection-grid__placeholder-title">Collection Products Grid</p>
    <p class="collection-grid__placeholder-text">Products from the current collection will be displayed here.</p>
  </div>
</section>"""

    products: List[Product] = data.products if data is not None else []
    count = ""
    if config.show_product_count and products:
        count = f'<p class="{_cls("collection-grid__count", layout.header_align)}">{_product_count(len(products))}</p>'

    if state == "loading":
        body = _skeletons(grid_cls, SKELETON_COUNT)
    elif not products and config.show_empty_state:
        message = config.empty_message or DEFAULT_EMPTY_MESSAGE
        body = f'<div class="collection-grid__empty text-center py-16"><p>{e(message)}</p></div>'
    else:
        cards = "".join(render_product_card(p, ctx) for p in products)
        body = f'<div class="{grid_cls}">{cards}</div>'

    return f"""<section class="{section_cls}"{style} data-state="{state}">
  {count}
  {body}
</section>"""


def render_collection_listing(data: Optional[BlockData], ctx: RenderContext) -> str:
    """Built-in product listing of a collection page (marker mode)."""
    products = data.products if data else []
    if data is None or data.state == "loading":
        body = _skeletons(LISTING_GRID, SKELETON_COUNT)
    elif not products:
        body = '<div class="collection-listing__empty text-center py-20"><p>No products in this collection yet.</p></div>'
    else:
        cards = "".join(render_product_card(p, ctx) for p in products)
        body = (f'<p class="collection-listing__count">{_product_count(len(products))}</p>\n'
                f'<div class="{LISTING_GRID}">{cards}</div>')
    return f"""<div class="collection-listing container mx-auto px-6 pb-16">
{body}
</div>"""
