"""
Renderers for the static block kinds. Each takes the typed config and the
render context and returns an HTML fragment.
"""
import re
from datetime import datetime, timedelta, timezone
from html import escape as e
from typing import Optional

from ..blocks import (
    ColumnItem,
    ColumnsContent,
    CountdownContent,
    CTAContent,
    FAQContent,
    FeaturesContent,
    GalleryContent,
    HeroContent,
    ImageContent,
    LogoCarouselContent,
    MapContent,
    NewsletterContent,
    SocialFeedContent,
    SpacerContent,
    StatsContent,
    TestimonialsContent,
    TextContent,
    VideoContent,
)
from ..core.context import RenderContext

_YOUTUBE = re.compile(r"(?:youtube\.com/(?:watch\?v=|embed/)|youtu\.be/)([a-zA-Z0-9_-]{11})")
_VIMEO   = re.compile(r"vimeo\.com/(\d+)")


def _cls(*parts: str) -> str:
    return " ".join(p for p in parts if p)


def _header(title: Optional[str], subtitle: Optional[str], align: str = "text-center") -> str:
    if not (title or subtitle):
        return ""
    t = f'<h2 class="block-header__title">{e(title)}</h2>' if title else ""
    s = f'<p class="block-header__subtitle">{e(subtitle)}</p>' if subtitle else ""
    return f'<div class="{_cls("block-header", align)}">{t}{s}</div>'


def video_embed_url(url: str) -> Optional[str]:
    m = _YOUTUBE.search(url)
    if m:
        return f"https://www.youtube.com/embed/{m.group(1)}"
    m = _VIMEO.search(url)
    if m:
        return f"https://player.vimeo.com/video/{m.group(1)}"
    return None


# ── Hero ────────────────────────────────────────────────────────────────────

def render_hero(c: HeroContent, ctx: RenderContext) -> str:
    slides = ""
    for i, s in enumerate(c.slides):
        bg = f' style="background-image:url(\'{e(s.image)}\')"' if s.image else ""
        buttons = ""
        if s.button1_text:
            buttons += f'<a href="{e(s.button1_link or "#")}" class="btn btn-primary">{e(s.button1_text)}</a>'
        if s.button2_text:
            buttons += f'<a href="{e(s.button2_link or "#")}" class="btn btn-secondary">{e(s.button2_text)}</a>'
        if buttons:
            buttons = f'<div class="hero__cta-group">{buttons}</div>'
        active = " hero__slide--active" if i == 0 else ""
        title = f'<h1 class="hero__title">{e(s.title)}</h1>' if s.title else ""
        sub = f'<p class="hero__subtitle">{e(s.subtitle)}</p>' if s.subtitle else ""
        slides += f"""<div class="hero__slide{active}"{bg}>
  <div class="hero__overlay" style="opacity:{c.overlay_opacity}"></div>
  <div class="hero__content">{title}{sub}{buttons}</div>
</div>"""

    many = len(c.slides) > 1
    arrows = ('<button class="hero__arrow hero__arrow--prev" aria-label="Previous slide"></button>'
              '<button class="hero__arrow hero__arrow--next" aria-label="Next slide"></button>'
              if c.show_arrows and many else "")
    dots = ""
    if c.show_dots and many:
        dots = '<div class="hero__dots">' + "".join(
            f'<button class="hero__dot" data-slide="{i}" aria-label="Go to slide {i + 1}"></button>'
            for i in range(len(c.slides))
        ) + "</div>"
    autoplay = f' data-autoplay="{c.auto_play_interval}"' if c.auto_play and many else ""
    return f'<section class="hero"{autoplay}>{slides}{arrows}{dots}</section>'


# ── Editorial ───────────────────────────────────────────────────────────────

def render_text(c: TextContent, ctx: RenderContext) -> str:
    inner = c.text if c.text else "<p>Rich text content...</p>"
    return f'<div class="rich-text prose max-w-none p-4">{inner}</div>'


def render_image(c: ImageContent, ctx: RenderContext) -> str:
    return f'<div class="image-block w-full"><img src="{e(c.url)}" alt="{e(c.alt)}" class="w-full h-auto"></div>'


def render_gallery(c: GalleryContent, ctx: RenderContext) -> str:
    cols = {2: "grid-cols-2", 3: "grid-cols-2 md:grid-cols-3", 4: "grid-cols-2 md:grid-cols-4"}[c.columns]
    items = ""
    for img in c.images:
        caption = f'<figcaption class="gallery__caption">{e(img.caption)}</figcaption>' if img.caption else ""
        items += f'<figure class="gallery__item"><img src="{e(img.url)}" alt="{e(img.alt or "")}">{caption}</figure>'
    return f"""<section class="gallery container mx-auto px-6 py-16">
  {_header(c.title, None)}
  <div class="grid {cols} gap-4">{items}</div>
</section>"""


def render_video(c: VideoContent, ctx: RenderContext) -> str:
    if not c.url:
        return '<div class="video-block video-block--empty"><p>Add a video URL</p></div>'
    title = f'<h3 class="video-block__title">{e(c.title)}</h3>' if c.title else ""
    embed = video_embed_url(c.url)
    if embed:
        src = embed + ("?autoplay=1" if c.autoplay else "")
        player = (f'<iframe src="{e(src)}" title="{e(c.title or "Embedded video")}" '
                  f'allow="autoplay; encrypted-media" allowfullscreen></iframe>')
    else:
        player = f'<video src="{e(c.url)}" controls{" autoplay muted" if c.autoplay else ""}></video>'
    return f"""<section class="video-block container mx-auto px-6 py-16">
  {title}
  <div class="video-block__frame aspect-video">{player}</div>
</section>"""


# ── Marketing ───────────────────────────────────────────────────────────────

def render_features(c: FeaturesContent, ctx: RenderContext) -> str:
    items = "".join(
        f'<div class="features__item"><span class="features__icon" data-icon="{e(f.icon)}"></span>'
        f'<h3 class="features__title">{e(f.title)}</h3><p class="features__text">{e(f.description)}</p></div>'
        for f in c.items
    )
    return f"""<section class="features py-16">
  <div class="container mx-auto px-6"><div class="grid grid-cols-1 md:grid-cols-3 gap-8">{items}</div></div>
</section>"""


def render_newsletter(c: NewsletterContent, ctx: RenderContext) -> str:
    return f"""<section class="newsletter py-24">
  <div class="container mx-auto px-6 text-center">
    <h2 class="newsletter__title">{e(c.title)}</h2>
    <p class="newsletter__text">{e(c.description)}</p>
    <form class="newsletter__form" method="post" action="/newsletter">
      <input type="email" name="email" required placeholder="{e(c.placeholder)}">
      <button type="submit" class="btn btn-primary">{e(c.button_text)}</button>
    </form>
  </div>
</section>"""


def render_faq(c: FAQContent, ctx: RenderContext) -> str:
    items = "".join(
        f'<details class="faq__item"><summary class="faq__question">{e(i.question)}</summary>'
        f'<div class="faq__answer">{e(i.answer)}</div></details>'
        for i in c.items
    )
    return f"""<section class="faq py-16">
  <div class="container mx-auto px-6 max-w-3xl">
    {_header(c.title, c.subtitle)}
    <div class="faq__list">{items}</div>
  </div>
</section>"""


def render_testimonials(c: TestimonialsContent, ctx: RenderContext) -> str:
    cards = ""
    for t in c.items:
        avatar = f'<img src="{e(t.avatar)}" alt="{e(t.name)}" class="testimonials__avatar">' if t.avatar else ""
        role = f'<div class="testimonials__role">{e(t.role)}</div>' if t.role else ""
        cards += f"""<div class="testimonials__card">
  <blockquote class="testimonials__quote">&ldquo;{e(t.quote)}&rdquo;</blockquote>
  {avatar}<div class="testimonials__author">{e(t.name)}</div>{role}
</div>"""
    return f"""<section class="testimonials py-16">
  <div class="container mx-auto px-6">
    {_header(c.title, c.subtitle)}
    <div class="grid grid-cols-1 md:grid-cols-3 gap-8">{cards}</div>
  </div>
</section>"""


_CTA_VARIANT = {
    "default":  "bg-primary/5 border",
    "dark":     "bg-zinc-900 text-white",
    "gradient": "bg-gradient-to-r from-primary to-primary/60 text-white",
}


def render_cta(c: CTAContent, ctx: RenderContext) -> str:
    desc = f'<p class="cta-block__text">{e(c.description)}</p>' if c.description else ""
    if c.button_link:
        button = f'<a href="{e(c.button_link)}" class="btn btn-primary">{e(c.button_text)}</a>'
    else:
        button = f'<button class="btn btn-primary">{e(c.button_text)}</button>'
    return f"""<section class="cta-block py-16 {_CTA_VARIANT[c.variant]}">
  <div class="container mx-auto px-6 text-center">
    <h2 class="cta-block__title">{e(c.title)}</h2>
    {desc}
    <div class="cta-block__actions">{button}</div>
  </div>
</section>"""


def _stat_value(v: float) -> str:
    return f"{int(v):,}" if float(v).is_integer() else f"{v:,}"


def render_stats(c: StatsContent, ctx: RenderContext) -> str:
    items = ""
    for s in c.items:
        count = f' data-count="{s.value}"' if c.animate_numbers else ""
        items += (f'<div class="stats__item"><div class="stats__value"{count}>'
                  f'{e(s.prefix)}{_stat_value(s.value)}{e(s.suffix)}</div>'
                  f'<div class="stats__label">{e(s.label)}</div></div>')
    return f"""<section class="stats stats--{c.variant} py-16">
  <div class="container mx-auto px-6">
    {_header(c.title, None)}
    <div class="stats__grid">{items}</div>
  </div>
</section>"""


def countdown_remaining(target: Optional[str], now: Optional[datetime] = None) -> dict:
    """Days/hours/minutes/seconds left until ``target`` (ISO-8601), floored at zero."""
    now = now or datetime.now(timezone.utc)
    end = None
    if target:
        try:
            end = datetime.fromisoformat(target.replace("Z", "+00:00"))
        except ValueError:
            end = None
    if end is None:
        end = now + timedelta(days=7)
    if end.tzinfo is None:
        end = end.replace(tzinfo=timezone.utc)
    secs = max(0, int((end - now).total_seconds()))
    return {
        "days": secs // 86400,
        "hours": secs % 86400 // 3600,
        "minutes": secs % 3600 // 60,
        "seconds": secs % 60,
        "target": end.isoformat(),
    }


def render_countdown(c: CountdownContent, ctx: RenderContext) -> str:
    left = countdown_remaining(c.target_date)
    units = [("days", c.show_days), ("hours", c.show_hours),
             ("minutes", c.show_minutes), ("seconds", c.show_seconds)]
    cells = "".join(
        f'<div class="countdown__unit"><span class="countdown__value" data-unit="{u}">{left[u]:02d}</span>'
        f'<span class="countdown__label">{u.capitalize()}</span></div>'
        for u, shown in units if shown
    )
    title = f'<h2 class="countdown__title">{e(c.title)}</h2>' if c.title else ""
    return f"""<section class="countdown countdown--{c.variant} py-12" data-target="{e(left["target"])}">
  <div class="container mx-auto px-6 text-center">{title}<div class="countdown__units">{cells}</div></div>
</section>"""


_LOGO_SPEED = {"slow": "40s", "normal": "25s", "fast": "15s"}


def render_logo_carousel(c: LogoCarouselContent, ctx: RenderContext) -> str:
    logos = ""
    for logo in c.logos:
        img = f'<img src="{e(logo.url)}" alt="{e(logo.alt)}">'
        logos += f'<a href="{e(logo.link)}" class="logos__item">{img}</a>' if logo.link else f'<div class="logos__item">{img}</div>'
    gray = " logos--grayscale" if c.grayscale else ""
    return f"""<section class="logos{gray} py-12">
  {_header(c.title, None)}
  <div class="logos__track" style="animation-duration:{_LOGO_SPEED[c.speed]}">{logos}{logos}</div>
</section>"""


def render_social_feed(c: SocialFeedContent, ctx: RenderContext) -> str:
    cols = {3: "grid-cols-3", 4: "grid-cols-2 md:grid-cols-4",
            5: "grid-cols-3 md:grid-cols-5", 6: "grid-cols-3 md:grid-cols-6"}[c.columns]
    handle = c.instagram_handle.lstrip("@")
    profile = f"https://instagram.com/{handle}"
    items = "".join(
        f'<a href="{e(img.link or profile)}" class="social-feed__item"><img src="{e(img.url)}" alt=""></a>'
        for img in c.images
    )
    follow = (f'<a href="{e(profile)}" class="btn btn-secondary social-feed__follow">Follow @{e(handle)}</a>'
              if c.show_follow_button else "")
    return f"""<section class="social-feed py-16">
  {_header(c.title, c.subtitle)}
  <div class="grid {cols} gap-1">{items}</div>
  {follow}
</section>"""


# ── Structure ───────────────────────────────────────────────────────────────

_COLUMNS_GRID   = {1: "grid-cols-1", 2: "grid-cols-1 md:grid-cols-2",
                   3: "grid-cols-1 md:grid-cols-3", 4: "grid-cols-1 sm:grid-cols-2 lg:grid-cols-4"}
_COLUMNS_GAP    = {"small": "gap-4", "medium": "gap-8", "large": "gap-12"}
_COLUMNS_ALIGN  = {"top": "items-start", "center": "items-center", "bottom": "items-end"}
_COLUMNS_PAD    = {"none": "py-0", "small": "py-8", "medium": "py-16", "large": "py-24"}
_COLUMNS_BG     = {"none": "", "muted": "bg-muted/30 rounded-lg p-6",
                   "card": "bg-background rounded-lg shadow-sm border p-6"}
_TEXT_ALIGN     = {"left": "text-left", "center": "text-center", "right": "text-right"}
_TITLE_SIZE     = {"small": "text-base", "medium": "text-lg", "large": "text-2xl"}


def render_columns(c: ColumnsContent, ctx: RenderContext) -> str:
    items = list(c.items[:c.columns])
    while len(items) < c.columns:
        items.append(ColumnItem(title=f"Column {len(items) + 1}", content="Add content here..."))
    cols = ""
    for item in items:
        icon = f'<span class="columns__icon" data-icon="{e(item.icon)}"></span>' if c.show_icons and item.icon else ""
        img = f'<img src="{e(item.image)}" alt="" class="columns__image">' if item.image else ""
        title = f'<h3 class="{_cls("columns__title", _TITLE_SIZE[c.title_size])}">{e(item.title)}</h3>' if item.title else ""
        body = f'<p class="columns__text">{e(item.content)}</p>' if item.content else ""
        cols += f'<div class="{_cls("columns__item", _COLUMNS_BG[c.column_background], _TEXT_ALIGN[c.text_align])}">{img}{icon}{title}{body}</div>'
    bg = f' style="background-color:{e(c.background_color)}"' if c.background_color else ""
    header = _header(c.section_title, c.section_subtitle,
                     "text-center" if c.text_align == "center" else "text-left")
    grid = _cls("grid", _COLUMNS_GRID[c.columns], _COLUMNS_GAP[c.gap], _COLUMNS_ALIGN[c.vertical_align],
                "divide-x divide-border" if c.show_dividers else "")
    return f"""<section class="{_cls("columns", _COLUMNS_PAD[c.padding])}"{bg}>
  <div class="container mx-auto">
    {header}
    <div class="{grid}">{cols}</div>
  </div>
</section>"""


_SPACER_HEIGHT = {"small": "h-8", "medium": "h-16", "large": "h-24", "custom": ""}


def render_spacer(c: SpacerContent, ctx: RenderContext) -> str:
    style = f' style="height:{c.custom_height}px"' if c.height == "custom" and c.custom_height else ""
    divider = ""
    if c.show_divider:
        divider = (f'<hr class="spacer__divider" style="border-style:{c.divider_style};'
                   f'border-color:{e(c.divider_color)};opacity:0.2">')
    return f'<div class="{_cls("spacer flex items-center", _SPACER_HEIGHT[c.height])}"{style}>{divider}</div>'


def render_map(c: MapContent, ctx: RenderContext) -> str:
    embed = c.embed_url
    if not embed and c.lat is not None and c.lng is not None:
        embed = f"https://maps.google.com/maps?q={c.lat},{c.lng}&z={c.zoom}&output=embed"
    link = c.button_link
    if not link and c.lat is not None and c.lng is not None:
        link = f"https://www.google.com/maps?q={c.lat},{c.lng}"

    if c.map_image:
        visual = f'<img src="{e(c.map_image)}" alt="Map" class="map-block__image">'
    elif embed:
        visual = f'<iframe src="{e(embed)}" class="map-block__frame" loading="lazy" title="Map"></iframe>'
    else:
        visual = '<div class="map-block__placeholder"></div>'

    card = ""
    if c.show_address_card:
        button = f'<a href="{e(link)}" class="btn btn-primary" target="_blank" rel="noopener">{e(c.button_text)}</a>' if link else ""
        card = f'<div class="map-block__card"><p class="map-block__address">{e(c.address)}</p>{button}</div>'
    return f"""<section class="map-block py-16">
  <div class="container mx-auto px-6">
    {_header(c.title, None)}
    <div class="map-block__inner">{visual}{card}</div>
  </div>
</section>"""
