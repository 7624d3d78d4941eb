"""
Layout option resolution for grid-style blocks.

Every visual option maps through a fixed table to concrete utility classes.
The tables are total over their option values; an absent option resolves
to the ``None`` entry, which is the block kind's default.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..blocks.base import BlockKind

# ── Columns ─────────────────────────────────────────────────────────────────

CATEGORY_COLUMNS: Dict[Optional[int], str] = {
    2: "grid-cols-1 sm:grid-cols-2",
    3: "grid-cols-1 sm:grid-cols-2 lg:grid-cols-3",
    4: "grid-cols-2 sm:grid-cols-2 md:grid-cols-3 lg:grid-cols-4",
    5: "grid-cols-2 sm:grid-cols-3 lg:grid-cols-5",
    6: "grid-cols-2 sm:grid-cols-3 lg:grid-cols-4 xl:grid-cols-6",
}
CATEGORY_COLUMNS[None] = CATEGORY_COLUMNS[3]

COLLECTION_COLUMNS: Dict[Optional[int], str] = dict(CATEGORY_COLUMNS)
COLLECTION_COLUMNS[None] = COLLECTION_COLUMNS[4]

# ── Gap ─────────────────────────────────────────────────────────────────────

CATEGORY_GAP: Dict[Optional[str], str] = {
    "small":  "gap-2 sm:gap-3",
    "medium": "gap-3 sm:gap-4 md:gap-6",
    "large":  "gap-4 sm:gap-6 md:gap-8",
}
CATEGORY_GAP[None] = CATEGORY_GAP["medium"]

COLLECTION_GAP: Dict[Optional[str], str] = {
    "small":  "gap-2 sm:gap-3 md:gap-4",
    "medium": "gap-3 sm:gap-4 md:gap-6",
    "large":  "gap-4 sm:gap-6 md:gap-8",
}
COLLECTION_GAP[None] = COLLECTION_GAP["large"]

# ── Padding ─────────────────────────────────────────────────────────────────

CATEGORY_PADDING: Dict[Optional[str], str] = {
    "none":   "py-0",
    "small":  "py-4 sm:py-6 md:py-8",
    "medium": "py-16",
    "large":  "py-24",
}
CATEGORY_PADDING[None] = CATEGORY_PADDING["medium"]

COLLECTION_PADDING: Dict[Optional[str], str] = {
    "none":   "py-0",
    "small":  "py-4 sm:py-6 md:py-8",
    "medium": "py-8 sm:py-12 md:py-16",
    "large":  "py-12 sm:py-16 md:py-24",
}
COLLECTION_PADDING[None] = COLLECTION_PADDING["medium"]

# ── Card options (category grid) ────────────────────────────────────────────

ASPECT_RATIO: Dict[Optional[str], str] = {
    "square":    "aspect-square",
    "portrait":  "aspect-[3/4]",
    "landscape": "aspect-[4/3]",
    "wide":      "aspect-[16/9]",
}
ASPECT_RATIO[None] = ASPECT_RATIO["landscape"]

HEADER_ALIGN: Dict[Optional[str], str] = {
    "left":   "text-left",
    "center": "text-center",
    "right":  "text-right",
}

CARD_STYLE: Dict[Optional[str], str] = {
    "rounded": "rounded-lg",
    "square":  "rounded-none",
    "circle":  "rounded-full",
}
CARD_STYLE[None] = CARD_STYLE["rounded"]

HOVER_EFFECT: Dict[Optional[str], str] = {
    "zoom": "group-hover:scale-105 transition-transform duration-500",
    "lift": "group-hover:-translate-y-1 transition-transform",
    "none": "",
}
HOVER_EFFECT[None] = HOVER_EFFECT["zoom"]

TEXT_POSITION: Dict[Optional[str], str] = {
    "bottom":  "bottom-0",
    "center":  "top-1/2 -translate-y-1/2 text-center",
    "overlay": "inset-0 flex flex-col items-center justify-center text-center",
}
TEXT_POSITION[None] = TEXT_POSITION["bottom"]


@dataclass(frozen=True)
class GridLayout:
    """Concrete classes for one grid-style block."""
    columns: str
    gap: str
    padding: str
    header_align: str
    aspect_ratio: str = ""
    card_style: str = ""
    hover_effect: str = ""
    text_position: str = ""


def _pick(table: Dict[Optional[Any], str], value: Any, default: Any = None) -> str:
    # values outside the table behave like an absent option
    try:
        return table.get(value, table[default])
    except TypeError:
        return table[default]


def resolve_grid_layout(kind: BlockKind, config: Any = None) -> GridLayout:
    """
    Resolve the layout classes of a category or collection grid.

    ``config`` may be the typed content record, a raw mapping with camelCase
    keys, or None (every option absent).
    """
    def opt(attr: str, key: str):
        if config is None:
            return None
        if isinstance(config, dict):
            return config.get(key)
        return getattr(config, attr, None)

    if kind == BlockKind.COLLECTION_GRID:
        header = _pick(HEADER_ALIGN, opt("header_align", "headerAlign"), "left")
        return GridLayout(
            columns=_pick(COLLECTION_COLUMNS, opt("columns", "columns")),
            gap=_pick(COLLECTION_GAP, opt("gap", "gap")),
            padding=_pick(COLLECTION_PADDING, opt("padding", "padding")),
            header_align=header,
        )

    header = _pick(HEADER_ALIGN, opt("header_align", "headerAlign"), "center")
    return GridLayout(
        columns=_pick(CATEGORY_COLUMNS, opt("columns", "columns")),
        gap=_pick(CATEGORY_GAP, opt("gap", "gap")),
        padding=_pick(CATEGORY_PADDING, opt("padding", "padding")),
        header_align=header,
        aspect_ratio=_pick(ASPECT_RATIO, opt("aspect_ratio", "aspectRatio")),
        card_style=_pick(CARD_STYLE, opt("card_style", "cardStyle")),
        hover_effect=_pick(HOVER_EFFECT, opt("hover_effect", "hoverEffect")),
        text_position=_pick(TEXT_POSITION, opt("text_position", "textPosition")),
    )
