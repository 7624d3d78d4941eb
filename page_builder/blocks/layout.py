"""Structural blocks — columns, spacer, map."""
from typing import List, Literal, Optional

from pydantic import Field

from .base import BlockContent


class ColumnItem(BlockContent):
    title: Optional[str] = None
    content: Optional[str] = None
    image: Optional[str] = None
    icon: Optional[str] = None


def _default_column_items() -> List[ColumnItem]:
    return [
        ColumnItem(title="Column 1", content="Add your content here.", icon="Star"),
        ColumnItem(title="Column 2", content="Each column can have its own content.", icon="Heart"),
    ]


class ColumnsContent(BlockContent):
    section_title: Optional[str] = None
    section_subtitle: Optional[str] = None
    items: List[ColumnItem] = Field(default_factory=_default_column_items)
    columns: Literal[1, 2, 3, 4] = 2
    gap: Literal["small", "medium", "large"] = "medium"
    vertical_align: Literal["top", "center", "bottom"] = "top"
    padding: Literal["none", "small", "medium", "large"] = "small"
    background_color: Optional[str] = None
    column_background: Literal["none", "muted", "card"] = "none"
    show_dividers: bool = False
    show_icons: bool = False
    text_align: Literal["left", "center", "right"] = "left"
    title_size: Literal["small", "medium", "large"] = "medium"


class SpacerContent(BlockContent):
    height: Literal["small", "medium", "large", "custom"] = "medium"
    custom_height: Optional[int] = Field(default=None, ge=0)
    show_divider: bool = False
    divider_style: Literal["solid", "dashed", "dotted"] = "solid"
    divider_color: str = "currentColor"


class MapContent(BlockContent):
    title: Optional[str] = None
    address: str = "123 Main St, City, Country"
    embed_url: Optional[str] = None
    map_image: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    zoom: int = Field(default=14, ge=1, le=21)
    show_address_card: bool = True
    button_text: str = "Get Directions"
    button_link: Optional[str] = None
