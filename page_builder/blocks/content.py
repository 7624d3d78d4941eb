"""Editorial blocks — rich text, single image, gallery, video embed."""
from typing import List, Literal, Optional

from pydantic import Field

from .base import BlockContent


class TextContent(BlockContent):
    # authored HTML, rendered as-is
    text: Optional[str] = None


class ImageContent(BlockContent):
    url: str = "https://placehold.co/800x400"
    alt: str = "Block image"


class GalleryImage(BlockContent):
    url: str
    alt: Optional[str] = None
    caption: Optional[str] = None


def _default_gallery() -> List[GalleryImage]:
    return [GalleryImage(url=f"https://placehold.co/600x600?text={i}") for i in range(1, 7)]


class GalleryContent(BlockContent):
    title: Optional[str] = None
    columns: Literal[2, 3, 4] = 3
    images: List[GalleryImage] = Field(default_factory=_default_gallery)


class VideoContent(BlockContent):
    url: Optional[str] = None
    title: Optional[str] = None
    autoplay: bool = False
