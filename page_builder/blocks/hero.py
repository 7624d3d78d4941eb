"""Hero block — slideshow of full-width banners with up to two buttons."""
from typing import List, Optional

from pydantic import Field

from .base import BlockContent


class HeroSlide(BlockContent):
    image: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    button1_text: Optional[str] = None
    button1_link: Optional[str] = None
    button2_text: Optional[str] = None
    button2_link: Optional[str] = None


def _default_slides() -> List[HeroSlide]:
    return [HeroSlide(title="Hero Title", subtitle="Subtitle goes here")]


class HeroContent(BlockContent):
    slides: List[HeroSlide] = Field(default_factory=_default_slides, min_length=1)
    auto_play: bool = False
    auto_play_interval: int = Field(default=5000, gt=0)
    show_dots: bool = True
    show_arrows: bool = True
    overlay_opacity: float = Field(default=0.5, ge=0, le=1)
