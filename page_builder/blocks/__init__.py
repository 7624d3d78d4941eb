"""
Blocks — public exports and the kind → configuration registry.
"""
from typing import Dict, Type

from .base import Block, BlockContent, BlockKind
from .hero import HeroContent, HeroSlide
from .content import GalleryContent, GalleryImage, ImageContent, TextContent, VideoContent
from .commerce import (
    DEFAULT_EMPTY_MESSAGE,
    CategoryGridContent,
    CollectionGridContent,
    ProductGridContent,
)
from .marketing import (
    CountdownContent,
    CTAContent,
    FAQContent, FAQItem,
    FeatureItem, FeaturesContent,
    LogoCarouselContent, LogoItem,
    NewsletterContent,
    SocialFeedContent, SocialImage,
    StatItem, StatsContent,
    Testimonial, TestimonialsContent,
)
from .layout import ColumnItem, ColumnsContent, MapContent, SpacerContent

# must cover every BlockKind
BLOCK_CONTENT: Dict[BlockKind, Type[BlockContent]] = {
    BlockKind.HERO:            HeroContent,
    BlockKind.TEXT:            TextContent,
    BlockKind.IMAGE:           ImageContent,
    BlockKind.GALLERY:         GalleryContent,
    BlockKind.VIDEO:           VideoContent,
    BlockKind.PRODUCT_GRID:    ProductGridContent,
    BlockKind.COLLECTION_GRID: CollectionGridContent,
    BlockKind.CATEGORY_GRID:   CategoryGridContent,
    BlockKind.FEATURES:        FeaturesContent,
    BlockKind.NEWSLETTER:      NewsletterContent,
    BlockKind.FAQ:             FAQContent,
    BlockKind.TESTIMONIALS:    TestimonialsContent,
    BlockKind.CTA:             CTAContent,
    BlockKind.COLUMNS:         ColumnsContent,
    BlockKind.SPACER:          SpacerContent,
    BlockKind.COUNTDOWN:       CountdownContent,
    BlockKind.STATS:           StatsContent,
    BlockKind.LOGO_CAROUSEL:   LogoCarouselContent,
    BlockKind.MAP:             MapContent,
    BlockKind.SOCIAL_FEED:     SocialFeedContent,
}

# Kinds whose rendering depends on a catalogue query
DATA_BOUND_KINDS = frozenset({
    BlockKind.PRODUCT_GRID,
    BlockKind.CATEGORY_GRID,
    BlockKind.COLLECTION_GRID,
})


def content_model(kind: BlockKind) -> Type[BlockContent]:
    return BLOCK_CONTENT[kind]


__all__ = [
    "Block", "BlockContent", "BlockKind",
    "BLOCK_CONTENT", "DATA_BOUND_KINDS", "content_model",
    "HeroContent", "HeroSlide",
    "TextContent", "ImageContent", "GalleryContent", "GalleryImage", "VideoContent",
    "ProductGridContent", "CategoryGridContent", "CollectionGridContent", "DEFAULT_EMPTY_MESSAGE",
    "FeaturesContent", "FeatureItem", "NewsletterContent", "FAQContent", "FAQItem",
    "TestimonialsContent", "Testimonial", "CTAContent", "StatsContent", "StatItem",
    "CountdownContent", "LogoCarouselContent", "LogoItem", "SocialFeedContent", "SocialImage",
    "ColumnsContent", "ColumnItem", "SpacerContent", "MapContent",
]
