"""
Base block types.

A page stores its blocks as an ordered list of ``{id, type, content}``
triples. ``content`` stays an opaque mapping at the storage layer; each kind
owns a typed ``BlockContent`` record that is built from that mapping at the
render boundary, with every missing or invalid key falling back to its
default.
"""
import logging
import uuid
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

log = logging.getLogger(__name__)


class BlockKind(str, Enum):
    HERO            = "hero"
    TEXT            = "text"
    IMAGE           = "image"
    GALLERY         = "gallery"
    VIDEO           = "video"
    PRODUCT_GRID    = "product-grid"
    COLLECTION_GRID = "collection-grid"
    CATEGORY_GRID   = "category-grid"
    FEATURES        = "features"
    NEWSLETTER      = "newsletter"
    FAQ             = "faq"
    TESTIMONIALS    = "testimonials"
    CTA             = "cta"
    COLUMNS         = "columns"
    SPACER          = "spacer"
    COUNTDOWN       = "countdown"
    STATS           = "stats"
    LOGO_CAROUSEL   = "logo-carousel"
    MAP             = "map"
    SOCIAL_FEED     = "social-feed"

    @classmethod
    def parse(cls, value: Any) -> Optional["BlockKind"]:
        """Kind for a raw type string, None when the type is unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


class BlockContent(BaseModel):
    """Typed configuration of a block. Payload keys are camelCase."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def coerce(cls, payload: Any) -> "BlockContent":
        """
        Build the record from a raw payload, never raising.

        Keys that fail validation are dropped one round at a time so that
        they resolve to their defaults while the valid keys are kept.
        """
        if not isinstance(payload, Mapping):
            return cls()
        data = {k: v for k, v in payload.items() if v is not None}
        while True:
            try:
                return cls.model_validate(data)
            except ValidationError as e:
                bad = {err["loc"][0] for err in e.errors() if err["loc"]}
                bad &= set(data)
                if not bad:
                    log.debug("%s: unusable payload, using defaults", cls.__name__)
                    return cls()
                for key in bad:
                    data.pop(key)


class Block(BaseModel):
    """One persisted block: stable id, raw type string, opaque content."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    type: str
    content: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def _id_str(cls, v):
        return str(uuid.uuid4()) if v is None else str(v)

    @field_validator("content", mode="before")
    @classmethod
    def _content_mapping(cls, v):
        return dict(v) if isinstance(v, Mapping) else {}

    @property
    def kind(self) -> Optional[BlockKind]:
        return BlockKind.parse(self.type)

    def config(self) -> Optional[BlockContent]:
        """Typed configuration for this block, None for an unknown type."""
        from . import content_model
        kind = self.kind
        if kind is None:
            return None
        return content_model(kind).coerce(self.content)

    def to_record(self) -> dict:
        return {"id": self.id, "type": self.type, "content": dict(self.content)}
