"""
Persisted page document.

``content`` is stored as one ordered list of ``{id, type, content}``
triples. Loading and saving preserve that order exactly; saves replace the
whole sequence (last writer wins).
"""
from collections import Counter
from typing import Any, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .blocks.base import Block
from .core.theme import PageTheme

TEMPLATE_SLUGS = frozenset({"collection-template"})


class PageDocument(BaseModel):
    id: Optional[str] = None
    title: str = ""
    slug: str = ""
    content: List[Block] = Field(default_factory=list)
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_image: Optional[str] = None
    status: Literal["draft", "published"] = "draft"
    is_home: bool = False
    theme: Optional[PageTheme] = None

    @field_validator("theme", mode="before")
    @classmethod
    def _theme(cls, v):
        return v if isinstance(v, PageTheme) else PageTheme.coerce(v)

    @field_validator("content", mode="before")
    @classmethod
    def _content_list(cls, v):
        if not isinstance(v, list):
            return []
        return [b for b in v if isinstance(b, Block) or _is_block_record(b)]

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "PageDocument":
        return cls.model_validate(dict(record))

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "content": blocks_to_records(self.content),
            "meta_title": self.meta_title,
            "meta_description": self.meta_description,
            "meta_image": self.meta_image,
            "status": self.status,
            "is_home": self.is_home,
            "theme": self.theme.to_record() if self.theme else None,
        }

    @property
    def is_published(self) -> bool:
        return self.status == "published"

    @property
    def is_template(self) -> bool:
        return self.slug in TEMPLATE_SLUGS


def _is_block_record(r: Any) -> bool:
    # entries without a string type cannot be dispatched and are dropped
    return isinstance(r, Mapping) and isinstance(r.get("type"), str)


def blocks_from_records(records: Any) -> List[Block]:
    if not isinstance(records, list):
        return []
    return [Block.model_validate(dict(r)) for r in records if _is_block_record(r)]


def blocks_to_records(blocks: List[Block]) -> List[dict]:
    return [b.to_record() for b in blocks]


def duplicate_block_ids(blocks: List[Block]) -> List[str]:
    counts = Counter(b.id for b in blocks)
    return [bid for bid, n in counts.items() if n > 1]
