"""
Data models — pages, page versions, collections, products, categories, courier credentials.
SQLAlchemy (SQLite) + Pydantic v2 request schemas.
"""
import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

import sqlalchemy as sa
from pydantic import BaseModel, Field
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _uuid() -> str:
    return str(uuid.uuid4())


# ── ENUMS ──────────────────────────────────────────────────────────────

class PageStatus(str, Enum):
    DRAFT     = "draft"
    PUBLISHED = "published"


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class PageDB(Base):
    __tablename__ = "pages"
    id:               Mapped[str]           = mapped_column(sa.String, primary_key=True, default=_uuid)
    title:            Mapped[str]           = mapped_column(sa.String, nullable=False)
    slug:             Mapped[str]           = mapped_column(sa.String, nullable=False, unique=True)
    # ordered list of {id, type, content}, saved as one document
    content:          Mapped[str]           = mapped_column(sa.Text, default="[]")
    meta_title:       Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    meta_description: Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    meta_image:       Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    status:           Mapped[str]           = mapped_column(sa.String, default=PageStatus.DRAFT.value)
    is_home:          Mapped[bool]          = mapped_column(sa.Boolean, default=False)
    # PageTheme mapping (camelCase keys), NULL = store default look
    theme:            Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    created_at:       Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at:       Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    versions: Mapped[List["PageVersionDB"]] = relationship("PageVersionDB", back_populates="page", cascade="all, delete-orphan")


class PageVersionDB(Base):
    __tablename__ = "page_versions"
    __table_args__ = (sa.UniqueConstraint("page_id", "version_number"),)
    id:             Mapped[str]           = mapped_column(sa.String, primary_key=True, default=_uuid)
    page_id:        Mapped[str]           = mapped_column(sa.String, sa.ForeignKey("pages.id"), nullable=False)
    version_number: Mapped[int]           = mapped_column(sa.Integer, nullable=False)
    content:        Mapped[str]           = mapped_column(sa.Text, default="[]")
    meta_title:     Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    description:    Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    meta_image:     Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    created_at:     Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)
    created_by:     Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)

    page: Mapped["PageDB"] = relationship("PageDB", back_populates="versions")


class CategoryDB(Base):
    __tablename__ = "categories"
    id:            Mapped[str]           = mapped_column(sa.String, primary_key=True, default=_uuid)
    name:          Mapped[str]           = mapped_column(sa.String, nullable=False)
    slug:          Mapped[str]           = mapped_column(sa.String, nullable=False, unique=True)
    description:   Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    image_url:     Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    is_active:     Mapped[bool]          = mapped_column(sa.Boolean, default=True)
    display_order: Mapped[int]           = mapped_column(sa.Integer, default=0)


class ProductDB(Base):
    __tablename__ = "products"
    id:         Mapped[str]           = mapped_column(sa.String, primary_key=True, default=_uuid)
    name:       Mapped[str]           = mapped_column(sa.String, nullable=False)
    price:      Mapped[Decimal]       = mapped_column(sa.Numeric(10, 2), nullable=False, default=Decimal("0"))
    # ordered JSON list, first = featured image
    images:     Mapped[str]           = mapped_column(sa.Text, default="[]")
    category:   Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    stock:      Mapped[int]           = mapped_column(sa.Integer, default=0)
    featured:   Mapped[bool]          = mapped_column(sa.Boolean, default=False)
    created_at: Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)


class CollectionDB(Base):
    __tablename__ = "collections"
    id:          Mapped[str]           = mapped_column(sa.String, primary_key=True, default=_uuid)
    title:       Mapped[str]           = mapped_column(sa.String, nullable=False)
    slug:        Mapped[str]           = mapped_column(sa.String, nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    image:       Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    is_visible:  Mapped[bool]          = mapped_column(sa.Boolean, default=True)
    sort_order:  Mapped[int]           = mapped_column(sa.Integer, default=0)
    page_id:     Mapped[Optional[str]] = mapped_column(sa.String, sa.ForeignKey("pages.id", ondelete="SET NULL"), nullable=True)
    created_at:  Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)

    page: Mapped[Optional["PageDB"]] = relationship("PageDB")


class ProductCollectionDB(Base):
    """Membership join table; row order carries no meaning."""
    __tablename__ = "product_collections"
    __table_args__ = (sa.UniqueConstraint("collection_id", "product_id"),)
    id:            Mapped[str] = mapped_column(sa.String, primary_key=True, default=_uuid)
    collection_id: Mapped[str] = mapped_column(sa.String, sa.ForeignKey("collections.id", ondelete="CASCADE"), nullable=False)
    product_id:    Mapped[str] = mapped_column(sa.String, sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False)


class CourierIntegrationDB(Base):
    __tablename__ = "courier_integrations"
    id:               Mapped[str]                = mapped_column(sa.String, primary_key=True, default=_uuid)
    courier_name:     Mapped[str]                = mapped_column(sa.String, nullable=False, unique=True)
    client_id:        Mapped[Optional[str]]      = mapped_column(sa.String, nullable=True)
    client_secret:    Mapped[Optional[str]]      = mapped_column(sa.String, nullable=True)
    access_token:     Mapped[Optional[str]]      = mapped_column(sa.Text, nullable=True)
    refresh_token:    Mapped[Optional[str]]      = mapped_column(sa.Text, nullable=True)
    token_expires_at: Mapped[Optional[datetime]] = mapped_column(sa.DateTime, nullable=True)
    is_active:        Mapped[bool]               = mapped_column(sa.Boolean, default=False)
    updated_at:       Mapped[datetime]           = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# ── PYDANTIC SCHEMAS ────────────────────────────────────────────────────

class PageCreate(BaseModel):
    title:            str
    slug:             str
    content:          List[Dict[str, Any]] = Field(default_factory=list)
    meta_title:       Optional[str] = None
    meta_description: Optional[str] = None
    meta_image:       Optional[str] = None
    status:           PageStatus    = PageStatus.DRAFT
    is_home:          bool          = False
    theme:            Optional[Dict[str, Any]] = None


class PageUpdate(BaseModel):
    title:            Optional[str]        = None
    slug:             Optional[str]        = None
    meta_title:       Optional[str]        = None
    meta_description: Optional[str]        = None
    meta_image:       Optional[str]        = None
    status:           Optional[PageStatus] = None
    is_home:          Optional[bool]       = None
    theme:            Optional[Dict[str, Any]] = None


class ContentReplace(BaseModel):
    content: List[Dict[str, Any]]


class BlockAdd(BaseModel):
    type:    str
    content: Dict[str, Any] = Field(default_factory=dict)
    index:   Optional[int]  = None


class BlockMove(BaseModel):
    block_id:  str
    target_id: Optional[str] = None
    index:     Optional[int] = None


class BlockContentPatch(BaseModel):
    content: Dict[str, Any]
    merge:   bool = True


class VersionCreate(BaseModel):
    created_by: Optional[str] = None


class CollectionCreate(BaseModel):
    title:       str
    slug:        str
    description: Optional[str] = None
    image:       Optional[str] = None
    is_visible:  bool          = True
    sort_order:  int           = 0
    page_id:     Optional[str] = None


class CollectionUpdate(BaseModel):
    title:       Optional[str]  = None
    slug:        Optional[str]  = None
    description: Optional[str]  = None
    image:       Optional[str]  = None
    is_visible:  Optional[bool] = None
    sort_order:  Optional[int]  = None
    page_id:     Optional[str]  = None


class MembershipInput(BaseModel):
    product_id: str


class ProductCreate(BaseModel):
    name:     str
    price:    Decimal       = Field(ge=0)
    images:   List[str]     = Field(default_factory=list)
    category: Optional[str] = None
    stock:    int           = 0
    featured: bool          = False
