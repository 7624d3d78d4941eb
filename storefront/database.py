"""SQLite — init + session + CRUD helpers"""
import json, logging, os
from pathlib import Path
from typing import List, Optional

from sqlalchemy import create_engine, func
from sqlalchemy.orm import Session, sessionmaker

from .models import (
    Base, CollectionDB, CourierIntegrationDB, PageDB, PageStatus,
    PageVersionDB, ProductCollectionDB, ProductDB,
)

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"

DB_PATH      = os.getenv("DB_PATH", str(DATA_DIR / "storefront.db"))
ENGINE       = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False)

VERSION_LIST_LIMIT = 20


def _engine(path: str):
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(f"sqlite:///{path}", connect_args={"check_same_thread": False})


def init_db(db_path: Optional[str] = None):
    """Bind the session factory to ``db_path`` (or $DB_PATH) and create tables."""
    global ENGINE, DB_PATH
    DB_PATH = db_path or os.getenv("DB_PATH", DB_PATH)
    if ENGINE is not None:
        ENGINE.dispose()
    ENGINE = _engine(DB_PATH)
    SessionLocal.configure(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    log.info("Database ready at %s", DB_PATH)


def get_db():
    if ENGINE is None:
        init_db()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── JSON helpers ──
def jl(s: str) -> list:
    try:
        v = json.loads(s or "[]")
    except (TypeError, ValueError):
        return []
    return v if isinstance(v, list) else []

def jo(s: Optional[str]) -> dict:
    try:
        v = json.loads(s or "{}")
    except (TypeError, ValueError):
        return {}
    return v if isinstance(v, dict) else {}

def jd(o) -> str:
    return json.dumps(o, ensure_ascii=False, default=str)


# ── Pages ──
def db_create_page(db: Session, obj: PageDB) -> PageDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_page(db: Session, page_id: str) -> Optional[PageDB]:
    return db.get(PageDB, page_id)

def db_get_page_by_slug(db: Session, slug: str) -> Optional[PageDB]:
    return db.query(PageDB).filter_by(slug=slug).first()

def db_get_home_page(db: Session) -> Optional[PageDB]:
    return (db.query(PageDB)
              .filter_by(is_home=True, status=PageStatus.PUBLISHED.value)
              .order_by(PageDB.updated_at.desc())
              .first())

def db_list_pages(db: Session) -> List[PageDB]:
    return db.query(PageDB).order_by(PageDB.updated_at.desc()).all()

def db_update_page(db: Session, page: PageDB, **fields) -> PageDB:
    for k, v in fields.items():
        setattr(page, k, v)
    db.commit(); db.refresh(page); return page

def db_set_home_page(db: Session, page: PageDB) -> PageDB:
    """Only one page is the home page at a time."""
    db.query(PageDB).filter(PageDB.id != page.id).update({PageDB.is_home: False})
    page.is_home = True
    db.commit(); db.refresh(page); return page

def db_delete_page(db: Session, page: PageDB):
    db.query(CollectionDB).filter_by(page_id=page.id).update({CollectionDB.page_id: None})
    db.delete(page); db.commit()


# ── Page versions ──
def db_next_version_number(db: Session, page_id: str) -> int:
    current = db.query(func.max(PageVersionDB.version_number)).filter_by(page_id=page_id).scalar()
    return (current or 0) + 1

def db_create_version(db: Session, page: PageDB, created_by: Optional[str] = None) -> PageVersionDB:
    obj = PageVersionDB(
        page_id=page.id,
        version_number=db_next_version_number(db, page.id),
        content=page.content,
        meta_title=page.meta_title,
        description=page.meta_description,
        meta_image=page.meta_image,
        created_by=created_by,
    )
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_list_versions(db: Session, page_id: str, limit: int = VERSION_LIST_LIMIT) -> List[PageVersionDB]:
    return (db.query(PageVersionDB)
              .filter_by(page_id=page_id)
              .order_by(PageVersionDB.version_number.desc())
              .limit(limit).all())

def db_get_version(db: Session, page_id: str, version_id: str) -> Optional[PageVersionDB]:
    return db.query(PageVersionDB).filter_by(page_id=page_id, id=version_id).first()


# ── Collections ──
def db_create_collection(db: Session, obj: CollectionDB) -> CollectionDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_collection(db: Session, collection_id: str) -> Optional[CollectionDB]:
    return db.get(CollectionDB, collection_id)

def db_get_collection_by_slug(db: Session, slug: str) -> Optional[CollectionDB]:
    return db.query(CollectionDB).filter_by(slug=slug).first()

def db_list_collections(db: Session) -> List[CollectionDB]:
    return db.query(CollectionDB).order_by(CollectionDB.sort_order, CollectionDB.title).all()

def db_update_collection(db: Session, coll: CollectionDB, **fields) -> CollectionDB:
    for k, v in fields.items():
        setattr(coll, k, v)
    db.commit(); db.refresh(coll); return coll

def db_delete_collection(db: Session, coll: CollectionDB):
    db.query(ProductCollectionDB).filter_by(collection_id=coll.id).delete()
    db.delete(coll); db.commit()

def db_add_membership(db: Session, collection_id: str, product_id: str) -> ProductCollectionDB:
    existing = db.query(ProductCollectionDB).filter_by(collection_id=collection_id, product_id=product_id).first()
    if existing:
        return existing
    obj = ProductCollectionDB(collection_id=collection_id, product_id=product_id)
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_remove_membership(db: Session, collection_id: str, product_id: str) -> bool:
    n = db.query(ProductCollectionDB).filter_by(collection_id=collection_id, product_id=product_id).delete()
    db.commit()
    return n > 0

def db_list_membership_ids(db: Session, collection_id: str) -> List[str]:
    rows = db.query(ProductCollectionDB.product_id).filter_by(collection_id=collection_id).all()
    return [r[0] for r in rows]


# ── Products ──
def db_create_product(db: Session, obj: ProductDB) -> ProductDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_product(db: Session, product_id: str) -> Optional[ProductDB]:
    return db.get(ProductDB, product_id)


# ── Courier integrations ──
def db_get_courier(db: Session, name: str) -> Optional[CourierIntegrationDB]:
    return db.query(CourierIntegrationDB).filter_by(courier_name=name).first()

def db_upsert_courier(db: Session, name: str, **fields) -> CourierIntegrationDB:
    obj = db_get_courier(db, name)
    if obj is None:
        obj = CourierIntegrationDB(courier_name=name)
        db.add(obj)
    for k, v in fields.items():
        setattr(obj, k, v)
    db.commit(); db.refresh(obj); return obj
