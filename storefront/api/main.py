"""
Storefront — FastAPI app
Start: uvicorn storefront.api.main:app --reload --port 8001
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import page_builder

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="Storefront — page builder", version=page_builder.__version__, docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.on_event("startup")
def startup():
    from ..database import init_db
    init_db()
    log.info("DB initialised (SQLite)")


@app.get("/health")
def health():
    return {"status": "ok", "version": page_builder.__version__}


from .routes import admin_pages, collections, courier, storefront  # noqa: E402

app.include_router(admin_pages.router)
app.include_router(collections.router)
app.include_router(courier.router)
app.include_router(storefront.router)
