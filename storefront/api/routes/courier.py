"""
Courier proxy — POST /api/courier/pathao {action, ...params}
Server-side calls to the Pathao merchant API; credentials never reach the browser.
"""
import logging, os
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from requests import RequestException
from sqlalchemy.orm import Session

from ...courier import CourierError, PathaoProxy
from ...database import get_db

log = logging.getLogger(__name__)
router = APIRouter(tags=["Courier"])


def _check_token(request: Request):
    token = request.headers.get("X-Admin-Token") or request.query_params.get("token")
    if token != os.getenv("ADMIN_TOKEN", "changeme"):
        raise HTTPException(403, "Invalid admin token")


@router.post("/api/courier/pathao")
def pathao_proxy(request: Request, payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    _check_token(request)
    action = payload.pop("action", None)
    try:
        status, data = PathaoProxy(db).handle(action, payload)
    except CourierError as e:
        return JSONResponse({"error": e.message}, status_code=e.status)
    except RequestException as e:
        log.warning("Pathao %s failed: %s", action, e)
        return JSONResponse({"error": str(e)}, status_code=500)
    return JSONResponse(data, status_code=status)
