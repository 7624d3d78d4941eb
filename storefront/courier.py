"""
Pathao courier proxy — OAuth client-credentials token cache + action forwarding.

Credentials and the current token live in ``courier_integrations``.
Downstream JSON and status codes are returned as-is.
"""
import logging, os
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple

import requests as http
from sqlalchemy.orm import Session

from .database import db_get_courier, db_upsert_courier

log = logging.getLogger(__name__)

PATHAO_BASE_URL = os.getenv("PATHAO_BASE_URL", "https://api-hermes.pathao.com")
COURIER_NAME    = "pathao"
TOKEN_PATH      = "/aladdin/api/v1/issue-token"
TOKEN_MARGIN_S  = 300
HTTP_TIMEOUT    = 15

_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


class CourierError(Exception):
    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


def _route(action: str, params: Dict[str, Any]) -> Tuple[str, str, Optional[Any]]:
    """action → (method, path, json body)."""
    if action == "get-cities":
        return "GET", "/aladdin/api/v1/countries/1/city-list", None
    if action == "get-zones":
        return "GET", f"/aladdin/api/v1/cities/{params.get('city_id')}/zone-list", None
    if action == "get-areas":
        return "GET", f"/aladdin/api/v1/zones/{params.get('zone_id')}/area-list", None
    if action == "get-stores":
        return "GET", "/aladdin/api/v1/stores", None
    if action == "create-store":
        return "POST", "/aladdin/api/v1/stores", params.get("store_data")
    if action == "create-parcel":
        return "POST", "/aladdin/api/v1/orders", params.get("parcel_data")
    if action == "get-parcel":
        return "GET", f"/aladdin/api/v1/orders/{params.get('consignment_id')}", None
    if action == "calculate-price":
        return "POST", "/aladdin/api/v1/merchant/price-plan", params.get("price_data")
    if action == "user-success-rate":
        return "POST", "/aladdin/api/v1/user/success", {"phone": params.get("phone")}
    raise CourierError(400, f"Unknown action: {action}")


def issue_token(client_id: Optional[str], client_secret: Optional[str]) -> http.Response:
    return http.post(
        f"{PATHAO_BASE_URL}{TOKEN_PATH}",
        json={"client_id": client_id, "client_secret": client_secret, "grant_type": "client_credentials"},
        headers=_HEADERS,
        timeout=HTTP_TIMEOUT,
    )


def _token_fields(token: Dict[str, Any]) -> Dict[str, Any]:
    expires_in = int(token.get("expires_in") or 0)
    return {
        "access_token":     token.get("access_token"),
        "refresh_token":    token.get("refresh_token"),
        "token_expires_at": datetime.utcnow() + timedelta(seconds=expires_in - TOKEN_MARGIN_S),
    }


class PathaoProxy:
    def __init__(self, db: Session):
        self.db = db

    def handle(self, action: Optional[str], params: Dict[str, Any]) -> Tuple[int, Any]:
        """Returns (status, json body). Raises CourierError for proxy-level failures."""
        if action == "test-connection":
            r = issue_token(params.get("client_id"), params.get("client_secret"))
            return 200, {"success": r.ok}

        if action == "connect":
            return self._connect(params)

        creds = db_get_courier(self.db, COURIER_NAME)
        if not creds or not creds.client_id or not creds.client_secret:
            raise CourierError(400, "Pathao not configured")

        if action == "check-connection":
            return 200, {"connected": bool(creds.is_active)}

        if action == "disconnect":
            db_upsert_courier(self.db, COURIER_NAME, is_active=False, access_token=None,
                              refresh_token=None, token_expires_at=None)
            log.info("Pathao disconnected")
            return 200, {"success": True}

        method, path, body = _route(action or "", params)
        token = self._access_token(creds)
        r = http.request(
            method,
            f"{PATHAO_BASE_URL}{path}",
            json=body,
            headers={**_HEADERS, "Authorization": f"Bearer {token}"},
            timeout=HTTP_TIMEOUT,
        )
        try:
            data = r.json()
        except ValueError:
            raise CourierError(502, "Invalid response from Pathao")
        return r.status_code, data

    def _connect(self, params: Dict[str, Any]) -> Tuple[int, Any]:
        client_id, client_secret = params.get("client_id"), params.get("client_secret")
        r = issue_token(client_id, client_secret)
        if not r.ok:
            raise CourierError(400, "Invalid credentials")
        db_upsert_courier(
            self.db, COURIER_NAME,
            client_id=client_id, client_secret=client_secret, is_active=True,
            **_token_fields(r.json()),
        )
        log.info("Pathao connected")
        return 200, {"success": True}

    def _access_token(self, creds) -> Optional[str]:
        expired = creds.token_expires_at is None or creds.token_expires_at <= datetime.utcnow()
        if not expired and creds.access_token:
            return creds.access_token
        r = issue_token(creds.client_id, creds.client_secret)
        if not r.ok:
            log.warning("Pathao token refresh failed: HTTP %s", r.status_code)
            raise CourierError(500, "Failed to get access token")
        fields = _token_fields(r.json())
        db_upsert_courier(self.db, COURIER_NAME, **fields)
        return fields["access_token"]
