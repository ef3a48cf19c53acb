"""Client for the remote account API (register / login)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from .config import API_BASE_URL, API_TIMEOUT
from .session import SessionStore

logger = logging.getLogger(__name__)

TOKEN_FIELDS = ('access_token', 'accessToken', 'token')


@dataclass
class ApiResult:
    ok: bool
    status_code: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


def _json_body(response: requests.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class AccountClient:
    """Thin wrapper around the account endpoints.

    Network and HTTP failures never raise; they come back as
    ``ApiResult(ok=False, error=...)``.
    """

    def __init__(self, base_url: str = API_BASE_URL, timeout: float = API_TIMEOUT, http: Any = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.http = http or requests.Session()

    def _post(self, path: str, payload: Dict[str, Any]) -> ApiResult:
        url = f"{self.base_url}{path}"
        try:
            response = self.http.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("POST %s failed: %s", url, exc)
            return ApiResult(ok=False, error=str(exc))

        body = _json_body(response)
        if 200 <= response.status_code < 300:
            return ApiResult(ok=True, status_code=response.status_code, data=body)

        message = body.get('message') or body.get('error') or response.reason or 'request failed'
        logger.warning("POST %s returned %s: %s", url, response.status_code, message)
        return ApiResult(ok=False, status_code=response.status_code, data=body, error=str(message))

    def register(self, name: str, email: str, password: str) -> ApiResult:
        return self._post('/user/register', {'name': name, 'email': email, 'password': password})

    def login(self, email: str, password: str) -> ApiResult:
        result = self._post('/user/login', {'email': email, 'password': password})
        if not result.ok:
            return result
        token = next((result.data[key] for key in TOKEN_FIELDS if result.data.get(key)), None)
        if not token:
            return ApiResult(
                ok=False,
                status_code=result.status_code,
                data=result.data,
                error='login response did not include an access token',
            )
        return ApiResult(ok=True, status_code=result.status_code, data={'access_token': str(token)})


def sign_in(client: AccountClient, sessions: SessionStore, email: str, password: str) -> ApiResult:
    """Log in and persist the returned token on success."""
    result = client.login(email, password)
    if result.ok:
        sessions.save_session(result.data['access_token'])
    return result
