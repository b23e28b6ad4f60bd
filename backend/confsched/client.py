"""Thin async client for the remote schedule API.

Every response is the same envelope: ``code``, ``status``, ``message``,
``pagination``, ``data``, ``errors``. A non-2xx status or an envelope code
>= 400 is a failure. Nothing here retries.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .models import ApiEnvelope

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status_code: int = 500, errors: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors


class AuthError(ApiError):
    def __init__(self, message: str = "Authentication failed. Please login again.",
                 status_code: int = 401, errors: Any = None):
        super().__init__(message, status_code, errors)


class TransportError(ApiError):
    def __init__(self, message: str):
        super().__init__(message, 502)


def _error_message(resp: httpx.Response) -> tuple[str, Any]:
    try:
        body = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}: {resp.text}", None
    if isinstance(body, dict):
        return body.get("message") or f"HTTP {resp.status_code}", body.get("errors")
    return f"HTTP {resp.status_code}: {resp.text}", None


class ApiClient:
    def __init__(self, base_url: str, http: Optional[httpx.AsyncClient] = None,
                 timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        if http is None:
            kwargs = {"base_url": self.base_url}
            if timeout is not None:
                kwargs["timeout"] = timeout
            http = httpx.AsyncClient(**kwargs)
        self.http = http

    async def aclose(self) -> None:
        await self.http.aclose()

    async def send(self, method: str, path: str, token: Optional[str] = None,
                   params: Optional[dict] = None, json: Any = None,
                   headers: Optional[dict] = None) -> httpx.Response:
        h = {"Accept": "application/json", "Content-Type": "application/json"}
        if token:
            h["Authorization"] = f"Bearer {token}"
        if headers:
            h.update(headers)

        try:
            return await self.http.request(method, path, params=params, json=json, headers=h)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise TransportError(f"Could not reach schedule API: {e}") from e

    async def request(self, method: str, path: str, token: Optional[str] = None,
                      params: Optional[dict] = None, json: Any = None,
                      headers: Optional[dict] = None) -> ApiEnvelope:
        resp = await self.send(method, path, token=token, params=params, json=json, headers=headers)

        if not resp.is_success:
            message, errors = _error_message(resp)
            logger.warning("%s %s -> HTTP %s: %s", method, path, resp.status_code, message)
            if resp.status_code in (401, 403):
                raise AuthError(message, resp.status_code, errors)
            raise ApiError(message, resp.status_code, errors)

        try:
            body = resp.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON from {path}", 502) from e

        envelope = ApiEnvelope.model_validate(body if isinstance(body, dict) else {"data": body})
        if envelope.code and envelope.code >= 400:
            message = envelope.message or f"Request failed with code {envelope.code}"
            logger.warning("%s %s -> code %s: %s", method, path, envelope.code, message)
            if envelope.code in (401, 403):
                raise AuthError(message, envelope.code, envelope.errors)
            raise ApiError(message, envelope.code, envelope.errors)
        return envelope
