"""Token bridge: refresh token lives in an HTTP-only cookie, access tokens are
obtained from the remote API right before each authorized call."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from .client import ApiClient, ApiError, AuthError
from .selection import series_for_role

logger = logging.getLogger(__name__)

REFRESH_COOKIE = "refresh_token"
# everything a previous login may have left behind
AUTH_COOKIES = ("refresh_token", "refreshToken", "accessToken", "auth_session")

LOGIN_PATH = "/api/v1/auth/login"
REFRESH_PATH = "/api/v1/auth/refresh-token"


@dataclass
class TokenRefresh:
    access_token: str
    # one entry per Set-Cookie header from the API
    set_cookies: list[str] = field(default_factory=list)


@dataclass
class LoginResult:
    body: dict
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    set_cookies: list[str] = field(default_factory=list)


def bearer_token(header: Optional[str]) -> Optional[str]:
    """'Bearer abc' -> 'abc'"""
    if not header:
        return None
    parts = header.split(" ", 1)
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1].strip() or None
    return header.strip() or None


def _data(body: Any) -> dict:
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        return body["data"]
    return {}


async def refresh_access_token(client: ApiClient, refresh_token: Optional[str]) -> TokenRefresh:
    if not refresh_token:
        raise AuthError("Refresh token not found")

    resp = await client.send("POST", REFRESH_PATH, headers={"Cookie": f"{REFRESH_COOKIE}={refresh_token}"})
    try:
        body = resp.json()
    except ValueError:
        body = {}

    if not resp.is_success:
        message = body.get("message") if isinstance(body, dict) else None
        logger.warning("token refresh rejected: HTTP %s", resp.status_code)
        raise AuthError(message or "Failed to refresh token", resp.status_code)

    token = bearer_token(resp.headers.get("authorization"))
    if not token:
        data = _data(body)
        token = data.get("access_token") or data.get("accessToken")
    if not token:
        raise AuthError("Refresh succeeded but no access token was returned")

    return TokenRefresh(access_token=token, set_cookies=resp.headers.get_list("set-cookie"))


async def login(client: ApiClient, email: str, password: str) -> LoginResult:
    resp = await client.send("POST", LOGIN_PATH, json={"email": email, "password": password})
    try:
        body = resp.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {"data": body}

    if not resp.is_success:
        message = body.get("message") or "Login failed"
        if resp.status_code in (401, 403):
            raise AuthError(message, resp.status_code, body.get("errors"))
        raise ApiError(message, resp.status_code, body.get("errors"))

    data = _data(body)
    token = data.get("access_token") or body.get("access_token") or bearer_token(resp.headers.get("authorization"))
    refresh = data.get("refresh_token") or body.get("refresh_token")

    if token:
        if body.get("data") is None:
            body["data"] = {}
        if isinstance(body["data"], dict):
            body["data"]["accessToken"] = token

    user = data.get("user")
    if isinstance(user, dict) and user.get("role") and isinstance(body.get("data"), dict):
        # which series admin page this account lands on
        body["data"]["conferenceType"] = series_for_role(user["role"]).value

    return LoginResult(body=body, access_token=token, refresh_token=refresh,
                       set_cookies=resp.headers.get_list("set-cookie"))
