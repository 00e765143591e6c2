import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import Depends, Request

from app.config import settings

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class AuthUser:
    id: str
    email: Optional[str] = None

@dataclass(frozen=True)
class AuthContext:
    user: Optional[AuthUser] = None
    access_token: Optional[str] = None

    @property
    def signed_in(self) -> bool:
        return self.user is not None

ANONYMOUS = AuthContext()

class AuthClient:
    """Talks to the hosted auth service on behalf of a session token."""

    def __init__(self, base_url: str, api_key: str = "", timeout: float = 10.0, transport=None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _headers(self, token: str) -> dict:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {token}",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        )

    async def get_user(self, token: str) -> Optional[AuthUser]:
        try:
            async with self._client() as client:
                r = await client.get("/auth/v1/user", headers=self._headers(token))
        except httpx.HTTPError as e:
            logger.warning("Auth user lookup failed: %s", e)
            return None

        if r.status_code != 200:
            logger.warning("Auth user lookup returned %s: %s", r.status_code, r.text[:200])
            return None

        try:
            data = r.json()
        except ValueError:
            logger.warning("Auth user lookup returned invalid JSON")
            return None
        if not isinstance(data, dict) or not data.get("id"):
            return None
        return AuthUser(id=str(data["id"]), email=data.get("email"))

    async def sign_out(self, token: str) -> bool:
        try:
            async with self._client() as client:
                r = await client.post("/auth/v1/logout", headers=self._headers(token))
        except httpx.HTTPError as e:
            logger.warning("Auth sign-out failed: %s", e)
            return False
        if r.status_code >= 400:
            logger.warning("Auth sign-out returned %s", r.status_code)
            return False
        return True

def get_auth_client() -> Optional[AuthClient]:
    if not settings.AUTH_URL:
        return None
    return AuthClient(settings.AUTH_URL, settings.AUTH_API_KEY, settings.AUTH_TIMEOUT)

async def get_auth_context(
    request: Request, client: Optional[AuthClient] = Depends(get_auth_client)
) -> AuthContext:
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token or client is None:
        return ANONYMOUS
    user = await client.get_user(token)
    return AuthContext(user=user, access_token=token)
