"""External account service. The core only ever receives the resulting user id."""

from typing import Optional, Protocol

import httpx

from mercado.config import settings
from mercado.errors import AuthError
from mercado.logging import get_logger

logger = get_logger(__name__)


class Authenticator(Protocol):
    async def authenticate(self, email: str, password: str) -> str: ...

    async def create_account(self, email: str, password: str) -> str: ...


class HttpAuthenticator:
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._base_url = (base_url or settings.auth_base_url).rstrip("/")
        self._api_key = settings.auth_api_key if api_key is None else api_key
        self._timeout = timeout or settings.remote_timeout_s

    async def _post(self, action: str, email: str, password: str) -> str:
        logger.info("auth.%s email=%s", action, email)
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(
                    f"{self._base_url}/{action}",
                    params={"key": self._api_key} if self._api_key else None,
                    json={"email": email, "password": password},
                )
        except httpx.HTTPError as e:
            logger.warning("auth.%s.unreachable error=%s", action, e)
            raise AuthError("could not reach the account service") from e
        if resp.status_code >= 400:
            logger.warning("auth.%s.rejected status=%s", action, resp.status_code)
            raise AuthError("invalid email or password" if action == "signIn" else "could not create account")
        try:
            body = resp.json()
        except ValueError as e:
            raise AuthError("unexpected response from the account service") from e
        user_id = body.get("localId") if isinstance(body, dict) else None
        if not user_id:
            raise AuthError("unexpected response from the account service")
        return str(user_id)

    async def authenticate(self, email: str, password: str) -> str:
        return await self._post("signIn", email, password)

    async def create_account(self, email: str, password: str) -> str:
        return await self._post("signUp", email, password)
