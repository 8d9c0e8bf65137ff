"""
Remote document store client.

The remote side is an opaque document store organised in collections. Every
call is asynchronous and individually fallible: transport errors, non-2xx
responses and unreadable bodies all surface as RemoteUnavailable so callers
can fall back to local state.
"""

from typing import Any, Optional, Protocol

import httpx

from mercado.config import settings
from mercado.errors import RemoteUnavailable
from mercado.logging import get_logger
from mercado.services.remote.codec import (
    MENU_PLANS_COLLECTION,
    RECIPES_COLLECTION,
    USERS_COLLECTION,
)
from mercado.utils.timing import time_span

logger = get_logger(__name__)

# (document id, document body)
DocEntry = tuple[str, dict]


class RemoteStore(Protocol):
    async def fetch_user_doc(self, user_id: str) -> Optional[dict]: ...

    async def put_user_doc(self, user_id: str, doc: dict) -> None: ...

    async def fetch_all_recipe_docs(self) -> list[DocEntry]: ...

    async def batch_put_recipe_docs(self, docs: list[DocEntry]) -> None: ...

    async def put_recipe_doc(self, doc_id: str, doc: dict) -> None: ...

    async def put_plan_doc(self, composite_key: str, doc: dict) -> None: ...

    async def delete_plan_docs_matching(self, plan_id: int) -> int: ...


class HttpRemoteStore:
    """
    REST binding:
      GET    {base}/{collection}/{id}          -> document | 404
      PUT    {base}/{collection}/{id}          <- document
      GET    {base}/{collection}[?field=value] -> {"documents": [{"id", "data"}]}
      POST   {base}/{collection}:batchWrite    <- {"writes": [{"id", "data"}]}
      DELETE {base}/{collection}/{id}
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = (base_url or settings.remote_base_url).rstrip("/")
        self._api_key = settings.remote_api_key if api_key is None else api_key
        self._timeout = timeout or settings.remote_timeout_s
        self._transport = transport

    def _headers(self) -> dict:
        return {"X-API-Key": self._api_key} if self._api_key else {}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers(),
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _request(
        self, operation: str, method: str, path: str, *, allow_404: bool = False, **kwargs: Any
    ) -> Optional[httpx.Response]:
        with time_span(f"remote.{operation}", method=method, path=path):
            try:
                async with self._client() as client:
                    resp = await client.request(method, path, **kwargs)
                if allow_404 and resp.status_code == 404:
                    return None
                resp.raise_for_status()
                return resp
            except httpx.HTTPError as e:
                logger.warning("remote.%s.failed method=%s path=%s error=%s", operation, method, path, e)
                raise RemoteUnavailable(operation, e) from e

    @staticmethod
    def _json(operation: str, resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise RemoteUnavailable(operation, e) from e

    def _documents(self, operation: str, resp: httpx.Response) -> list[DocEntry]:
        body = self._json(operation, resp)
        items = body.get("documents", []) if isinstance(body, dict) else None
        if not isinstance(items, list):
            raise RemoteUnavailable(operation, ValueError("response has no document list"))
        out: list[DocEntry] = []
        for item in items:
            # Entries without an id or body are passed through for the caller to reject
            if isinstance(item, dict):
                out.append((str(item.get("id", "")), item.get("data")))
        return out

    async def fetch_user_doc(self, user_id: str) -> Optional[dict]:
        resp = await self._request("fetch_user_doc", "GET", f"/{USERS_COLLECTION}/{user_id}", allow_404=True)
        if resp is None:
            return None
        return self._json("fetch_user_doc", resp)

    async def put_user_doc(self, user_id: str, doc: dict) -> None:
        await self._request("put_user_doc", "PUT", f"/{USERS_COLLECTION}/{user_id}", json=doc)

    async def fetch_all_recipe_docs(self) -> list[DocEntry]:
        resp = await self._request("fetch_all_recipe_docs", "GET", f"/{RECIPES_COLLECTION}")
        return self._documents("fetch_all_recipe_docs", resp)

    async def batch_put_recipe_docs(self, docs: list[DocEntry]) -> None:
        writes = [{"id": doc_id, "data": doc} for doc_id, doc in docs]
        await self._request(
            "batch_put_recipe_docs", "POST", f"/{RECIPES_COLLECTION}:batchWrite", json={"writes": writes}
        )

    async def put_recipe_doc(self, doc_id: str, doc: dict) -> None:
        await self._request("put_recipe_doc", "PUT", f"/{RECIPES_COLLECTION}/{doc_id}", json=doc)

    async def put_plan_doc(self, composite_key: str, doc: dict) -> None:
        await self._request("put_plan_doc", "PUT", f"/{MENU_PLANS_COLLECTION}/{composite_key}", json=doc)

    async def delete_plan_docs_matching(self, plan_id: int) -> int:
        """Query by plan id (not by composite key) and delete each match. Zero matches is fine."""
        resp = await self._request(
            "query_plan_docs", "GET", f"/{MENU_PLANS_COLLECTION}", params={"id": plan_id}
        )
        matches = self._documents("query_plan_docs", resp)
        deleted = 0
        for doc_id, _doc in matches:
            if not doc_id:
                continue
            await self._request(
                "delete_plan_doc", "DELETE", f"/{MENU_PLANS_COLLECTION}/{doc_id}", allow_404=True
            )
            deleted += 1
        logger.info("remote.menu_plans.deleted plan_id=%s count=%s", plan_id, deleted)
        return deleted
