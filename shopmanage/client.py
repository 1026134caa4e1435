"""
Catalog API Client

Async HTTP client for the remote product catalog. Responses are handed back
as-is; deciding what counts as success is left to the caller.
"""

import logging
from typing import Optional, Any

import httpx

from .config import get_settings

logger = logging.getLogger(__name__)


class CatalogClient:
    """Client for the catalog's /products endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize catalog client.

        Args:
            base_url: Base URL of the catalog API, defaults to settings
            timeout: Per-request timeout in seconds, defaults to settings
            transport: Optional httpx transport (ASGI app, mock handler)
        """
        settings = get_settings()
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.timeout
        self._http_client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """Send one request; transport failures propagate as httpx.HTTPError."""
        logger.debug(f"{method} {self.base_url}{path} params={params} body={body}")
        response = await self._http_client.request(method, path, json=body, params=params)
        if response.is_error:
            logger.debug(f"{method} {path} answered {response.status_code}: {response.text}")
        return response

    # ==================== Product APIs ====================

    async def list_products(self, limit: int) -> httpx.Response:
        """Read one page of products"""
        return await self._request("GET", "/products", params={"limit": limit})

    async def get_product(self, product_id: int) -> httpx.Response:
        """Get product details"""
        return await self._request("GET", f"/products/{product_id}")

    async def add_product(self, draft: dict) -> httpx.Response:
        """Create a product; the catalog assigns its id"""
        return await self._request("POST", "/products/add", body=draft)

    async def update_product(self, product_id: int, patch: dict) -> httpx.Response:
        """Update a product; the answer may echo only some fields"""
        return await self._request("PUT", f"/products/{product_id}", body=patch)

    async def delete_product(self, product_id: int) -> httpx.Response:
        """Delete a product"""
        return await self._request("DELETE", f"/products/{product_id}")
